"""
Integration tests for the placeholder login endpoint.
"""

from datetime import timedelta
import pytest
from jose import JWTError, jwt

from backend.app.main import app
from backend.app.core.config import settings
from backend.app.core.dependencies import get_credential_store
from backend.app.core.jwt import issue_login_token
from backend.app.core.security import InMemoryCredentialStore


@pytest.fixture
def credential_store():
    store = InMemoryCredentialStore({"ops@example.com": "s3cret", "": ""})
    app.dependency_overrides[get_credential_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_credential_store, None)


@pytest.mark.asyncio
async def test_login_with_default_demo_user(client):
    response = await client.post("/login", json={"email": "user@example.com", "password": "password123"})

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "user@example.com"
    assert data["token_type"] == "bearer"
    assert "password" not in data


@pytest.mark.asyncio
async def test_login_token_is_signed(client, credential_store):
    response = await client.post("/login", json={"email": "ops@example.com", "password": "s3cret"})

    payload = jwt.decode(response.json()["token"], settings.secret_key, algorithms=[settings.algorithm])
    assert payload["sub"] == "ops@example.com"
    assert "exp" in payload


@pytest.mark.asyncio
async def test_each_login_gets_a_fresh_token(client, credential_store):
    body = {"email": "ops@example.com", "password": "s3cret"}

    first = (await client.post("/login", json=body)).json()["token"]
    second = (await client.post("/login", json=body)).json()["token"]

    assert first != second


@pytest.mark.asyncio
async def test_login_wrong_password(client, credential_store):
    response = await client.post("/login", json={"email": "ops@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["error"] == "invalid credentials"


@pytest.mark.asyncio
async def test_login_unknown_user(client, credential_store):
    response = await client.post("/login", json={"email": "who@example.com", "password": "s3cret"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_empty_credentials_rejected(client, credential_store):
    response = await client.post("/login", json={"email": "", "password": ""})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_malformed_body(client):
    response = await client.post("/login", json={"email": "user@example.com"})

    assert response.status_code == 400
    assert response.json()["error_code"] == "ERR_VALIDATION"


def test_token_signed_with_other_key_is_rejected():
    token = issue_login_token("ops@example.com")

    with pytest.raises(JWTError):
        jwt.decode(token, "some-other-key", algorithms=[settings.algorithm])


def test_expired_token_is_rejected():
    token = issue_login_token("ops@example.com", ttl=timedelta(seconds=-1))

    with pytest.raises(JWTError):
        jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
