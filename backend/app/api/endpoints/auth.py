"""
Authentication API endpoints.

Placeholder login: checks credentials against the injected CredentialStore
and hands back a signed token. No other endpoint requires the token.
"""

import logging
from fastapi import APIRouter, Depends
from backend.app.core.dependencies import get_credential_store
from backend.app.core.exceptions import AuthenticationError
from backend.app.core.jwt import issue_login_token
from backend.app.core.security import CredentialStore
from backend.app.schemas.auth import UserLogin, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: UserLogin,
    credential_store: CredentialStore = Depends(get_credential_store)
):
    """
    Log in with email and password.

    Returns 401 with "invalid credentials" on any mismatch.
    """
    if not await credential_store.verify(credentials.email, credentials.password):
        logger.warning("Failed login for %r", credentials.email)
        raise AuthenticationError()

    return TokenResponse(email=credentials.email, token=issue_login_token(credentials.email))
