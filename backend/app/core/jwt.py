"""
Login token issuing.

Tokens are signed with settings.secret_key but nothing in the service
checks them; they only give the placeholder login something to return.
"""

import uuid
from datetime import datetime, timedelta, timezone
from jose import jwt
from backend.app.core.config import settings


def issue_login_token(email: str, ttl: timedelta = None) -> str:
    """
    Sign a token for a successful login.

    Claims: `sub` (the email), `jti` (fresh per login so repeated logins
    never share a token) and `exp`.

    Args:
        email: Address that logged in
        ttl: Token lifetime; defaults to settings.access_token_expire_minutes
    """
    ttl = ttl or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": email,
        "jti": str(uuid.uuid4()),
        "exp": datetime.now(timezone.utc) + ttl,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)
