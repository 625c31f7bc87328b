"""
Credential lookup for the placeholder login endpoint.

Login is illustrative only and guards nothing. Credentials come from an
injected CredentialStore so the backing source can be swapped without
touching the endpoint.
"""

import hmac
from abc import ABC, abstractmethod
from typing import Dict, Optional


class CredentialStore(ABC):
    """Looks up the stored password for an email address."""

    @abstractmethod
    async def get_password(self, email: str) -> Optional[str]:
        ...

    async def verify(self, email: str, password: str) -> bool:
        stored = await self.get_password(email)
        if stored is None:
            return False
        return hmac.compare_digest(stored.encode(), password.encode())


class InMemoryCredentialStore(CredentialStore):
    """CredentialStore over a fixed email -> password mapping."""

    def __init__(self, credentials: Dict[str, str]):
        # Empty emails are never valid logins
        self._credentials = {email: pw for email, pw in credentials.items() if email}

    async def get_password(self, email: str) -> Optional[str]:
        return self._credentials.get(email)
