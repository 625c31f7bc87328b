"""
Shared FastAPI dependencies.

Override these in app.dependency_overrides to swap collaborators in tests.
"""

from functools import lru_cache
from backend.app.core.config import settings
from backend.app.core.security import CredentialStore, InMemoryCredentialStore


@lru_cache
def get_credential_store() -> CredentialStore:
    """
    FastAPI dependency returning the credential lookup collaborator.

    Defaults to the demo credentials configured in settings.
    """
    return InMemoryCredentialStore(settings.demo_credentials)
