"""
API Router.

Aggregates all API endpoints. Paths are served from the application root.
"""

from fastapi import APIRouter
from backend.app.api.endpoints import auth, packages

router = APIRouter()

# Placeholder login
router.include_router(auth.router)

# Package registration, status updates and history
router.include_router(packages.router)
