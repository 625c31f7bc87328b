"""
Package Tracking API Endpoints.

Binds register, status update, listing and history lookups to HTTP.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.db.session import get_db
from backend.app.schemas.package import (
    PackageRegister,
    StatusUpdate,
    PackageResponse,
    StatusHistoryResponse,
)
from backend.app.services.tracking import TrackingService

router = APIRouter(tags=["Packages"])


@router.post("/register", response_model=PackageResponse, status_code=status.HTTP_200_OK)
async def register_package(
    package_data: PackageRegister,
    db: AsyncSession = Depends(get_db)
):
    """
    Register a new package.

    The service assigns the ID, status "registered" and the timestamp,
    and records the first history entry in the same transaction.
    """
    package = await TrackingService.register(db, package_data.description)
    return PackageResponse.model_validate(package)


@router.post("/update", status_code=status.HTTP_200_OK, response_class=Response)
async def update_package_status(
    update: StatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    Record a new status for a package.

    Returns an empty 200 on success and 404 if the package does not exist.
    """
    await TrackingService.update_status(db, update.id, update.status)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/packages", response_model=List[PackageResponse])
async def list_packages(
    status_filter: Optional[str] = Query(None, alias="status", description="Only packages in this status"),
    db: AsyncSession = Depends(get_db)
):
    """List all packages."""
    packages = await TrackingService.list_packages(db, status=status_filter)
    return [PackageResponse.model_validate(p) for p in packages]


@router.get("/packages/{package_id}", response_model=PackageResponse)
async def get_package(
    package_id: str = Path(..., description="Package ID"),
    db: AsyncSession = Depends(get_db)
):
    package = await TrackingService.get_package(db, package_id)
    return PackageResponse.model_validate(package)


@router.get("/packages/{package_id}/history", response_model=List[StatusHistoryResponse])
async def get_package_history(
    package_id: str = Path(..., description="Package ID"),
    db: AsyncSession = Depends(get_db)
):
    """
    Status history of a package, oldest first.

    Unknown IDs return an empty list.
    """
    history = await TrackingService.get_history(db, package_id)
    return [StatusHistoryResponse.model_validate(entry) for entry in history]
