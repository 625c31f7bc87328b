"""
Package Tracking Service (Domain Logic).

Registers packages, records status changes and serves current state and
status history. Every write touches both tables in one transaction:

    packages        current state, one row per package
    status_history  append-only, one row per status the package has held

so `Package.timestamp` always equals the newest history entry's timestamp.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.exceptions import ResourceNotFoundError
from backend.app.db.session import atomic, storage_errors
from backend.app.models.package import Package, REGISTERED_STATUS
from backend.app.models.status_history import StatusHistory
from backend.app.services.package_locking import package_locks

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_timestamp() -> str:
    """Current UTC time as sortable RFC3339 text with microseconds."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


def next_timestamp(previous: Optional[str] = None) -> str:
    """
    Timestamp for a new status, never earlier than `previous`.

    A wall clock that stepped backwards reuses the previous value so history
    timestamps stay non-decreasing.
    """
    now = utc_timestamp()
    if previous and previous > now:
        return previous
    return now


def new_id() -> str:
    return str(uuid.uuid4())


class TrackingService:

    @staticmethod
    async def register(db: AsyncSession, description: str = "") -> Package:
        """
        Register a new package.

        Flow:
        1. Generate ID, status "registered", timestamp now
        2. Insert the package row
        3. Append the first history entry
        4. Commit both, or neither

        Args:
            db: Database session
            description: Free-form description (may be empty)

        Returns:
            The persisted Package

        Raises:
            StorageError: If either write fails; nothing is persisted
        """
        package = Package(
            id=new_id(),
            status=REGISTERED_STATUS,
            description=description,
            timestamp=utc_timestamp(),
        )

        async with atomic(db):
            db.add(package)
            await db.flush()
            await TrackingService._append_history(db, package, sequence=1)

        logger.info("Registered package %s", package.id)
        return package

    @staticmethod
    async def update_status(db: AsyncSession, package_id: str, status: str) -> Package:
        """
        Record a new status for an existing package.

        The package row and its new history entry are written in one
        transaction while the package's lock is held.

        Args:
            db: Database session
            package_id: Package to update
            status: New status label; any string is accepted

        Returns:
            The updated Package

        Raises:
            ResourceNotFoundError: Unknown package_id; nothing is written
            StorageError: If either write fails; nothing is persisted
        """
        async with package_locks.hold(package_id):
            async with atomic(db):
                result = await db.execute(
                    select(Package)
                    .where(Package.id == package_id)
                    .with_for_update()
                    .execution_options(populate_existing=True)
                )
                package = result.scalar_one_or_none()

                if package is None:
                    logger.warning("Rejected status update for unknown package %s", package_id)
                    raise ResourceNotFoundError("Package", package_id)

                package.status = status
                package.timestamp = next_timestamp(package.timestamp)
                await db.flush()

                sequence = await TrackingService._next_sequence(db, package_id)
                await TrackingService._append_history(db, package, sequence=sequence)

        logger.info("Package %s status -> %r", package_id, status)
        return package

    @staticmethod
    async def list_packages(db: AsyncSession, status: Optional[str] = None) -> List[Package]:
        """
        List packages in storage order.

        Args:
            db: Database session
            status: Only return packages currently in this status

        Returns:
            List of packages (empty when none exist)
        """
        query = select(Package)
        if status is not None:
            query = query.where(Package.status == status)

        async with storage_errors():
            result = await db.execute(query)
            return list(result.scalars().all())

    @staticmethod
    async def get_package(db: AsyncSession, package_id: str) -> Package:
        async with storage_errors():
            result = await db.execute(select(Package).where(Package.id == package_id))
            package = result.scalar_one_or_none()
        if package is None:
            raise ResourceNotFoundError("Package", package_id)
        return package

    @staticmethod
    async def get_history(db: AsyncSession, package_id: str) -> List[StatusHistory]:
        """
        Full status history of a package, oldest first.

        An unknown package_id yields an empty list, same as a package with
        no history.
        """
        async with storage_errors():
            result = await db.execute(
                select(StatusHistory)
                .where(StatusHistory.package_id == package_id)
                .order_by(StatusHistory.sequence)
            )
            return list(result.scalars().all())

    @staticmethod
    async def _next_sequence(db: AsyncSession, package_id: str) -> int:
        result = await db.execute(
            select(func.max(StatusHistory.sequence)).where(StatusHistory.package_id == package_id)
        )
        return (result.scalar() or 0) + 1

    @staticmethod
    async def _append_history(db: AsyncSession, package: Package, sequence: int) -> StatusHistory:
        entry = StatusHistory(
            id=new_id(),
            package_id=package.id,
            sequence=sequence,
            status=package.status,
            timestamp=package.timestamp,
        )
        db.add(entry)
        await db.flush()
        return entry
