"""
Startup Tests.

The application lifespan creates the packages and status_history tables
when absent and leaves existing tables and rows alone on later starts.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

import backend.app.main as main_module
from backend.app.main import app
from backend.app.services.tracking import TrackingService


@pytest.fixture
async def startup_engine(tmp_path, mocker):
    """Point the application's engine at an empty SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'startup.db'}")
    mocker.patch.object(main_module, "engine", engine)
    yield engine
    await engine.dispose()


async def table_names(engine):
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


@pytest.mark.asyncio
async def test_startup_creates_tables(startup_engine):
    assert await table_names(startup_engine) == []

    async with app.router.lifespan_context(app):
        tables = await table_names(startup_engine)

    assert {"packages", "status_history"} <= set(tables)


@pytest.mark.asyncio
async def test_restart_keeps_existing_rows(startup_engine):
    session_factory = async_sessionmaker(startup_engine, class_=AsyncSession, expire_on_commit=False)

    async with app.router.lifespan_context(app):
        async with session_factory() as db:
            package = await TrackingService.register(db, "books")
            package_id = package.id
            await TrackingService.update_status(db, package_id, "in_transit")

    # Second start runs create_all again against the populated file
    async with app.router.lifespan_context(app):
        async with session_factory() as db:
            current = await TrackingService.get_package(db, package_id)
            history = await TrackingService.get_history(db, package_id)

    assert current.status == "in_transit"
    assert [e.status for e in history] == ["registered", "in_transit"]
    assert {"packages", "status_history"} <= set(await table_names(startup_engine))
