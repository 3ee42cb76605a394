"""Shared fixtures: a TrackerService backed by a throwaway SQLite file."""

import pytest

from sport_tracker.config import DatabaseConfig
from sport_tracker.core import TrackerService
from sport_tracker.database.connection import DatabaseManager


@pytest.fixture
async def db(tmp_path):
    manager = DatabaseManager(DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"))
    await manager.initialize()
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
async def service(db):
    return TrackerService(db)
