# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskhub.core.config import Settings
from taskhub.core.security import TokenService
from taskhub.main import create_app

TEST_SECRET = "test-secret"


class FailingTaskStore:
    """
    TaskStore whose every operation fails like a lost database connection.
    """

    def __init__(self, message: str = "connection refused") -> None:
        self.message = message

    async def insert(self, fields):
        raise ConnectionError(self.message)

    async def find(self):
        raise ConnectionError(self.message)

    async def find_by_id(self, task_id):
        raise ConnectionError(self.message)

    async def find_and_update(self, task_id, fields):
        raise ConnectionError(self.message)

    async def find_and_delete(self, task_id):
        raise ConnectionError(self.message)


def make_settings(tmp_path: Path, **overrides) -> Settings:
    values = {
        "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'tasks.sqlite3'}",
        "ACCESS_TOKEN_SECRET": TEST_SECRET,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture()
def tokens(settings: Settings) -> TokenService:
    return TokenService.from_settings(settings)


@pytest.fixture()
def client(settings: Settings):
    # Entering the client runs the lifespan, which creates the schema.
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def gated_client(tmp_path: Path):
    with TestClient(create_app(make_settings(tmp_path, ENFORCE_TOKEN_GATE=True))) as c:
        yield c


@pytest.fixture()
def failing_client(settings: Settings):
    with TestClient(create_app(settings, store=FailingTaskStore())) as c:
        yield c
