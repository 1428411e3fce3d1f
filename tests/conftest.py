from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.config import Settings
from api.services.task_store import TaskStore


class FakeClock:
    """Clock that only moves when told to"""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int = 1) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)


@pytest.fixture()
def settings() -> Settings:
    return Settings(api_env="development", seed_tasks=[], allowed_origins_env="")


@pytest.fixture()
def client(settings: Settings, store: TaskStore) -> TestClient:
    """Client for a fresh app, so every test starts from an empty store"""
    return TestClient(create_app(settings, store))
