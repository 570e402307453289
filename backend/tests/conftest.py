"""Root conftest — shared test configuration and store/service fixtures."""

import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest

# Ensure importing tasktrack.main never writes into the working directory
os.environ.setdefault(
    "DATA_DIRECTORY", tempfile.mkdtemp(prefix="tasktrack-test-"),
)
os.environ.setdefault("LOG_FORMAT", "text")

from tasktrack.infrastructure.task_store import JsonTaskStore  # noqa: E402
from tasktrack.services.task_lifecycle import TaskLifecycleService  # noqa: E402


class FakeClock:
    """Deterministic clock: each call advances by step."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.current = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def tasks_path(tmp_path):
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def store(tasks_path):
    return JsonTaskStore(tasks_path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(store, clock):
    return TaskLifecycleService(store, clock=clock)
