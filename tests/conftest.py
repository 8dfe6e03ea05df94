"""Shared fixtures for tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from booktimer.library.storage import LibraryStore

FIXED_NOW = datetime(2024, 3, 9, 21, 15, 0, tzinfo=timezone(timedelta(hours=1)))


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fixed_now():
    return lambda: FIXED_NOW


@pytest.fixture
def library_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "library.json"


@pytest.fixture
def store(library_path: Path) -> LibraryStore:
    return LibraryStore(library_path)

