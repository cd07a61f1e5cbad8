from __future__ import annotations

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from adapters.persistence import CatalogPersistence
from adapters.storage_backends import MemoryStorage
from core.domain.models import NotificationLevel
from core.services.catalog_store import CatalogStore


class FakeClock:
    """Advances one second per call, starting at a fixed UTC instant."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 10, 0, 0, 123000, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.now
        self.now = self.now + timedelta(seconds=1)
        return value


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, NotificationLevel]] = []

    def __call__(self, message: str, level: NotificationLevel) -> None:
        self.messages.append((message, level))

    def levels(self) -> list[NotificationLevel]:
        return [level for _, level in self.messages]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def persistence(storage: MemoryStorage, notifier: RecordingNotifier) -> CatalogPersistence:
    return CatalogPersistence(storage, notify=notifier)


@pytest.fixture
def store(persistence: CatalogPersistence, clock: FakeClock) -> CatalogStore:
    ids = count(1)
    return CatalogStore(persistence, clock=clock, id_factory=lambda: f"id-{next(ids)}")
