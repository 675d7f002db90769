"""Pytest configuration and shared fixtures."""

import datetime

import pytest
from asgiref.sync import async_to_sync

from events.domain import Event, Registration
from events.domain.errors import StorageError
from events.services import EventService, RegistrationService
from events.stores.interfaces import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Dict-backed store that can be told to fail per key ("*" for all)."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.fail_reads: set[str] = set()
        self.fail_writes: set[str] = set()
        self.writes: list[tuple[str, str]] = []

    def _should_fail(self, keys: set[str], key: str) -> bool:
        return "*" in keys or key in keys

    async def get(self, key: str) -> str | None:
        if self._should_fail(self.fail_reads, key):
            raise StorageError(f"Unable to read {key}", key=key)
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        if self._should_fail(self.fail_writes, key):
            raise StorageError(f"Unable to write {key}", key=key)
        self.writes.append((key, value))
        self.data[key] = value

    async def remove(self, key: str) -> None:
        if self._should_fail(self.fail_writes, key):
            raise StorageError(f"Unable to remove {key}", key=key)
        self.data.pop(key, None)


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def event_service(store: InMemoryStore) -> EventService:
    return EventService(store)


@pytest.fixture
def registration_service(store: InMemoryStore, event_service: EventService) -> RegistrationService:
    return RegistrationService(store, event_service)


@pytest.fixture
def future_date() -> datetime.date:
    return datetime.date.today() + datetime.timedelta(days=7)


@pytest.fixture
def make_event(future_date):
    def _make(**overrides) -> Event:
        fields = {
            "name": "Developer Summit",
            "date": future_date,
            "location": "Chicago",
            "notes": "Tech insights from top minds.",
        }
        fields.update(overrides)
        return Event(**fields)

    return _make


@pytest.fixture
def make_registration():
    def _make(event_id, **overrides) -> Registration:
        fields = {
            "event_id": event_id,
            "attendee_name": "Alice Smith",
            "telephone": "312-985-7612",
            "email_address": "alice.smith@example.com",
            "notes": "",
        }
        fields.update(overrides)
        return Registration(**fields)

    return _make


@pytest.fixture
def stored_event(event_service: EventService, make_event) -> Event:
    return async_to_sync(event_service.add)(make_event())
