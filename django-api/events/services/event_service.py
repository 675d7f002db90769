"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
import threading
from dataclasses import replace

from events import signals
from events.conf import app_settings
from events.domain import Event, EventId, PagedResult, PageRequest, Registration
from events.domain.errors import EventNotFoundError, InvalidIdError, StorageError
from events.serializers import (
    EventRecordSerializer,
    EventSerializer,
    RegistrationRecordSerializer,
    decode,
    encode,
    validate_entity,
)
from events.stores.interfaces import EVENTS_KEY, REGISTRATIONS_KEY, KeyValueStore

logger = logging.getLogger(__name__)


def parse_event_id(event_id: EventId | str | None) -> EventId:
    """Coerce caller input into an EventId.

    Raises:
        InvalidIdError: If event_id is empty or not a valid UUID.
    """
    if isinstance(event_id, EventId):
        return event_id
    if not event_id:
        raise InvalidIdError("event")
    try:
        return EventId.from_string(event_id)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdError("event") from None


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def get_all(self) -> list[Event]:
        """Return all events in storage order; unreadable storage yields []."""
        try:
            return await self._load_events()
        except StorageError:
            logger.exception("Error retrieving all events from storage")
            return []

    async def get_by_id(self, event_id: EventId | str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        parsed = parse_event_id(event_id)
        event = self._find(await self.get_all(), parsed)
        if event is None:
            raise EventNotFoundError(str(parsed))
        return event

    async def try_get_by_id(self, event_id: EventId | str | None) -> Event | None:
        try:
            parsed = parse_event_id(event_id)
        except InvalidIdError:
            return None
        return self._find(await self.get_all(), parsed)

    async def exists(self, event_id: EventId | str | None) -> bool:
        return await self.try_get_by_id(event_id) is not None

    async def add(self, event: Event) -> Event:
        """Validate and store a new event under a freshly generated ID.

        Raises:
            ValidationError: If the event breaks a data-model rule.
            StorageError: If the collection cannot be read or written.
        """
        validate_entity(EventSerializer, replace(event, id=None))
        events = await self._load_events()
        created = replace(event, id=EventId.new())
        events.append(created)
        await self._save_events(events)

        logger.info("Added event %s: %s", created.id, created.name)
        signals.event_changed.send(sender=self.__class__, event_id=created.id, action="added")
        return created

    async def update(self, event: Event) -> Event:
        """Replace the stored fields of an existing event.

        Raises:
            InvalidIdError: If the event has no ID.
            ValidationError: If the event breaks a data-model rule.
            EventNotFoundError: If the event does not exist.
        """
        if event.id is None:
            raise InvalidIdError("event")
        validate_entity(EventSerializer, event)

        events = await self._load_events()
        for index, existing in enumerate(events):
            if existing.id == event.id:
                break
        else:
            logger.warning("Attempted to update non-existent event %s", event.id)
            raise EventNotFoundError(str(event.id))

        updated = event.copy()
        events[index] = updated
        await self._save_events(events)

        logger.info("Updated event %s: %s", updated.id, updated.name)
        signals.event_changed.send(sender=self.__class__, event_id=updated.id, action="updated")
        return updated

    async def delete(self, event_id: EventId | str) -> None:
        """Delete an event and every registration that references it.

        Registrations are removed first; if that fails the event stays.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            StorageError: If either collection cannot be read or written.
        """
        parsed = parse_event_id(event_id)
        events = await self._load_events()
        remaining = [event for event in events if event.id != parsed]
        if len(remaining) == len(events):
            raise EventNotFoundError(str(parsed))

        try:
            await self._delete_registrations_for(parsed)
        except StorageError:
            logger.error("Aborting delete of event %s: registration cleanup failed", parsed)
            raise

        await self._save_events(remaining)
        logger.info("Deleted event %s and its registrations", parsed)
        signals.event_changed.send(sender=self.__class__, event_id=parsed, action="deleted")

    async def get_paged(
        self,
        page_number: int,
        page_size: int,
        cancel: threading.Event | None = None,
    ) -> PagedResult[Event]:
        """Return one page of events ordered by name, ignoring case."""
        request = PageRequest.normalized(
            page_number,
            page_size,
            app_settings.DEFAULT_PAGE_SIZE,
            app_settings.MAX_PAGE_SIZE,
        )
        return PagedResult.create(
            await self.get_all(),
            request.page_number,
            request.page_size,
            order_by=lambda event: (event.name.casefold(), event.name),
            cancel=cancel,
        )

    @staticmethod
    def _find(events: list[Event], event_id: EventId) -> Event | None:
        return next((event for event in events if event.id == event_id), None)

    async def _load_events(self) -> list[Event]:
        raw = await self._store.get(EVENTS_KEY)
        if raw is None:
            return []
        return decode(EventRecordSerializer, raw, many=True)

    async def _save_events(self, events: list[Event]) -> None:
        await self._store.set(EVENTS_KEY, encode(EventRecordSerializer, events, many=True))

    async def _delete_registrations_for(self, event_id: EventId) -> None:
        raw = await self._store.get(REGISTRATIONS_KEY)
        registrations: list[Registration] = (
            [] if raw is None else decode(RegistrationRecordSerializer, raw, many=True)
        )
        remaining = [r for r in registrations if r.event_id != event_id]
        removed = len(registrations) - len(remaining)
        if removed:
            await self._store.set(
                REGISTRATIONS_KEY,
                encode(RegistrationRecordSerializer, remaining, many=True),
            )
            logger.info("Deleted %d registrations for event %s", removed, event_id)
