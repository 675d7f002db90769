"""Registration service - attendee records for events."""

import logging
import threading
from dataclasses import replace

from events import signals
from events.conf import app_settings
from events.domain import EventId, PagedResult, PageRequest, Registration, RegistrationId
from events.domain.errors import (
    EventNotFoundError,
    InvalidArgumentError,
    InvalidIdError,
    RegistrationNotFoundError,
    StorageError,
)
from events.serializers import RegistrationRecordSerializer, RegistrationSerializer, decode, encode, validate_entity
from events.services.event_service import EventService, parse_event_id
from events.stores.interfaces import REGISTRATIONS_KEY, KeyValueStore

logger = logging.getLogger(__name__)


def parse_registration_id(registration_id: RegistrationId | str | None) -> RegistrationId:
    """Coerce caller input into a RegistrationId.

    Raises:
        InvalidIdError: If registration_id is empty or not a valid UUID.
    """
    if isinstance(registration_id, RegistrationId):
        return registration_id
    if not registration_id:
        raise InvalidIdError("registration")
    try:
        return RegistrationId.from_string(registration_id)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdError("registration") from None


class RegistrationService:
    """Service for registration operations."""

    def __init__(self, store: KeyValueStore, event_service: EventService) -> None:
        self._store = store
        self._events = event_service

    async def get_all(self) -> list[Registration]:
        """Return all registrations; unreadable storage yields []."""
        try:
            return await self._load_registrations()
        except StorageError:
            logger.exception("Error retrieving all registrations from storage")
            return []

    async def get_all_for_event(self, event_id: EventId | str) -> list[Registration]:
        """Return the registrations referencing an event.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
        """
        parsed = parse_event_id(event_id)
        registrations = [r for r in await self.get_all() if r.event_id == parsed]
        logger.debug("Retrieved %d registrations for event %s", len(registrations), parsed)
        return registrations

    async def get_by_id(self, registration_id: RegistrationId | str) -> Registration:
        """Return a registration by ID.

        Raises:
            InvalidIdError: If the registration_id is not a valid UUID.
            RegistrationNotFoundError: If the registration does not exist.
        """
        parsed = parse_registration_id(registration_id)
        registration = self._find(await self.get_all(), parsed)
        if registration is None:
            raise RegistrationNotFoundError(str(parsed))
        return registration

    async def try_get_by_id(self, registration_id: RegistrationId | str | None) -> Registration | None:
        try:
            parsed = parse_registration_id(registration_id)
        except InvalidIdError:
            return None
        return self._find(await self.get_all(), parsed)

    async def exists(self, registration_id: RegistrationId | str | None) -> bool:
        return await self.try_get_by_id(registration_id) is not None

    async def add(self, registration: Registration) -> Registration:
        """Validate and store a new registration under a fresh ID.

        Raises:
            ValidationError: If the registration breaks a data-model rule.
            EventNotFoundError: If the referenced event does not exist.
            StorageError: If the collection cannot be read or written.
        """
        validate_entity(RegistrationSerializer, registration)
        await self._ensure_event_exists(registration.event_id)

        registrations = await self._load_registrations()
        created = replace(registration, id=RegistrationId.new())
        registrations.append(created)
        await self._save_registrations(registrations)

        logger.info(
            "Added registration %s for %s to event %s",
            created.id,
            created.attendee_name,
            created.event_id,
        )
        signals.registration_changed.send(
            sender=self.__class__,
            registration_id=created.id,
            event_id=created.event_id,
            action="added",
        )
        return created

    async def update(self, registration: Registration) -> Registration:
        """Replace an existing registration.

        Raises:
            InvalidIdError: If the registration has no ID.
            ValidationError: If the registration breaks a data-model rule.
            EventNotFoundError: If the referenced event does not exist.
            RegistrationNotFoundError: If the registration does not exist.
        """
        if registration.id is None:
            raise InvalidIdError("registration")
        validate_entity(RegistrationSerializer, registration)
        await self._ensure_event_exists(registration.event_id)

        registrations = await self._load_registrations()
        for index, existing in enumerate(registrations):
            if existing.id == registration.id:
                break
        else:
            logger.warning("Attempted to update non-existent registration %s", registration.id)
            raise RegistrationNotFoundError(str(registration.id))

        updated = registration.copy()
        registrations[index] = updated
        await self._save_registrations(registrations)

        logger.info("Updated registration %s for %s", updated.id, updated.attendee_name)
        # A move between events changes the statistics of both.
        for event_id in {existing.event_id, updated.event_id}:
            signals.registration_changed.send(
                sender=self.__class__,
                registration_id=updated.id,
                event_id=event_id,
                action="updated",
            )
        return updated

    async def delete(self, registration_id: RegistrationId | str) -> None:
        """Delete a registration.

        Raises:
            InvalidIdError: If the registration_id is not a valid UUID.
            RegistrationNotFoundError: If the registration does not exist.
        """
        parsed = parse_registration_id(registration_id)
        registrations = await self._load_registrations()
        removed = self._find(registrations, parsed)
        if removed is None:
            raise RegistrationNotFoundError(str(parsed))

        await self._save_registrations([r for r in registrations if r.id != parsed])
        logger.info("Deleted registration %s", parsed)
        signals.registration_changed.send(
            sender=self.__class__,
            registration_id=parsed,
            event_id=removed.event_id,
            action="deleted",
        )

    async def get_paged(
        self,
        page_number: int,
        page_size: int,
        cancel: threading.Event | None = None,
    ) -> PagedResult[Registration]:
        """Return one page of all registrations ordered by attendee name."""
        return self._page(await self.get_all(), page_number, page_size, cancel)

    async def get_paged_for_event(
        self,
        event_id: EventId | str,
        page_number: int,
        page_size: int,
        cancel: threading.Event | None = None,
    ) -> PagedResult[Registration]:
        """Return one page of an event's registrations ordered by attendee name."""
        registrations = await self.get_all_for_event(event_id)
        return self._page(registrations, page_number, page_size, cancel)

    async def get_registration_count_for_event(self, event_id: EventId | str) -> int:
        return len(await self.get_all_for_event(event_id))

    async def get_attended_for_event(self, event_id: EventId | str) -> list[Registration]:
        return [r for r in await self.get_all_for_event(event_id) if r.attended_event]

    async def is_user_registered_for_event(self, event_id: EventId | str, email_address: str) -> bool:
        """Whether any registration for the event uses this email, ignoring case.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            InvalidArgumentError: If the email address is blank.
        """
        if not email_address or not email_address.strip():
            raise InvalidArgumentError("email_address", "must not be empty")
        wanted = email_address.lower()
        registrations = await self.get_all_for_event(event_id)
        return any(r.email_address.lower() == wanted for r in registrations)

    @staticmethod
    def _page(
        registrations: list[Registration],
        page_number: int,
        page_size: int,
        cancel: threading.Event | None,
    ) -> PagedResult[Registration]:
        request = PageRequest.normalized(
            page_number,
            page_size,
            app_settings.DEFAULT_PAGE_SIZE,
            app_settings.MAX_PAGE_SIZE,
        )
        return PagedResult.create(
            registrations,
            request.page_number,
            request.page_size,
            order_by=lambda r: (r.attendee_name.casefold(), r.attendee_name),
            cancel=cancel,
        )

    @staticmethod
    def _find(registrations: list[Registration], registration_id: RegistrationId) -> Registration | None:
        return next((r for r in registrations if r.id == registration_id), None)

    async def _ensure_event_exists(self, event_id: EventId | None) -> None:
        if not await self._events.exists(event_id):
            raise EventNotFoundError(str(event_id))

    async def _load_registrations(self) -> list[Registration]:
        raw = await self._store.get(REGISTRATIONS_KEY)
        if raw is None:
            return []
        return decode(RegistrationRecordSerializer, raw, many=True)

    async def _save_registrations(self, registrations: list[Registration]) -> None:
        await self._store.set(
            REGISTRATIONS_KEY,
            encode(RegistrationRecordSerializer, registrations, many=True),
        )
