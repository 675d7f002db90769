"""Unit tests for EventService and RegistrationService.

These test error handling and domain error mapping.
Run with: pytest tests/test_services.py -v
"""

import datetime
import threading

import pytest
from asgiref.sync import async_to_sync

from events import signals
from events.domain import EventId, Registration, RegistrationId
from events.domain.errors import (
    EventNotFoundError,
    InvalidArgumentError,
    InvalidIdError,
    OperationCancelledError,
    RegistrationNotFoundError,
    StorageError,
    ValidationError,
)
from events.serializers import RegistrationRecordSerializer, encode
from events.stores.interfaces import REGISTRATIONS_KEY


class TestEventService:
    """Tests for EventService."""

    def test_add_assigns_new_id(self, event_service, make_event):
        draft = make_event()
        created = async_to_sync(event_service.add)(draft)

        assert created.id is not None
        assert draft.id is None
        assert async_to_sync(event_service.get_all)() == [created]

    def test_add_rejects_invalid_event(self, event_service, make_event):
        with pytest.raises(ValidationError):
            async_to_sync(event_service.add)(make_event(name=""))

    def test_get_event_invalid_id_raises_error(self, event_service):
        """get_by_id raises InvalidIdError for malformed UUID."""
        with pytest.raises(InvalidIdError):
            async_to_sync(event_service.get_by_id)("not-a-uuid")

    def test_get_event_empty_id_raises_error(self, event_service):
        with pytest.raises(InvalidIdError):
            async_to_sync(event_service.get_by_id)("")

    def test_get_event_not_found_raises_error(self, event_service):
        """get_by_id raises EventNotFoundError when the event is absent."""
        with pytest.raises(EventNotFoundError):
            async_to_sync(event_service.get_by_id)(str(EventId.new()))

    def test_get_by_id_accepts_string_ids(self, event_service, stored_event):
        assert async_to_sync(event_service.get_by_id)(str(stored_event.id)) == stored_event

    def test_try_get_and_exists(self, event_service, stored_event):
        assert async_to_sync(event_service.try_get_by_id)(stored_event.id) == stored_event
        assert async_to_sync(event_service.try_get_by_id)("") is None
        assert async_to_sync(event_service.exists)(stored_event.id) is True
        assert async_to_sync(event_service.exists)(EventId.new()) is False
        assert async_to_sync(event_service.exists)(None) is False

    def test_update_replaces_fields(self, event_service, stored_event):
        edited = stored_event.copy()
        edited.location = "Remote"
        # Existing events may be moved into the past.
        edited.date = datetime.date.today() - datetime.timedelta(days=3)

        async_to_sync(event_service.update)(edited)

        assert async_to_sync(event_service.get_by_id)(stored_event.id) == edited

    def test_update_unknown_event(self, event_service, make_event):
        with pytest.raises(EventNotFoundError):
            async_to_sync(event_service.update)(make_event(id=EventId.new()))

    def test_update_without_id(self, event_service, make_event):
        with pytest.raises(InvalidIdError):
            async_to_sync(event_service.update)(make_event())

    def test_delete_unknown_event(self, event_service):
        with pytest.raises(EventNotFoundError):
            async_to_sync(event_service.delete)(EventId.new())

    def test_get_all_absorbs_read_failures(self, event_service, store, stored_event):
        store.fail_reads.add("events")
        assert async_to_sync(event_service.get_all)() == []

    def test_add_does_not_overwrite_unreadable_collection(self, event_service, store, stored_event, make_event):
        store.fail_reads.add("events")
        with pytest.raises(StorageError):
            async_to_sync(event_service.add)(make_event(name="Agile Days"))
        store.fail_reads.clear()
        assert async_to_sync(event_service.get_all)() == [stored_event]

    def test_get_paged_orders_by_name_and_clamps(self, event_service, make_event):
        for name in ("Cloud Expo", "AI Bootcamp", "Mobile DevCon"):
            async_to_sync(event_service.add)(make_event(name=name))

        page = async_to_sync(event_service.get_paged)(0, 0)

        assert [event.name for event in page.items] == ["AI Bootcamp", "Cloud Expo", "Mobile DevCon"]
        assert page.page_number == 1
        assert page.page_size == 10

    def test_get_paged_orders_names_ignoring_case(self, event_service, make_event):
        for name in ("banana split", "Apple Fair", "Cherry Days"):
            async_to_sync(event_service.add)(make_event(name=name))

        page = async_to_sync(event_service.get_paged)(1, 10)

        assert [event.name for event in page.items] == ["Apple Fair", "banana split", "Cherry Days"]

    def test_get_paged_caps_page_size(self, event_service):
        assert async_to_sync(event_service.get_paged)(1, 1000).page_size == 100

    def test_get_paged_honours_cancellation(self, event_service):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(OperationCancelledError):
            async_to_sync(event_service.get_paged)(1, 10, cancel)

    def test_writes_send_event_changed(self, event_service, make_event):
        received = []

        def receiver(sender, event_id, action, **kwargs):
            received.append((event_id, action))

        signals.event_changed.connect(receiver)
        try:
            created = async_to_sync(event_service.add)(make_event())
            async_to_sync(event_service.delete)(created.id)
        finally:
            signals.event_changed.disconnect(receiver)

        assert received == [(created.id, "added"), (created.id, "deleted")]


class TestCascadeDelete:
    """Deleting an event removes its registrations first."""

    def test_delete_removes_event_and_its_registrations(
        self, event_service, registration_service, stored_event, make_event, make_registration
    ):
        other = async_to_sync(event_service.add)(make_event(name="UX Workshop"))
        r1 = async_to_sync(registration_service.add)(make_registration(stored_event.id))
        r2 = async_to_sync(registration_service.add)(
            make_registration(stored_event.id, attendee_name="James Wright", email_address="james@example.com")
        )
        kept = async_to_sync(registration_service.add)(make_registration(other.id))

        async_to_sync(event_service.delete)(stored_event.id)

        remaining = async_to_sync(registration_service.get_all)()
        assert r1 not in remaining
        assert r2 not in remaining
        assert remaining == [kept]
        with pytest.raises(EventNotFoundError):
            async_to_sync(event_service.get_by_id)(stored_event.id)

    def test_failed_cleanup_keeps_event(
        self, event_service, registration_service, store, stored_event, make_registration
    ):
        registration = async_to_sync(registration_service.add)(make_registration(stored_event.id))
        store.fail_writes.add(REGISTRATIONS_KEY)

        with pytest.raises(StorageError):
            async_to_sync(event_service.delete)(stored_event.id)

        store.fail_writes.clear()
        assert async_to_sync(event_service.get_by_id)(stored_event.id) == stored_event
        assert async_to_sync(registration_service.get_all)() == [registration]

    def test_unreadable_registrations_abort_delete(self, event_service, store, stored_event):
        store.fail_reads.add(REGISTRATIONS_KEY)

        with pytest.raises(StorageError):
            async_to_sync(event_service.delete)(stored_event.id)

        assert async_to_sync(event_service.exists)(stored_event.id)


class TestRegistrationService:
    """Tests for RegistrationService."""

    def test_add_requires_existing_event(self, registration_service, make_registration):
        with pytest.raises(EventNotFoundError):
            async_to_sync(registration_service.add)(make_registration(EventId.new()))

    def test_add_validates_fields(self, registration_service, stored_event, make_registration):
        with pytest.raises(ValidationError) as exc_info:
            async_to_sync(registration_service.add)(make_registration(stored_event.id, telephone="555-1234"))
        assert "telephone" in exc_info.value.errors

    def test_get_by_id_errors(self, registration_service):
        with pytest.raises(InvalidIdError):
            async_to_sync(registration_service.get_by_id)("")
        with pytest.raises(RegistrationNotFoundError):
            async_to_sync(registration_service.get_by_id)(RegistrationId.new())

    def test_update_and_delete(self, registration_service, stored_event, make_registration):
        created = async_to_sync(registration_service.add)(make_registration(stored_event.id))
        edited = created.copy()
        edited.attended_event = True

        async_to_sync(registration_service.update)(edited)
        assert async_to_sync(registration_service.get_by_id)(created.id).attended_event is True

        async_to_sync(registration_service.delete)(str(created.id))
        assert async_to_sync(registration_service.exists)(created.id) is False
        with pytest.raises(RegistrationNotFoundError):
            async_to_sync(registration_service.delete)(created.id)

    def test_update_unknown_registration(self, registration_service, stored_event, make_registration):
        with pytest.raises(RegistrationNotFoundError):
            async_to_sync(registration_service.update)(
                make_registration(stored_event.id, id=RegistrationId.new())
            )

    def test_per_event_queries(self, event_service, registration_service, stored_event, make_event, make_registration):
        other = async_to_sync(event_service.add)(make_event(name="Cloud Expo"))
        async_to_sync(registration_service.add)(make_registration(stored_event.id, attended_event=True))
        async_to_sync(registration_service.add)(
            make_registration(stored_event.id, attendee_name="Mia Davis", email_address="mia.davis@example.com")
        )
        async_to_sync(registration_service.add)(make_registration(other.id))

        assert async_to_sync(registration_service.get_registration_count_for_event)(stored_event.id) == 2
        attended = async_to_sync(registration_service.get_attended_for_event)(stored_event.id)
        assert [r.attendee_name for r in attended] == ["Alice Smith"]
        assert len(async_to_sync(registration_service.get_all_for_event)(other.id)) == 1

    def test_is_user_registered_ignores_case(self, registration_service, stored_event, make_registration):
        async_to_sync(registration_service.add)(make_registration(stored_event.id))

        assert async_to_sync(registration_service.is_user_registered_for_event)(
            stored_event.id, "Alice.Smith@Example.COM"
        )
        assert not async_to_sync(registration_service.is_user_registered_for_event)(
            stored_event.id, "bob@example.com"
        )
        with pytest.raises(InvalidArgumentError):
            async_to_sync(registration_service.is_user_registered_for_event)(stored_event.id, "  ")

    def test_per_event_queries_reject_bad_ids(self, registration_service):
        with pytest.raises(InvalidIdError):
            async_to_sync(registration_service.get_all_for_event)("")

    def test_get_paged_for_event_orders_by_attendee(self, registration_service, stored_event, make_registration):
        for name in ("Zoey Foster", "Alice Smith", "Levi Watson"):
            email = name.lower().replace(" ", ".") + "@example.com"
            async_to_sync(registration_service.add)(
                make_registration(stored_event.id, attendee_name=name, email_address=email)
            )

        page = async_to_sync(registration_service.get_paged_for_event)(stored_event.id, 2, 2)

        assert [r.attendee_name for r in page.items] == ["Zoey Foster"]
        assert page.total_count == 3
        assert page.has_previous_page is True
        assert page.has_next_page is False

    def test_get_paged_all_registrations(self, registration_service, stored_event, make_registration):
        async_to_sync(registration_service.add)(make_registration(stored_event.id))
        page = async_to_sync(registration_service.get_paged)(1, 10)
        assert page.total_count == 1

    def test_get_paged_for_event_orders_attendees_ignoring_case(
        self, registration_service, stored_event, make_registration
    ):
        for name in ("levi Watson", "Zoey Foster", "alice Smith"):
            email = name.lower().replace(" ", ".") + "@example.com"
            async_to_sync(registration_service.add)(
                make_registration(stored_event.id, attendee_name=name, email_address=email)
            )

        page = async_to_sync(registration_service.get_paged_for_event)(stored_event.id, 1, 10)

        assert [r.attendee_name for r in page.items] == ["alice Smith", "levi Watson", "Zoey Foster"]

    def test_is_user_registered_does_not_expand_characters(self, registration_service, store, stored_event):
        registration = Registration(
            id=RegistrationId.new(),
            event_id=stored_event.id,
            attendee_name="Lena Vogel",
            telephone="312-985-7612",
            email_address="lena@straße.de",
        )
        store.data[REGISTRATIONS_KEY] = encode(RegistrationRecordSerializer, [registration], many=True)

        assert async_to_sync(registration_service.is_user_registered_for_event)(stored_event.id, "LENA@STRAßE.DE")
        assert not async_to_sync(registration_service.is_user_registered_for_event)(
            stored_event.id, "LENA@STRASSE.DE"
        )
