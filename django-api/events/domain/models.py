"""Domain models representing persisted state.

Event and Registration are mutable: a form state service binds one instance
to the UI and callers write its fields in place. Input rules live in
events/serializers.py.
"""

import datetime
from dataclasses import dataclass, field, replace
from typing import Self

from events.domain.value_objects import EventId, RegistrationId


@dataclass
class Event:
    """Domain representation of an Event. ``id`` is None until it is stored."""

    id: EventId | None = None
    name: str = ""
    date: datetime.date = field(default_factory=datetime.date.today)
    location: str = ""
    notes: str = ""

    def copy(self) -> Self:
        return replace(self)


@dataclass
class Registration:
    """Domain representation of a Registration."""

    id: RegistrationId | None = None
    event_id: EventId | None = None
    attendee_name: str = ""
    telephone: str = ""
    email_address: str = ""
    notes: str = ""
    attended_event: bool = False

    def copy(self) -> Self:
        return replace(self)


@dataclass(frozen=True)
class EventStatistics:
    """Registration and attendance counts for one event."""

    registration_count: int = 0
    attendee_count: int = 0

    @property
    def attendance_rate(self) -> float:
        """Percentage of registrants who attended, 0.0 without registrations."""
        if self.registration_count == 0:
            return 0.0
        return self.attendee_count / self.registration_count * 100
