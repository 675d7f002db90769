from events.domain.models import Event, EventStatistics, Registration
from events.domain.paging import PagedResult
from events.domain.value_objects import EventId, PageRequest, RegistrationId

__all__ = [
    "Event",
    "Registration",
    "EventStatistics",
    "EventId",
    "RegistrationId",
    "PageRequest",
    "PagedResult",
]
