"""Per-event registration statistics with bounded caching.

Entries are evicted least-recently-used once ``max_entries`` is reached and
invalidated by the change signals the CRUD services send.
"""

import logging
from collections import Counter, OrderedDict

from events import signals
from events.conf import app_settings
from events.domain import EventId, EventStatistics
from events.services.event_service import parse_event_id
from events.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)


class EventStatisticsCache:
    """Registration and attendee counts keyed by event."""

    def __init__(self, registrations: RegistrationService, max_entries: int | None = None) -> None:
        if max_entries is None:
            max_entries = app_settings.STATISTICS_CACHE_SIZE
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._registrations = registrations
        self._max_entries = max_entries
        self._entries: OrderedDict[EventId, EventStatistics] = OrderedDict()
        # Bumped by invalidations that arrive while a read for the event is in
        # flight. A read only caches its result if its generation is unchanged.
        self._in_flight: Counter[EventId] = Counter()
        self._generations: dict[EventId, int] = {}
        self._epoch = 0

        signals.event_changed.connect(self._on_event_changed)
        signals.registration_changed.connect(self._on_registration_changed)
        signals.records_seeded.connect(self._on_records_seeded)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, event_id: EventId) -> bool:
        return event_id in self._entries

    async def get(self, event_id: EventId | str) -> EventStatistics:
        """Return cached statistics for an event, computing them on a miss.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
        """
        parsed = parse_event_id(event_id)
        cached = self._entries.get(parsed)
        if cached is not None:
            self._entries.move_to_end(parsed)
            return cached

        generation = (self._epoch, self._generations.get(parsed, 0))
        self._in_flight[parsed] += 1
        try:
            registrations = await self._registrations.get_all_for_event(parsed)
        finally:
            current = (self._epoch, self._generations.get(parsed, 0))
            self._in_flight[parsed] -= 1
            if not self._in_flight[parsed]:
                del self._in_flight[parsed]
                self._generations.pop(parsed, None)

        stats = EventStatistics(
            registration_count=len(registrations),
            attendee_count=sum(1 for r in registrations if r.attended_event),
        )
        if current != generation:
            logger.debug("Statistics for event %s changed during read, not caching", parsed)
            return stats
        self._entries[parsed] = stats
        if len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted statistics for event %s", evicted)
        return stats

    def invalidate(self, event_id: EventId | None) -> None:
        if event_id is None:
            return
        if event_id in self._in_flight:
            self._generations[event_id] = self._generations.get(event_id, 0) + 1
        if self._entries.pop(event_id, None) is not None:
            logger.debug("Invalidated statistics for event %s", event_id)

    def clear(self) -> None:
        self._epoch += 1
        self._entries.clear()

    def close(self) -> None:
        """Stop listening for change signals."""
        signals.event_changed.disconnect(self._on_event_changed)
        signals.registration_changed.disconnect(self._on_registration_changed)
        signals.records_seeded.disconnect(self._on_records_seeded)
        self.clear()

    def _on_event_changed(self, sender, event_id=None, **kwargs) -> None:
        self.invalidate(event_id)

    def _on_registration_changed(self, sender, event_id=None, **kwargs) -> None:
        self.invalidate(event_id)

    def _on_records_seeded(self, sender, **kwargs) -> None:
        self.clear()
