"""Form state for creating and editing events."""

from events.domain import Event, EventId
from events.domain.errors import InvalidIdError
from events.serializers import EventRecordSerializer
from events.services.form_state import HybridFormStateService


class EventFormStateService(HybridFormStateService[Event]):
    """Draft-backed state of the event form.

    Drafts live under ``eventForm_newDraft`` for a new event and under
    ``eventForm_edit_{eventId}`` while editing.
    """

    new_draft_key = "eventForm_newDraft"
    edit_draft_prefix = "eventForm_edit_"
    serializer_class = EventRecordSerializer
    label = "event"

    @property
    def editing_id(self) -> EventId | None:
        return super().editing_id

    def _blank_form(self) -> Event:
        return Event()

    async def initialize_for_new(self) -> None:
        """Switch to new-mode, recovering the new-event draft if one exists."""
        await self._initialize(None, accept_draft=lambda draft: True, fallback=Event)

    async def initialize_for_edit(self, event: Event) -> None:
        """Switch to editing ``event``.

        Its own edit draft is recovered when present; otherwise the form
        starts as a copy of the event.

        Raises:
            InvalidIdError: If the event has never been stored.
        """
        if event.id is None:
            raise InvalidIdError("event")
        await self._initialize(
            event.id,
            accept_draft=lambda draft: draft.id == event.id,
            fallback=event.copy,
        )
