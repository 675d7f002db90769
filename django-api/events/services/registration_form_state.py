"""Form state for creating and editing registrations."""

from events.domain import EventId, Registration, RegistrationId
from events.domain.errors import InvalidIdError
from events.serializers import RegistrationRecordSerializer
from events.services.event_service import parse_event_id
from events.services.form_state import HybridFormStateService


class RegistrationFormStateService(HybridFormStateService[Registration]):
    """Draft-backed state of the registration form.

    There is a single new-registration draft. It is only recovered for the
    event it was started for.
    """

    new_draft_key = "registrationForm_newDraft"
    edit_draft_prefix = "registrationForm_edit_"
    serializer_class = RegistrationRecordSerializer
    label = "registration"

    @property
    def editing_id(self) -> RegistrationId | None:
        return super().editing_id

    def _blank_form(self) -> Registration:
        return Registration()

    async def initialize_for_new(self, event_id: EventId | str) -> None:
        """Switch to new-mode for a registration to ``event_id``.

        Raises:
            InvalidIdError: If event_id is empty or malformed.
        """
        parsed = parse_event_id(event_id)
        await self._initialize(
            None,
            accept_draft=lambda draft: draft.event_id == parsed,
            fallback=lambda: Registration(event_id=parsed),
        )

    async def initialize_for_edit(self, registration: Registration) -> None:
        """Switch to editing ``registration``.

        Raises:
            InvalidIdError: If the registration has never been stored.
        """
        if registration.id is None:
            raise InvalidIdError("registration")
        await self._initialize(
            registration.id,
            accept_draft=lambda draft: draft.id == registration.id,
            fallback=registration.copy,
        )
