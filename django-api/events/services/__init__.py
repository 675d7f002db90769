from events.services.event_form_state import EventFormStateService
from events.services.event_service import EventService
from events.services.form_state import HybridFormStateService
from events.services.mock_data import MockDataService, create_seed_data
from events.services.registration_form_state import RegistrationFormStateService
from events.services.registration_service import RegistrationService
from events.services.statistics import EventStatisticsCache

__all__ = [
    "EventService",
    "RegistrationService",
    "HybridFormStateService",
    "EventFormStateService",
    "RegistrationFormStateService",
    "EventStatisticsCache",
    "MockDataService",
    "create_seed_data",
]
