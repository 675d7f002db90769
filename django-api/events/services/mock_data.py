"""Demo data for an empty installation.

Seeding replaces both collections wholesale and bypasses validation: some
fixture events lie in the past on purpose.
"""

import datetime
import logging
from collections.abc import Awaitable, Callable

from events import signals
from events.domain import Event, EventId, Registration, RegistrationId
from events.serializers import EventRecordSerializer, RegistrationRecordSerializer, encode
from events.stores.interfaces import EVENTS_KEY, REGISTRATIONS_KEY, KeyValueStore

logger = logging.getLogger(__name__)

# key, name, days from today, location, notes
EVENT_FIXTURES = [
    ("devSummit", "Developer Summit", -5, "Chicago", "Tech insights from top minds."),
    ("uxWorkshop", "UX Workshop", 12, "Remote", "Hands-on UI prototyping."),
    ("cloudExpo", "Cloud Expo", -2, "San Francisco", "Latest in cloud technologies."),
    ("aiBootcamp", "AI Bootcamp", 30, "New York", "Deep dive into AI and ML."),
    ("cybersecurityForum", "Cybersecurity Forum", 15, "Austin", "Protecting digital assets."),
    ("agileDays", "Agile Days", 25, "Seattle", "Agile best practices."),
    ("mobileDevCon", "Mobile DevCon", 18, "Boston", "Mobile app development trends."),
    ("dataScienceSummit", "Data Science Summit", 22, "Denver", "Big data and analytics."),
    ("techLeadersMeetup", "Tech Leaders Meetup", 10, "Atlanta", "Networking for tech leaders."),
    ("startupPitchNight", "Startup Pitch Night", 28, "Los Angeles", "Pitch your startup ideas."),
]

# Events already held have every attendee marked as attended.
ATTENDED_EVENTS = {"devSummit", "cloudExpo"}

# event key -> (name, telephone, notes); emails derive from the name.
REGISTRATION_FIXTURES = {
    "devSummit": [
        ("Alice Smith", "312-985-7612", "Requested front row seating"),
        ("James Wright", "402-555-2345", "Needs wheelchair access"),
        ("Alexander Baker", "402-555-0123", "Needs parking"),
        ("Joseph Stewart", "402-555-1123", "Panelist"),
        ("Elijah Cooper", "402-555-2123", "Needs invoice"),
        ("Levi Watson", "402-555-3123", "Prefers email updates"),
        ("Parker Mitchell", "402-555-4123", "Needs invoice"),
        ("Luke Powell", "402-555-5123", "Needs parking"),
        ("Zoey Foster", "402-555-6123", "VIP guest"),
    ],
    "uxWorkshop": [
        ("John Jones", "312-985-8592", "Will arrive late"),
        ("Mia Davis", "402-555-7890", "Bringing guest"),
        ("Ella Carter", "402-555-0234", "Vegetarian meal"),
        ("Penelope Sanchez", "402-555-1234", "Speaker"),
        ("Sofia Richardson", "402-555-2234", "Returning attendee"),
        ("Aurora Brooks", "402-555-3234", "Allergic to nuts"),
        ("Paisley Simmons", "402-555-4234", "Bringing guest"),
        ("Ellie Long", "402-555-5234", "First time attendee"),
        ("Nathan Simmons", "402-555-6234", "Vegetarian meal"),
    ],
    "cloudExpo": [
        ("Mike Parry", "708-274-8726", "Needs projector access"),
        ("Benjamin Hall", "402-555-1212", "Prefers email updates"),
        ("Sebastian Perez", "402-555-0345", "VIP guest"),
        ("Samuel Morris", "402-555-1345", "VIP guest"),
        ("Aiden Cox", "402-555-2345", "Panelist"),
        ("Hudson Kelly", "402-555-3345", "Needs wheelchair access"),
        ("Grayson Foster", "402-555-4345", "Prefers email updates"),
        ("Jackson Patterson", "402-555-5345", "Needs invoice"),
        ("Savannah Bryant", "402-555-6345", "Needs parking"),
    ],
    "aiBootcamp": [
        ("Lisa Wilson", "224-845-0087", "Prefers digital materials"),
        ("Charlotte Young", "402-555-3412", "Allergic to nuts"),
        ("Grace Turner", "402-555-0456", "First time attendee"),
        ("Lily Rogers", "402-555-1456", "Vegetarian meal"),
        ("Camila Howard", "402-555-2456", "Speaker"),
        ("Savannah Sanders", "402-555-3456", "Returning attendee"),
        ("Aubrey Bryant", "402-555-4456", "Allergic to nuts"),
        ("Layla Hughes", "402-555-5456", "Bringing guest"),
        ("Leah Russell", "402-555-6456", "First time attendee"),
    ],
    "cybersecurityForum": [
        ("Ethan Brown", "402-555-1234", "VIP guest"),
        ("Lucas Hernandez", "402-555-4567", "Needs invoice"),
        ("Daniel Phillips", "402-555-0567", "Needs invoice"),
        ("Owen Reed", "402-555-1567", "Needs parking"),
        ("Carter Ward", "402-555-2567", "VIP guest"),
        ("Gabriel Price", "402-555-3567", "Panelist"),
        ("Madison Russell", "402-555-4567", "Needs wheelchair access"),
        ("Avery Butler", "402-555-5567", "Prefers email updates"),
        ("Wyatt Griffin", "402-555-6567", "Needs invoice"),
    ],
    "agileDays": [
        ("Sophia Lee", "402-555-4321", "Vegetarian meal"),
        ("Amelia King", "402-555-5678", "Returning attendee"),
        ("Chloe Campbell", "402-555-0678", "Bringing guest"),
        ("Zoe Cook", "402-555-1678", "First time attendee"),
        ("Riley Torres", "402-555-2678", "Vegetarian meal"),
        ("Violet Bennett", "402-555-3678", "Speaker"),
        ("Easton Griffin", "402-555-4678", "Returning attendee"),
        ("Harper Barnes", "402-555-5678", "Allergic to nuts"),
        ("Hazel Hayes", "402-555-6678", "Bringing guest"),
    ],
    "mobileDevCon": [
        ("Noah Kim", "402-555-6789", "Needs parking"),
        ("Henry Scott", "402-555-6712", "Prefers phone contact"),
        ("Matthew Parker", "402-555-0789", "Prefers email updates"),
        ("Mason Bell", "402-555-1789", "Prefers phone contact"),
        ("Wyatt Peterson", "402-555-2789", "Needs parking"),
        ("Lincoln Wood", "402-555-3789", "VIP guest"),
        ("Penelope Hayes", "402-555-4789", "Panelist"),
        ("Ella Brooks", "402-555-5789", "Needs wheelchair access"),
        ("Julian Jenkins", "402-555-6789", "Prefers email updates"),
    ],
    "dataScienceSummit": [
        ("Olivia Chen", "402-555-9876", "Speaker"),
        ("Emily Green", "402-555-7823", "Needs gluten-free meal"),
        ("Scarlett Evans", "402-555-0890", "Allergic to nuts"),
        ("Layla Murphy", "402-555-1890", "Needs gluten-free meal"),
        ("Nora Gray", "402-555-2890", "First time attendee"),
        ("Brooklyn Barnes", "402-555-3890", "Vegetarian meal"),
        ("Hudson Morris", "402-555-4890", "Speaker"),
        ("Carter Reed", "402-555-5890", "Returning attendee"),
        ("Aurora Perry", "402-555-6890", "Allergic to nuts"),
    ],
    "techLeadersMeetup": [
        ("William Clark", "402-555-7654", "First time attendee"),
        ("Jack Adams", "402-555-8934", "Speaker"),
        ("David Edwards", "402-555-0901", "Needs wheelchair access"),
        ("Logan Bailey", "402-555-1901", "Speaker"),
        ("Julian Ramirez", "402-555-2901", "Needs invoice"),
        ("Jayden Ross", "402-555-3901", "Needs parking"),
        ("Lillian Jenkins", "402-555-4901", "VIP guest"),
        ("Scarlett Bennett", "402-555-5901", "Panelist"),
        ("Mason Powell", "402-555-6901", "Needs wheelchair access"),
    ],
    "startupPitchNight": [
        ("Ava Patel", "402-555-3456", "Panelist"),
        ("Harper Nelson", "402-555-9045", "Panelist"),
        ("Victoria Collins", "402-555-1012", "Returning attendee"),
        ("Aria Rivera", "402-555-2012", "Panelist"),
        ("Hazel James", "402-555-3012", "Bringing guest"),
        ("Stella Henderson", "402-555-4012", "First time attendee"),
        ("Mila Perry", "402-555-5012", "Vegetarian meal"),
        ("Henry Wood", "402-555-6012", "Speaker"),
        ("Layla Long", "402-555-7012", "Returning attendee"),
    ],
}


def _email_for(name: str) -> str:
    return name.lower().replace(" ", ".") + "@example.com"


def create_seed_data(today: datetime.date | None = None) -> tuple[list[Event], list[Registration]]:
    """Build the fixture events and registrations with fresh IDs."""
    today = today or datetime.date.today()
    event_ids: dict[str, EventId] = {}
    events: list[Event] = []
    for key, name, offset, location, notes in EVENT_FIXTURES:
        event_ids[key] = EventId.new()
        events.append(
            Event(
                id=event_ids[key],
                name=name,
                date=today + datetime.timedelta(days=offset),
                location=location,
                notes=notes,
            )
        )

    registrations = [
        Registration(
            id=RegistrationId.new(),
            event_id=event_ids[key],
            attendee_name=name,
            telephone=telephone,
            email_address=_email_for(name),
            notes=notes,
            attended_event=key in ATTENDED_EVENTS,
        )
        for key, attendees in REGISTRATION_FIXTURES.items()
        for name, telephone, notes in attendees
    ]
    return events, registrations


class MockDataService:
    """Writes the fixture data set into the key-value store."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def seed_records(self) -> None:
        """Replace all events and registrations with fresh fixtures."""
        await self._store.remove(EVENTS_KEY)
        await self._store.remove(REGISTRATIONS_KEY)

        events, registrations = create_seed_data()
        await self._store.set(EVENTS_KEY, encode(EventRecordSerializer, events, many=True))
        await self._store.set(
            REGISTRATIONS_KEY,
            encode(RegistrationRecordSerializer, registrations, many=True),
        )

        logger.info("Seeded %d events and %d registrations", len(events), len(registrations))
        signals.records_seeded.send(sender=self.__class__)

    async def seed_all(self, on_seed_complete: Callable[[], Awaitable[None]] | None = None) -> None:
        await self.seed_records()
        if on_seed_complete is not None:
            await on_seed_complete()
