from events.stores.django_store import DjangoCacheStore
from events.stores.interfaces import EVENTS_KEY, REGISTRATIONS_KEY, KeyValueStore

__all__ = [
    "KeyValueStore",
    "DjangoCacheStore",
    "EVENTS_KEY",
    "REGISTRATIONS_KEY",
]
