"""Django signals sent by the CRUD services after successful writes.

Receivers (the statistics cache) use them to invalidate derived data.
"""

from django.dispatch import Signal

# kwargs: event_id, action ("added" | "updated" | "deleted")
event_changed = Signal()

# kwargs: registration_id, event_id, action ("added" | "updated" | "deleted")
registration_changed = Signal()

# Sent after the mock seeder replaces both collections.
records_seeded = Signal()
