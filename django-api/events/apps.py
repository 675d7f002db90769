from django.apps import AppConfig


class EventsConfig(AppConfig):
    name = "events"
    verbose_name = "EventEase"

    def ready(self):
        # Registers the change signals before any service sends them.
        from events import signals  # noqa: F401
