"""App settings for the events module.

Values come from the ``EVENTEASE`` dict in Django settings; missing keys fall
back to the defaults below. Lookups happen at access time so tests can
override settings.
"""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    "STORAGE_CACHE": "default",
    "AUTOSAVE_INTERVAL": 1.0,
    "DEFAULT_PAGE_SIZE": 10,
    "MAX_PAGE_SIZE": 100,
    "STATISTICS_CACHE_SIZE": 256,
}


class AppSettings:
    """Attribute access to ``settings.EVENTEASE`` with defaults."""

    def __getattr__(self, name: str) -> Any:
        if name not in DEFAULTS:
            raise AttributeError(f"Unknown EventEase setting: {name}")
        user_settings = getattr(settings, "EVENTEASE", {})
        return user_settings.get(name, DEFAULTS[name])


app_settings = AppSettings()
