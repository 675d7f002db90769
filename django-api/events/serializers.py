"""Serializers between domain models and stored JSON.

Record serializers are lenient: they round-trip whatever a half-filled form
holds, so drafts and collections always decode. Strict serializers carry the
data-model rules and are only used to validate entities before the CRUD
services persist them.
"""

import datetime
import json
from typing import Any

from rest_framework import serializers
from rest_framework.renderers import JSONRenderer

from events.domain import Event, EventId, Registration, RegistrationId
from events.domain.errors import StorageError, ValidationError

MINIMUM_EVENT_DATE = "The event date must not be earlier than today"
TELEPHONE_PATTERN = r"^[1-9][0-9]{2}-[1-9][0-9]{2}-[0-9]{4}$"


class EventRecordSerializer(serializers.Serializer):
    """Stored shape of an Event (collections and drafts)."""

    id = serializers.UUIDField(allow_null=True, required=False, default=None)
    name = serializers.CharField(allow_blank=True, required=False, default="", trim_whitespace=False)
    date = serializers.DateField(required=False, default=datetime.date.today)
    location = serializers.CharField(allow_blank=True, required=False, default="", trim_whitespace=False)
    notes = serializers.CharField(allow_blank=True, required=False, default="", trim_whitespace=False)

    def create(self, validated_data: dict[str, Any]) -> Event:
        event_id = validated_data.get("id")
        return Event(
            id=EventId(value=event_id) if event_id else None,
            name=validated_data.get("name", ""),
            date=validated_data.get("date") or datetime.date.today(),
            location=validated_data.get("location", ""),
            notes=validated_data.get("notes", ""),
        )


class RegistrationRecordSerializer(serializers.Serializer):
    """Stored shape of a Registration (collections and drafts)."""

    id = serializers.UUIDField(allow_null=True, required=False, default=None)
    event_id = serializers.UUIDField(allow_null=True, required=False, default=None)
    attendee_name = serializers.CharField(allow_blank=True, required=False, default="", trim_whitespace=False)
    telephone = serializers.CharField(allow_blank=True, required=False, default="", trim_whitespace=False)
    email_address = serializers.CharField(allow_blank=True, required=False, default="", trim_whitespace=False)
    notes = serializers.CharField(allow_blank=True, required=False, default="", trim_whitespace=False)
    attended_event = serializers.BooleanField(required=False, default=False)

    def create(self, validated_data: dict[str, Any]) -> Registration:
        registration_id = validated_data.get("id")
        event_id = validated_data.get("event_id")
        return Registration(
            id=RegistrationId(value=registration_id) if registration_id else None,
            event_id=EventId(value=event_id) if event_id else None,
            attendee_name=validated_data.get("attendee_name", ""),
            telephone=validated_data.get("telephone", ""),
            email_address=validated_data.get("email_address", ""),
            notes=validated_data.get("notes", ""),
            attended_event=validated_data.get("attended_event", False),
        )


class EventSerializer(EventRecordSerializer):
    """Validation rules for an Event about to be persisted."""

    name = serializers.CharField(
        max_length=100,
        error_messages={"blank": "Please enter an event name.", "required": "Please enter an event name."},
    )
    date = serializers.DateField()
    location = serializers.CharField(
        max_length=200,
        error_messages={"blank": "Please enter an event location.", "required": "Please enter an event location."},
    )
    notes = serializers.CharField(max_length=500, allow_blank=True, required=False, default="")

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        # Existing events may keep a past date.
        if attrs.get("id") is None and attrs["date"] < datetime.date.today():
            raise serializers.ValidationError({"date": MINIMUM_EVENT_DATE})
        return attrs


class RegistrationSerializer(RegistrationRecordSerializer):
    """Validation rules for a Registration about to be persisted."""

    event_id = serializers.UUIDField()
    attendee_name = serializers.CharField(
        max_length=100,
        error_messages={"blank": "Please enter a name.", "required": "Please enter a name."},
    )
    telephone = serializers.RegexField(
        TELEPHONE_PATTERN,
        max_length=12,
        error_messages={
            "blank": "Please enter a telephone number.",
            "required": "Please enter a telephone number.",
            "invalid": "Invalid telephone number.",
        },
    )
    email_address = serializers.EmailField(
        max_length=254,
        error_messages={"blank": "Please enter a valid email address.", "required": "Please enter a valid email address."},
    )
    notes = serializers.CharField(max_length=500, allow_blank=True, required=False, default="")


def encode(serializer_class: type[serializers.Serializer], instance: Any, many: bool = False) -> str:
    """Render a domain object (or list of them) as JSON text.

    Raises:
        StorageError: If the instance cannot be serialized.
    """
    try:
        data = serializer_class(instance, many=many).data
        return JSONRenderer().render(data).decode("utf-8")
    except (AttributeError, TypeError, ValueError) as exc:
        raise StorageError(f"Unable to serialize {serializer_class.__name__} data") from exc


def decode(serializer_class: type[serializers.Serializer], raw: str, many: bool = False) -> Any:
    """Parse JSON text back into a domain object (or list of them).

    Raises:
        StorageError: If the text is not valid JSON or not a valid record.
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise StorageError(f"Malformed JSON for {serializer_class.__name__}") from exc

    serializer = serializer_class(data=payload, many=many)
    if not serializer.is_valid():
        raise StorageError(f"Invalid stored {serializer_class.__name__} data: {serializer.errors}")
    return serializer.save()


def validate_entity(serializer_class: type[serializers.Serializer], instance: Any) -> None:
    """Check a domain object against a strict serializer.

    Raises:
        ValidationError: With the failing fields and their messages.
    """
    serializer = serializer_class(data=serializer_class(instance).data)
    if not serializer.is_valid():
        raise ValidationError(_flatten_errors(serializer.errors))


def _flatten_errors(errors: dict[str, Any]) -> dict[str, list[str]]:
    flattened: dict[str, list[str]] = {}
    for field_name, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            flattened[field_name] = [str(message) for message in messages]
        else:
            flattened[field_name] = [str(messages)]
    return flattened
