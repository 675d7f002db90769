"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    REGISTRATION_NOT_FOUND = "REGISTRATION_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    STORAGE_FAILURE = "STORAGE_FAILURE"
    OPERATION_CANCELLED = "OPERATION_CANCELLED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """Raised when an operation targets an identifier that does not exist."""


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class RegistrationNotFoundError(NotFoundError):
    """Raised when a registration is not found."""

    def __init__(self, registration_id: str) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_NOT_FOUND,
            message="Registration not found",
        )
        self.registration_id = registration_id


class InvalidArgumentError(DomainError):
    """Raised when an argument is outside its accepted range."""

    def __init__(self, argument: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ARGUMENT,
            message=f"Invalid {argument}: {reason}",
        )
        self.argument = argument


class InvalidIdError(InvalidArgumentError):
    """Raised when an identifier is empty or malformed."""

    def __init__(self, entity: str = "event") -> None:
        DomainError.__init__(
            self,
            code=ErrorCode.INVALID_ID,
            message=f"Invalid {entity} ID format",
        )
        self.argument = f"{entity}_id"


class ValidationError(DomainError):
    """Raised when an entity breaks a data-model rule.

    ``errors`` maps field names (or ``non_field_errors``) to messages.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message="Validation failed for " + ", ".join(sorted(errors)),
        )
        self.errors = errors


class StorageError(DomainError):
    """Raised when the key-value store cannot be read or written."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.STORAGE_FAILURE,
            message=message,
        )
        self.key = key


class OperationCancelledError(DomainError):
    """Raised when a cancellable operation observes its cancel flag."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.OPERATION_CANCELLED,
            message="Operation was cancelled",
        )
