"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RegistrationId:
    """Unique identifier for a Registration."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and a positive page size."""

    page_number: int
    page_size: int

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise ValueError("Page number must be at least 1")
        if self.page_size < 1:
            raise ValueError("Page size must be positive")

    @classmethod
    def normalized(
        cls,
        page_number: int,
        page_size: int,
        default_page_size: int,
        max_page_size: int,
    ) -> Self:
        """Clamp raw paging input the way list views expect.

        A non-positive size falls back to the default, an oversized one is
        capped, and a page number below 1 becomes 1.
        """
        if page_size <= 0:
            page_size = default_page_size
        page_size = min(page_size, max_page_size)
        return cls(page_number=max(page_number, 1), page_size=page_size)
