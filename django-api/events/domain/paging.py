"""Paged views over in-memory sequences.

The engine performs no clamping: callers normalize raw input through
PageRequest.normalized() first. Invalid sizes and page numbers are rejected
rather than producing a nonsensical page count.
"""

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from itertools import islice
from typing import Any, Generic, TypeVar

from events.domain.errors import InvalidArgumentError, OperationCancelledError

T = TypeVar("T")


def _check_cancelled(cancel: threading.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError()


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of a source sequence plus navigation metadata."""

    items: tuple[T, ...]
    total_count: int
    page_number: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return -(-self.total_count // self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @classmethod
    def create(
        cls,
        source: Iterable[T],
        page_number: int,
        page_size: int,
        order_by: Callable[[T], Any] | None = None,
        cancel: threading.Event | None = None,
    ) -> "PagedResult[T]":
        """Build the page ``page_number`` (1-based) of ``source``.

        If ``order_by`` is given the source is stably sorted ascending by that
        key before slicing; otherwise source order is kept. ``cancel`` is
        checked before counting, before sorting and before slicing.

        Raises:
            InvalidArgumentError: If page_size or page_number is below 1.
            OperationCancelledError: If ``cancel`` is set at a checkpoint.
        """
        if page_size < 1:
            raise InvalidArgumentError("page_size", "must be positive")
        if page_number < 1:
            raise InvalidArgumentError("page_number", "must be at least 1")

        _check_cancelled(cancel)
        materialized = list(source)
        total_count = len(materialized)

        _check_cancelled(cancel)
        if order_by is not None:
            materialized = sorted(materialized, key=order_by)

        _check_cancelled(cancel)
        start = (page_number - 1) * page_size
        items = tuple(islice(materialized, start, start + page_size))

        return cls(
            items=items,
            total_count=total_count,
            page_number=page_number,
            page_size=page_size,
        )
