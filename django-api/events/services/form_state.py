"""Hybrid form state: a live form object backed by a recoverable draft.

A service owns one in-progress form (new or a single edit) and keeps it in
sync with a draft in the key-value store. Callers mutate ``current_form`` in
place and must call ``mark_dirty()`` after every change; the service does not
observe the object. A background asyncio task writes a draft snapshot while
the form is dirty.

Locking:
- ``_state_lock`` (threading) guards the form, dirty flag and editing id. It
  is never held across an await.
- ``_write_lock`` (asyncio) orders storage operations, so an auto-save cannot
  resurrect a draft that reset_form() just removed.
"""

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import ClassVar, Generic, TypeVar

from rest_framework import serializers

from events.conf import app_settings
from events.domain import Event, Registration
from events.domain.errors import InvalidArgumentError, StorageError
from events.serializers import decode, encode
from events.stores.interfaces import KeyValueStore

logger = logging.getLogger(__name__)

FormT = TypeVar("FormT", Event, Registration)


class HybridFormStateService(ABC, Generic[FormT]):
    """Base class shared by the per-entity form state services."""

    new_draft_key: ClassVar[str]
    edit_draft_prefix: ClassVar[str]
    serializer_class: ClassVar[type[serializers.Serializer]]
    label: ClassVar[str]

    def __init__(self, store: KeyValueStore, autosave_interval: float | None = None) -> None:
        if autosave_interval is None:
            autosave_interval = app_settings.AUTOSAVE_INTERVAL
        if autosave_interval <= 0:
            raise InvalidArgumentError("autosave_interval", "must be positive")

        self._store = store
        self._autosave_interval = autosave_interval
        self._state_lock = threading.Lock()
        self._write_lock = asyncio.Lock()
        self._current_form: FormT = self._blank_form()
        self._editing_id = None
        self._is_dirty = False
        self._revision = 0
        self._autosave_task: asyncio.Task | None = None
        self._disposed = False

    @abstractmethod
    def _blank_form(self) -> FormT:
        """Return an empty form for new-mode."""

    @property
    def current_form(self) -> FormT:
        with self._state_lock:
            return self._current_form

    @property
    def is_dirty(self) -> bool:
        with self._state_lock:
            return self._is_dirty

    @property
    def editing_id(self):
        with self._state_lock:
            return self._editing_id

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def has_unsaved_changes(self) -> bool:
        return self.is_dirty

    def draft_key(self, editing_id=None) -> str:
        """Storage key of the new-form draft, or of the edit draft for editing_id."""
        if editing_id is None:
            return self.new_draft_key
        return f"{self.edit_draft_prefix}{editing_id}"

    def mark_dirty(self) -> None:
        with self._state_lock:
            self._is_dirty = True
            self._revision += 1

    def mark_clean(self) -> None:
        with self._state_lock:
            self._is_dirty = False

    async def save_form(self) -> None:
        """Write a draft of the current form now and mark it clean.

        Raises:
            StorageError: If the draft cannot be serialized or written. The
                form stays dirty.
        """
        async with self._write_lock:
            await self._write_draft()

    async def flush_if_dirty(self) -> bool:
        """Run one auto-save tick. Never raises.

        Returns True if a draft was written. A failed write leaves the form
        dirty, so the next tick tries again.
        """
        if not self.is_dirty:
            return False
        try:
            async with self._write_lock:
                if not self.is_dirty:
                    return False
                await self._write_draft()
        except StorageError as exc:
            logger.warning("Auto-save of %s draft failed, retrying on next tick: %s", self.label, exc)
            return False
        except Exception:
            logger.exception("Unexpected error during %s auto-save", self.label)
            return False
        return True

    async def reset_form(self) -> None:
        """Drop the active draft and return to a blank new-mode form."""
        async with self._write_lock:
            with self._state_lock:
                key = self.draft_key(self._editing_id)
            try:
                await self._store.remove(key)
                logger.info("Cleared %s draft %s", self.label, key)
            except StorageError as exc:
                logger.warning("Error removing %s draft %s: %s", self.label, key, exc)

            with self._state_lock:
                self._current_form = self._blank_form()
                self._editing_id = None
                self._is_dirty = False
                self._revision += 1
        logger.info("%s form reset", self.label.capitalize())

    def start(self) -> None:
        """Start the auto-save task on the running event loop. Idempotent.

        Raises:
            RuntimeError: If the service has been disposed, or no loop is running.
        """
        if self._disposed:
            raise RuntimeError(f"{type(self).__name__} has been disposed")
        if self._autosave_task is not None and not self._autosave_task.done():
            return
        self._autosave_task = asyncio.get_running_loop().create_task(
            self._autosave_loop(),
            name=f"{self.label}-autosave",
        )

    def dispose(self) -> None:
        """Stop the auto-save task. Safe to call more than once."""
        self._disposed = True
        task, self._autosave_task = self._autosave_task, None
        if task is not None and not task.done():
            task.cancel()

    async def aclose(self) -> None:
        """Dispose and wait for the auto-save task to finish."""
        task = self._autosave_task
        self.dispose()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _initialize(
        self,
        editing_id,
        accept_draft: Callable[[FormT], bool],
        fallback: Callable[[], FormT],
    ) -> None:
        key = self.draft_key(editing_id)
        async with self._write_lock:
            draft = await self._load_draft(key)
            adopted = draft is not None and accept_draft(draft)
            with self._state_lock:
                self._editing_id = editing_id
                self._current_form = draft if adopted else fallback()
                self._is_dirty = False
                self._revision += 1
        if adopted:
            logger.info("Loaded existing %s draft %s", self.label, key)
        else:
            logger.info("Initialized %s form for %s", self.label, key)

    async def _load_draft(self, key: str) -> FormT | None:
        try:
            raw = await self._store.get(key)
            if not raw:
                return None
            return decode(self.serializer_class, raw)
        except StorageError as exc:
            logger.warning("Error loading %s draft %s: %s", self.label, key, exc)
            return None

    async def _write_draft(self) -> None:
        # Caller holds _write_lock.
        with self._state_lock:
            snapshot = self._current_form.copy()
            key = self.draft_key(self._editing_id)
            revision = self._revision

        await self._store.set(key, encode(self.serializer_class, snapshot))
        logger.debug("%s form saved to storage with key %s", self.label.capitalize(), key)

        with self._state_lock:
            # A mark_dirty() that landed during the write keeps the form dirty.
            if self._revision == revision:
                self._is_dirty = False

    async def _autosave_loop(self) -> None:
        while not self._disposed:
            await asyncio.sleep(self._autosave_interval)
            if self._disposed:
                break
            await self.flush_if_dirty()
