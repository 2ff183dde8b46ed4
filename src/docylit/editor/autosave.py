"""Debounced content persistence."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from docylit.constants import DEFAULT_AUTOSAVE_DELAY, SaveStatus
from docylit.editor.state import (
    AutosaveState,
    RestartTimer,
    Transition,
    WriteDocument,
    edit_received,
    flush_requested,
    timer_fired,
    write_failed,
    write_succeeded,
)
from docylit.exceptions import PersistenceError
from docylit.storage import DocumentStore

logger = logging.getLogger(__name__)

ErrorListener = Callable[[PersistenceError], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AutosaveScheduler:
    """Coalesces bursts of edits into a single store write.

    Every :meth:`notify_edit` cancels the outstanding timer and starts a new
    one, so only the last edit of a burst leads to a write. Must be driven
    from a running asyncio event loop.

    Args:
        store: Destination of the debounced writes.
        read_document: Returns ``(content, title)`` at the moment of writing.
        delay: Quiet period in seconds.
        clock: Source of save timestamps.

    """

    def __init__(
        self,
        store: DocumentStore,
        read_document: Callable[[], tuple[str, str]],
        *,
        delay: float = DEFAULT_AUTOSAVE_DELAY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._read_document = read_document
        self._delay = delay
        self._clock = clock
        self._state = AutosaveState()
        self._handle: asyncio.TimerHandle | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._error_listeners: list[ErrorListener] = []

    @property
    def state(self) -> AutosaveState:
        return self._state

    @property
    def status(self) -> SaveStatus:
        return self._state.status

    @property
    def is_pending(self) -> bool:
        return self._state.status is SaveStatus.PENDING

    @property
    def last_saved(self) -> datetime | None:
        return self._state.last_saved

    @property
    def last_error(self) -> str | None:
        return self._state.last_error

    @property
    def delay(self) -> float:
        return self._delay

    def add_error_listener(self, listener: ErrorListener) -> None:
        """Register a callback for writes that fail after the timer fires."""
        self._error_listeners.append(listener)

    def notify_edit(self) -> None:
        """Restart the debounce for a content change.

        Raises:
            RuntimeError: If no event loop is running; the state is left unchanged.

        """
        self._loop = asyncio.get_running_loop()
        self._apply(edit_received(self._state, self._delay))

    def flush(self) -> None:
        """Write pending content immediately.

        Raises:
            PersistenceError: If the store rejects the write.

        """
        self._cancel_timer()
        error = self._apply(flush_requested(self._state))
        if error is not None:
            raise error

    def cancel(self) -> None:
        """Drop the outstanding timer without writing."""
        self._cancel_timer()

    def _apply(self, transition: Transition) -> PersistenceError | None:
        self._state = transition.state
        error: PersistenceError | None = None
        for command in transition.commands:
            match command:
                case RestartTimer():
                    self._restart_timer(command)
                case WriteDocument():
                    error = self._write(command.generation)
        return error

    def _restart_timer(self, command: RestartTimer) -> None:
        self._cancel_timer()
        self._handle = self._loop.call_later(command.delay, self._on_timer, command.generation)

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_timer(self, generation: int) -> None:
        self._handle = None
        error = self._apply(timer_fired(self._state, generation))
        if error is None:
            return
        for listener in self._error_listeners:
            listener(error)

    def _write(self, generation: int) -> PersistenceError | None:
        content, title = self._read_document()
        try:
            self._store.save(content, title)
        except PersistenceError as exc:
            logger.error("Autosave failed: %s", exc)
            self._state = write_failed(self._state, generation, str(exc)).state
            return exc
        self._state = write_succeeded(self._state, generation, self._clock()).state
        logger.debug("Autosaved document %r", title)
        return None
