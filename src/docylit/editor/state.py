"""Document data and pure autosave transitions.

Transitions never touch the store or the event loop. Each returns the next
state together with the commands the runtime must carry out, which keeps the
debounce rules testable without timers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import NamedTuple

from docylit.constants import DEFAULT_TITLE, EMPTY_DOCUMENT_MARKUP, SaveStatus


@dataclass(frozen=True, slots=True)
class DocumentState:
    """Snapshot of the document as the user sees it."""

    title: str = DEFAULT_TITLE
    content: str = EMPTY_DOCUMENT_MARKUP
    last_saved: datetime | None = None


@dataclass(frozen=True, slots=True)
class AutosaveState:
    """Debounce bookkeeping.

    ``generation`` increases with every edit; only a timer carrying the
    current generation may trigger a write.
    """

    status: SaveStatus = SaveStatus.CLEAN
    generation: int = 0
    last_saved: datetime | None = None
    last_error: str | None = None


@dataclass(frozen=True, slots=True)
class RestartTimer:
    generation: int
    delay: float


@dataclass(frozen=True, slots=True)
class WriteDocument:
    generation: int


AutosaveCommand = RestartTimer | WriteDocument


class Transition(NamedTuple):
    state: AutosaveState
    commands: tuple[AutosaveCommand, ...] = ()


def edit_received(state: AutosaveState, delay: float) -> Transition:
    """Any edit or formatting event: go pending and restart the debounce."""
    generation = state.generation + 1
    return Transition(
        replace(state, status=SaveStatus.PENDING, generation=generation),
        (RestartTimer(generation=generation, delay=delay),),
    )


def timer_fired(state: AutosaveState, generation: int) -> Transition:
    if generation != state.generation or state.status is not SaveStatus.PENDING:
        return Transition(state)
    return Transition(state, (WriteDocument(generation=generation),))


def flush_requested(state: AutosaveState) -> Transition:
    """Write now instead of waiting for the timer, if anything is pending."""
    if state.status is not SaveStatus.PENDING:
        return Transition(state)
    return Transition(state, (WriteDocument(generation=state.generation),))


def write_succeeded(state: AutosaveState, generation: int, saved_at: datetime) -> Transition:
    status = SaveStatus.CLEAN if generation == state.generation else state.status
    return Transition(replace(state, status=status, last_saved=saved_at, last_error=None))


def write_failed(state: AutosaveState, generation: int, error: str) -> Transition:
    status = SaveStatus.CLEAN if generation == state.generation else state.status
    return Transition(replace(state, status=status, last_error=error))
