"""Pure transitions for a single assistance interaction.

``token`` identifies the most recent request. Every submit and every close
bumps it, so a response carrying an older token is dropped instead of
overwriting whatever the user is looking at now.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NamedTuple

from docylit.assist.client import AssistanceRequest
from docylit.constants import SESSION_ERROR_MESSAGE, AssistMode, SessionStatus


@dataclass(frozen=True, slots=True)
class SessionState:
    status: SessionStatus = SessionStatus.IDLE
    prompt: str = ""
    result: str | None = None
    mode: AssistMode | None = None
    token: int = 0
    visible: bool = False

    @property
    def is_loading(self) -> bool:
        return self.status is SessionStatus.LOADING


@dataclass(frozen=True, slots=True)
class DispatchRequest:
    request: AssistanceRequest
    token: int


@dataclass(frozen=True, slots=True)
class InsertText:
    text: str


SessionCommand = DispatchRequest | InsertText


class Transition(NamedTuple):
    state: SessionState
    commands: tuple[SessionCommand, ...] = ()


def set_prompt(state: SessionState, prompt: str) -> Transition:
    return Transition(replace(state, prompt=prompt))


def submit(state: SessionState, mode: AssistMode, context: str) -> Transition:
    """Start a request; an empty prompt in continue mode is rejected.

    Submitting while a request is loading supersedes it.
    """
    request = AssistanceRequest(prompt=state.prompt, context=context, mode=mode)
    if request.is_noop:
        return Transition(state)
    token = state.token + 1
    return Transition(
        replace(state, status=SessionStatus.LOADING, result=None, mode=request.mode, token=token, visible=True),
        (DispatchRequest(request=request, token=token),),
    )


def response_received(state: SessionState, token: int, text: str) -> Transition:
    if token != state.token or not state.is_loading:
        return Transition(state)
    return Transition(replace(state, status=SessionStatus.RESPONDED, result=text))


def request_failed(state: SessionState, token: int, message: str = SESSION_ERROR_MESSAGE) -> Transition:
    if token != state.token or not state.is_loading:
        return Transition(state)
    return Transition(replace(state, status=SessionStatus.ERRORED, result=message))


def accept(state: SessionState) -> Transition:
    """Insert the held result, clear the prompt and close the panel.

    An empty result is not inserted.
    """
    if state.status is not SessionStatus.RESPONDED or not state.result:
        return Transition(state)
    return Transition(
        replace(state, status=SessionStatus.IDLE, result=None, prompt="", mode=None, visible=False),
        (InsertText(text=state.result),),
    )


def discard(state: SessionState) -> Transition:
    if state.status not in (SessionStatus.RESPONDED, SessionStatus.ERRORED):
        return Transition(state)
    return Transition(replace(state, status=SessionStatus.IDLE, result=None, mode=None))


def open_panel(state: SessionState) -> Transition:
    return Transition(replace(state, visible=True))


def close_panel(state: SessionState) -> Transition:
    """Hide the panel. An in-flight response is swallowed when it arrives."""
    token = state.token + 1 if state.is_loading else state.token
    return Transition(
        replace(state, status=SessionStatus.IDLE, result=None, mode=None, token=token, visible=False)
    )
