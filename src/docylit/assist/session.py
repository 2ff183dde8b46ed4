"""Runs the assistance state machine against a document editor and a client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docylit.assist import state as session_state
from docylit.assist.state import DispatchRequest, InsertText, SessionState, Transition
from docylit.constants import AssistMode, SessionStatus

if TYPE_CHECKING:
    from docylit.assist.client import AssistanceClient
    from docylit.editor.document import DocumentEditor

logger = logging.getLogger(__name__)


class AssistanceSession:
    """One user-facing AI interaction at a time, bound to one editor.

    Results are held for review and only reach the document through
    :meth:`insert`, which counts as an edit and restarts autosave.
    """

    def __init__(self, editor: DocumentEditor, client: AssistanceClient) -> None:
        self.editor = editor
        self.client = client
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def result(self) -> str | None:
        return self._state.result

    @property
    def prompt(self) -> str:
        return self._state.prompt

    def open(self) -> None:
        self._state = session_state.open_panel(self._state).state

    def close(self) -> None:
        self._state = session_state.close_panel(self._state).state

    def set_prompt(self, prompt: str) -> None:
        self._state = session_state.set_prompt(self._state, prompt).state

    async def submit(self, mode: AssistMode | str = AssistMode.CONTINUE) -> SessionStatus:
        """Ask the assistant about the selection, or the whole text if nothing is selected.

        Returns the status once this request settles. If a newer submit or a
        close superseded it, the status reflects that instead.
        """
        context = self.editor.context_text()
        await self._run(session_state.submit(self._state, AssistMode(mode), context))
        return self._state.status

    def insert(self) -> bool:
        """Insert the held result at the cursor. Returns False if there was nothing to insert."""
        transition = session_state.accept(self._state)
        if not transition.commands:
            return False
        self._apply(transition)
        return True

    def discard(self) -> None:
        self._state = session_state.discard(self._state).state

    def _apply(self, transition: Transition) -> list[DispatchRequest]:
        self._state = transition.state
        pending: list[DispatchRequest] = []
        for command in transition.commands:
            match command:
                case InsertText():
                    self.editor.insert_text(command.text)
                case DispatchRequest():
                    pending.append(command)
        return pending

    async def _run(self, transition: Transition) -> None:
        for command in self._apply(transition):
            await self._dispatch(command)

    async def _dispatch(self, command: DispatchRequest) -> None:
        logger.debug("Dispatching %s request (token %d)", command.request.mode.value, command.token)
        try:
            result = await self.client.generate_result(command.request)
        except Exception:
            logger.exception("Assistance request failed")
            self._state = session_state.request_failed(self._state, command.token).state
            return
        if result.error:
            self._state = session_state.request_failed(self._state, command.token, result.text).state
        else:
            self._state = session_state.response_received(self._state, command.token, result.text).state
        if command.token != self._state.token:
            logger.debug("Dropped stale response for token %d", command.token)
