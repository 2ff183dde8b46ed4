import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from docylit.assist.client import AssistanceResult
from docylit.assist.session import AssistanceSession
from docylit.constants import (
    GENERATION_ERROR_MESSAGE,
    SESSION_ERROR_MESSAGE,
    AssistMode,
    SaveStatus,
    SessionStatus,
)


@pytest.fixture
def client():
    mock = MagicMock()
    mock.generate_result = AsyncMock(return_value=AssistanceResult("Draft text."))
    return mock


@pytest.fixture
def session(editor, client):
    return AssistanceSession(editor, client)


@pytest.mark.asyncio
async def test_submit_uses_selection_as_context(session, client, surface):
    surface.set_markup("<p>Some draft text here</p>")
    surface.select("draft text")

    status = await session.submit(AssistMode.FIX)

    assert status is SessionStatus.RESPONDED
    assert session.result == "Draft text."
    request = client.generate_result.await_args.args[0]
    assert request.context == "draft text"
    assert request.mode is AssistMode.FIX


@pytest.mark.asyncio
async def test_submit_falls_back_to_full_text(session, client, surface):
    surface.set_markup("<p>First</p><p>Second</p>")
    await session.submit(AssistMode.SUMMARIZE)
    assert client.generate_result.await_args.args[0].context == "First\nSecond"


@pytest.mark.asyncio
async def test_empty_continue_is_rejected(session, client):
    assert await session.submit() is SessionStatus.IDLE
    client.generate_result.assert_not_called()


@pytest.mark.asyncio
async def test_custom_prompt_is_sent(session, client):
    session.set_prompt("Write a haiku")
    await session.submit(AssistMode.CUSTOM)
    assert client.generate_result.await_args.args[0].prompt == "Write a haiku"


@pytest.mark.asyncio
async def test_client_apology_becomes_error_state(session, client):
    client.generate_result.return_value = AssistanceResult(GENERATION_ERROR_MESSAGE, error=True)
    assert await session.submit(AssistMode.TONE) is SessionStatus.ERRORED
    assert session.result == GENERATION_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_unexpected_client_fault_becomes_error_state(session, client):
    client.generate_result.side_effect = RuntimeError("boom")
    assert await session.submit(AssistMode.TONE) is SessionStatus.ERRORED
    assert session.result == SESSION_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_insert_mutates_document_and_schedules_save(session, editor, surface):
    await session.submit(AssistMode.FIX)

    assert session.insert() is True

    assert session.status is SessionStatus.IDLE
    assert session.result is None
    assert surface.get_plain_text() == "Draft text."
    assert editor.save_status is SaveStatus.PENDING
    editor.autosave.cancel()


def test_insert_without_result_does_nothing(session, surface):
    markup = surface.get_markup()
    assert session.insert() is False
    assert surface.get_markup() == markup


@pytest.mark.asyncio
async def test_discard_leaves_document_untouched(session, editor, surface):
    markup = surface.get_markup()
    await session.submit(AssistMode.FIX)

    session.discard()

    assert session.status is SessionStatus.IDLE
    assert surface.get_markup() == markup
    assert editor.save_status is SaveStatus.CLEAN


@pytest.mark.asyncio
async def test_close_while_loading_swallows_result(session, client):
    release = asyncio.Event()

    async def slow_result(request):
        await release.wait()
        return AssistanceResult("late")

    client.generate_result.side_effect = slow_result
    session.open()
    task = asyncio.create_task(session.submit(AssistMode.FIX))
    await asyncio.sleep(0)
    assert session.status is SessionStatus.LOADING

    session.close()
    release.set()
    await task

    assert session.status is SessionStatus.IDLE
    assert session.result is None
    assert not session.state.visible


@pytest.mark.asyncio
async def test_newer_submit_supersedes_older(session, client):
    first_release = asyncio.Event()

    async def results(request):
        if request.mode is AssistMode.FIX:
            await first_release.wait()
            return AssistanceResult("stale")
        return AssistanceResult("fresh")

    client.generate_result.side_effect = results
    first = asyncio.create_task(session.submit(AssistMode.FIX))
    await asyncio.sleep(0)

    await session.submit(AssistMode.SUMMARIZE)
    first_release.set()
    await first

    assert session.status is SessionStatus.RESPONDED
    assert session.result == "fresh"


@pytest.mark.asyncio
async def test_empty_result_leaves_document_untouched(session, client, editor, surface):
    client.generate_result.return_value = AssistanceResult("")
    markup = surface.get_markup()
    await session.submit(AssistMode.FIX)

    assert session.insert() is False

    assert surface.get_markup() == markup
    assert editor.save_status is SaveStatus.CLEAN
