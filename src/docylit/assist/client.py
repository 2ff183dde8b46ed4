"""Gemini-backed writing assistance: single-shot and streaming generation.

Backend failures never escape this module as exceptions. The single-shot
path reports them as an apology sentinel string, the streaming path as one
terminal error chunk. A missing credential is different: it is raised at
construction because no request could ever succeed without it.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from google import genai
from google.genai import types
from pydantic import BaseModel, ConfigDict
from tenacity import AsyncRetrying, stop_after_attempt

from docylit.assist.prompts import (
    STREAM_SYSTEM_INSTRUCTION,
    default_prompt_for,
    render_stream_task,
    render_task,
    system_instruction_for,
)
from docylit.config.settings import DEFAULT_MODEL, DEFAULT_RETRY_ATTEMPTS, DEFAULT_TEMPERATURE
from docylit.constants import (
    GENERATION_ERROR_MESSAGE,
    STREAM_ERROR_CHUNK,
    AssistMode,
    ChunkKind,
)
from docylit.llm.api_keys import get_google_api_key
from docylit.llm.retry import RETRY_IF, RETRY_WAIT
from docylit.resources.prompts import PromptManager

if TYPE_CHECKING:
    from tenacity.wait import WaitBaseT

    from docylit.config import DocylitConfig

logger = logging.getLogger(__name__)


class AssistanceRequest(BaseModel):
    """What the user asked for, and about which text."""

    model_config = ConfigDict(frozen=True)

    prompt: str = ""
    context: str = ""
    mode: AssistMode = AssistMode.CONTINUE

    @property
    def is_noop(self) -> bool:
        """Continuing with no instruction is not a request at all."""
        return self.mode is AssistMode.CONTINUE and not self.prompt

    def resolved_prompt(self) -> str:
        return self.prompt or default_prompt_for(self.mode)


@dataclass(frozen=True, slots=True)
class AssistanceResult:
    """Generated text, or the apology sentinel when ``error`` is set."""

    text: str
    error: bool = False


@dataclass(frozen=True, slots=True)
class StreamChunk:
    """One item of a streaming generation.

    TEXT chunks arrive in backend order and are followed by exactly one
    terminal chunk: END on success, ERROR (carrying the sentinel) on failure.
    """

    text: str
    kind: ChunkKind = ChunkKind.TEXT

    @property
    def is_terminal(self) -> bool:
        return self.kind is not ChunkKind.TEXT


class AssistanceClient:
    """Issues generation requests against the Gemini API.

    Args:
        api_key: Gemini API key. If None, read from GOOGLE_API_KEY / GEMINI_API_KEY.
        client: Pre-built ``genai.Client``; skips credential lookup.
        model: Gemini model id.
        temperature: Sampling temperature for single-shot requests.
        retry_attempts: Total attempts on transient backend errors (single-shot only).
        prompts: Template manager for task payloads.
        retry_wait: tenacity wait strategy between attempts.

    Raises:
        ApiKeyNotFoundError: If no client is given and no key can be found.

    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        client: genai.Client | None = None,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        prompts: PromptManager | None = None,
        retry_wait: WaitBaseT = RETRY_WAIT,
    ) -> None:
        if client is None:
            client = genai.Client(api_key=api_key or get_google_api_key())
        self.client = client
        self.model = model
        self.temperature = temperature
        self.retry_attempts = max(int(retry_attempts), 1)
        self.prompts = prompts or PromptManager()
        self._retry_wait = retry_wait

    @classmethod
    def from_config(cls, config: DocylitConfig, *, client: genai.Client | None = None) -> AssistanceClient:
        settings = config.assist
        return cls(
            client=client,
            model=settings.model,
            temperature=settings.temperature,
            retry_attempts=settings.retry_attempts,
            prompts=PromptManager(settings.prompts_dir),
        )

    # -- single-shot -----------------------------------------------------

    async def generate(self, request: AssistanceRequest) -> str:
        """Return generated text, or the apology sentinel on backend failure."""
        result = await self.generate_result(request)
        return result.text

    async def generate_result(self, request: AssistanceRequest) -> AssistanceResult:
        if request.is_noop:
            logger.debug("Skipping empty continue request")
            return AssistanceResult(text="")

        contents = render_task(self.prompts, context=request.context, prompt=request.resolved_prompt())
        config = types.GenerateContentConfig(
            system_instruction=system_instruction_for(request.mode),
            temperature=self.temperature,
        )
        try:
            response = await self._generate_with_retries(contents=contents, config=config)
            text = response.text or ""
        except Exception as exc:  # noqa: BLE001
            logger.error("Gemini API error (%s mode): %s", request.mode.value, exc)
            return AssistanceResult(text=GENERATION_ERROR_MESSAGE, error=True)
        return AssistanceResult(text=text)

    async def _generate_with_retries(self, **kwargs: Any) -> types.GenerateContentResponse:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=self._retry_wait,
            retry=RETRY_IF,
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info(
                        "Retrying Gemini request, attempt %d/%d",
                        attempt.retry_state.attempt_number,
                        self.retry_attempts,
                    )
                return await self.client.aio.models.generate_content(model=self.model, **kwargs)

    # -- streaming -------------------------------------------------------

    async def stream(self, prompt: str, context: str) -> AsyncIterator[StreamChunk]:
        """Yield text chunks in arrival order, then one terminal chunk."""
        contents = render_stream_task(self.prompts, context=context, prompt=prompt)
        config = types.GenerateContentConfig(system_instruction=STREAM_SYSTEM_INSTRUCTION)
        try:
            response_stream = await self.client.aio.models.generate_content_stream(
                model=self.model,
                contents=contents,
                config=config,
            )
            async for chunk in response_stream:
                if chunk.text:
                    yield StreamChunk(text=chunk.text)
        except Exception as exc:  # noqa: BLE001
            logger.error("Gemini stream error: %s", exc)
            yield StreamChunk(text=STREAM_ERROR_CHUNK, kind=ChunkKind.ERROR)
            return
        yield StreamChunk(text="", kind=ChunkKind.END)

    async def generate_stream(self, prompt: str, context: str, on_chunk: Callable[[str], None]) -> None:
        """Callback form of :meth:`stream`: ``on_chunk`` sees every text chunk, then the error sentinel if any."""
        async for chunk in self.stream(prompt, context):
            if chunk.kind is ChunkKind.END:
                break
            on_chunk(chunk.text)
