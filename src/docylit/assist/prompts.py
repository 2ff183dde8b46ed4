"""Instruction profiles and task payloads for the writing assistant."""

from __future__ import annotations

from typing import Final

from docylit.constants import AssistMode
from docylit.resources.prompts import PromptManager

ASSISTANT_PREAMBLE: Final[str] = "You are a helpful writing assistant integrated into a document editor. "

MODE_INSTRUCTIONS: Final[dict[AssistMode, str]] = {
    AssistMode.CONTINUE: (
        "Continue the text naturally based on the provided context. Keep formatting simple (HTML/Markdown)."
    ),
    AssistMode.SUMMARIZE: "Provide a concise summary of the provided text.",
    AssistMode.FIX: "Fix grammar and spelling errors in the provided text without changing the meaning.",
    AssistMode.TONE: "Rewrite the text to be more professional and concise.",
    AssistMode.CUSTOM: "Follow the user's specific instructions for the provided text.",
}

# Used as the task when the user typed nothing
DEFAULT_PROMPTS: Final[dict[AssistMode, str]] = {
    AssistMode.CONTINUE: "Continue writing naturally based on the context.",
    AssistMode.SUMMARIZE: "Summarize this text concisely.",
    AssistMode.FIX: "Fix grammar, spelling, and punctuation errors.",
    AssistMode.TONE: "Rewrite this to sound more professional and concise.",
    AssistMode.CUSTOM: "Help me write.",
}

STREAM_SYSTEM_INSTRUCTION: Final[str] = (
    "You are an intelligent writing assistant. Return raw text or simple HTML suitable for a contentEditable div."
)

TASK_TEMPLATE = "assist_task.jinja"
STREAM_TASK_TEMPLATE = "stream_task.jinja"


def system_instruction_for(mode: AssistMode | str) -> str:
    return ASSISTANT_PREAMBLE + MODE_INSTRUCTIONS[AssistMode(mode)]


def default_prompt_for(mode: AssistMode | str) -> str:
    return DEFAULT_PROMPTS[AssistMode(mode)]


def render_task(prompts: PromptManager, *, context: str, prompt: str) -> str:
    return prompts.render(TASK_TEMPLATE, context=context, prompt=prompt)


def render_stream_task(prompts: PromptManager, *, context: str, prompt: str) -> str:
    return prompts.render(STREAM_TASK_TEMPLATE, context=context, prompt=prompt)
