"""AI writing assistance: Gemini client and the review-then-insert session."""

from docylit.assist.client import AssistanceClient, AssistanceRequest, AssistanceResult, StreamChunk
from docylit.assist.session import AssistanceSession
from docylit.assist.state import SessionState

__all__ = [
    "AssistanceClient",
    "AssistanceRequest",
    "AssistanceResult",
    "AssistanceSession",
    "SessionState",
    "StreamChunk",
]
