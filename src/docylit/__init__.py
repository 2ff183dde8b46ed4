"""Docylit: headless rich-text document editor core with AI writing assistance."""

from docylit.assist import AssistanceClient, AssistanceSession
from docylit.editor import DocumentEditor, HtmlEditingSurface
from docylit.stats import TextStats, compute_stats
from docylit.storage import DocumentStore

__version__ = "0.1.0"
__all__ = [
    "AssistanceClient",
    "AssistanceSession",
    "DocumentEditor",
    "DocumentStore",
    "HtmlEditingSurface",
    "TextStats",
    "compute_stats",
]
