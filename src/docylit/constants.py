"""Central location for all constants used throughout the editor core.

This module provides type-safe constants using enums to replace magic strings
scattered across the editor, storage and assistance layers.
"""

from enum import Enum


class AssistMode(str, Enum):
    """Writing-assistance intents understood by the AI backend."""

    CONTINUE = "continue"
    SUMMARIZE = "summarize"
    FIX = "fix"
    TONE = "tone"
    CUSTOM = "custom"


class FormatCommand(str, Enum):
    """Formatting commands exposed by the toolbar."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    JUSTIFY_LEFT = "justifyLeft"
    JUSTIFY_CENTER = "justifyCenter"
    JUSTIFY_RIGHT = "justifyRight"
    INSERT_ORDERED_LIST = "insertOrderedList"
    INSERT_UNORDERED_LIST = "insertUnorderedList"
    UNDO = "undo"
    REDO = "redo"


class SaveStatus(str, Enum):
    """Autosave states observable by the presentation layer."""

    CLEAN = "clean"
    PENDING = "pending"


class SessionStatus(str, Enum):
    """Lifecycle of a single assistance interaction."""

    IDLE = "idle"
    LOADING = "loading"
    RESPONDED = "responded"
    ERRORED = "errored"


class ChunkKind(str, Enum):
    """Kinds of items produced by a streaming generation."""

    TEXT = "text"
    END = "end"
    ERROR = "error"


# Durable store keys
CONTENT_KEY = "docylit-content"
TITLE_KEY = "docylit-title"

DEFAULT_TITLE = "Untitled document"
EMPTY_DOCUMENT_MARKUP = "<p><br></p>"

DEFAULT_AUTOSAVE_DELAY = 1.0  # seconds

SAVING_LABEL = "Saving..."
SAVED_LABEL = "Saved to local storage"
SAVE_FAILED_LABEL = "Not saved"

# User-facing failure sentinels
GENERATION_ERROR_MESSAGE = "Sorry, I encountered an error while processing your request."
STREAM_ERROR_CHUNK = "[Error: Failed to generate content]"
SESSION_ERROR_MESSAGE = "Error generating content. Please try again."
