"""Editing core: surface contract, autosave, formatting and the document editor."""

from docylit.editor.autosave import AutosaveScheduler
from docylit.editor.document import DocumentEditor
from docylit.editor.formatting import FormattingDispatcher
from docylit.editor.html_surface import HtmlEditingSurface
from docylit.editor.state import AutosaveState, DocumentState
from docylit.editor.surface import EditingSurface

__all__ = [
    "AutosaveScheduler",
    "AutosaveState",
    "DocumentEditor",
    "DocumentState",
    "EditingSurface",
    "FormattingDispatcher",
    "HtmlEditingSurface",
]
