"""Word and character statistics for the visible document text."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Browser whitespace class: includes U+FEFF, excludes the U+001C..U+001F separators and U+0085
_WHITESPACE = re.compile(r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+")


@dataclass(frozen=True, slots=True)
class TextStats:
    """Counts shown in the status bar."""

    words: int = 0
    characters: int = 0


def compute_stats(text: str) -> TextStats:
    """Count words and characters in ``text``.

    Characters include whitespace. Words are maximal runs of non-whitespace,
    so a text that is empty after trimming has zero words.
    """
    words = [run for run in _WHITESPACE.split(text) if run]
    return TextStats(words=len(words), characters=len(text))
