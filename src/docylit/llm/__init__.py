"""Gemini backend helpers: credentials and retry policy."""

from docylit.llm.api_keys import get_google_api_key

__all__ = ["get_google_api_key"]
