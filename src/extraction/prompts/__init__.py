"""Prompt templates for screenshot extraction."""

from .system_prompt import SYSTEM_PROMPT, get_system_prompt
from .query import DEFAULT_QUERY, build_extraction_query

__all__ = [
    "SYSTEM_PROMPT",
    "get_system_prompt",
    "DEFAULT_QUERY",
    "build_extraction_query",
]
