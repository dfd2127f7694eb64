"""Snippet records, drafts and language tables."""

from .model import (
    LANGUAGE_OPTIONS,
    QUICK_FILTERS,
    Snippet,
    SnippetDraft,
    language_choices,
    language_label,
)

__all__ = [
    "LANGUAGE_OPTIONS",
    "QUICK_FILTERS",
    "Snippet",
    "SnippetDraft",
    "language_choices",
    "language_label",
]
