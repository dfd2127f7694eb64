from __future__ import annotations

from typing import Any, Dict, List, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

REQUIRED_FIELDS = ("title", "language", "code")
DRAFT_FIELDS = ("title", "language", "code", "description")

# Languages offered by the create and edit forms.
LANGUAGE_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("javascript", "JavaScript"),
    ("python", "Python"),
    ("java", "Java"),
    ("csharp", "C#"),
)

# Quick filter buttons shown next to "All". Display only: a snippet may carry
# any language, listed here or not.
QUICK_FILTERS: Tuple[Tuple[str, str], ...] = (
    ("python", "Python"),
    ("javascript", "JavaScript"),
)


def language_label(language: str) -> str:
    """Return the display label for a language value."""
    labels = dict(LANGUAGE_OPTIONS + QUICK_FILTERS)
    return labels.get(language, language)


def language_choices(current: str | None = None) -> List[Tuple[str, str]]:
    """Form options, keeping ``current`` selectable when it is not a stock option."""
    choices = list(LANGUAGE_OPTIONS)
    if current and current not in dict(choices):
        choices.append((current, current))
    return choices


class SnippetDraft(BaseModel):
    """Editable snippet fields held by a create or edit form."""

    title: str = ""
    language: str = ""
    code: str = ""
    description: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", "language", "code", "description", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def missing_fields(self) -> List[str]:
        """Names of required fields that are empty or whitespace only."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name).strip()]

    def to_payload(self) -> Dict[str, str]:
        return self.model_dump(include=set(DRAFT_FIELDS))


class Snippet(SnippetDraft):
    """A snippet record as stored by the remote collection.

    The server may name the identifier ``_id`` or ``id``. Fields the client does
    not know about are kept on the record untouched.
    """

    id: str = Field(validation_alias=AliasChoices("_id", "id"))

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_draft(self) -> SnippetDraft:
        return SnippetDraft(
            title=self.title,
            language=self.language,
            code=self.code,
            description=self.description,
        )


__all__ = [
    "DRAFT_FIELDS",
    "LANGUAGE_OPTIONS",
    "QUICK_FILTERS",
    "REQUIRED_FIELDS",
    "Snippet",
    "SnippetDraft",
    "language_choices",
    "language_label",
]
