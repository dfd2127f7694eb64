"""Create and edit form controllers."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Protocol, Tuple

from ..api import ApiResult
from ..snippet import Snippet, SnippetDraft
from ..snippet.model import DRAFT_FIELDS

logger = logging.getLogger("snippetboard")

REQUIRED_FIELDS_MESSAGE = "Title, Language, and Code fields are required."

SnippetCallback = Callable[[Snippet], None]


class SnippetWriter(Protocol):
    async def create_snippet(self, draft: SnippetDraft) -> ApiResult[Snippet]: ...

    async def update_snippet(self, snippet_id: str, draft: SnippetDraft) -> ApiResult[Snippet]: ...


class SnippetFormController:
    """Draft state plus the validate/submit/report cycle shared by both forms."""

    failure_message = "Failed to save snippet. Check server connection."
    success_template = 'Snippet "{title}" saved successfully!'
    preview_placeholder = "// Start typing your code here..."

    def __init__(self, client: SnippetWriter, draft: SnippetDraft | None = None) -> None:
        self.client = client
        self.draft = draft or SnippetDraft()
        self.error: str | None = None
        self.success: str | None = None

    def update(self, **fields: str) -> None:
        """Change draft fields by name."""
        unknown = set(fields) - set(DRAFT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown snippet field(s): {', '.join(sorted(unknown))}")
        self.draft = self.draft.model_copy(update=fields)

    def preview(self) -> Tuple[str, str]:
        """Language and code to render in the live preview."""
        return self.draft.language or "text", self.draft.code or self.preview_placeholder

    async def submit(self) -> Snippet | None:
        """Validate and send the draft once. Returns the server's record on success."""
        self.error = None
        self.success = None

        missing = self.draft.missing_fields()
        if missing:
            logger.debug("Rejected snippet submission, missing %s", ", ".join(missing))
            self.error = REQUIRED_FIELDS_MESSAGE
            return None

        result = await self._send(self.draft)
        if result.failure is not None:
            self.error = result.failure.describe(self.failure_message)
            logger.warning("Snippet submission failed: %s", self.error)
            return None

        record = result.value
        self.success = self.success_template.format(title=record.title)
        self._on_saved(record)
        return record

    def _send(self, draft: SnippetDraft) -> Awaitable[ApiResult[Snippet]]:
        raise NotImplementedError

    def _on_saved(self, record: Snippet) -> None:
        raise NotImplementedError


class CreateFormController(SnippetFormController):
    failure_message = "Failed to create snippet. Check server connection."
    success_template = 'Snippet "{title}" created successfully!'

    def __init__(self, client: SnippetWriter, *, on_created: SnippetCallback | None = None) -> None:
        super().__init__(client)
        self.on_created = on_created

    def _send(self, draft: SnippetDraft) -> Awaitable[ApiResult[Snippet]]:
        return self.client.create_snippet(draft)

    def _on_saved(self, record: Snippet) -> None:
        self.draft = SnippetDraft()
        if self.on_created is not None:
            self.on_created(record)


class EditFormController(SnippetFormController):
    """Edits a copy of ``snippet``; the record itself is never touched."""

    failure_message = "Failed to update snippet. Check server connection."
    success_template = 'Snippet "{title}" updated successfully!'
    preview_placeholder = "// Paste your code here..."

    def __init__(
        self,
        client: SnippetWriter,
        snippet: Snippet,
        *,
        on_updated: SnippetCallback,
        on_cancel: Callable[[], None],
    ) -> None:
        super().__init__(client, snippet.to_draft())
        self.snippet = snippet
        self.on_updated = on_updated
        self.on_cancel = on_cancel

    @property
    def snippet_id(self) -> str:
        return self.snippet.id

    def cancel(self) -> None:
        self.draft = self.snippet.to_draft()
        self.error = None
        self.success = None
        self.on_cancel()

    def _send(self, draft: SnippetDraft) -> Awaitable[ApiResult[Snippet]]:
        return self.client.update_snippet(self.snippet.id, draft)

    def _on_saved(self, record: Snippet) -> None:
        self.on_updated(record)


__all__ = [
    "CreateFormController",
    "EditFormController",
    "REQUIRED_FIELDS_MESSAGE",
    "SnippetFormController",
]
