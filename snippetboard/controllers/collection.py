"""Collection view controller: the single owner of the snippet list state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Protocol

from ..api import ApiResult
from ..clipboard import copy_text
from ..snippet import Snippet
from .forms import CreateFormController, EditFormController, SnippetWriter

logger = logging.getLogger("snippetboard")

DELETE_PROMPT = "Are you sure you want to delete this snippet?"
FETCH_ERROR_MESSAGE = "Error fetching snippets. Check the snippet API server status."
EMPTY_MESSAGE = "No snippets found for the selected language."

ConfirmFn = Callable[[str], bool]
ClipboardFn = Callable[[str], bool]

NOTICE_SUCCESS = "success"
NOTICE_ERROR = "error"


class SnippetCollectionClient(SnippetWriter, Protocol):
    async def list_snippets(self, language: str | None = None) -> ApiResult[List[Snippet]]: ...

    async def delete_snippet(self, snippet_id: str) -> ApiResult[None]: ...


@dataclass(frozen=True, slots=True)
class Notice:
    """One-shot message for the user (the outcome of a delete or a copy)."""

    level: str
    message: str


@dataclass(slots=True)
class CollectionState:
    snippets: List[Snippet] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    filter_language: str = ""
    editing_id: str | None = None
    notice: Notice | None = None
    loaded: bool = False


def normalize_filter(language: str | None) -> str:
    """``None``, blank and ``"all"`` all mean an unscoped list."""
    value = (language or "").strip()
    return "" if value.lower() == "all" else value


def _unique_by_id(snippets: Iterable[Snippet]) -> List[Snippet]:
    seen: set[str] = set()
    unique: List[Snippet] = []
    for snippet in snippets:
        if snippet.id in seen:
            continue
        seen.add(snippet.id)
        unique.append(snippet)
    return unique


def _decline(_prompt: str) -> bool:
    logger.debug("No confirmation handler configured; declining")
    return False


class CollectionController:
    """Keep a local snippet list consistent with the remote collection.

    Reads replace the whole list. Creates and updates are merged from the
    record the server returned, without re-fetching, so the list is only as
    fresh as the last fetch plus this client's own writes. Deletes wait for the
    server before touching the list.
    """

    def __init__(
        self,
        client: SnippetCollectionClient,
        *,
        state: CollectionState | None = None,
        confirm: ConfirmFn = _decline,
        clipboard: ClipboardFn = copy_text,
        notify: Callable[[Notice], None] | None = None,
    ) -> None:
        self.client = client
        self.state = state if state is not None else CollectionState()
        self.confirm = confirm
        self.clipboard = clipboard
        self.notify = notify
        self.create_form = CreateFormController(client, on_created=self.on_created)
        self.edit_form: EditFormController | None = None
        self._fetch_token = 0

    @property
    def snippets(self) -> List[Snippet]:
        return self.state.snippets

    def find(self, snippet_id: str) -> Snippet | None:
        return next((s for s in self.state.snippets if s.id == snippet_id), None)

    async def load(self) -> bool:
        """Fetch the list for the current filter."""
        return await self._fetch()

    async def set_filter(self, language: str | None) -> bool:
        """Switch the language filter and fetch the matching list.

        Returns whether a fetch ran and its result was applied.
        """
        value = normalize_filter(language)
        if value == self.state.filter_language:
            return False
        self.state.filter_language = value
        return await self._fetch()

    async def _fetch(self) -> bool:
        self._fetch_token += 1
        token = self._fetch_token
        language = self.state.filter_language

        self.state.loading = True
        self.state.error = None
        self._clear_edit_target()

        try:
            result = await self.client.list_snippets(language or None)
        except Exception:
            if token == self._fetch_token:
                self.state.loading = False
                self.state.error = FETCH_ERROR_MESSAGE
            raise

        if token != self._fetch_token:
            logger.debug("Discarding stale snippet list for filter %r", language or "all")
            return False

        self.state.loading = False
        if result.failure is not None:
            logger.warning(
                "Failed to fetch snippets for filter %r: %s",
                language or "all",
                result.failure.describe("no details"),
            )
            self.state.error = FETCH_ERROR_MESSAGE
            return False

        self.state.snippets = _unique_by_id(result.value or [])
        self.state.loaded = True
        logger.info("Loaded %d snippets for filter %r", len(self.state.snippets), language or "all")
        return True

    def on_created(self, record: Snippet) -> None:
        remaining = [s for s in self.state.snippets if s.id != record.id]
        self.state.snippets = [record, *remaining]

    def on_updated(self, record: Snippet) -> None:
        for index, snippet in enumerate(self.state.snippets):
            if snippet.id == record.id:
                snippets = list(self.state.snippets)
                snippets[index] = record
                self.state.snippets = snippets
                self._clear_edit_target()
                return
        logger.debug("Updated snippet %s is no longer listed; ignoring", record.id)

    async def delete(self, snippet_id: str, *, confirm: ConfirmFn | None = None) -> bool:
        """Delete after confirmation. The list changes only once the server agrees."""
        ask = confirm or self.confirm
        if not ask(DELETE_PROMPT):
            return False

        result = await self.client.delete_snippet(snippet_id)
        if result.failure is not None:
            logger.warning("Failed to delete snippet %s", snippet_id)
            self._post_notice(NOTICE_ERROR, result.failure.describe("Failed to delete snippet."))
            return False

        self.state.snippets = [s for s in self.state.snippets if s.id != snippet_id]
        if self.state.editing_id == snippet_id:
            self._clear_edit_target()
        self._post_notice(NOTICE_SUCCESS, "Snippet deleted successfully!")
        return True

    def set_edit_target(self, snippet_id: str | None) -> EditFormController | None:
        if snippet_id is None:
            self._clear_edit_target()
            return None

        snippet = self.find(snippet_id)
        if snippet is None:
            raise KeyError(f"Unknown snippet id: {snippet_id}")

        self.state.editing_id = snippet.id
        self.edit_form = EditFormController(
            self.client,
            snippet,
            on_updated=self.on_updated,
            on_cancel=self._clear_edit_target,
        )
        return self.edit_form

    def copy(self, snippet_id: str) -> bool:
        """Copy a snippet's code to the system clipboard."""
        snippet = self.find(snippet_id)
        if snippet is None:
            raise KeyError(f"Unknown snippet id: {snippet_id}")

        if self.clipboard(snippet.code):
            self._post_notice(NOTICE_SUCCESS, f"Copied '{snippet.title}'!")
            return True
        self._post_notice(
            NOTICE_ERROR, "Failed to copy code to clipboard. Check clipboard access."
        )
        return False

    def pop_notice(self) -> Notice | None:
        notice, self.state.notice = self.state.notice, None
        return notice

    def _clear_edit_target(self) -> None:
        self.state.editing_id = None
        self.edit_form = None

    def _post_notice(self, level: str, message: str) -> None:
        notice = Notice(level=level, message=message)
        self.state.notice = notice
        if self.notify is not None:
            self.notify(notice)


__all__ = [
    "CollectionController",
    "CollectionState",
    "DELETE_PROMPT",
    "EMPTY_MESSAGE",
    "FETCH_ERROR_MESSAGE",
    "Notice",
    "normalize_filter",
]
