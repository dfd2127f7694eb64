"""Async HTTP client for the remote snippet collection."""

from __future__ import annotations

import logging
from typing import Any, List, TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config import ClientSettings
from ..snippet import Snippet, SnippetDraft
from .result import ApiFailure, ApiResult

logger = logging.getLogger("snippetboard")

T = TypeVar("T")

_SNIPPET = TypeAdapter(Snippet)
_SNIPPET_LIST = TypeAdapter(List[Snippet])


class SnippetApiClient:
    """Talk to a snippet collection exposed as a single REST resource.

    Every call returns an :class:`ApiResult`; HTTP and transport errors are
    reported as failures instead of being raised.
    """

    def __init__(
        self,
        collection_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.collection_url = collection_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "SnippetApiClient":
        return cls(settings.api_url, timeout=settings.request_timeout, transport=transport)

    async def __aenter__(self) -> "SnippetApiClient":
        return self

    async def __aexit__(self, exc_type, exc, traceback) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_snippets(self, language: str | None = None) -> ApiResult[List[Snippet]]:
        """Fetch the collection, scoped to ``language`` when one is given."""
        params = {"lang": language} if language else None
        result = await self._request("GET", self.collection_url, params=params)
        if result.failure is not None:
            return ApiResult.failed(result.failure)
        return self._parse(result.value, _SNIPPET_LIST)

    async def create_snippet(self, draft: SnippetDraft) -> ApiResult[Snippet]:
        result = await self._request("POST", self.collection_url, json=draft.to_payload())
        if result.failure is not None:
            return ApiResult.failed(result.failure)
        return self._parse(result.value, _SNIPPET)

    async def update_snippet(self, snippet_id: str, draft: SnippetDraft) -> ApiResult[Snippet]:
        result = await self._request("PUT", self._item_url(snippet_id), json=draft.to_payload())
        if result.failure is not None:
            return ApiResult.failed(result.failure)
        return self._parse(result.value, _SNIPPET)

    async def delete_snippet(self, snippet_id: str) -> ApiResult[None]:
        result = await self._request("DELETE", self._item_url(snippet_id))
        if result.failure is not None:
            return ApiResult.failed(result.failure)
        return ApiResult.success(None)

    def _item_url(self, snippet_id: str) -> str:
        return f"{self.collection_url}/{quote(str(snippet_id), safe='')}"

    async def _request(self, method: str, url: str, **kwargs: Any) -> ApiResult[httpx.Response]:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning("%s %s failed with status %d", method, url, status_code)
            return ApiResult.failed(
                ApiFailure(message=_error_message(exc.response), status_code=status_code)
            )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.warning("%s %s failed: %s", method, url, exc.__class__.__name__)
            return ApiResult.failed(ApiFailure())

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return ApiResult.success(response)

    @staticmethod
    def _parse(response: httpx.Response, adapter: TypeAdapter[T]) -> ApiResult[T]:
        try:
            return ApiResult.success(adapter.validate_python(response.json()))
        except (ValueError, ValidationError) as exc:
            logger.warning(
                "Unexpected response body from %s: %s",
                response.request.url,
                exc.__class__.__name__,
            )
            return ApiResult.failed(ApiFailure(status_code=response.status_code))


def _error_message(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    if isinstance(message, str) and message.strip():
        return message
    return None


__all__ = ["SnippetApiClient"]
