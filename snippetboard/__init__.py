"""Client for a remote code snippet collection: controllers, web UI and CLI."""

from .api import ApiFailure, ApiResult, SnippetApiClient
from .config import ClientSettings
from .controllers import (
    CollectionController,
    CollectionState,
    CreateFormController,
    EditFormController,
    Notice,
)
from .snippet import Snippet, SnippetDraft

__all__ = [
    "ApiFailure",
    "ApiResult",
    "ClientSettings",
    "CollectionController",
    "CollectionState",
    "CreateFormController",
    "EditFormController",
    "Notice",
    "Snippet",
    "SnippetApiClient",
    "SnippetDraft",
]
