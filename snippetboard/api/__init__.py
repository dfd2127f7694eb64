"""Client for the remote snippet collection."""

from .client import SnippetApiClient
from .result import ApiFailure, ApiResult

__all__ = ["ApiFailure", "ApiResult", "SnippetApiClient"]
