"""Outcome types returned by the snippet API client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ApiFailure:
    """A failed request. ``message`` is the server's own wording, when it sent one."""

    message: str | None = None
    status_code: int | None = None

    def describe(self, fallback: str) -> str:
        return self.message or fallback


@dataclass(frozen=True, slots=True)
class ApiResult(Generic[T]):
    value: T | None = None
    failure: ApiFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, failure: ApiFailure) -> "ApiResult[T]":
        return cls(failure=failure)


__all__ = ["ApiFailure", "ApiResult"]
