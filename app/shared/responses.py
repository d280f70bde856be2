"""Standard JSON response envelope."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Every successful payload is wrapped as {code, message, data, detail}."""

    code: int = 0
    message: str = "success"
    data: T | None = None
    detail: str | None = None


def ok(data: T | None = None, message: str = "success") -> Envelope[T]:
    """Wrap data into a success envelope."""
    return Envelope(data=data, message=message)
