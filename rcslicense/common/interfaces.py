"""
Interfaces and protocols for dependency injection.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol


class IDocumentCodec(Protocol):
    """Protocol for turning license bytes into a mapping and back."""

    def decode(self, data: bytes) -> dict[str, Any]: ...

    def encode(self, fields: Mapping[str, Any]) -> bytes: ...


class IClock(Protocol):
    """Protocol for the source of the current UTC time."""

    def __call__(self) -> datetime: ...
