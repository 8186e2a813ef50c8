"""Custom exception hierarchy for mirror square search."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import ResultSet


class MirrorSquareError(Exception):
    """Base exception for finder failures."""


class DictionaryLoadError(MirrorSquareError):
    """Raised when a dictionary source cannot be read."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class SearchCancelledError(MirrorSquareError):
    """Raised when a search is cancelled or runs past its deadline."""

    def __init__(self, message: str, partial: "ResultSet") -> None:
        super().__init__(message)
        self.partial = partial


class ValidationError(MirrorSquareError):
    """Raised when a produced square breaks the mirror invariants."""
