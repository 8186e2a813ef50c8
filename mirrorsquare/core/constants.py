"""Shared constants and enumerations for the mirror square finder."""

from __future__ import annotations

from enum import Enum


class MirrorState(str, Enum):
    """Classification of a partial grid of rows."""

    INVALID = "INVALID"
    PARTIAL = "PARTIAL"
    COMPLETE = "COMPLETE"


class Symmetry(str, Enum):
    """Symmetry rules a square must satisfy."""

    TRANSPOSE = "transpose"
    # transpose plus row i == reverse(row N-1-i)
    LEVIDROME = "levidrome"


class SourceFormat(str, Enum):
    """Supported line-oriented dictionary formats."""

    WORDS = "words"
    PHONEMES = "phonemes"


class Engine(str, Enum):
    """Search backends."""

    BACKTRACK = "backtrack"
    CPSAT = "cpsat"


COMMENT_PREFIXES = ("#", ";;;")
DEFAULT_DICTIONARY_PATH = "levidromes.txt"
DEFAULT_SIZE = 5
