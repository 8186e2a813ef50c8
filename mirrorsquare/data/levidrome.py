"""Restrict a dictionary to entries whose reversal is also an entry."""

from __future__ import annotations

from ..core.models import SymbolSequence
from ..utils.logger import get_logger
from .dictionary import Dictionary

LOGGER = get_logger(__name__)


def is_levidrome(dictionary: Dictionary, entry: SymbolSequence) -> bool:
    """True when ``entry`` has more than one symbol and its reversal is a member.

    Palindromes qualify since their reversal is themselves.
    """
    if len(entry) <= 1:
        return False
    return dictionary.contains(entry.symbols[::-1])


def filter_levidromes(dictionary: Dictionary) -> Dictionary:
    """Return a new dictionary holding only the levidromes of ``dictionary``."""
    kept = [entry for entry in dictionary if is_levidrome(dictionary, entry)]
    LOGGER.info("Levidrome filter kept %d of %d entries", len(kept), len(dictionary))
    return Dictionary(kept)
