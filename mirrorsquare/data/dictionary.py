"""Immutable symbol-sequence dictionary and candidate retrieval."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from ..core.models import Symbol, SymbolSequence
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

Entry = Tuple[str, Sequence[Symbol]]


class Dictionary:
    """Write-once collection of :class:`SymbolSequence` entries.

    Entries are deduplicated on symbol content, first insertion wins. Two
    derived indexes are built once: length to sorted entries, and a
    positional index used by :meth:`find_candidates`.
    """

    def __init__(self, entries: Iterable[SymbolSequence] = ()) -> None:
        self._entries: Dict[Tuple[Symbol, ...], SymbolSequence] = {}
        dropped = 0
        for entry in entries:
            if entry.symbols in self._entries:
                dropped += 1
                continue
            self._entries[entry.symbols] = entry
        if dropped:
            LOGGER.debug("Dropped %d duplicate entries (first insertion wins)", dropped)

        by_length: Dict[int, List[SymbolSequence]] = defaultdict(list)
        for entry in self._entries.values():
            by_length[len(entry)].append(entry)
        self._entries_by_length: Dict[int, Tuple[SymbolSequence, ...]] = {
            length: tuple(sorted(group)) for length, group in by_length.items()
        }
        # Positional index: length -> (position, symbol) -> set of symbol tuples
        self._position_index: Dict[int, Dict[Tuple[int, Symbol], Set[Tuple[Symbol, ...]]]] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def build(cls, entries: Iterable[Entry]) -> "Dictionary":
        """Build from ``(label, symbols)`` pairs."""
        return cls(SymbolSequence(symbols, label=label) for label, symbols in entries)

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "Dictionary":
        """Build from plain words; each character is one symbol."""
        return cls(SymbolSequence.from_word(word) for word in words)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def contains(self, symbols: Iterable[Symbol]) -> bool:
        return tuple(symbols) in self._entries

    def get(self, symbols: Iterable[Symbol]) -> Optional[SymbolSequence]:
        return self._entries.get(tuple(symbols))

    def entries_of_length(self, length: int) -> Tuple[SymbolSequence, ...]:
        """Entries with ``length`` symbols, in lexicographic symbol order."""
        return self._entries_by_length.get(length, ())

    def lengths(self) -> List[int]:
        return sorted(self._entries_by_length)

    def find_candidates(
        self,
        length: int,
        pattern: Optional[Sequence[Optional[Symbol]]] = None,
    ) -> List[SymbolSequence]:
        """Return entries of ``length`` matching the fixed cells of ``pattern``.

        ``pattern`` holds one symbol or ``None`` per position. The result keeps
        the order of :meth:`entries_of_length`.
        """
        entries = self.entries_of_length(length)
        matching = self._index_lookup(length, pattern)
        if matching is None:
            return list(entries)
        return [entry for entry in entries if entry.symbols in matching]

    def _index_lookup(
        self,
        length: int,
        pattern: Optional[Sequence[Optional[Symbol]]],
    ) -> Optional[Set[Tuple[Symbol, ...]]]:
        """Intersect positional sets; ``None`` means no constraint applies."""
        if not pattern:
            return None
        length_index = self._length_index(length)
        constraints: List[Set[Tuple[Symbol, ...]]] = []
        for pos, symbol in enumerate(pattern):
            if symbol is None:
                continue
            match_set = length_index.get((pos, symbol))
            if match_set is None:
                return set()
            constraints.append(match_set)
        if not constraints:
            return None

        # Intersect smallest sets first
        constraints.sort(key=len)
        result = set(constraints[0])
        for other in constraints[1:]:
            result &= other
            if not result:
                break
        return result

    def _length_index(self, length: int) -> Dict[Tuple[int, Symbol], Set[Tuple[Symbol, ...]]]:
        index = self._position_index.get(length)
        if index is None:
            index = defaultdict(set)
            for entry in self.entries_of_length(length):
                for pos, symbol in enumerate(entry.symbols):
                    index[(pos, symbol)].add(entry.symbols)
            index = dict(index)
            self._position_index[length] = index
        return index

    def __contains__(self, item: object) -> bool:
        if isinstance(item, SymbolSequence):
            return item.symbols in self._entries
        return False

    def __iter__(self) -> Iterator[SymbolSequence]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dictionary):
            return NotImplemented
        return list(self._entries) == list(other._entries)

    def __repr__(self) -> str:
        return f"Dictionary({len(self._entries)} entries)"


def build_dictionary(entries: Iterable[Entry]) -> Dictionary:
    """Build a :class:`Dictionary` from ``(label, symbols)`` pairs."""
    return Dictionary.build(entries)
