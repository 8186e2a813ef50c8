"""Data models supporting the mirror square finder."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Iterable, Iterator, List, Optional, Set, Tuple

Symbol = str


@total_ordering
class SymbolSequence:
    """One dictionary entry: an ordered run of symbols plus a display label.

    Equality, ordering and hashing look at ``symbols`` only. Two entries that
    spell differently but share the same symbols (homonyms in a phonetic
    dictionary) compare equal, which lets letter and phoneme dictionaries
    share one search engine.
    """

    __slots__ = ("_symbols", "_label")

    def __init__(self, symbols: Iterable[Symbol], label: Optional[str] = None) -> None:
        self._symbols: Tuple[Symbol, ...] = tuple(symbols)
        self._label = label

    @classmethod
    def from_word(cls, word: str) -> "SymbolSequence":
        return cls(tuple(word), label=word)

    @property
    def symbols(self) -> Tuple[Symbol, ...]:
        return self._symbols

    @property
    def label(self) -> str:
        if self._label is not None:
            return self._label
        return "".join(self._symbols)

    def reversed(self) -> "SymbolSequence":
        """Return the symbols reversed, without a label; ``label`` then joins the symbols."""
        return SymbolSequence(self._symbols[::-1])

    def __len__(self) -> int:
        return len(self._symbols)

    def __getitem__(self, index: int) -> Symbol:
        return self._symbols[index]

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymbolSequence):
            return NotImplemented
        return self._symbols == other._symbols

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SymbolSequence):
            return NotImplemented
        return self._symbols < other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f"SymbolSequence({self.label!r}, symbols={list(self._symbols)!r})"


@dataclass(frozen=True, order=True)
class MirrorSquare:
    """A completed grid of ``size`` rows, each ``size`` symbols long."""

    rows: Tuple[SymbolSequence, ...]

    @property
    def size(self) -> int:
        return len(self.rows)

    @property
    def labels(self) -> List[str]:
        return [row.label for row in self.rows]

    def symbol(self, row: int, col: int) -> Symbol:
        return self.rows[row][col]

    def to_jsonable(self) -> dict:
        return {
            "labels": self.labels,
            "symbols": [list(row.symbols) for row in self.rows],
        }


class ResultSet:
    """Deduplicated collection of squares, iterated in sorted order."""

    def __init__(self, squares: Iterable[MirrorSquare] = ()) -> None:
        self._squares: Set[MirrorSquare] = set()
        for square in squares:
            self.add(square)

    def add(self, square: MirrorSquare) -> bool:
        """Insert ``square``; return ``False`` when it was already present."""
        if square in self._squares:
            return False
        self._squares.add(square)
        return True

    def as_list(self) -> List[MirrorSquare]:
        return sorted(self._squares)

    def __iter__(self) -> Iterator[MirrorSquare]:
        return iter(self.as_list())

    def __len__(self) -> int:
        return len(self._squares)

    def __bool__(self) -> bool:
        return bool(self._squares)

    def __contains__(self, square: object) -> bool:
        return square in self._squares

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        return f"ResultSet({len(self._squares)} squares)"
