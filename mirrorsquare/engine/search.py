"""Depth-first backtracking search for mirror squares."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional

from ..core.constants import Engine, MirrorState, Symmetry
from ..core.exceptions import SearchCancelledError
from ..core.models import MirrorSquare, ResultSet, SymbolSequence
from ..data.dictionary import Dictionary
from ..utils.logger import get_logger
from .evaluator import mirror_state

LOGGER = get_logger(__name__)


@dataclass
class SearchConfig:
    """Parameters of one search run."""

    size: int
    symmetry: Symmetry = Symmetry.TRANSPOSE
    engine: Engine = Engine.BACKTRACK
    timeout_seconds: Optional[float] = None


@dataclass
class SearchStats:
    engine: Engine = Engine.BACKTRACK
    nodes: int = 0
    pruned: int = 0
    found: int = 0
    elapsed_seconds: float = 0.0
    completed: bool = False


class CancellationToken:
    """Cooperative cancellation flag with an optional monotonic deadline."""

    def __init__(self, deadline: Optional[float] = None) -> None:
        self._deadline = deadline
        self._cancelled = False

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    @property
    def cancelled(self) -> bool:
        if not self._cancelled and self._deadline is not None:
            self._cancelled = time.monotonic() >= self._deadline
        return self._cancelled


class MirrorSquareSearch:
    """Explores length-``size`` entries row by row, pruned by :func:`mirror_state`.

    The prefix is a single shared buffer with push/pop around each recursive
    call. Only frozen :class:`MirrorSquare` copies reach the result set.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        size: int,
        symmetry: Symmetry = Symmetry.TRANSPOSE,
        token: Optional[CancellationToken] = None,
        stats: Optional[SearchStats] = None,
    ) -> None:
        if size < 0:
            raise ValueError(f"Square size must be non-negative, got {size}")
        self.dictionary = dictionary
        self.size = size
        self.symmetry = symmetry
        self.token = token
        self.stats = stats if stats is not None else SearchStats()
        self.stats.engine = Engine.BACKTRACK

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def run(self) -> ResultSet:
        results = ResultSet()
        if self.size == 0:
            self.stats.completed = True
            return results

        LOGGER.info(
            "Searching %s squares of size %d over %d candidates",
            self.symmetry.value,
            self.size,
            len(self.dictionary.entries_of_length(self.size)),
        )
        started = time.perf_counter()
        try:
            self._extend([], results)
            self.stats.completed = True
        finally:
            self.stats.elapsed_seconds = time.perf_counter() - started
            LOGGER.info(
                "Search visited %d nodes, pruned %d, found %d squares in %.2fs",
                self.stats.nodes,
                self.stats.pruned,
                self.stats.found,
                self.stats.elapsed_seconds,
            )
        return results

    # ------------------------------------------------------------------
    # Recursion
    # ------------------------------------------------------------------
    def _extend(self, prefix: List[SymbolSequence], results: ResultSet) -> None:
        if self.token is not None and self.token.cancelled:
            raise SearchCancelledError(
                f"Search cancelled after {self.stats.nodes} nodes "
                f"({len(results)} squares found)",
                partial=results,
            )

        for candidate in self._candidates(prefix):
            self.stats.nodes += 1
            prefix.append(candidate)
            state = mirror_state(prefix, self.symmetry)
            if state == MirrorState.COMPLETE:
                square = MirrorSquare(tuple(prefix))
                if results.add(square):
                    self.stats.found += 1
                    LOGGER.info("Found mirror square: %s", " ".join(square.labels))
            elif state == MirrorState.PARTIAL:
                self._extend(prefix, results)
            else:
                self.stats.pruned += 1
            prefix.pop()

    def _candidates(self, prefix: List[SymbolSequence]) -> List[SymbolSequence]:
        """Entries that agree with every symbol the prefix already fixes for the next row.

        Row k must start with column k of the earlier rows; in the levidrome
        variant it must also equal the reversal of row N-1-k once that row is
        placed. Anything else would classify as invalid.
        """
        row = len(prefix)
        pattern: List[Optional[str]] = [earlier[row] for earlier in prefix]
        pattern.extend([None] * (self.size - row))

        if self.symmetry == Symmetry.LEVIDROME:
            mirror = self.size - 1 - row
            if mirror < row:
                for pos, symbol in enumerate(reversed(prefix[mirror].symbols)):
                    if pattern[pos] is not None and pattern[pos] != symbol:
                        return []
                    pattern[pos] = symbol

        return self.dictionary.find_candidates(self.size, pattern)


def find_mirror_squares(
    dictionary: Dictionary,
    size: int,
    symmetry: Symmetry = Symmetry.TRANSPOSE,
    token: Optional[CancellationToken] = None,
) -> ResultSet:
    """Return every mirror square of ``size`` rows buildable from ``dictionary``."""
    return MirrorSquareSearch(dictionary, size, symmetry=symmetry, token=token).run()
