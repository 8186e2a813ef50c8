"""Pretty-print helpers for mirror squares."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.models import MirrorSquare
    from ..engine.finder import FinderResult


def format_square(square: MirrorSquare, joiner: str = "") -> str:
    """One line per square: the row labels joined by ``joiner``."""
    return joiner.join(square.labels)


def format_grid(square: MirrorSquare) -> str:
    width = max((len(symbol) for row in square.rows for symbol in row.symbols), default=1)
    lines = []
    for row in square.rows:
        cells = " ".join(f"{symbol:<{width}}" for symbol in row.symbols)
        lines.append(f"{cells.rstrip()}   {row.label}")
    return "\n".join(lines)


def print_search_stats(result: FinderResult, *, stream=None) -> None:
    """Print a short summary of a finished search."""

    stream = stream or sys.stdout
    stats = result.stats
    print("--- Search ---", file=stream)
    print(f"  Engine:        {stats.engine.value}", file=stream)
    print(f"  Symmetry:      {result.symmetry.value}", file=stream)
    print(f"  Dictionary:    {result.dictionary_size} entries", file=stream)
    print(f"  Candidates:    {result.candidate_count}", file=stream)
    print(f"  Nodes:         {stats.nodes}", file=stream)
    if stats.pruned:
        print(f"  Pruned:        {stats.pruned}", file=stream)
    print(f"  Squares:       {len(result.squares)}", file=stream)
    print(f"  Elapsed:       {stats.elapsed_seconds:.2f}s", file=stream)
    if not result.complete:
        print("  Interrupted:   results are partial", file=stream)
