"""Mirror square finder.

Searches a dictionary for N words of length N whose grid reads the same
across and down (the Sator square is the classical example), optionally
requiring row i to be the reversal of row N-1-i.

The public API surface:

- ``mirrorsquare.data.dictionary.build_dictionary`` / ``Dictionary``
- ``mirrorsquare.data.levidrome.filter_levidromes``
- ``mirrorsquare.engine.evaluator.mirror_state``
- ``mirrorsquare.engine.search.find_mirror_squares``
- ``mirrorsquare.engine.finder.MirrorSquareFinder``: load, search, validate.
"""

from .core.constants import Engine, MirrorState, SourceFormat, Symmetry
from .core.models import MirrorSquare, ResultSet, SymbolSequence
from .data.dictionary import Dictionary, build_dictionary
from .data.levidrome import filter_levidromes
from .engine.evaluator import mirror_state
from .engine.finder import FinderConfig, MirrorSquareFinder
from .engine.search import find_mirror_squares

__all__ = [
    "Dictionary",
    "Engine",
    "FinderConfig",
    "MirrorSquare",
    "MirrorSquareFinder",
    "MirrorState",
    "ResultSet",
    "SourceFormat",
    "SymbolSequence",
    "Symmetry",
    "build_dictionary",
    "filter_levidromes",
    "find_mirror_squares",
    "mirror_state",
]

__version__ = "0.1.0"
