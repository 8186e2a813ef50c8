"""Classify a prefix of rows as invalid, partial or complete."""

from __future__ import annotations

from typing import Sequence

from ..core.constants import MirrorState, Symmetry
from ..core.models import SymbolSequence


def mirror_state(
    prefix: Sequence[SymbolSequence],
    symmetry: Symmetry = Symmetry.TRANSPOSE,
) -> MirrorState:
    """Return the :class:`MirrorState` of ``prefix``.

    The target size N is the length of the first row. Every pair of rows in
    the prefix is checked (``prefix[i][j] == prefix[j][i]``), not only the
    pairs introduced by the last row. With :attr:`Symmetry.LEVIDROME`, row i
    must also be the reversal of row N-1-i whenever both are present.
    """
    if not prefix:
        return MirrorState.PARTIAL

    size = len(prefix[0])
    if any(len(row) != size for row in prefix):
        return MirrorState.INVALID
    if len(prefix) > size:
        return MirrorState.INVALID

    count = len(prefix)
    for i in range(count):
        row = prefix[i]
        for j in range(count):
            if i != j and row[j] != prefix[j][i]:
                return MirrorState.INVALID

    if symmetry == Symmetry.LEVIDROME:
        for i in range(size // 2):
            mirror = size - 1 - i
            if mirror < count and prefix[i].symbols != prefix[mirror].symbols[::-1]:
                return MirrorState.INVALID

    if count == size:
        return MirrorState.COMPLETE
    return MirrorState.PARTIAL
