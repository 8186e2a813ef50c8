"""Deterministic invariant checks for finished mirror squares."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..core.constants import Symmetry
from ..core.exceptions import ValidationError
from ..core.models import MirrorSquare
from ..data.dictionary import Dictionary
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class SquareValidator:
    """Checks squares against the shape, symmetry and membership rules."""

    def __init__(
        self,
        symmetry: Symmetry = Symmetry.TRANSPOSE,
        dictionary: Optional[Dictionary] = None,
    ) -> None:
        self.symmetry = symmetry
        self.dictionary = dictionary

    def validate(self, square: MirrorSquare) -> ValidationResult:
        try:
            self._check_shape(square)
            self._check_transpose(square)
            if self.symmetry == Symmetry.LEVIDROME:
                self._check_reversal(square)
            self._check_membership(square)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def validate_all(self, squares: Iterable[MirrorSquare]) -> ValidationResult:
        messages: List[str] = []
        for square in squares:
            messages.extend(self.validate(square).messages)
        return ValidationResult(ok=not messages, messages=messages)

    def _check_shape(self, square: MirrorSquare) -> None:
        for index, row in enumerate(square.rows):
            if len(row) != square.size:
                raise ValidationError(
                    f"Row {index} '{row.label}' has {len(row)} symbols, expected {square.size}"
                )

    def _check_transpose(self, square: MirrorSquare) -> None:
        for i in range(square.size):
            for j in range(i + 1, square.size):
                if square.symbol(i, j) != square.symbol(j, i):
                    raise ValidationError(
                        f"Transpose mismatch at ({i},{j}): "
                        f"{square.symbol(i, j)!r} != {square.symbol(j, i)!r}"
                    )

    def _check_reversal(self, square: MirrorSquare) -> None:
        size = square.size
        for i in range(size // 2):
            if square.rows[i] != square.rows[size - 1 - i].reversed():
                raise ValidationError(
                    f"Row {i} '{square.rows[i].label}' is not the reversal of "
                    f"row {size - 1 - i} '{square.rows[size - 1 - i].label}'"
                )

    def _check_membership(self, square: MirrorSquare) -> None:
        if self.dictionary is None:
            return
        for row in square.rows:
            if row not in self.dictionary:
                raise ValidationError(f"Row '{row.label}' is not a dictionary entry")
