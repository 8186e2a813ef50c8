"""CP-SAT enumeration of mirror squares using OR-Tools.

Transpose symmetry is structural in the model: cell (i, j) and cell (j, i)
share one variable. Each row is tied to the dictionary by a table constraint,
and the levidrome variant adds ``cell[i][j] == cell[N-1-i][N-1-j]``.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.constants import Engine, Symmetry
from ..core.exceptions import MirrorSquareError, SearchCancelledError
from ..core.models import MirrorSquare, ResultSet, SymbolSequence
from ..data.dictionary import Dictionary
from ..utils.logger import get_logger
from .search import SearchStats

LOGGER = get_logger(__name__)

Cell = Tuple[int, int]


class _SquareCollector(cp_model.CpSolverSolutionCallback):
    """Turns every solver solution back into a :class:`MirrorSquare`."""

    def __init__(
        self,
        cells: Dict[Cell, cp_model.IntVar],
        size: int,
        rows_by_code: Dict[Tuple[int, ...], SymbolSequence],
        results: ResultSet,
    ) -> None:
        super().__init__()
        self._cells = cells
        self._size = size
        self._rows_by_code = rows_by_code
        self._results = results

    def on_solution_callback(self) -> None:
        rows: List[SymbolSequence] = []
        for i in range(self._size):
            code = tuple(self.value(self._cells[(i, j)]) for j in range(self._size))
            rows.append(self._rows_by_code[code])
        square = MirrorSquare(tuple(rows))
        if self._results.add(square):
            LOGGER.info("Found mirror square: %s", " ".join(square.labels))


def solve_mirror_squares(
    dictionary: Dictionary,
    size: int,
    symmetry: Symmetry = Symmetry.TRANSPOSE,
    timeout: Optional[float] = None,
    stats: Optional[SearchStats] = None,
) -> ResultSet:
    """Enumerate every mirror square of ``size`` rows via CP-SAT.

    Args:
        dictionary: Source of candidate rows.
        size: Square size; 0 yields an empty result.
        symmetry: Symmetry rule the squares must satisfy.
        timeout: Solver time limit in seconds, ``None`` for no limit.
        stats: Optional stats object filled in place.

    Returns:
        The same result set the backtracking engine produces.

    Raises:
        SearchCancelledError: The time limit interrupted enumeration; the
            squares found so far are attached as ``partial``.
    """
    if size < 0:
        raise ValueError(f"Square size must be non-negative, got {size}")
    stats = stats if stats is not None else SearchStats()
    stats.engine = Engine.CPSAT
    results = ResultSet()

    entries = dictionary.entries_of_length(size)
    if size == 0 or not entries:
        stats.completed = True
        return results

    # ------------------------------------------------------------------
    # Step 1: Symbol codes
    # ------------------------------------------------------------------
    alphabet = sorted({symbol for entry in entries for symbol in entry.symbols})
    codes = {symbol: index for index, symbol in enumerate(alphabet)}
    rows_by_code: Dict[Tuple[int, ...], SymbolSequence] = {
        tuple(codes[symbol] for symbol in entry.symbols): entry for entry in entries
    }

    # ------------------------------------------------------------------
    # Step 2: One variable per unordered cell pair
    # ------------------------------------------------------------------
    model = cp_model.CpModel()
    cells: Dict[Cell, cp_model.IntVar] = {}
    for i in range(size):
        for j in range(i, size):
            var = model.new_int_var(0, len(alphabet) - 1, f"S_{i}_{j}")
            cells[(i, j)] = var
            cells[(j, i)] = var

    # ------------------------------------------------------------------
    # Step 3: Rows must be dictionary entries
    # ------------------------------------------------------------------
    allowed = list(rows_by_code)
    for i in range(size):
        model.add_allowed_assignments([cells[(i, j)] for j in range(size)], allowed)

    if symmetry == Symmetry.LEVIDROME:
        for i in range(size // 2):
            mirror = size - 1 - i
            for j in range(size):
                left = cells[(i, j)]
                right = cells[(mirror, size - 1 - j)]
                if left is not right:
                    model.add(left == right)

    # ------------------------------------------------------------------
    # Step 4: Enumerate
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.enumerate_all_solutions = True
    solver.parameters.num_workers = 1
    if timeout is not None:
        solver.parameters.max_time_in_seconds = timeout

    LOGGER.info(
        "CP-SAT: size %d, %d candidate rows, %d symbols, enumerating...",
        size,
        len(allowed),
        len(alphabet),
    )
    collector = _SquareCollector(cells, size, rows_by_code, results)
    status = solver.solve(model, collector)

    stats.nodes = solver.num_branches
    stats.found = len(results)
    stats.elapsed_seconds = solver.wall_time

    if status == cp_model.MODEL_INVALID:
        raise MirrorSquareError(f"CP-SAT rejected the model: {model.validate()}")
    if status in (cp_model.OPTIMAL, cp_model.INFEASIBLE):
        stats.completed = True
        LOGGER.info("CP-SAT: %d squares in %.2fs", len(results), solver.wall_time)
        return results

    LOGGER.warning(
        "CP-SAT: enumeration stopped early (status=%s) with %d squares",
        solver.status_name(status),
        len(results),
    )
    raise SearchCancelledError(
        f"CP-SAT enumeration interrupted after {solver.wall_time:.2f}s", partial=results
    )
