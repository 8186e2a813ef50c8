"""Mirror square finder orchestration.

Pipeline:
  1. Load: read the dictionary source, optionally keep levidromes only.
  2. Search: backtracking or CP-SAT enumeration of the requested size.
  3. Validate: re-check every square against the mirror invariants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..core.constants import DEFAULT_DICTIONARY_PATH, DEFAULT_SIZE, Engine, SourceFormat, Symmetry
from ..core.exceptions import SearchCancelledError, ValidationError
from ..core.models import MirrorSquare, ResultSet
from ..data.dictionary import Dictionary
from ..data.sources import DictionaryConfig, load_dictionary
from ..utils.logger import get_logger
from .search import CancellationToken, MirrorSquareSearch, SearchConfig, SearchStats
from .solver import solve_mirror_squares
from .validator import SquareValidator

LOGGER = get_logger(__name__)


@dataclass
class FinderConfig:
    dictionary_path: Path | str = DEFAULT_DICTIONARY_PATH
    size: int = DEFAULT_SIZE
    source_format: SourceFormat = SourceFormat.WORDS
    # None picks LEVIDROME for phoneme sources and TRANSPOSE otherwise
    symmetry: Optional[Symmetry] = None
    levidromes_only: bool = False
    engine: Engine = Engine.BACKTRACK
    timeout_seconds: Optional[float] = None

    def resolved_symmetry(self) -> Symmetry:
        if self.symmetry is not None:
            return self.symmetry
        if self.source_format == SourceFormat.PHONEMES:
            return Symmetry.LEVIDROME
        return Symmetry.TRANSPOSE

    def to_dictionary_config(self) -> DictionaryConfig:
        # Every row of a levidrome square of size >= 2 is itself a levidrome;
        # single-symbol entries never pass the filter but form 1x1 squares.
        levidromes_only = self.levidromes_only or (
            self.size >= 2 and self.resolved_symmetry() == Symmetry.LEVIDROME
        )
        return DictionaryConfig(
            path=self.dictionary_path,
            source_format=self.source_format,
            levidromes_only=levidromes_only,
        )

    def to_search_config(self) -> SearchConfig:
        return SearchConfig(
            size=self.size,
            symmetry=self.resolved_symmetry(),
            engine=self.engine,
            timeout_seconds=self.timeout_seconds,
        )


@dataclass
class FinderResult:
    squares: List[MirrorSquare]
    stats: SearchStats
    symmetry: Symmetry
    dictionary_size: int
    candidate_count: int
    complete: bool = True
    validation_messages: List[str] = field(default_factory=list)


class MirrorSquareFinder:
    """High-level orchestrator: load, search, validate."""

    def __init__(self, config: FinderConfig, dictionary: Optional[Dictionary] = None) -> None:
        if config.size < 0:
            raise ValueError(f"Square size must be non-negative, got {config.size}")
        self.config = config
        self.dictionary = (
            dictionary if dictionary is not None else load_dictionary(config.to_dictionary_config())
        )

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def find(self) -> FinderResult:
        search_config = self.config.to_search_config()
        stats = SearchStats(engine=search_config.engine)
        complete = True
        try:
            results = self._run_engine(search_config, stats)
        except SearchCancelledError as exc:
            LOGGER.warning("%s; returning %d partial results", exc, len(exc.partial))
            results = exc.partial
            complete = False

        validator = SquareValidator(search_config.symmetry, self.dictionary)
        validation = validator.validate_all(results)
        if not validation.ok:
            raise ValidationError(f"Search produced invalid squares: {validation.messages}")

        return FinderResult(
            squares=results.as_list(),
            stats=stats,
            symmetry=search_config.symmetry,
            dictionary_size=len(self.dictionary),
            candidate_count=len(self.dictionary.entries_of_length(search_config.size)),
            complete=complete,
            validation_messages=validation.messages,
        )

    def _run_engine(self, search_config: SearchConfig, stats: SearchStats) -> ResultSet:
        if search_config.engine == Engine.CPSAT:
            return solve_mirror_squares(
                self.dictionary,
                search_config.size,
                symmetry=search_config.symmetry,
                timeout=search_config.timeout_seconds,
                stats=stats,
            )

        token = None
        if search_config.timeout_seconds is not None:
            token = CancellationToken.with_timeout(search_config.timeout_seconds)
        search = MirrorSquareSearch(
            self.dictionary,
            search_config.size,
            symmetry=search_config.symmetry,
            token=token,
            stats=stats,
        )
        return search.run()
