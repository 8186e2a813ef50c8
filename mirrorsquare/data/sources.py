"""Line-oriented dictionary readers.

Two formats are understood:

- plain word lists, one word per line, where every character is a symbol;
- phonetic dictionaries in the CMU pronouncing dictionary layout,
  ``SPELLING SYM1 SYM2 ...`` with whitespace between tokens.

Malformed lines are skipped silently, as are lines that are not valid in the
configured encoding. Only a missing or unreadable file is an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Tuple

from ..core.constants import COMMENT_PREFIXES, DEFAULT_DICTIONARY_PATH, SourceFormat
from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .dictionary import Dictionary, Entry
from .levidrome import filter_levidromes

LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading and filtering."""

    path: Path | str = DEFAULT_DICTIONARY_PATH
    source_format: SourceFormat = SourceFormat.WORDS
    levidromes_only: bool = False
    encoding: str = "utf-8"


def _iter_lines(path: Path | str, encoding: str) -> Iterator[str]:
    source = Path(path)
    try:
        raw = source.read_bytes()
    except OSError as exc:
        raise DictionaryLoadError(
            f"Unable to read dictionary {source}: {exc.strerror or exc}", path=str(source)
        ) from exc

    skipped = 0
    for raw_line in raw.splitlines():
        try:
            line = raw_line.decode(encoding)
        except UnicodeDecodeError:
            skipped += 1
            continue
        line = line.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        yield line
    if skipped:
        LOGGER.debug("Skipped %d undecodable lines in %s", skipped, source)


def read_word_list(path: Path | str, encoding: str = "utf-8") -> List[Entry]:
    """Return ``(word, characters)`` entries from a word-per-line file."""
    return [(line, tuple(line)) for line in _iter_lines(path, encoding)]


def parse_phonetic_line(line: str) -> Tuple[str, Tuple[str, ...]] | None:
    tokens = line.split()
    if len(tokens) < 2:
        return None
    return tokens[0], tuple(tokens[1:])


def read_phonetic_dictionary(path: Path | str, encoding: str = "utf-8") -> List[Entry]:
    """Return ``(spelling, phonemes)`` entries from a pronunciation file."""
    entries: List[Entry] = []
    for line in _iter_lines(path, encoding):
        parsed = parse_phonetic_line(line)
        if parsed is not None:
            entries.append(parsed)
    return entries


def load_dictionary(config: DictionaryConfig) -> Dictionary:
    """Read the configured source and build a (possibly filtered) dictionary."""
    if config.source_format == SourceFormat.PHONEMES:
        entries = read_phonetic_dictionary(config.path, config.encoding)
    else:
        entries = read_word_list(config.path, config.encoding)

    dictionary = Dictionary.build(entries)
    LOGGER.info(
        "Loaded %d entries (%d unique) from %s", len(entries), len(dictionary), config.path
    )
    if config.levidromes_only:
        dictionary = filter_levidromes(dictionary)
    return dictionary
