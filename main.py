"""CLI entrypoint for the mirror square finder."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from mirrorsquare.core.constants import DEFAULT_DICTIONARY_PATH, DEFAULT_SIZE, Engine, SourceFormat, Symmetry
from mirrorsquare.core.exceptions import MirrorSquareError
from mirrorsquare.data.levidrome import filter_levidromes
from mirrorsquare.data.sources import DictionaryConfig, load_dictionary
from mirrorsquare.engine.finder import FinderConfig, FinderResult, MirrorSquareFinder
from mirrorsquare.utils.logger import configure_logging, get_logger, parse_level
from mirrorsquare.utils.pretty import format_grid, format_square, print_search_stats

LOGGER = get_logger("mirrorsquare.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find mirror squares (Sator-style word squares) in a dictionary",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=Path(DEFAULT_DICTIONARY_PATH),
        help="Word list (one word per line) or pronunciation dictionary",
    )
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="Square size N")
    parser.add_argument(
        "--format",
        dest="source_format",
        type=str,
        choices=[f.value for f in SourceFormat],
        default=SourceFormat.WORDS.value,
        help="Dictionary format: plain words or 'SPELLING PH1 PH2 ...' lines",
    )
    parser.add_argument(
        "--symmetry",
        type=str,
        choices=[s.value for s in Symmetry],
        default=None,
        help="Symmetry rule (default: levidrome for phonemes, transpose for words)",
    )
    parser.add_argument(
        "--levidromes-only",
        action="store_true",
        help="Restrict the dictionary to entries whose reversal is also an entry",
    )
    parser.add_argument(
        "--list-levidromes",
        action="store_true",
        help="Print the levidromes of the dictionary and exit",
    )
    parser.add_argument(
        "--engine",
        type=str,
        choices=[e.value for e in Engine],
        default=Engine.BACKTRACK.value,
        help="Search backend",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Stop searching after this many seconds and print partial results",
    )
    parser.add_argument(
        "--joiner",
        type=str,
        default=None,
        help="Separator between words of a square (default: none for words, space for phonemes)",
    )
    parser.add_argument("--grid", action="store_true", help="Print each square as a grid")
    parser.add_argument("--stats", action="store_true", help="Print search statistics")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def list_levidromes(config: DictionaryConfig, stream=None) -> int:
    stream = stream or sys.stdout
    dictionary = filter_levidromes(load_dictionary(config))
    for entry in dictionary:
        print(entry.label, file=stream)
    return len(dictionary)


def build_payload(config: FinderConfig, result: FinderResult) -> Dict[str, Any]:
    return {
        "config": {
            "dictionary": str(config.dictionary_path),
            "size": config.size,
            "format": config.source_format.value,
            "symmetry": result.symmetry.value,
            "engine": config.engine.value,
            "timeout_seconds": config.timeout_seconds,
        },
        "complete": result.complete,
        "squares": [square.to_jsonable() for square in result.squares],
        "stats": {
            "nodes": result.stats.nodes,
            "pruned": result.stats.pruned,
            "found": len(result.squares),
            "elapsed_seconds": round(result.stats.elapsed_seconds, 4),
            "dictionary_size": result.dictionary_size,
            "candidate_count": result.candidate_count,
        },
    }


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(parse_level(args.log_level), stream=sys.stderr)

    if args.size < 0:
        parser.error("--size must be non-negative")
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")

    source_format = SourceFormat(args.source_format)
    config = FinderConfig(
        dictionary_path=args.dictionary,
        size=args.size,
        source_format=source_format,
        symmetry=Symmetry(args.symmetry) if args.symmetry else None,
        levidromes_only=args.levidromes_only,
        engine=Engine(args.engine),
        timeout_seconds=args.timeout,
    )

    try:
        if args.list_levidromes:
            dictionary_config = DictionaryConfig(
                path=args.dictionary, source_format=source_format
            )
            list_levidromes(dictionary_config)
            return
        result = MirrorSquareFinder(config).find()
    except MirrorSquareError as exc:
        LOGGER.error("%s", exc)
        parser.exit(1)

    joiner = args.joiner
    if joiner is None:
        joiner = " " if source_format == SourceFormat.PHONEMES else ""
    for square in result.squares:
        if args.grid:
            print(format_grid(square))
            print()
        else:
            print(format_square(square, joiner))

    if args.stats:
        print_search_stats(result, stream=sys.stderr)

    if args.output:
        payload = build_payload(config, result)
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


if __name__ == "__main__":  # pragma: no cover
    main()
