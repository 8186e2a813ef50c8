import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from mirrorsquare.core.constants import Engine, SourceFormat, Symmetry
from mirrorsquare.core.exceptions import DictionaryLoadError, SearchCancelledError
from mirrorsquare.core.models import MirrorSquare, ResultSet, SymbolSequence
from mirrorsquare.data.dictionary import Dictionary
from mirrorsquare.engine.finder import FinderConfig, MirrorSquareFinder
from mirrorsquare.engine.search import find_mirror_squares

SATOR = ["sator", "arepo", "tenet", "opera", "rotas"]


class FinderConfigTests(unittest.TestCase):
    def test_symmetry_defaults_follow_format(self) -> None:
        self.assertEqual(FinderConfig().resolved_symmetry(), Symmetry.TRANSPOSE)
        phonemes = FinderConfig(source_format=SourceFormat.PHONEMES)
        self.assertEqual(phonemes.resolved_symmetry(), Symmetry.LEVIDROME)
        self.assertTrue(phonemes.to_dictionary_config().levidromes_only)
        explicit = FinderConfig(source_format=SourceFormat.PHONEMES, symmetry=Symmetry.TRANSPOSE)
        self.assertEqual(explicit.to_search_config().symmetry, Symmetry.TRANSPOSE)
        self.assertFalse(explicit.to_dictionary_config().levidromes_only)

    def test_search_config_carries_engine_and_timeout(self) -> None:
        config = FinderConfig(size=4, engine=Engine.CPSAT, timeout_seconds=2.5)
        search = config.to_search_config()
        self.assertEqual(search.size, 4)
        self.assertEqual(search.engine, Engine.CPSAT)
        self.assertEqual(search.timeout_seconds, 2.5)


class MirrorSquareFinderTests(unittest.TestCase):
    def test_find_with_injected_dictionary(self) -> None:
        finder = MirrorSquareFinder(FinderConfig(size=5), dictionary=Dictionary.from_words(SATOR))
        result = finder.find()
        self.assertTrue(result.complete)
        self.assertEqual(result.dictionary_size, 5)
        self.assertEqual(result.candidate_count, 5)
        self.assertEqual(result.stats.found, 2)
        self.assertEqual(
            [s.labels for s in result.squares],
            [list(reversed(SATOR)), SATOR],
        )

    def test_engines_agree(self) -> None:
        dictionary = Dictionary.from_words(SATOR)
        backtrack = MirrorSquareFinder(FinderConfig(size=5), dictionary=dictionary).find()
        cpsat = MirrorSquareFinder(
            FinderConfig(size=5, engine=Engine.CPSAT), dictionary=dictionary
        ).find()
        self.assertEqual(backtrack.squares, cpsat.squares)
        self.assertEqual(cpsat.stats.engine, Engine.CPSAT)

    def test_loads_dictionary_from_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            sample = Path(tmpdir) / "words.txt"
            sample.write_text("\n".join(SATOR + ["cow", "win"]) + "\n", encoding="utf-8")
            result = MirrorSquareFinder(FinderConfig(dictionary_path=sample, size=3)).find()
        self.assertEqual(result.dictionary_size, 7)
        self.assertEqual(result.squares, [])

    def test_missing_dictionary(self) -> None:
        with self.assertRaises(DictionaryLoadError):
            MirrorSquareFinder(FinderConfig(dictionary_path="/nonexistent/words.txt"))

    def test_injected_empty_dictionary_is_used(self) -> None:
        result = MirrorSquareFinder(FinderConfig(size=3), dictionary=Dictionary()).find()
        self.assertEqual(result.squares, [])
        self.assertEqual(result.dictionary_size, 0)
        self.assertTrue(result.complete)

    def test_single_symbol_levidrome_squares_match_search(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            sample = Path(tmpdir) / "cmudict.txt"
            sample.write_text("A  AH\nO  OW\nCAT  K AE1 T\n", encoding="utf-8")
            config = FinderConfig(
                dictionary_path=sample, size=1, source_format=SourceFormat.PHONEMES
            )
            self.assertFalse(config.to_dictionary_config().levidromes_only)
            finder = MirrorSquareFinder(config)
            result = finder.find()
        expected = find_mirror_squares(finder.dictionary, 1, Symmetry.LEVIDROME)
        self.assertEqual(len(expected), 2)
        self.assertEqual(result.squares, expected.as_list())
        self.assertEqual([s.labels for s in result.squares], [["A"], ["O"]])

    def test_negative_size_rejected(self) -> None:
        with self.assertRaises(ValueError):
            MirrorSquareFinder(FinderConfig(size=-1), dictionary=Dictionary())

    def test_cancelled_search_returns_partial(self) -> None:
        sator = MirrorSquare(tuple(SymbolSequence.from_word(w) for w in SATOR))
        finder = MirrorSquareFinder(FinderConfig(size=5), dictionary=Dictionary.from_words(SATOR))
        cancelled = SearchCancelledError("deadline", partial=ResultSet([sator]))
        with patch(
            "mirrorsquare.engine.finder.MirrorSquareSearch.run", side_effect=cancelled
        ):
            result = finder.find()
        self.assertFalse(result.complete)
        self.assertEqual(result.squares, [sator])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
