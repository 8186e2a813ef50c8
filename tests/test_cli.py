import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from main import build_parser, main

SATOR = ["sator", "arepo", "tenet", "opera", "rotas"]


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmpdir = Path(self._tmp.name)
        self.words = self.tmpdir / "words.txt"
        self.words.write_text("\n".join(SATOR + ["cow", "a"]) + "\n", encoding="utf-8")

    def _run(self, *argv: str) -> str:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            main(["--log-level", "WARNING", *argv])
        return buffer.getvalue()

    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        self.assertEqual(args.size, 5)
        self.assertEqual(str(args.dictionary), "levidromes.txt")
        self.assertEqual(args.engine, "backtrack")
        self.assertIsNone(args.symmetry)

    def test_prints_one_line_per_square(self) -> None:
        output = self._run("--dictionary", str(self.words), "--size", "5")
        self.assertEqual(
            output.splitlines(), ["rotasoperatenetareposator", "satorarepotenetoperarotas"]
        )

    def test_custom_joiner_and_engine(self) -> None:
        output = self._run(
            "--dictionary", str(self.words), "--engine", "cpsat", "--joiner", " "
        )
        self.assertIn("sator arepo tenet opera rotas", output.splitlines())

    def test_grid_output(self) -> None:
        output = self._run("--dictionary", str(self.words), "--grid")
        self.assertIn("s a t o r   sator", output)

    def test_phoneme_dictionary(self) -> None:
        phonetic = self.tmpdir / "cmudict.txt"
        phonetic.write_text(
            "CAT  K AE1 T\nTACK  T AE1 K\nANA  AE1 N AE1\nDOG  D AO1 G\n", encoding="utf-8"
        )
        output = self._run("--dictionary", str(phonetic), "--format", "phonemes", "--size", "3")
        self.assertEqual(output.splitlines(), ["CAT ANA TACK", "TACK ANA CAT"])

    def test_list_levidromes(self) -> None:
        output = self._run("--dictionary", str(self.words), "--list-levidromes")
        self.assertEqual(output.splitlines(), SATOR)

    def test_json_output(self) -> None:
        target = self.tmpdir / "out.json"
        self._run("--dictionary", str(self.words), "--output", str(target))
        payload = json.loads(target.read_text(encoding="utf-8"))
        self.assertTrue(payload["complete"])
        self.assertEqual(payload["config"]["symmetry"], "transpose")
        self.assertEqual(len(payload["squares"]), 2)
        self.assertEqual(payload["squares"][1]["labels"], SATOR)
        self.assertEqual(payload["stats"]["found"], 2)

    def test_missing_dictionary_exits_nonzero(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run("--dictionary", str(self.tmpdir / "missing.txt"))
        self.assertEqual(ctx.exception.code, 1)

    def test_negative_size_is_usage_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run("--size", "-3")
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
