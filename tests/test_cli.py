import io
import json
import os
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from tests import _bootstrap  # noqa: F401
from ccargs import main


class CliTests(unittest.TestCase):
    def _run_main(self, argv: list[str]) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_main_normalizes_args(self) -> None:
        code, stdout, stderr = self._run_main(["-o", "test.o", "-Ia", "-c", "-Ia", "test.c"])
        self.assertEqual(code, 0)
        self.assertEqual(stderr, "")
        self.assertEqual(stdout, "-c test.c -Ia -o test.o\n")

    def test_main_quotes_values(self) -> None:
        code, stdout, _ = self._run_main(["-DMSG=hello world", "a.c"])
        self.assertEqual(code, 0)
        self.assertEqual(stdout, "a.c '-DMSG=hello world'\n")

    def test_main_without_separator_treats_all_args_as_compiler_args(self) -> None:
        code, stdout, _ = self._run_main(["--dump-options"])
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")

    def test_main_dump_options(self) -> None:
        code, stdout, stderr = self._run_main(["--dump-options", "--", "-c", "test.c", "-O2"])
        self.assertEqual(code, 0)
        self.assertEqual(stderr, "")
        self.assertEqual(
            json.loads(stdout),
            {"action": "compile", "input_files": ["test.c"], "optimization": {"level": 2}},
        )

    def test_main_parse_error(self) -> None:
        code, stdout, stderr = self._run_main(["-DfOO=1=2"])
        self.assertEqual(code, 1)
        self.assertEqual(stdout, "")
        self.assertIn("ccargs: parse: invalid define with multiple equals", stderr)

    def test_main_json_diagnostic(self) -> None:
        code, _, stderr = self._run_main(["--diag-format", "json", "--", "-o"])
        self.assertEqual(code, 1)
        payload = json.loads(stderr)
        self.assertEqual(payload["stage"], "parse")
        self.assertEqual(payload["code"], "CCARGS-0104")
        self.assertEqual(payload["token"], "-o")

    def test_main_diag_format_from_environment(self) -> None:
        with patch.dict(os.environ, {"CCARGS_DIAG_FORMAT": "json"}, clear=False):
            code, _, stderr = self._run_main(["-W"])
        self.assertEqual(code, 1)
        self.assertEqual(json.loads(stderr)["code"], "CCARGS-0103")

    def test_main_format_error(self) -> None:
        code, _, stderr = self._run_main(["-MM", "-c", "a.c"])
        self.assertEqual(code, 1)
        self.assertIn("ccargs: format:", stderr)

    def test_main_rejects_unknown_tool_option(self) -> None:
        code, stdout, stderr = self._run_main(["--bogus", "--", "a.c"])
        self.assertEqual(code, 2)
        self.assertEqual(stdout, "")
        self.assertIn("unrecognized arguments", stderr)


if __name__ == "__main__":
    unittest.main()
