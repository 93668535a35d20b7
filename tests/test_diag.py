import unittest

from tests import _bootstrap  # noqa: F401
from ccargs.diag import (
    EMPTY_VALUE,
    INVALID_RECORD,
    MISSING_ARGUMENT,
    Diagnostic,
    EmptyValueError,
    FormatError,
    MissingArgumentError,
    OptionError,
)


class DiagTests(unittest.TestCase):
    def test_diagnostic_str(self) -> None:
        diagnostic = Diagnostic("parse", "unknown option -x", "CCARGS-0103", "-x")
        self.assertEqual(str(diagnostic), "ccargs: parse: unknown option -x")

    def test_errors_are_value_errors(self) -> None:
        self.assertTrue(issubclass(OptionError, ValueError))
        self.assertTrue(issubclass(FormatError, OptionError))

    def test_default_codes(self) -> None:
        self.assertEqual(EmptyValueError("x").code, EMPTY_VALUE)
        self.assertEqual(MissingArgumentError("x").code, MISSING_ARGUMENT)
        self.assertEqual(FormatError("x").code, INVALID_RECORD)

    def test_error_diagnostic(self) -> None:
        error = FormatError("bad record", code="CCARGS-9999")
        self.assertEqual(
            error.diagnostic.as_dict(),
            {"stage": "format", "code": "CCARGS-9999", "token": None, "message": "bad record"},
        )


if __name__ == "__main__":
    unittest.main()
