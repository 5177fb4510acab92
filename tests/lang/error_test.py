import io
import unittest
from contextlib import redirect_stdout

from eldiro.lang.error import (DivisionByZero, ErrorHandler, GenericException, IntegerOverflow, Malformed,
                               UnboundName)


class GenericExceptionTestCase(unittest.TestCase):

    def test_kinds(self):
        for error in [Malformed("digits", "x"), DivisionByZero(), UnboundName("b"), IntegerOverflow(2 ** 40)]:
            self.assertIsInstance(error, GenericException)

    def test_str(self):
        cases = {
            "expected operator": Malformed("operator", "%"),
            "binding with name 'b' does not exist": UnboundName("b"),
            "'1 / 0' divides by zero": DivisionByZero("1 / 0"),
        }
        for expected, error in cases.items():
            self.assertEqual(expected, str(error))

    def test_locate(self):
        cases = {
            ("let a 5", "5"): (6, 7),
            ("1 + 2 3", " 3"): (5, 6),
            ("let a =", ""): (7, 8),
        }
        for (source, remainder), (start, end) in cases.items():
            error = Malformed("x", remainder).locate(source)
            self.assertEqual((start, end), (error.start, error.end), source)
            self.assertEqual(source, error.expr)
            self.assertTrue(error.diagnosis)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_diagnose(self):
        error = Malformed("=", "5").locate("let a 5")
        first, second = ErrorHandler.diagnose(error).split("\n")

        self.assertTrue(first.startswith("  let a "), first)
        self.assertIn("5", first)
        self.assertTrue(second.startswith("  " + " " * 6), second)
        self.assertIn("^", second)

    def test_suppresses_eldiro_errors(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with ErrorHandler(fatal=False) as error_handler:
                error_handler.register_file("<in>")
                error_handler.register_line("<in>", "4/0", 3)
                raise DivisionByZero("4 / 0")

        output = out.getvalue()
        self.assertIn("File '<in>', line 3", output)
        self.assertIn("error: ", output)
        self.assertEqual({"<in>": (None, None)}, error_handler.traceback)

    def test_fatal_exits(self):
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit):
                with ErrorHandler():
                    raise UnboundName("b")

    def test_internal_errors_propagate(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(ValueError):
                with ErrorHandler(fatal=False):
                    raise ValueError("bad {state}")

        self.assertIn("[internal] ", out.getvalue())
        self.assertIn("unknown error", out.getvalue())

    def test_warn(self):
        out = io.StringIO()
        error_handler = ErrorHandler(fatal=False)
        error_handler.register_line("<in>", "let a = 2", 2)

        with redirect_stdout(out):
            error_handler.warn("'{}' overwrites previous binding", "a", diagnosis=False)

        self.assertIn("warning: ", out.getvalue())
        self.assertIn("<in>:2: ", out.getvalue())


if __name__ == '__main__':
    unittest.main()
