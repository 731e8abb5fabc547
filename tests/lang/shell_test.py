import io
import unittest

from calculator.lang.error import ErrorHandler
from calculator.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.error_handler = ErrorHandler(out=self.out)
        self.shell = Shell(self.error_handler, stdout=self.out)

    def test_default(self):
        cases = {
            "42": "42",
            "-7": "-7",
            "add(sub(213,54),45)": "204",
            "let(aVar,sub(134,58),div(aVar,3))": "25",
        }
        for case, expected in cases.items():
            self.out.seek(0)
            self.out.truncate()
            self.shell.onecmd(case)
            self.assertEqual(expected, self.out.getvalue().strip(), case)

    def test_errors_are_not_fatal(self):
        self.assertFalse(self.error_handler.fatal)

        self.shell.onecmd("div(5,0)")
        self.shell.onecmd("foo(1,2)")
        self.shell.onecmd("add(1,2)")

        self.assertEqual(["DivisionByZero", "UnknownOperator"], [error.kind for error in self.error_handler.errors])
        self.assertTrue(self.out.getvalue().rstrip().endswith("3"))

    def test_deep_nesting(self):
        self.shell.onecmd("add(1," * 600 + "1" + ")" * 600)
        self.shell.onecmd("add(1,2)")

        self.assertEqual(["NestingTooDeep"], [error.kind for error in self.error_handler.errors])
        self.assertTrue(self.out.getvalue().rstrip().endswith("3"))

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        self.assertTrue(self.shell.onecmd("EOF"))

    def test_emptyline(self):
        self.assertFalse(self.shell.onecmd(""))
        self.assertEqual("", self.out.getvalue())

    def test_help(self):
        self.shell.onecmd("help")
        self.assertIn("let(aVar,sub(134,58),div(aVar,3))", self.out.getvalue())


if __name__ == '__main__':
    unittest.main()
