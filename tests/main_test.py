import io
import logging
import unittest
from contextlib import redirect_stdout

from calculator.main import main


class MainTestCase(unittest.TestCase):

    def tearDown(self):
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
        logging.root.setLevel(logging.WARNING)

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(list(argv))
        return out.getvalue()

    def test_expression(self):
        cases = {
            "42": 42,
            "-7": -7,
            "add(sub(213,54),45)": 204,
            "let(aVar,sub(134,58),div(aVar,3))": 25,
        }
        for case, expected in cases.items():
            self.assertEqual(f"Expression evaluates to {expected}\n", self.run_main(case), case)

    def test_error(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as context:
            main(["div(5,0)"])

        self.assertEqual(1, context.exception.code)
        self.assertIn("divides by zero", out.getvalue())
        self.assertNotIn("Expression evaluates to", out.getvalue())

    def test_no_expression(self):
        self.assertEqual("", self.run_main())
        self.assertIn("INFO: No expression to evaluate.", self.run_main("-INFO"))

    def test_too_many_expressions(self):
        output = self.run_main("add(1,2)", "add(3,4)")
        self.assertEqual("ERROR: Too many expressions specified. add(3,4) is extra.\n", output)

        output = self.run_main("add(1,2)", "-INFO", "add(3,4)")
        self.assertIn("ERROR: Too many expressions specified. add(3,4) is extra.", output)
        self.assertNotIn("Expression evaluates to", output)

    def test_levels(self):
        output = self.run_main("add(1,2)", "-DEBUG")
        self.assertIn("INFO: Setting logging level to DEBUG", output)
        self.assertIn("INFO: Evaluating expression: add(1,2)", output)
        self.assertIn("DEBUG: Operator is add with arguments 1,2", output)
        self.assertIn("INFO: Performing addition", output)
        self.assertTrue(output.endswith("Expression evaluates to 3\n"))

        output = self.run_main("-INFO", "-DEBUG", "add(1,2)")
        self.assertIn("INFO: Too many logging levels specified. Ignoring -DEBUG", output)
        self.assertNotIn("DEBUG: ", output)

        output = self.run_main("-ERROR", "add(1,2)")
        self.assertEqual("Expression evaluates to 3\n", output)


if __name__ == '__main__':
    unittest.main()
