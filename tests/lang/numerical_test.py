import unittest

from calculator.lang.error import DivisionByZero, IntegerOverflow, IntegerOverflowLiteral
from calculator.lang.numerical import INT_MAX, INT_MIN, checked, in_range, literal, truncated_div


class NumericalTestCase(unittest.TestCase):

    def test_in_range(self):
        should_fail = [INT_MAX + 1, INT_MIN - 1, 2 ** 63]
        for case in should_fail:
            self.assertFalse(in_range(case), case)

        should_pass = [0, -1, INT_MAX, INT_MIN]
        for case in should_pass:
            self.assertTrue(in_range(case), case)

    def test_literal(self):
        should_fail = ["2147483648", "-2147483649", "9" * 5000, "-" + "1" * 11]
        for case in should_fail:
            self.assertRaises(IntegerOverflowLiteral, literal, case)

        should_pass = {"0": 0, "-0": 0, "42": 42, "0042": 42, "-7": -7, "2147483647": INT_MAX,
                       "-2147483648": INT_MIN, "000000000000001": 1}
        for case, expected in should_pass.items():
            self.assertEqual(expected, literal(case), case)

    def test_literal_position(self):
        try:
            literal("2147483648", start=4, source="add(2147483648,1)")
        except IntegerOverflowLiteral as error:
            self.assertEqual("add(2147483648,1)", error.expr)
            self.assertEqual((4, 14), (error.start, error.end))
        else:
            self.fail("literal should overflow")

    def test_checked(self):
        self.assertRaises(IntegerOverflow, checked, INT_MAX + 1)
        self.assertRaises(IntegerOverflow, checked, INT_MIN - 1, "sub(-2147483648,1)")
        self.assertEqual(INT_MIN, checked(INT_MIN))

    def test_truncated_div(self):
        cases = {
            (7, 2): 3,
            (-7, 2): -3,
            (7, -2): -3,
            (-7, -2): 3,
            (76, 3): 25,
            (1, 3): 0,
            (-1, 3): 0,
            (INT_MIN, 1): INT_MIN,
        }
        for (dividend, divisor), expected in cases.items():
            self.assertEqual(expected, truncated_div(dividend, divisor), (dividend, divisor))

        self.assertRaises(DivisionByZero, truncated_div, 5, 0)
        self.assertRaises(IntegerOverflow, truncated_div, INT_MIN, -1)

    def test_renders_operation_on_error(self):
        class Operation:
            renders = 0

            def __init__(self, text):
                self.text = text

            def __str__(self):
                Operation.renders += 1
                return self.text

        self.assertEqual(3, checked(3, Operation("add(1,2)")))
        self.assertEqual(2, truncated_div(7, 3, Operation("div(7,3)")))
        self.assertEqual(0, Operation.renders)

        with self.assertRaises(IntegerOverflow) as context:
            checked(INT_MAX + 1, Operation("add(2147483647,1)"))
        self.assertIn("add(2147483647,1)", str(context.exception))

        with self.assertRaises(DivisionByZero) as context:
            truncated_div(5, 0, Operation("div(5,0)"))
        self.assertEqual("'div(5,0)' divides by zero", str(context.exception))
        self.assertEqual(2, Operation.renders)


if __name__ == '__main__':
    unittest.main()
