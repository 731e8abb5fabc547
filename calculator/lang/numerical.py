"""Integer semantics for the calculator language. Values are 32-bit signed integers: literals outside that range are
rejected while parsing, and arithmetic results outside it raise an IntegerOverflow instead of wrapping around.
"""

from calculator.lang.error import DivisionByZero, IntegerOverflow, IntegerOverflowLiteral

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def in_range(num):
    """Whether or not num fits in a 32-bit signed integer."""
    return INT_MIN <= num <= INT_MAX


def literal(expr, start=0, source=None):
    """Returns the integer value of an integer literal expr. Assumes expr has been grammar checked."""
    digits = expr.lstrip("-").lstrip("0")
    num = int(expr) if len(digits) <= len(str(INT_MAX)) else None  # avoid converting arbitrarily long strings
    if num is None or not in_range(num):
        raise IntegerOverflowLiteral("'{}' does not fit in a 32-bit signed integer", expr, source=source,
                                     start=start, end=start + len(expr))
    return num


def checked(num, expr=None):
    """Returns num if it is representable, else raises IntegerOverflow. expr is the operation responsible (a tree node
    or a string), only rendered if an error is raised.
    """
    if not in_range(num):
        raise IntegerOverflow("result of '{}' overflows a 32-bit signed integer", str(num if expr is None else expr))
    return num


def truncated_div(dividend, divisor, expr=None):
    """Integer division truncating toward zero (Python's // floors instead). expr is as in checked."""
    if divisor == 0:
        raise DivisionByZero("'{}' divides by zero", f"{dividend}/0" if expr is None else str(expr))

    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return checked(quotient, expr)
