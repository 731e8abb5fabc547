"""Prefix-notation integer calculator.

For reference:
- "Expression": an integer, a variable, or an operator call such as add(sub(213,54),45)
- "let expression": let(name,value,body) binds name to the value of value inside body only

Basic program flow:
    1. Parser: produces an expression tree by recursively matching each sub-expression against the language grammar
        - Variables are resolved while the tree is built, against a chain of enclosing let bindings
        - For grammar rules, see calculator/lang/lexical.py
    2. Evaluation: folds the finished tree into a 32-bit signed integer
        - For node kinds and their semantics, see calculator/lang/tree.py

Failures in either step are CalculatorErrors, reported to callers of calculate as a Result rather than raised.
"""

from dataclasses import dataclass
from typing import Optional

from calculator.lang.error import CalculatorError, NestingTooDeep
from calculator.lang.lexical import parse
from calculator.lang.tree import evaluate


@dataclass(frozen=True)
class Result:
    """Outcome of calculate: exactly one of value and error is set."""
    value: Optional[int] = None
    error: Optional[CalculatorError] = None

    @property
    def ok(self):
        return self.error is None


def calculate(expr, logger=None):
    """Parses and evaluates expr. Never raises a CalculatorError: it is returned as Result.error instead."""
    try:
        return Result(value=evaluate(parse(expr, logger=logger), logger))
    except RecursionError:
        error = NestingTooDeep("expression '{}' is nested too deeply", expr)
    except CalculatorError as caught:
        error = caught

    if logger is not None:
        logger.debug("%s: %s", error.kind, error)
    return Result(error=error)
