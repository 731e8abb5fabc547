"""Error handling for the calculator language. Only CalculatorErrors should be encountered while parsing or evaluating:
if another type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Error kinds are split into two families:
    - ParseError: raised while building the expression tree, before anything is evaluated
    - EvaluationError: raised while folding a finished tree into an integer
"""

import sys

from termcolor import colored


class CalculatorError(Exception):
    """Templates an error message so that it can be used to report a calculator error. exprs fill the '{}' placeholders
    of msg. source is the whole expression being parsed (defaults to exprs[0]), and start and end delimit the
    offending part of it.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False, source=None):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = source if source is not None else exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

    @property
    def kind(self):
        """Name of this error kind, ex: 'DivisionByZero'."""
        return type(self).__name__


class ParseError(CalculatorError):
    """Any error that makes an expression syntactically invalid."""


class UnparsableExpression(ParseError):
    """Expression is neither an integer, a variable nor an operator call."""


class MalformedArguments(ParseError):
    """Operator arguments cannot be split into the expected number of top-level parts."""


class InvalidVariableName(ParseError):
    """First argument of a let expression is not a valid identifier."""


class UnknownOperator(ParseError):
    """Operator call uses a name other than add, sub, mult, div or let."""


class UndefinedVariable(ParseError):
    """Variable is referenced inside a let scope, but no enclosing let defines it."""


class VariableOutOfContext(ParseError):
    """Variable is referenced outside of any let scope."""


class IntegerOverflowLiteral(ParseError):
    """Integer literal does not fit in a 32-bit signed integer."""


class NestingTooDeep(ParseError):
    """Operator calls are nested deeper than the parser allows."""


class EvaluationError(CalculatorError):
    """Any error encountered while computing the value of a well-formed expression."""


class DivisionByZero(EvaluationError):
    """Divisor of a div expression evaluates to zero."""


class IntegerOverflow(EvaluationError):
    """Result of an arithmetic operation does not fit in a 32-bit signed integer."""


class ErrorHandler:
    """Context manager that will report CalculatorErrors, and report any other Python error as an internal one."""
    ERROR = "red"

    def __init__(self, fatal=True, out=None):
        self.fatal = fatal
        self.out = out if out is not None else sys.stdout
        self.errors = []

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded, with a caret line underneath."""
        color = ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Reports error, which must be a CalculatorError. Exits if self.fatal."""
        self.errors.append(error)

        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=self.out)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error), file=self.out)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(CalculatorError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(CalculatorError("expression is nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, CalculatorError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(CalculatorError("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
