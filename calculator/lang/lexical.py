"""Lexical analysis and tree generation for the calculator language. Parsing and variable resolution happen in the same
top-down, left-to-right pass: by the time a tree is returned, every Variable in it already carries its value.

All grammar can be loosely defined as follows:

```
<expr>     ::= <integer> | <variable> | <operator> "(" <args> ")"
<integer>  ::= ["-"] <digit>+                     ; must fit in a 32-bit signed integer
<variable> ::= <letter>+                          ; only valid inside the body of a let expression
<operator> ::= "add" | "sub" | "mult" | "div"     ; <args> ::= <expr> "," <expr>
             | "let"                              ; <args> ::= <variable> "," <expr> "," <expr>
```

Arguments are separated by top-level commas, i.e. commas that aren't enclosed in any pair of parentheses. Whitespace is
not part of the language.
"""

import logging
import re
from abc import abstractmethod, ABC

from calculator.lang import numerical
from calculator.lang.error import (InvalidVariableName, MalformedArguments, NestingTooDeep, UndefinedVariable,
                                   UnknownOperator, UnparsableExpression, VariableOutOfContext)
from calculator.lang.scope import PendingScope
from calculator.lang.tree import Binding, BinaryOp, IntegerLiteral, Operator, Variable, evaluate


def are_parens_balanced(expr):
    """Checks if parentheses are balanced within expr."""
    parens_balance = 0
    for char in expr:
        if parens_balance < 0:
            break
        elif char == "(":
            parens_balance += 1
        elif char == ")":
            parens_balance -= 1
    return parens_balance == 0


def top_level_comma(expr):
    """Returns index of the first comma in expr not enclosed in any set of parentheses, or -1 if there is none."""
    parens_balance = 0
    for idx, char in enumerate(expr):
        if char == "," and parens_balance == 0:
            return idx
        elif char == "(":
            parens_balance += 1
        elif char == ")":
            parens_balance -= 1
    return -1


class Grammar(ABC):
    """Superclass representing one alternative of the <expr> rule. Alternatives are mutually exclusive, so at most one
    subclass accepts any given expr.
    """
    PATTERN: re.Pattern

    @classmethod
    def check_grammar(cls, expr):
        """Whether or not expr matches this alternative's top-level grammar."""
        return cls.PATTERN.fullmatch(expr) is not None

    @staticmethod
    @abstractmethod
    def build(parser, expr, scope, start):
        """This method should return the tree for expr, assuming check_grammar(expr) holds. scope is the innermost
        enclosing Scope (None at top level), and start is the position of expr in parser.original_expr.
        """


class IntegerGrammar(Grammar):
    """Signed integer literal."""
    PATTERN = re.compile(r"-?[0-9]+")

    @staticmethod
    def build(parser, expr, scope, start):
        return IntegerLiteral(numerical.literal(expr, start, parser.original_expr))


class VariableGrammar(Grammar):
    """Reference to a variable bound by an enclosing let expression."""
    PATTERN = re.compile(r"[a-zA-Z]+")

    @staticmethod
    def build(parser, expr, scope, start):
        end = start + len(expr)
        if scope is None:
            msg = "variable '{}' is not allowed: not within the context of a let expression"
            raise VariableOutOfContext(msg, expr, source=parser.original_expr, start=start, end=end)

        parser.logger.debug("Looking for variable %s in %s", expr, scope.names())
        found = scope.find(expr)
        if found is None:
            msg = "undefined variable '{}'"
            raise UndefinedVariable(msg, expr, source=parser.original_expr, start=start, end=end)

        return Variable(expr, found.value)


class OperatorGrammar(Grammar):
    """Operator call: arithmetic on two expressions, or a let expression."""
    PATTERN = re.compile(r"([a-z]+)\((.+)\)")
    ARITY = {**{op.value: 2 for op in Operator}, "let": 3}

    @staticmethod
    def split_arguments(parser, args, count, start):
        """Splits args on top-level commas into exactly count (argument, position) pairs."""
        end = start + len(args)
        if not are_parens_balanced(args):
            msg = "unbalanced parentheses in arguments '{}'"
            raise MalformedArguments(msg, args, source=parser.original_expr, start=start, end=end)

        split, offset = [], start
        for __ in range(count - 1):
            comma = top_level_comma(args)
            if comma == -1:
                msg = "unable to find the comma separating the arguments in '{}'"
                raise MalformedArguments(msg, args, source=parser.original_expr, start=offset, end=end)

            parser.logger.debug("Found comma at position %d", offset + comma)
            split.append((args[:comma], offset))
            args, offset = args[comma + 1:], offset + comma + 1

        if top_level_comma(args) != -1:
            msg = "too many arguments: expected {} but got more"
            raise MalformedArguments(msg, str(count), source=parser.original_expr, start=start, end=end)

        split.append((args, offset))
        return split

    @staticmethod
    def build(parser, expr, scope, start):
        match = OperatorGrammar.PATTERN.fullmatch(expr)
        operator, args = match.group(1), match.group(2)
        parser.logger.debug("Operator is %s with arguments %s", operator, args)

        if operator not in OperatorGrammar.ARITY:
            msg = "unknown operator '{}'"
            raise UnknownOperator(msg, operator, source=parser.original_expr,
                                  start=start, end=start + len(operator))

        arguments = OperatorGrammar.split_arguments(parser, args, OperatorGrammar.ARITY[operator],
                                                    start + match.start(2))
        if operator == "let":
            return OperatorGrammar.build_let(parser, arguments, scope)

        (first, first_start), (second, second_start) = arguments
        parser.logger.info("First argument is %s", first)
        parser.logger.info("Second argument is %s", second)

        left = parser.build(first, scope, first_start)
        right = parser.build(second, scope, second_start)
        return BinaryOp(Operator(operator), left, right)

    @staticmethod
    def build_let(parser, arguments, scope):
        """The value expression is parsed against scope, so it can't see the variable it defines. Its value is
        committed before the body is parsed against the extended scope.
        """
        (name, name_start), (first, first_start), (second, second_start) = arguments
        if not VariableGrammar.check_grammar(name):
            msg = "invalid variable name '{}' in let expression"
            raise InvalidVariableName(msg, name, source=parser.original_expr, start=name_start,
                                      end=name_start + len(name))

        parser.logger.debug("Variable name is %s", name)
        pending = PendingScope(name, scope)

        parser.logger.info("First argument is %s", first)
        parser.logger.info("Second argument is %s", second)

        bound = parser.build(first, scope, first_start)
        inner = pending.commit(evaluate(bound, parser.logger))
        parser.logger.debug("Variable %s is bound to %d", name, inner.value)

        body = parser.build(second, inner, second_start)
        return Binding(name, bound, body)


class Parser:
    """Builds the tree of a single expression. original_expr is kept around for error messages."""
    MAX_DEPTH = 100  # maximum nesting of sub-expressions

    def __init__(self, original_expr, logger=None):
        self.original_expr = original_expr
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.depth = 0

    def build(self, expr, scope=None, start=0):
        """Infers the grammar of expr and returns its tree. Raises UnparsableExpression if no grammar matches, and
        NestingTooDeep if operator calls are nested more than MAX_DEPTH times.
        """
        if self.depth >= Parser.MAX_DEPTH:
            msg = "expression is nested more than {} levels deep"
            raise NestingTooDeep(msg, str(Parser.MAX_DEPTH), source=self.original_expr, start=start,
                                 end=start + len(expr))

        self.depth += 1
        try:
            for grammar in Grammar.__subclasses__():
                if grammar.check_grammar(expr):
                    return grammar.build(self, expr, scope, start)
                self.logger.debug("%s does not match %s", expr, grammar.__name__)
        finally:
            self.depth -= 1

        msg = "unable to parse '{}' as an expression"
        raise UnparsableExpression(msg, expr, source=self.original_expr, start=start,
                                   end=start + len(expr))


def parse(expr, scope=None, logger=None):
    """Returns the tree of expr. scope is the Scope enclosing expr, None for a top-level expression."""
    return Parser(expr, logger).build(expr, scope)
