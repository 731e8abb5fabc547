"""Expression tree for the calculator language, and its evaluation.

Every node is immutable and exclusively owns its children. There are exactly four kinds of node:

```
IntegerLiteral(value)               ; evaluates to value
Variable(name, value)               ; value was resolved while parsing, so evaluates to value
BinaryOp(operator, left, right)     ; add, sub, mult or div of its two operands
Binding(name, bound, body)          ; let expression: evaluates to body (bound was folded into body's Variables)
```

Evaluation is a pure fold over the tree, so evaluating the same tree any number of times gives the same result.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from calculator.lang import numerical


class Operator(Enum):
    """Binary arithmetic operators, valued by their name in the language."""
    ADD = "add"
    SUB = "sub"
    MUL = "mult"
    DIV = "div"

    @property
    def verb(self):
        """Used for log messages."""
        return {"add": "addition", "sub": "subtraction", "mult": "multiplication", "div": "division"}[self.value]


class Expression:
    """Superclass providing rendering for all tree nodes. Subclasses should define nodes and __str__."""

    @property
    def nodes(self):
        return ()

    def display(self, indents=0):
        """Recursively displays tree with readable format.

        Format:
        <Expression>(expr='<expr>', nodes=[
            <Expression>(expr='<expr>', nodes=[
                ...
                <Expression>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Variable(Expression):
    name: str
    value: int

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class BinaryOp(Expression):
    operator: Operator
    left: Expression
    right: Expression

    @property
    def nodes(self):
        return self.left, self.right

    def __str__(self):
        return f"{self.operator.value}({self.left},{self.right})"


@dataclass(frozen=True)
class Binding(Expression):
    name: str
    bound: Expression
    body: Expression

    @property
    def nodes(self):
        return self.bound, self.body

    def __str__(self):
        return f"let({self.name},{self.bound},{self.body})"


def evaluate(node, logger=None):
    """Computes the integer value of node. Only EvaluationErrors can be raised here: everything else has been checked
    by the parser.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if isinstance(node, (IntegerLiteral, Variable)):
        return node.value

    elif isinstance(node, Binding):
        logger.info("Performing assignment")
        return evaluate(node.body, logger)

    elif isinstance(node, BinaryOp):
        left = evaluate(node.left, logger)
        right = evaluate(node.right, logger)
        logger.info("Performing %s", node.operator.verb)

        if node.operator is Operator.ADD:
            return numerical.checked(left + right, node)
        elif node.operator is Operator.SUB:
            return numerical.checked(left - right, node)
        elif node.operator is Operator.MUL:
            return numerical.checked(left * right, node)
        return numerical.truncated_div(left, right, node)

    raise TypeError(f"cannot evaluate {type(node).__name__}")
