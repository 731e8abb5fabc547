"""Parse-time scope chain for let expressions.

A Scope is one committed let binding: its variable name, the integer its value expression evaluated to, and the
lexically enclosing Scope. Scopes are immutable and form a persistent singly-linked list, so extending a chain for a
let body never affects the chain its siblings are parsed against. The chain only exists while a tree is being built:
once a Variable is resolved, its value is copied into the tree.

Binding a let variable is done in two steps:
    1. PendingScope(name, parent): the name is known, its value is not, so nothing can resolve against it yet
    2. PendingScope.commit(value): returns the Scope that the let body is parsed against
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Scope:
    name: str
    value: int
    parent: Optional["Scope"] = None

    def find(self, name):
        """Returns the innermost Scope binding name, or None if no Scope in the chain does."""
        scope = self
        while scope is not None:
            if scope.name == name:
                return scope
            scope = scope.parent
        return None

    @property
    def depth(self):
        """Number of let expressions enclosing (and including) this one."""
        depth, scope = 0, self
        while scope is not None:
            depth += 1
            scope = scope.parent
        return depth

    def names(self):
        """Visible variable names, innermost first (shadowed names are listed once)."""
        names, scope = [], self
        while scope is not None:
            if scope.name not in names:
                names.append(scope.name)
            scope = scope.parent
        return names


@dataclass(frozen=True)
class PendingScope:
    """A let binding whose value expression has not been evaluated yet."""
    name: str
    parent: Optional[Scope] = None

    def commit(self, value):
        return Scope(self.name, value, self.parent)
