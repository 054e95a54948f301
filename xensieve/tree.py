"""
Combination tree for sieves.

A sieve is a Boolean combination of residual classes:

    node := Unit(residual)
          | Intersection(node, node)      rendered  a&b
          | Union(node, node)             rendered  a|b
          | SymmetricDifference(node, node)  rendered  a^b
          | Inversion(node)               rendered  !(a)

Nodes are frozen; combining trees always builds new nodes around the
existing subtrees. Evaluation, rendering and description walk the tree
with an explicit stack, so long chains do not hit the recursion limit.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Tuple, TypeVar

from .residual import Residual

T = TypeVar('T')


class Node(ABC):
    """Base class for combination tree nodes."""

    @property
    @abstractmethod
    def children(self) -> Tuple['Node', ...]:
        """Direct subtrees, left to right."""

    @abstractmethod
    def evaluate(self, value: int, args: List[bool]) -> bool:
        """Membership of value given the results of the children."""

    @abstractmethod
    def render(self, args: List[str]) -> str:
        """Text of this node given the rendered children."""

    @abstractmethod
    def describe(self, args: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Plain-dict form of this node given the described children."""

    def walk(self) -> Iterator['Node']:
        """Yield every node in postfix order (children before parents)."""
        stack: List[Tuple[Node, bool]] = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if expanded or not node.children:
                yield node
                continue
            stack.append((node, True))
            for child in reversed(node.children):
                stack.append((child, False))

    def fold(self, visit: Callable[['Node', List[T]], T]) -> T:
        """
        Reduce the tree bottom-up.

        Args:
            visit: Called with each node and the reduced values of its
                children, in order

        Returns:
            The reduced value of this node
        """
        results: List[T] = []
        for node in self.walk():
            arity = len(node.children)
            args = results[len(results) - arity:]
            del results[len(results) - arity:]
            results.append(visit(node, args))
        return results[0]

    def contains(self, value: int) -> bool:
        return self.fold(lambda node, args: node.evaluate(value, args))

    def residuals(self) -> Iterator[Residual]:
        """Yield leaf residuals from left to right."""
        for node in self.walk():
            if isinstance(node, Unit):
                yield node.residual

    def to_dict(self) -> Dict[str, Any]:
        return self.fold(lambda node, args: node.describe(args))

    def __str__(self) -> str:
        return self.fold(lambda node, args: node.render(args))


@dataclass(frozen=True)
class Unit(Node):
    residual: Residual

    @property
    def children(self) -> Tuple[Node, ...]:
        return ()

    def evaluate(self, value: int, args: List[bool]) -> bool:
        return self.residual.contains(value)

    def render(self, args: List[str]) -> str:
        return str(self.residual)

    def describe(self, args: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {'unit': str(self.residual)}


@dataclass(frozen=True)
class BinaryNode(Node):
    """Node with two children combined by a Boolean operator."""
    left: Node
    right: Node

    symbol = ''
    name = ''

    @abstractmethod
    def combine(self, a: bool, b: bool) -> bool:
        """Boolean operator applied to the two child results."""

    @property
    def children(self) -> Tuple[Node, ...]:
        return (self.left, self.right)

    def evaluate(self, value: int, args: List[bool]) -> bool:
        # both sides already evaluated
        return self.combine(args[0], args[1])

    def render(self, args: List[str]) -> str:
        # no parentheses around binary combinations
        return f"{args[0]}{self.symbol}{args[1]}"

    def describe(self, args: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {self.name: args}


@dataclass(frozen=True)
class Intersection(BinaryNode):
    symbol = '&'
    name = 'intersect'

    def combine(self, a: bool, b: bool) -> bool:
        return a and b


@dataclass(frozen=True)
class Union(BinaryNode):
    symbol = '|'
    name = 'union'

    def combine(self, a: bool, b: bool) -> bool:
        return a or b


@dataclass(frozen=True)
class SymmetricDifference(BinaryNode):
    symbol = '^'
    name = 'symmetric_difference'

    def combine(self, a: bool, b: bool) -> bool:
        return a != b


@dataclass(frozen=True)
class Inversion(Node):
    child: Node

    @property
    def children(self) -> Tuple[Node, ...]:
        return (self.child,)

    def evaluate(self, value: int, args: List[bool]) -> bool:
        return not args[0]

    def render(self, args: List[str]) -> str:
        return f"!({args[0]})"

    def describe(self, args: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {'invert': args[0]}
