"""
Sieve: public entry point for building and querying sieves.
"""

from typing import Iterable, Iterator, Union as TypingUnion

from .iterators import iter_interval, iter_state, iter_value
from .parser import parse
from .residual import Residual
from .tree import Node, Unit, Intersection, Union, SymmetricDifference, Inversion


class Sieve:
    """
    A Boolean combination of residual classes.

    Build from an expression or from an existing tree node:

        s = Sieve("3@0|5@1|5@4")
        t = Sieve("!(3@0|5@1|5@4)") | Sieve("9@6")

        4 in Sieve("5@4")                     # True
        list(Sieve("3@0&4@0").iter_value(range(25)))   # [0, 12, 24]

    Sieves are immutable; combinators return new sieves that share the
    operands' trees.
    """

    __slots__ = ('_root',)

    def __init__(self, value: TypingUnion[str, Node]):
        if isinstance(value, Node):
            self._root = value
        elif isinstance(value, str):
            self._root = parse(value)
        else:
            raise TypeError(
                f"Sieve expects an expression string or a tree node, got {type(value).__name__}"
            )

    @classmethod
    def from_residual(cls, residual: Residual) -> 'Sieve':
        return cls(Unit(residual))

    @property
    def root(self) -> Node:
        """The combination tree behind this sieve."""
        return self._root

    def contains(self, value: int) -> bool:
        return self._root.contains(value)

    def __contains__(self, value: int) -> bool:
        return self.contains(value)

    # =========================================================================
    # Combinators
    # =========================================================================

    def intersect(self, other: 'Sieve') -> 'Sieve':
        return Sieve(Intersection(self._root, other._root))

    def union(self, other: 'Sieve') -> 'Sieve':
        return Sieve(Union(self._root, other._root))

    def symmetric_difference(self, other: 'Sieve') -> 'Sieve':
        return Sieve(SymmetricDifference(self._root, other._root))

    def invert(self) -> 'Sieve':
        return Sieve(Inversion(self._root))

    def __and__(self, other):
        if not isinstance(other, Sieve):
            return NotImplemented
        return self.intersect(other)

    def __or__(self, other):
        if not isinstance(other, Sieve):
            return NotImplemented
        return self.union(other)

    def __xor__(self, other):
        if not isinstance(other, Sieve):
            return NotImplemented
        return self.symmetric_difference(other)

    def __invert__(self):
        return self.invert()

    # =========================================================================
    # Iteration
    # =========================================================================

    def iter_value(self, source: Iterable[int]) -> Iterator[int]:
        """Filter source down to the values in this sieve."""
        return iter_value(self._root, source)

    def iter_state(self, source: Iterable[int]) -> Iterator[bool]:
        """Map each value of source to its membership."""
        return iter_state(self._root, source)

    def iter_interval(self, source: Iterable[int]) -> Iterator[int]:
        """Gaps between consecutive values of source in this sieve."""
        return iter_interval(self._root, source)

    def __str__(self) -> str:
        return f"Sieve{{{self._root}}}"

    def __repr__(self) -> str:
        return f"Sieve('{self._root}')"
