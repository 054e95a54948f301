"""
Lazy adapters that run a combination tree over an integer sequence.

Each adapter is a generator: it pulls one value from the source per step and
keeps no state beyond what the adapter needs. Like any generator it is
single-pass; iterate again with a fresh source.
"""

from typing import Iterable, Iterator, Optional

from .tree import Node


def iter_value(node: Node, source: Iterable[int]) -> Iterator[int]:
    """Yield the values of source contained in the sieve."""
    for value in source:
        if node.contains(value):
            yield value


def iter_state(node: Node, source: Iterable[int]) -> Iterator[bool]:
    """Yield one membership flag per value of source."""
    for value in source:
        yield node.contains(value)


def iter_interval(node: Node, source: Iterable[int]) -> Iterator[int]:
    """
    Yield the gaps between successive contained values of source.

    The first contained value only starts the count, so n contained values
    produce n - 1 intervals.

    Example:
        Sieve("3@0|4@1") over range(10) contains 0, 1, 3, 5, 6, 9
        and yields 1, 2, 2, 1, 3
    """
    last: Optional[int] = None
    for value in source:
        if not node.contains(value):
            continue
        if last is not None:
            yield value - last
        last = value
