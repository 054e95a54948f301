"""
Number-theory helpers used by residual intersection.
"""

from typing import Tuple


def gcd(n: int, m: int) -> int:
    """
    Greatest common divisor of two strictly positive integers.

    Raises:
        ArithmeticError: If either operand is not positive
    """
    if n <= 0 or m <= 0:
        raise ArithmeticError(f"gcd requires positive operands, got {n} and {m}")
    while m != 0:
        if m < n:
            n, m = m, n
        m = m % n
    return n


def modular_inverse(a: int, b: int) -> int:
    """
    Least positive g such that (g * a) % b == 1.

    Brute-force search; an extended Euclidean inverse would give the same
    results for coprime inputs and could replace it if large moduli matter.
    """
    if b == 1:
        return 1
    if a == b:
        return 0
    for g in range(1, b):
        if (g * a) % b == 1:
            return g
    raise ArithmeticError(f"{a} has no inverse modulo {b}")


def intersection(m1: int, s1: int, m2: int, s2: int) -> Tuple[int, int]:
    """
    Intersect two residual classes.

    Solves x = s1 (mod m1), x = s2 (mod m2) and returns the (modulus, shift)
    of the resulting class, or (0, 0) when the classes are disjoint.

    Examples:
        intersection(4, 0, 3, 0) -> (12, 0)
        intersection(4, 0, 3, 1) -> (12, 4)
        intersection(5, 2, 10, 3) -> (0, 0)
    """
    if m1 == 0 or m2 == 0:
        return 0, 0

    s1 = s1 % m1
    s2 = s2 % m2

    d = gcd(m1, m2)
    md1 = m1 // d
    md2 = m2 // d
    # unsigned distance between shifts, not a signed difference
    span = abs(s2 - s1)

    if d != 1 and span % d != 0:
        return 0, 0

    m = md1 * md2 * d
    return m, (s1 + modular_inverse(md1, md2) * span * md1) % m
