"""
xensieve - Boolean combinations of residual classes over the integers.

Main API:
    from xensieve import Sieve

    # Compile an expression
    s = Sieve("!(3@0|5@1|5@4)|9@6")

    # Membership
    s.contains(15)
    15 in s

    # Combine
    t = Sieve("5@0") | Sieve("5@1")
    u = ~t & Sieve("2@0")

    # Lazy iteration over any integer sequence
    list(Sieve("3@0&4@0").iter_value(range(25)))     # [0, 12, 24]
    list(Sieve("3@0|4@1").iter_interval(range(10)))  # [1, 2, 2, 1, 3]
"""

from .residual import Residual
from .sieve import Sieve
from .parser import (
    ExpressionError,
    InvalidResidualError,
    UnsupportedCharacterError,
    MissingOperandError,
    InvalidExpressionError,
)

__version__ = "0.1.0"
__all__ = [
    "Sieve",
    "Residual",
    "ExpressionError",
    "InvalidResidualError",
    "UnsupportedCharacterError",
    "MissingOperandError",
    "InvalidExpressionError",
]
