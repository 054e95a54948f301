"""
Residual classes: the arithmetic-progression primitive of a sieve.
"""

from dataclasses import dataclass

from .util import intersection


@dataclass(frozen=True, order=True)
class Residual:
    """
    The set {shift + k * modulus : k integer}.

    A modulus of 0 denotes the empty set. The shift is always stored in
    canonical form: 0 <= shift < modulus, or 0 when the modulus is 0.
    """
    modulus: int
    shift: int = 0

    def __post_init__(self):
        if self.modulus < 0:
            raise ValueError(f"Residual modulus must be non-negative, got {self.modulus}")
        shift = self.shift % self.modulus if self.modulus else 0
        object.__setattr__(self, 'shift', shift)

    def contains(self, value: int) -> bool:
        """Check whether value belongs to this residual class."""
        if self.modulus == 0:
            return False
        return (value - self.shift) % self.modulus == 0

    def __contains__(self, value: int) -> bool:
        return self.contains(value)

    def intersect(self, other: 'Residual') -> 'Residual':
        """Return the residual class shared by self and other."""
        m, s = intersection(self.modulus, self.shift, other.modulus, other.shift)
        return Residual(m, s)

    def __and__(self, other: 'Residual') -> 'Residual':
        if not isinstance(other, Residual):
            return NotImplemented
        return self.intersect(other)

    def __str__(self) -> str:
        return f"{self.modulus}@{self.shift}"
