"""
Tests for the Residual value type.
"""

import dataclasses

import pytest

from xensieve.residual import Residual


class TestResidualCanonicalForm:
    """Test construction and canonicalization."""

    def test_shift_is_reduced_modulo_modulus(self):
        assert str(Residual(5, 10)) == "5@0"
        assert str(Residual(5, 13)) == "5@3"

    def test_zero_modulus_forces_zero_shift(self):
        assert str(Residual(0, 5)) == "0@0"

    def test_default_shift_is_zero(self):
        assert Residual(7) == Residual(7, 0)

    def test_negative_shift_is_canonicalized(self):
        assert Residual(5, -1).shift == 4

    def test_negative_modulus_is_rejected(self):
        with pytest.raises(ValueError):
            Residual(-3, 1)

    def test_residual_is_immutable(self):
        r = Residual(3, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.shift = 2


class TestResidualMembership:
    """Test contains()."""

    def test_contains_members(self):
        r = Residual(5, 4)
        assert r.contains(4)
        assert r.contains(9)
        assert not r.contains(5)

    def test_contains_negative_values(self):
        r = Residual(5, 4)
        assert r.contains(-1)
        assert r.contains(-6)
        assert not r.contains(-4)

    def test_in_operator(self):
        assert 6 in Residual(3, 0)
        assert 7 not in Residual(3, 0)

    @pytest.mark.parametrize("modulus,shift", [(1, 0), (3, 1), (7, 6), (12, 5)])
    def test_membership_is_periodic(self, modulus, shift):
        r = Residual(modulus, shift)
        for v in range(-50, 50):
            assert r.contains(v) == r.contains(v + modulus)

    def test_zero_modulus_contains_nothing(self):
        r = Residual(0, 5)
        assert not any(r.contains(v) for v in range(-50, 50))


class TestResidualComparison:
    """Test equality, hashing and ordering."""

    def test_equal_after_canonicalization(self):
        assert Residual(5, 10) == Residual(5, 0)
        assert hash(Residual(5, 10)) == hash(Residual(5, 0))

    def test_ordering_by_modulus_then_shift(self):
        residuals = [Residual(5, 1), Residual(3, 2), Residual(5, 0), Residual(3, 0)]
        assert sorted(residuals) == [
            Residual(3, 0), Residual(3, 2), Residual(5, 0), Residual(5, 1),
        ]

    def test_usable_in_sets(self):
        assert len({Residual(4, 1), Residual(4, 5), Residual(4, 2)}) == 2


class TestResidualIntersection:
    """Test intersect() and the & operator."""

    def test_intersect_coprime(self):
        assert str(Residual(4, 0).intersect(Residual(3, 0))) == "12@0"
        assert str(Residual(4, 0).intersect(Residual(3, 1))) == "12@4"

    def test_intersect_incompatible(self):
        assert str(Residual(5, 2).intersect(Residual(10, 3))) == "0@0"

    def test_intersect_with_empty(self):
        assert Residual(0).intersect(Residual(3, 1)) == Residual(0)

    def test_and_operator(self):
        assert Residual(4, 0) & Residual(3, 1) == Residual(12, 4)

    def test_and_with_other_type_is_unsupported(self):
        with pytest.raises(TypeError):
            Residual(4, 0) & 3

    def test_intersection_members_belong_to_both(self):
        a = Residual(6, 1)
        b = Residual(4, 3)
        c = a.intersect(b)
        for v in range(-48, 48):
            assert c.contains(v) == (a.contains(v) and b.contains(v))
