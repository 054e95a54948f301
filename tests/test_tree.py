"""
Tests for combination tree nodes.
"""

import dataclasses

import pytest

from xensieve.residual import Residual
from xensieve.tree import (
    Node, BinaryNode, Unit, Intersection, Union, SymmetricDifference, Inversion,
)


def unit(modulus, shift=0):
    return Unit(Residual(modulus, shift))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fives():
    """5@0|5@1|5@4 built by hand."""
    return Union(Union(unit(5, 0), unit(5, 1)), unit(5, 4))


class TestNodeMembership:
    """Test contains() for every node type."""

    def test_unit_delegates_to_residual(self):
        node = unit(3, 1)
        assert node.contains(4)
        assert not node.contains(3)

    def test_intersection(self):
        node = Intersection(unit(3), unit(4))
        assert [v for v in range(25) if node.contains(v)] == [0, 12, 24]

    def test_union(self, fives):
        assert [v for v in range(10) if fives.contains(v)] == [0, 1, 4, 5, 6, 9]

    def test_symmetric_difference(self):
        node = SymmetricDifference(unit(2), unit(3))
        assert [v for v in range(7) if node.contains(v)] == [2, 3, 4]

    def test_inversion(self, fives):
        node = Inversion(fives)
        assert [v for v in range(10) if node.contains(v)] == [2, 3, 7, 8]

    def test_inversion_of_empty_class_is_everything(self):
        node = Inversion(unit(0))
        assert all(node.contains(v) for v in range(-10, 10))


class TestNodeRendering:
    """Test text rendering."""

    def test_unit_renders_residual(self):
        assert str(unit(5, 10)) == "5@0"

    def test_binary_operator_symbols(self):
        assert str(Intersection(unit(3), unit(4))) == "3@0&4@0"
        assert str(Union(unit(3), unit(4))) == "3@0|4@0"
        assert str(SymmetricDifference(unit(3), unit(4))) == "3@0^4@0"

    def test_inversion_adds_parentheses(self, fives):
        assert str(Inversion(fives)) == "!(5@0|5@1|5@4)"
        assert str(Inversion(unit(3))) == "!(3@0)"

    def test_binary_nesting_is_not_parenthesized(self):
        # (3@0|4@0)&5@0 and 3@0|4@0&5@0 render the same
        node = Intersection(Union(unit(3), unit(4)), unit(5))
        assert str(node) == "3@0|4@0&5@0"


class TestNodeStructure:
    """Test immutability, equality and structural helpers."""

    def test_nodes_are_immutable(self):
        node = Union(unit(3), unit(4))
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.left = unit(5)

    def test_structural_equality(self):
        assert Union(unit(3), unit(4)) == Union(unit(3), unit(4))
        assert Union(unit(3), unit(4)) != Intersection(unit(3), unit(4))
        assert Inversion(unit(3)) == Inversion(unit(3, 3))

    def test_residuals_left_to_right(self, fives):
        node = Intersection(Inversion(fives), unit(9, 6))
        assert [str(r) for r in node.residuals()] == ["5@0", "5@1", "5@4", "9@6"]

    def test_to_dict(self):
        node = Union(Inversion(unit(3)), SymmetricDifference(unit(4, 1), unit(5, 2)))
        assert node.to_dict() == {
            'union': [
                {'invert': {'unit': '3@0'}},
                {'symmetric_difference': [{'unit': '4@1'}, {'unit': '5@2'}]},
            ]
        }

    def test_intersection_to_dict(self):
        assert Intersection(unit(3), unit(4)).to_dict() == {
            'intersect': [{'unit': '3@0'}, {'unit': '4@0'}]
        }


class TestNodeBase:
    """Test the abstract base and the stack-based traversal."""

    def test_base_classes_are_abstract(self):
        with pytest.raises(TypeError):
            Node()
        with pytest.raises(TypeError):
            BinaryNode(unit(3), unit(4))

    def test_walk_is_postfix_order(self, fives):
        rendered = [str(n) for n in Inversion(fives).walk()]
        assert rendered == [
            "5@0", "5@1", "5@0|5@1", "5@4", "5@0|5@1|5@4", "!(5@0|5@1|5@4)"
        ]

    def test_deep_left_chain(self):
        # Given: a left-deep union of 2000 residual classes
        node = unit(7, 0)
        for _ in range(1999):
            node = Union(node, unit(7, 0))

        # Then: every traversal runs without recursion
        assert node.contains(14)
        assert not node.contains(15)
        assert str(node) == "|".join(["7@0"] * 2000)
        assert len(list(node.residuals())) == 2000
        assert 'union' in node.to_dict()
