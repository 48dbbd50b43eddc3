"""Tests for cube and offset hex coordinates."""

import pytest
from pydantic import ValidationError

from hex_tactics.grid.hexes import HexCoord, Position, hex_distance


def pos(x: int, y: int) -> Position:
    return Position(x=x, y=y)


class TestHexCoord:
    """Cube coordinate behaviour."""

    def test_third_coord_is_derived(self):
        """Two coordinates are enough."""
        assert HexCoord.model_validate((2, -3)) == HexCoord(root=(2, -3, 1))

    def test_imbalanced_coords_rejected(self):
        """Coordinates must sum to zero."""
        with pytest.raises(ValidationError):
            HexCoord(root=(1, 1, 1))

    def test_vector_ops(self):
        """Addition, subtraction and negation work component-wise."""
        a = HexCoord(root=(1, -2, 1))
        b = HexCoord(root=(2, 0, -2))
        assert a + b == HexCoord(root=(3, -2, -1))
        assert a - b == HexCoord(root=(-1, -2, 3))
        assert -a == HexCoord(root=(-1, 2, -1))

    def test_usable_as_dict_key(self):
        """Equal coordinates hash equally."""
        d = {HexCoord(root=(1, -1, 0)): "x"}
        assert d[HexCoord(root=(1, -1, 0))] == "x"

    def test_neighborhood_sizes(self):
        """Neighborhoods are hexagonal numbers and include the center."""
        center = HexCoord(root=(2, -1, -1))
        assert len(center.get_neighborhood(0)) == 1
        assert len(center.get_neighborhood(1)) == 7
        assert len(center.get_neighborhood(2)) == 19
        assert center in center.get_neighborhood(2)
        assert all(center.distance_to(c) <= 2 for c in center.get_neighborhood(2))

    def test_neighbors_are_adjacent(self):
        """All six neighbors are one step away."""
        center = HexCoord(root=(0, 0, 0))
        assert len(set(center.neighbors)) == 6
        assert all(center.distance_to(n) == 1 for n in center.neighbors)


class TestNearestHex:
    """Cube rounding with largest-error correction."""

    @pytest.mark.parametrize(
        "qf, rf",
        [
            (0.0, 0.0),
            (0.4, 0.4),
            (0.5, -0.5),
            (1.49, -0.51),
            (-2.3, 1.7),
            (3.5, 3.5),
            (-0.49, -0.49),
            (7.2, -4.6),
            (0.3333, 0.3333),
        ],
    )
    def test_rounding_keeps_cube_constraint(self, qf: float, rf: float):
        """The rounded cell always satisfies q + r + s == 0."""
        cell = HexCoord.nearest_hex(qf, rf, -qf - rf)
        assert cell.q + cell.r + cell.s == 0

    def test_exact_cell_unchanged(self):
        """Integer inputs round to themselves."""
        assert HexCoord.nearest_hex(2.0, -5.0, 3.0) == HexCoord(root=(2, -5, 3))

    def test_largest_error_is_corrected(self):
        """The component furthest from an integer is recomputed."""
        # naive rounding gives (1, 1, -1); r has the largest error
        assert HexCoord.nearest_hex(0.7, 0.6, -1.3) == HexCoord(root=(1, 0, -1))
        # s has the largest error
        assert HexCoord.nearest_hex(0.3, 0.3, -0.6) == HexCoord(root=(0, 0, 0))
        assert HexCoord.nearest_hex(0.1, 0.6, -0.7) == HexCoord(root=(0, 1, -1))

    def test_tie_prefers_q(self):
        """Equal errors on q and r correct q."""
        assert HexCoord.nearest_hex(0.4, 0.4, -0.8) == HexCoord(root=(1, 0, -1))


class TestPosition:
    """Odd-q offset positions."""

    def test_from_pair(self):
        """Positions can be given as pairs."""
        assert Position.model_validate((3, 4)) == pos(3, 4)
        assert Position.model_validate([0, 9]) == pos(0, 9)

    def test_bad_pair(self):
        """Only pairs are accepted."""
        with pytest.raises(ValidationError):
            Position.model_validate((1, 2, 3))

    @pytest.mark.parametrize("x", range(-2, 12))
    @pytest.mark.parametrize("y", range(-1, 10, 3))
    def test_cube_round_trip(self, x: int, y: int):
        """Offset -> cube -> offset is the identity."""
        p = pos(x, y)
        assert Position.from_cube(p.to_cube()) == p

    def test_neighbors_even_column(self):
        """Even columns: neighbors to the side sit on the same row and the one above."""
        expected = {pos(3, 3), pos(3, 2), pos(2, 2), pos(1, 2), pos(1, 3), pos(2, 4)}
        assert set(pos(2, 3).neighbors) == expected

    def test_neighbors_odd_column(self):
        """Odd columns: neighbors to the side sit on the same row and the one below."""
        expected = {pos(4, 4), pos(4, 3), pos(3, 2), pos(2, 3), pos(2, 4), pos(3, 4)}
        assert set(pos(3, 3).neighbors) == expected

    def test_hashable(self):
        """Positions work in sets."""
        assert len({pos(1, 1), pos(1, 1), pos(2, 1)}) == 2


class TestHexDistance:
    """Distances between offset positions."""

    def test_same_cell(self):
        assert hex_distance(pos(4, 4), pos(4, 4)) == 0

    def test_along_row(self):
        """Moving along a row zig-zags but costs one per column."""
        assert hex_distance(pos(2, 3), pos(7, 3)) == 5

    def test_along_column(self):
        assert hex_distance(pos(3, 0), pos(3, 9)) == 9

    def test_symmetric(self):
        a, b = pos(0, 0), pos(10, 9)
        assert hex_distance(a, b) == hex_distance(b, a)

    def test_corner_to_corner(self):
        """Top-left to bottom-right of an 11x10 grid."""
        # (0, 0) -> cube (0, 0, 0); (10, 9) -> cube (10, 4, -14)
        assert hex_distance(pos(0, 0), pos(10, 9)) == 14
