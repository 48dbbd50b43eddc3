"""Hexagonal grid coordinates.

Two addressing schemes are used:

* `HexCoord` - cube coordinates, for arithmetic (distance, rounding, lerp).
* `Position` - "odd-q" offset coordinates, the column/row pair that game state uses.

https://www.redblobgames.com/grids/hexagons/#coordinates
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, RootModel, model_validator

CubeFloat = tuple[float, float, float]


class HexCoord(RootModel[tuple[int, int, int]]):
    """Hex coordinate definition, using cube coordinates.

    https://www.redblobgames.com/grids/hexagons/#coordinates
    """

    model_config = {"frozen": True}

    root: tuple[int, int, int]

    @property
    def q(self) -> int:
        """First 'q' coordinate (the column axis)."""
        return self.root[0]

    @property
    def r(self) -> int:
        """Second 'r' coordinate."""
        return self.root[1]

    @property
    def s(self) -> int:
        """Third 's' coordinate."""
        return self.root[2]

    @model_validator(mode="before")
    @classmethod
    def _set_third_coord(cls, data: Any) -> Any:
        """Set third coordinate if only given two."""
        if isinstance(data, (list, tuple)):
            if len(data) == 2:
                q, r = data
                return (q, r, -(q + r))
        return data

    @model_validator(mode="after")
    def _check_values(self) -> "HexCoord":
        """Check that coordinate values are okay."""
        q, r, s = self.q, self.r, self.s
        if q + r + s != 0:
            raise ValueError(f"Imbalanced hex coords: sum({q}, {r}, {s}) != 0")
        return self

    # Comparison operations

    def __eq__(self, rhs: object) -> bool:
        if isinstance(rhs, HexCoord):
            return self.root == rhs.root
        return NotImplemented

    def __ne__(self, rhs: object) -> bool:
        if isinstance(rhs, HexCoord):
            return self.root != rhs.root
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.root)

    # Vector operations

    def __add__(self, rhs: "HexCoord") -> "HexCoord":
        """Add this delta to a coordinate (or another delta)."""
        if isinstance(rhs, HexCoord):
            return HexCoord(root=(self.q + rhs.q, self.r + rhs.r, self.s + rhs.s))
        return NotImplemented

    def __sub__(self, rhs: "HexCoord") -> "HexCoord":
        """Delta between two coordinates."""
        if isinstance(rhs, HexCoord):
            return HexCoord(root=(self.q - rhs.q, self.r - rhs.r, self.s - rhs.s))
        return NotImplemented

    def __neg__(self) -> "HexCoord":
        """Coordinate negation."""
        return HexCoord(root=(-self.q, -self.r, -self.s))

    # Neighbors

    @property
    def neighbors(self) -> list["HexCoord"]:
        """Get direct neighbors of this cell.

        https://www.redblobgames.com/grids/hexagons/#neighbors
        """
        return [self + vec for vec in HEX_UNIT_VECTORS]

    def get_neighborhood(self, distance: int = 1) -> list["HexCoord"]:
        """Get cells at most `distance` tiles away from self (including self)."""
        N = distance
        res: list[HexCoord] = []
        for q in range(-N, N + 1):
            for r in range(max(-N, -q - N), min(N, -q + N) + 1):
                s = -q - r
                res.append(self + HexCoord(root=(q, r, s)))
        return res

    @property
    def vector_length(self) -> int:
        """Length of the coord as a vector (i.e. distance from center).

        Same as `(|q| + |r| + |s|) / 2`, since the components sum to zero.

        https://www.redblobgames.com/grids/hexagons/#distances
        """
        return (abs(self.q) + abs(self.r) + abs(self.s)) // 2

    def distance_to(self, other: "HexCoord") -> int:
        """Number of steps between two cells."""
        return (self - other).vector_length

    #

    @classmethod
    def nearest_hex(cls, qf: float, rf: float, sf: float) -> "HexCoord":
        """Nearest coordinates.

        Each component is rounded, then the one with the largest rounding error
        is recomputed from the other two, so that `q + r + s == 0` holds exactly.
        Equal errors are resolved in the order q, r, s.

        https://www.redblobgames.com/grids/hexagons/#rounding
        """
        q = round(qf)
        r = round(rf)
        s = round(sf)

        qd = abs(q - qf)
        rd = abs(r - rf)
        sd = abs(s - sf)

        if (qd >= rd) and (qd >= sd):
            q = -(r + s)
        elif rd >= sd:
            r = -(q + s)
        else:
            s = -(q + r)
        return cls(root=(q, r, s))

    def lerp(self, other: "HexCoord", t: float) -> CubeFloat:
        """Fractional cube coordinates a fraction `t` of the way to `other`.

        https://www.redblobgames.com/grids/hexagons/#line-drawing
        """
        return (
            self.q + (other.q - self.q) * t,
            self.r + (other.r - self.r) * t,
            self.s + (other.s - self.s) * t,
        )


HEX_UNIT_VECTORS = tuple(
    HexCoord(root=_tup)
    for _tup in [(1, 0, -1), (1, -1, 0), (0, -1, 1), (-1, 0, 1), (-1, 1, 0), (0, 1, -1)]
)
"""Vector directions in 'cube' coordinates for hexes."""


class Position(BaseModel):
    """Cell address in an "odd-q" offset grid.

    Columns are `x`, rows are `y`; odd columns sit half a cell lower.
    Can be given as an `(x, y)` pair.

    https://www.redblobgames.com/grids/hexagons/#conversions-offset
    """

    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        """Accept `(x, y)` pairs."""
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"Expected an (x, y) pair, got: {data!r}")
            x, y = data
            return {"x": x, "y": y}
        return data

    @property
    def as_tuple(self) -> tuple[int, int]:
        """Position as a plain `(x, y)` tuple."""
        return (self.x, self.y)

    def to_cube(self) -> HexCoord:
        """Convert to cube coordinates."""
        q = self.x
        r = self.y - (self.x - (self.x & 1)) // 2
        return HexCoord(root=(q, r, -(q + r)))

    @classmethod
    def from_cube(cls, coord: HexCoord) -> "Position":
        """Convert from cube coordinates."""
        col = coord.q
        row = coord.r + (coord.q - (coord.q & 1)) // 2
        return cls(x=col, y=row)

    @property
    def neighbors(self) -> list["Position"]:
        """The six adjacent cells (the pattern depends on column parity)."""
        return [Position.from_cube(c) for c in self.to_cube().neighbors]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


def hex_distance(a: Position, b: Position) -> int:
    """Hex distance between two offset positions."""
    return a.to_cube().distance_to(b.to_cube())
