"""Pixel layout for the flat-topped, odd-q hex grid."""

from math import cos, radians, sin, sqrt

from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field

from .hexes import HexCoord, Position

XYCoord = tuple[float, float]

BBoxFloat = tuple[float, float, float, float]
"""Bounding box: (left, upper, right, lower)."""

DEFAULT_HEX_SIZE = 30.0


class HexLayout(BaseModel):
    """Conversion between grid cells and pixel coordinates.

    Pixel `y` grows downwards, as on a canvas.
    """

    model_config = ConfigDict(frozen=True)

    size: Annotated[
        float, Field(gt=0, description="Hexagon radius (center to corner).")
    ] = DEFAULT_HEX_SIZE
    origin: Annotated[
        XYCoord, Field(description="Pixel position of the center of cell (0, 0).")
    ] = (0.0, 0.0)

    def hex_center(self, pos: Position) -> XYCoord:
        """Pixel center of a cell.

        https://www.redblobgames.com/grids/hexagons/#hex-to-pixel-offset
        """
        x = self.size * 1.5 * pos.x
        y = sqrt(3) * self.size * (pos.y + 0.5 * (pos.x & 1))
        return x + self.origin[0], y + self.origin[1]

    def hex_vertices(self, pos: Position) -> list[XYCoord]:
        """The six corners of a cell, starting east and going clockwise on screen."""
        cx, cy = self.hex_center(pos)
        res: list[XYCoord] = []
        for i in range(6):
            angle = radians(60 * i)
            res.append((cx + self.size * cos(angle), cy + self.size * sin(angle)))
        return res

    def pixel_to_hex(self, x: float, y: float) -> Position:
        """Cell containing a pixel.

        https://www.redblobgames.com/grids/hexagons/#pixel-to-hex
        """
        px = x - self.origin[0]
        py = y - self.origin[1]
        qf = px * (2.0 / 3) / self.size
        rf = (-1.0 / 3 * px + sqrt(3) / 3 * py) / self.size
        cube = HexCoord.nearest_hex(qf, rf, -qf - rf)
        return Position.from_cube(cube)

    def grid_bbox(self, width: int, height: int) -> BBoxFloat:
        """Pixel bounding box of a `width` x `height` grid."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Empty grid: {width} x {height}")
        corners = [
            vtx
            for x in range(width)
            for y in range(height)
            for vtx in self.hex_vertices(Position(x=x, y=y))
        ]
        min_x = min(c[0] for c in corners)
        min_y = min(c[1] for c in corners)
        max_x = max(c[0] for c in corners)
        max_y = max(c[1] for c in corners)
        return (min_x, min_y, max_x, max_y)


def hex_center(pos: Position, size: float) -> XYCoord:
    """Pixel center of `pos` for hexes of radius `size`."""
    return HexLayout(size=size).hex_center(pos)


def hex_vertices(pos: Position, size: float) -> list[XYCoord]:
    """Corners of `pos` for hexes of radius `size`."""
    return HexLayout(size=size).hex_vertices(pos)


def pixel_to_hex(x: float, y: float, size: float) -> Position:
    """Cell under pixel `(x, y)` for hexes of radius `size`."""
    return HexLayout(size=size).pixel_to_hex(x, y)
