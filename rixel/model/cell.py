"""Cell coordinates and grid extent for Rixel grids."""

from dataclasses import dataclass
from typing import Iterator, Tuple

DEFAULT_WINDOW_SIZE = 1280


@dataclass(frozen=True)
class GridExtent:
    """
    Fixed rectangular size of a grid, in cells.

    The window size is the pixel-space size the grid is projected onto; it is
    only used for screen coordinates and never changes the cell layout.
    """
    width: int
    height: int
    window_width: int = DEFAULT_WINDOW_SIZE
    window_height: int = DEFAULT_WINDOW_SIZE

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Grid extent must be positive, got {self.width}x{self.height}")
        # Every cell needs at least one pixel on each axis
        if self.window_width < self.width or self.window_height < self.height:
            raise ValueError(
                f"Window {self.window_width}x{self.window_height} is smaller "
                f"than the {self.width}x{self.height} grid")

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def cell_size(self) -> Tuple[float, float]:
        """
        Pixel size of one cell along each axis.

        Tile visuals must be built with this size, otherwise they will not
        line up with CellPosition.to_screen_position.
        """
        return (float(self.window_width // self.width),
                float(self.window_height // self.height))

    def positions(self) -> Iterator["CellPosition"]:
        """Iterate every valid position in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield CellPosition(x, y)


@dataclass(frozen=True, order=True)
class CellPosition:
    """
    Unsigned 2D cell coordinate.

    Coordinate convention: x is the column, y is the row, row 0 is the top
    row on screen and increasing y moves down. A position may lie outside
    any given extent; use within_bounds to check.
    """
    x: int
    y: int

    def __post_init__(self):
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Cell coordinates are unsigned, got ({self.x}, {self.y})")

    @classmethod
    def from_index(cls, index: int, extent: GridExtent) -> "CellPosition":
        """Decode a linear storage index."""
        y, x = divmod(index, extent.width)
        return cls(x, y)

    def to_index(self, extent: GridExtent) -> int:
        """Linear storage index. Not bounds checked."""
        return self.y * extent.width + self.x

    def within_bounds(self, extent: GridExtent) -> bool:
        return self.x < extent.width and self.y < extent.height

    def to_screen_position(self, extent: GridExtent) -> Tuple[float, float]:
        """
        Centre of the cell in window space.

        The grid is centred on the origin and the vertical axis is flipped,
        so screen y grows upward while row indices grow downward.
        """
        size_x, size_y = extent.cell_size()
        left = extent.window_width / 2 - size_x / 2
        top = extent.window_height / 2 - size_y / 2
        return (size_x * self.x - left, -(size_y * self.y - top))

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"CellPosition({self.x}, {self.y})"
