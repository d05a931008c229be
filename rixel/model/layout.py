"""Obstacle layouts and the movement mask derived from them."""

from dataclasses import dataclass
from typing import List

import numpy as np

from .cell import CellPosition

WALL = 0
FREE = 1
OBJECTIVE = 2

CELL_CODES = (WALL, FREE, OBJECTIVE)


@dataclass(frozen=True)
class Shifts:
    """Legal step distance (0 or 1) in each axis direction from a cell."""
    top: int
    left: int
    bottom: int
    right: int


class MovementMask:
    """
    Padded passability grid.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    The array is (height + 2) x (width + 2); cell (x, y) lives at
    [y + 1, x + 1] and the outer ring is always 0, so every cell has a full
    3x3 neighbourhood and no move can leave the grid.
    """

    # Offsets inside the 3x3 window anchored at the padded [y, x]
    TOP = (0, 1)
    LEFT = (1, 0)
    BOTTOM = (2, 1)
    RIGHT = (1, 2)

    def __init__(self, passable: np.ndarray):
        height, width = passable.shape
        self.width = width
        self.height = height
        self.grid = np.zeros((height + 2, width + 2), dtype=np.uint8)
        self.grid[1:height + 1, 1:width + 1] = passable
        self.grid.flags.writeable = False

    @classmethod
    def empty(cls, width: int, height: int) -> "MovementMask":
        """Mask with every cell free."""
        return cls(np.ones((height, width), dtype=np.uint8))

    def get_shifts(self, x: int, y: int) -> Shifts:
        """Sample the four axis neighbours of (x, y)."""
        window = self.grid[y:y + 3, x:x + 3]
        return Shifts(
            top=int(window[self.TOP]),
            left=int(window[self.LEFT]),
            bottom=int(window[self.BOTTOM]),
            right=int(window[self.RIGHT]),
        )

    def is_passable(self, x: int, y: int) -> bool:
        """Check if cell is within bounds and not a wall."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return bool(self.grid[y + 1, x + 1])


class ObstacleLayout:
    """
    Static per-cell code matrix: WALL (0), FREE (1) or OBJECTIVE (2).

    Rows are y, columns are x. The matrix is assumed rectangular and
    non-empty; file loaders validate it before it gets here.
    """

    def __init__(self, name: str, codes):
        self.name = name
        self.codes = np.asarray(codes, dtype=np.int8)
        self.height, self.width = self.codes.shape

    @classmethod
    def open(cls, width: int, height: int, name: str = "open") -> "ObstacleLayout":
        """Layout without any wall or objective."""
        return cls(name, np.full((height, width), FREE, dtype=np.int8))

    def movement_mask(self) -> MovementMask:
        """Collapse the codes to passable (1) / blocked (0)."""
        return MovementMask((self.codes != WALL).astype(np.uint8))

    def positions_with_code(self, code: int) -> List[CellPosition]:
        """Every cell holding code, in row-major order."""
        return [CellPosition(int(x), int(y))
                for y, x in np.argwhere(self.codes == code)]

    def walls(self) -> List[CellPosition]:
        return self.positions_with_code(WALL)

    def objectives(self) -> List[CellPosition]:
        return self.positions_with_code(OBJECTIVE)

    def code_at(self, pos: CellPosition) -> int:
        return int(self.codes[pos.y, pos.x])

    def __repr__(self) -> str:
        return f"ObstacleLayout(name={self.name!r}, size={self.width}x{self.height})"
