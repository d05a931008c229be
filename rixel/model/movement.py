"""Directional movement commands applied through a movement mask."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from .cell import CellPosition
from .layout import MovementMask


class Direction(Enum):
    """The four axis directions an agent can be commanded to move in."""
    UP = "up"
    LEFT = "left"
    DOWN = "down"
    RIGHT = "right"


# Command script alphabet, following the ZQSD keyboard layout
KEY_BINDINGS: Dict[str, Direction] = {
    "z": Direction.UP,
    "q": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
}


@dataclass(frozen=True)
class Movement:
    """One discrete movement event."""
    direction: Direction


def apply_movement(position: CellPosition, direction: Direction,
                   mask: MovementMask) -> CellPosition:
    """
    Resolve one command into the agent's next position.

    Each shift is 0 or 1, so the agent advances exactly one cell when the
    neighbour is free and stays put otherwise. The mask border reads 0, so
    top/left are 0 on row/column 0 and coordinates never go negative.
    """
    shifts = mask.get_shifts(position.x, position.y)
    if direction is Direction.UP:
        return CellPosition(position.x, position.y - shifts.top)
    elif direction is Direction.LEFT:
        return CellPosition(position.x - shifts.left, position.y)
    elif direction is Direction.DOWN:
        return CellPosition(position.x, position.y + shifts.bottom)
    elif direction is Direction.RIGHT:
        return CellPosition(position.x + shifts.right, position.y)
    raise ValueError(f"Unknown direction: {direction}")


def parse_commands(script: str) -> List[Movement]:
    """
    Translate a command script such as "zzqd s" into movements.

    Letters are case-insensitive and whitespace is ignored.
    """
    commands = []
    for char in script:
        if char.isspace():
            continue
        direction = KEY_BINDINGS.get(char.lower())
        if direction is None:
            raise ValueError(f"Unknown command key: {char!r}")
        commands.append(Movement(direction))
    return commands
