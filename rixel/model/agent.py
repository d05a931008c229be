"""Agent records driven by directional commands."""

from enum import Enum

from .cell import CellPosition
from .layout import MovementMask
from .movement import Movement, apply_movement


class AgentState(Enum):
    """Outcome of the agent's last command."""
    IDLE = "idle"
    MOVING = "moving"
    BLOCKED = "blocked"


class Agent:
    """
    A grid agent owning its CellPosition.

    Moves are instantaneous: one command resolves to one position update,
    with no intermediate animation state.
    """

    def __init__(self, agent_id: int, position: CellPosition):
        self.id = agent_id
        self.position = position
        self.state = AgentState.IDLE
        self.steps_taken = 0
        self.blocked_moves = 0

    def apply(self, movement: Movement, mask: MovementMask) -> bool:
        """Apply one command; return whether the agent changed cell."""
        new_position = apply_movement(self.position, movement.direction, mask)
        moved = new_position != self.position
        self.update_state(new_position, moved)
        return moved

    def update_state(self, new_position: CellPosition, moved: bool) -> None:
        """Update agent state based on movement result."""
        if moved:
            self.state = AgentState.MOVING
            self.steps_taken += 1
        else:
            self.state = AgentState.BLOCKED
            self.blocked_moves += 1

        self.position = new_position

    def __repr__(self) -> str:
        return (f"Agent(id={self.id}, pos={self.position.as_tuple()}, "
                f"state={self.state.value})")
