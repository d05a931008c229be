"""State snapshot dataclasses for Rixel simulations."""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class AgentSnapshot:
    """Immutable snapshot of an agent's state at a given tick."""
    agent_id: int
    x: int
    y: int
    state: str  # "idle", "moving", "blocked"
    on_objective: bool = False


@dataclass
class SimulationState:
    """Complete snapshot of simulation state at a given tick."""
    step: int
    command: Optional[str]      # direction applied this tick
    agents: List[AgentSnapshot]
    occupancy: List[Optional[int]]  # Copy of the agent grid slots
    metrics: Dict[str, float]

    CSV_FIELDS = ("step", "agent_id", "x", "y", "command", "moved")

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [
            {
                "step": self.step,
                "agent_id": a.agent_id,
                "x": a.x,
                "y": a.y,
                "command": self.command or "",
                "moved": int(a.state == "moving"),
            }
            for a in self.agents
        ]
