"""Simulation engine for Rixel grids."""

import numpy as np
from typing import List, Optional, Set, Tuple, TYPE_CHECKING

from .cell import CellPosition, GridExtent
from .grid import Grid
from .layout import ObstacleLayout, MovementMask
from .movement import Movement, parse_commands
from .agent import Agent
from .state import SimulationState, AgentSnapshot

if TYPE_CHECKING:
    from ..config import SimulationConfig


class SimulationEngine:
    """
    Orchestrates the discrete-time command loop.

    Implements:
    1. Layout, movement mask and tile grid initialization
    2. Agent spawning
    3. One scripted command per tick, applied to every agent
    4. State snapshot generation

    Agents do not block each other: several agents may end up on the same
    cell, and the agent grid then holds the handle written last.
    """

    def __init__(self, config: "SimulationConfig", layout: ObstacleLayout):
        self.config = config
        self.current_step = 0
        self.rng = np.random.default_rng(config.seed)

        self.layout = layout
        self.extent = self._build_extent()
        self.mask: MovementMask = self.layout.movement_mask()

        self.walls = self.layout.walls()
        self.objectives = self.layout.objectives()
        self._objective_set: Set[CellPosition] = set(self.objectives)

        # Tile handles stand in for the externally owned tile objects
        self.tiles = Grid.empty(self.extent)
        for pos in self.extent.positions():
            self.tiles.set(pos, pos.to_index(self.extent) + 1)

        self.commands: List[Movement] = parse_commands(config.commands)

        self.agents: List[Agent] = []
        self.occupancy = Grid.empty(self.extent)
        self.rejected_spawns: List[Tuple[int, int]] = []
        self._spawn_agents()

        # Metrics tracking
        self.total_moves = 0
        self.total_blocked = 0
        self.objective_arrivals = 0

    def _build_extent(self) -> GridExtent:
        """Derive the grid extent from the layout and configured sizes."""
        grid = self.config.grid
        if grid.width is not None and grid.width != self.layout.width:
            raise ValueError(
                f"Configured grid width {grid.width} does not match "
                f"layout '{self.layout.name}' width {self.layout.width}")
        if grid.height is not None and grid.height != self.layout.height:
            raise ValueError(
                f"Configured grid height {grid.height} does not match "
                f"layout '{self.layout.name}' height {self.layout.height}")
        return GridExtent(
            self.layout.width, self.layout.height,
            window_width=self.config.window.width,
            window_height=self.config.window.height
        )

    def _add_agent(self, pos: CellPosition) -> None:
        agent = Agent(agent_id=len(self.agents) + 1, position=pos)
        self.agents.append(agent)
        self.occupancy.set(pos, agent.id)

    def _spawn_agents(self) -> None:
        """Create and place agents at configured spawns, then at random free cells."""
        for x, y in self.config.agents.spawns:
            if len(self.agents) >= self.config.agents.count:
                break
            if x < 0 or y < 0:
                self.rejected_spawns.append((x, y))
                continue
            pos = CellPosition(x, y)
            # Spawn coordinates come from the config file and may be off-grid
            if not self.mask.is_passable(pos.x, pos.y):
                self.rejected_spawns.append((x, y))
                continue
            self._add_agent(pos)

        while len(self.agents) < self.config.agents.count:
            # Find a random free, unoccupied position
            attempts = 0
            while attempts < 100:
                x = int(self.rng.integers(0, self.extent.width))
                y = int(self.rng.integers(0, self.extent.height))
                pos = CellPosition(x, y)
                if self.mask.is_passable(x, y) and self.occupancy.get(pos) is None:
                    self._add_agent(pos)
                    break
                attempts += 1
            else:
                # Couldn't find space for more agents
                break

    def step(self) -> SimulationState:
        """
        Execute one discrete tick.

        1. Take the next scripted command
        2. Resolve it for every agent through the movement mask
        3. Move agent handles in the occupancy grid
        4. Return current state snapshot
        """
        movement = self.commands[self.current_step]
        self.current_step += 1

        for agent in self.agents:
            old_pos = agent.position
            moved = agent.apply(movement, self.mask)

            if moved:
                self.total_moves += 1
                if self.occupancy.checked_get(old_pos) == agent.id:
                    self.occupancy.checked_remove(old_pos)
                self.occupancy.checked_set(agent.position, agent.id)
                if agent.position in self._objective_set:
                    self.objective_arrivals += 1
            else:
                self.total_blocked += 1

        return self._create_state_snapshot(movement)

    def snapshot(self) -> SimulationState:
        """Snapshot of the current state without advancing."""
        return self._create_state_snapshot(None)

    def _create_state_snapshot(self, movement: Optional[Movement]) -> SimulationState:
        """Create immutable snapshot of current simulation state."""
        agent_snapshots = [
            AgentSnapshot(
                agent_id=a.id,
                x=a.position.x,
                y=a.position.y,
                state=a.state.value,
                on_objective=a.position in self._objective_set
            )
            for a in self.agents
        ]

        attempts = self.total_moves + self.total_blocked
        metrics = {
            'total_agents': len(self.agents),
            'moves': self.total_moves,
            'blocked': self.total_blocked,
            'blocked_ratio': self.total_blocked / attempts if attempts > 0 else 0,
            'objective_arrivals': self.objective_arrivals,
            'agents_on_objective': sum(1 for a in agent_snapshots if a.on_objective),
        }

        return SimulationState(
            step=self.current_step,
            command=movement.direction.value if movement else None,
            agents=agent_snapshots,
            occupancy=list(self.occupancy),
            metrics=metrics
        )

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        return (self.current_step >= self.config.max_steps or
                self.current_step >= len(self.commands))

    def get_summary(self) -> dict:
        """Get summary statistics for the simulation."""
        return {
            'total_steps': self.current_step,
            'agents_total': len(self.agents),
            'moves': self.total_moves,
            'blocked': self.total_blocked,
            'objective_arrivals': self.objective_arrivals,
            'rejected_spawns': len(self.rejected_spawns),
        }
