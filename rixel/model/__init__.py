"""Model package for Rixel grids."""

from .cell import CellPosition, GridExtent
from .grid import Grid, Handle
from .layout import (ObstacleLayout, MovementMask, Shifts,
                     WALL, FREE, OBJECTIVE)
from .movement import Direction, Movement, apply_movement, parse_commands
from .state import AgentSnapshot, SimulationState
from .agent import Agent, AgentState
from .engine import SimulationEngine

__all__ = [
    'CellPosition',
    'GridExtent',
    'Grid',
    'Handle',
    'ObstacleLayout',
    'MovementMask',
    'Shifts',
    'WALL',
    'FREE',
    'OBJECTIVE',
    'Direction',
    'Movement',
    'apply_movement',
    'parse_commands',
    'AgentSnapshot',
    'SimulationState',
    'Agent',
    'AgentState',
    'SimulationEngine',
]
