"""Configuration dataclasses and YAML loaders for Rixel simulations."""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Any, Optional
from pathlib import Path
import yaml

from .model.cell import DEFAULT_WINDOW_SIZE
from .model.layout import CELL_CODES, ObstacleLayout

LAYOUT_SUFFIXES = ('.yaml', '.yml', '.json')


class LayoutError(ValueError):
    """Raised when a layout description is malformed."""


@dataclass
class GridConfig:
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class WindowConfig:
    width: int = DEFAULT_WINDOW_SIZE
    height: int = DEFAULT_WINDOW_SIZE


@dataclass
class AgentConfig:
    count: int = 1
    spawns: List[Tuple[int, int]] = field(default_factory=list)


@dataclass
class SimulationConfig:
    layout_path: Path
    grid: GridConfig
    window: WindowConfig
    agents: AgentConfig
    commands: str = ""
    max_steps: int = 1000

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _parse_spawns(spawns_raw: List[Any]) -> List[Tuple[int, int]]:
    """Parse [x, y] spawn pairs from raw YAML data."""
    spawns = []
    for s in spawns_raw:
        if len(s) != 2:
            raise ValueError(f"Spawn must be an [x, y] pair, got {s!r}")
        spawns.append((int(s[0]), int(s[1])))
    return spawns


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    config_path = Path(config_path)
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if 'layout' not in raw:
        raise ValueError("Configuration is missing the 'layout' entry")
    # Layout paths are relative to the configuration file
    layout_path = config_path.parent / raw['layout']

    grid_raw = raw.get('grid', {})
    grid = GridConfig(
        width=grid_raw.get('width'),
        height=grid_raw.get('height')
    )

    window_raw = raw.get('window', {})
    window = WindowConfig(
        width=window_raw.get('width', DEFAULT_WINDOW_SIZE),
        height=window_raw.get('height', DEFAULT_WINDOW_SIZE)
    )

    agents_raw = raw.get('agents', {})
    spawns = _parse_spawns(agents_raw.get('spawns', []))
    agents = AgentConfig(
        count=agents_raw.get('count', max(1, len(spawns))),
        spawns=spawns
    )

    sim_raw = raw.get('simulation', {})

    # Parse export config (optional)
    export_raw = raw.get('export', {})

    return SimulationConfig(
        layout_path=layout_path,
        grid=grid,
        window=window,
        agents=agents,
        commands=str(sim_raw.get('commands', '')),
        max_steps=sim_raw.get('max_steps', 1000),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False)
    )


def parse_layout(raw: Dict[str, Any]) -> ObstacleLayout:
    """
    Build an ObstacleLayout from a raw {name, cells} record.

    Any malformed input is fatal: there is no partial layout mode.
    """
    if not isinstance(raw, dict):
        raise LayoutError("Layout must be a mapping with 'name' and 'cells'")
    for key in ('name', 'cells'):
        if key not in raw:
            raise LayoutError(f"Layout is missing the '{key}' field")

    cells = raw['cells']
    if not isinstance(cells, list) or not cells:
        raise LayoutError("Layout 'cells' must be a non-empty list of rows")

    width = None
    for y, row in enumerate(cells):
        if not isinstance(row, list) or not row:
            raise LayoutError(f"Layout row {y} must be a non-empty list")
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise LayoutError(
                f"Layout row {y} has {len(row)} cells, expected {width}")
        for x, code in enumerate(row):
            if isinstance(code, bool) or not isinstance(code, int):
                raise LayoutError(f"Cell ({x}, {y}) is not an integer: {code!r}")
            if code not in CELL_CODES:
                raise LayoutError(f"Cell ({x}, {y}) has unknown code {code}")

    return ObstacleLayout(str(raw['name']), cells)


def load_layout(layout_path: Path) -> ObstacleLayout:
    """Load a YAML or JSON layout file."""
    with open(layout_path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise LayoutError(f"Cannot parse layout {layout_path}: {e}") from e
    return parse_layout(raw)


def list_layouts(layout_dir: Path) -> List[Path]:
    """Return the layout files of a directory, sorted by name."""
    layout_dir = Path(layout_dir)
    return sorted(p for p in layout_dir.iterdir()
                  if p.is_file() and p.suffix.lower() in LAYOUT_SUFFIXES)
