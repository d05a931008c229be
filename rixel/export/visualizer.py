"""Visualization and export for Rixel simulations."""

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from pathlib import Path
from typing import List, Tuple, TYPE_CHECKING
from PIL import Image
import io

from ..model.cell import CellPosition
from ..model.grid import Grid, Handle

if TYPE_CHECKING:
    from ..model.state import SimulationState

# x0, y0, width, height in window space
Rect = Tuple[float, float, float, float]


class Visualizer:
    """
    Draws the grid in window space using matplotlib.

    Tiles are looked up in the tile Grid, placed with
    CellPosition.to_screen_position and sized with
    GridExtent.cell_size, the same pair a real-time renderer would use.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'wall': '#2C3E50',       # Dark blue-gray
        'floor': '#F0F8FF',      # Alice blue
        'objective': '#F39C12',  # Orange
        'moving': '#3498DB',     # Blue
        'blocked': '#E74C3C',    # Red
        'idle': '#27AE60',       # Green
        'background': '#000000',
    }

    def __init__(self, tiles: Grid,
                 walls: List[CellPosition], objectives: List[CellPosition]):
        self.tiles = tiles
        self.extent = tiles.extent
        self.walls = set(walls)
        self.objectives = set(objectives)
        self.frames: List[Image.Image] = []

    def tile_color(self, pos: CellPosition) -> str:
        if pos in self.walls:
            return self.COLORS['wall']
        if pos in self.objectives:
            return self.COLORS['objective']
        return self.COLORS['floor']

    def tile_rectangles(self, inset: float = 0.05) -> List[Tuple[Handle, Rect, str]]:
        """
        Window-space rectangle and color of every tile held by the tile grid.

        Empty slots have no tile and are skipped. The inset leaves a thin gap
        between neighbouring tiles.
        """
        size_x, size_y = self.extent.cell_size()
        w = size_x * (1 - inset)
        h = size_y * (1 - inset)
        rects = []
        for pos, handle in self.tiles.items():
            if handle is None:
                continue
            cx, cy = pos.to_screen_position(self.extent)
            rects.append((handle, (cx - w / 2, cy - h / 2, w, h), self.tile_color(pos)))
        return rects

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        half_w = self.extent.window_width / 2
        half_h = self.extent.window_height / 2
        aspect = self.extent.window_width / self.extent.window_height
        fig_height = 6
        fig, ax = plt.subplots(figsize=(fig_height * aspect, fig_height))
        ax.set_facecolor(self.COLORS['background'])

        for _, (x0, y0, w, h), color in self.tile_rectangles():
            ax.add_patch(Rectangle((x0, y0), w, h, facecolor=color, edgecolor='none'))

        # Draw agents
        for agent in state.agents:
            cx, cy = CellPosition(agent.x, agent.y).to_screen_position(self.extent)
            color = self.COLORS.get(agent.state, self.COLORS['idle'])
            ax.plot(cx, cy, 'o', color=color,
                    markersize=6, markeredgecolor='white', markeredgewidth=0.5)

        ax.set_title(f'Step {state.step} | Command: {state.command or "-"} | '
                     f'Blocked: {int(state.metrics.get("blocked", 0))}')
        ax.set_xlim(-half_w, half_w)
        ax.set_ylim(-half_h, half_h)
        ax.set_aspect('equal')
        ax.set_xticks([])
        ax.set_yticks([])

        # Legend
        legend_elements = [
            plt.Line2D([0], [0], marker='o', color='w', label='Moving',
                       markerfacecolor=self.COLORS['moving'], markersize=8),
            plt.Line2D([0], [0], marker='o', color='w', label='Blocked',
                       markerfacecolor=self.COLORS['blocked'], markersize=8),
            plt.Line2D([0], [0], marker='s', color='w', label='Objective',
                       markerfacecolor=self.COLORS['objective'], markersize=8),
        ]
        ax.legend(handles=legend_elements, loc='upper right', fontsize=8)

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 4) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )
