"""Summary report generation for Rixel simulations."""

from typing import List, Dict, Optional, Tuple, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: str, layout_name: str, seed: Optional[int]):
        self.config_path = config_path
        self.layout_name = layout_name
        self.seed = seed
        self.step_metrics: List[Dict] = []
        self.stuck_ticks = 0

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per step."""
        self.step_metrics.append(state.metrics.copy())

        # A tick where no agent could follow the command
        if state.agents and all(a.state == 'blocked' for a in state.agents):
            self.stuck_ticks += 1

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool,
                         rejected_spawns: Tuple = ()) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        total_agents = int(metrics.get('total_agents', 0))
        moves = int(metrics.get('moves', 0))
        blocked = int(metrics.get('blocked', 0))
        blocked_pct = metrics.get('blocked_ratio', 0) * 100

        # Build report
        lines = [
            "",
            "=" * 80,
            "                        RIXEL GRID SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Layout:        {self.layout_name}",
            f"Random Seed:   {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Steps:           {final_state.step}",
            f"Agents:                {total_agents}",
            f"Moves:                 {moves}",
            f"Blocked Commands:      {blocked} ({blocked_pct:.1f}%)",
            f"Objective Arrivals:    {int(metrics.get('objective_arrivals', 0))}",
            f"Agents On Objective:   {int(metrics.get('agents_on_objective', 0))} / {total_agents}",
            f"Fully Blocked Ticks:   {self.stuck_ticks}",
        ]

        if rejected_spawns:
            spawns = ", ".join(f"({x}, {y})" for x, y in rejected_spawns)
            lines.append(f"Rejected Spawns:       {spawns}")

        lines.extend([
            "",
            "OUTPUT FILES",
            "-" * 40,
        ])

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
