#!/usr/bin/env python3
"""
Rixel Grid Simulation

Replays a scripted sequence of directional commands over a tile layout.

Usage:
    python -m rixel --config configs/default.yaml [options]

Examples:
    python -m rixel --config configs/default.yaml
    python -m rixel --config configs/default.yaml --commands "ddsszq" --gif
    python -m rixel --config configs/default.yaml --layout layouts/maze.yaml
    python -m rixel --list-layouts layouts/
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config, load_layout, list_layouts, LayoutError
from .model.engine import SimulationEngine
from .export.csv_writer import CSVWriter
from .export.visualizer import Visualizer
from .export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='rixel',
        description='Rixel Grid Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Command keys:
    z = up, q = left, s = down, d = right

Examples:
    python -m rixel --config configs/default.yaml
    python -m rixel --config configs/default.yaml --commands "ddsszq" --gif
    python -m rixel --list-layouts layouts/
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--config', type=Path,
                        help='Path to YAML configuration file')
    source.add_argument('--list-layouts', type=Path, metavar='DIR',
                        help='List the layout files of a directory and exit')

    # Optional overrides
    parser.add_argument('--layout', type=Path, default=None,
                        help='Override the layout file')
    parser.add_argument('--commands', type=str, default=None,
                        help='Override the command script')
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation steps')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for agent placement')

    return parser.parse_args(argv)


def print_layouts(layout_dir: Path) -> int:
    """Print the layout catalogue of a directory."""
    try:
        paths = list_layouts(layout_dir)
    except FileNotFoundError:
        print(f"Error: Layout directory not found: {layout_dir}", file=sys.stderr)
        return 1

    print(f"Layouts in {layout_dir}:")
    for path in paths:
        try:
            layout = load_layout(path)
        except LayoutError as e:
            print(f"  {path.name:<24} (invalid: {e})")
            continue
        print(f"  {path.name:<24} {layout.name} ({layout.width}x{layout.height}, "
              f"{len(layout.walls())} walls, {len(layout.objectives())} objectives)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.list_layouts is not None:
        return print_layouts(args.list_layouts)

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.layout is not None:
        config.layout_path = args.layout
    if args.commands is not None:
        config.commands = args.commands
    if args.steps is not None:
        config.max_steps = args.steps
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    # Load layout
    try:
        layout = load_layout(config.layout_path)
    except FileNotFoundError:
        print(f"Error: Layout file not found: {config.layout_path}", file=sys.stderr)
        return 1
    except LayoutError as e:
        print(f"Error loading layout: {e}", file=sys.stderr)
        return 1

    # Initialize engine
    try:
        engine = SimulationEngine(config, layout)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print(f"Initializing simulation...")
        print(f"  Layout: {layout.name} ({layout.width}x{layout.height})")
        print(f"  Walls: {len(engine.walls)}, objectives: {len(engine.objectives)}")
        print(f"  Commands: {len(engine.commands)}")
        print(f"  Max steps: {config.max_steps}")
        print(f"  Spawned: {len(engine.agents)} agents")
        for x, y in engine.rejected_spawns:
            print(f"  Skipped spawn ({x}, {y}): outside the grid or on a wall")

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv')
        csv_writer.open()

    visualizer = Visualizer(engine.tiles, engine.walls, engine.objectives)

    reporter = Reporter(str(args.config), layout.name, config.seed)

    # Main simulation loop
    if not config.quiet:
        print(f"\nRunning simulation...")

    final_state = engine.snapshot()
    try:
        if config.gif_enabled:
            visualizer.buffer_frame(final_state)

        while not engine.is_finished():
            state = engine.step()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            if config.gif_enabled:
                visualizer.buffer_frame(state)

            reporter.update(state)

            if not config.quiet and state.step % 100 == 0:
                print(f"  Step {state.step}: {int(state.metrics['moves'])} moves, "
                      f"{int(state.metrics['blocked'])} blocked")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")
    finally:
        if csv_writer:
            csv_writer.close()

    # Final exports
    if csv_writer and not config.quiet:
        print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled,
            tuple(engine.rejected_spawns)
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
