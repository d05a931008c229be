from pathlib import Path

import pytest

from rixel.config import AgentConfig, GridConfig, SimulationConfig, WindowConfig
from rixel.model.cell import CellPosition
from rixel.model.engine import SimulationEngine
from rixel.model.layout import ObstacleLayout


def build_layout() -> ObstacleLayout:
    return ObstacleLayout("engine", [
        [1, 1, 1],
        [0, 0, 1],
        [2, 1, 1],
    ])


def build_config(commands: str = "", spawns=None, count: int = 1,
                 **kwargs) -> SimulationConfig:
    spawns = [(0, 0)] if spawns is None else spawns
    return SimulationConfig(
        layout_path=Path("unused.yaml"),
        grid=kwargs.pop("grid", GridConfig()),
        window=WindowConfig(300, 300),
        agents=AgentConfig(count=count, spawns=spawns),
        commands=commands,
        seed=7,
        **kwargs,
    )


def test_engine_builds_tile_grid_and_presentation_lists() -> None:
    engine = SimulationEngine(build_config(), build_layout())

    assert (engine.extent.width, engine.extent.height) == (3, 3)
    assert engine.extent.window_width == 300
    assert engine.walls == [CellPosition(0, 1), CellPosition(1, 1)]
    assert engine.objectives == [CellPosition(0, 2)]
    assert list(engine.tiles) == list(range(1, 10))
    assert engine.tiles.get(CellPosition(2, 1)) == 6


def test_engine_rejects_mismatched_grid_size() -> None:
    with pytest.raises(ValueError):
        SimulationEngine(build_config(grid=GridConfig(width=4)), build_layout())


def test_engine_rejects_unknown_command_keys() -> None:
    with pytest.raises(ValueError):
        SimulationEngine(build_config(commands="dx"), build_layout())


def test_spawns_outside_grid_or_on_walls_are_skipped() -> None:
    config = build_config(spawns=[(5, 5), (0, 1), (-1, 0), (2, 2)], count=1)
    engine = SimulationEngine(config, build_layout())

    assert [a.position for a in engine.agents] == [CellPosition(2, 2)]
    assert engine.rejected_spawns == [(5, 5), (0, 1), (-1, 0)]
    assert engine.occupancy.get(CellPosition(2, 2)) == 1


def test_random_spawns_fill_free_cells() -> None:
    engine = SimulationEngine(build_config(spawns=[], count=4), build_layout())

    assert len(engine.agents) == 4
    positions = {a.position for a in engine.agents}
    assert len(positions) == 4
    for pos in positions:
        assert engine.mask.is_passable(pos.x, pos.y)
    assert set(engine.occupancy.occupied_positions()) == positions


def test_scripted_walk_reaches_objective() -> None:
    engine = SimulationEngine(build_config(commands="ddssqq"), build_layout())

    states = []
    while not engine.is_finished():
        states.append(engine.step())

    assert [s.step for s in states] == [1, 2, 3, 4, 5, 6]
    assert [(s.agents[0].x, s.agents[0].y) for s in states] == [
        (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2)]
    final = states[-1]
    assert final.command == "left"
    assert final.agents[0].on_objective
    assert final.metrics["objective_arrivals"] == 1
    assert final.metrics["moves"] == 6
    assert engine.occupancy.occupied_positions() == [CellPosition(0, 2)]


def test_blocked_commands_keep_agent_in_place() -> None:
    engine = SimulationEngine(build_config(commands="zqs"), build_layout())

    states = [engine.step() for _ in range(3)]

    assert all((s.agents[0].x, s.agents[0].y) == (0, 0) for s in states)
    assert all(s.agents[0].state == "blocked" for s in states)
    assert states[-1].metrics["blocked"] == 3
    assert states[-1].metrics["blocked_ratio"] == 1.0
    assert engine.occupancy.get(CellPosition(0, 0)) == 1


def test_max_steps_stops_before_commands_run_out() -> None:
    engine = SimulationEngine(build_config(commands="dddd", max_steps=2), build_layout())
    engine.step()
    assert not engine.is_finished()
    engine.step()
    assert engine.is_finished()
    assert engine.get_summary()["total_steps"] == 2


def test_snapshot_without_commands() -> None:
    engine = SimulationEngine(build_config(), build_layout())

    assert engine.is_finished()
    state = engine.snapshot()
    assert state.step == 0
    assert state.command is None
    assert state.agents[0].state == "idle"
    assert state.occupancy[0] == 1
