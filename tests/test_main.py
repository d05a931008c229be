import csv
from pathlib import Path

import pytest

from rixel import main as cli
from rixel.export import CSVWriter
from rixel.main import main
from rixel.model.engine import SimulationEngine

REPO_ROOT = Path(__file__).resolve().parent.parent


def test_default_config_runs_to_objective(tmp_path: Path, capsys) -> None:
    status = main([
        "--config", str(REPO_ROOT / "configs" / "default.yaml"),
        "--out-dir", str(tmp_path),
        "--no-snapshot",
    ])

    assert status == 0
    with (tmp_path / "simulation_log.csv").open(newline="") as handle:
        records = list(csv.DictReader(handle))
    assert (records[-1]["x"], records[-1]["y"]) == ("0", "4")
    assert "Objective Arrivals:    1" in capsys.readouterr().out


def test_commands_override_and_quiet(tmp_path: Path, capsys) -> None:
    status = main([
        "--config", str(REPO_ROOT / "configs" / "default.yaml"),
        "--out-dir", str(tmp_path),
        "--commands", "zq",
        "--no-snapshot",
        "--quiet",
    ])

    assert status == 0
    assert capsys.readouterr().out == ""
    with (tmp_path / "simulation_log.csv").open(newline="") as handle:
        records = list(csv.DictReader(handle))
    assert [r["moved"] for r in records] == ["0", "0"]


def test_missing_config_is_reported(tmp_path: Path, capsys) -> None:
    status = main(["--config", str(tmp_path / "missing.yaml")])

    assert status == 1
    assert "Configuration file not found" in capsys.readouterr().err


def test_malformed_layout_is_fatal(tmp_path: Path, capsys) -> None:
    (tmp_path / "bad.yaml").write_text("name: bad\ncells:\n  - [1, 1]\n  - [1]\n")
    (tmp_path / "run.yaml").write_text("layout: bad.yaml\n")

    status = main(["--config", str(tmp_path / "run.yaml"), "--out-dir", str(tmp_path)])

    assert status == 1
    assert "Error loading layout" in capsys.readouterr().err


def test_list_layouts(capsys) -> None:
    status = main(["--list-layouts", str(REPO_ROOT / "layouts")])

    out = capsys.readouterr().out
    assert status == 0
    assert "corridor.yaml" in out
    assert "Corridor (5x5" in out


def test_window_smaller_than_grid_is_a_startup_error(tmp_path: Path, capsys) -> None:
    (tmp_path / "run.yaml").write_text(
        f"layout: {REPO_ROOT / 'layouts' / 'corridor.yaml'}\n"
        "window: {width: 100, height: 0}\n"
    )

    status = main(["--config", str(tmp_path / "run.yaml"), "--out-dir", str(tmp_path)])

    captured = capsys.readouterr()
    assert status == 1
    assert "Error: Window 100x0 is smaller than the 5x5 grid" in captured.err
    assert not (tmp_path / "simulation_log.csv").exists()


def test_csv_log_is_closed_when_a_tick_fails(tmp_path: Path, monkeypatch) -> None:
    writers = []

    class RecordingWriter(CSVWriter):
        def __init__(self, output_path):
            super().__init__(output_path)
            writers.append(self)

    def failing_step(self):
        raise RuntimeError("tick failed")

    monkeypatch.setattr(cli, "CSVWriter", RecordingWriter)
    monkeypatch.setattr(SimulationEngine, "step", failing_step)

    with pytest.raises(RuntimeError):
        main([
            "--config", str(REPO_ROOT / "configs" / "default.yaml"),
            "--out-dir", str(tmp_path),
            "--quiet",
        ])

    assert len(writers) == 1
    assert not writers[0].is_open
