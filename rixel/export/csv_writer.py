"""Per-tick CSV log for Rixel simulations."""

import csv
from pathlib import Path
from typing import IO, Optional

from ..model.state import SimulationState


class CSVWriter:
    """
    Streams one row per agent per tick to a CSV file.

    Columns follow SimulationState.CSV_FIELDS. The file is flushed after
    every tick, so a run stopped early still leaves a readable log.
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.file: Optional[IO[str]] = None
        self.writer: Optional[csv.DictWriter] = None
        self.rows_written = 0

    @property
    def is_open(self) -> bool:
        return self.file is not None

    def open(self) -> None:
        """Create the log and write its header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = self.output_path.open('w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=SimulationState.CSV_FIELDS)
        self.writer.writeheader()

    def append(self, state: SimulationState) -> None:
        if not self.is_open:
            self.open()
        rows = state.to_csv_rows()
        self.writer.writerows(rows)
        self.rows_written += len(rows)
        self.file.flush()

    def close(self) -> None:
        if self.is_open:
            self.file.close()
            self.file = None
            self.writer = None

    def __enter__(self) -> "CSVWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
