"""
Per-run output layout.

    <output_dir>/<YYYY_MM_DD>/price_list.csv
    <output_dir>/<YYYY_MM_DD>/products.sql
    <output_dir>/<YYYY_MM_DD>/Logs/log_<HH_MM_SS>.txt
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class OutputLayout:
    """Output paths of one run, fixed at construction time."""

    run_dir: Path
    started_at: datetime

    @classmethod
    def for_run(cls, output_dir: Union[str, Path], started_at: Optional[datetime] = None) -> "OutputLayout":
        started_at = started_at or datetime.now()
        return cls(run_dir=Path(output_dir) / started_at.strftime("%Y_%m_%d"), started_at=started_at)

    @property
    def log_dir(self) -> Path:
        return self.run_dir / "Logs"

    @property
    def log_file(self) -> Path:
        return self.log_dir / f"log_{self.started_at.strftime('%H_%M_%S')}.txt"

    def path(self, filename: str) -> Path:
        """Path of an output file inside the run directory."""
        return self.run_dir / filename

    def ensure_dirs(self) -> None:
        """Create the run and log directories."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
