"""Tracing module: logs solver and generator steps and writes them to CSV."""

import csv
import sys
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class TraceStep:
    """A single step in solving or generating a grid."""

    timestamp: float
    step_number: int
    action_type: str  # 'place', 'backtrack', 'solution_found', 'cell_emptied', 'givens_stamped'
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[int] = None
    depth: Optional[int] = None  # Number of cells filled by the search so far
    filled_cells: Optional[int] = None
    reason: Optional[str] = None


class Tracer:
    """Records engine steps for logging and analysis."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.steps: List[TraceStep] = []
        self.start_time = datetime.now().timestamp()
        self.step_counter = 0

    def _get_timestamp(self) -> float:
        """Get elapsed time in seconds since tracer creation."""
        return datetime.now().timestamp() - self.start_time

    def _record(self, action_type: str, **fields: Any) -> None:
        self.step_counter += 1
        self.steps.append(TraceStep(
            timestamp=self._get_timestamp(),
            step_number=self.step_counter,
            action_type=action_type,
            **fields,
        ))

    def log_place(self, row: int, col: int, value: int, depth: int):
        """Log a tentative placement made by the search."""
        if not self.enabled:
            return
        self._record('place', row=row, col=col, value=value, depth=depth)

    def log_backtrack(self, row: int, col: int, reason: str = "No candidate fits"):
        """Log a backtrack event."""
        if not self.enabled:
            return
        self._record('backtrack', row=row, col=col, reason=reason)

    def log_solution_found(self, filled_cells: int):
        """Log when the grid has no empty cell left."""
        if not self.enabled:
            return
        self._record('solution_found', filled_cells=filled_cells)

    def log_cell_emptied(self, row: int, col: int, value: int):
        """Log a value removed while turning a solution into a puzzle."""
        if not self.enabled:
            return
        self._record('cell_emptied', row=row, col=col, value=value)

    def log_givens_stamped(self, filled_cells: int):
        if not self.enabled:
            return
        self._record('givens_stamped', filled_cells=filled_cells)

    def to_csv(self, filepath: Path) -> None:
        """Write trace to CSV file."""
        if not self.steps:
            print("No trace steps to write", file=sys.stderr)
            return

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fieldnames = [
            'timestamp', 'step_number', 'action_type', 'row', 'col', 'value',
            'depth', 'filled_cells', 'reason'
        ]

        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for step in self.steps:
                writer.writerow(asdict(step))

        print(f"Trace written to {filepath} ({len(self.steps)} steps)", file=sys.stderr)

    def summary(self) -> Dict[str, Any]:
        """Get a summary of the trace."""
        action_counts = {}
        for step in self.steps:
            action_counts[step.action_type] = action_counts.get(step.action_type, 0) + 1

        return {
            'total_steps': len(self.steps),
            'elapsed_time_seconds': self._get_timestamp(),
            'action_counts': action_counts,
            'num_placements': action_counts.get('place', 0),
            'num_backtracks': action_counts.get('backtrack', 0),
            'num_cells_emptied': action_counts.get('cell_emptied', 0),
        }


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer() -> Tracer:
    """Get or create the global tracer."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(enabled=True)
    return _global_tracer


def reset_tracer() -> None:
    """Reset the global tracer."""
    global _global_tracer
    _global_tracer = None


def enable_tracing(enabled: bool = True) -> None:
    """Enable or disable tracing."""
    get_tracer().enabled = enabled
