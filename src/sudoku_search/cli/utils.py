"""Logging setup, progress reporting and batch summaries for the CLI."""

import logging
import time
from collections import Counter
from typing import Any, Dict, List, Optional

import numpy as np

VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TERSE_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Configure root logging; DEBUG gets timestamps and logger names."""
    if format_string is None:
        format_string = VERBOSE_FORMAT if level <= logging.DEBUG else TERSE_FORMAT

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def format_duration(seconds: float) -> str:
    """Format a duration, e.g. ``250.0ms`` or ``1h 2m 5.0s``."""
    if seconds < 0.001:
        return f"{seconds * 1e6:.1f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.1f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"

    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{int(minutes)}m {secs:.1f}s"
    hours, minutes = divmod(int(minutes), 60)
    return f"{hours}h {minutes}m {secs:.1f}s"


class ProgressReporter:
    """Prints a progress line every ``report_interval`` puzzles."""

    def __init__(self, total_cases: int, report_interval: int = 10):
        self.total_cases = total_cases
        self.report_interval = max(1, report_interval)
        self.completed_cases = 0
        self.solved_cases = 0
        self.expanded_states = 0
        self.start_time = time.time()

    def update(self, success: bool = False, expanded_states: int = 0) -> None:
        """Record one finished puzzle."""
        self.completed_cases += 1
        self.solved_cases += int(bool(success))
        self.expanded_states += expanded_states

        if (self.completed_cases % self.report_interval == 0 or
                self.completed_cases == self.total_cases):
            self._report_progress()

    def _report_progress(self) -> None:
        elapsed = time.time() - self.start_time
        rate = self.completed_cases / elapsed if elapsed > 0 else 0.0
        remaining = self.total_cases - self.completed_cases
        eta = remaining / rate if rate > 0 else 0.0

        done = self.completed_cases / self.total_cases * 100
        solved = self.solved_cases / self.completed_cases * 100
        print(f"Progress: {self.completed_cases}/{self.total_cases} ({done:.1f}%) | "
              f"Solved: {self.solved_cases} ({solved:.1f}%) | "
              f"Expanded: {self.expanded_states} | "
              f"Rate: {rate:.1f} puzzles/s | "
              f"ETA: {format_duration(eta)}")


def create_result_summary(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Aggregate per-puzzle result dictionaries.

    Args:
        results: ``SearchResult.to_dict()`` outputs, or error records with
            ``success``, ``computation_time`` and ``expanded_states``

    Returns:
        Counts, timing and expansion statistics, plus how many runs ended
        with each termination reason
    """
    total_cases = len(results)
    solved_cases = sum(1 for r in results if r.get('success', False))
    times = np.array([r.get('computation_time', 0.0) for r in results], dtype=float)
    expanded = np.array([r.get('expanded_states', 0) for r in results], dtype=np.int64)
    reasons = Counter(r.get('termination_reason', 'error') for r in results)

    if total_cases == 0:
        times = np.zeros(1)
        expanded = np.zeros(1, dtype=np.int64)

    return {
        'total_cases': total_cases,
        'solved_cases': solved_cases,
        'failed_cases': total_cases - solved_cases,
        'success_rate': solved_cases / total_cases if total_cases else 0.0,
        'average_time': float(times.mean()),
        'median_time': float(np.median(times)),
        'total_time': float(times.sum()),
        'min_time': float(times.min()),
        'max_time': float(times.max()),
        'total_expanded_states': int(expanded.sum()),
        'average_expanded_states': float(expanded.mean()),
        'max_expanded_states': int(expanded.max()),
        'termination_reasons': dict(reasons)
    }


def print_summary(summary: Dict[str, Any]) -> None:
    """Print the batch summary block."""
    rule = "=" * 60
    print(f"\n{rule}\nBATCH PROCESSING SUMMARY\n{rule}")

    print(f"Total puzzles:    {summary['total_cases']}")
    print(f"Solved:           {summary['solved_cases']} ({summary['success_rate'] * 100:.1f}%)")
    print(f"Failed:           {summary['failed_cases']}")
    for reason, count in sorted(summary.get('termination_reasons', {}).items()):
        print(f"  {reason + ':':<16}{count}")

    print("\nTiming Statistics:")
    for label, key in [("Total", 'total_time'), ("Average", 'average_time'),
                       ("Median", 'median_time'), ("Min", 'min_time'), ("Max", 'max_time')]:
        print(f"{label + ' time:':<18}{format_duration(summary[key])}")

    print("\nSearch Statistics:")
    print(f"Expanded states:  {summary['total_expanded_states']} "
          f"(avg {summary['average_expanded_states']:.1f}, "
          f"max {summary['max_expanded_states']})")
