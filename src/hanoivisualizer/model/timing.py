"""
Timing Instrumentation
======================
Wall-clock timing of the planner for benchmarking.

Two operations are measured separately:
1. `measure`              - the count-only recursion (pure recursion cost).
2. `measure_materialized` - the full plan rendered as move text
                            (recursion + allocation + formatting).

`iter_sweep` yields one sample at a time so that a host event loop can
repaint between samples; `sweep` drains it in one go.
"""
from __future__ import annotations

import csv
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, Optional

import numpy as np

from hanoivisualizer.model.errors import InvalidConfiguration
from hanoivisualizer.model.planner import count_moves, plan_descriptions

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class TimingSample:
    disk_count: int
    elapsed_ms: float


class TimingSeries:
    """Ordered (disk count, elapsed ms) samples of one sweep."""

    def __init__(self) -> None:
        self._samples: list[TimingSample] = []

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[TimingSample]:
        return iter(self._samples)

    def __getitem__(self, index: int) -> TimingSample:
        return self._samples[index]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(samples={len(self._samples)})"

    @property
    def samples(self) -> list[TimingSample]:
        return list(self._samples)

    def append(self, sample: TimingSample) -> None:
        self._samples.append(sample)

    def clear(self) -> None:
        self._samples.clear()

    def as_arrays(self) -> tuple[npt.NDArray[np.int64], npt.NDArray[np.float64]]:
        """Disk counts and elapsed milliseconds as two aligned arrays."""
        disks = np.array([s.disk_count for s in self._samples], dtype=np.int64)
        elapsed = np.array([s.elapsed_ms for s in self._samples], dtype=np.float64)
        return disks, elapsed

    def to_csv(self, filepath: str) -> None:
        logger.info(f"Exporting {len(self._samples)} timing samples to: {filepath}")
        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["disk_count", "elapsed_ms"])
            for sample in self._samples:
                writer.writerow([sample.disk_count, f"{sample.elapsed_ms:.6f}"])

    def plot(self) -> None:
        """Quick matplotlib chart of the series, outside of the GUI."""
        import matplotlib.pyplot as plt

        if not self._samples:
            print("No timing samples available to plot.")
            return

        disks, elapsed = self.as_arrays()
        plt.figure(figsize=(10, 5))
        plt.plot(disks, elapsed, marker='o')
        plt.title('Planning Time vs. Disk Count')
        plt.xlabel('Disks')
        plt.ylabel('Time (ms)')
        plt.grid(True)
        plt.show()


@dataclass
class SweepResult:
    series: TimingSeries
    requested: int
    completed: int = 0
    budget_exhausted: bool = False
    cancelled: bool = False
    total_ms: float = 0.0


def measure(disk_count: int, clock: Clock = time.perf_counter) -> float:
    """Elapsed milliseconds of the count-only planning recursion."""
    start = clock()
    count_moves(disk_count)
    return max(0.0, (clock() - start) * 1000.0)


def measure_materialized(disk_count: int, clock: Clock = time.perf_counter) -> float:
    """Elapsed milliseconds of generating the full move-text list (discarded)."""
    start = clock()
    plan_descriptions(disk_count)
    return max(0.0, (clock() - start) * 1000.0)


def check_sweep_range(min_disks: int, max_disks: int) -> None:
    if min_disks < 0:
        raise InvalidConfiguration(f"Minimum disk count must not be negative, got {min_disks}.")
    if max_disks < min_disks:
        raise InvalidConfiguration(f"Invalid sweep range {min_disks}..{max_disks}.")


def iter_sweep(
    min_disks: int,
    max_disks: int,
    budget_ms: Optional[float] = None,
    materialize: bool = False,
    clock: Clock = time.perf_counter,
    started: Optional[float] = None,
) -> Iterator[TimingSample]:
    """
    Measure each disk count in the inclusive range, yielding samples in order.

    Stops early once the wall-clock time since the sweep started reaches
    `budget_ms` (checked after each sample, so at least one sample is taken).
    Time spent by the consumer between samples counts against the budget.
    The budget runs from `started` (a `clock` reading) when given, otherwise
    from the first sample request, since the generator body runs lazily.
    """
    check_sweep_range(min_disks, max_disks)
    timer = measure_materialized if materialize else measure

    start = clock() if started is None else started
    for disk_count in range(min_disks, max_disks + 1):
        sample = TimingSample(disk_count=disk_count, elapsed_ms=timer(disk_count, clock))
        yield sample

        if budget_ms is not None and (clock() - start) * 1000.0 >= budget_ms:
            if disk_count < max_disks:
                logger.info(f"Sweep budget of {budget_ms:.0f} ms exhausted after {disk_count} disks.")
            return


def sweep(
    min_disks: int,
    max_disks: int,
    budget_ms: Optional[float] = None,
    materialize: bool = False,
    series: Optional[TimingSeries] = None,
    clock: Clock = time.perf_counter,
) -> SweepResult:
    """
    Run a full sweep, appending to `series` (cleared first).

    Returns:
        SweepResult with the number of requested and completed points.
    """
    check_sweep_range(min_disks, max_disks)
    series = series if series is not None else TimingSeries()
    series.clear()

    requested = max_disks - min_disks + 1
    logger.info(f"Starting sweep {min_disks}..{max_disks} (budget: {budget_ms} ms, materialize: {materialize}).")

    start = clock()
    for sample in iter_sweep(min_disks, max_disks, budget_ms, materialize, clock):
        series.append(sample)

    result = SweepResult(
        series=series,
        requested=requested,
        completed=len(series),
        budget_exhausted=len(series) < requested,
        total_ms=(clock() - start) * 1000.0,
    )
    logger.info(f"Sweep finished: {result.completed}/{result.requested} points in {result.total_ms:.1f} ms.")
    return result
