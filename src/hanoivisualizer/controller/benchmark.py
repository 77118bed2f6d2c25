"""
Benchmark Runner
================
Runs a planning-time sweep without freezing the GUI.

Why not a QThread?
------------------
Each sample is short and the planner is CPU-bound Python, so a thread would
not run in parallel anyway. Instead the sweep generator is advanced by one
sample per QTimer tick on the GUI thread; the event loop repaints the
chart and the progress bar between samples.
"""
from __future__ import annotations

import logging
import time
from typing import Generator, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from hanoivisualizer.config import BENCHMARK_INTERVAL_MS
from hanoivisualizer.model.timing import (
    Clock, SweepResult, TimingSample, TimingSeries, check_sweep_range, iter_sweep
)

logger = logging.getLogger(__name__)


class BenchmarkRunner(QObject):
    # Signals to update the UI between samples
    sample_measured = Signal(int, float)  # (disk count, elapsed ms)
    progress_updated = Signal(int, str)   # e.g. (40, "Measured 8 disks: 0.120 ms")
    finished = Signal(object)             # SweepResult
    error_occurred = Signal(str)

    def __init__(
        self,
        interval_ms: int = BENCHMARK_INTERVAL_MS,
        clock: Clock = time.perf_counter,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.clock = clock
        self.series = TimingSeries()
        self._samples: Optional[Generator[TimingSample, None, None]] = None
        self._requested: int = 0
        self._started: float = 0.0

        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self.process_next)

    @property
    def is_running(self) -> bool:
        return self._samples is not None

    def start(
        self,
        min_disks: int,
        max_disks: int,
        budget_ms: Optional[float] = None,
        materialize: bool = False,
    ) -> bool:
        """
        Begin a new sweep; the previous series is cleared.

        Raises:
            InvalidConfiguration: invalid disk range.
        """
        if self.is_running:
            logger.warning("Benchmark already running; start request ignored.")
            return False

        check_sweep_range(min_disks, max_disks)
        self.series.clear()
        self._requested = max_disks - min_disks + 1
        self._started = self.clock()
        # The budget counts from here, not from the first timer tick
        self._samples = iter_sweep(
            min_disks, max_disks, budget_ms=budget_ms, materialize=materialize,
            clock=self.clock, started=self._started,
        )

        logger.info(f"Starting benchmark {min_disks}..{max_disks} (budget: {budget_ms} ms, materialize: {materialize}).")
        self.progress_updated.emit(0, "Starting benchmark...")
        self.timer.start()
        return True

    def process_next(self) -> None:
        """Measure one disk count. Called by the timer."""
        if self._samples is None:
            self.timer.stop()
            return

        try:
            sample = next(self._samples)
        except StopIteration:
            self._finish(cancelled=False)
            return
        except Exception as e:
            logger.exception("Benchmark sample failed")
            self.timer.stop()
            self._samples = None
            self.error_occurred.emit(str(e))
            return

        self.series.append(sample)
        self.sample_measured.emit(sample.disk_count, sample.elapsed_ms)

        percentage = int(100 * len(self.series) / self._requested) if self._requested else 100
        msg = f"Measured {sample.disk_count} disks: {sample.elapsed_ms:.3f} ms"
        self.progress_updated.emit(min(percentage, 100), msg)

    def stop(self) -> None:
        if self.is_running:
            logger.info("Benchmark stopped by user.")
            self._finish(cancelled=True)

    def _finish(self, cancelled: bool) -> None:
        self.timer.stop()
        if self._samples is not None:
            self._samples.close()
        self._samples = None

        completed = len(self.series)
        result = SweepResult(
            series=self.series,
            requested=self._requested,
            completed=completed,
            budget_exhausted=not cancelled and completed < self._requested,
            cancelled=cancelled,
            total_ms=(self.clock() - self._started) * 1000.0,
        )
        logger.info(f"Benchmark finished: {completed}/{self._requested} points.")
        self.finished.emit(result)
