import csv

import numpy as np
import pytest

from hanoivisualizer.model.errors import InvalidConfiguration
from hanoivisualizer.model.timing import (
    TimingSample, TimingSeries, iter_sweep, measure, measure_materialized, sweep
)


def test_measure_zero_is_non_negative():
    assert measure(0) >= 0.0
    assert measure_materialized(0) >= 0.0


def test_measure_uses_the_clock(fake_clock):
    # Two clock reads, 1 ms apart
    assert measure(5, clock=fake_clock) == pytest.approx(1.0)
    assert fake_clock.calls == 2


def test_measure_rejects_negative():
    with pytest.raises(InvalidConfiguration):
        measure(-1)


def test_sweep_covers_the_inclusive_range():
    result = sweep(0, 6)
    disks, elapsed = result.series.as_arrays()

    assert result.requested == 7
    assert result.completed == 7
    assert not result.budget_exhausted
    assert disks.tolist() == list(range(0, 7))
    assert np.all(elapsed >= 0.0)


def test_sweep_stops_when_budget_is_exceeded(fake_clock):
    # Each sample costs three clock reads (start, end, budget check) = 3 ms
    result = sweep(1, 10, budget_ms=5.0, clock=fake_clock)

    assert result.requested == 10
    assert result.completed == 2
    assert result.budget_exhausted
    assert [s.disk_count for s in result.series] == [1, 2]


def test_sweep_with_tiny_budget_is_shorter_and_gapless():
    result = sweep(3, 22, budget_ms=0.0)
    counts = [s.disk_count for s in result.series]

    assert 0 < len(counts) < result.requested
    assert counts == list(range(3, 3 + len(counts)))


def test_sweep_clears_the_given_series():
    series = TimingSeries()
    series.append(TimingSample(disk_count=99, elapsed_ms=1.0))

    result = sweep(1, 3, series=series)
    assert result.series is series
    assert [s.disk_count for s in series] == [1, 2, 3]


@pytest.mark.parametrize("bounds", [(-1, 3), (5, 4)])
def test_sweep_rejects_invalid_ranges(bounds):
    with pytest.raises(InvalidConfiguration):
        sweep(*bounds)


def test_iter_sweep_yields_lazily(fake_clock):
    samples = iter_sweep(1, 100, clock=fake_clock)
    first = next(samples)
    assert first.disk_count == 1
    # Only the start read and one measurement so far
    assert fake_clock.calls == 3
    samples.close()


def test_iter_sweep_budget_counts_from_given_start(fake_clock):
    # The consumer asked for the first sample 20 ms after starting the sweep
    fake_clock.now = 0.020
    samples = list(iter_sweep(1, 10, budget_ms=5.0, clock=fake_clock, started=0.0))

    assert [s.disk_count for s in samples] == [1]
    # Two reads for the measurement, one for the budget check
    assert fake_clock.calls == 3


def test_materialized_sweep():
    result = sweep(1, 4, materialize=True)
    assert result.completed == 4


def test_series_csv_export(tmp_path):
    series = TimingSeries()
    series.append(TimingSample(disk_count=1, elapsed_ms=0.5))
    series.append(TimingSample(disk_count=2, elapsed_ms=0.75))

    path = tmp_path / "samples.csv"
    series.to_csv(str(path))

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["disk_count", "elapsed_ms"]
    assert [int(r[0]) for r in rows[1:]] == [1, 2]
    assert float(rows[2][1]) == pytest.approx(0.75)


def test_samples_are_immutable():
    sample = TimingSample(disk_count=1, elapsed_ms=0.1)
    with pytest.raises(AttributeError):
        sample.elapsed_ms = 2.0
