"""
Move Planner
============
Pure recursive planner for the optimal 3-rod solution. It never touches a
TowerState, so it can be timed independently of any live puzzle.

For N disks the plan is: move N-1 disks source -> spare, move disk N
source -> destination, move N-1 disks spare -> destination. This gives
exactly 2^N - 1 moves, which is minimal.
"""
from __future__ import annotations

from typing import Iterator

from hanoivisualizer.model.errors import InvalidConfiguration
from hanoivisualizer.model.moves import Move

SOURCE_ROD = 0
SPARE_ROD = 1
DESTINATION_ROD = 2


def _check_disk_count(disk_count: int) -> None:
    if disk_count < 0:
        raise InvalidConfiguration(f"Disk count must not be negative, got {disk_count}.")


def optimal_move_count(disk_count: int) -> int:
    """Closed form 2^N - 1."""
    _check_disk_count(disk_count)
    return (1 << disk_count) - 1


def iter_moves(
    disk_count: int,
    source: int = SOURCE_ROD,
    destination: int = DESTINATION_ROD,
    spare: int = SPARE_ROD,
) -> Iterator[Move]:
    """Yield the optimal moves lazily, in order."""
    _check_disk_count(disk_count)
    yield from _generate(disk_count, source, destination, spare)


def _generate(n: int, source: int, destination: int, spare: int) -> Iterator[Move]:
    if n <= 0:
        return
    yield from _generate(n - 1, source, spare, destination)
    yield Move(disk=n, source=source, destination=destination)
    yield from _generate(n - 1, spare, destination, source)


def plan_moves(
    disk_count: int,
    source: int = SOURCE_ROD,
    destination: int = DESTINATION_ROD,
    spare: int = SPARE_ROD,
) -> tuple[Move, ...]:
    """The full, immutable move sequence."""
    return tuple(iter_moves(disk_count, source, destination, spare))


def plan_descriptions(disk_count: int) -> list[str]:
    """Full materialization: every move rendered to its text form."""
    _check_disk_count(disk_count)
    descriptions: list[str] = []
    _describe(disk_count, SOURCE_ROD, DESTINATION_ROD, SPARE_ROD, descriptions)
    return descriptions


def _describe(n: int, source: int, destination: int, spare: int, out: list[str]) -> None:
    if n <= 0:
        return
    _describe(n - 1, source, spare, destination, out)
    out.append(Move(disk=n, source=source, destination=destination).describe())
    _describe(n - 1, spare, destination, source, out)


def count_moves(disk_count: int) -> int:
    """
    Same recursion as the planner, but only counts the moves.

    Isolates the recursion cost from allocation and string formatting when
    benchmarking.
    """
    _check_disk_count(disk_count)
    return _count(disk_count, SOURCE_ROD, DESTINATION_ROD, SPARE_ROD)


def _count(n: int, source: int, destination: int, spare: int) -> int:
    if n <= 0:
        return 0
    return _count(n - 1, source, spare, destination) + 1 + _count(n - 1, spare, destination, source)
