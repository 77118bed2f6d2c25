"""
Tower State (Data Model)
========================
Three rods, each an ordered stack of disk sizes (top = last element).

Invariants:
1. Every rod is strictly decreasing from bottom to top.
2. Across all rods the disk sizes are exactly {1..N}, each exactly once.

`apply` is the only mutating entry point after `initialize`; a rejected move
leaves the rods untouched.
"""
from __future__ import annotations

import logging
from typing import Optional

from hanoivisualizer.model.errors import InvalidConfiguration, MoveMismatch
from hanoivisualizer.model.events import Event
from hanoivisualizer.model.moves import ROD_COUNT, Move, rod_name

logger = logging.getLogger(__name__)

Snapshot = list[list[int]]


class TowerState:
    def __init__(self, disk_count: Optional[int] = None) -> None:
        self._rods: list[list[int]] = [[] for _ in range(ROD_COUNT)]
        self._disk_count: int = 0

        # Fired with a fresh snapshot after initialize() and every apply()
        self.state_changed = Event("state_changed")

        if disk_count is not None:
            self.initialize(disk_count)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(disk_count={self._disk_count}, rods={self._rods})"

    @property
    def disk_count(self) -> int:
        return self._disk_count

    def initialize(self, disk_count: int) -> None:
        """Stack all disks on rod A, largest at the bottom; B and C empty."""
        if disk_count < 1:
            raise InvalidConfiguration(f"Disk count must be >= 1, got {disk_count}.")

        self._disk_count = disk_count
        self._rods = [list(range(disk_count, 0, -1)), [], []]
        logger.info(f"Tower initialized with {disk_count} disks.")
        self.state_changed.emit(self.snapshot())

    def top_of(self, rod: int) -> Optional[int]:
        """Size of the top disk on a rod, or None if the rod is empty."""
        stack = self._rods[rod]
        return stack[-1] if stack else None

    def height_of(self, rod: int) -> int:
        return len(self._rods[rod])

    def apply(self, move: Move) -> None:
        """
        Move the top disk of `move.source` onto `move.destination`.

        Raises:
            MoveMismatch: the source top is not `move.disk` (this includes an
                empty source rod), or the destination top is smaller than the
                moved disk. Nothing is mutated in that case.
        """
        top = self.top_of(move.source)
        if top != move.disk:
            actual = "empty" if top is None else f"disk {top}"
            raise MoveMismatch(
                f"Cannot move disk {move.disk} from {rod_name(move.source)}: top of the rod is {actual}.",
                move,
            )

        target = self.top_of(move.destination)
        if target is not None and target < move.disk:
            raise MoveMismatch(
                f"Cannot place disk {move.disk} on disk {target} at {rod_name(move.destination)}.",
                move,
            )

        self._rods[move.source].pop()
        self._rods[move.destination].append(move.disk)
        self.state_changed.emit(self.snapshot())

    def snapshot(self) -> Snapshot:
        """Independent copy of all three rods, bottom to top."""
        return [list(rod) for rod in self._rods]

    def is_solved(self, destination: int = 2) -> bool:
        """True when every disk sits on `destination` (the invariant keeps them ordered)."""
        return self._disk_count > 0 and len(self._rods[destination]) == self._disk_count

    def check_invariants(self) -> bool:
        """Verify both invariants; used by tests and debug assertions."""
        for rod in self._rods:
            if any(lower <= upper for lower, upper in zip(rod, rod[1:])):
                return False
        disks = sorted(d for rod in self._rods for d in rod)
        return disks == list(range(1, self._disk_count + 1))
