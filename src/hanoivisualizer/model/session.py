"""
Puzzle Session
==============
Caller-side driver: owns the tower, the executor and the step cursor into
the active plan. Exactly one plan is active per session; solving again
discards the old cursor.
"""
from __future__ import annotations

import logging
from typing import Optional

from hanoivisualizer.model.executor import ExecutionResult, MoveExecutor
from hanoivisualizer.model.moves import Move
from hanoivisualizer.model.planner import DESTINATION_ROD, plan_moves
from hanoivisualizer.model.tower import TowerState

logger = logging.getLogger(__name__)


class PuzzleSession:
    def __init__(self) -> None:
        self.tower = TowerState()
        self.executor = MoveExecutor(self.tower)
        self.plan: tuple[Move, ...] = ()
        self.cursor: int = 0

    @property
    def has_plan(self) -> bool:
        return bool(self.plan)

    @property
    def remaining(self) -> int:
        return len(self.plan) - self.cursor

    @property
    def finished(self) -> bool:
        return self.has_plan and self.cursor >= len(self.plan)

    def initialize(self, disk_count: int) -> None:
        self.tower.initialize(disk_count)
        self.executor.reset()
        self.plan = ()
        self.cursor = 0

    def solve(self) -> tuple[Move, ...]:
        """
        Plan from the canonical start. The moves are not applied.

        The plan assumes the tower is in its initial configuration, so the
        tower is re-initialized first if moves were already made.
        """
        if self.executor.moves_made:
            self.tower.initialize(self.tower.disk_count)

        self.plan = plan_moves(self.tower.disk_count)
        self.cursor = 0
        self.executor.reset(total=len(self.plan))
        logger.info(f"Solution generated: {len(self.plan)} moves for {self.tower.disk_count} disks.")
        return self.plan

    def peek(self) -> Optional[Move]:
        """Next planned move, or None when there is no plan or it is done."""
        if self.cursor < len(self.plan):
            return self.plan[self.cursor]
        return None

    def next_move(self) -> Optional[ExecutionResult]:
        """Execute the move under the cursor; the cursor advances only on success."""
        move = self.peek()
        if move is None:
            return None

        result = self.executor.execute(move)
        if result.accepted:
            self.cursor += 1
            if self.finished:
                logger.info("Solution complete.")
        return result

    def run_to_end(self) -> list[ExecutionResult]:
        """Execute all remaining moves; stops at the first rejection."""
        results: list[ExecutionResult] = []
        while True:
            result = self.next_move()
            if result is None:
                break
            results.append(result)
            if not result.accepted:
                break
        return results

    def is_solved(self) -> bool:
        return self.tower.is_solved(DESTINATION_ROD)
