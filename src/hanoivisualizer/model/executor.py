"""
Move Executor
=============
Applies one planned move at a time to a TowerState and keeps the
"move K of T" counter used for progress reporting.

A mismatching move (stale plan, out-of-order replay, empty source rod) is
not a fault: it comes back as a rejected ExecutionResult, the tower and the
counter stay as they were.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from hanoivisualizer.model.errors import MoveMismatch
from hanoivisualizer.model.events import Event
from hanoivisualizer.model.moves import Move, MoveLike, coerce_move
from hanoivisualizer.model.tower import Snapshot, TowerState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    accepted: bool
    move: Move
    description: str
    moves_made: int
    total_moves: Optional[int] = None
    snapshot: Snapshot = field(default_factory=list)
    reason: str = ""

    @property
    def progress_text(self) -> str:
        if self.total_moves is None:
            return f"Move {self.moves_made}"
        return f"Move {self.moves_made} of {self.total_moves}"


class MoveExecutor:
    def __init__(self, tower: TowerState) -> None:
        self.tower = tower
        self._moves_made: int = 0
        self._total_moves: Optional[int] = None

        self.move_made = Event("move_made")
        self.move_rejected = Event("move_rejected")

    @property
    def moves_made(self) -> int:
        return self._moves_made

    @property
    def total_moves(self) -> Optional[int]:
        return self._total_moves

    def reset(self, total: Optional[int] = None) -> None:
        """Restart the counter, e.g. after a new solve or re-initialization."""
        self._moves_made = 0
        self._total_moves = total

    def progress_text(self) -> str:
        if self._total_moves is None:
            return f"Moves: {self._moves_made}"
        return f"Move {self._moves_made} of {self._total_moves}"

    def execute(self, move: MoveLike) -> ExecutionResult:
        """
        Validate and apply a single move.

        Args:
            move: A Move or its text description ("Move disk 1 from A to C").

        Returns:
            ExecutionResult with `accepted=False` and a reason if the move does
            not match the live state.

        Raises:
            MoveParseError: `move` is text that cannot be parsed.
        """
        planned = coerce_move(move)

        try:
            self.tower.apply(planned)
        except MoveMismatch as e:
            logger.warning(f"Rejected '{planned.describe()}': {e}")
            result = ExecutionResult(
                accepted=False,
                move=planned,
                description=planned.describe(),
                moves_made=self._moves_made,
                total_moves=self._total_moves,
                snapshot=self.tower.snapshot(),
                reason=str(e),
            )
            self.move_rejected.emit(result)
            return result

        self._moves_made += 1
        result = ExecutionResult(
            accepted=True,
            move=planned,
            description=planned.describe(),
            moves_made=self._moves_made,
            total_moves=self._total_moves,
            snapshot=self.tower.snapshot(),
        )
        logger.debug(f"{result.progress_text}: {result.description}")
        self.move_made.emit(result)
        return result
