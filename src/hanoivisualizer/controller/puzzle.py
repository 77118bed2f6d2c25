"""
Puzzle Controller
=================
Bridges the Qt-free model to the GUI.

Why is this file needed?
------------------------
1. Signals: Model events (plain callbacks) are re-emitted as Qt Signals so
   widgets can connect to them like to any other Qt object.
2. Timing: A QTimer ticks the AnimationSequencer on the GUI thread, so the
   window repaints between frames (cooperative time-slicing, no threads).
3. Deferred commit: With animation on, a move is only executed against the
   tower when its animation reaches the last waypoint.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from hanoivisualizer.config import ANIMATION_INTERVAL_MS, ANIMATION_STEP, AUTOPLAY_DELAY_MS, MIN_DISKS
from hanoivisualizer.model.animation import AnimationFrame, AnimationSequencer, RodLayout
from hanoivisualizer.model.errors import AnimationBusy, InvalidConfiguration, MoveMismatch
from hanoivisualizer.model.executor import ExecutionResult
from hanoivisualizer.model.moves import Move
from hanoivisualizer.model.session import PuzzleSession
from hanoivisualizer.model.tower import Snapshot

logger = logging.getLogger(__name__)


class PuzzleController(QObject):
    state_changed = Signal(object)          # Snapshot
    move_made = Signal(str, int, int)       # (description, moves made, total moves)
    move_rejected = Signal(str)             # reason
    animation_frame = Signal(object)        # AnimationFrame
    animation_finished = Signal(object)     # AnimationFrame (finished=True)
    solution_ready = Signal(object)         # tuple[Move, ...]
    solution_finished = Signal()
    playing_changed = Signal(bool)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.session = PuzzleSession()
        self.sequencer = AnimationSequencer(step=ANIMATION_STEP)
        self.animated: bool = True
        self._playing: bool = False
        self._forcing: bool = False

        # Animation Timer
        self.timer = QTimer(self)
        self.timer.setInterval(ANIMATION_INTERVAL_MS)
        self.timer.timeout.connect(self.advance_frame)

        # Auto-play: short pause between consecutive moves
        self.autoplay_timer = QTimer(self)
        self.autoplay_timer.setSingleShot(True)
        self.autoplay_timer.setInterval(AUTOPLAY_DELAY_MS)
        self.autoplay_timer.timeout.connect(self.next_move)

        # --- MODEL CONNECTIONS ---
        self.session.tower.state_changed.connect(self.state_changed.emit)
        self.session.executor.move_made.connect(self._on_move_made)
        self.session.executor.move_rejected.connect(self._on_move_rejected)
        self.sequencer.frame.connect(self.animation_frame.emit)
        self.sequencer.completed.connect(self._on_animation_completed)

    # --- PROPERTIES ---

    @property
    def disk_count(self) -> int:
        return self.session.tower.disk_count

    @property
    def layout(self) -> RodLayout:
        return self.sequencer.layout

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_animating(self) -> bool:
        return self.sequencer.is_animating

    @property
    def in_flight(self) -> Optional[tuple[Move, tuple[float, float]]]:
        """The animating move and its current position, if any."""
        move = self.sequencer.current_move
        position = self.sequencer.current_position
        if move is None or position is None:
            return None
        return move, position

    def snapshot(self) -> Snapshot:
        return self.session.tower.snapshot()

    def progress_text(self) -> str:
        return self.session.executor.progress_text()

    # --- COMMANDS ---

    def initialize(self, disk_count: int) -> None:
        """
        Rebuild the tower. An in-flight animation is completed (and committed)
        first so no path refers to the old rod layout.

        Raises:
            InvalidConfiguration: disk_count < 1. Nothing is touched, an
                in-flight animation keeps running.
        """
        if disk_count < MIN_DISKS:
            raise InvalidConfiguration(f"Disk count must be >= {MIN_DISKS}, got {disk_count}.")

        self.pause()
        self._cancel_animation()
        self.session.initialize(disk_count)
        self.sequencer.layout = RodLayout.for_disk_count(disk_count)

    def solve(self) -> tuple[Move, ...]:
        """Generate the plan for the current tower; moves are not applied."""
        self.pause()
        self._cancel_animation()
        plan = self.session.solve()
        self.solution_ready.emit(plan)
        return plan

    def next_move(self) -> bool:
        """
        Execute (or start animating) the next planned move.

        Returns False when there is nothing to do or a move is still in flight.
        """
        move = self.session.peek()
        if move is None:
            return False

        if not self.animated:
            result = self.session.next_move()
            self._after_execute(result)
            return bool(result and result.accepted)

        try:
            self.sequencer.start(move, self.session.tower)
        except AnimationBusy as e:
            logger.warning(f"Move request ignored: {e}")
            return False
        except MoveMismatch as e:
            logger.warning(f"Cannot animate '{move.describe()}': {e}")
            self.move_rejected.emit(str(e))
            return False

        self.timer.start()
        return True

    def advance_frame(self) -> None:
        self.sequencer.step()

    def play(self) -> None:
        if self._playing or self.session.peek() is None:
            return
        self._playing = True
        self.playing_changed.emit(True)
        if not self.sequencer.is_animating:
            self.next_move()

    def pause(self) -> None:
        self.autoplay_timer.stop()
        if self._playing:
            self._playing = False
            self.playing_changed.emit(False)

    def toggle_play(self) -> None:
        if self._playing:
            self.pause()
        else:
            self.play()

    def set_animated(self, animated: bool) -> None:
        self.animated = animated
        if not animated:
            # Playback continues unanimated from the committed move
            self._cancel_animation(quiet=False)

    def set_animation_step(self, step: float) -> None:
        """Progress increment per tick; larger is faster."""
        if not 0.0 < step <= 1.0:
            raise ValueError(f"Animation step must be in (0, 1], got {step}.")
        self.sequencer.step_size = step

    # --- INTERNAL ---

    def _cancel_animation(self, quiet: bool = True) -> None:
        """Finish the in-flight move at once. `quiet` skips finish and auto-play handling."""
        self._forcing = quiet
        try:
            self.sequencer.force_complete()
        finally:
            self._forcing = False
        self.timer.stop()

    def _on_animation_completed(self, frame: AnimationFrame) -> None:
        self.timer.stop()

        # Commit the animated move now that it reached its final waypoint
        if self.session.peek() == frame.move:
            result = self.session.next_move()
        else:
            result = self.session.executor.execute(frame.move)

        self.animation_finished.emit(frame)

        # Forced teardown: final state only, no finish or auto-play handling
        if self._forcing:
            return
        self._after_execute(result)

    def _after_execute(self, result: Optional[ExecutionResult]) -> None:
        if result is None or not result.accepted:
            self.pause()
            return

        if self.session.finished:
            self.pause()
            logger.info("Solution finished.")
            self.solution_finished.emit()
        elif self._playing:
            self.autoplay_timer.start()

    def _on_move_made(self, result: ExecutionResult) -> None:
        self.move_made.emit(result.description, result.moves_made, result.total_moves or 0)

    def _on_move_rejected(self, result: ExecutionResult) -> None:
        self.move_rejected.emit(result.reason)
