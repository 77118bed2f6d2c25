"""
Animation Sequencer
===================
Turns one move into a lift -> traverse -> drop path and walks a disk along
it, one tick at a time.

Why is the state commit deferred?
---------------------------------
The tower state is only mutated when the animation reaches its last
waypoint (the controller commits on `completed`). While a disk is in
flight the renderer hides it on its source rod and draws it at
`current_position` instead, so no frame shows the disk in two places.

The sequencer is a two-state machine: `Idle` or `Animating(move, path,
segment, progress)`. Only one disk may be in flight; `start` while
animating raises AnimationBusy instead of queueing.

Coordinates are layout units with y pointing down (screen convention).
A disk position is its horizontal centre and its top edge.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

import numpy as np

from hanoivisualizer.model.errors import AnimationBusy, MoveMismatch
from hanoivisualizer.model.events import Event
from hanoivisualizer.model.moves import ROD_COUNT, Move, rod_name
from hanoivisualizer.model.tower import TowerState

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

WAYPOINT_COUNT = 4
DEFAULT_STEP = 0.1
# Accumulated float increments (10 x 0.1) land just below 1.0
_PROGRESS_EPS = 1e-9


@dataclass(frozen=True)
class RodLayout:
    """Geometry shared by the animation path and the renderer."""
    width: float = 450.0
    height: float = 400.0
    base_margin: float = 50.0
    rod_height: float = 200.0
    disk_height: float = 20.0
    clearance: float = 40.0
    disk_count: int = 1

    @classmethod
    def for_disk_count(cls, disk_count: int, **kwargs) -> RodLayout:
        """Shrink the disks so that a full stack always fits on a rod."""
        base = cls(disk_count=max(1, disk_count), **kwargs)
        disk_height = min(base.disk_height, base.rod_height / (base.disk_count + 1))
        return cls(**{**kwargs, "disk_count": base.disk_count, "disk_height": disk_height})

    @property
    def base_y(self) -> float:
        return self.height - self.base_margin

    @property
    def rod_spacing(self) -> float:
        return self.width / (ROD_COUNT + 1)

    @property
    def max_disk_width(self) -> float:
        return self.rod_spacing - 20.0

    @property
    def lift_y(self) -> float:
        """Top edge of a disk travelling above the rod tips."""
        return self.base_y - self.rod_height - self.clearance - self.disk_height

    def rod_x(self, rod: int) -> float:
        return (rod + 1) * self.rod_spacing

    def disk_width(self, disk: int) -> float:
        return self.max_disk_width * disk / self.disk_count

    def resting_position(self, rod: int, level: int) -> tuple[float, float]:
        """Position of a disk resting at `level` (0 = bottom) on `rod`."""
        return self.rod_x(rod), self.base_y - (level + 1) * self.disk_height


def create_animation_path(tower: TowerState, move: Move, layout: RodLayout) -> npt.NDArray[np.float64]:
    """
    Waypoints for one move, shape (4, 2):

    0. current resting position on the source rod
    1. above the source rod at the clearance height
    2. above the destination rod at the same height
    3. resting position on the destination rod once placed

    Raises:
        MoveMismatch: `move.disk` is not the top disk of the source rod.
    """
    if tower.top_of(move.source) != move.disk:
        raise MoveMismatch(f"Disk {move.disk} is not on top of rod {rod_name(move.source)}.", move)

    source_level = tower.height_of(move.source) - 1
    destination_level = tower.height_of(move.destination)

    start = layout.resting_position(move.source, source_level)
    end = layout.resting_position(move.destination, destination_level)

    return np.array(
        [
            start,
            (layout.rod_x(move.source), layout.lift_y),
            (layout.rod_x(move.destination), layout.lift_y),
            end,
        ],
        dtype=np.float64,
    )


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True, eq=False)
class Animating:
    move: Move
    path: npt.NDArray[np.float64]
    segment: int = 0
    progress: float = 0.0

    @property
    def position(self) -> tuple[float, float]:
        a = self.path[self.segment]
        b = self.path[min(self.segment + 1, len(self.path) - 1)]
        x, y = a + (b - a) * self.progress
        return float(x), float(y)


AnimationState = Union[Idle, Animating]


@dataclass(frozen=True)
class AnimationFrame:
    move: Move
    position: tuple[float, float]
    segment: int
    progress: float
    finished: bool = False


class AnimationSequencer:
    def __init__(self, layout: Optional[RodLayout] = None, step: float = DEFAULT_STEP) -> None:
        if not 0.0 < step <= 1.0:
            raise ValueError(f"Animation step must be in (0, 1], got {step}.")
        self.layout = layout or RodLayout()
        self.step_size = step
        self._state: AnimationState = Idle()

        self.frame = Event("animation_frame")
        self.completed = Event("animation_complete")

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def is_animating(self) -> bool:
        return isinstance(self._state, Animating)

    @property
    def current_move(self) -> Optional[Move]:
        return self._state.move if isinstance(self._state, Animating) else None

    @property
    def current_position(self) -> Optional[tuple[float, float]]:
        return self._state.position if isinstance(self._state, Animating) else None

    @property
    def path(self) -> Optional[npt.NDArray[np.float64]]:
        return self._state.path.copy() if isinstance(self._state, Animating) else None

    def start(self, move: Move, tower: TowerState) -> npt.NDArray[np.float64]:
        """
        Begin animating `move` against the current (not yet mutated) tower.

        Raises:
            AnimationBusy: another move is still in flight.
            MoveMismatch: the move does not match the tower.
        """
        if isinstance(self._state, Animating):
            raise AnimationBusy(
                f"Cannot start '{move.describe()}': '{self._state.move.describe()}' is still animating."
            )

        path = create_animation_path(tower, move, self.layout)
        self._state = Animating(move=move, path=path)
        logger.debug(f"Animation started: {move.describe()}")
        self.frame.emit(self._frame(self._state))
        return path.copy()

    def step(self) -> Optional[AnimationFrame]:
        """
        Advance one tick. Returns the emitted frame, or None when idle.

        On reaching the last waypoint the sequencer goes back to Idle and
        fires `completed`.
        """
        state = self._state
        if not isinstance(state, Animating):
            return None

        segment = state.segment
        progress = state.progress + self.step_size
        if progress >= 1.0 - _PROGRESS_EPS:
            segment += 1
            progress = 0.0

        if segment >= len(state.path) - 1:
            return self._finish(state)

        self._state = Animating(move=state.move, path=state.path, segment=segment, progress=progress)
        frame = self._frame(self._state)
        self.frame.emit(frame)
        return frame

    def force_complete(self) -> Optional[Move]:
        """
        Snap the in-flight disk to its final waypoint and tear the path down.

        Only `completed` fires (no intermediate frames). Returns the move that
        was in flight, or None if idle.
        """
        state = self._state
        if not isinstance(state, Animating):
            return None
        logger.debug(f"Animation force-completed: {state.move.describe()}")
        self._finish(state)
        return state.move

    def _finish(self, state: Animating) -> AnimationFrame:
        last = len(state.path) - 1
        x, y = state.path[last]
        frame = AnimationFrame(
            move=state.move,
            position=(float(x), float(y)),
            segment=last,
            progress=0.0,
            finished=True,
        )
        self._state = Idle()
        logger.debug(f"Animation finished: {state.move.describe()}")
        self.completed.emit(frame)
        return frame

    @staticmethod
    def _frame(state: Animating) -> AnimationFrame:
        return AnimationFrame(
            move=state.move,
            position=state.position,
            segment=state.segment,
            progress=state.progress,
        )
