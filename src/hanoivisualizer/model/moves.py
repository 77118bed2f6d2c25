"""
Moves and their Text Format
===========================
A Move is a plan ("move disk S from rod R1 to rod R2"); it only becomes an
effect when the executor applies it to a TowerState.

Text format (shown in the move list, written to logs and accepted back by
the executor):

    "<verb> disk <N> from <RodName> to <RodName>"

Parsing is positional: token 2 is the disk, tokens 4 and 6 are the rods.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from hanoivisualizer.model.errors import MoveParseError

ROD_NAMES: tuple[str, str, str] = ("A", "B", "C")
ROD_COUNT: int = len(ROD_NAMES)

MOVE_VERB: str = "Move"


def rod_name(index: int) -> str:
    """Letter of the rod with the given index (0 -> 'A')."""
    if not 0 <= index < ROD_COUNT:
        raise ValueError(f"Rod index must be in 0..{ROD_COUNT - 1}, got {index}.")
    return ROD_NAMES[index]


def rod_index(name: str) -> int:
    """Index of the rod with the given letter ('C' -> 2)."""
    try:
        return ROD_NAMES.index(name.strip().upper())
    except ValueError:
        raise MoveParseError(f"Unknown rod name '{name}'.") from None


@dataclass(frozen=True)
class Move:
    disk: int
    source: int
    destination: int

    def __post_init__(self) -> None:
        if self.disk < 1:
            raise ValueError(f"Disk size must be >= 1, got {self.disk}.")
        for rod in (self.source, self.destination):
            if not 0 <= rod < ROD_COUNT:
                raise ValueError(f"Rod index must be in 0..{ROD_COUNT - 1}, got {rod}.")
        if self.source == self.destination:
            raise ValueError("Source and destination rods must differ.")

    @property
    def spare(self) -> int:
        """The rod not touched by this move."""
        return 3 - self.source - self.destination

    def describe(self, verb: str = MOVE_VERB) -> str:
        return f"{verb} disk {self.disk} from {rod_name(self.source)} to {rod_name(self.destination)}"

    def __str__(self) -> str:
        return self.describe()


def parse_move(text: str) -> Move:
    """
    Parse a move description back into a Move.

    Only the positions of the tokens matter; the verb is not checked so that
    lists produced with a different verb still replay.
    """
    parts = text.split()
    if len(parts) < 7:
        raise MoveParseError(f"Cannot parse move '{text}': expected 7 tokens, got {len(parts)}.")

    try:
        disk = int(parts[2])
    except ValueError:
        raise MoveParseError(f"Cannot parse move '{text}': '{parts[2]}' is not a disk number.") from None

    source = rod_index(parts[4])
    destination = rod_index(parts[6])

    try:
        return Move(disk=disk, source=source, destination=destination)
    except ValueError as e:
        raise MoveParseError(f"Cannot parse move '{text}': {e}") from None


MoveLike = Union[Move, str]


def coerce_move(move: MoveLike) -> Move:
    """Accept either a structured Move or its text description."""
    if isinstance(move, Move):
        return move
    return parse_move(move)
