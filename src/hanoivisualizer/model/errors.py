"""
Error Taxonomy
==============
All conditions raised by the core are local and recoverable: after any of
them the tower state is still valid and can be inspected.
"""


class HanoiError(Exception):
    """Base class for all puzzle errors."""


class InvalidConfiguration(HanoiError, ValueError):
    """Disk count (or sweep range) outside the supported range."""


class MoveMismatch(HanoiError):
    """The declared disk is not on top of the source rod (or cannot be placed)."""

    def __init__(self, message: str, move=None) -> None:
        super().__init__(message)
        self.move = move


class AnimationBusy(HanoiError):
    """An animation was requested while another one is still in flight."""


class MoveParseError(HanoiError, ValueError):
    """Move text does not follow the '<verb> disk <N> from <X> to <Y>' format."""
