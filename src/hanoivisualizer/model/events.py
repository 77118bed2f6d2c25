"""
Lightweight observer used by the model layer.

The model must stay importable without Qt, so it exposes plain callback
lists. The controller layer re-emits them as Qt Signals.
"""
from __future__ import annotations

from typing import Any, Callable


class Event:
    """A named list of subscribers, called in connection order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._callbacks: list[Callable[..., Any]] = []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, subscribers={len(self._callbacks)})"

    def __len__(self) -> int:
        return len(self._callbacks)

    def connect(self, callback: Callable[..., Any]) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def disconnect(self, callback: Callable[..., Any]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def emit(self, *args: Any) -> None:
        # Copy so a subscriber may disconnect itself while being called
        for callback in list(self._callbacks):
            callback(*args)
