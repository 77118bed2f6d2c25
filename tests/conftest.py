import os

import pytest

# Controllers only need a core application; no display is required
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    """Deterministic clock: every call advances by `tick` seconds."""

    def __init__(self, tick: float = 0.001) -> None:
        self.now = 0.0
        self.tick = tick
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        self.now += self.tick
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
