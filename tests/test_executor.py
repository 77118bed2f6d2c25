import pytest

from hanoivisualizer.model.errors import MoveParseError
from hanoivisualizer.model.executor import MoveExecutor
from hanoivisualizer.model.moves import Move
from hanoivisualizer.model.planner import plan_moves
from hanoivisualizer.model.tower import TowerState


@pytest.fixture
def executor():
    return MoveExecutor(TowerState(3))


def test_execute_applies_and_counts(executor):
    result = executor.execute(Move(disk=1, source=0, destination=2))
    assert result.accepted
    assert result.description == "Move disk 1 from A to C"
    assert result.snapshot == [[3, 2], [], [1]]
    assert result.moves_made == 1
    assert executor.moves_made == 1


def test_execute_accepts_move_text(executor):
    result = executor.execute("Move disk 1 from A to B")
    assert result.accepted
    assert executor.tower.snapshot() == [[3, 2], [1], []]


def test_malformed_text_raises(executor):
    with pytest.raises(MoveParseError):
        executor.execute("Move the small one over there")
    assert executor.moves_made == 0


def test_mismatch_is_a_rejected_noop(executor):
    before = executor.tower.snapshot()
    result = executor.execute(Move(disk=3, source=0, destination=2))

    assert not result.accepted
    assert "disk 1" in result.reason
    assert executor.tower.snapshot() == before
    assert executor.moves_made == 0
    assert result.moves_made == 0


def test_out_of_order_replay_is_rejected(executor):
    plan = plan_moves(3)
    assert executor.execute(plan[0]).accepted
    # Skipping ahead: disk 3 is still covered by disk 2
    result = executor.execute(plan[3])
    assert not result.accepted
    assert executor.moves_made == 1


def test_events_are_emitted(executor):
    made, rejected = [], []
    executor.move_made.connect(made.append)
    executor.move_rejected.connect(rejected.append)

    executor.execute(Move(disk=1, source=0, destination=1))
    executor.execute(Move(disk=1, source=0, destination=1))

    assert [r.description for r in made] == ["Move disk 1 from A to B"]
    assert len(rejected) == 1 and not rejected[0].accepted


def test_progress_text(executor):
    assert executor.progress_text() == "Moves: 0"
    executor.reset(total=7)
    executor.execute(Move(disk=1, source=0, destination=2))
    assert executor.progress_text() == "Move 1 of 7"
    assert executor.total_moves == 7


def test_reset_restarts_counter(executor):
    executor.execute(Move(disk=1, source=0, destination=2))
    executor.reset()
    assert executor.moves_made == 0
    assert executor.total_moves is None


def test_full_plan_never_rejects():
    executor = MoveExecutor(TowerState(6))
    plan = plan_moves(6)
    executor.reset(total=len(plan))
    for move in plan:
        result = executor.execute(move.describe())
        assert result.accepted
    assert executor.moves_made == 63
    assert result.progress_text == "Move 63 of 63"
    assert executor.tower.snapshot() == [[], [], [6, 5, 4, 3, 2, 1]]
