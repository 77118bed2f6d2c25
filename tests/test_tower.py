import pytest

from hanoivisualizer.model.errors import InvalidConfiguration, MoveMismatch
from hanoivisualizer.model.moves import Move
from hanoivisualizer.model.tower import TowerState


def test_initialize_stacks_all_disks_on_rod_a():
    tower = TowerState(4)
    assert tower.snapshot() == [[4, 3, 2, 1], [], []]
    assert tower.disk_count == 4
    assert tower.check_invariants()


@pytest.mark.parametrize("count", [0, -1])
def test_initialize_rejects_fewer_than_one_disk(count):
    tower = TowerState(3)
    with pytest.raises(InvalidConfiguration):
        tower.initialize(count)
    # Nothing mutated
    assert tower.snapshot() == [[3, 2, 1], [], []]


def test_reinitialize_replaces_the_state():
    tower = TowerState(3)
    tower.apply(Move(disk=1, source=0, destination=2))
    tower.initialize(2)
    assert tower.snapshot() == [[2, 1], [], []]


def test_top_of():
    tower = TowerState(3)
    assert tower.top_of(0) == 1
    assert tower.top_of(1) is None


def test_apply_moves_the_top_disk():
    tower = TowerState(3)
    tower.apply(Move(disk=1, source=0, destination=2))
    assert tower.snapshot() == [[3, 2], [], [1]]
    assert tower.height_of(2) == 1


def test_apply_rejects_disk_not_on_top_without_mutation():
    tower = TowerState(3)
    before = tower.snapshot()
    with pytest.raises(MoveMismatch) as exc_info:
        tower.apply(Move(disk=2, source=0, destination=1))
    assert exc_info.value.move == Move(disk=2, source=0, destination=1)
    assert tower.snapshot() == before


def test_apply_from_empty_rod_is_a_mismatch():
    tower = TowerState(2)
    with pytest.raises(MoveMismatch):
        tower.apply(Move(disk=1, source=1, destination=2))


def test_apply_rejects_larger_disk_on_smaller():
    tower = TowerState(3)
    tower.apply(Move(disk=1, source=0, destination=1))
    before = tower.snapshot()
    with pytest.raises(MoveMismatch):
        tower.apply(Move(disk=2, source=0, destination=1))
    assert tower.snapshot() == before
    assert tower.check_invariants()


def test_snapshot_is_an_independent_copy():
    tower = TowerState(3)
    first = tower.snapshot()
    second = tower.snapshot()
    assert first == second
    assert first is not second

    first[0].append(99)
    first[1].append(5)
    assert tower.snapshot() == [[3, 2, 1], [], []]
    assert second == [[3, 2, 1], [], []]


def test_state_changed_fires_on_initialize_and_apply():
    tower = TowerState()
    seen = []
    tower.state_changed.connect(seen.append)

    tower.initialize(2)
    tower.apply(Move(disk=1, source=0, destination=1))
    with pytest.raises(MoveMismatch):
        tower.apply(Move(disk=1, source=0, destination=1))

    assert seen == [[[2, 1], [], []], [[2], [1], []]]


def test_unsubscribed_listener_is_not_called():
    tower = TowerState()
    seen = []
    tower.state_changed.connect(seen.append)
    tower.state_changed.disconnect(seen.append)
    tower.state_changed.disconnect(seen.append)  # unknown callback: no-op

    tower.initialize(1)
    assert seen == []
    assert tower.snapshot() == [[1], [], []]


def test_is_solved():
    tower = TowerState(1)
    assert not tower.is_solved()
    tower.apply(Move(disk=1, source=0, destination=2))
    assert tower.is_solved()
