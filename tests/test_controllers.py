"""
Controller tests run without an event loop: Qt signals between objects of
the same thread are delivered synchronously, and timer ticks are invoked
by hand.
"""
import pytest

from hanoivisualizer.controller.benchmark import BenchmarkRunner
from hanoivisualizer.controller.puzzle import PuzzleController
from hanoivisualizer.model.errors import InvalidConfiguration


def run_animation(controller: PuzzleController, limit: int = 1000) -> int:
    ticks = 0
    while controller.is_animating and ticks < limit:
        controller.advance_frame()
        ticks += 1
    return ticks


@pytest.fixture
def controller(qapp):
    ctrl = PuzzleController()
    ctrl.initialize(3)
    return ctrl


# ============================================================================
# Puzzle controller
# ============================================================================

def test_initialize_emits_state(qapp):
    ctrl = PuzzleController()
    states = []
    ctrl.state_changed.connect(states.append)

    ctrl.initialize(2)
    assert states == [[[2, 1], [], []]]
    assert ctrl.layout.disk_count == 2


def test_initialize_rejects_zero_disks(controller):
    with pytest.raises(InvalidConfiguration):
        controller.initialize(0)
    assert controller.snapshot() == [[3, 2, 1], [], []]


def test_rejected_initialize_leaves_the_animation_running(controller):
    made = []
    controller.move_made.connect(lambda *args: made.append(args))
    controller.solve()
    controller.next_move()
    controller.advance_frame()

    with pytest.raises(InvalidConfiguration):
        controller.initialize(0)

    assert controller.snapshot() == [[3, 2, 1], [], []]
    assert controller.is_animating
    assert controller.session.cursor == 0
    assert made == []


def test_solve_emits_plan_without_moving(controller):
    plans = []
    controller.solution_ready.connect(plans.append)

    plan = controller.solve()
    assert len(plan) == 7
    assert plans == [plan]
    assert controller.snapshot() == [[3, 2, 1], [], []]


def test_animated_move_commits_only_at_the_end(controller):
    made, frames = [], []
    controller.move_made.connect(lambda *args: made.append(args))
    controller.animation_frame.connect(frames.append)
    controller.solve()

    assert controller.next_move()
    assert controller.is_animating
    controller.advance_frame()
    # Disk 1 is in flight but still on rod A in the state
    assert controller.snapshot() == [[3, 2, 1], [], []]
    assert made == []

    run_animation(controller)
    assert controller.snapshot() == [[3, 2], [], [1]]
    assert made == [("Move disk 1 from A to C", 1, 7)]
    assert len(frames) > 2


def test_next_move_is_gated_while_animating(controller):
    controller.solve()
    controller.next_move()
    assert not controller.next_move()

    run_animation(controller)
    assert controller.session.cursor == 1


def test_in_flight_reports_the_animating_disk(controller):
    controller.solve()
    assert controller.in_flight is None
    controller.next_move()
    move, position = controller.in_flight
    assert move.disk == 1
    assert position == controller.layout.resting_position(0, 2)


def test_unanimated_playback_solves_the_tower(controller):
    finished = []
    controller.solution_finished.connect(lambda: finished.append(True))
    controller.set_animated(False)
    controller.solve()

    while controller.next_move():
        pass

    assert controller.snapshot() == [[], [], [3, 2, 1]]
    assert finished == [True]
    assert controller.progress_text() == "Move 7 of 7"


def test_animated_playback_solves_the_tower(controller):
    controller.solve()
    for _ in range(7):
        assert controller.next_move()
        run_animation(controller)
    assert controller.session.is_solved()
    assert not controller.next_move()


def test_reinitialize_force_completes_the_animation(controller):
    finished = []
    controller.animation_finished.connect(finished.append)
    controller.solve()
    controller.next_move()
    controller.advance_frame()

    controller.initialize(4)

    assert len(finished) == 1
    assert not controller.is_animating
    assert controller.snapshot() == [[4, 3, 2, 1], [], []]
    assert not controller.session.has_plan


def test_reinitialize_during_last_move_does_not_report_finished(qapp):
    ctrl = PuzzleController()
    finished = []
    ctrl.solution_finished.connect(lambda: finished.append(True))
    ctrl.initialize(1)
    ctrl.solve()
    ctrl.play()
    assert ctrl.is_animating

    ctrl.initialize(2)

    assert finished == []
    assert not ctrl.autoplay_timer.isActive()
    assert ctrl.snapshot() == [[2, 1], [], []]


def test_disabling_animation_on_last_move_still_finishes(qapp):
    ctrl = PuzzleController()
    finished = []
    ctrl.solution_finished.connect(lambda: finished.append(True))
    ctrl.initialize(1)
    ctrl.solve()
    ctrl.next_move()

    ctrl.set_animated(False)

    assert finished == [True]
    assert ctrl.snapshot() == [[], [], [1]]


def test_play_and_pause(controller):
    states = []
    controller.playing_changed.connect(states.append)
    controller.set_animated(False)
    controller.solve()

    controller.play()
    assert controller.is_playing
    # First move runs immediately, the rest is scheduled by the auto-play timer
    assert controller.session.cursor == 1

    controller.pause()
    assert not controller.is_playing
    assert states == [True, False]


def test_play_without_plan_does_nothing(controller):
    controller.play()
    assert not controller.is_playing


def test_set_animation_step_validates(controller):
    controller.set_animation_step(0.5)
    assert controller.sequencer.step_size == 0.5
    with pytest.raises(ValueError):
        controller.set_animation_step(2.0)


# ============================================================================
# Benchmark runner
# ============================================================================

def drain(runner: BenchmarkRunner, limit: int = 1000) -> None:
    calls = 0
    while runner.is_running and calls < limit:
        runner.process_next()
        calls += 1


def test_runner_measures_every_point(qapp):
    runner = BenchmarkRunner()
    samples, results = [], []
    runner.sample_measured.connect(lambda n, ms: samples.append((n, ms)))
    runner.finished.connect(results.append)

    assert runner.start(1, 5)
    drain(runner)

    assert [n for n, _ in samples] == [1, 2, 3, 4, 5]
    assert all(ms >= 0.0 for _, ms in samples)
    assert len(results) == 1
    assert results[0].completed == 5
    assert not results[0].budget_exhausted
    assert len(runner.series) == 5


def test_runner_respects_the_budget(qapp):
    runner = BenchmarkRunner()
    results = []
    runner.finished.connect(results.append)

    runner.start(1, 25, budget_ms=0.0)
    drain(runner)

    result = results[0]
    assert result.completed == 1
    assert result.budget_exhausted


def test_runner_budget_counts_from_start(qapp, fake_clock):
    runner = BenchmarkRunner(clock=fake_clock)
    results = []
    runner.finished.connect(results.append)

    runner.start(1, 10, budget_ms=5.0)
    # The first timer tick arrives 10 ms after the sweep was started
    fake_clock.now += 0.010
    drain(runner)

    result = results[0]
    assert result.completed == 1
    assert result.budget_exhausted
    assert result.total_ms >= 10.0


def test_runner_stop_cancels(qapp):
    runner = BenchmarkRunner()
    results = []
    runner.finished.connect(results.append)

    runner.start(1, 10)
    runner.process_next()
    runner.stop()

    assert not runner.is_running
    assert results[0].cancelled
    assert results[0].completed == 1


def test_runner_rejects_invalid_range(qapp):
    runner = BenchmarkRunner()
    with pytest.raises(InvalidConfiguration):
        runner.start(5, 2)
    assert not runner.is_running


def test_runner_ignores_start_while_running(qapp):
    runner = BenchmarkRunner()
    runner.start(1, 3)
    assert not runner.start(1, 3)
    runner.stop()
