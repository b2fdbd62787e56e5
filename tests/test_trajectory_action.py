import pytest

from robotlink.trajectory import JointTrajectory, TrajectoryPoint
from robotlink.trajectory_action import (
    CancelResponse,
    Feedback,
    Goal,
    GoalResponse,
    TrajectoryAction,
    TriState,
)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def setup():
    published = []
    clock = FakeClock()
    action = TrajectoryAction(["j1", "", "j2"], published.append, clock)
    return action, published, clock


def make_goal(names=("j1", "j2"), final=(1.0, 2.0), end_time=4.0):
    points = [
        TrajectoryPoint(positions=[0.0, 0.0], time_from_start=0.0),
        TrajectoryPoint(positions=list(final), time_from_start=end_time),
    ]
    return Goal(trajectory=JointTrajectory(joint_names=list(names), points=points))


def alive(action):
    action.controller_state(Feedback(["j1", "j2"], [0.0, 0.0]))


def test_blank_joint_names_are_filtered(setup):
    action, _, _ = setup
    assert action.joint_names == ["j1", "j2"]


def test_goal_rejected_before_controller_feedback(setup):
    action, published, _ = setup
    assert action.handle_goal(make_goal()) is GoalResponse.REJECT
    assert published == []


def test_goal_accepted_and_published(setup):
    action, published, _ = setup
    alive(action)
    goal = make_goal(names=("j2", "j1"))
    assert action.handle_goal(goal) is GoalResponse.ACCEPT_AND_EXECUTE
    assert published == [goal.trajectory]
    assert action.has_active_goal


def test_empty_trajectory_rejected(setup):
    action, _, _ = setup
    alive(action)
    goal = Goal(trajectory=JointTrajectory(joint_names=["j1", "j2"]))
    assert action.handle_goal(goal) is GoalResponse.REJECT


def test_invalid_joint_names_rejected(setup):
    action, _, _ = setup
    alive(action)
    assert action.handle_goal(make_goal(names=("j1", "j3"))) is GoalResponse.REJECT


def test_second_goal_rejected_while_active(setup):
    action, published, _ = setup
    alive(action)
    action.handle_goal(make_goal())
    assert action.handle_goal(make_goal()) is GoalResponse.REJECT
    assert len(published) == 1


def test_success_when_at_goal_after_half_time(setup):
    action, _, clock = setup
    alive(action)
    action.handle_goal(make_goal(end_time=4.0))
    clock.now += 2.5
    assert action.controller_state(Feedback(["j2", "j1"], [2.0, 1.0])) is True
    assert action.has_succeeded
    assert not action.has_active_goal


def test_no_success_before_half_time(setup):
    action, _, clock = setup
    alive(action)
    action.handle_goal(make_goal(end_time=4.0))
    clock.now += 1.0
    assert action.controller_state(Feedback(["j1", "j2"], [1.0, 2.0])) is False
    assert action.has_active_goal


def test_moved_once_allows_early_check(setup):
    action, _, clock = setup
    alive(action)
    action.handle_goal(make_goal(end_time=4.0))
    action.robot_status(TriState.TRUE)
    action.robot_status(TriState.FALSE)
    clock.now += 0.5
    assert action.controller_state(Feedback(["j1", "j2"], [1.0, 2.0])) is True


def test_still_moving_blocks_success(setup):
    action, _, clock = setup
    alive(action)
    action.handle_goal(make_goal(end_time=4.0))
    action.robot_status(TriState.TRUE)
    clock.now += 3.0
    assert action.controller_state(Feedback(["j1", "j2"], [1.0, 2.0])) is False
    assert action.has_active_goal


def test_unknown_motion_allows_success(setup):
    action, _, clock = setup
    alive(action)
    action.handle_goal(make_goal(end_time=4.0))
    action.robot_status(TriState.UNKNOWN)
    clock.now += 3.0
    assert action.controller_state(Feedback(["j1", "j2"], [1.0, 2.0])) is True


def test_far_from_goal_not_success(setup):
    action, _, clock = setup
    alive(action)
    action.handle_goal(make_goal(end_time=4.0))
    clock.now += 3.0
    assert action.controller_state(Feedback(["j1", "j2"], [0.5, 2.0])) is False


def test_within_goal_constraints_threshold(setup):
    action, _, _ = setup
    alive(action)
    action.handle_goal(make_goal(final=(1.0, 2.0)))
    assert action.within_goal_constraints(Feedback(["j1", "j2"], [1.004, 2.0]))
    assert not action.within_goal_constraints(Feedback(["j1", "j2"], [1.006, 2.0]))


def test_within_goal_constraints_without_trajectory(setup):
    action, _, _ = setup
    assert action.within_goal_constraints(Feedback(["j1", "j2"], [0.0, 0.0])) is False


def test_watchdog_aborts_stale_goal(setup):
    action, published, clock = setup
    alive(action)
    action.handle_goal(make_goal())
    clock.now += 1.5
    assert action.watchdog() is True
    assert not action.has_active_goal
    assert action.goal_aborted
    assert not action.controller_alive
    assert published[-1] == JointTrajectory()


def test_watchdog_quiet_with_recent_feedback(setup):
    action, published, clock = setup
    alive(action)
    action.handle_goal(make_goal())
    clock.now += 0.5
    assert action.watchdog() is False
    assert action.has_active_goal
    assert len(published) == 1


def test_watchdog_without_any_feedback(setup):
    action, published, _ = setup
    assert action.watchdog() is True
    assert published == []


def test_cancel_matching_goal(setup):
    action, published, _ = setup
    alive(action)
    goal = make_goal()
    action.handle_goal(goal)
    assert action.handle_cancel(goal.goal_id) is CancelResponse.ACCEPT
    assert not action.has_active_goal
    assert published[-1] == JointTrajectory(joint_names=["j1", "j2"])


def test_cancel_other_goal_rejected(setup):
    action, _, _ = setup
    alive(action)
    action.handle_goal(make_goal())
    assert action.handle_cancel("other") is CancelResponse.REJECT
    assert action.has_active_goal


def test_robot_status_rejects_invalid_value(setup):
    action, _, _ = setup
    with pytest.raises(ValueError):
        action.robot_status(7)