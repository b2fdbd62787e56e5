"""Goal handling for a follow-joint-trajectory action driving a robot."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from robotlink.trajectory import JointTrajectory
from robotlink.utils import is_similar, is_within_range_named

logger = logging.getLogger(__name__)

DEFAULT_GOAL_THRESHOLD = 0.01
WATCHDOG_PERIOD = 1.0


class GoalResponse(Enum):
    """Answer to a new goal request."""

    REJECT = 1
    ACCEPT_AND_EXECUTE = 2


class CancelResponse(Enum):
    """Answer to a cancel request."""

    REJECT = 1
    ACCEPT = 2


class TriState(IntEnum):
    """A yes/no flag that may also be unknown."""

    UNKNOWN = -1
    FALSE = 0
    TRUE = 1


@dataclass
class Goal:
    """A trajectory to follow, with tolerances the robot drivers ignore."""

    trajectory: JointTrajectory
    goal_time_tolerance: float = 0.0
    goal_tolerance: list = field(default_factory=list)
    path_tolerance: list = field(default_factory=list)
    goal_id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass
class Feedback:
    """Actual joint positions reported by the controller."""

    joint_names: list[str] = field(default_factory=list)
    positions: list[float] = field(default_factory=list)


class TrajectoryAction:
    """Accepts trajectory goals, forwards them and decides when they are done.

    ``publish`` is called with every trajectory command for the robot
    driver; an empty trajectory means stop.  ``clock`` returns seconds.
    The owner calls ``watchdog`` once per watchdog period.
    """

    def __init__(
        self,
        joint_names: Sequence[str],
        publish: Callable[[JointTrajectory], None],
        clock: Callable[[], float] = time.monotonic,
        goal_threshold: float = DEFAULT_GOAL_THRESHOLD,
    ) -> None:
        # Blank names stand for joints the controller does not drive.
        self.joint_names = [name for name in joint_names if name]
        logger.info("Filtered joint names to %d joints", len(self.joint_names))
        self.publish = publish
        self.clock = clock
        self.goal_threshold = goal_threshold

        self.has_active_goal = False
        self.controller_alive = False
        self.has_moved_once = False
        self.has_succeeded = False
        self.goal_aborted = False

        self.active_goal: Goal | None = None
        self.current_trajectory = JointTrajectory()
        self.last_feedback: Feedback | None = None
        self.last_robot_status: TriState | None = None
        self._last_feedback_time: float | None = None
        self._time_to_check = 0.0

    def handle_goal(self, goal: Goal) -> GoalResponse:
        """Accept ``goal`` and send its trajectory, or reject it."""
        logger.info("Received new goal")
        self.has_succeeded = False

        if not self.controller_alive:
            logger.error(
                "Joint trajectory action rejected: "
                "waiting for (initial) feedback from controller"
            )
            return GoalResponse.REJECT
        trajectory = goal.trajectory
        if not trajectory.points:
            logger.error("Joint trajectory action failed on empty trajectory")
            return GoalResponse.REJECT
        if not is_similar(self.joint_names, trajectory.joint_names):
            logger.error("Joint trajectory action failing on invalid joints")
            return GoalResponse.REJECT
        if self.has_active_goal:
            logger.warning("Received new goal while one is active, rejecting it")
            return GoalResponse.REJECT

        self.active_goal = goal
        self._time_to_check = (
            self.clock() + trajectory.points[-1].time_from_start / 2.0
        )
        self.has_moved_once = False
        self.goal_aborted = False
        self.current_trajectory = trajectory

        if goal.goal_time_tolerance > 0:
            logger.warning("Ignoring goal time tolerance in action goal")
        if goal.goal_tolerance:
            logger.warning(
                "Ignoring goal tolerance in action, using parameter tolerance of %f",
                self.goal_threshold,
            )
        if goal.path_tolerance:
            logger.warning("Ignoring goal path tolerance, option not supported")

        self.has_active_goal = True
        self.publish(trajectory)
        return GoalResponse.ACCEPT_AND_EXECUTE

    def handle_cancel(self, goal_id: str) -> CancelResponse:
        """Cancel the goal with ``goal_id`` if it is the current one."""
        if self.active_goal is None or self.active_goal.goal_id != goal_id:
            logger.warning(
                "Active goal and goal cancel do not match, ignoring cancel request"
            )
            return CancelResponse.REJECT
        self.has_active_goal = False
        self.has_succeeded = False
        self.publish(JointTrajectory(joint_names=list(self.joint_names)))
        logger.info("Goal cancelled")
        return CancelResponse.ACCEPT

    def controller_state(self, feedback: Feedback) -> bool:
        """Take controller feedback; return True if it completes the active goal."""
        self.last_feedback = feedback
        self.controller_alive = True
        self._last_feedback_time = self.clock()

        if not self.has_active_goal:
            return False
        if not self.current_trajectory.points:
            logger.info("Current trajectory is empty, ignoring feedback")
            return False
        if not is_similar(self.joint_names, feedback.joint_names):
            logger.error("Joint names from the controller don't match our joint names.")
            return False
        if not self.has_moved_once and self.clock() < self._time_to_check:
            return False

        if not self.within_goal_constraints(feedback):
            return False

        status = self.last_robot_status
        if status is None:
            logger.warning(
                "Robot status is not being published; "
                "the robot driver node and controller code should be updated"
            )
        elif status == TriState.UNKNOWN:
            logger.warning("Robot status in motion unknown")
        elif status != TriState.FALSE:
            logger.debug("Within goal constraints but robot is still moving")
            return False

        logger.info("Inside goal constraints, return success for action")
        self.has_active_goal = False
        self.has_succeeded = True
        return True

    def robot_status(self, in_motion: int) -> None:
        """Record whether the robot is in motion."""
        self.last_robot_status = TriState(in_motion)
        if self.last_robot_status == TriState.TRUE:
            self.has_moved_once = True

    def watchdog(self) -> bool:
        """Abort the active goal if the controller has gone quiet.

        Returns True if no feedback arrived within the watchdog period.
        """
        now = self.clock()
        if (
            self._last_feedback_time is not None
            and now - self._last_feedback_time < WATCHDOG_PERIOD
        ):
            return False

        if self.last_feedback is None:
            logger.debug("Waiting for subscription to joint trajectory state")
        logger.warning("Trajectory state not received for %s seconds", WATCHDOG_PERIOD)
        self.controller_alive = False
        self.has_succeeded = False

        if self.has_active_goal:
            if self.last_feedback is None:
                logger.warning(
                    "Aborting goal because we have never heard a controller state message."
                )
            else:
                logger.warning(
                    "Aborting goal because we haven't heard from the controller in %s seconds",
                    WATCHDOG_PERIOD,
                )
            self._abort_goal()
        return True

    def _abort_goal(self) -> None:
        self.publish(JointTrajectory())
        self.has_active_goal = False
        self.goal_aborted = True

    def within_goal_constraints(self, feedback: Feedback) -> bool:
        """True if ``feedback`` is within the goal threshold of the final point."""
        trajectory = self.current_trajectory
        if not trajectory.points:
            logger.warning("Empty joint trajectory passed to check goal constraints")
            return False
        return is_within_range_named(
            feedback.joint_names,
            feedback.positions,
            trajectory.joint_names,
            trajectory.points[-1].positions,
            self.goal_threshold,
        )