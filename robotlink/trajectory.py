"""Conversion of named joint trajectories into robot trajectory points."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from robotlink.joint_data import JointData

logger = logging.getLogger(__name__)

DEFAULT_JOINT_POS = 0.0
DEFAULT_VEL_RATIO = 0.1
DEFAULT_DURATION = 10.0
MIN_VEL_RATIO = 0.001


class TrajectoryError(ValueError):
    """Raised when a trajectory cannot be validated or converted."""


@dataclass
class TrajectoryPoint:
    """One waypoint: joint positions, optional velocities and accelerations.

    ``time_from_start`` is in seconds.
    """

    positions: list[float] = field(default_factory=list)
    velocities: list[float] = field(default_factory=list)
    accelerations: list[float] = field(default_factory=list)
    time_from_start: float = 0.0

    @property
    def whole_seconds(self) -> int:
        """The whole-second part of ``time_from_start``."""
        return math.floor(self.time_from_start)


@dataclass
class JointTrajectory:
    """A list of waypoints for the named joints."""

    joint_names: list[str] = field(default_factory=list)
    points: list[TrajectoryPoint] = field(default_factory=list)


@dataclass
class RobotPoint:
    """A trajectory point in robot format.

    ``velocity`` is a fraction of maximum joint speed in [0, 1] and
    ``duration`` the time in seconds to reach the point.
    """

    sequence: int
    joints: JointData
    velocity: float
    duration: float


class TrajectoryConverter:
    """Validates joint trajectories and turns them into robot points.

    ``joint_names`` is the robot's joint list in controller order; blank
    names mark joints the robot has but the trajectory does not drive.
    """

    def __init__(
        self,
        joint_names: Sequence[str],
        velocity_limits: Mapping[str, float] | None = None,
        default_joint_pos: float = DEFAULT_JOINT_POS,
        default_vel_ratio: float = DEFAULT_VEL_RATIO,
        default_duration: float = DEFAULT_DURATION,
    ) -> None:
        self.joint_names = list(joint_names)
        self.velocity_limits = dict(velocity_limits or {})
        self.default_joint_pos = default_joint_pos
        self.default_vel_ratio = default_vel_ratio
        self.default_duration = default_duration
        self._last_time = 0.0
        if not self.velocity_limits:
            logger.warning("No velocity limits given. Velocity validation disabled.")

    def select(
        self, ros_joint_names: Sequence[str], point: TrajectoryPoint
    ) -> TrajectoryPoint:
        """Reorder ``point`` into robot joint order, filling blank joints."""
        if len(ros_joint_names) != len(point.positions):
            raise TrajectoryError(
                f"{len(point.positions)} positions given for "
                f"{len(ros_joint_names)} joint names"
            )
        names = list(ros_joint_names)
        selected = TrajectoryPoint(time_from_start=point.time_from_start)

        for robot_name in self.joint_names:
            if not robot_name:
                if point.positions:
                    selected.positions.append(self.default_joint_pos)
                if point.velocities:
                    selected.velocities.append(-1.0)
                if point.accelerations:
                    selected.accelerations.append(-1.0)
                continue

            try:
                index = names.index(robot_name)
            except ValueError:
                raise TrajectoryError(
                    f"Expected joint ({robot_name}) not found in trajectory"
                ) from None

            if point.positions:
                selected.positions.append(point.positions[index])
            if point.velocities:
                selected.velocities.append(point.velocities[index])
            if point.accelerations:
                selected.accelerations.append(point.accelerations[index])
        return selected

    def _transform(self, point: TrajectoryPoint) -> TrajectoryPoint:
        """Hook for joint coupling and similar transforms; identity by default."""
        return point

    def _velocity_ratio(self, name: str, velocity: float) -> float:
        if not name or name not in self.velocity_limits:
            return -1.0
        limit = self.velocity_limits[name]
        if limit == 0:
            return math.inf if velocity else 0.0
        return abs(velocity / limit)

    def calc_velocity(self, point: TrajectoryPoint) -> float:
        """Velocity of the joint closest to its limit, as a fraction in [0, 1]."""
        if len(self.joint_names) != len(point.positions):
            raise TrajectoryError(
                f"{len(point.positions)} positions given for "
                f"{len(self.joint_names)} robot joints"
            )
        if not point.velocities:
            logger.warning("Joint velocities unspecified. Using default/safe speed.")
            return self.default_vel_ratio

        ratios = [
            self._velocity_ratio(name, point.velocities[i])
            for i, name in enumerate(self.joint_names)
        ]
        largest = max(ratios) if ratios else -1.0

        if largest > MIN_VEL_RATIO:
            velocity = largest
        else:
            logger.warning(
                "Joint velocity-limits unspecified. Using default velocity-ratio."
            )
            velocity = self.default_vel_ratio

        if velocity < 0 or velocity > 1:
            logger.warning(
                "computed velocity (%.1f %%) is out-of-range. Clipping to [0-100%%]",
                velocity * 100,
            )
            velocity = min(1.0, max(0.0, velocity))
        return velocity

    def calc_duration(self, point: TrajectoryPoint) -> float:
        """Seconds since the previous point; a time not later starts a new trajectory."""
        this_time = float(point.whole_seconds)
        if this_time <= self._last_time:
            duration = self.default_duration
        else:
            duration = this_time - self._last_time
        self._last_time = this_time
        return duration

    def calc_speed(self, point: TrajectoryPoint) -> tuple[float, float]:
        """Return ``(velocity, duration)`` for a robot-ordered point."""
        return self.calc_velocity(point), self.calc_duration(point)

    def validate(self, trajectory: JointTrajectory) -> None:
        """Raise TrajectoryError if the trajectory is not fit to send."""
        for i, point in enumerate(trajectory.points):
            if not point.positions:
                raise TrajectoryError(
                    f"Missing position data for trajectory pt {i}"
                )
            for j, velocity in enumerate(point.velocities):
                name = trajectory.joint_names[j]
                limit = self.velocity_limits.get(name)
                if limit is None:
                    continue
                if abs(velocity) > limit:
                    raise TrajectoryError(
                        f"Max velocity exceeded for trajectory pt {i}, joint '{name}'"
                    )
            if i > 0 and point.time_from_start == 0:
                raise TrajectoryError(
                    f"Missing valid timestamp data for trajectory pt {i}"
                )

    def _create_point(
        self, sequence: int, positions: Sequence[float], velocity: float, duration: float
    ) -> RobotPoint:
        joints = JointData()
        if len(positions) > len(joints):
            raise TrajectoryError(
                f"{len(positions)} joints exceed the maximum of {len(joints)}"
            )
        for index, value in enumerate(positions):
            joints[index] = value
        return RobotPoint(
            sequence=sequence, joints=joints, velocity=velocity, duration=duration
        )

    def convert(self, trajectory: JointTrajectory) -> list[RobotPoint]:
        """Validate ``trajectory`` and convert every point into robot format."""
        self.validate(trajectory)
        robot_points = []
        for sequence, point in enumerate(trajectory.points):
            selected = self.select(trajectory.joint_names, point)
            transformed = self._transform(selected)
            velocity, duration = self.calc_speed(transformed)
            robot_points.append(
                self._create_point(sequence, transformed.positions, velocity, duration)
            )
        return robot_points