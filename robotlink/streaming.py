"""Sending converted trajectories to the robot, all at once or point by point."""

from __future__ import annotations

import copy
import logging
import threading
import time
from collections.abc import Sequence
from dataclasses import replace
from enum import Enum

from robotlink.joint_data import JointData
from robotlink.trajectory import JointTrajectory, RobotPoint, TrajectoryConverter

logger = logging.getLogger(__name__)

END_TRAJECTORY = -1
STOP_TRAJECTORY = -2
START_TRAJECTORY_DOWNLOAD = -3

DEFAULT_MIN_BUFFER_SIZE = 1


class TransferState(Enum):
    """What the streamer is doing."""

    IDLE = 0
    STREAMING = 1


class StreamCommand(Enum):
    """Outcome of handing a trajectory to the streamer."""

    STOP = "stop"
    STREAM = "stream"


def _copy_point(point: RobotPoint, sequence: int | None = None) -> RobotPoint:
    joints = JointData(len(point.joints))
    joints.copy_from(point.joints)
    new = replace(point, joints=joints)
    if sequence is not None:
        new.sequence = sequence
    return new


def pad_to_minimum(
    points: Sequence[RobotPoint], min_buffer_size: int
) -> list[RobotPoint]:
    """Repeat the last point until there are at least ``min_buffer_size`` points.

    An empty list is returned unchanged.
    """
    padded = list(points)
    if padded and len(padded) < min_buffer_size:
        logger.debug(
            "Padding trajectory: current(%d) => minimum(%d)",
            len(padded),
            min_buffer_size,
        )
        while len(padded) < min_buffer_size:
            padded.append(_copy_point(padded[-1]))
    return padded


def download_points(points: Sequence[RobotPoint]) -> list[RobotPoint]:
    """Prepare points for a whole-trajectory download.

    A download needs at least a start and an end point, so a single point is
    doubled.  The first point is marked as the download start and the last as
    the trajectory end.  The given points are not modified.
    """
    if not points:
        raise ValueError("cannot download an empty trajectory")
    prepared = [_copy_point(point) for point in points]
    if len(prepared) < 2:
        prepared.append(_copy_point(prepared[0]))
    prepared[0].sequence = START_TRAJECTORY_DOWNLOAD
    prepared[-1].sequence = END_TRAJECTORY
    logger.info("Sending trajectory points, size: %d", len(prepared))
    return prepared


class TrajectoryStreamer:
    """Feeds a trajectory to the robot one point at a time.

    The caller sends what ``next_point`` returns and calls ``acknowledge``
    once the robot has accepted it.  Splicing is not supported: a new
    trajectory arriving while one is streaming stops the motion instead.
    """

    def __init__(
        self,
        converter: TrajectoryConverter,
        min_buffer_size: int = DEFAULT_MIN_BUFFER_SIZE,
    ) -> None:
        self.converter = converter
        self.min_buffer_size = min_buffer_size
        self._lock = threading.RLock()
        self._state = TransferState.IDLE
        self._trajectory: list[RobotPoint] = []
        self._current = 0
        self.streaming_start: float | None = None

    @property
    def state(self) -> TransferState:
        return self._state

    @property
    def current_index(self) -> int:
        """Index of the next point to be sent."""
        return self._current

    @property
    def trajectory(self) -> list[RobotPoint]:
        """The points of the trajectory being streamed."""
        return list(self._trajectory)

    def receive(self, trajectory: JointTrajectory) -> StreamCommand:
        """Take a new trajectory; an empty one, or one during streaming, stops motion."""
        state = self._state
        if not trajectory.points:
            logger.info(
                "Empty trajectory received while in state: %s. "
                "Canceling current trajectory.",
                state.name,
            )
            self.stop()
            return StreamCommand.STOP
        if state is not TransferState.IDLE:
            logger.error(
                "Trajectory splicing not yet implemented, stopping current motion."
            )
            self.stop()
            return StreamCommand.STOP

        points = pad_to_minimum(
            self.converter.convert(trajectory), self.min_buffer_size
        )
        with self._lock:
            logger.info("Executing trajectory of size: %d", len(points))
            self._trajectory = points
            self._current = 0
            self._state = TransferState.STREAMING
            self.streaming_start = time.time()
        return StreamCommand.STREAM

    def next_point(self) -> RobotPoint | None:
        """Return the point to send next, or None when there is nothing to send.

        Reaching the end of the trajectory returns the streamer to idle.
        """
        with self._lock:
            if self._state is not TransferState.STREAMING:
                return None
            if self._current >= len(self._trajectory):
                logger.info("Trajectory streaming complete, setting state to IDLE")
                self._state = TransferState.IDLE
                return None
            return self._trajectory[self._current]

    def acknowledge(self) -> None:
        """Record that the current point reached the robot."""
        with self._lock:
            if self._state is not TransferState.STREAMING:
                raise RuntimeError("no trajectory is being streamed")
            if self._current >= len(self._trajectory):
                raise RuntimeError("every point has already been sent")
            self._current += 1
            logger.debug(
                "Point[%d of %d] sent to controller",
                self._current,
                len(self._trajectory),
            )

    def stop(self) -> RobotPoint:
        """Go idle and return the stop command to send to the robot."""
        with self._lock:
            logger.info("Joint trajectory handler: entering stopping state")
            self._state = TransferState.IDLE
            return RobotPoint(
                sequence=STOP_TRAJECTORY,
                joints=JointData(),
                velocity=0.0,
                duration=0.0,
            )


def _clone(points: Sequence[RobotPoint]) -> list[RobotPoint]:
    return copy.deepcopy(list(points))