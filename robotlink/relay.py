"""Relays joint positions reported by the controller as named joint states."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from robotlink.simple_message import ReplyType

logger = logging.getLogger(__name__)


@dataclass
class JointState:
    """Named joint positions stamped with the time they were built."""

    stamp: float
    names: list[str] = field(default_factory=list)
    positions: list[float] = field(default_factory=list)


class JointRelay:
    """Turns raw controller joint values into joint states.

    ``joint_names`` is the full controller joint list; blank names mark
    joints that are read but not published.
    """

    def __init__(
        self,
        joint_names: Sequence[str],
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.joint_names = list(joint_names)
        self.clock = clock

    def select(self, positions: Sequence[float]) -> tuple[list[float], list[str]]:
        """Drop the positions whose joint name is blank."""
        if len(positions) != len(self.joint_names):
            raise ValueError(
                f"{len(positions)} positions given for {len(self.joint_names)} joints"
            )
        pairs = [
            (pos, name)
            for pos, name in zip(positions, self.joint_names)
            if name
        ]
        return [p for p, _ in pairs], [n for _, n in pairs]

    def create_state(self, joint_values) -> JointState:
        """Build a joint state from indexable controller joint values."""
        all_positions: list[float] = []
        for index in range(len(self.joint_names)):
            try:
                all_positions.append(float(joint_values[index]))
            except IndexError:
                logger.error("Failed to parse #%d value from joint message", index)
                all_positions.append(0.0)
        positions, names = self.select(all_positions)
        return JointState(stamp=self.clock(), names=names, positions=positions)

    def handle(
        self, joint_values, reply_requested: bool = False
    ) -> tuple[JointState | None, ReplyType | None]:
        """Build the state and, if asked, the reply code for the controller."""
        try:
            state = self.create_state(joint_values)
        except ValueError as exc:
            logger.error("Failed to create joint state: %s", exc)
            state = None
        reply = None
        if reply_requested:
            reply = ReplyType.SUCCESS if state is not None else ReplyType.FAILURE
        return state, reply