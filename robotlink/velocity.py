"""Velocity command and velocity configuration payloads."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from robotlink.byte_array import INT_SIZE, REAL_SIZE, ByteArray, ByteArrayError

MAX_NUM_JOINTS = 6
FRAME_SIZE = 6


def _as_real(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except (struct.error, OverflowError) as exc:
        raise ValueError(f"value out of range: {value!r}") from exc


def _real_list(values, size: int, name: str) -> list[float]:
    result = [_as_real(float(v)) for v in values]
    if len(result) != size:
        raise ValueError(f"{name} needs {size} values, got {len(result)}")
    return result


def _require(buffer: ByteArray, needed: int, what: str) -> None:
    if len(buffer) < needed:
        raise ByteArrayError(
            f"buffer holds {len(buffer)} bytes, {needed} needed for {what}"
        )


class VelocityCommandType(IntEnum):
    """Frame in which a velocity command is expressed."""

    INVALID = 0
    JOINT = 1
    BASE_FRAME = 2
    TOOL_FRAME = 3


@dataclass
class VelocityCommand:
    """A sequence number, a velocity vector and the command type."""

    sequence: int = 0
    vector: list[float] = field(default_factory=lambda: [0.0] * MAX_NUM_JOINTS)
    type: int = VelocityCommandType.INVALID

    MAX_NUM_JOINTS = MAX_NUM_JOINTS

    def __post_init__(self) -> None:
        self.vector = _real_list(self.vector, MAX_NUM_JOINTS, "vector")

    def byte_length(self) -> int:
        """Serialised size in bytes."""
        return 2 * INT_SIZE + MAX_NUM_JOINTS * REAL_SIZE

    def load(self, buffer: ByteArray) -> None:
        """Append the command to ``buffer``."""
        buffer.load_int(self.sequence)
        for value in self.vector:
            buffer.load_real(value)
        buffer.load_int(int(self.type))

    def unload(self, buffer: ByteArray) -> None:
        """Read the command from the back of ``buffer``."""
        _require(buffer, self.byte_length(), "velocity command")
        cmd_type = buffer.unload_int()
        vector = [buffer.unload_real() for _ in range(MAX_NUM_JOINTS)]
        vector.reverse()
        self.sequence = buffer.unload_int()
        self.vector = vector
        self.type = cmd_type


@dataclass
class VelocityConfig:
    """Reference frames and velocity/acceleration limits for velocity control.

    ``accel`` and ``vel`` are fractions of nominal joint acceleration and
    velocity in [0, 1]; ``tvel`` is the tool-centre-point linear velocity in
    m/s and ``rvel`` its angular velocity in rad/s.
    """

    cmd_type: int = VelocityCommandType.INVALID
    frame_ref: list[float] = field(default_factory=lambda: [0.0] * FRAME_SIZE)
    tool_ref: list[float] = field(default_factory=lambda: [0.0] * FRAME_SIZE)
    accel: float = 0.0
    vel: float = 0.0
    tvel: float = 0.0
    rvel: float = 0.0

    def __post_init__(self) -> None:
        self.frame_ref = _real_list(self.frame_ref, FRAME_SIZE, "frame_ref")
        self.tool_ref = _real_list(self.tool_ref, FRAME_SIZE, "tool_ref")
        self.accel = _as_real(self.accel)
        self.vel = _as_real(self.vel)
        self.tvel = _as_real(self.tvel)
        self.rvel = _as_real(self.rvel)

    def byte_length(self) -> int:
        """Serialised size in bytes."""
        return INT_SIZE + (4 + 2 * FRAME_SIZE) * REAL_SIZE

    def load(self, buffer: ByteArray) -> None:
        """Append the configuration to ``buffer``."""
        buffer.load_int(int(self.cmd_type))
        for value in (*self.frame_ref, *self.tool_ref):
            buffer.load_real(value)
        for value in (self.accel, self.vel, self.tvel, self.rvel):
            buffer.load_real(value)

    def unload(self, buffer: ByteArray) -> None:
        """Read the configuration from the back of ``buffer``."""
        _require(buffer, self.byte_length(), "velocity config")
        self.rvel = buffer.unload_real()
        self.tvel = buffer.unload_real()
        self.vel = buffer.unload_real()
        self.accel = buffer.unload_real()
        tool = [buffer.unload_real() for _ in range(FRAME_SIZE)]
        frame = [buffer.unload_real() for _ in range(FRAME_SIZE)]
        tool.reverse()
        frame.reverse()
        self.tool_ref = tool
        self.frame_ref = frame
        self.cmd_type = buffer.unload_int()