"""Fixed-size set of joint values."""

from __future__ import annotations

import struct
from collections.abc import Iterator

from robotlink.byte_array import REAL_SIZE, ByteArray, ByteArrayError

MAX_NUM_JOINTS = 10


def _as_real(value: float) -> float:
    """Round ``value`` to the precision of the wire real type."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except (struct.error, OverflowError) as exc:
        raise ValueError(f"joint value out of range: {value!r}") from exc


class JointData:
    """A fixed number of joint values, all starting at zero."""

    def __init__(self, max_joints: int = MAX_NUM_JOINTS) -> None:
        if max_joints < 1:
            raise ValueError(f"max_joints must be positive, got {max_joints}")
        self._joints = [0.0] * max_joints

    def __len__(self) -> int:
        return len(self._joints)

    def __iter__(self) -> Iterator[float]:
        return iter(self._joints)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._joints):
            raise IndexError(
                f"joint index {index} outside 0..{len(self._joints) - 1}"
            )

    def __getitem__(self, index: int) -> float:
        self._check_index(index)
        return self._joints[index]

    def __setitem__(self, index: int, value: float) -> None:
        self._check_index(index)
        self._joints[index] = _as_real(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JointData):
            return NotImplemented
        return self._joints == other._joints

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"JointData({self._joints!r})"

    def copy_from(self, other: "JointData") -> None:
        """Copy every joint value from ``other``, which must be the same size."""
        if len(other) != len(self):
            raise ValueError(
                f"cannot copy {len(other)} joints into {len(self)} joints"
            )
        self._joints = list(other._joints)

    def byte_length(self) -> int:
        """Number of bytes the joint values take when serialised."""
        return len(self._joints) * REAL_SIZE

    def load(self, buffer: ByteArray) -> None:
        """Append all joint values to ``buffer``, first joint first."""
        for value in self._joints:
            buffer.load_real(value)

    def unload(self, buffer: ByteArray) -> None:
        """Read all joint values from the back of ``buffer``."""
        if len(buffer) < self.byte_length():
            raise ByteArrayError(
                f"buffer holds {len(buffer)} bytes, "
                f"{self.byte_length()} needed for joint data"
            )
        for index in reversed(range(len(self._joints))):
            self._joints[index] = buffer.unload_real()