"""The simple-message frame: a three-integer header followed by a data payload."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from robotlink.byte_array import INT_SIZE, ByteArray, ByteArrayError

HEADER_SIZE = 3 * INT_SIZE
LENGTH_SIZE = INT_SIZE


class StandardMsgType(IntEnum):
    """Message types understood by every platform."""

    INVALID = 0
    PING = 1
    JOINT_POSITION = 10
    JOINT = 10
    READ_INPUT = 20
    WRITE_OUTPUT = 21
    JOINT_TRAJ_PT = 11
    JOINT_TRAJ = 12
    STATUS = 13
    JOINT_TRAJ_PT_FULL = 14
    JOINT_FEEDBACK = 15
    SWRI_MSG_BEGIN = 1000
    UR_MSG_BEGIN = 1100
    ADEPT_MSG_BEGIN = 1200
    ABB_MSG_BEGIN = 1300
    FANUC_MSG_BEGIN = 1400
    MOTOMAN_MSG_BEGIN = 2000


class CommType(IntEnum):
    """How a message is exchanged."""

    INVALID = 0
    TOPIC = 1
    SERVICE_REQUEST = 2
    SERVICE_REPLY = 3


class ReplyType(IntEnum):
    """Outcome carried by a service reply."""

    INVALID = 0
    SUCCESS = 1
    FAILURE = 2


class MessageError(Exception):
    """Raised when bytes do not form a valid simple message."""


@dataclass
class SimpleMessage:
    """A message with a header (type, comm type, reply code) and a data payload.

    The length prefix used on the wire is not part of the message itself;
    ``msg_length`` reports the value that prefix carries.
    """

    msg_type: int
    comm_type: int
    reply_code: int = ReplyType.INVALID
    data: bytes = b""
    byte_swapping: bool = False

    HEADER_SIZE = HEADER_SIZE
    LENGTH_SIZE = LENGTH_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.data, ByteArray):
            self.data = self.data.to_bytes()
        else:
            self.data = bytes(self.data)

    @classmethod
    def from_byte_array(cls, buffer: ByteArray) -> "SimpleMessage":
        """Build a message from a buffer holding a header and payload.

        The buffer itself is left untouched.
        """
        if len(buffer) < HEADER_SIZE:
            raise MessageError(
                f"message needs at least {HEADER_SIZE} bytes, got {len(buffer)}"
            )
        work = ByteArray(buffer.to_bytes(), byte_swapping=buffer.byte_swapping)
        try:
            msg_type = work.unload_front_int()
            comm_type = work.unload_front_int()
            reply_code = work.unload_front_int()
        except ByteArrayError as exc:
            raise MessageError(str(exc)) from exc
        message = cls(
            msg_type=msg_type,
            comm_type=comm_type,
            reply_code=reply_code,
            data=work.to_bytes(),
            byte_swapping=buffer.byte_swapping,
        )
        if not message.is_valid():
            raise MessageError(
                f"invalid message header: type={msg_type}, "
                f"comm={comm_type}, reply={reply_code}"
            )
        return message

    def to_byte_array(self) -> ByteArray:
        """Serialise the header and payload into a new buffer."""
        buffer = ByteArray(byte_swapping=self.byte_swapping)
        buffer.load_int(int(self.msg_type))
        buffer.load_int(int(self.comm_type))
        buffer.load_int(int(self.reply_code))
        buffer.load_bytes(self.data)
        return buffer

    def msg_length(self) -> int:
        """Total size of header plus payload, in bytes."""
        return HEADER_SIZE + len(self.data)

    def data_length(self) -> int:
        """Size of the payload, in bytes."""
        return len(self.data)

    def is_valid(self) -> bool:
        """Check that the header follows the message conventions."""
        if self.msg_type == StandardMsgType.INVALID:
            return False
        if self.comm_type == CommType.INVALID:
            return False
        if self.comm_type == CommType.SERVICE_REPLY:
            return self.reply_code != ReplyType.INVALID
        return self.reply_code == ReplyType.INVALID