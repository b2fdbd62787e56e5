"""Growable byte buffer used to serialise simple-message payloads."""

from __future__ import annotations

import struct
from typing import Protocol, runtime_checkable

INT_SIZE = 4
REAL_SIZE = 4
BOOL_SIZE = 1


class ByteArrayError(Exception):
    """Raised when data cannot be loaded into or unloaded from a buffer."""


@runtime_checkable
class Serializable(Protocol):
    """Anything that knows how to write itself into and read itself from a buffer."""

    def load(self, buffer: "ByteArray") -> None: ...

    def unload(self, buffer: "ByteArray") -> None: ...


class ByteArray:
    """A byte buffer that grows at the back and can be drained at either end.

    Values are appended with the ``load_*`` methods.  The ``unload_*`` methods
    remove data from the back (last in, first out), while the
    ``unload_front_*`` methods remove data from the front.

    Without byte swapping, numbers are stored little-endian; with byte
    swapping enabled they are stored big-endian (network order).
    """

    def __init__(self, data: bytes = b"", byte_swapping: bool = False) -> None:
        self._buffer = bytearray(data)
        self.byte_swapping = byte_swapping

    def __len__(self) -> int:
        return len(self._buffer)

    def __bytes__(self) -> bytes:
        return bytes(self._buffer)

    def __repr__(self) -> str:
        return f"ByteArray({bytes(self._buffer)!r}, byte_swapping={self.byte_swapping})"

    @property
    def _order(self) -> str:
        return ">" if self.byte_swapping else "<"

    def to_bytes(self) -> bytes:
        """Return a copy of the buffer contents."""
        return bytes(self._buffer)

    def copy_from(self, other: "ByteArray") -> None:
        """Replace the contents with those of ``other``, unless ``other`` is empty."""
        if len(other) != 0:
            self._buffer = bytearray(other._buffer)

    # -- loading -----------------------------------------------------------

    def _pack(self, fmt: str, value: object) -> bytes:
        try:
            return struct.pack(self._order + fmt, value)
        except (struct.error, OverflowError) as exc:
            raise ByteArrayError(f"cannot encode {value!r}: {exc}") from exc

    def load_int(self, value: int) -> None:
        """Append a 32-bit signed integer."""
        self._buffer += self._pack("i", value)

    def load_real(self, value: float) -> None:
        """Append a 32-bit float."""
        self._buffer += self._pack("f", value)

    def load_bool(self, value: bool) -> None:
        """Append a one-byte boolean."""
        self._buffer.append(1 if value else 0)

    def load_bytes(self, data: bytes | bytearray | "ByteArray") -> None:
        """Append raw bytes (or the contents of another buffer)."""
        if isinstance(data, ByteArray):
            data = data._buffer
        self._buffer += bytes(data)

    def load(self, item: object) -> None:
        """Append ``item``, choosing the encoding from its type."""
        if isinstance(item, bool):
            self.load_bool(item)
        elif isinstance(item, int):
            self.load_int(item)
        elif isinstance(item, float):
            self.load_real(item)
        elif isinstance(item, (bytes, bytearray, ByteArray)):
            self.load_bytes(item)
        elif isinstance(item, Serializable):
            item.load(self)
        else:
            raise TypeError(f"cannot load object of type {type(item).__name__}")

    # -- unloading from the back -------------------------------------------

    def _take_back(self, size: int) -> bytes:
        if size < 0:
            raise ByteArrayError(f"negative size requested: {size}")
        if size > len(self._buffer):
            raise ByteArrayError(
                f"buffer holds {len(self._buffer)} bytes, {size} requested"
            )
        if size == 0:
            return b""
        data = bytes(self._buffer[-size:])
        del self._buffer[-size:]
        return data

    def _unpack(self, fmt: str, data: bytes):
        return struct.unpack(self._order + fmt, data)[0]

    def unload_int(self) -> int:
        """Remove and return a 32-bit signed integer from the back."""
        return self._unpack("i", self._take_back(INT_SIZE))

    def unload_real(self) -> float:
        """Remove and return a 32-bit float from the back."""
        return self._unpack("f", self._take_back(REAL_SIZE))

    def unload_bool(self) -> bool:
        """Remove and return a one-byte boolean from the back."""
        return self._take_back(BOOL_SIZE)[0] != 0

    def unload_bytes(self, size: int) -> bytes:
        """Remove and return the last ``size`` bytes."""
        return self._take_back(size)

    # -- unloading from the front ------------------------------------------

    def _take_front(self, size: int) -> bytes:
        if size < 0:
            raise ByteArrayError(f"negative size requested: {size}")
        if size > len(self._buffer):
            raise ByteArrayError(
                f"buffer holds {len(self._buffer)} bytes, {size} requested"
            )
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    def unload_front_int(self) -> int:
        """Remove and return a 32-bit signed integer from the front."""
        return self._unpack("i", self._take_front(INT_SIZE))

    def unload_front_real(self) -> float:
        """Remove and return a 32-bit float from the front."""
        return self._unpack("f", self._take_front(REAL_SIZE))

    def unload_front_bytes(self, size: int) -> bytes:
        """Remove and return the first ``size`` bytes."""
        return self._take_front(size)