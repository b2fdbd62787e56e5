import pytest

from robotlink.byte_array import ByteArray, ByteArrayError


@pytest.mark.parametrize("swap", [False, True])
@pytest.mark.parametrize("value", [0, 1, -1, 123456, 2**31 - 1, -(2**31)])
def test_int_round_trip(swap, value):
    buf = ByteArray(byte_swapping=swap)
    buf.load_int(value)
    assert len(buf) == 4
    assert buf.unload_int() == value
    assert len(buf) == 0


@pytest.mark.parametrize("swap", [False, True])
@pytest.mark.parametrize("value", [0.0, 1.5, -0.25, 1024.0])
def test_real_round_trip(swap, value):
    buf = ByteArray(byte_swapping=swap)
    buf.load_real(value)
    assert len(buf) == 4
    assert buf.unload_real() == value


@pytest.mark.parametrize("value", [True, False])
def test_bool_round_trip(value):
    buf = ByteArray()
    buf.load_bool(value)
    assert len(buf) == 1
    assert buf.unload_bool() is value


def test_int_wire_bytes_little_endian():
    buf = ByteArray()
    buf.load_int(1)
    assert buf.to_bytes() == b"\x01\x00\x00\x00"


def test_int_wire_bytes_swapped():
    buf = ByteArray(byte_swapping=True)
    buf.load_int(1)
    assert buf.to_bytes() == b"\x00\x00\x00\x01"


def test_swapped_bytes_are_reversed():
    plain = ByteArray()
    swapped = ByteArray(byte_swapping=True)
    plain.load_real(3.25)
    swapped.load_real(3.25)
    assert swapped.to_bytes() == plain.to_bytes()[::-1]


def test_unload_takes_from_back():
    buf = ByteArray()
    buf.load_int(10)
    buf.load_int(20)
    assert buf.unload_int() == 20
    assert buf.unload_int() == 10


def test_unload_front_takes_from_front():
    buf = ByteArray()
    buf.load_int(10)
    buf.load_real(2.5)
    assert buf.unload_front_int() == 10
    assert buf.unload_front_real() == 2.5
    assert len(buf) == 0


def test_unload_too_much_raises_and_keeps_buffer():
    buf = ByteArray(b"ab")
    with pytest.raises(ByteArrayError):
        buf.unload_int()
    with pytest.raises(ByteArrayError):
        buf.unload_front_real()
    assert buf.to_bytes() == b"ab"


def test_negative_size_raises():
    buf = ByteArray(b"abc")
    with pytest.raises(ByteArrayError):
        buf.unload_bytes(-1)
    with pytest.raises(ByteArrayError):
        buf.unload_front_bytes(-1)


def test_int_out_of_range_raises():
    buf = ByteArray()
    with pytest.raises(ByteArrayError):
        buf.load_int(2**31)
    assert len(buf) == 0


def test_unload_bytes_from_back_and_front():
    buf = ByteArray(b"abcdef")
    assert buf.unload_bytes(2) == b"ef"
    assert buf.unload_front_bytes(2) == b"ab"
    assert buf.to_bytes() == b"cd"


def test_unload_zero_bytes_leaves_buffer():
    buf = ByteArray(b"xyz")
    assert buf.unload_bytes(0) == b""
    assert buf.to_bytes() == b"xyz"


def test_load_dispatches_on_type():
    buf = ByteArray()
    buf.load(True)
    assert len(buf) == 1
    buf.load(7)
    assert len(buf) == 5
    buf.load(0.5)
    assert len(buf) == 9
    buf.load(b"zz")
    assert len(buf) == 11
    assert buf.unload_bytes(2) == b"zz"
    assert buf.unload_real() == 0.5
    assert buf.unload_int() == 7
    assert buf.unload_bool() is True


def test_load_other_byte_array_appends_contents():
    first = ByteArray(b"12")
    second = ByteArray(b"34")
    first.load(second)
    assert first.to_bytes() == b"1234"
    assert second.to_bytes() == b"34"


class _Pair:
    def __init__(self, a, b):
        self.a = a
        self.b = b

    def load(self, buffer):
        buffer.load_int(self.a)
        buffer.load_int(self.b)

    def unload(self, buffer):
        self.b = buffer.unload_int()
        self.a = buffer.unload_int()


def test_load_serializable_object():
    buf = ByteArray()
    buf.load(_Pair(3, 4))
    assert len(buf) == 8
    restored = _Pair(0, 0)
    restored.unload(buf)
    assert (restored.a, restored.b) == (3, 4)


def test_load_unsupported_type_raises():
    buf = ByteArray()
    with pytest.raises(TypeError):
        buf.load("text")


def test_copy_from_replaces_contents():
    target = ByteArray(b"old")
    target.copy_from(ByteArray(b"new data"))
    assert target.to_bytes() == b"new data"


def test_copy_from_empty_is_ignored():
    target = ByteArray(b"keep")
    target.copy_from(ByteArray())
    assert target.to_bytes() == b"keep"


def test_bytes_conversion_matches_to_bytes():
    buf = ByteArray(b"\x05\x06")
    assert bytes(buf) == buf.to_bytes() == b"\x05\x06"