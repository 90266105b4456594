import pytest

from sandboxington.bytebuffer import ByteBuffer


def test_uint_round_trip():
    buf = ByteBuffer()
    buf.put_uint(123456)
    assert buf.get_uint() == 123456
    assert buf.bytes_remaining() == 0


def test_little_endian_wire_bytes():
    buf = ByteBuffer()
    buf.put_short(0x0102)
    assert buf.data == b"\x02\x01"


def test_signed_round_trip():
    buf = ByteBuffer()
    buf.put_sint(-42)
    assert buf.get_sint() == -42


def test_unsigned_wraps_negative():
    buf = ByteBuffer()
    buf.put_uint(-1)
    assert buf.get_uint() == 0xFFFFFFFF


@pytest.mark.parametrize("value", [0.0, 1.5, -2.25])
def test_float_round_trip(value):
    buf = ByteBuffer()
    buf.put_float(value)
    assert buf.get_float() == value


def test_double_and_long_round_trip():
    buf = ByteBuffer()
    buf.put_double(3.141592653589793)
    buf.put_long(2**40 + 7)
    assert buf.get_double() == 3.141592653589793
    assert buf.get_long() == 2**40 + 7


def test_char_round_trip():
    buf = ByteBuffer()
    buf.put_char("a")
    assert buf.get_char() == "a"


def test_char_rejects_long_string():
    with pytest.raises(ValueError):
        ByteBuffer().put_char("ab")


def test_vec3_round_trips():
    buf = ByteBuffer()
    buf.put_vec3((1.0, -2.5, 0.25))
    buf.put_ivec3((-3, 4, -5))
    assert buf.get_vec3() == (1.0, -2.5, 0.25)
    assert buf.get_ivec3() == (-3, 4, -5)


def test_u8vec3_writes_bytes():
    buf = ByteBuffer()
    buf.put_u8vec3((9, 8, 7))
    assert buf.get_bytes(3) == bytes([9, 8, 7])


def test_read_past_end_yields_zero_and_advances():
    buf = ByteBuffer(b"\x01")
    assert buf.get_byte() == 1
    assert buf.get_uint() == 0
    assert buf.peek() == 0
    assert buf.read_pos > len(buf)


def test_absolute_read_does_not_move_position():
    buf = ByteBuffer()
    buf.put_uint(77)
    assert buf.get_uint(0) == 77
    assert buf.read_pos == 0
    assert buf.peek() == 77


def test_absolute_write_sets_write_position():
    buf = ByteBuffer()
    buf.put_uint(1)
    buf.put_uint(2)
    buf.put_uint(99, 0)
    assert buf.get_uint(0) == 99
    assert buf.write_pos == len(ByteBuffer(buf.data[: buf.write_pos]))
    assert buf.get_uint(buf.write_pos) == 2


def test_put_bytes_at_index_overwrites():
    buf = ByteBuffer(b"abcdef")
    buf.put_bytes(b"XY", 2)
    assert buf.data == b"abXYef"


def test_put_buf_appends_other():
    first = ByteBuffer(b"ab")
    first.put_buf(ByteBuffer(b"cd"))
    assert first.data == b"abcd"


def test_clone_is_equal_with_reset_positions():
    buf = ByteBuffer(b"hello")
    buf.get_byte()
    copy = buf.clone()
    assert copy == buf
    assert copy.read_pos == 0
    assert copy.write_pos == 0


def test_equality_compares_contents():
    assert ByteBuffer(b"ab") == ByteBuffer(b"ab")
    assert not ByteBuffer(b"ab") == ByteBuffer(b"ac")


def test_resize_resets_positions():
    buf = ByteBuffer(b"abc")
    buf.get_byte()
    buf.resize(10)
    assert len(buf) == 10
    assert buf.read_pos == 0
    assert buf.write_pos == 0
    assert buf.data[:3] == b"abc"


def test_clear_empties():
    buf = ByteBuffer(b"abc")
    buf.clear()
    assert len(buf) == 0
    assert buf.bytes_remaining() == 0


def test_find_locates_byte():
    assert ByteBuffer(b"\x05\x06\x07").find(7) == 2


def test_find_stops_at_zero():
    assert ByteBuffer(b"\x05\x00\x07").find(7) == -1


def test_replace_all_and_first_only():
    everything = ByteBuffer(b"\x01\x02\x01")
    everything.replace(1, 9)
    assert everything.data == b"\x09\x02\x09"
    first = ByteBuffer(b"\x01\x02\x01")
    first.replace(1, 9, first_only=True)
    assert first.data == b"\x09\x02\x01"


def test_dumps():
    buf = ByteBuffer(b"\x01\xab")
    assert buf.hex_dump() == "0x01 0xab"
    assert ByteBuffer(b"hi").ascii_dump() == "h i"