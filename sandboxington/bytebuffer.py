"""A growable byte buffer with independent read and write positions."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Sequence

DEFAULT_SIZE = 4096

_BYTE = struct.Struct("<B")
_CHAR = struct.Struct("<c")
_DOUBLE = struct.Struct("<d")
_FLOAT = struct.Struct("<f")
_UINT = struct.Struct("<I")
_SINT = struct.Struct("<i")
_LONG = struct.Struct("<Q")
_SHORT = struct.Struct("<H")


def _wrap_unsigned(value: int, bits: int) -> int:
    return int(value) & ((1 << bits) - 1)


def _wrap_signed(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((int(value) + half) % (1 << bits)) - half


class ByteBuffer:
    """Little-endian binary buffer.

    Relative reads advance ``read_pos``; relative writes advance ``write_pos``.
    Reading past the end yields zero rather than raising, while the read
    position still advances.
    """

    def __init__(self, data: bytes | bytearray | Iterable[int] | None = None, name: str = "") -> None:
        self._buf = bytearray()
        self.read_pos = 0
        self.write_pos = 0
        self.name = name
        if data is not None:
            self.put_bytes(bytes(data))

    # -- general -----------------------------------------------------------

    @property
    def data(self) -> bytes:
        """The whole contents of the buffer."""
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteBuffer):
            return NotImplemented
        return self._buf == other._buf

    def __repr__(self) -> str:
        return (
            f"ByteBuffer(name={self.name!r}, length={len(self._buf)}, "
            f"read_pos={self.read_pos}, write_pos={self.write_pos})"
        )

    def bytes_remaining(self) -> int:
        """Bytes between the read position and the end of the buffer."""
        return len(self._buf) - self.read_pos

    def clear(self) -> None:
        """Drop all data and reset both positions."""
        self.read_pos = 0
        self.write_pos = 0
        self._buf.clear()

    def clone(self) -> ByteBuffer:
        """A copy of the contents with both positions at zero."""
        copy = ByteBuffer(name=self.name)
        copy._buf = bytearray(self._buf)
        return copy

    def resize(self, new_size: int) -> None:
        """Truncate or zero-pad to ``new_size`` and reset both positions."""
        if new_size < len(self._buf):
            del self._buf[new_size:]
        else:
            self._buf.extend(bytes(new_size - len(self._buf)))
        self.read_pos = 0
        self.write_pos = 0

    def find(self, key: int, start: int = 0) -> int:
        """Index of the first byte equal to ``key`` from ``start``, or -1.

        When searching for a non-zero key the search stops at the first zero byte.
        """
        for i, value in enumerate(self._buf[start:], start):
            if key != 0 and value == 0:
                break
            if value == key:
                return i
        return -1

    def replace(self, key: int, rep: int, start: int = 0, first_only: bool = False) -> None:
        """Replace bytes equal to ``key`` by ``rep``, stopping at a zero byte for non-zero keys."""
        for i in range(start, len(self._buf)):
            value = self._buf[i]
            if key != 0 and value == 0:
                break
            if value == key:
                self._buf[i] = rep
                if first_only:
                    return

    # -- reading -----------------------------------------------------------

    def _read_at(self, fmt: struct.Struct, index: int):
        if index + fmt.size <= len(self._buf):
            return fmt.unpack_from(self._buf, index)[0]
        return None

    def _read(self, fmt: struct.Struct, index: int | None, zero):
        if index is None:
            value = self._read_at(fmt, self.read_pos)
            self.read_pos += fmt.size
        else:
            value = self._read_at(fmt, index)
        return zero if value is None else value

    def peek(self) -> int:
        """The byte at the read position, without advancing."""
        return self._read(_BYTE, self.read_pos, 0)

    def get_byte(self, index: int | None = None) -> int:
        return self._read(_BYTE, index, 0)

    def get_bytes(self, length: int) -> bytes:
        """Read ``length`` bytes relatively; missing bytes read as zero."""
        return bytes(self.get_byte() for _ in range(length))

    def get_char(self, index: int | None = None) -> str:
        return self._read(_CHAR, index, b"\x00").decode("latin-1")

    def get_double(self, index: int | None = None) -> float:
        return self._read(_DOUBLE, index, 0.0)

    def get_float(self, index: int | None = None) -> float:
        return self._read(_FLOAT, index, 0.0)

    def get_uint(self, index: int | None = None) -> int:
        return self._read(_UINT, index, 0)

    def get_sint(self, index: int | None = None) -> int:
        return self._read(_SINT, index, 0)

    def get_long(self, index: int | None = None) -> int:
        return self._read(_LONG, index, 0)

    def get_short(self, index: int | None = None) -> int:
        return self._read(_SHORT, index, 0)

    def get_vec3(self) -> tuple[float, float, float]:
        """Read three floats."""
        return (self.get_float(), self.get_float(), self.get_float())

    def get_ivec3(self) -> tuple[int, int, int]:
        """Read three signed 32-bit integers."""
        return (self.get_sint(), self.get_sint(), self.get_sint())

    # -- writing -----------------------------------------------------------

    def _append(self, raw: bytes) -> None:
        end = self.write_pos + len(raw)
        if len(self._buf) < end:
            self._buf.extend(bytes(end - len(self._buf)))
        self._buf[self.write_pos:end] = raw
        self.write_pos = end

    def _insert(self, raw: bytes, index: int) -> None:
        end = index + len(raw)
        if end > len(self._buf):
            self._buf.extend(bytes(end))
        self._buf[index:end] = raw
        self.write_pos = end

    def _write(self, raw: bytes, index: int | None) -> None:
        if index is None:
            self._append(raw)
        else:
            self._insert(raw, index)

    def put_buf(self, src: ByteBuffer) -> None:
        """Append the whole contents of another buffer."""
        self._append(bytes(src._buf))

    def put_byte(self, value: int, index: int | None = None) -> None:
        self._write(_BYTE.pack(_wrap_unsigned(value, 8)), index)

    def put_bytes(self, data: bytes | bytearray | Iterable[int], index: int | None = None) -> None:
        """Append bytes, or write them from ``index`` onward."""
        if index is not None:
            self.write_pos = index
        self._append(bytes(data))

    def put_char(self, value: str | int, index: int | None = None) -> None:
        if isinstance(value, str):
            raw = value.encode("latin-1")
            if len(raw) != 1:
                raise ValueError("put_char takes a single character")
        else:
            raw = _BYTE.pack(_wrap_unsigned(value, 8))
        self._write(raw, index)

    def put_double(self, value: float, index: int | None = None) -> None:
        self._write(_DOUBLE.pack(value), index)

    def put_float(self, value: float, index: int | None = None) -> None:
        self._write(_FLOAT.pack(value), index)

    def put_uint(self, value: int, index: int | None = None) -> None:
        self._write(_UINT.pack(_wrap_unsigned(value, 32)), index)

    def put_sint(self, value: int, index: int | None = None) -> None:
        self._write(_SINT.pack(_wrap_signed(value, 32)), index)

    def put_long(self, value: int, index: int | None = None) -> None:
        self._write(_LONG.pack(_wrap_unsigned(value, 64)), index)

    def put_short(self, value: int, index: int | None = None) -> None:
        self._write(_SHORT.pack(_wrap_unsigned(value, 16)), index)

    def put_vec3(self, value: Sequence[float]) -> None:
        """Append three floats."""
        x, y, z = value
        self.put_float(x)
        self.put_float(y)
        self.put_float(z)

    def put_ivec3(self, value: Sequence[int]) -> None:
        """Append three signed 32-bit integers."""
        x, y, z = value
        self.put_sint(x)
        self.put_sint(y)
        self.put_sint(z)

    def put_u8vec3(self, value: Sequence[int]) -> None:
        """Append three bytes."""
        x, y, z = value
        self.put_byte(x)
        self.put_byte(y)
        self.put_byte(z)

    # -- diagnostics -------------------------------------------------------

    def hex_dump(self) -> str:
        """The contents as space-separated hexadecimal bytes."""
        return " ".join(f"0x{b:02x}" for b in self._buf)

    def ascii_dump(self) -> str:
        """The contents as space-separated characters."""
        return " ".join(chr(b) for b in self._buf)