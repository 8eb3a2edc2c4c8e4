from __future__ import annotations

import struct

from .errors import MalformedRecord, TruncatedInput

STRING_ENCODING = "latin-1"

_FLOAT32 = struct.Struct("<f")
_INT32 = struct.Struct("<i")


class ByteCursor:
    """
    Forward-only reader over an in-memory set payload.

    Every primitive checks the remaining length before touching the buffer and
    raises ``TruncatedInput`` instead of reading past the end.  The offset is
    only ever moved forward by the primitives below.
    """

    __slots__ = ("_data", "_offset", "_length")

    def __init__(self, data: bytes | bytearray | memoryview, *, start: int = 0) -> None:
        self._data = bytes(data)
        self._length = len(self._data)
        if start < 0 or start > self._length:
            raise ValueError("start is outside the readable range")
        self._offset = start

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def length(self) -> int:
        return self._length

    @property
    def remaining(self) -> int:
        return self._length - self._offset

    @property
    def at_end(self) -> bool:
        return self._offset >= self._length

    def _claim(self, size: int, what: str) -> int:
        if size < 0:
            raise MalformedRecord(f"Negative {what} size {size} at offset 0x{self._offset:X}")
        if self._offset + size > self._length:
            raise TruncatedInput(self._offset, size, self._length, what)
        start = self._offset
        self._offset += size
        return start

    def read_float32(self) -> float:
        start = self._claim(4, "float32")
        return _FLOAT32.unpack_from(self._data, start)[0]

    def read_int32(self) -> int:
        start = self._claim(4, "int32")
        return _INT32.unpack_from(self._data, start)[0]

    def read_bool8(self) -> bool:
        start = self._claim(1, "bool8")
        return self._data[start] != 0

    def read_bytes(self, size: int) -> bytes:
        start = self._claim(size, "byte block")
        return self._data[start : start + size]

    def skip(self, size: int) -> None:
        self._claim(size, "skipped block")

    def _cstring_end(self, start: int) -> int:
        idx = self._data.find(b"\x00", start)
        if idx == -1:
            raise TruncatedInput(start, self._length - start + 1, self._length, "string terminator")
        return idx

    def read_fixed_string(self, length: int) -> str:
        """
        Decode the C string at the current offset, then advance by ``length``.

        The text runs up to the first NUL no matter what ``length`` says; the
        stride is honored separately (names are padded out to their slot).
        """

        if length < 0:
            raise MalformedRecord(f"Negative string length {length} at offset 0x{self._offset:X}")
        end = self._cstring_end(self._offset)
        text = self._data[self._offset : end].decode(STRING_ENCODING)
        self._claim(length, "fixed string")
        return text

    def read_cstring(self) -> str:
        end = self._cstring_end(self._offset)
        start = self._claim(end - self._offset + 1, "string")
        return self._data[start:end].decode(STRING_ENCODING)
