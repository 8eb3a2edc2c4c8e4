from __future__ import annotations

import struct

import pytest

from emiset import ByteCursor, MalformedRecord, TruncatedInput


def test_primitives_advance_in_order():
    data = struct.pack("<if", -7, 1.5) + b"\x02" + b"\x00"
    cursor = ByteCursor(data)

    assert cursor.read_int32() == -7
    assert cursor.offset == 4
    assert cursor.read_float32() == 1.5
    assert cursor.offset == 8
    assert cursor.read_bool8() is True
    assert cursor.read_bool8() is False
    assert cursor.at_end
    assert cursor.remaining == 0


def test_fixed_string_honors_stride_and_terminator_independently():
    cursor = ByteCursor(b"cam\x00garbage!" + struct.pack("<i", 42))
    assert cursor.read_fixed_string(12) == "cam"
    assert cursor.offset == 12
    assert cursor.read_int32() == 42


def test_fixed_string_content_may_run_past_its_stride():
    cursor = ByteCursor(b"abcdef\x00")
    assert cursor.read_fixed_string(3) == "abcdef"
    assert cursor.offset == 3


def test_cstring_consumes_terminator():
    cursor = ByteCursor(b"mel.til\x00\x01")
    assert cursor.read_cstring() == "mel.til"
    assert cursor.offset == 8
    assert cursor.read_bool8() is True


def test_skip_and_read_bytes():
    cursor = ByteCursor(bytes(range(10)))
    cursor.skip(3)
    assert cursor.read_bytes(4) == bytes([3, 4, 5, 6])
    assert cursor.offset == 7


@pytest.mark.parametrize(
    "reader",
    [
        lambda c: c.read_int32(),
        lambda c: c.read_float32(),
        lambda c: c.skip(4),
        lambda c: c.read_bytes(4),
    ],
)
def test_reads_past_the_end_raise_without_moving(reader):
    cursor = ByteCursor(b"\x00\x00\x00")
    with pytest.raises(TruncatedInput) as excinfo:
        reader(cursor)
    assert cursor.offset == 0
    assert excinfo.value.length == 3


def test_bool_past_the_end():
    cursor = ByteCursor(b"")
    with pytest.raises(TruncatedInput):
        cursor.read_bool8()


def test_unterminated_string_is_truncated_input():
    with pytest.raises(TruncatedInput):
        ByteCursor(b"no terminator").read_cstring()


def test_fixed_string_stride_past_the_end():
    cursor = ByteCursor(b"ab\x00")
    with pytest.raises(TruncatedInput):
        cursor.read_fixed_string(128)
    assert cursor.offset == 0


def test_negative_sizes_are_rejected():
    cursor = ByteCursor(b"\x00" * 8)
    with pytest.raises(MalformedRecord):
        cursor.skip(-4)
    with pytest.raises(MalformedRecord):
        cursor.read_fixed_string(-1)
    assert cursor.offset == 0
