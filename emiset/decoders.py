"""
Record decoders for the binary set format.

Each decoder consumes one contiguous record from a shared ``ByteCursor`` and
leaves the cursor on the first byte of whatever follows.  The layouts are
order-dependent (sector names and trailers are sized by values read earlier in
the same record), so fields are always read in file order.
"""

from __future__ import annotations

from typing import List

from .cursor import ByteCursor
from .entities import Light, Sector, SectorType, Setup, Vec3
from .errors import MalformedRecord, UnknownEnumTag
from .geometry import polygon_normal
from .logging import DiagnosticLog

SETUP_NAME_STRIDE = 128
LIGHT_RECORD_SIZE = 100
TRAILER_WORD_SIZE = 4

KNOWN_SECTOR_TAGS = frozenset(int(member) for member in SectorType)


def _read_vec3(cursor: ByteCursor) -> Vec3:
    x = cursor.read_float32()
    y = cursor.read_float32()
    z = cursor.read_float32()
    return (x, y, z)


def read_count(cursor: ByteCursor, what: str) -> int:
    offset = cursor.offset
    value = cursor.read_int32()
    if value < 0:
        raise MalformedRecord(f"Negative {what} ({value}) at offset 0x{offset:X}")
    return value


def read_sector(
    cursor: ByteCursor,
    *,
    strict: bool = False,
    legacy_normal: bool = False,
    diagnostics: DiagnosticLog | None = None,
) -> Sector:
    offset = cursor.offset
    num_vertices = read_count(cursor, "vertex count")
    vertices: List[Vec3] = [_read_vec3(cursor) for _ in range(num_vertices)]

    name_length = read_count(cursor, "sector name length")
    name = cursor.read_fixed_string(name_length)
    sector_id = cursor.read_int32()
    visible = cursor.read_bool8()
    type_tag = cursor.read_int32()
    # Unused trailer, sized in 4-byte words.
    trailer_words = read_count(cursor, "sector trailer length")
    cursor.skip(trailer_words * TRAILER_WORD_SIZE)
    height = cursor.read_float32()

    if type_tag not in KNOWN_SECTOR_TAGS:
        if strict:
            raise UnknownEnumTag(type_tag, offset)
        if diagnostics is not None:
            diagnostics.record(
                "unknown-tag",
                offset,
                f"sector {name!r} has type tag 0x{type_tag & 0xFFFFFFFF:08X}; rendered without a label",
            )

    normal, degenerate = polygon_normal(vertices, legacy=legacy_normal)
    if degenerate and diagnostics is not None:
        diagnostics.record(
            "degenerate",
            offset,
            f"sector {name!r} with {num_vertices} vertex(es) has no usable normal; using zero vector",
        )

    return Sector(
        offset=offset,
        name=name,
        sector_id=sector_id,
        type_tag=type_tag,
        visible=visible,
        height=height,
        vertices=tuple(vertices),
        normal=normal,
    )


def read_setup(cursor: ByteCursor) -> Setup:
    offset = cursor.offset
    name = cursor.read_fixed_string(SETUP_NAME_STRIDE)
    cursor.skip(4)  # unknown int32
    tile = cursor.read_cstring()
    position = _read_vec3(cursor)
    interest = _read_vec3(cursor)
    roll = cursor.read_float32()
    fov = cursor.read_float32()
    nclip = cursor.read_float32()
    fclip = cursor.read_float32()
    return Setup(
        offset=offset,
        name=name,
        tile=tile,
        position=position,
        interest=interest,
        roll=roll,
        fov=fov,
        nclip=nclip,
        fclip=fclip,
    )


def read_light(cursor: ByteCursor) -> Light:
    # Layout unknown: keep the bytes so the cursor stays aligned, decode nothing.
    offset = cursor.offset
    return Light(offset=offset, payload=cursor.read_bytes(LIGHT_RECORD_SIZE))
