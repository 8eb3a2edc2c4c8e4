from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Tuple, Union

Vec3 = Tuple[float, float, float]


class SectorType(IntEnum):
    NONE = 0x0000
    WALK = 0x1000
    FUNNEL = 0x1100
    CAMERA = 0x2000
    SPECIAL = 0x4000
    HOT = 0x8000


class LightType(IntEnum):
    OMNI = 0
    DIRECT = 1


# Fields the light block is known to carry; none of them is decoded yet.
LIGHT_FIELDS = (
    "name",
    "type",
    "position",
    "direction",
    "intensity",
    "umbra_angle",
    "penumbra_angle",
    "color",
)


@dataclass(frozen=True)
class Sector:
    offset: int
    name: str
    sector_id: int
    type_tag: int
    visible: bool
    height: float
    vertices: Tuple[Vec3, ...]
    normal: Vec3

    @property
    def sector_type(self) -> SectorType | None:
        try:
            return SectorType(self.type_tag)
        except ValueError:
            return None

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)


@dataclass(frozen=True)
class Setup:
    offset: int
    name: str
    tile: str
    position: Vec3
    interest: Vec3
    roll: float
    fov: float
    nclip: float
    fclip: float
    # Not part of the binary record; kept for parity with the text format.
    background: str = ""
    zbuffer: str = ""


@dataclass(frozen=True)
class Light:
    """Light block whose layout is not decoded; only its raw bytes are kept."""

    offset: int
    payload: bytes = field(repr=False)

    decoded = False

    @property
    def size(self) -> int:
        return len(self.payload)


Record = Union[Setup, Light, Sector]
