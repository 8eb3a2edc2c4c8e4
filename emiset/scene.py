from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .cursor import ByteCursor
from .decoders import read_count, read_light, read_sector, read_setup
from .entities import LIGHT_FIELDS, Light, Sector, Setup
from .logging import DiagnosticLog


@dataclass(frozen=True)
class Scene:
    setups: Tuple[Setup, ...]
    lights: Tuple[Light, ...]
    sectors: Tuple[Sector, ...]
    num_setups: int
    num_lights: int
    num_sectors: int
    length: int
    # Neither is stored in the binary layout.
    set_name: str = ""
    colormaps: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "set_name": self.set_name,
            "length": self.length,
            "colormaps": list(self.colormaps),
            "num_setups": self.num_setups,
            "num_lights": self.num_lights,
            "num_sectors": self.num_sectors,
            "setups": [
                {
                    "offset": setup.offset,
                    "name": setup.name,
                    "tile": setup.tile,
                    "position": list(setup.position),
                    "interest": list(setup.interest),
                    "roll": setup.roll,
                    "fov": setup.fov,
                    "nclip": setup.nclip,
                    "fclip": setup.fclip,
                }
                for setup in self.setups
            ],
            "lights": [
                {
                    "offset": light.offset,
                    "decoded": light.decoded,
                    "undecoded_fields": list(LIGHT_FIELDS),
                    "payload": light.payload.hex(),
                }
                for light in self.lights
            ],
            "sectors": [
                {
                    "offset": sector.offset,
                    "name": sector.name,
                    "id": sector.sector_id,
                    "type_tag": sector.type_tag,
                    "type": sector.sector_type.name.lower() if sector.sector_type is not None else None,
                    "visible": sector.visible,
                    "height": sector.height,
                    "normal": list(sector.normal),
                    "vertices": [list(vertex) for vertex in sector.vertices],
                }
                for sector in self.sectors
            ],
        }


def decode_scene(
    data: bytes,
    *,
    strict: bool = False,
    legacy_normal: bool = False,
    diagnostics: DiagnosticLog | None = None,
) -> Scene:
    """
    Decode a whole set payload: setups, then lights, then sectors.

    Section counts are authoritative; each decoder advances the one shared
    cursor and the next record starts wherever the previous one stopped.
    Any error aborts the whole scene.
    """

    cursor = ByteCursor(data)

    num_setups = read_count(cursor, "setup count")
    setups = tuple(read_setup(cursor) for _ in range(num_setups))

    num_lights = read_count(cursor, "light count")
    lights = tuple(read_light(cursor) for _ in range(num_lights))

    num_sectors = read_count(cursor, "sector count")
    sectors = tuple(
        read_sector(cursor, strict=strict, legacy_normal=legacy_normal, diagnostics=diagnostics)
        for _ in range(num_sectors)
    )

    if diagnostics is not None and not cursor.at_end:
        diagnostics.record(
            "trailing-bytes",
            cursor.offset,
            f"{cursor.remaining} byte(s) left after the last sector",
        )

    return Scene(
        setups=setups,
        lights=lights,
        sectors=sectors,
        num_setups=num_setups,
        num_lights=num_lights,
        num_sectors=num_sectors,
        length=cursor.offset,
    )
