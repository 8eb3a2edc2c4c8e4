"""
Text rendering of decoded set data.

The layout mirrors the tab-delimited text ``.set`` files, including two quirks
that downstream diffs rely on: the colormaps section is always empty and the
lights section always claims ``numlights 0``.
"""

from __future__ import annotations

from functools import singledispatch
from typing import Iterable, List

from .entities import Light, Sector, SectorType, Setup
from .scene import Scene

FLOAT_FORMAT = "{:.6f}"

SECTOR_TYPE_LABELS = {
    SectorType.WALK: "walk",
    SectorType.FUNNEL: "funnel",
    SectorType.CAMERA: "camera",
    SectorType.SPECIAL: "special",
    SectorType.HOT: "hot",
}


def format_float(value: float) -> str:
    return FLOAT_FORMAT.format(value)


def _floats(values: Iterable[float]) -> str:
    return "\t".join(format_float(value) for value in values)


def sector_type_label(type_tag: int) -> str:
    # NONE and unknown tags both render as an empty label.
    return SECTOR_TYPE_LABELS.get(type_tag, "")


@singledispatch
def render_record(record) -> str:
    raise TypeError(f"Cannot render {type(record).__name__}")


@render_record.register
def _(sector: Sector) -> str:
    lines: List[str] = [
        f"\tsector\t{sector.name}\n",
        f"\tID\t{sector.sector_id}\n",
        f"\ttype\t{sector_type_label(sector.type_tag)}\n",
        f"\tdefault visibility\t{'visible' if sector.visible else 'invisible'}\n",
        f"\theight\t{format_float(sector.height)}\n",
        f"\tnumvertices\t{sector.num_vertices}\n",
        f"\tnormal\t\t\t{_floats(sector.normal)}\n",
        "\tvertices:\t\t",
    ]
    for idx, vertex in enumerate(sector.vertices):
        if idx:
            lines.append("\t\t\t\t")
        lines.append(f"{_floats(vertex)}\n")
    return "".join(lines)


@render_record.register
def _(setup: Setup) -> str:
    # background and zbuffer are not part of the report
    return (
        f"\tname\t{setup.name}\n"
        f"\tposition\t{_floats(setup.position)}\n"
        f"\tinterest\t{_floats(setup.interest)}\n"
        f"\troll\t{format_float(setup.roll)}\n"
        f"\tfov\t{format_float(setup.fov)}\n"
        f"\tnclip\t{format_float(setup.nclip)}\n"
        f"\tfclip\t{format_float(setup.fclip)}\n"
    )


@render_record.register
def _(light: Light) -> str:
    return ""


def render_scene(scene: Scene, *, corrected_counts: bool = False) -> str:
    """
    Render the full report.

    ``corrected_counts`` replaces the hard-coded ``numlights 0`` line with the
    real light count.  Leave it off to stay byte-compatible with existing
    reports.
    """

    chunks: List[str] = ["section: colormaps\n"]

    chunks.append("section: setups\n")
    chunks.append(f"\tnumsetups {len(scene.setups)}\n")
    for setup in scene.setups:
        chunks.append(render_record(setup) + "\n\n")

    chunks.append("section: lights\n")
    chunks.append(f"\tnumlights {len(scene.lights) if corrected_counts else 0}\n")
    for light in scene.lights:
        chunks.append(render_record(light) + "\n\n")

    chunks.append("section: sectors\n")
    for sector in scene.sectors:
        chunks.append(render_record(sector) + "\n\n")
    return "".join(chunks)
