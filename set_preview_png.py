#!/usr/bin/env python3
"""
Render the sectors of a binary EMI set as a flat PNG preview.

Each sector outline is projected onto one coordinate plane (``xz`` by default,
the floor plane of EMI sets) and drawn in a color that depends on its type.
Example:

    python set_preview_png.py ARCHIVE.lab mel.setb mel_sectors.png --size 1024 --labels
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from emiset import LabArchive, Sector, SectorType, SetbError, decode_scene, load_source

PLANE_AXES = {"xy": (0, 1), "xz": (0, 2), "yz": (1, 2)}

TYPE_COLORS = {
    SectorType.WALK: (40, 120, 40, 255),
    SectorType.FUNNEL: (40, 160, 160, 255),
    SectorType.CAMERA: (40, 80, 200, 255),
    SectorType.SPECIAL: (200, 120, 20, 255),
    SectorType.HOT: (200, 40, 40, 255),
}
DEFAULT_COLOR = (110, 110, 110, 255)


def project_sectors(sectors: Sequence[Sector], plane: str) -> list[Tuple[Sector, np.ndarray]]:
    u, v = PLANE_AXES[plane]
    projected = []
    for sector in sectors:
        if not sector.vertices:
            continue
        pts = np.asarray(sector.vertices, dtype=np.float64)[:, [u, v]]
        projected.append((sector, pts))
    return projected


def _build_transform(points: np.ndarray, size_px: int, padding_ratio: float):
    min_xy = points.min(axis=0)
    max_xy = points.max(axis=0)
    span = np.maximum(max_xy - min_xy, 1e-9)
    pad = float(span.max()) * padding_ratio
    world_min = min_xy - pad
    world_span = span + 2 * pad
    scale = float(min(size_px / world_span[0], size_px / world_span[1]))
    offset = (size_px - world_span * scale) / 2.0

    def transform(pts: np.ndarray) -> list[Tuple[float, float]]:
        px = (pts - world_min) * scale + offset
        # image rows grow downward
        px[:, 1] = size_px - px[:, 1]
        return [(float(x), float(y)) for x, y in px]

    return transform


def render_png(
    sectors: Sequence[Sector],
    destination: Path,
    size_px: int,
    *,
    plane: str = "xz",
    labels: bool = False,
    padding_ratio: float = 0.05,
) -> int:
    projected = project_sectors(sectors, plane)
    if not projected:
        raise RuntimeError("No sectors with vertices were found in the set.")
    transform = _build_transform(np.vstack([pts for _, pts in projected]), size_px, padding_ratio)

    image = Image.new("RGBA", (size_px, size_px), (255, 255, 255, 0))
    draw = ImageDraw.Draw(image)
    stroke = max(1, int(size_px / 256))

    for sector, pts in projected:
        color = TYPE_COLORS.get(sector.sector_type, DEFAULT_COLOR)
        outline = transform(pts)
        if len(outline) > 1:
            draw.line(outline + [outline[0]], fill=color, width=stroke)
        else:
            x, y = outline[0]
            draw.ellipse([x - stroke, y - stroke, x + stroke, y + stroke], fill=color)
        if labels:
            cx = sum(p[0] for p in outline) / len(outline)
            cy = sum(p[1] for p in outline) / len(outline)
            draw.text((cx, cy), sector.name, fill=color)

    destination.parent.mkdir(parents=True, exist_ok=True)
    image.save(destination)
    return len(projected)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render EMI set sectors to a PNG preview.")
    parser.add_argument("sources", nargs="+", help="[LAB] FILE OUTPUT_PNG")
    parser.add_argument("--size", type=int, default=512, help="Square output size in pixels (default: 512)")
    parser.add_argument("--plane", choices=sorted(PLANE_AXES), default="xz", help="Projection plane (default: xz)")
    parser.add_argument("--labels", action="store_true", help="Draw sector names at their centroids")
    args = parser.parse_args(argv)
    if len(args.sources) not in (2, 3):
        parser.error("expected FILE OUTPUT_PNG or LAB FILE OUTPUT_PNG")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    *inputs, output = args.sources
    try:
        lab = LabArchive.open(Path(inputs[0])) if len(inputs) == 2 else None
        scene = decode_scene(load_source(inputs[-1], lab))
        drawn = render_png(scene.sectors, Path(output), args.size, plane=args.plane, labels=args.labels)
    except (OSError, SetbError, RuntimeError) as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    print(f"[+] Preview PNG with {drawn} sector(s) written to {output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
