from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

ZERO_NORMAL = (0.0, 0.0, 0.0)


def polygon_normal(
    vertices: Sequence[Tuple[float, float, float]],
    *,
    legacy: bool = False,
) -> Tuple[Tuple[float, float, float], bool]:
    """
    Unit normal of a planar polygon from its first, second and last vertex.

    The cross product of (v1 - v0) and (vlast - v0) is built and normalized in
    float32 so the result matches what the game tools store.  ``legacy`` keeps
    the converter's historical Y term, which has the opposite sign.

    Returns ``(normal, degenerate)``; degenerate polygons (fewer than two
    vertices or a zero-length cross product) give the zero vector.
    """

    if len(vertices) < 2:
        return ZERO_NORMAL, True

    pts = np.asarray(vertices, dtype=np.float32)
    a = pts[1] - pts[0]
    b = pts[-1] - pts[0]

    nx = a[1] * b[2] - b[1] * a[2]
    if legacy:
        ny = a[0] * b[2] - b[0] * a[2]
    else:
        ny = a[2] * b[0] - a[0] * b[2]
    nz = a[0] * b[1] - b[0] * a[1]

    squared = nx * nx + ny * ny + nz * nz
    norm = np.float32(math.sqrt(float(squared)))
    if norm == 0 or not math.isfinite(float(norm)):
        return ZERO_NORMAL, True
    return (float(nx / norm), float(ny / norm), float(nz / norm)), False
