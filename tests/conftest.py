from __future__ import annotations

import pytest

from builders import FUNNEL, TRIANGLE, scene_bytes, sector_bytes


@pytest.fixture
def triangle_sector() -> bytes:
    return sector_bytes(TRIANGLE, name=b"ramp", sector_id=7, visible=True, type_tag=FUNNEL, height=2.5)


@pytest.fixture
def triangle_scene(triangle_sector: bytes) -> bytes:
    return scene_bytes(sectors=[triangle_sector])
