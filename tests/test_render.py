from __future__ import annotations

import pytest

from builders import TRIANGLE, TRIANGLE_REPORT, light_bytes, scene_bytes, sector_bytes, setup_bytes
from emiset import ByteCursor, SectorType, decode_scene, read_sector, read_setup, render_record, render_scene


def test_end_to_end_triangle_report(triangle_scene):
    assert render_scene(decode_scene(triangle_scene)) == TRIANGLE_REPORT


def test_rendering_is_deterministic():
    data = scene_bytes(setups=[setup_bytes()], lights=[light_bytes()], sectors=[sector_bytes(TRIANGLE)] * 2)
    assert render_scene(decode_scene(data)) == render_scene(decode_scene(bytes(data)))


def test_setup_report():
    setup = read_setup(ByteCursor(setup_bytes()))
    assert render_record(setup) == (
        "\tname\tcam_overview\n"
        "\tposition\t1.000000\t2.000000\t3.000000\n"
        "\tinterest\t0.000000\t0.500000\t-1.000000\n"
        "\troll\t0.000000\n"
        "\tfov\t45.000000\n"
        "\tnclip\t0.250000\n"
        "\tfclip\t500.000000\n"
    )


def test_setups_are_separated_by_blank_lines():
    report = render_scene(decode_scene(scene_bytes(setups=[setup_bytes(), setup_bytes(name=b"cam_2")])))
    assert "\tnumsetups 2\n\tname\tcam_overview\n" in report
    assert "\tfclip\t500.000000\n\n\n\tname\tcam_2\n" in report
    assert report.endswith("\tfclip\t500.000000\n\n\nsection: lights\n\tnumlights 0\nsection: sectors\n")


def test_lights_keep_the_historical_zero_count():
    data = scene_bytes(lights=[light_bytes(), light_bytes()])
    report = render_scene(decode_scene(data))
    assert "section: lights\n\tnumlights 0\n\n\n\n\nsection: sectors\n" in report

    corrected = render_scene(decode_scene(data), corrected_counts=True)
    assert "\tnumlights 2\n" in corrected


@pytest.mark.parametrize(
    "tag,label",
    [
        (SectorType.WALK, "walk"),
        (SectorType.FUNNEL, "funnel"),
        (SectorType.CAMERA, "camera"),
        (SectorType.SPECIAL, "special"),
        (SectorType.HOT, "hot"),
        (SectorType.NONE, ""),
        (0x1001, ""),
    ],
)
def test_type_labels(tag, label):
    sector = read_sector(ByteCursor(sector_bytes(TRIANGLE, type_tag=int(tag))))
    assert f"\ttype\t{label}\n" in render_record(sector)


def test_invisible_label():
    sector = read_sector(ByteCursor(sector_bytes(TRIANGLE, visible=False)))
    assert "\tdefault visibility\tinvisible\n" in render_record(sector)


def test_sector_without_vertices_leaves_prefix_open():
    sector = read_sector(ByteCursor(sector_bytes([], name=b"empty")))
    text = render_record(sector)
    assert text.endswith("\tnumvertices\t0\n\tnormal\t\t\t0.000000\t0.000000\t0.000000\n\tvertices:\t\t")


def test_render_record_rejects_other_types():
    with pytest.raises(TypeError):
        render_record(object())
