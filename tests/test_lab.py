from __future__ import annotations

import struct

import pytest

from builders import lab_bytes
from emiset import LabArchive, LabFormatError, SourceUnavailable, load_source

MEMBERS = [("mel.setb", b"\x01\x02\x03"), ("Sets/Lua.lua", b"print()"), ("empty.bin", b"")]


@pytest.mark.parametrize("emi", [False, True])
def test_archive_layouts(emi):
    lab = LabArchive.from_bytes(lab_bytes(MEMBERS, emi=emi))

    assert lab.emi is emi
    assert lab.names() == [name for name, _ in MEMBERS]
    assert lab.read("mel.setb") == b"\x01\x02\x03"
    assert lab.read("empty.bin") == b""
    assert len(lab) == 3


def test_lookup_is_case_insensitive():
    lab = LabArchive.from_bytes(lab_bytes(MEMBERS))
    assert lab.find("MEL.SETB").name == "mel.setb"
    assert lab.read("sets\\lua.lua") == b"print()"
    assert lab.find("missing.setb") is None
    with pytest.raises(KeyError):
        lab.read("missing.setb")


def test_empty_archive():
    assert LabArchive.from_bytes(lab_bytes([])).names() == []


def test_bad_magic():
    blob = bytearray(lab_bytes(MEMBERS))
    blob[:4] = b"LABX"
    with pytest.raises(LabFormatError):
        LabArchive.from_bytes(bytes(blob))


def test_truncated_archive():
    with pytest.raises(LabFormatError):
        LabArchive.from_bytes(b"LABN")
    with pytest.raises(LabFormatError):
        LabArchive.from_bytes(lab_bytes(MEMBERS)[:40])


def test_open_from_disk(tmp_path):
    path = tmp_path / "data.lab"
    path.write_bytes(lab_bytes(MEMBERS, emi=True))
    lab = LabArchive.open(path)
    assert lab.source == str(path)
    assert lab.read("mel.setb") == b"\x01\x02\x03"


def test_load_source_prefers_archive_then_disk(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "loose.setb").write_bytes(b"disk")
    (tmp_path / "mel.setb").write_bytes(b"shadowed")
    lab = LabArchive.from_bytes(lab_bytes(MEMBERS))

    assert load_source("mel.setb", lab) == b"\x01\x02\x03"
    assert load_source("loose.setb", lab) == b"disk"
    assert load_source(str(tmp_path / "loose.setb")) == b"disk"


def test_load_source_unavailable(tmp_path):
    lab = LabArchive.from_bytes(lab_bytes(MEMBERS), source="data.lab")
    with pytest.raises(SourceUnavailable) as excinfo:
        load_source(str(tmp_path / "nope.setb"), lab)
    assert "Could not open file" in str(excinfo.value)
    assert excinfo.value.archive == "data.lab"


def test_emi_string_table_keeps_plain_terminators():
    names = [b"a.setb", b"b.setb"]
    table = b"".join(bytes(ch ^ 0x96 for ch in name) + b"\x00" for name in names)
    table_offset = 20 + 16 * len(names)
    data_offset = table_offset + len(table)
    blob = struct.pack("<4sIIII", b"LABN", 0x10000, len(names), len(table), table_offset + 0x13D0F)
    blob += struct.pack("<IIII", 0, data_offset, 1, 0)
    blob += struct.pack("<IIII", len(names[0]) + 1, data_offset + 1, 1, 0)
    blob += table + b"AB"

    lab = LabArchive.from_bytes(blob)

    assert lab.emi
    assert lab.names() == ["a.setb", "b.setb"]
    assert lab.read("B.SETB") == b"B"
