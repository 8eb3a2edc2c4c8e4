"""
Read-only access to LAB archives and plain files.

LAB layout (little endian)::

    char[4] magic           "LABN"
    uint32  version
    uint32  entry_count
    uint32  string_table_size
    [uint32 string_table_offset + 0x13D0F]   EMI archives only
    entry[entry_count]      uint32 name_offset, start, size, reserved
    string table            NUL separated names (EMI: non-NUL bytes XOR 0x96)

Grim-era archives keep the string table right after the entry table; EMI
archives store its (biased) offset in the header and obfuscate the names.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List

from .errors import LabFormatError, SourceUnavailable

LAB_MAGIC = b"LABN"
LAB_HEADER = struct.Struct("<4sIII")
LAB_ENTRY = struct.Struct("<IIII")
EMI_STRING_TABLE_BIAS = 0x13D0F
EMI_NAME_XOR = 0x96


@dataclass(frozen=True)
class LabEntry:
    name: str
    start: int
    size: int


class LabArchive:
    def __init__(self, blob: bytes, entries: List[LabEntry], *, emi: bool, source: str = "<memory>") -> None:
        self._blob = blob
        self.entries = entries
        self.emi = emi
        self.source = source
        self._index: Dict[str, LabEntry] = {_key(entry.name): entry for entry in entries}

    @classmethod
    def open(cls, path: Path) -> "LabArchive":
        return cls.from_bytes(Path(path).read_bytes(), source=str(path))

    @classmethod
    def from_bytes(cls, blob: bytes, *, source: str = "<memory>") -> "LabArchive":
        if len(blob) < LAB_HEADER.size:
            raise LabFormatError(f"{source}: too small to be a LAB archive ({len(blob)} bytes)")
        magic, _version, count, table_size = LAB_HEADER.unpack_from(blob, 0)
        if magic != LAB_MAGIC:
            raise LabFormatError(f"{source}: bad LAB magic {magic!r}")

        emi, entries_offset, table_offset = _detect_layout(blob, count, table_size)
        if table_offset + table_size > len(blob):
            raise LabFormatError(f"{source}: string table runs past the end of the archive")
        table = blob[table_offset : table_offset + table_size]
        if emi:
            # terminators are stored in the clear
            table = bytes(byte ^ EMI_NAME_XOR if byte else 0 for byte in table)

        entries: List[LabEntry] = []
        for idx in range(count):
            name_offset, start, size, _reserved = LAB_ENTRY.unpack_from(blob, entries_offset + idx * LAB_ENTRY.size)
            if name_offset >= table_size:
                raise LabFormatError(f"{source}: entry #{idx} name offset 0x{name_offset:X} outside string table")
            end = table.find(b"\x00", name_offset)
            if end == -1:
                end = table_size
            if start + size > len(blob):
                raise LabFormatError(f"{source}: entry #{idx} data runs past the end of the archive")
            name = table[name_offset:end].decode("latin-1")
            entries.append(LabEntry(name=name, start=start, size=size))
        return cls(blob, entries, emi=emi, source=source)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[LabEntry]:
        return iter(self.entries)

    def names(self) -> List[str]:
        return [entry.name for entry in self.entries]

    def find(self, name: str) -> LabEntry | None:
        return self._index.get(_key(name))

    def read(self, name: str) -> bytes:
        entry = self.find(name)
        if entry is None:
            raise KeyError(name)
        return self._blob[entry.start : entry.start + entry.size]


def _key(name: str) -> str:
    return name.replace("\\", "/").lower()


def _detect_layout(blob: bytes, count: int, table_size: int) -> tuple[bool, int, int]:
    grim_entries = LAB_HEADER.size
    grim_table = grim_entries + count * LAB_ENTRY.size

    emi_entries = LAB_HEADER.size + 4
    emi_table_end = emi_entries + count * LAB_ENTRY.size
    if len(blob) >= emi_entries:
        (biased,) = struct.unpack_from("<I", blob, LAB_HEADER.size)
        emi_table = biased - EMI_STRING_TABLE_BIAS
        if emi_table >= emi_table_end and emi_table + table_size <= len(blob):
            return True, emi_entries, emi_table

    if grim_table > len(blob):
        raise LabFormatError(f"entry table for {count} entries runs past the end of the archive")
    return False, grim_entries, grim_table


def load_source(filename: str, lab: LabArchive | None = None) -> bytes:
    """Resolve ``filename`` inside ``lab`` first, then on the filesystem."""

    if lab is not None:
        entry = lab.find(filename)
        if entry is not None:
            return lab.read(filename)
    path = Path(filename)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SourceUnavailable(filename, lab.source if lab is not None else None) from exc
