from __future__ import annotations


class SetbError(Exception):
    """Base class for every error raised while reading set data."""


class TruncatedInput(SetbError):
    def __init__(self, offset: int, size: int, length: int, what: str = "value") -> None:
        self.offset = offset
        self.size = size
        self.length = length
        self.what = what
        super().__init__(
            f"Truncated input: {what} needs {size} byte(s) at offset 0x{offset:X} "
            f"but the buffer ends at 0x{length:X}"
        )


class MalformedRecord(SetbError, ValueError):
    pass


class UnknownEnumTag(SetbError, ValueError):
    def __init__(self, tag: int, offset: int, enum_name: str = "SectorType") -> None:
        self.tag = tag
        self.offset = offset
        self.enum_name = enum_name
        super().__init__(f"Unknown {enum_name} tag 0x{tag & 0xFFFFFFFF:08X} in record at offset 0x{offset:X}")


class SourceUnavailable(SetbError):
    def __init__(self, filename: str, archive: str | None = None) -> None:
        self.filename = filename
        self.archive = archive
        where = f" (archive {archive} or filesystem)" if archive else ""
        super().__init__(f"Could not open file {filename}{where}")


class LabFormatError(SetbError, ValueError):
    pass
