"""
Decoding utilities for binary EMI set files (camera setups, lights, sectors).
"""

from .cursor import ByteCursor
from .decoders import LIGHT_RECORD_SIZE, SETUP_NAME_STRIDE, read_count, read_light, read_sector, read_setup
from .entities import LIGHT_FIELDS, Light, LightType, Record, Sector, SectorType, Setup
from .errors import LabFormatError, MalformedRecord, SetbError, SourceUnavailable, TruncatedInput, UnknownEnumTag
from .geometry import polygon_normal
from .lab import LabArchive, LabEntry, load_source
from .logging import Diagnostic, DiagnosticLog
from .render import format_float, render_record, render_scene, sector_type_label
from .scene import Scene, decode_scene

__all__ = [
    "ByteCursor",
    "LIGHT_RECORD_SIZE",
    "SETUP_NAME_STRIDE",
    "read_count",
    "read_light",
    "read_sector",
    "read_setup",
    "LIGHT_FIELDS",
    "Light",
    "LightType",
    "Record",
    "Sector",
    "SectorType",
    "Setup",
    "LabFormatError",
    "MalformedRecord",
    "SetbError",
    "SourceUnavailable",
    "TruncatedInput",
    "UnknownEnumTag",
    "polygon_normal",
    "LabArchive",
    "LabEntry",
    "load_source",
    "Diagnostic",
    "DiagnosticLog",
    "format_float",
    "render_record",
    "render_scene",
    "sector_type_label",
    "Scene",
    "decode_scene",
]
