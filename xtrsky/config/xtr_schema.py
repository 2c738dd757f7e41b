"""
Record layout configuration for XTR reports.

This module contains the fixed-column schema of the XTR dialect written by
Gnut-Anubis v2 and the orbital geometry table used to derive no-satellite
zones. Each field entry defines where a value lives on a line and how to
convert it.

To support a different XTR dialect:
1. Build a new RecordSchema with the shifted FieldSpec entries
2. Pass it to XTRAnalyzer(..., schema=my_schema)

Columns are 0-based and end-exclusive, i.e. ``line[offset:offset + width]``.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FieldSpec:
    """
    Position and type of a single fixed-width field.

    Attributes
    ----------
    name : str
        Field name used in error messages.
    offset : int
        First column of the field (0-based).
    width : int
        Number of columns.
    dtype : str
        One of ``"str"``, ``"float"`` or ``"datetime"``.
    """

    name: str
    offset: int
    width: int
    dtype: str = "str"

    @property
    def end(self) -> int:
        return self.offset + self.width

    def cut(self, line: str) -> str:
        return line[self.offset : self.end]


@dataclass(frozen=True)
class RecordSchema:
    """
    Fixed-column layout of an XTR report.

    Attributes
    ----------
    chapter_marker : str
        Leading character of chapter header lines.
    template_code : str
        Placeholder system code used by generic chapter headers.
    data_prefix : str
        Leading character of measurement lines.
    position_tag : str
        Prefix of per-system position lines (followed by the system code).
    code_width : int
        Number of characters of a satellite system code.
    tag, timestamp, mean, position : FieldSpec
        Core fields of measurement and position lines.
    slot_offset, slot_width : int
        Start and width of the repeated per-satellite fields.
    slot_count : Optional[int]
        Fixed number of slots per line. None infers it from the widest line.
    timestamp_format : str
        strptime format of the timestamp field.
    missing_tokens : tuple
        Stripped field contents that mean "no value".
    """

    chapter_marker: str = "#"
    template_code: str = "GNS"
    data_prefix: str = " "
    position_tag: str = "=XYZ"
    code_width: int = 3
    tag: FieldSpec = FieldSpec("tag", 0, 7, "str")
    timestamp: FieldSpec = FieldSpec("timestamp", 8, 19, "datetime")
    mean: FieldSpec = FieldSpec("mean", 27, 8, "float")
    position: FieldSpec = FieldSpec("position", 29, 47, "float")
    slot_offset: int = 35
    slot_width: int = 6
    slot_count: Optional[int] = None
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    missing_tokens: tuple = ("", "-")

    def slot_field(self, index: int) -> FieldSpec:
        """Return the FieldSpec of the slot at ``index``."""
        return FieldSpec(
            f"slot[{index}]", self.slot_offset + index * self.slot_width, self.slot_width, "float"
        )

    def channel_tag(self, system: str, channel: str) -> str:
        """Tag of measurement lines, e.g. ``' GPSELE'`` or ``' GPSMC1'``."""
        return f"{self.data_prefix}{system}{channel}"


# Gnut-Anubis v2 layout
XTR_SCHEMA = RecordSchema()

ELEVATION_CHANNEL = "ELE"
AZIMUTH_CHANNEL = "AZI"
MULTIPATH_PREFIX = "M"

# Orbital geometry per system code: inclination (deg), orbit radius (m).
# Only MEO constellations produce a polar no-satellite zone; systems missing
# here (SBAS, QZSS, IRNSS) get an empty exclusion polygon.
ORBIT_GEOMETRY = {
    "GPS": {"inclination": 55.0, "radius": 26_559_700.0},
    "GLO": {"inclination": 64.8, "radius": 25_508_200.0},
    "GAL": {"inclination": 56.0, "radius": 29_600_318.0},
    "BDS": {"inclination": 55.0, "radius": 27_906_100.0},
}
