"""xtrsky configuration module."""

from .options import SkyplotOptions
from .xtr_schema import (
    AZIMUTH_CHANNEL,
    ELEVATION_CHANNEL,
    MULTIPATH_PREFIX,
    ORBIT_GEOMETRY,
    XTR_SCHEMA,
    FieldSpec,
    RecordSchema,
)

__all__ = [
    "FieldSpec",
    "RecordSchema",
    "XTR_SCHEMA",
    "ORBIT_GEOMETRY",
    "ELEVATION_CHANNEL",
    "AZIMUTH_CHANNEL",
    "MULTIPATH_PREFIX",
    "SkyplotOptions",
]
