"""
Fixed-column record block parser.

A record block is the set of measurement lines sharing one tag, e.g. all
`` GPSELE`` lines. Each line holds a timestamp, a per-epoch mean and one
fixed-width field per satellite slot. The column layout comes from a
RecordSchema so dialect variants only need a different schema.
"""

from dataclasses import dataclass
from datetime import datetime

import numpy as np

from ..config.xtr_schema import XTR_SCHEMA, FieldSpec, RecordSchema
from ..errors import FormatError
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class TimeSeriesBlock:
    """
    Parsed measurement block of one system and channel.

    Attributes:
        system: Satellite system code (e.g. 'GPS')
        channel: 'ELE', 'AZI' or 'M' + MP code
        time: Epoch timestamps, numpy datetime64[s], strictly increasing
        mean: Per-epoch mean value (NaN where blank)
        values: Epoch x slot matrix (NaN where missing)
    """

    system: str
    channel: str
    time: np.ndarray
    mean: np.ndarray
    values: np.ndarray

    @property
    def n_epochs(self) -> int:
        return self.values.shape[0]

    @property
    def n_slots(self) -> int:
        return self.values.shape[1]

    def is_empty(self) -> bool:
        return self.n_epochs == 0


def parse_field(line: str, spec: FieldSpec, schema: RecordSchema = XTR_SCHEMA):
    """
    Convert one fixed-width field of ``line`` according to ``spec.dtype``.

    Float fields holding one of ``schema.missing_tokens`` return NaN.

    Raises:
        FormatError: If the text cannot be converted
    """
    text = spec.cut(line)
    if spec.dtype == "str":
        return text

    token = text.strip()
    if spec.dtype == "datetime":
        try:
            return np.datetime64(datetime.strptime(token, schema.timestamp_format), "s")
        except ValueError as e:
            raise FormatError(f"Invalid {spec.name} field {text!r}") from e

    if spec.dtype == "float":
        if token in schema.missing_tokens:
            return np.nan
        try:
            return float(token)
        except ValueError as e:
            raise FormatError(f"Non-numeric {spec.name} field {text!r}") from e

    raise ValueError(f"Unknown field dtype {spec.dtype!r} for {spec.name}")


def select_channel_lines(lines, system: str, channel: str, schema: RecordSchema = XTR_SCHEMA):
    """Return the lines whose tag is ``schema.channel_tag(system, channel)``, in file order."""
    tag = schema.channel_tag(system, channel)
    return [line for line in lines if schema.tag.cut(line) == tag]


def parse_record_block(
    lines, system: str, channel: str, schema: RecordSchema = XTR_SCHEMA
) -> TimeSeriesBlock:
    """
    Parse same-tag measurement lines into a TimeSeriesBlock.

    Args:
        lines: Measurement lines of one tag, in file order
        system: Satellite system code
        channel: Channel suffix of the tag
        schema: Column layout

    Returns:
        TimeSeriesBlock with one row per line. Zero lines give an empty block.

    Raises:
        FormatError: If a line is too short, has a bad tag, a non-numeric
            field, too many slots, or if timestamps are not strictly increasing
    """
    tag = schema.channel_tag(system, channel)
    times = []
    means = []
    rows = []

    for lineno, line in enumerate(lines):
        if len(line) < schema.mean.end:
            raise FormatError(
                f"{tag!r} line {lineno} is {len(line)} chars, core fields end at column {schema.mean.end}"
            )
        if schema.tag.cut(line) != tag:
            raise FormatError(f"Line {lineno} tag {schema.tag.cut(line)!r} does not match {tag!r}")

        try:
            times.append(parse_field(line, schema.timestamp, schema))
            means.append(parse_field(line, schema.mean, schema))
            rows.append(_parse_slots(line, schema))
        except FormatError as e:
            raise FormatError(f"{tag!r} line {lineno}: {e}") from e

    if not rows:
        return TimeSeriesBlock(
            system=system,
            channel=channel,
            time=np.array([], dtype="datetime64[s]"),
            mean=np.array([], dtype=float),
            values=np.empty((0, schema.slot_count or 0)),
        )

    n_slots = schema.slot_count if schema.slot_count is not None else max(len(r) for r in rows)
    values = np.full((len(rows), n_slots), np.nan)
    for i, row in enumerate(rows):
        if len(row) > n_slots:
            raise FormatError(f"{tag!r} line {i} has {len(row)} slots, schema allows {n_slots}")
        values[i, : len(row)] = row

    time = np.array(times, dtype="datetime64[s]")
    if np.any(np.diff(time) <= np.timedelta64(0, "s")):
        raise FormatError(f"{tag!r} timestamps are not strictly increasing")

    logger.debug(f"Parsed {tag!r}: {values.shape[0]} epochs x {values.shape[1]} slots")
    return TimeSeriesBlock(
        system=system, channel=channel, time=time, mean=np.array(means, dtype=float), values=values
    )


def _parse_slots(line: str, schema: RecordSchema) -> list:
    # Trailing blank slots may be stripped by the writer; they read as missing.
    n_fields = -(-max(len(line) - schema.slot_offset, 0) // schema.slot_width)
    return [parse_field(line, schema.slot_field(k), schema) for k in range(n_fields)]
