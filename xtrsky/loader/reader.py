"""
XTR report reader.

Loads the report once into an immutable list of non-blank lines and answers
the two questions asked of the whole file: which satellite systems are
present, and where the receiver is for each of them.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..config.xtr_schema import AZIMUTH_CHANNEL, ELEVATION_CHANNEL, XTR_SCHEMA, RecordSchema
from ..errors import FormatError
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


def read_xtr_lines(filepath: Union[str, Path]) -> Tuple[str, ...]:
    """
    Read an XTR report as an ordered sequence of non-blank lines.

    Parameters
    ----------
    filepath : str or Path
        Path to the XTR file.

    Returns
    -------
    tuple of str
        Lines in file order with line terminators removed. Whitespace-only
        lines are dropped.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"XTR file not found: {filepath}")

    with open(filepath, "r", errors="replace") as f:
        lines = tuple(line.rstrip("\r\n") for line in f if line.strip())

    logger.debug(f"Read {len(lines)} non-blank lines from {filepath.name}")
    return lines


def find_gnss_systems(lines, schema: RecordSchema = XTR_SCHEMA) -> List[str]:
    """
    Find satellite system codes announced by chapter header lines.

    A chapter header starts with ``schema.chapter_marker`` followed by a
    system code, e.g. ``#GPSELE``. Separator lines (``#======``) and the
    generic template code (``#GNS...``) are ignored. A code only counts as a
    system when the report also holds its ELE or AZI measurement lines, so
    summary chapters such as ``#TOTSUM`` are skipped.

    Returns
    -------
    list of str
        Distinct codes in first-seen order. Empty if the file has none.

    Examples
    --------
    >>> find_gnss_systems(["#GPSELE ...", " GPSELE 2018-10-07 00:00:00 ...", "#TOTSUM ..."])
    ['GPS']
    """
    marker = schema.chapter_marker
    width = schema.code_width
    tags = {schema.tag.cut(line) for line in lines if line.startswith(schema.data_prefix)}
    systems: List[str] = []
    for line in lines:
        if not line.startswith(marker):
            continue
        code = line[len(marker) : len(marker) + width]
        if len(code) != width or not code[0].isalpha():
            continue
        if not (code.isalnum() and code.upper() == code):
            continue
        if code == schema.template_code or code in systems:
            continue
        measured = (schema.channel_tag(code, ch) in tags for ch in (ELEVATION_CHANNEL, AZIMUTH_CHANNEL))
        if not any(measured):
            logger.debug(f"Chapter {line[:width + 4]!r} has no measurement lines, not a system")
            continue
        systems.append(code)
    return systems


def parse_position(lines, system: str, schema: RecordSchema = XTR_SCHEMA) -> Optional[tuple]:
    """
    Parse the ECEF position estimate of a system.

    Parameters
    ----------
    lines : sequence of str
        Cleaned report lines.
    system : str
        Satellite system code, e.g. ``"GPS"``.

    Returns
    -------
    tuple of float or None
        ``(x, y, z)`` in metres from the first ``=XYZ<system>`` line, or None
        when the report carries no position for the system.

    Raises
    ------
    FormatError
        If the position field does not hold exactly three numbers.
    """
    prefix = f"{schema.position_tag}{system}"
    for lineno, line in enumerate(lines):
        if not line.startswith(prefix):
            continue
        field = schema.position.cut(line)
        parts = field.split()
        try:
            values = tuple(float(p) for p in parts)
        except ValueError as e:
            raise FormatError(
                f"Non-numeric {schema.position.name} field in {prefix} line {lineno}: {field!r}"
            ) from e
        if len(values) != 3:
            raise FormatError(
                f"Expected 3 coordinates in {prefix} line {lineno}, got {len(values)}: {field!r}"
            )
        return values

    logger.debug(f"No {prefix} position line found")
    return None
