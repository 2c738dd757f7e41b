"""
XTR report loading.
"""

from .reader import find_gnss_systems, parse_position, read_xtr_lines
from .records import TimeSeriesBlock, parse_field, parse_record_block, select_channel_lines

__all__ = [
    "read_xtr_lines",
    "find_gnss_systems",
    "parse_position",
    "TimeSeriesBlock",
    "parse_field",
    "parse_record_block",
    "select_channel_lines",
]
