"""
Utility module initialization.
"""

from .geodesy import azel2enu, ecef2lla, polar_projection, rot_ecef2enu
from .logging_config import (
    get_logger,
    setup_logging,
)

__all__ = [
    "ecef2lla",
    "rot_ecef2enu",
    "azel2enu",
    "polar_projection",
    "setup_logging",
    "get_logger",
]
