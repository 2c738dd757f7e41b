"""
xtrsky - multipath skyplots from Gnut-Anubis XTR reports.
"""

from xtrsky.analyzer import Diagnostic, SkyplotRun, XTRAnalyzer
from xtrsky.config import SkyplotOptions
from xtrsky.errors import AlignmentError, FormatError, MissingCombinationWarning
from xtrsky.skyplot import xtr2mpskyplot

__version__ = "0.1.0"

__all__ = [
    "XTRAnalyzer",
    "SkyplotRun",
    "Diagnostic",
    "SkyplotOptions",
    "FormatError",
    "AlignmentError",
    "MissingCombinationWarning",
    "xtr2mpskyplot",
]
