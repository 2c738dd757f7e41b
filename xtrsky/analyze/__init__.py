"""
xtrsky analysis modules: alignment, gridding and masking.
"""

from xtrsky.analyze.alignment import (
    AlignedObservationSet,
    ObservationVector,
    align_channels,
    reconcile_block,
    reference_index,
)
from xtrsky.analyze.grid import NO_DATA, AngularGrid, GridInterpolator, GridResult
from xtrsky.analyze.masking import (
    apply_exclusion_mask,
    apply_visibility_mask,
    exclusion_mask,
    visibility_mask,
)
from xtrsky.analyze.nosat_zone import ExclusionPolygon, no_sat_zone

__all__ = [
    "AlignedObservationSet",
    "ObservationVector",
    "align_channels",
    "reconcile_block",
    "reference_index",
    "NO_DATA",
    "AngularGrid",
    "GridInterpolator",
    "GridResult",
    "visibility_mask",
    "apply_visibility_mask",
    "exclusion_mask",
    "apply_exclusion_mask",
    "ExclusionPolygon",
    "no_sat_zone",
]
