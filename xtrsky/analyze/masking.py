"""
Grid masks applied after interpolation.

Visibility: a node keeps its value only if a real observation lies in its
3x3 deg bin and the node is above the elevation cutoff. This removes the
surface the triangulation spans across unobserved sky.

Exclusion: nodes inside the no-satellite zone polygon are cleared.
"""

import numpy as np
from matplotlib.path import Path as MplPath

from ..utils.geodesy import polar_projection
from .alignment import ObservationVector
from .grid import NO_DATA, AngularGrid
from .nosat_zone import ExclusionPolygon


def visibility_mask(obs: ObservationVector, grid: AngularGrid, cut_off_value: float) -> np.ndarray:
    """
    Boolean mask of visible grid nodes.

    Each node owns the bin ``[node - step/2, node + step/2)`` in azimuth and
    elevation. Azimuth wraps, so the 0 and 360 deg columns share one bin.

    Args:
        obs: Scattered observations
        grid: Target grid
        cut_off_value: Elevation cutoff (deg); nodes must lie strictly above it

    Returns:
        Array of ``grid.shape``, True where the node is visible
    """
    n_ele, n_azi = grid.shape
    half = grid.step / 2.0
    hits = np.zeros(grid.shape, dtype=bool)

    if len(obs):
        az = np.mod(np.asarray(obs.azimuth, dtype=float), 360.0)
        el = np.asarray(obs.elevation, dtype=float)
        col = np.floor((az + half) / grid.step).astype(int)
        row = np.floor((el + half) / grid.step).astype(int)
        inside = (row >= 0) & (row < n_ele) & (col >= 0) & (col < n_azi)
        hits[row[inside], col[inside]] = True

        # Column 0 and the last column are the same direction
        wrapped = hits[:, 0] | hits[:, -1]
        hits[:, 0] = wrapped
        hits[:, -1] = wrapped

    above = grid.elevation > cut_off_value
    return hits & above[:, np.newaxis]


def apply_visibility_mask(
    values: np.ndarray, obs: ObservationVector, grid: AngularGrid, cut_off_value: float
) -> np.ndarray:
    """Return a copy of ``values`` with invisible nodes set to NO_DATA."""
    out = np.array(values, dtype=float, copy=True)
    out[~visibility_mask(obs, grid, cut_off_value)] = NO_DATA
    return out


def exclusion_mask(grid: AngularGrid, polygon: ExclusionPolygon) -> np.ndarray:
    """Boolean mask of grid nodes inside any ring of ``polygon``."""
    inside = np.zeros(grid.shape, dtype=bool)
    if polygon.is_empty:
        return inside

    azg, eleg = grid.mesh()
    xq, yq = polar_projection(azg, eleg)
    points = np.column_stack([xq.ravel(), yq.ravel()])
    for ring in polygon.rings:
        path = MplPath(ring)
        inside |= path.contains_points(points).reshape(grid.shape)
    return inside


def apply_exclusion_mask(
    values: np.ndarray, grid: AngularGrid, polygon: ExclusionPolygon
) -> np.ndarray:
    """Return a copy of ``values`` with nodes inside ``polygon`` set to NO_DATA."""
    out = np.array(values, dtype=float, copy=True)
    out[exclusion_mask(grid, polygon)] = NO_DATA
    return out
