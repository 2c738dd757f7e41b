"""
No-satellite zone of MEO constellations.

Satellites of a constellation with inclination i never have a sub-satellite
latitude above i. Seen from a ground station, the directions whose line of
sight meets the orbital shell beyond that latitude form a hole in the sky
(the "north hole" at mid-northern latitudes). The hole is returned as
polygon rings in the zenith-centred skyplot plane.
"""

from dataclasses import dataclass

import numpy as np

from ..config.xtr_schema import ORBIT_GEOMETRY
from ..utils.geodesy import azel2enu, ecef2lla, polar_projection, rot_ecef2enu
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class ExclusionPolygon:
    """
    Obstructed sky region as closed rings in the skyplot plane.

    Each ring is an ``(n, 2)`` array of (x, y) vertices with
    ``x = (90 - el) * sin(az)`` and ``y = (90 - el) * cos(az)``.
    An empty polygon masks nothing.
    """

    rings: tuple = ()

    @property
    def is_empty(self) -> bool:
        return len(self.rings) == 0

    @classmethod
    def from_azel(cls, rings) -> "ExclusionPolygon":
        """
        Build a polygon from rings given as (azimuth, elevation) vertices in degrees.

        Example:
            >>> mast = ExclusionPolygon.from_azel([[(80, 0), (100, 0), (100, 40), (80, 40)]])
        """
        projected = []
        for ring in rings:
            azel = np.asarray(ring, dtype=float)
            if azel.ndim != 2 or azel.shape[0] < 3 or azel.shape[1] != 2:
                raise ValueError(f"A ring needs at least 3 (azimuth, elevation) pairs, got {azel.shape}")
            x, y = polar_projection(azel[:, 0], azel[:, 1])
            projected.append(np.column_stack([x, y]))
        return cls(rings=tuple(projected))


def no_sat_zone(
    system: str,
    position,
    geometry: dict = ORBIT_GEOMETRY,
    azimuth_step: float = 1.0,
    elevation_step: float = 0.5,
) -> ExclusionPolygon:
    """
    Compute the no-satellite zone of ``system`` seen from ``position``.

    Parameters
    ----------
    system : str
        Satellite system code, looked up in ``geometry``.
    position : sequence of float or None
        Receiver ECEF position (m).
    geometry : dict
        System code -> {"inclination": deg, "radius": m}.
    azimuth_step, elevation_step : float
        Sampling of the sky lattice (deg).

    Returns
    -------
    ExclusionPolygon
        At most one ring per pole-ward half of the sky. Empty for systems
        missing from ``geometry``, for unknown positions and for positions
        that do not lie inside the orbital shell.
    """
    params = geometry.get(system)
    if params is None:
        logger.debug(f"No orbit geometry for {system}, no exclusion zone")
        return ExclusionPolygon()
    if position is None or not np.any(np.asarray(position, dtype=float)):
        logger.debug(f"No position for {system}, no exclusion zone")
        return ExclusionPolygon()

    pos = np.asarray(position, dtype=float)
    radius = float(params["radius"])
    inclination = float(params["inclination"])
    if np.linalg.norm(pos) >= radius:
        logger.warning(
            f"Position {tuple(pos)} is not below the {system} orbital shell, no exclusion zone"
        )
        return ExclusionPolygon()

    lat, lon = ecef2lla(pos)
    rot = rot_ecef2enu(lat, lon)
    elevation = np.arange(0.0, 90.0 + elevation_step / 2, elevation_step)

    rings = []
    for heading in (0.0, 180.0):
        azimuth = heading + np.arange(-90.0, 90.0 + azimuth_step / 2, azimuth_step)
        azg, eleg = np.meshgrid(azimuth, elevation)
        # ENU row vectors to ECEF: (rot.T @ e).T == e @ rot
        los = azel2enu(azg, eleg) @ rot
        b = los @ pos
        t = -b + np.sqrt(b**2 - (pos @ pos - radius**2))
        hit = pos + t[..., np.newaxis] * los
        hit_lat = np.degrees(np.arcsin(np.clip(hit[..., 2] / radius, -1.0, 1.0)))
        ring = _trace_ring(azimuth, elevation, np.abs(hit_lat) > inclination)
        if ring is not None:
            rings.append(ring)

    return ExclusionPolygon(rings=tuple(rings))


def _trace_ring(azimuth, elevation, blocked):
    """Outline the blocked lattice cells as one ring: upper edge out, lower edge back."""
    cols = np.flatnonzero(blocked.any(axis=0))
    if cols.size == 0:
        return None

    # Keep the longest run of adjacent azimuth columns
    runs = np.split(cols, np.flatnonzero(np.diff(cols) > 1) + 1)
    run = max(runs, key=len)
    if run.size < 2:
        return None

    upper = []
    lower = []
    for c in run:
        rows = np.flatnonzero(blocked[:, c])
        upper.append((azimuth[c], elevation[rows[-1]]))
        lower.append((azimuth[c], elevation[rows[0]]))
    azel = np.array(upper + lower[::-1])

    x, y = polar_projection(azel[:, 0], azel[:, 1])
    return np.column_stack([x, y])
