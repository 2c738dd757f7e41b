"""
Scatter-to-grid interpolation on the fixed 3-degree skyplot grid.
"""

from dataclasses import dataclass, field

import numpy as np
import polars as pl
from scipy.interpolate import griddata
from scipy.spatial import QhullError

from ..utils.logging_config import get_logger
from .alignment import ObservationVector

logger = get_logger(__name__)

# Grid nodes without data (outside the hull, unobserved or obstructed)
NO_DATA = -1.0

GRID_STEP = 3.0


@dataclass(frozen=True)
class AngularGrid:
    """
    Regular azimuth/elevation grid: azimuth 0..360 and elevation 0..90,
    both in steps of 3 degrees.
    """

    step: float = GRID_STEP

    def __post_init__(self) -> None:
        if self.step != GRID_STEP:
            raise ValueError(f"Only a {GRID_STEP:g} deg grid is supported, got {self.step}")

    @property
    def azimuth(self) -> np.ndarray:
        return np.arange(0.0, 360.0 + self.step, self.step)

    @property
    def elevation(self) -> np.ndarray:
        return np.arange(0.0, 90.0 + self.step, self.step)

    @property
    def shape(self) -> tuple:
        return (len(self.elevation), len(self.azimuth))

    def mesh(self):
        """Return (azimuth, elevation) node arrays, elevation along rows."""
        return np.meshgrid(self.azimuth, self.elevation)


@dataclass
class GridResult:
    """
    Final skyplot grid of one system.

    Attributes:
        system: Satellite system code
        mp_code: Multipath combination code
        values: Elevation x azimuth matrix, NO_DATA where empty
        grid: Grid definition of ``values``
        position: ECEF position estimate or None
        n_observations: Number of scattered observations used
        n_epochs: Epochs on the ELE/AZI reference index
        n_slots: Satellite slots per epoch after padding
        mean_mp: Mean of the scattered multipath values, None without data
    """

    system: str
    mp_code: str
    values: np.ndarray
    grid: AngularGrid = field(default_factory=AngularGrid)
    position: tuple | None = None
    n_observations: int = 0
    n_epochs: int = 0
    n_slots: int = 0
    mean_mp: float | None = None

    @property
    def coverage(self) -> float:
        """Fraction of grid nodes holding data."""
        return float(np.mean(self.values != NO_DATA))

    def to_frame(self) -> pl.DataFrame:
        """Long-format table with one row per grid node."""
        azg, eleg = self.grid.mesh()
        return pl.DataFrame(
            {
                "azimuth": azg.ravel(),
                "elevation": eleg.ravel(),
                "value": self.values.ravel(),
            }
        )


class GridInterpolator:
    """
    Linear scattered-data interpolation onto an AngularGrid.

    Triangulates the (azimuth, elevation) positions (Delaunay) and evaluates
    the piecewise-linear surface at each node. Nodes outside the convex hull
    are not extrapolated and receive NO_DATA.

    Examples
    --------
    >>> interp = GridInterpolator()
    >>> values = interp.interpolate(obs)
    >>> values.shape
    (31, 121)
    """

    def __init__(self, grid: AngularGrid | None = None) -> None:
        self.grid = grid if grid is not None else AngularGrid()

    def interpolate(self, obs: ObservationVector) -> np.ndarray:
        out = np.full(self.grid.shape, NO_DATA)
        if len(obs) < 3:
            logger.warning(f"Only {len(obs)} observations, grid left empty")
            return out

        azg, eleg = self.grid.mesh()
        points = np.column_stack([obs.azimuth, obs.elevation])
        try:
            est = griddata(points, obs.value, (azg, eleg), method="linear", fill_value=np.nan)
        except QhullError as e:
            logger.warning(f"Degenerate observation geometry, grid left empty: {e}")
            return out

        inside = ~np.isnan(est)
        out[inside] = est[inside]
        return out
