"""
Epoch alignment of ELE, AZI and MP blocks.

ELE and AZI are written for the same epochs and define the reference time
index of a system. The multipath block may miss epochs (no combination
available); its rows are scattered onto the reference index and the gaps
stay NaN.
"""

from dataclasses import dataclass

import numpy as np

from ..errors import AlignmentError
from ..loader.records import TimeSeriesBlock
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ObservationVector:
    """
    Flattened (azimuth, elevation, value) triples of valid observations.

    The three arrays always share length and element order.
    """

    azimuth: np.ndarray
    elevation: np.ndarray
    value: np.ndarray

    def __post_init__(self) -> None:
        if not (len(self.azimuth) == len(self.elevation) == len(self.value)):
            raise ValueError(
                "azimuth, elevation and value must have equal length, got "
                f"{len(self.azimuth)}, {len(self.elevation)}, {len(self.value)}"
            )

    def __len__(self) -> int:
        return len(self.value)


@dataclass
class AlignedObservationSet:
    """
    ELE, AZI and MP matrices of one system on a common epoch index.

    Attributes:
        system: Satellite system code
        time: Reference timestamps (rows of every matrix)
        elevation: Epoch x slot elevation (deg)
        azimuth: Epoch x slot azimuth (deg)
        multipath: Epoch x slot multipath value, NaN for uncovered epochs
    """

    system: str
    time: np.ndarray
    elevation: np.ndarray
    azimuth: np.ndarray
    multipath: np.ndarray

    @property
    def valid(self) -> np.ndarray:
        """Element-wise mask where all three channels hold a value."""
        return ~np.isnan(self.elevation) & ~np.isnan(self.azimuth) & ~np.isnan(self.multipath)

    def observation_vector(self) -> ObservationVector:
        sel = self.valid
        return ObservationVector(
            azimuth=self.azimuth[sel], elevation=self.elevation[sel], value=self.multipath[sel]
        )


def reference_index(ele: TimeSeriesBlock, azi: TimeSeriesBlock) -> np.ndarray:
    """
    Check that ELE and AZI cover the same epochs and return their timestamps.

    Raises:
        AlignmentError: On differing epoch counts or timestamps
    """
    system = ele.system
    if ele.n_epochs != azi.n_epochs:
        raise AlignmentError(
            f"Reading ELE and AZI failed for {system}: "
            f"{ele.n_epochs} ELE epochs vs {azi.n_epochs} AZI epochs"
        )
    mismatch = np.flatnonzero(ele.time != azi.time)
    if mismatch.size:
        first = mismatch[0]
        raise AlignmentError(
            f"ELE and AZI timestamps differ for {system} at epoch {first}: "
            f"{ele.time[first]} vs {azi.time[first]}"
        )
    return ele.time.copy()


def pad_slots(values: np.ndarray, n_slots: int) -> np.ndarray:
    """Right-pad ``values`` with NaN columns up to ``n_slots``."""
    if values.shape[1] >= n_slots:
        return values
    padded = np.full((values.shape[0], n_slots), np.nan)
    padded[:, : values.shape[1]] = values
    return padded


def reconcile_block(block: TimeSeriesBlock, reference: np.ndarray, n_slots: int) -> np.ndarray:
    """
    Scatter the rows of ``block`` onto the reference epochs.

    Args:
        block: Parsed block, possibly covering fewer epochs
        reference: Reference timestamps
        n_slots: Number of columns of the output

    Returns:
        ``len(reference) x n_slots`` matrix; rows of epochs missing from
        ``block`` are all NaN, covered rows equal the parsed values.
    """
    out = np.full((len(reference), n_slots), np.nan)
    if block.is_empty():
        return out

    covered = np.isin(reference, block.time)
    known = np.isin(block.time, reference)
    if not known.all():
        logger.warning(
            f"{block.system}{block.channel}: dropping {int((~known).sum())} epochs "
            "not present in ELE/AZI"
        )
    out[covered, : block.n_slots] = block.values[known]
    return out


def align_channels(
    ele: TimeSeriesBlock, azi: TimeSeriesBlock, mp: TimeSeriesBlock
) -> AlignedObservationSet:
    """
    Reconcile the three channels of one system onto the ELE/AZI epochs.

    Raises:
        AlignmentError: If ELE and AZI disagree
    """
    reference = reference_index(ele, azi)
    n_slots = max(ele.n_slots, azi.n_slots, mp.n_slots)

    if mp.n_epochs != len(reference):
        logger.debug(
            f"{ele.system}: MP covers {mp.n_epochs} of {len(reference)} epochs, reconciling"
        )

    return AlignedObservationSet(
        system=ele.system,
        time=reference,
        elevation=pad_slots(ele.values, n_slots),
        azimuth=pad_slots(azi.values, n_slots),
        multipath=reconcile_block(mp, reference, n_slots),
    )
