"""
XTR Multipath Skyplot Analyzer.

Drives the per-system pipeline over a Gnut-Anubis XTR report:

    position -> ELE -> AZI -> align -> MP -> reconcile -> valid mask
    -> observation vector -> interpolate -> visibility mask
    -> exclusion mask -> GridResult

Systems are processed one after the other. A system without the requested
multipath combination is skipped with a diagnostic; format and I/O errors
abort the run.

Example:
    >>> from xtrsky.analyzer import XTRAnalyzer
    >>> run = XTRAnalyzer("GOPE0010.18_xtr", "C1").run()
    >>> run.results["GPS"].values.shape
    (31, 121)
    >>> [d.kind for d in run.diagnostics]
    ['MissingCombinationWarning']
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import numpy as np
import polars as pl

from .analyze.alignment import align_channels, reference_index
from .analyze.grid import AngularGrid, GridInterpolator, GridResult
from .analyze.masking import apply_exclusion_mask, apply_visibility_mask
from .analyze.nosat_zone import ExclusionPolygon, no_sat_zone
from .config.options import SkyplotOptions
from .config.xtr_schema import (
    AZIMUTH_CHANNEL,
    ELEVATION_CHANNEL,
    MULTIPATH_PREFIX,
    XTR_SCHEMA,
    RecordSchema,
)
from .errors import AlignmentError, MissingCombinationWarning
from .loader.reader import find_gnss_systems, parse_position, read_xtr_lines
from .loader.records import parse_record_block, select_channel_lines
from .utils.logging_config import get_logger

logger = get_logger(__name__)


class Stage(Enum):
    """Steps of the per-system pipeline."""

    PARSE_POSITION = "ParsePosition"
    PARSE_ELE = "ParseELE"
    PARSE_AZI = "ParseAZI"
    ALIGN_ELE_AZI = "AlignELEAZI"
    PARSE_MP = "ParseMP"
    RECONCILE_MP = "ReconcileMP"
    COMPUTE_VALID_MASK = "ComputeValidMask"
    BUILD_OBSERVATIONS = "BuildObservationVector"
    INTERPOLATE = "Interpolate"
    MASK_VISIBILITY = "MaskVisibility"
    MASK_EXCLUSION = "MaskExclusion"
    EMIT = "Emit"
    SKIPPED = "Skipped"


@dataclass
class Diagnostic:
    """A recoverable event recorded during a run."""

    kind: str
    system: str
    message: str


@dataclass
class SkyplotRun:
    """
    Output of one analyzer run.

    Attributes:
        results: System code -> GridResult, in detection order
        diagnostics: Recoverable events in the order they occurred
    """

    results: Dict[str, GridResult] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)


class XTRAnalyzer:
    """
    Multipath skyplot grids from an XTR report.

    Attributes
    ----------
    filepath : Path
        Path to the XTR file.
    mp_code : str
        2-character multipath combination code (e.g. ``"C1"``).
    options : SkyplotOptions
        Cutoff and rendering options.
    schema : RecordSchema
        Column layout of the report.
    on_alignment_error : str
        ``"raise"`` aborts the run on an ELE/AZI mismatch, ``"skip"`` records
        a diagnostic and continues with the next system.
    zone_provider : callable
        ``(system, position) -> ExclusionPolygon``; defaults to the orbital
        no-satellite zone.

    Examples
    --------
    >>> analyzer = XTRAnalyzer("site.xtr", "C2", options=SkyplotOptions(cut_off_value=10))
    >>> run = analyzer.run()
    >>> print(analyzer.summary())
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        mp_code: str,
        options: Optional[SkyplotOptions] = None,
        schema: RecordSchema = XTR_SCHEMA,
        on_alignment_error: str = "raise",
        zone_provider: Optional[Callable[[str, Optional[tuple]], ExclusionPolygon]] = None,
    ) -> None:
        if not isinstance(mp_code, str) or len(mp_code) != 2:
            raise ValueError(f"mp_code must be a 2-character string, got {mp_code!r}")
        if on_alignment_error not in ("raise", "skip"):
            raise ValueError(
                f"on_alignment_error must be 'raise' or 'skip', got {on_alignment_error!r}"
            )

        self.filepath = Path(filepath)
        self.filename = self.filepath.name
        self.mp_code = mp_code
        self.options = options if options is not None else SkyplotOptions()
        self.schema = schema
        self.on_alignment_error = on_alignment_error
        self.zone_provider = zone_provider if zone_provider is not None else no_sat_zone
        self.grid = AngularGrid()
        self.interpolator = GridInterpolator(self.grid)
        self.lines: tuple = ()
        self.systems: List[str] = []
        self.last_run: Optional[SkyplotRun] = None

    @property
    def mp_channel(self) -> str:
        return f"{MULTIPATH_PREFIX}{self.mp_code}"

    def load(self) -> "XTRAnalyzer":
        """Read the report and detect satellite systems."""
        self.lines = read_xtr_lines(self.filepath)
        self.systems = find_gnss_systems(self.lines, self.schema)
        logger.info(f"{self.filename}: found systems {self.systems or 'none'}")
        return self

    def run(self) -> SkyplotRun:
        """
        Process every detected system.

        Returns:
            SkyplotRun with one GridResult per processed system

        Raises:
            FileNotFoundError: If the report does not exist
            FormatError: If a line breaks the record layout
            AlignmentError: On ELE/AZI mismatch when on_alignment_error='raise'
        """
        self.load()
        run = SkyplotRun()
        for system in self.systems:
            try:
                result = self._process_system(system, run)
            except AlignmentError as e:
                if self.on_alignment_error == "raise":
                    raise
                logger.error(f"{system}: {e}")
                run.diagnostics.append(Diagnostic("AlignmentError", system, str(e)))
                continue
            if result is not None:
                run.results[system] = result

        self.last_run = run
        return run

    def _process_system(self, system: str, run: SkyplotRun) -> Optional[GridResult]:
        self._enter(system, Stage.PARSE_POSITION)
        position = parse_position(self.lines, system, self.schema)

        self._enter(system, Stage.PARSE_ELE)
        ele = self._parse_channel(system, ELEVATION_CHANNEL)

        self._enter(system, Stage.PARSE_AZI)
        azi = self._parse_channel(system, AZIMUTH_CHANNEL)

        self._enter(system, Stage.ALIGN_ELE_AZI)
        reference_index(ele, azi)

        self._enter(system, Stage.PARSE_MP)
        mp_lines = select_channel_lines(self.lines, system, self.mp_channel, self.schema)
        if not mp_lines:
            message = f"For {system} system MP combination {self.mp_code} not available!"
            logger.warning(message)
            warnings.warn(message, MissingCombinationWarning, stacklevel=3)
            run.diagnostics.append(Diagnostic(MissingCombinationWarning.__name__, system, message))
            self._enter(system, Stage.SKIPPED)
            return None
        mp = parse_record_block(mp_lines, system, self.mp_channel, self.schema)

        self._enter(system, Stage.RECONCILE_MP)
        aligned = align_channels(ele, azi, mp)

        self._enter(system, Stage.COMPUTE_VALID_MASK)
        valid = aligned.valid
        logger.debug(f"{system}: {int(valid.sum())} of {valid.size} epoch/slot cells valid")

        self._enter(system, Stage.BUILD_OBSERVATIONS)
        obs = aligned.observation_vector()

        self._enter(system, Stage.INTERPOLATE)
        values = self.interpolator.interpolate(obs)

        self._enter(system, Stage.MASK_VISIBILITY)
        values = apply_visibility_mask(values, obs, self.grid, self.options.cut_off_value)

        self._enter(system, Stage.MASK_EXCLUSION)
        values = apply_exclusion_mask(values, self.grid, self.zone_provider(system, position))

        self._enter(system, Stage.EMIT)
        result = GridResult(
            system=system,
            mp_code=self.mp_code,
            values=values,
            grid=self.grid,
            position=position,
            n_observations=len(obs),
            n_epochs=len(aligned.time),
            n_slots=aligned.multipath.shape[1],
            mean_mp=float(np.mean(obs.value)) if len(obs) else None,
        )
        logger.info(
            f"{system}: MP{self.mp_code} grid from {len(obs)} observations, "
            f"coverage {result.coverage:.1%}"
        )
        return result

    def _enter(self, system: str, stage: Stage) -> None:
        logger.debug(f"{system}: {stage.value}")

    def _parse_channel(self, system: str, channel: str):
        lines = select_channel_lines(self.lines, system, channel, self.schema)
        return parse_record_block(lines, system, channel, self.schema)

    def summary(self) -> pl.DataFrame:
        """
        One row per emitted system of the last run.

        Returns:
            DataFrame with columns: system, n_epochs, n_slots,
            n_observations, mean_mp, coverage
        """
        if self.last_run is None or not self.last_run.results:
            return pl.DataFrame()

        rows = [
            {
                "system": result.system,
                "n_epochs": result.n_epochs,
                "n_slots": result.n_slots,
                "n_observations": result.n_observations,
                "mean_mp": result.mean_mp,
                "coverage": result.coverage,
            }
            for result in self.last_run.results.values()
        ]
        return pl.DataFrame(rows)
