"""
One-call multipath skyplots for an XTR report.

Example:
    >>> from xtrsky.skyplot import xtr2mpskyplot
    >>> run = xtr2mpskyplot("GOPE0010.18_xtr", "C1")  # writes GOPE0010_<SYS>_MPC1.png
"""

from pathlib import Path
from typing import Optional, Union

from .analyzer import SkyplotRun, XTRAnalyzer
from .config.options import SkyplotOptions
from .plotter import SkyplotPlotter, figure_name
from .utils.logging_config import get_logger

logger = get_logger(__name__)


def xtr2mpskyplot(
    xtr_file: Union[str, Path],
    mp_code: str,
    save_fig: bool = True,
    options: Optional[SkyplotOptions] = None,
    output_dir: Optional[Union[str, Path]] = None,
) -> SkyplotRun:
    """
    Build and render multipath skyplots for every system of an XTR report.

    Args:
        xtr_file: Path to the XTR file
        mp_code: 2-character multipath combination code (RINEX 2 code, e.g. 'C1')
        save_fig: Export each skyplot to PNG instead of showing it
        options: Color range, ticks, resolution and elevation cutoff
        output_dir: Folder for the PNG files (default: next to the input)

    Returns:
        The SkyplotRun with grids and diagnostics

    Raises:
        ValueError: If mp_code is not a 2-character string
        FileNotFoundError: If xtr_file does not exist
    """
    analyzer = XTRAnalyzer(xtr_file, mp_code, options=options)
    run = analyzer.run()

    if output_dir is not None:
        Path(output_dir).mkdir(parents=True, exist_ok=True)

    plotter = SkyplotPlotter(analyzer.options)
    for system, result in run.results.items():
        save_path = figure_name(xtr_file, system, mp_code, output_dir) if save_fig else None
        plotter.plot_mp_skyplot(result, save_path=save_path)
        if save_path is not None:
            logger.info(f"Saved {system} skyplot to {save_path}")

    return run
