"""
Multipath Skyplot Plotter.
Polar rendering of GridResult matrices produced by XTRAnalyzer.
"""

from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt
import numpy as np

from .analyze.grid import GridResult
from .config.options import SkyplotOptions


def figure_name(
    xtr_file: Union[str, Path], system: str, mp_code: str, output_dir: Optional[Path] = None
) -> Path:
    """
    PNG path for a system's skyplot: ``<base>_<system>_MP<mp_code>.png``.

    The base is the input file name up to its first dot; the file goes next to
    the input unless ``output_dir`` is given.

    Examples:
        >>> figure_name("data/GOPE0010.18_xtr", "GPS", "C1")
        PosixPath('data/GOPE0010_GPS_MPC1.png')
    """
    xtr_file = Path(xtr_file)
    base = xtr_file.name.split(".")[0]
    folder = Path(output_dir) if output_dir is not None else xtr_file.parent
    return folder / f"{base}_{system}_MP{mp_code}.png"


class SkyplotPlotter:
    def __init__(self, options: Optional[SkyplotOptions] = None):
        self.options = options if options is not None else SkyplotOptions()

    def colormap(self):
        """Jet colormap with empty bins (below the color range) drawn white."""
        cmap = plt.get_cmap("jet").copy()
        cmap.set_under("white")
        return cmap

    def plot_mp_skyplot(self, result: GridResult, save_path=None):
        """Polar skyplot of a multipath grid, zenith at the centre and north up."""
        opts = self.options
        low, high = opts.color_bar_limits

        fig = plt.figure(figsize=(7, 4.8))
        ax = fig.add_subplot(111, projection="polar")
        ax.set_theta_zero_location("N")
        ax.set_theta_direction(-1)

        theta = np.deg2rad(result.grid.azimuth)
        dist = 90.0 - result.grid.elevation
        mesh = ax.pcolormesh(
            theta, dist, result.values, cmap=self.colormap(), vmin=low, vmax=high, shading="nearest"
        )

        ax.set_ylim(0, 90)
        ax.set_yticks([30, 60])
        ax.set_yticklabels(["60", "30"], fontweight="bold")
        ax.set_xticks(np.deg2rad(np.arange(0, 360, 30)))
        ax.grid(True, linestyle=":")

        cbar = fig.colorbar(mesh, ax=ax, ticks=list(opts.color_bar_ticks), extend="neither")
        cbar.ax.tick_params(direction="in", labelsize=10)
        cbar.set_label(f"{result.system} RMS MP{result.mp_code} value (cm)", fontsize=10)

        if save_path:
            plt.savefig(save_path, dpi=opts.fig_resolution)
            plt.close(fig)
        else:
            plt.show()
