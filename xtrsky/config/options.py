"""Skyplot options consumed at the masking and rendering boundary."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SkyplotOptions:
    """
    User-facing skyplot settings.

    Attributes:
        color_bar_limits: Range of the color bar (cm)
        color_bar_ticks: Tick positions on the color bar
        fig_resolution: Output PNG resolution (dpi)
        cut_off_value: Elevation cutoff (deg); nodes at or below it are masked

    Example:
        >>> opts = SkyplotOptions(color_bar_limits=(0, 80), cut_off_value=10.0)
    """

    color_bar_limits: tuple = (0, 120)
    color_bar_ticks: tuple = (0, 20, 40, 60, 80, 100, 120)
    fig_resolution: int = 200
    cut_off_value: float = 0.0

    def __post_init__(self) -> None:
        if len(self.color_bar_limits) != 2:
            raise ValueError(
                f"color_bar_limits must be (low, high), got {self.color_bar_limits!r}"
            )
        if self.color_bar_limits[0] >= self.color_bar_limits[1]:
            raise ValueError(f"color_bar_limits must be increasing, got {self.color_bar_limits!r}")
        if self.fig_resolution <= 0:
            raise ValueError(f"fig_resolution must be positive, got {self.fig_resolution}")
