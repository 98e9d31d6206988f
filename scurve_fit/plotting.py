from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from config import DENSE_N, LEFT_LARGE_DRAW_RANGE, RIGHT_LARGE_DRAW_RANGE
from strip_io import StripData
from scurve_fit.distance import InterStripDistance
from scurve_fit.fit_models import FitResult
from scurve_fit.strip_fit import StripFit


@dataclass(frozen=True)
class PlotStyle:
    """Look of the summary figure, applied through an rc_context."""

    fig_size: tuple = (12.0, 10.0)
    dpi: int = 100
    x_limits: tuple = (90.0, 280.0)
    y_limits: tuple = (-20.0, 400.0)
    x_label: str = "Scanning Distance (µm)"
    y_label: str = "Norm. Charge (arb.)"
    laser_label: str = "Red"
    marker: str = "*"
    marker_size: float = 8.0
    data_color: str = "black"
    small_color: str = "red"
    large_color: str = "green"
    large_linestyle: str = ":"
    curve_width: float = 3.0
    text_color: str = "blue"
    rc: dict = field(default_factory=lambda: {
        "font.family": "sans-serif",
        "font.size": 18,
        "axes.labelsize": 22,
        "axes.linewidth": 1.0,
        "xtick.direction": "in",
        "ytick.direction": "in",
        "xtick.top": True,
        "ytick.right": True,
        "xtick.major.size": 8,
        "ytick.major.size": 8,
        "legend.frameon": False,
        "legend.fontsize": 18,
    })


def _draw_curve(ax, fit: FitResult, x_range, color, linestyle, width):
    x = np.linspace(x_range[0], x_range[1], DENSE_N)
    ax.plot(x, fit.evaluate(x), color=color, linestyle=linestyle, linewidth=width)


def _draw_strip(ax, data: StripData, strip_fit: StripFit, large_range,
                style: PlotStyle):
    ax.errorbar(
        data.position, data.charge,
        xerr=data.position_error, yerr=data.charge_error,
        fmt=style.marker, markersize=style.marker_size,
        color=style.data_color, ecolor=style.data_color,
        label=rf"$\chi^2/\mathrm{{ndf}}$ = {strip_fit.large.reduced_chi2:.2f}",
    )
    for fit, color in ((strip_fit.small, style.small_color),
                       (strip_fit.large, style.large_color)):
        _draw_curve(ax, fit, (fit.curve.x_min, fit.curve.x_max),
                    color, "-", style.curve_width)
    # large curve continued beyond its fit range
    _draw_curve(ax, strip_fit.large, large_range,
                style.large_color, style.large_linestyle, style.curve_width)


def distance_label(result: InterStripDistance, laser_label: str) -> str:
    return (rf"Inter-strip Distance$_{{\mathrm{{{laser_label}}}}}$"
            rf" = {result.distance:.2f} $\pm$ {result.error:.2f} µm")


def draw_strips(ax,
                left_data: StripData,
                left_fit: StripFit,
                right_data: StripData,
                right_fit: StripFit,
                result: InterStripDistance,
                style: PlotStyle):
    """Draw both strips, their S-curves, legend and distance box on `ax`."""
    _draw_strip(ax, left_data, left_fit, LEFT_LARGE_DRAW_RANGE, style)
    _draw_strip(ax, right_data, right_fit, RIGHT_LARGE_DRAW_RANGE, style)

    ax.set_xlim(*style.x_limits)
    ax.set_ylim(*style.y_limits)
    ax.set_xlabel(style.x_label)
    ax.set_ylabel(style.y_label)
    ax.legend(loc="upper right")
    ax.text(
        0.04, 0.95, distance_label(result, style.laser_label),
        transform=ax.transAxes, color=style.text_color,
        va="top", ha="left",
        bbox=dict(facecolor="white", edgecolor="none"),
    )


def plot_strips(left_data: StripData,
                left_fit: StripFit,
                right_data: StripData,
                right_fit: StripFit,
                result: InterStripDistance,
                out_path,
                style: PlotStyle = None) -> Path:
    """
    Draw both strip profiles with their fitted S-curves, the chi2/ndf of
    each large-curve fit and the inter-strip distance, and save as PNG.
    """
    style = style or PlotStyle()
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    with plt.rc_context(style.rc):
        fig, ax = plt.subplots(figsize=style.fig_size, dpi=style.dpi)
        try:
            draw_strips(ax, left_data, left_fit, right_data, right_fit,
                        result, style)
            fig.savefig(out_path, dpi=style.dpi, bbox_inches="tight")
        finally:
            plt.close(fig)

    return out_path
