import matplotlib.pyplot as plt
import numpy as np
from matplotlib import rcParams

from scurve_fit.analyze_strips import analyze_strips
from scurve_fit.plotting import PlotStyle, distance_label, draw_strips, plot_strips


def test_plot_strips_saves_png_without_touching_global_style(strip_files, tmp_path):
    analysis = analyze_strips(*strip_files)
    font_size, tick_dir = rcParams["font.size"], rcParams["xtick.direction"]
    style = PlotStyle(fig_size=(6.0, 5.0), dpi=50, laser_label="IR")

    saved = plot_strips(analysis.left_data, analysis.left_fit,
                        analysis.right_data, analysis.right_fit,
                        analysis.result, tmp_path / "nested" / "isd.png", style)

    assert saved == tmp_path / "nested" / "isd.png"
    assert saved.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
    assert rcParams["font.size"] == font_size
    assert rcParams["xtick.direction"] == tick_dir


def test_figure_annotations_and_curves(strip_files):
    analysis = analyze_strips(*strip_files)
    style = PlotStyle()
    fig, ax = plt.subplots()
    try:
        draw_strips(ax, analysis.left_data, analysis.left_fit,
                    analysis.right_data, analysis.right_fit,
                    analysis.result, style)

        label = ax.texts[0].get_text()
        assert label == distance_label(analysis.result, "Red")
        assert r"= 110.00 $\pm$ 0.00 µm" in label

        legend = [t.get_text() for t in ax.get_legend().get_texts()]
        assert legend == [r"$\chi^2/\mathrm{ndf}$ = 0.00"] * 2

        green = [line for line in ax.lines if line.get_color() == style.large_color]
        solid = sorted((float(np.min(line.get_xdata())), float(np.max(line.get_xdata())))
                       for line in green if line.get_linestyle() == "-")
        dotted = sorted((float(np.min(line.get_xdata())), float(np.max(line.get_xdata())))
                        for line in green if line.get_linestyle() == ":")
        assert solid == [(110.0, 150.0), (220.0, 260.0)]
        assert dotted == [(90.0, 220.0), (150.0, 280.0)]
    finally:
        plt.close(fig)
