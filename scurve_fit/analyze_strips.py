# analyze_strips.py
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from config import LEFT_STRIP_FILE, RIGHT_STRIP_FILE, OUT_PNG
from strip_io import StripData, StripDataError, read_strip_file
from scurve_fit.distance import InterStripDistance, inter_strip_distance
from scurve_fit.fit_models import FitError
from scurve_fit.plotting import plot_strips
from scurve_fit.strip_fit import LEFT_CURVES, RIGHT_CURVES, StripFit, fit_strip


@dataclass(frozen=True)
class StripAnalysis:
    left_data: StripData
    right_data: StripData
    left_fit: StripFit
    right_fit: StripFit
    result: InterStripDistance


def analyze_strips(left_path: Path, right_path: Path) -> StripAnalysis:
    """Load both strips, fit their S-curves and compute the distance."""
    left_data = read_strip_file(left_path)
    right_data = read_strip_file(right_path)

    left_fit = fit_strip(left_data, *LEFT_CURVES)
    right_fit = fit_strip(right_data, *RIGHT_CURVES)

    result = inter_strip_distance(left_fit.large, right_fit.large)
    return StripAnalysis(left_data, right_data, left_fit, right_fit, result)


def fit_summary(analysis: StripAnalysis) -> pd.DataFrame:
    """One row per fitted curve: parameters, errors and chi2/ndf."""
    rows = []
    for strip_fit in (analysis.left_fit, analysis.right_fit):
        for fit in (strip_fit.small, strip_fit.large):
            row = {"curve": fit.curve.name}
            for name in ("center", "width", "amplitude", "offset"):
                row[name] = fit.param(name)
                row[f"{name}_err"] = fit.error(name)
            row["chi2"] = fit.chi2
            row["ndf"] = fit.ndf
            row["chi2_red"] = fit.reduced_chi2
            rows.append(row)
    return pd.DataFrame(rows)


def main(left_path=LEFT_STRIP_FILE,
         right_path=RIGHT_STRIP_FILE,
         out_png=OUT_PNG) -> int:
    """Command-line entry point. Returns the process exit code."""
    logging.basicConfig(level=logging.WARNING,
                        format="[%(levelname)s] %(name)s: %(message)s")

    print(f"[INFO] Left strip  = {left_path}")
    print(f"[INFO] Right strip = {right_path}")

    try:
        analysis = analyze_strips(Path(left_path), Path(right_path))
    except OSError as exc:
        print(f"[ERROR] Cannot read input: {exc}", file=sys.stderr)
        return 1
    except (StripDataError, FitError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1

    print(f"[INFO] Points: left={analysis.left_data.n_points}, "
          f"right={analysis.right_data.n_points}")
    with pd.option_context("display.width", 160, "display.max_columns", None):
        print(fit_summary(analysis).to_string(index=False, float_format="{:.4g}".format))

    try:
        saved = plot_strips(analysis.left_data, analysis.left_fit,
                            analysis.right_data, analysis.right_fit,
                            analysis.result, out_png)
    except OSError as exc:
        print(f"[ERROR] Cannot write figure: {exc}", file=sys.stderr)
        return 1
    print(f"[OK] Saved figure: {saved}")
    print(f"Inter-strip distance = {analysis.result} µm")
    return 0


if __name__ == "__main__":
    sys.exit(main())
