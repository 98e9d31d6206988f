from pathlib import Path

# Base directory (current working directory)
BASE_DIR = Path.cwd()

# Input charge-scan files, one per strip
DATA_DIR = BASE_DIR / "data"
LEFT_STRIP_FILE = DATA_DIR / "leftStripData.txt"
RIGHT_STRIP_FILE = DATA_DIR / "rightStripData.txt"

# Output figure
FIG_DIR = BASE_DIR / "figures"
OUT_PNG = FIG_DIR / "interStripDistance.png"

# Fit ranges in µm (inclusive)
LEFT_SMALL_RANGE = (155.0, 200.0)
LEFT_LARGE_RANGE = (110.0, 150.0)
RIGHT_SMALL_RANGE = (170.0, 215.0)
RIGHT_LARGE_RANGE = (220.0, 260.0)

# Starting values (center, width, amplitude, offset)
# The large-curve offset is replaced by the fitted small-curve offset.
LEFT_SMALL_P0 = (130.0, 10.0, 35.0, 0.0)
LEFT_LARGE_P0 = (110.0, 10.0, 125.0, 0.0)
RIGHT_SMALL_P0 = (190.0, 10.0, 35.0, 0.0)
RIGHT_LARGE_P0 = (220.0, 10.0, 125.0, 0.0)

# Large curves are drawn beyond their fit range
LEFT_LARGE_DRAW_RANGE = (90.0, 220.0)
RIGHT_LARGE_DRAW_RANGE = (150.0, 280.0)

# Solver settings
ABSOLUTE_SIGMA = False  # False -> parameter errors scaled by chi2/ndf
MAXFEV = 10000

# Dense grid for plotting fitted curves
DENSE_N = 800
