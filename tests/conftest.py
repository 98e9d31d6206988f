import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from scurve_fit.fit_models import FALLING, RISING

from helpers import strip_profile, write_strip_file


@pytest.fixture
def scan_x():
    return np.arange(90.0, 281.0, 1.0)


@pytest.fixture
def left_profile(scan_x):
    y = strip_profile(scan_x, (130.0, 10.0, 35.0, 0.0), (110.0, 10.0, 125.0, 0.0),
                      FALLING, split=152.0)
    return scan_x, np.full_like(scan_x, 0.5), y, np.ones_like(scan_x)


@pytest.fixture
def right_profile(scan_x):
    y = strip_profile(scan_x, (190.0, 10.0, 35.0, 0.0), (220.0, 10.0, 125.0, 0.0),
                      RISING, split=217.0)
    return scan_x, np.full_like(scan_x, 0.5), y, np.ones_like(scan_x)


@pytest.fixture
def strip_files(tmp_path, left_profile, right_profile):
    left = write_strip_file(tmp_path / "leftStripData.txt", *left_profile)
    right = write_strip_file(tmp_path / "rightStripData.txt", *right_profile)
    return left, right
