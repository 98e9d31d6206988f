import numpy as np
import pytest

from strip_io import StripData
from scurve_fit.strip_fit import LEFT_CURVES, RIGHT_CURVES, fit_strip
from scurve_fit.fit_models import FALLING, RISING

from helpers import strip_profile


def _strip(x, y):
    return StripData(position=x, position_error=np.full_like(x, 0.5),
                     charge=y, charge_error=np.ones_like(x))


def test_curve_definitions():
    left_small, left_large = LEFT_CURVES
    right_small, right_large = RIGHT_CURVES

    assert (left_small.x_min, left_small.x_max) == (155.0, 200.0)
    assert (left_large.x_min, left_large.x_max) == (110.0, 150.0)
    assert (right_small.x_min, right_small.x_max) == (170.0, 215.0)
    assert (right_large.x_min, right_large.x_max) == (220.0, 260.0)
    assert left_small.orientation == left_large.orientation == FALLING
    assert right_small.orientation == right_large.orientation == RISING
    assert left_small.p0 == (130.0, 10.0, 35.0, 0.0)
    assert right_large.p0[:3] == (220.0, 10.0, 125.0)


@pytest.mark.parametrize("profile, curves", [
    ("left_profile", LEFT_CURVES),
    ("right_profile", RIGHT_CURVES),
])
def test_large_offset_is_small_offset(request, profile, curves):
    x, ex, y, ey = request.getfixturevalue(profile)
    data = StripData(position=x, position_error=ex,
                     charge=y + 2.0,
                     charge_error=ey)

    strip_fit = fit_strip(data, *curves)

    assert strip_fit.large.offset == strip_fit.small.offset
    assert strip_fit.large.fixed == ("offset",)
    assert strip_fit.small.fixed == ()


def test_noiseless_strip_recovers_centers():
    x = np.arange(90.0, 281.0, 1.0)
    y = strip_profile(x, (192.0, 9.0, 30.0, 1.5), (232.0, 8.0, 120.0, 1.5),
                      RISING, split=217.0)
    small_curve, large_curve = RIGHT_CURVES

    strip_fit = fit_strip(_strip(x, y), small_curve, large_curve)

    assert strip_fit.small.center == pytest.approx(192.0, rel=1e-6)
    assert strip_fit.large.center == pytest.approx(232.0, rel=1e-6)
    assert strip_fit.large.offset == pytest.approx(1.5, abs=1e-6)
