import logging
from dataclasses import dataclass

from config import (
    LEFT_SMALL_RANGE,
    LEFT_LARGE_RANGE,
    RIGHT_SMALL_RANGE,
    RIGHT_LARGE_RANGE,
    LEFT_SMALL_P0,
    LEFT_LARGE_P0,
    RIGHT_SMALL_P0,
    RIGHT_LARGE_P0,
)
from strip_io import StripData
from scurve_fit.fit_models import FALLING, RISING, SCurve, FitResult, fit_scurve

log = logging.getLogger(__name__)

# Left strip: charge falls off towards larger x
LEFT_CURVES = (
    SCurve("erf_left_small_curve", FALLING, *LEFT_SMALL_RANGE, LEFT_SMALL_P0),
    SCurve("erf_left_large_curve", FALLING, *LEFT_LARGE_RANGE, LEFT_LARGE_P0),
)

# Right strip: charge rises towards larger x
RIGHT_CURVES = (
    SCurve("erf_right_small_curve", RISING, *RIGHT_SMALL_RANGE, RIGHT_SMALL_P0),
    SCurve("erf_right_large_curve", RISING, *RIGHT_LARGE_RANGE, RIGHT_LARGE_P0),
)


@dataclass(frozen=True)
class StripFit:
    small: FitResult
    large: FitResult


def fit_strip(data: StripData,
              small_curve: SCurve,
              large_curve: SCurve) -> StripFit:
    """
    Two-stage fit of one strip profile.

    The small curve is fitted first with all four parameters free. The
    large curve is then fitted with its offset held at the small-curve
    offset, so both curves share one baseline.
    """
    small = fit_scurve(small_curve,
                       data.position, data.charge,
                       data.position_error, data.charge_error)
    large = fit_scurve(large_curve,
                       data.position, data.charge,
                       data.position_error, data.charge_error,
                       fixed={"offset": small.offset})

    log.debug("%s: center=%.3f, %s: center=%.3f (offset %.3f)",
              small_curve.name, small.center,
              large_curve.name, large.center, large.offset)
    return StripFit(small=small, large=large)
