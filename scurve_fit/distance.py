from dataclasses import dataclass

import numpy as np

from scurve_fit.fit_models import FitError, FitResult


@dataclass(frozen=True)
class InterStripDistance:
    distance: float
    error: float

    def __str__(self):
        return f"{self.distance:.2f} ± {self.error:.2f}"


def quadrature_sum(*errors: float) -> float:
    """Combined uncertainty of independent errors: sqrt(sum(e**2))."""
    return float(np.sqrt(np.sum(np.square(errors))))


def inter_strip_distance(left_large: FitResult,
                         right_large: FitResult) -> InterStripDistance:
    """
    Distance between the large-curve centers of the two strips.

    The center errors are treated as independent and added in quadrature.
    """
    values = (left_large.center, left_large.center_error,
              right_large.center, right_large.center_error)
    if not np.all(np.isfinite(values)):
        raise FitError("large-curve center or its error is not finite")

    return InterStripDistance(
        distance=right_large.center - left_large.center,
        error=quadrature_sum(right_large.center_error, left_large.center_error),
    )
