import logging
from dataclasses import dataclass

import numpy as np
from scipy.optimize import curve_fit, least_squares
from scipy.special import erf

from config import ABSOLUTE_SIGMA, MAXFEV

log = logging.getLogger(__name__)

PARAM_NAMES = ("center", "width", "amplitude", "offset")

FALLING = -1
RISING = 1


class FitError(RuntimeError):
    """Raised when an S-curve fit gives no usable parameters."""


def erf_model(x, center, width, amplitude, offset, orientation=RISING):
    """S-curve: amplitude * (erf(s * (x - center) / width) + 1) + offset."""
    return amplitude * (erf(orientation * (x - center) / width) + 1.0) + offset


def erf_model_slope(x, center, width, amplitude, orientation=RISING):
    """Derivative of erf_model with respect to x."""
    z = (x - center) / width
    return amplitude * orientation * 2.0 / (np.sqrt(np.pi) * width) * np.exp(-z ** 2)


@dataclass(frozen=True)
class SCurve:
    """An S-curve bound to its fit range and starting values."""

    name: str
    orientation: int
    x_min: float
    x_max: float
    p0: tuple

    def __call__(self, x, center, width, amplitude, offset):
        return erf_model(x, center, width, amplitude, offset, self.orientation)

    def slope(self, x, center, width, amplitude, offset=None):
        return erf_model_slope(x, center, width, amplitude, self.orientation)

    def in_range(self, x: np.ndarray) -> np.ndarray:
        return (x >= self.x_min) & (x <= self.x_max)


@dataclass(frozen=True)
class FitResult:
    curve: SCurve
    params: np.ndarray
    errors: np.ndarray
    chi2: float
    ndf: int
    n_points: int
    fixed: tuple = ()

    def __post_init__(self):
        for name in ("params", "errors"):
            arr = np.array(getattr(self, name), dtype=float)
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    def param(self, name: str) -> float:
        return float(self.params[PARAM_NAMES.index(name)])

    def error(self, name: str) -> float:
        return float(self.errors[PARAM_NAMES.index(name)])

    @property
    def center(self) -> float:
        return self.param("center")

    @property
    def center_error(self) -> float:
        return self.error("center")

    @property
    def offset(self) -> float:
        return self.param("offset")

    @property
    def reduced_chi2(self) -> float:
        return self.chi2 / self.ndf

    def evaluate(self, x):
        return self.curve(np.asarray(x, dtype=float), *self.params)


def fit_scurve(curve: SCurve,
               x: np.ndarray,
               y: np.ndarray,
               x_err: np.ndarray,
               y_err: np.ndarray,
               fixed: dict = None,
               p0=None,
               absolute_sigma: bool = ABSOLUTE_SIGMA) -> FitResult:
    """
    Weighted least-squares fit of an S-curve over its fit range.

    Only points with curve.x_min <= x <= curve.x_max take part. Each point
    is weighted by 1 / sigma_eff**2 with the effective variance
        sigma_eff**2 = y_err**2 + (f'(x) * x_err)**2
    so that both x and y uncertainties count. A curve_fit with the weights
    frozen at the starting values gives the first estimate; the chi-square
    with parameter-dependent sigma_eff is then minimized directly with
    least_squares.

    Parameters listed in `fixed` (name -> value) are held exactly and
    report a zero error.

    Raises FitError instead of returning NaN-filled results.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    x_err = np.asarray(x_err, dtype=float)
    y_err = np.asarray(y_err, dtype=float)
    if not (x.shape == y.shape == x_err.shape == y_err.shape):
        raise ValueError("x, y, x_err and y_err must have the same shape")

    fixed = dict(fixed) if fixed else {}
    unknown = set(fixed) - set(PARAM_NAMES)
    if unknown:
        raise ValueError(f"unknown parameter(s): {sorted(unknown)}")

    start = np.array(curve.p0 if p0 is None else p0, dtype=float)
    if start.size != len(PARAM_NAMES):
        raise ValueError(f"expected {len(PARAM_NAMES)} starting values, got {start.size}")

    free_idx = [i for i, n in enumerate(PARAM_NAMES) if n not in fixed]

    mask = curve.in_range(x) & np.isfinite(y)
    xf, yf = x[mask], y[mask]
    exf, eyf = x_err[mask], y_err[mask]
    n = int(xf.size)
    ndf = n - len(free_idx)

    if ndf < 1:
        raise FitError(
            f"{curve.name}: {n} points in [{curve.x_min:g}, {curve.x_max:g}] "
            f"for {len(free_idx)} free parameters"
        )

    def full_params(free_vals):
        p = start.copy()
        for name, value in fixed.items():
            p[PARAM_NAMES.index(name)] = value
        p[free_idx] = free_vals
        return p

    def func(xv, *free_vals):
        return curve(xv, *full_params(free_vals))

    def effective_sigma(p):
        sigma = np.sqrt(eyf ** 2 + (curve.slope(xf, *p) * exf) ** 2)
        if not np.all(sigma > 0):
            raise FitError(f"{curve.name}: non-positive or undefined uncertainty on a fitted point")
        return sigma

    def residuals(free_vals):
        p = full_params(free_vals)
        return (yf - curve(xf, *p)) / effective_sigma(p)

    try:
        seed, _ = curve_fit(func, xf, yf,
                            p0=start[free_idx],
                            sigma=effective_sigma(start),
                            maxfev=MAXFEV)
        res = least_squares(residuals, seed, method="lm", max_nfev=MAXFEV)
    except FitError:
        raise
    except (RuntimeError, ValueError) as exc:
        raise FitError(f"{curve.name}: fit did not converge ({exc})") from exc

    if not res.success:
        raise FitError(f"{curve.name}: fit did not converge ({res.message})")

    params = full_params(res.x)
    chi2 = float(np.sum(res.fun ** 2))
    log.debug("%s: %d evaluations, params=%s", curve.name, res.nfev, params)

    # Covariance from the Jacobian at the minimum, as curve_fit does it
    _, s, VT = np.linalg.svd(res.jac, full_matrices=False)
    keep = s > np.finfo(float).eps * max(res.jac.shape) * s[0]
    pcov = (VT[keep].T / s[keep] ** 2) @ VT[keep]
    if not absolute_sigma:
        pcov = pcov * chi2 / ndf

    errors = np.zeros(len(PARAM_NAMES))
    errors[free_idx] = np.sqrt(np.diag(pcov))
    if not (np.all(np.isfinite(params)) and np.all(np.isfinite(errors))
            and np.isfinite(chi2)):
        raise FitError(f"{curve.name}: covariance could not be estimated")

    result = FitResult(
        curve=curve,
        params=params,
        errors=errors,
        chi2=chi2,
        ndf=ndf,
        n_points=n,
        fixed=tuple(name for name in PARAM_NAMES if name in fixed),
    )
    log.debug("%s: chi2/ndf = %.3g/%d", curve.name, chi2, ndf)
    return result
