import numpy as np

from scurve_fit.fit_models import erf_model, FALLING


def write_strip_file(path, x, ex, y, ey, header="pos,pos_err,charge,charge_err"):
    lines = [header]
    lines += [",".join(repr(float(v)) for v in row) for row in zip(x, ex, y, ey)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def strip_profile(x, small, large, orientation, split):
    """
    Noiseless strip profile: the large S-curve on one side of `split`,
    the small S-curve on the other.
    """
    y_small = erf_model(x, *small, orientation=orientation)
    y_large = erf_model(x, *large, orientation=orientation)
    if orientation == FALLING:
        return np.where(x <= split, y_large, y_small)
    return np.where(x >= split, y_large, y_small)
