from typing import Optional, Union

import numpy as np
from loguru import logger
from numpy.typing import ArrayLike, NDArray
from scipy.special import expit

from carryover.errors import InvalidArgumentError
from carryover.transforms._checks import as_scalar, as_series, check_non_negative
from carryover.transforms.quantile import quantile_translate, range_domain


def hill_saturation(
    x: ArrayLike,
    alpha: float,
    gamma: float,
    x_marginal: Optional[ArrayLike] = None,
) -> Union[NDArray[np.float64], float]:
    """
    Hill saturation with ``gamma`` translated onto the range of ``x``.

        gamma_trans = round(quantile(linspace(min(x), max(x), 100), gamma), 4)
        y = v**alpha / (v**alpha + gamma_trans**alpha)

    ``x_marginal`` evaluates the curve fitted on ``x`` at other values; a
    scalar returns a float. ``v = 0`` with ``gamma_trans = 0`` gives 0.
    """
    alpha = as_scalar(alpha, "alpha")
    if alpha <= 0:
        raise InvalidArgumentError(f"alpha must be > 0, got {alpha}")
    gamma = as_scalar(gamma, "gamma")
    if not 0 <= gamma <= 1:
        raise InvalidArgumentError(f"gamma must be in [0, 1], got {gamma}")
    x_arr = as_series(x)
    check_non_negative(x_arr)

    scalar_out = False
    if x_marginal is None:
        v = x_arr
    else:
        scalar_out = np.ndim(x_marginal) == 0
        v = as_series(x_marginal, "x_marginal")
        check_non_negative(v, "x_marginal")

    if np.ptp(x_arr) == 0:
        logger.debug("Zero-range series, gamma translates to {}", x_arr[0])
    gamma_trans = quantile_translate(range_domain(x_arr), gamma, decimals=4)

    # Logistic of alpha * log(v / gamma_trans); the power form overflows
    # for large alpha.
    result = np.zeros_like(v)
    positive = v > 0
    if gamma_trans > 0:
        result[positive] = expit(
            alpha * (np.log(v[positive]) - np.log(gamma_trans))
        )
    else:
        result[positive] = 1.0

    if scalar_out:
        return float(result[0])
    return result


def michaelis_menten(
    x: ArrayLike,
    vmax: float,
    km: float,
    reverse: bool = False,
) -> NDArray[np.float64]:
    """Spend to exposure, ``vmax * x / (km + x)``; ``reverse`` inverts it."""
    vmax = as_scalar(vmax, "vmax")
    if vmax <= 0:
        raise InvalidArgumentError(f"vmax must be > 0, got {vmax}")
    km = as_scalar(km, "km")
    if km <= 0:
        raise InvalidArgumentError(f"km must be > 0, got {km}")
    x_arr = as_series(x)
    check_non_negative(x_arr)

    if not reverse:
        return vmax * x_arr / (km + x_arr)

    if np.any(x_arr >= vmax):
        raise InvalidArgumentError(
            f"exposure must be < vmax ({vmax}) to reverse, got max {x_arr.max()}"
        )
    return x_arr * km / (vmax - x_arr)
