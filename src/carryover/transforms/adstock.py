import operator
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

import numpy as np
from loguru import logger
from numpy.typing import ArrayLike, NDArray
from scipy import signal
from scipy.stats import weibull_min

from carryover.errors import InvalidArgumentError
from carryover.transforms._checks import as_scalar, as_series
from carryover.transforms.quantile import (
    integer_domain,
    normalize_min_max,
    quantile_translate,
)


class WeibullType(str, Enum):
    """Kernel family for the Weibull adstock."""

    CDF = "cdf"
    PDF = "pdf"


@dataclass(frozen=True, eq=False)
class AdstockResult:
    """Adstocked series and the per-period decay weights, both ``len(x)``."""

    decayed: NDArray[np.float64]
    kernel: NDArray[np.float64]

    def __iter__(self) -> Iterator[NDArray[np.float64]]:
        yield self.decayed
        yield self.kernel


def geometric_adstock(x: ArrayLike, theta: float) -> AdstockResult:
    """
    Fixed-rate decay: ``decayed[t] = x[t] + theta * decayed[t - 1]``.

    >>> geometric_adstock([100.0, 0.0, 0.0, 0.0], theta=0.7).decayed
    array([100. ,  70. ,  49. ,  34.3])
    """
    theta = as_scalar(theta, "theta")
    if not 0 <= theta < 1:
        raise InvalidArgumentError(f"theta must be in [0, 1), got {theta}")
    x_arr = as_series(x)

    kernel = np.cumprod(np.full(x_arr.size, theta))
    if theta == 0:
        return AdstockResult(decayed=x_arr, kernel=kernel)

    decayed = signal.lfilter([1.0], [1.0, -theta], x_arr)
    return AdstockResult(decayed=decayed, kernel=kernel)


def weibull_adstock(
    x: ArrayLike,
    shape: float,
    scale: float,
    window_length: Optional[int] = None,
    kind: Union[WeibullType, str] = WeibullType.CDF,
) -> AdstockResult:
    shape = as_scalar(shape, "shape")
    if shape < 0:
        raise InvalidArgumentError(f"shape must be >= 0, got {shape}")
    scale = as_scalar(scale, "scale")
    if not 0 <= scale <= 1:
        raise InvalidArgumentError(f"scale must be in [0, 1], got {scale}")
    kind = parse_weibull_type(kind)
    x_arr = as_series(x)

    n = x_arr.size
    window = n if window_length is None else _as_window_length(window_length)
    scale_translated = quantile_translate(integer_domain(window), scale, decimals=0)

    if shape == 0:
        kernel = np.zeros(n)
        return AdstockResult(decayed=np.zeros(n), kernel=kernel)

    periods = integer_domain(n)
    if kind is WeibullType.CDF:
        kernel = weibull_min.sf(periods - 1, c=shape, scale=scale_translated)
        kernel[0] = 1.0
    else:
        density = weibull_min.pdf(periods, c=shape, scale=scale_translated)
        if np.ptp(density) == 0:
            logger.debug(
                "Flat Weibull density (shape={}, scale={}), using impulse kernel",
                shape,
                scale_translated,
            )
        kernel = normalize_min_max(density)

    decayed = np.convolve(x_arr, kernel, mode="full")[:n]
    return AdstockResult(decayed=decayed, kernel=kernel)


def _as_window_length(window_length: int) -> int:
    try:
        window = operator.index(window_length)
    except TypeError as e:
        raise InvalidArgumentError(
            f"window_length must be an integer, got {window_length!r}"
        ) from e
    if window < 1:
        raise InvalidArgumentError(f"window_length must be >= 1, got {window}")
    return window


def parse_weibull_type(kind: Union[WeibullType, str]) -> WeibullType:
    if isinstance(kind, WeibullType):
        return kind
    if isinstance(kind, str):
        try:
            return WeibullType(kind.lower())
        except ValueError:
            pass
    raise InvalidArgumentError(f"kind must be 'cdf' or 'pdf', got {kind!r}")


def kernel_halflife(kernel: ArrayLike) -> int:
    """
    Period (1-based) at which the decay weight is closest to 0.5.

    Ties resolve to the earliest period.
    """
    weights = as_series(kernel, "kernel")
    return int(np.argmin(np.abs(weights - 0.5))) + 1


def half_life_to_theta(half_life: float) -> float:
    half_life = as_scalar(half_life, "half_life")
    if half_life <= 0:
        raise InvalidArgumentError(f"half_life must be > 0, got {half_life}")
    return 0.5 ** (1 / half_life)


def theta_to_half_life(theta: float) -> float:
    theta = as_scalar(theta, "theta")
    if not 0 < theta < 1:
        raise InvalidArgumentError(f"theta must be in (0, 1), got {theta}")
    return float(np.log(0.5) / np.log(theta))
