"""
Quantile translation shared by the Weibull and Hill transforms.

Both transforms take a parameter on a normalized [0, 1] scale (Weibull
``scale``, Hill ``gamma``) and re-express it as an absolute value on a
synthetic uniform grid built from the series itself:

- Weibull: the integer periods ``1..window_length``
- Hill: 100 evenly spaced points between ``min(x)`` and ``max(x)``

Quantiles use linear interpolation between order statistics (the
"type 7" definition, numpy's default ``method="linear"``).
"""

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from carryover.errors import InvalidArgumentError
from carryover.transforms._checks import as_scalar, as_series

HILL_GRID_POINTS = 100


def quantile_translate(
    domain: ArrayLike,
    q: float,
    decimals: Optional[int] = None,
) -> float:
    """
    Return the ``q``-quantile of ``domain``, optionally rounded.

    Parameters
    ----------
    domain : array-like
        Values to take the quantile of. Order does not matter.
    q : float
        Quantile fraction in [0, 1].
    decimals : int, optional
        Round the result to this many decimals (half to even).

    Returns
    -------
    float
        The translated value, on the scale of ``domain``.

    Raises
    ------
    InvalidArgumentError
        If ``q`` is outside [0, 1] or ``domain`` is empty or non-finite.

    Example
    -------
    >>> quantile_translate(np.arange(1, 101), 0.1, decimals=0)
    11.0
    """
    q = as_scalar(q, "q")
    if not 0 <= q <= 1:
        raise InvalidArgumentError(f"q must be in [0, 1], got {q}")
    values = as_series(domain, "domain")

    result = float(np.quantile(values, q))
    if decimals is not None:
        result = float(np.round(result, decimals))
    return result


def integer_domain(length: int) -> NDArray[np.float64]:
    """Periods ``1..length`` as floats."""
    if length < 1:
        raise InvalidArgumentError(f"length must be >= 1, got {length}")
    return np.arange(1, length + 1, dtype=np.float64)


def range_domain(x: ArrayLike, num: int = HILL_GRID_POINTS) -> NDArray[np.float64]:
    """``num`` evenly spaced points spanning ``[min(x), max(x)]``."""
    values = as_series(x)
    return np.linspace(values.min(), values.max(), num=num)


def normalize_min_max(values: ArrayLike) -> NDArray[np.float64]:
    """
    Rescale ``values`` to [0, 1] so the minimum maps to 0 and the maximum to 1.

    A flat input has no range to divide by; it maps to the unit impulse
    ``[1, 0, ..., 0]`` instead.
    """
    arr = as_series(values, "values")
    lo, hi = arr.min(), arr.max()
    if hi - lo == 0:
        impulse = np.zeros_like(arr)
        impulse[0] = 1.0
        return impulse
    return (arr - lo) / (hi - lo)
