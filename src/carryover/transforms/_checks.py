import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from carryover.errors import InvalidArgumentError


def as_series(x: ArrayLike, name: str = "x") -> NDArray[np.float64]:
    """Coerce ``x`` to a non-empty, finite, 1-D float64 array (copied)."""
    try:
        arr = np.array(x, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} must be numeric, got {x!r}") from e

    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise InvalidArgumentError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidArgumentError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgumentError(f"{name} must only contain finite values")
    return arr


def check_non_negative(arr: NDArray[np.float64], name: str = "x") -> None:
    if np.any(arr < 0):
        raise InvalidArgumentError(f"{name} must be non-negative, got min {arr.min()}")


def as_scalar(value: float, name: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} must be a real number, got {value!r}") from e
    if not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be finite, got {value}")
    return value
