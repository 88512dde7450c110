"""
Reference curve grids for adstock and saturation parameters.

These tables show how decay and response change across common parameter
choices, with half-lives where they apply. They hold the data only; render
them however you like (the CLI prints them as tables).
"""

from collections.abc import Sequence
from typing import Optional

import numpy as np
import pandas as pd

from carryover.errors import InvalidArgumentError
from carryover.transforms.adstock import (
    kernel_halflife,
    parse_weibull_type,
    weibull_adstock,
)

DEFAULT_THETAS = (0.01, 0.05, 0.1, 0.2, 0.5, 0.6, 0.7, 0.8, 0.9)
DEFAULT_SHAPES = (0.5, 1.0, 2.0, 9.0)
DEFAULT_SCALES = (0.01, 0.05, 0.1, 0.15, 0.2, 0.5)
DEFAULT_ALPHAS = (0.1, 0.5, 1.0, 2.0, 3.0)
DEFAULT_GAMMAS = (0.1, 0.3, 0.5, 0.7, 0.9)


def adstock_curves(
    n_periods: int = 100,
    thetas: Sequence[float] = DEFAULT_THETAS,
    shapes: Sequence[float] = DEFAULT_SHAPES,
    scales: Sequence[float] = DEFAULT_SCALES,
    kinds: Sequence[str] = ("cdf", "pdf"),
) -> pd.DataFrame:
    """
    Decay curves for geometric and Weibull adstock over a parameter grid.

    Geometric curves start at full effect, ``1, theta, theta**2, ...``.
    Weibull curves are the kernels ``weibull_adstock`` builds for a series
    of ``n_periods`` periods.

    Returns
    -------
    pd.DataFrame
        Long format with columns ``family``, ``kind``, ``theta``,
        ``shape``, ``scale``, ``period``, ``decay`` and ``halflife``
        (period closest to 50% remaining effect).
    """
    if n_periods < 2:
        raise InvalidArgumentError(f"n_periods must be >= 2, got {n_periods}")

    periods = np.arange(1, n_periods + 1)
    frames: list[pd.DataFrame] = []

    for theta in thetas:
        decay = float(theta) ** np.arange(n_periods, dtype=np.float64)
        frames.append(
            _curve_frame(periods, decay, family="geometric", kind=None, theta=theta)
        )

    for kind in kinds:
        kind = parse_weibull_type(kind)
        for shape in shapes:
            for scale in scales:
                result = weibull_adstock(periods, shape=shape, scale=scale, kind=kind)
                frames.append(
                    _curve_frame(
                        periods,
                        result.kernel,
                        family="weibull",
                        kind=kind.value,
                        shape=shape,
                        scale=scale,
                    )
                )

    return pd.concat(frames, ignore_index=True)


def _curve_frame(
    periods: np.ndarray,
    decay: np.ndarray,
    family: str,
    kind: Optional[str],
    theta: float = np.nan,
    shape: float = np.nan,
    scale: float = np.nan,
) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "family": family,
            "kind": kind,
            "theta": float(theta),
            "shape": float(shape),
            "scale": float(scale),
            "period": periods,
            "decay": decay,
            "halflife": kernel_halflife(decay),
        }
    )


def saturation_curves(
    n_points: int = 100,
    alphas: Sequence[float] = DEFAULT_ALPHAS,
    gammas: Sequence[float] = DEFAULT_GAMMAS,
) -> pd.DataFrame:
    """
    Hill response curves on ``x = 1..n_points``.

    Two sweeps: ``alpha`` varies with the half-saturation point fixed at
    ``0.5 * n_points``, then ``gamma`` varies with ``alpha = 2`` and the
    half-saturation point at ``gamma * n_points``.

    Returns
    -------
    pd.DataFrame
        Columns ``varying`` ("alpha" or "gamma"), ``alpha``, ``gamma``,
        ``x`` and ``response``.
    """
    if n_points < 1:
        raise InvalidArgumentError(f"n_points must be >= 1, got {n_points}")

    x = np.arange(1, n_points + 1, dtype=np.float64)
    frames = []

    for alpha in alphas:
        frames.append(
            pd.DataFrame(
                {
                    "varying": "alpha",
                    "alpha": float(alpha),
                    "gamma": 0.5,
                    "x": x,
                    "response": _hill(x, alpha, 0.5 * n_points),
                }
            )
        )

    for gamma in gammas:
        frames.append(
            pd.DataFrame(
                {
                    "varying": "gamma",
                    "alpha": 2.0,
                    "gamma": float(gamma),
                    "x": x,
                    "response": _hill(x, 2.0, gamma * n_points),
                }
            )
        )

    return pd.concat(frames, ignore_index=True)


def _hill(x: np.ndarray, alpha: float, half_point: float) -> np.ndarray:
    x_a = x**alpha
    return x_a / (x_a + half_point**alpha)


def halflife_table(curves: pd.DataFrame) -> pd.DataFrame:
    """One row per curve in an ``adstock_curves`` frame, with its half-life."""
    keys = ["family", "kind", "theta", "shape", "scale"]
    return (
        curves.groupby(keys, dropna=False, sort=False)["halflife"]
        .first()
        .reset_index()
    )
