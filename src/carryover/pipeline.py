"""
Apply configured adstock and saturation transforms to a spend DataFrame.

For every configured channel column the pipeline runs

    spend → adstock (optional) → Hill saturation (optional)

and appends ``<column>_adstocked`` and ``<column>_saturated`` to a copy of
the frame. The input frame is never modified.
"""

from typing import Optional

import numpy as np
import pandas as pd
from loguru import logger
from numpy.typing import NDArray

from carryover.data.schemas import (
    ChannelTransform,
    GeometricAdstockParams,
    TransformConfig,
    validate_spend_frame,
)
from carryover.transforms.adstock import geometric_adstock, weibull_adstock
from carryover.transforms.saturation import hill_saturation


def transform_channel(
    x: NDArray[np.floating],
    channel: ChannelTransform,
    window_length: Optional[int] = None,
) -> tuple[NDArray[np.floating], Optional[NDArray[np.floating]]]:
    """
    Run one channel's transforms on a spend series.

    Returns
    -------
    tuple
        ``(adstocked, saturated)``. ``adstocked`` is the input itself when
        no adstock is configured; ``saturated`` is None when no saturation
        is configured.
    """
    params = channel.adstock
    if params is None:
        adstocked = np.asarray(x, dtype=np.float64)
    elif isinstance(params, GeometricAdstockParams):
        adstocked = geometric_adstock(x, theta=params.theta).decayed
    else:
        adstocked = weibull_adstock(
            x,
            shape=params.shape,
            scale=params.scale,
            window_length=window_length,
            kind=params.kind,
        ).decayed

    saturated = None
    if channel.saturation is not None:
        saturated = hill_saturation(
            adstocked,
            alpha=channel.saturation.alpha,
            gamma=channel.saturation.gamma,
        )
    return adstocked, saturated


def apply_transforms(df: pd.DataFrame, config: TransformConfig) -> pd.DataFrame:
    """
    Apply ``config`` to every configured column of ``df``.

    Parameters
    ----------
    df : pd.DataFrame
        One row per period, in time order. Must contain every configured
        column with non-negative spend.
    config : TransformConfig
        Per-channel transform parameters.

    Returns
    -------
    pd.DataFrame
        Copy of ``df`` with the transformed columns appended.

    Raises
    ------
    pandera.errors.SchemaError
        If a configured column is missing or holds invalid spend.
    carryover.errors.InvalidArgumentError
        If a transform rejects the series (e.g. an empty frame).
    """
    validated = validate_spend_frame(df, config.columns)
    out = validated.copy()

    for channel in config.channels:
        x = validated[channel.column].to_numpy(dtype=np.float64)
        logger.debug(
            "Transforming '{}' (adstock={}, saturation={})",
            channel.column,
            None if channel.adstock is None else channel.adstock.type,
            channel.saturation is not None,
        )
        adstocked, saturated = transform_channel(x, channel, config.window_length)

        if channel.adstock is not None:
            out[f"{channel.column}_adstocked"] = adstocked
        if saturated is not None:
            out[f"{channel.column}_saturated"] = saturated

    logger.info(
        "Transformed {} channel(s) over {} periods", len(config.channels), len(df)
    )
    return out
