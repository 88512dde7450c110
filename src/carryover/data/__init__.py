"""Configuration models and spend data schemas."""

from carryover.data.schemas import (
    GeometricAdstockParams,
    WeibullAdstockParams,
    HillSaturationParams,
    ChannelTransform,
    TransformConfig,
    THETA_RANGES,
    load_transform_config,
    build_spend_schema,
    validate_spend_frame,
)

__all__ = [
    "GeometricAdstockParams",
    "WeibullAdstockParams",
    "HillSaturationParams",
    "ChannelTransform",
    "TransformConfig",
    "THETA_RANGES",
    "load_transform_config",
    "build_spend_schema",
    "validate_spend_frame",
]
