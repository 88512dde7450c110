"""
Carryover: adstock and saturation transforms for marketing mix models.

Pure, vectorized functions for the two transforms every MMM applies to
media spend before modeling:

- geometric and Weibull (CDF/PDF) adstock for carryover over time
- Hill saturation for diminishing returns

The functions are stateless and safe to call concurrently, e.g. from a
hyperparameter search evaluating many parameter sets.
"""

from loguru import logger

from carryover.errors import CarryoverError, InvalidArgumentError
from carryover.transforms import (
    AdstockResult,
    WeibullType,
    geometric_adstock,
    weibull_adstock,
    hill_saturation,
    michaelis_menten,
    quantile_translate,
)
from carryover.pipeline import apply_transforms

__version__ = "0.1.0"

logger.disable("carryover")

__all__ = [
    "CarryoverError",
    "InvalidArgumentError",
    "AdstockResult",
    "WeibullType",
    "geometric_adstock",
    "weibull_adstock",
    "hill_saturation",
    "michaelis_menten",
    "quantile_translate",
    "apply_transforms",
]
