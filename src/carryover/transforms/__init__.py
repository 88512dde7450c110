"""
Media transformation functions for marketing mix models.

Spend doesn't translate directly into effect. Two phenomena are modeled:

1. **Adstock (Carryover)**: a spot seen today still drives response next
   week. The effect decays over the following periods.

   - Geometric: fixed decay rate ``theta``
   - Weibull CDF: decay rate that changes over time, no lag
   - Weibull PDF: flexible decay that can peak after the spend (lag)

2. **Saturation (Diminishing Returns)**: the first 10K buys more response
   than the tenth 10K.

   - Hill: ``alpha`` sets C- vs S-shape, ``gamma`` the inflexion point
     as a fraction of the spend range

Transforms are applied in order:

    raw_spend → adstock → saturation → model

All functions are pure: they take numeric arrays and scalars, validate
them up front and return new arrays.
"""

from carryover.transforms.adstock import (
    AdstockResult,
    WeibullType,
    geometric_adstock,
    weibull_adstock,
    kernel_halflife,
    half_life_to_theta,
    theta_to_half_life,
)
from carryover.transforms.saturation import (
    hill_saturation,
    michaelis_menten,
)
from carryover.transforms.quantile import (
    quantile_translate,
    normalize_min_max,
)
from carryover.transforms.curves import (
    adstock_curves,
    saturation_curves,
    halflife_table,
)

__all__ = [
    # Adstock
    "AdstockResult",
    "WeibullType",
    "geometric_adstock",
    "weibull_adstock",
    "kernel_halflife",
    "half_life_to_theta",
    "theta_to_half_life",
    # Saturation
    "hill_saturation",
    "michaelis_menten",
    # Shared
    "quantile_translate",
    "normalize_min_max",
    # Curves
    "adstock_curves",
    "saturation_curves",
    "halflife_table",
]
