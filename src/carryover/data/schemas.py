"""Pydantic and Pandera schemas for transform configuration and spend data."""

from pathlib import Path
from typing import Annotated, Literal, Optional, Union

import pandas as pd
import pandera as pa
from loguru import logger
from pydantic import BaseModel, Field, field_validator, model_validator

from carryover.transforms.adstock import WeibullType

MEDIA_CATEGORY = Literal["tv", "ooh", "print", "radio", "digital"]

# Rule-of-thumb geometric decay ranges per media genre.
THETA_RANGES: dict[str, tuple[float, float]] = {
    "tv": (0.3, 0.8),
    "ooh": (0.1, 0.4),
    "print": (0.1, 0.4),
    "radio": (0.1, 0.4),
    "digital": (0.0, 0.3),
}


class GeometricAdstockParams(BaseModel):
    """Fixed-rate decay. ``theta`` is the share carried into the next period."""

    type: Literal["geometric"] = "geometric"
    theta: float = Field(ge=0, lt=1, description="Decay rate")


class WeibullAdstockParams(BaseModel):
    """
    Flexible decay from a Weibull kernel.

    ``scale`` is a quantile fraction of the modelling window, not a number
    of periods.
    """

    type: Literal["weibull"] = "weibull"
    shape: float = Field(ge=0, description="Weibull shape; 0 disables carryover")
    scale: float = Field(ge=0, le=1, description="Quantile fraction of the window")
    kind: WeibullType = WeibullType.CDF


AdstockParams = Annotated[
    Union[GeometricAdstockParams, WeibullAdstockParams],
    Field(discriminator="type"),
]


class HillSaturationParams(BaseModel):
    """Hill curve. ``gamma`` is the inflexion as a fraction of the spend range."""

    alpha: float = Field(gt=0, description="Shape: larger is more S-shaped")
    gamma: float = Field(ge=0, le=1, description="Inflexion point (quantile fraction)")


class ChannelTransform(BaseModel):
    """
    Transforms for a single spend column.

    Example
    -------
    >>> ChannelTransform(
    ...     column="tv_spend",
    ...     category="tv",
    ...     adstock={"type": "geometric", "theta": 0.5},
    ...     saturation={"alpha": 2.0, "gamma": 0.5},
    ... )
    """

    column: str = Field(min_length=1)
    category: Optional[MEDIA_CATEGORY] = None
    adstock: Optional[AdstockParams] = None
    saturation: Optional[HillSaturationParams] = None

    @model_validator(mode="after")
    def check_has_transform(self) -> "ChannelTransform":
        """A channel with neither adstock nor saturation is a config mistake."""
        if self.adstock is None and self.saturation is None:
            raise ValueError(f"channel '{self.column}' has no adstock or saturation")
        return self

    @model_validator(mode="after")
    def check_theta_in_genre_range(self) -> "ChannelTransform":
        """Warn if a geometric theta sits outside its media genre's usual range."""
        if self.category is None or not isinstance(
            self.adstock, GeometricAdstockParams
        ):
            return self
        lo, hi = THETA_RANGES[self.category]
        if not lo <= self.adstock.theta <= hi:
            logger.warning(
                "theta={} for '{}' is outside the usual {} range [{}, {}]",
                self.adstock.theta,
                self.column,
                self.category,
                lo,
                hi,
            )
        return self


class TransformConfig(BaseModel):
    """
    Full transform setup for a spend DataFrame.

    ``window_length`` feeds the Weibull scale lookup; when omitted the
    length of the frame is used.
    """

    channels: list[ChannelTransform] = Field(min_length=1)
    window_length: Optional[int] = Field(default=None, ge=1)

    @field_validator("channels")
    @classmethod
    def columns_must_be_unique(
        cls, v: list[ChannelTransform]
    ) -> list[ChannelTransform]:
        seen: set[str] = set()
        for channel in v:
            if channel.column in seen:
                raise ValueError(f"column '{channel.column}' is configured twice")
            seen.add(channel.column)
        return v

    @property
    def columns(self) -> list[str]:
        return [c.column for c in self.channels]


def load_transform_config(path: Union[str, Path]) -> TransformConfig:
    """
    Load a ``TransformConfig`` from a JSON file.

    Raises
    ------
    pydantic.ValidationError
        If the file content does not describe a valid config.
    """
    text = Path(path).read_text(encoding="utf-8")
    return TransformConfig.model_validate_json(text)


def build_spend_schema(columns: list[str]) -> pa.DataFrameSchema:
    """Pandera schema requiring non-negative, non-null float spend columns."""
    return pa.DataFrameSchema(
        {
            col: pa.Column(
                float,
                checks=pa.Check.ge(0),
                nullable=False,
                coerce=True,
                description="Spend per period",
            )
            for col in columns
        },
        name="SpendData",
        strict=False,
    )


def validate_spend_frame(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """
    Validate the spend columns of ``df``.

    Returns
    -------
    pd.DataFrame
        Validated (and potentially coerced) DataFrame.

    Raises
    ------
    pandera.errors.SchemaError
        If a column is missing, negative, null or not numeric.
    """
    return build_spend_schema(columns).validate(df)
