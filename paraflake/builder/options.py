"""Snowflake construction options.

Validated with pydantic, frozen once built.  Keys may be given either as
field names (``arm_length``) or in the camelCase form used by drawing
front-ends (``armLength``).  Unrecognised keys are accepted and kept in
``model_extra`` but have no effect on the geometry.

Units are arbitrary drawing units (millimetres when exported as G-code).

Usage:
    opts = SnowflakeOptions.from_mapping({"numArms": 8, "armLength": 60})
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from paraflake.builder.random_source import RandomSource


class ConfigError(ValueError):
    """Raised when snowflake or machine configuration is invalid."""

    pass


# Inclusive range for the number of spikes when the caller leaves it unset
NUM_SPIKES_RANGE = (2, 5)


class SnowflakeOptions(BaseModel):
    """Parameters of one snowflake.

    ``num_spikes`` may be ``None``; :meth:`resolve` then draws it from a
    random source.  Everything else has a fixed default.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
        allow_inf_nan=False,
    )

    num_arms: int = Field(
        6, alias="numArms", ge=1, strict=True, description="Rotated copies of the arm"
    )
    arm_length: float = Field(100.0, alias="armLength", gt=0.0, description="Length scale of each arm")
    arm_thickness: float = Field(3.0, alias="armThickness", gt=0.0, description="Arm width near the centre")
    num_spikes: Optional[int] = Field(
        None, alias="numSpikes", ge=1, strict=True, description="Spikes per half-arm"
    )
    spacer: float = Field(0.5, ge=0.0, description="Offset between consecutive spike segments")
    spike_angle_deg: float = Field(
        31.0, alias="spikeAngle", gt=0.0, lt=90.0, description="Spike angle from the arm axis (deg)"
    )

    @model_validator(mode="after")
    def validate_spike_range(self) -> "SnowflakeOptions":
        """Spike lengths are drawn from [arm_thickness, arm_length / 2]."""
        low, high = self.spike_length_range
        if low > high:
            raise ValueError(
                f"arm_thickness={self.arm_thickness:g} leaves no integer spike length "
                f"up to arm_length/2={self.arm_length / 2:g}"
            )
        return self

    # -- Derived ------------------------------------------------------------

    @property
    def spike_length_range(self) -> tuple[int, int]:
        """Inclusive integer bounds for a spike length."""
        return math.ceil(self.arm_thickness), math.floor(self.arm_length / 2)

    @property
    def ignored_keys(self) -> list[str]:
        return sorted(self.model_extra or {})

    # -- Construction -------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None = None, **overrides: Any) -> "SnowflakeOptions":
        """Validate *data* merged with *overrides*.

        Raises
        ------
        ConfigError
            If any option is out of range or of the wrong type.
        """
        merged = {cls._field_name(k): v for k, v in {**(data or {}), **overrides}.items()}
        try:
            return cls.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid snowflake options: {exc}") from exc

    @classmethod
    def _field_name(cls, key: str) -> str:
        """Map a camelCase alias to its field name; other keys pass through."""
        for name, info in cls.model_fields.items():
            if key == info.alias:
                return name
        return key

    def resolve(self, rng: RandomSource) -> "SnowflakeOptions":
        """Return options with ``num_spikes`` filled in from *rng* if unset."""
        if self.num_spikes is not None:
            return self
        return self.model_copy(update={"num_spikes": rng.randint(*NUM_SPIKES_RANGE)})

    def with_overrides(self, **overrides: Any) -> "SnowflakeOptions":
        """Re-validate with some fields replaced; ``None`` values are skipped."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return SnowflakeOptions.from_mapping(
            self.model_dump(by_alias=False, exclude_none=True), **changes
        )
