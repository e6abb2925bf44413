"""Pydantic models for profile cutting job files.

A job file describes one profile material, the company requesting the work,
and the cuts needed, either as plain lengths in feet (consumption estimate)
or as identified cuts in a usage unit (stock-limited cutting plan).

Length values inside the material catalogue are kept as raw JSON values. They
are validated by the optimizer, which skips a malformed standard length with
a warning instead of rejecting the whole job.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from profilecut.domain.value_objects import PROFILE_CATEGORY, LinearUnit

# Supported schema versions for job files
# Version 1.0: Material catalogue, feet cut list and cutting parameters
# Version 1.1: Stock-limited cutting plans with gauge weights
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})


class StandardLengthConfig(BaseModel):
    """A standard stock length from the material catalogue."""

    model_config = ConfigDict(extra="forbid")

    length: Any = Field(..., description="Length as number, string or $numberDecimal")
    unit: str = Field(..., min_length=1, description="Linear unit of the length")


class StockConfig(BaseModel):
    """Pipes on hand for one standard length."""

    model_config = ConfigDict(extra="forbid")

    length: Any = Field(..., description="Length as number, string or $numberDecimal")
    unit: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0, description="Number of pipes in stock")


class GaugeWeightConfig(BaseModel):
    """Weight per unit length for a gauge."""

    model_config = ConfigDict(extra="forbid")

    gauge: str = Field(..., min_length=1)
    weight_per_unit_length: float = Field(..., gt=0)
    unit_length: LinearUnit = Field(default=LinearUnit.FT)


class MaterialConfig(BaseModel):
    """Profile material with its catalogue data.

    Attributes:
        id: Material identifier.
        name: Display name.
        category: Material category; only "Profile" can be optimized.
        company_id: Company that owns the material.
        standard_lengths: Purchasable pipe lengths.
        stock_by_length: Pipes on hand, used by cutting plans.
        gauge_weights: Weight table used by cutting plans.
        weight_unit: Unit of the weights in ``gauge_weights``.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    category: str = PROFILE_CATEGORY
    company_id: str = Field(..., min_length=1)
    standard_lengths: list[StandardLengthConfig] = Field(default_factory=list)
    stock_by_length: list[StockConfig] = Field(default_factory=list)
    gauge_weights: list[GaugeWeightConfig] = Field(default_factory=list)
    weight_unit: str | None = None


class PlanCutConfig(BaseModel):
    """An identified cut for a cutting plan."""

    model_config = ConfigDict(extra="forbid")

    length: Any = Field(..., description="Cut length in the plan's usage unit")
    identifier: str | None = None


class PlanConfig(BaseModel):
    """Stock-limited cutting plan request."""

    model_config = ConfigDict(extra="forbid")

    usage_unit: LinearUnit = Field(default=LinearUnit.INCHES)
    gauge: str | None = None
    cuts: list[PlanCutConfig] = Field(default_factory=list)


class CuttingConfigSchema(BaseModel):
    """Numeric cutting parameters."""

    model_config = ConfigDict(extra="forbid")

    kerf_in: float = Field(default=0.125, ge=0, le=0.5, description="Blade kerf in inches")
    scrap_threshold_ft: float = Field(
        default=3.0, ge=0, description="Minimum leftover kept as a usable offcut"
    )
    epsilon_in: float = Field(
        default=0.001, gt=0, le=0.1, description="Comparison tolerance in inches"
    )


class JobConfiguration(BaseModel):
    """Root model of a profile cutting job file."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0")
    company_id: str = Field(..., min_length=1)
    material: MaterialConfig
    required_cuts_ft: list[Any] = Field(default_factory=list)
    plan: PlanConfig | None = None
    cutting: CuttingConfigSchema | None = None

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported schema version '{v}'. "
                f"Supported: {', '.join(sorted(SUPPORTED_VERSIONS))}"
            )
        return v
