"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from profilecut.application.config import CuttingConfigSchema, PlanCutConfig
from profilecut.domain import LinearUnit


class ConsumptionRequest(BaseModel):
    """Request for a pipe consumption estimate.

    ``material`` is the material document as stored, e.g.
    ``{"_id": ..., "companyId": ..., "category": "Profile",
    "standardLengths": [{"length": {"$numberDecimal": "12"}, "unit": "ft"}]}``.
    """

    material: dict[str, Any] = Field(..., description="Material document")
    company_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("company_id", "companyId"),
        description="Company making the request",
    )
    required_cut_lengths_ft: list[Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("required_cut_lengths_ft", "requiredCutLengthsFt"),
        description="Required cut lengths in feet",
    )
    cutting: CuttingConfigSchema | None = Field(
        default=None, description="Optional kerf/threshold overrides"
    )


class CuttingPlanRequest(BaseModel):
    """Request for a stock-limited cutting plan."""

    material: dict[str, Any] = Field(
        ..., description="Material document including stockByLength"
    )
    company_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("company_id", "companyId"),
    )
    cuts: list[PlanCutConfig] = Field(default_factory=list)
    usage_unit: LinearUnit = Field(
        default=LinearUnit.INCHES,
        validation_alias=AliasChoices("usage_unit", "usageUnit"),
    )
    gauge: str | None = Field(default=None, description="Gauge for pipe weights")
    cutting: CuttingConfigSchema | None = None


class ConvertRequest(BaseModel):
    """Request for a unit conversion."""

    value: Any = Field(..., description="Value to convert")
    from_unit: str = Field(..., validation_alias=AliasChoices("from_unit", "fromUnit"))
    to_unit: str = Field(..., validation_alias=AliasChoices("to_unit", "toUnit"))


class JobValidateRequest(BaseModel):
    """Request for validating a job configuration."""

    config: dict[str, Any] = Field(..., description="Full job configuration JSON")
