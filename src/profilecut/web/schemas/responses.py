"""Pydantic response schemas for the REST API.

Consumption responses are serialized with the camelCase field names the
estimation workflow consumes.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PipePurchaseSchema(BaseModel):
    """Pipes consumed for one standard length."""

    model_config = ConfigDict(populate_by_name=True)

    length: str = Field(..., description="Standard length as catalogued")
    unit: str = Field(..., description="Unit of the standard length")
    length_in_inches: float = Field(..., alias="lengthInInches")
    count: int = Field(..., description="Number of pipes consumed")


class ConsumptionResponseSchema(BaseModel):
    """Response for a consumption estimate."""

    model_config = ConfigDict(populate_by_name=True)

    total_pipes_from_stock: int = Field(..., alias="totalPipesFromStock")
    pipes_taken_per_standard_length: list[PipePurchaseSchema] = Field(
        default_factory=list, alias="pipesTakenPerStandardLength"
    )
    total_scrap_generated_ft: float = Field(..., alias="totalScrapGenerated_ft")
    final_usable_offcuts_ft: list[float] = Field(
        default_factory=list, alias="finalUsableOffcuts_ft"
    )
    warnings: list[str] = Field(
        default_factory=list, description="Skipped catalogue entries and similar"
    )


class ConversionResponseSchema(BaseModel):
    """Response for a unit conversion; exactly one field is set."""

    result: float | None = None
    error: str | None = None


class ValidationResultSchema(BaseModel):
    """Response for job validation."""

    is_valid: bool = Field(..., description="Whether the job can be run")
    errors: list[dict[str, Any]] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
