"""Pydantic schemas for the REST API."""

from profilecut.web.schemas.requests import (
    ConsumptionRequest,
    ConvertRequest,
    CuttingPlanRequest,
    JobValidateRequest,
)
from profilecut.web.schemas.responses import (
    ConsumptionResponseSchema,
    ConversionResponseSchema,
    ErrorResponseSchema,
    PipePurchaseSchema,
    ValidationResultSchema,
)

__all__ = [
    "ConsumptionRequest",
    "ConsumptionResponseSchema",
    "ConversionResponseSchema",
    "ConvertRequest",
    "CuttingPlanRequest",
    "ErrorResponseSchema",
    "JobValidateRequest",
    "PipePurchaseSchema",
    "ValidationResultSchema",
]
