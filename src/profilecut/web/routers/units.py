"""Unit conversion endpoint."""

from fastapi import APIRouter

from profilecut.domain import convert_unit
from profilecut.web.schemas.requests import ConvertRequest
from profilecut.web.schemas.responses import ConversionResponseSchema

router = APIRouter(prefix="/units", tags=["units"])


@router.post("/convert", response_model=ConversionResponseSchema)
def convert(request: ConvertRequest) -> ConversionResponseSchema:
    """Convert a value between linear, area or count units.

    Conversion failures are reported in ``error`` with a 200 status.
    """
    outcome = convert_unit(request.value, request.from_unit, request.to_unit)
    return ConversionResponseSchema(result=outcome.result, error=outcome.error)
