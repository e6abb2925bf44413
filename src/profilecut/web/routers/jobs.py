"""Job validation endpoint."""

from fastapi import APIRouter

from profilecut.application import OptimizeConsumptionCommand
from profilecut.application.config import load_config_from_dict
from profilecut.web.dependencies import DiagnosticsDep
from profilecut.web.schemas.requests import JobValidateRequest
from profilecut.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/validate", response_model=ValidationResultSchema)
def validate_job(
    request: JobValidateRequest,
    diagnostics: DiagnosticsDep,
) -> ValidationResultSchema:
    """Validate a job configuration by running its consumption estimate.

    Schema errors raise ConfigError (422). Domain errors such as an
    infeasible cut list are reported in ``errors``.
    """
    job = load_config_from_dict(request.config)
    output = OptimizeConsumptionCommand(diagnostics=diagnostics).execute(job)
    return ValidationResultSchema(
        is_valid=output.is_valid,
        errors=[
            {"message": message, "error_type": output.error_type}
            for message in output.errors
        ],
        warnings=diagnostics.warnings,
    )
