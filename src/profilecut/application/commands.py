"""Application commands (use cases) for profile cutting jobs."""

from __future__ import annotations

import logging

from profilecut.application.config import (
    JobConfiguration,
    config_to_cutting_config,
    config_to_material,
    config_to_plan_cuts,
    config_to_required_cuts,
)
from profilecut.domain import (
    CuttingPlanService,
    DiagnosticsSink,
    ProfileCuttingError,
    ProfileCuttingOptimizer,
)

from .dtos import ConsumptionOutput, CuttingPlanOutput

logger = logging.getLogger(__name__)


class OptimizeConsumptionCommand:
    """Estimate pipe consumption for the feet cut list of a job."""

    def __init__(self, diagnostics: DiagnosticsSink | None = None) -> None:
        self.diagnostics = diagnostics

    def execute(self, job: JobConfiguration) -> ConsumptionOutput:
        """Run the optimizer for a validated job.

        Domain errors are captured on the output rather than raised, so the
        caller can report them alongside the material they concern.
        """
        material = config_to_material(job.material)
        optimizer = ProfileCuttingOptimizer(
            config=config_to_cutting_config(job.cutting),
            diagnostics=self.diagnostics,
        )
        try:
            result = optimizer.optimize(
                material, job.company_id, config_to_required_cuts(job)
            )
        except ProfileCuttingError as e:
            logger.debug("Consumption estimate failed: %s", e)
            return ConsumptionOutput(
                material_name=material.display_name,
                errors=[e.message],
                error_type=e.error_type,
            )
        return ConsumptionOutput(material_name=material.display_name, result=result)


class GenerateCuttingPlanCommand:
    """Build a stock-limited cutting plan for the ``plan`` section of a job."""

    def __init__(self, diagnostics: DiagnosticsSink | None = None) -> None:
        self.diagnostics = diagnostics

    def execute(self, job: JobConfiguration) -> CuttingPlanOutput:
        material = config_to_material(job.material)
        if job.plan is None:
            return CuttingPlanOutput(
                material_name=material.display_name,
                errors=["Job has no 'plan' section."],
                error_type="invalid_input",
            )
        service = CuttingPlanService(
            config=config_to_cutting_config(job.cutting),
            diagnostics=self.diagnostics,
        )
        try:
            plan = service.generate(
                material,
                config_to_plan_cuts(job.plan),
                job.plan.usage_unit.value,
                job.plan.gauge,
                company_id=job.company_id,
            )
        except ProfileCuttingError as e:
            logger.debug("Cutting plan failed: %s", e)
            return CuttingPlanOutput(
                material_name=material.display_name,
                errors=[e.message],
                error_type=e.error_type,
            )
        return CuttingPlanOutput(material_name=material.display_name, plan=plan)
