"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from profilecut.domain import CuttingPlan, OptimizationResult


@dataclass
class ConsumptionOutput:
    """Output DTO for a pipe consumption estimate."""

    material_name: str
    result: OptimizationResult | None = None
    errors: list[str] = field(default_factory=list)
    error_type: str | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors and self.result is not None


@dataclass
class CuttingPlanOutput:
    """Output DTO for a stock-limited cutting plan."""

    material_name: str
    plan: CuttingPlan | None = None
    errors: list[str] = field(default_factory=list)
    error_type: str | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors and self.plan is not None
