"""Output formatters for consumption estimates and cutting plans."""

from __future__ import annotations

from typing import Any

from profilecut.domain import CuttingPlan, OptimizationResult


class ConsumptionReportFormatter:
    """Formats a consumption estimate as a plain-text report.

    The per-pipe breakdown is optional since long cut lists produce one line
    per physical pipe.
    """

    def __init__(self, include_layouts: bool = True) -> None:
        self._include_layouts = include_layouts

    def format(self, result: OptimizationResult, material_name: str = "") -> str:
        title = f"PIPE CONSUMPTION - {material_name}" if material_name else "PIPE CONSUMPTION"
        if result.total_pipes_from_stock == 0 and not result.unfulfillable_cuts_in:
            return f"{title}\nNo cuts required."

        lines = [
            title,
            "=" * 60,
            f"{'Standard Length':<20} {'Inches':<12} {'Pipes'}",
            "-" * 60,
        ]
        for purchase in result.pipes_taken_per_standard_length:
            lines.append(
                f"{purchase.length + ' ' + purchase.unit:<20} "
                f"{purchase.length_in_inches:<12.3f} {purchase.count}"
            )
        lines.append("-" * 60)
        lines.append(f"{'TOTAL':<20} {'':<12} {result.total_pipes_from_stock}")
        lines.append("")
        lines.append(f"Scrap generated: {result.total_scrap_ft:.3f} ft")
        if result.usable_offcuts_ft:
            offcuts = ", ".join(f"{o:.3f}" for o in result.usable_offcuts_ft)
            lines.append(f"Usable offcuts (ft): {offcuts}")
        else:
            lines.append("Usable offcuts (ft): none")
        if result.unfulfillable_cuts_in:
            lines.append(
                f"Unfulfillable cuts: {len(result.unfulfillable_cuts_in)} (counted as scrap)"
            )

        if self._include_layouts and result.layouts:
            lines.append("")
            lines.append("PIPE LAYOUTS")
            lines.append("-" * 60)
            for number, layout in enumerate(result.layouts, start=1):
                cuts = " + ".join(f"{c:.3f}" for c in layout.cuts_in)
                lines.append(
                    f"#{number:<3} {layout.stock.length} {layout.stock.unit}: "
                    f"{cuts} in | kerf {layout.kerf_loss_in:.3f} in | "
                    f"left {layout.immediate_scrap_in:.3f} in"
                )

        return "\n".join(lines)


class CuttingPlanFormatter:
    """Formats a stock-limited cutting plan as a plain-text report."""

    def format(self, plan: CuttingPlan) -> str:
        unit = plan.usage_unit
        lines = [
            f"CUTTING PLAN - {plan.material_name}",
            "=" * 70,
        ]
        if not plan.pipes:
            lines.append("No cuts required.")
            return "\n".join(lines)

        for number, pipe in enumerate(plan.pipes, start=1):
            lines.append(
                f"Pipe {number}: {pipe.standard_length} {pipe.standard_length_unit}"
                + (f" ({pipe.weight:.3f} {plan.weight_unit})" if pipe.weight else "")
            )
            for cut in pipe.cuts:
                label = cut.identifier or "-"
                lines.append(f"    {label:<20} {cut.length:>10.3f} {unit}")
            lines.append(
                f"    {'used (incl. kerf)':<20} {pipe.total_cut_length:>10.3f} {unit}"
            )
            lines.append(f"    {'scrap':<20} {pipe.scrap_length:>10.3f} {unit}")

        lines.append("-" * 70)
        lines.append(f"{'Length':<20} {'Pipes':<8} {'Scrap'}")
        for row in plan.summary:
            lines.append(
                f"{f'{row.length:g} {row.unit}':<20} {row.quantity:<8} "
                f"{row.total_scrap:.3f} {row.scrap_unit}"
            )
        if plan.total_weight:
            lines.append(f"Total weight: {plan.total_weight:.3f} {plan.weight_unit}")

        return "\n".join(lines)


def cutting_plan_to_dict(plan: CuttingPlan) -> dict[str, Any]:
    """Serialize a cutting plan for JSON output."""
    return {
        "materialName": plan.material_name,
        "usageUnit": plan.usage_unit,
        "pipesUsedLayout": [
            {
                "standardLength": pipe.standard_length,
                "standardLengthUnit": pipe.standard_length_unit,
                "cutsMade": [
                    {"requiredLength": cut.length, "identifier": cut.identifier}
                    for cut in pipe.cuts
                ],
                "totalCutLengthOnPipe": pipe.total_cut_length,
                "scrapLength": pipe.scrap_length,
                "calculatedWeight": pipe.weight,
            }
            for pipe in plan.pipes
        ],
        "summary": {
            "totalPipesPerLength": [
                {
                    "length": row.length,
                    "unit": row.unit,
                    "quantity": row.quantity,
                    "totalScrap": row.total_scrap,
                    "scrapUnit": row.scrap_unit,
                }
                for row in plan.summary
            ],
            "totalWeight": plan.total_weight,
            "weightUnit": plan.weight_unit,
        },
    }
