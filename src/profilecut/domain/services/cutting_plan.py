"""Stock-limited cutting plans for profile materials.

Unlike the consumption estimate, a cutting plan only draws pipes that are
actually on hand. Each chosen pipe decrements the stock for its length, and a
cut that no stocked pipe can take fails the whole plan instead of becoming
scrap.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, NoReturn

from ..exceptions import ProfileCuttingError
from ..numbers import length_to_string, parse_external_length
from ..units import convert_unit
from ..value_objects import (
    CuttingPlan,
    PipeUsageSummary,
    PlannedCut,
    PlannedPipe,
    ProfileMaterial,
    RequiredCutItem,
    StandardStockLength,
    as_cut_items,
    as_material,
)
from .cutting_stock import (
    CuttingConfig,
    DiagnosticsSink,
    PackingCandidate,
    WorkingCut,
    check_largest_cut_fits,
    normalize_standard_lengths,
    remove_packed_cuts,
    select_least_waste,
    validate_material,
)
from .weight import profile_length_to_weight

logger = logging.getLogger(__name__)

PLAN_PLACES = 4


def _stock_key(length: float, unit: str) -> tuple[str, float]:
    return (unit.strip().lower(), round(length, 6))


class CuttingPlanService:
    """Builds detailed, stock-aware cutting plans."""

    def __init__(
        self,
        config: CuttingConfig | None = None,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        self.config = config or CuttingConfig()
        self.diagnostics: DiagnosticsSink = diagnostics or logger

    def generate(
        self,
        material: ProfileMaterial | Mapping[str, Any] | None,
        required_cuts: Sequence[RequiredCutItem | Mapping[str, Any] | Any],
        usage_unit: str,
        gauge: str | None = None,
        company_id: Any = None,
    ) -> CuttingPlan:
        """Generate a cutting plan drawing only on available stock.

        Args:
            material: Material snapshot or document with standard lengths,
                stock by length and, for weights, gauge weights.
            required_cuts: Cuts in ``usage_unit``, optionally with identifiers.
            usage_unit: Linear unit the cuts are expressed in; plan lengths
                are reported in it too.
            gauge: Gauge used to weigh each pipe, if any.
            company_id: When given, the material must belong to this company
                and be a profile.

        Returns:
            CuttingPlan with per-pipe layouts and per-length summary.

        Raises:
            ProfileCuttingError: If input is invalid, a cut exceeds every
                standard length, or stock runs out before all cuts are placed.
        """
        snapshot = as_material(material)
        if company_id is not None:
            validate_material(snapshot, company_id)
        elif snapshot is None:
            raise ProfileCuttingError(
                "Invalid Material object provided.", "invalid_material"
            )

        stock_lengths = normalize_standard_lengths(
            snapshot, self.config, self.diagnostics
        )
        cuts = self._normalize_cuts(as_cut_items(required_cuts), usage_unit, snapshot)
        check_largest_cut_fits(cuts, stock_lengths, self.config)
        available = self._consolidate_stock(snapshot)

        remaining = list(cuts)
        pipes: list[PlannedPipe] = []
        stock_for_pipe: list[StandardStockLength] = []

        while remaining:
            candidates = [
                s
                for s in stock_lengths
                if available.get(_stock_key(float(s.length), s.unit), 0) > 0
            ]
            best = select_least_waste(candidates, remaining, self.config)
            if best is None:
                self._raise_insufficient_stock(snapshot, remaining, usage_unit)

            available[_stock_key(float(best.stock.length), best.stock.unit)] -= 1
            pipes.append(self._planned_pipe(best, snapshot, usage_unit, gauge))
            stock_for_pipe.append(best.stock)
            remove_packed_cuts(remaining, best.cuts, self.config, self.diagnostics)

        plan = CuttingPlan(
            material_name=snapshot.display_name,
            usage_unit=usage_unit,
            pipes=tuple(pipes),
            summary=self._summarize(pipes, stock_for_pipe, usage_unit),
            total_weight=float(
                sum((Decimal(str(p.weight)) for p in pipes if p.weight), Decimal("0"))
            ),
            weight_unit=snapshot.weight_unit,
            remaining_stock={
                f"{length_to_string(length)}_{unit}": quantity
                for (unit, length), quantity in available.items()
            },
        )
        logger.info(
            "Cutting plan for %s: %d pipes for %d cuts",
            plan.material_name,
            plan.total_pipes,
            len(cuts),
        )
        return plan

    def _normalize_cuts(
        self,
        items: Sequence[RequiredCutItem],
        usage_unit: str,
        material: ProfileMaterial,
    ) -> list[WorkingCut]:
        cuts: list[WorkingCut] = []
        for index, item in enumerate(items):
            label = f"required cut {item.identifier or index}"
            value = parse_external_length(item.length, label, "invalid_cut")
            if value <= 0:
                raise ProfileCuttingError(
                    f"Invalid {label} for material {material.display_name}: "
                    f"{item.length!r}",
                    "invalid_cut",
                )
            conversion = convert_unit(value, usage_unit, "inches")
            if not conversion.ok or conversion.result <= self.config.epsilon_in:
                raise ProfileCuttingError(
                    f"Failed to convert {label} {value} {usage_unit} to inches for "
                    f"material {material.display_name}: "
                    f"{conversion.error or 'conversion failed'}.",
                    "invalid_cut",
                )
            cuts.append(WorkingCut(length_in=conversion.result, identifier=item.identifier))

        cuts.sort(key=lambda c: c.length_in, reverse=True)
        return cuts

    def _consolidate_stock(self, material: ProfileMaterial) -> dict[tuple[str, float], int]:
        available: dict[tuple[str, float], int] = {}
        for entry in material.stock_by_length:
            try:
                length = parse_external_length(entry.length, "stock length")
                quantity = int(parse_external_length(entry.quantity, "stock quantity"))
            except ProfileCuttingError as exc:
                self.diagnostics.warning(
                    "Skipping stock entry for %s: %s", material.display_name, exc
                )
                continue
            if quantity <= 0:
                logger.debug(
                    "Skipping empty stock entry %s %s", length_to_string(length), entry.unit
                )
                continue
            key = _stock_key(length, entry.unit)
            available[key] = available.get(key, 0) + quantity
        return available

    def _from_inches(self, value_in: float, unit: str) -> float:
        conversion = convert_unit(value_in, "inches", unit)
        if not conversion.ok:
            raise ProfileCuttingError(
                f"Failed to convert {value_in}in to {unit}: {conversion.error}",
                "conversion",
            )
        return round(conversion.result, PLAN_PLACES)

    def _planned_pipe(
        self,
        candidate: PackingCandidate,
        material: ProfileMaterial,
        usage_unit: str,
        gauge: str | None,
    ) -> PlannedPipe:
        weight: float | None = None
        if gauge and material.weight_unit:
            result = profile_length_to_weight(
                float(candidate.stock.length),
                candidate.stock.unit,
                material.gauge_weights,
                gauge,
                material.weight_unit,
            )
            if result.ok:
                weight = result.weight
            else:
                self.diagnostics.warning(
                    "Could not calculate weight for pipe of %s, gauge %s: %s",
                    material.display_name,
                    gauge,
                    result.error,
                )

        return PlannedPipe(
            standard_length=candidate.stock.length,
            standard_length_unit=candidate.stock.unit,
            cuts=tuple(
                PlannedCut(
                    length=self._from_inches(cut.length_in, usage_unit),
                    identifier=cut.identifier,
                )
                for cut in candidate.cuts
            ),
            total_cut_length=self._from_inches(candidate.length_used_in, usage_unit),
            scrap_length=self._from_inches(candidate.immediate_scrap_in, usage_unit),
            weight=weight,
        )

    def _summarize(
        self,
        pipes: Sequence[PlannedPipe],
        stock_for_pipe: Sequence[StandardStockLength],
        usage_unit: str,
    ) -> tuple[PipeUsageSummary, ...]:
        quantities: dict[tuple[str, str], int] = {}
        scrap: dict[tuple[str, str], float] = {}
        for pipe, stock in zip(pipes, stock_for_pipe):
            key = (stock.length, stock.unit)
            quantities[key] = quantities.get(key, 0) + 1
            scrap[key] = scrap.get(key, 0.0) + pipe.scrap_length

        return tuple(
            PipeUsageSummary(
                length=float(length),
                unit=unit,
                quantity=quantity,
                total_scrap=round(scrap[(length, unit)], PLAN_PLACES),
                scrap_unit=usage_unit,
            )
            for (length, unit), quantity in quantities.items()
        )

    def _raise_insufficient_stock(
        self,
        material: ProfileMaterial,
        remaining: Sequence[WorkingCut],
        usage_unit: str,
    ) -> NoReturn:
        unfulfilled = []
        for cut in remaining:
            conversion = convert_unit(cut.length_in, "inches", usage_unit)
            display = (
                f"{conversion.result:.2f} {usage_unit}"
                if conversion.ok
                else f"{cut.length_in:.2f} in"
            )
            unfulfilled.append(f"{display} ({cut.identifier})")

        logger.error(
            "Insufficient stock for %s: %d cuts unfulfilled",
            material.display_name,
            len(remaining),
        )
        raise ProfileCuttingError(
            f'Insufficient stock available for material "{material.display_name}". '
            f"Cannot fulfill the following cuts: {', '.join(unfulfilled)}. "
            "Please ensure adequate stock is available before optimizing cuts.",
            "insufficient_stock",
            details=[
                {"length_in": cut.length_in, "identifier": cut.identifier}
                for cut in remaining
            ],
        )


def generate_detailed_cutting_layout(
    material: ProfileMaterial | Mapping[str, Any] | None,
    required_cuts: Sequence[RequiredCutItem | Mapping[str, Any] | Any],
    usage_unit: str,
    gauge: str | None = None,
    company_id: Any = None,
    *,
    config: CuttingConfig | None = None,
    diagnostics: DiagnosticsSink | None = None,
) -> CuttingPlan:
    """Generate a stock-limited cutting plan. See CuttingPlanService.generate."""
    service = CuttingPlanService(config=config, diagnostics=diagnostics)
    return service.generate(material, required_cuts, usage_unit, gauge, company_id)
