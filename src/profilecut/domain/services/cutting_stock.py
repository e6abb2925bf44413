"""Cutting-stock optimization for profile (pipe) materials.

Given the standard stock lengths a profile is sold in and a list of required
cut lengths, decide which pipes to consume and which cuts go on each pipe.

The heuristic is greedy and multi-candidate:

1. Cuts are sorted largest first, once.
2. Each iteration simulates packing the remaining cuts, in order, onto one
   pipe of every standard length.
3. The candidate with the smallest leftover wins (not the one with the most
   cuts), its cuts are removed, and the loop repeats.
4. If no candidate can take any cut, the largest remaining cut is written off
   as scrap so the loop always terminates.

Every cut after the first on a pipe loses a fixed kerf to the blade. All
capacity comparisons allow a small epsilon for floating point drift from unit
conversion.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from ..exceptions import ProfileCuttingError
from ..numbers import length_to_string, parse_external_length
from ..units import convert_unit
from ..value_objects import (
    PROFILE_CATEGORY,
    OptimizationResult,
    PipeLayout,
    PipePurchase,
    ProfileMaterial,
    StandardStockLength,
    as_material,
)

logger = logging.getLogger(__name__)


class DiagnosticsSink(Protocol):
    """Receiver for non-fatal problems found during a calculation.

    ``logging.Logger`` satisfies this protocol.
    """

    def warning(self, msg: str, *args: Any) -> None: ...


@dataclass(frozen=True)
class CuttingConfig:
    """Numeric parameters for profile cutting.

    Attributes:
        kerf_in: Blade loss in inches charged for every cut after the first
            on a pipe (default 1/8").
        scrap_threshold_ft: Leftovers at least this long are kept as usable
            offcuts; shorter leftovers are scrap.
        epsilon_in: Tolerance in inches for capacity and length comparisons.
    """

    kerf_in: float = 0.125
    scrap_threshold_ft: float = 3.0
    epsilon_in: float = 0.001

    def __post_init__(self) -> None:
        if not 0 <= self.kerf_in <= 0.5:
            raise ValueError("Kerf must be between 0 and 0.5 inches")
        if self.scrap_threshold_ft < 0:
            raise ValueError("Scrap threshold must be non-negative")
        if not 0 < self.epsilon_in <= 0.1:
            raise ValueError("Epsilon must be greater than 0 and at most 0.1 inches")

    @property
    def scrap_threshold_in(self) -> float:
        return self.scrap_threshold_ft * 12.0


@dataclass(frozen=True)
class WorkingCut:
    """A cut still waiting to be placed, normalized to inches."""

    length_in: float
    identifier: str | None = None


@dataclass(frozen=True)
class PackingCandidate:
    """Outcome of simulating one pipe of a standard length."""

    stock: StandardStockLength
    cuts: tuple[WorkingCut, ...]
    length_used_in: float
    immediate_scrap_in: float

    def to_layout(self) -> PipeLayout:
        return PipeLayout(
            stock=self.stock,
            cuts_in=tuple(cut.length_in for cut in self.cuts),
            length_used_in=self.length_used_in,
            immediate_scrap_in=self.immediate_scrap_in,
        )


def validate_material(material: ProfileMaterial | None, company_id: Any) -> None:
    """Check the material exists, belongs to the company and is a profile."""
    if material is None or not material.id:
        raise ProfileCuttingError("Invalid Material object provided.", "invalid_material")
    if company_id is None or str(material.company_id) != str(company_id):
        raise ProfileCuttingError(
            "Material not associated with this company.", "invalid_material"
        )
    if material.category != PROFILE_CATEGORY:
        raise ProfileCuttingError(
            "This function is only for Profile materials.", "invalid_material"
        )


def normalize_standard_lengths(
    material: ProfileMaterial,
    config: CuttingConfig,
    diagnostics: DiagnosticsSink,
) -> list[StandardStockLength]:
    """Convert a material's catalogue to inches, largest first.

    Entries that cannot be parsed or do not convert to a positive length are
    reported to ``diagnostics`` and skipped.

    Raises:
        ProfileCuttingError: If the material has no standard lengths, or none
            of them is usable.
    """
    if not material.standard_lengths:
        raise ProfileCuttingError(
            f"Material {material.display_name} has no defined standard lengths.",
            "invalid_catalogue",
        )

    stock: list[StandardStockLength] = []
    for index, entry in enumerate(material.standard_lengths):
        try:
            value = parse_external_length(
                entry.length, f"standard length at index {index}", "invalid_catalogue"
            )
        except ProfileCuttingError as exc:
            diagnostics.warning("Skipping standard length at index %d: %s", index, exc)
            continue

        conversion = convert_unit(value, entry.unit, "inches")
        if not conversion.ok or conversion.result <= config.epsilon_in:
            diagnostics.warning(
                "Skipping standard length %s %s at index %d: %s",
                value,
                entry.unit,
                index,
                conversion.error or "length must be positive",
            )
            continue

        stock.append(
            StandardStockLength(
                length=length_to_string(entry.length),
                unit=entry.unit,
                length_in_inches=conversion.result,
                index=index,
            )
        )

    if not stock:
        raise ProfileCuttingError(
            "No valid standard lengths after conversion to inches.",
            "invalid_catalogue",
        )

    # Informational only: every iteration scans all candidates.
    stock.sort(key=lambda s: s.length_in_inches, reverse=True)
    return stock


def check_largest_cut_fits(
    cuts: Sequence[WorkingCut],
    stock: Sequence[StandardStockLength],
    config: CuttingConfig,
) -> None:
    """Fail fast when the largest cut is longer than the largest pipe.

    Both sequences must already be sorted largest first.
    """
    if not cuts or not stock:
        return
    largest_cut = cuts[0]
    largest_stock = stock[0].length_in_inches
    if largest_cut.length_in > largest_stock + config.epsilon_in:
        label = f" ({largest_cut.identifier})" if largest_cut.identifier else ""
        raise ProfileCuttingError(
            f"Largest cut{label} {largest_cut.length_in:.2f}in "
            f"({largest_cut.length_in / 12:.2f}ft) is greater than the largest "
            f"available standard pipe {largest_stock:.2f}in "
            f"({largest_stock / 12:.2f}ft).",
            "infeasible",
            details=[
                {
                    "cut_in": largest_cut.length_in,
                    "largest_stock_in": largest_stock,
                }
            ],
        )


def simulate_packing(
    stock: StandardStockLength,
    remaining: Sequence[WorkingCut],
    config: CuttingConfig,
) -> PackingCandidate | None:
    """Greedily pack remaining cuts, in order, onto one pipe.

    Returns:
        The packing, or None if not even one cut fits.
    """
    packed: list[WorkingCut] = []
    used = 0.0
    capacity = stock.length_in_inches + config.epsilon_in
    for cut in remaining:
        loss = config.kerf_in if packed else 0.0
        if used + cut.length_in + loss <= capacity:
            used += cut.length_in + loss
            packed.append(cut)

    if not packed:
        return None
    return PackingCandidate(
        stock=stock,
        cuts=tuple(packed),
        length_used_in=used,
        immediate_scrap_in=stock.length_in_inches - used,
    )


def select_least_waste(
    candidates: Iterable[StandardStockLength],
    remaining: Sequence[WorkingCut],
    config: CuttingConfig,
) -> PackingCandidate | None:
    """Pick the candidate pipe that leaves the smallest leftover.

    Ties keep the candidate seen first.
    """
    best: PackingCandidate | None = None
    for stock in candidates:
        candidate = simulate_packing(stock, remaining, config)
        if candidate is None:
            continue
        if best is None or candidate.immediate_scrap_in < best.immediate_scrap_in:
            best = candidate
    return best


def remove_packed_cuts(
    remaining: list[WorkingCut],
    packed: Iterable[WorkingCut],
    config: CuttingConfig,
    diagnostics: DiagnosticsSink,
) -> None:
    """Remove each packed cut's first near-equal match from ``remaining``."""
    for cut in packed:
        index = next(
            (
                i
                for i, candidate in enumerate(remaining)
                if abs(candidate.length_in - cut.length_in) < config.epsilon_in
                and candidate.identifier == cut.identifier
            ),
            None,
        )
        if index is None:
            diagnostics.warning(
                "Packed cut %.4fin not found in remaining cuts; skipping removal",
                cut.length_in,
            )
            continue
        del remaining[index]


def inches_to_feet(value_in: float) -> float:
    conversion = convert_unit(value_in, "inches", "ft")
    if not conversion.ok:
        raise ProfileCuttingError(
            f"Failed to convert {value_in}in to feet: {conversion.error}",
            "conversion",
        )
    return conversion.result


class ProfileCuttingOptimizer:
    """Computes pipe consumption for a list of required cuts.

    Instances hold only configuration, so one optimizer can serve any number
    of concurrent calls.
    """

    def __init__(
        self,
        config: CuttingConfig | None = None,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        """Initialize the optimizer.

        Args:
            config: Kerf, offcut threshold and tolerance settings.
            diagnostics: Sink for non-fatal warnings. Defaults to this
                module's logger.
        """
        self.config = config or CuttingConfig()
        self.diagnostics: DiagnosticsSink = diagnostics or logger

    def optimize(
        self,
        material: ProfileMaterial | Mapping[str, Any] | None,
        company_id: Any,
        required_cut_lengths_ft: Sequence[Any],
    ) -> OptimizationResult:
        """Plan pipe consumption for the required cuts.

        Args:
            material: Profile material snapshot or material document.
            company_id: Company the request is made for; must own the material.
            required_cut_lengths_ft: Required cut lengths in feet.

        Returns:
            OptimizationResult with pipe counts, scrap and usable offcuts.

        Raises:
            ProfileCuttingError: If the material, its catalogue or any cut is
                invalid, or the largest cut cannot fit the largest pipe.
        """
        snapshot = as_material(material)
        validate_material(snapshot, company_id)
        stock = normalize_standard_lengths(snapshot, self.config, self.diagnostics)
        cuts = self._normalize_cuts(required_cut_lengths_ft)
        check_largest_cut_fits(cuts, stock, self.config)

        logger.debug(
            "Optimizing %d cuts over %d standard lengths for material %s",
            len(cuts),
            len(stock),
            snapshot.display_name,
        )

        layouts, unfulfillable = self._pack(stock, cuts)
        result = self._aggregate(layouts, unfulfillable)

        logger.info(
            "Material %s: %d pipes, %.3fft scrap, %d usable offcuts",
            snapshot.display_name,
            result.total_pipes_from_stock,
            result.total_scrap_ft,
            len(result.usable_offcuts_ft),
        )
        return result

    def _normalize_cuts(self, required_cut_lengths_ft: Sequence[Any]) -> list[WorkingCut]:
        cuts: list[WorkingCut] = []
        for index, raw in enumerate(required_cut_lengths_ft):
            value = parse_external_length(
                raw, f"required cut at index {index}", "invalid_cut"
            )
            if value <= 0:
                raise ProfileCuttingError(
                    f"Invalid required cut value in feet at index {index}: {raw!r}",
                    "invalid_cut",
                )
            conversion = convert_unit(value, "ft", "inches")
            if not conversion.ok or conversion.result <= self.config.epsilon_in:
                raise ProfileCuttingError(
                    f"Failed to convert cut {value}ft at index {index} to inches: "
                    f"{conversion.error or 'conversion failed'}.",
                    "invalid_cut",
                )
            cuts.append(WorkingCut(length_in=conversion.result))

        cuts.sort(key=lambda c: c.length_in, reverse=True)
        return cuts

    def _pack(
        self,
        stock: Sequence[StandardStockLength],
        cuts: Sequence[WorkingCut],
    ) -> tuple[list[PipeLayout], list[float]]:
        remaining = list(cuts)
        layouts: list[PipeLayout] = []
        unfulfillable: list[float] = []

        while remaining:
            best = select_least_waste(stock, remaining, self.config)
            if best is None:
                largest = remaining.pop(0)
                unfulfillable.append(largest.length_in)
                self.diagnostics.warning(
                    "Unfulfillable cut %.2fin became direct scrap; "
                    "no standard length can hold it",
                    largest.length_in,
                )
                continue

            logger.debug(
                "Pipe %d: %s %s with %d cuts, leftover %.3fin",
                len(layouts) + 1,
                best.stock.length,
                best.stock.unit,
                len(best.cuts),
                best.immediate_scrap_in,
            )
            layouts.append(best.to_layout())
            remove_packed_cuts(remaining, best.cuts, self.config, self.diagnostics)

        return layouts, unfulfillable

    def _aggregate(
        self, layouts: Sequence[PipeLayout], unfulfillable: Sequence[float]
    ) -> OptimizationResult:
        eps = self.config.epsilon_in
        threshold = self.config.scrap_threshold_in

        counts: dict[str, int] = {}
        stock_by_key: dict[str, StandardStockLength] = {}
        offcuts_in: list[float] = []
        scrap_in = 0.0

        for layout in layouts:
            key = layout.stock.key
            stock_by_key.setdefault(key, layout.stock)
            counts[key] = counts.get(key, 0) + 1

            if layout.immediate_scrap_in >= threshold - eps:
                offcuts_in.append(layout.immediate_scrap_in)
            elif layout.immediate_scrap_in > eps:
                scrap_in += layout.immediate_scrap_in

        scrap_in += sum(unfulfillable)
        offcuts_in.sort()

        purchases = tuple(
            PipePurchase(
                length=stock_by_key[key].length,
                unit=stock_by_key[key].unit,
                length_in_inches=stock_by_key[key].length_in_inches,
                count=count,
            )
            for key, count in counts.items()
        )
        offcuts_ft = tuple(
            ft
            for ft in (round(inches_to_feet(o), 3) for o in offcuts_in)
            if ft * 12 >= eps
        )

        return OptimizationResult(
            layouts=tuple(layouts),
            pipes_taken_per_standard_length=purchases,
            total_scrap_ft=round(inches_to_feet(scrap_in), 3),
            usable_offcuts_ft=offcuts_ft,
            unfulfillable_cuts_in=tuple(unfulfillable),
        )


def calculate_profile_consumption(
    material: ProfileMaterial | Mapping[str, Any] | None,
    company_id: Any,
    required_cut_lengths_ft: Sequence[Any],
    *,
    config: CuttingConfig | None = None,
    diagnostics: DiagnosticsSink | None = None,
) -> OptimizationResult:
    """Plan pipe consumption for a profile material.

    Convenience wrapper around ProfileCuttingOptimizer.optimize.

    Example:
        >>> material = {"_id": "m1", "companyId": "c1", "category": "Profile",
        ...             "standardLengths": [{"length": 12, "unit": "ft"}]}
        >>> calculate_profile_consumption(material, "c1", [5, 5, 1.9]).total_pipes_from_stock
        1
    """
    optimizer = ProfileCuttingOptimizer(config=config, diagnostics=diagnostics)
    return optimizer.optimize(material, company_id, required_cut_lengths_ft)
