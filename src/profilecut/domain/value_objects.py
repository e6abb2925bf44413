"""Value objects for profile materials, pipe layouts and cutting results.

All dataclasses are frozen. They are created fresh for every optimization
call and never hold references back into the caller's material documents.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

PROFILE_CATEGORY = "Profile"


class LinearUnit(str, Enum):
    """Linear units accepted for stock and cut lengths."""

    INCHES = "inches"
    FT = "ft"
    MM = "mm"
    CM = "cm"
    M = "m"


def _field(source: Any, *names: str, default: Any = None) -> Any:
    """Read the first present key (or attribute) among ``names``."""
    for name in names:
        if isinstance(source, Mapping):
            if name in source:
                return source[name]
        elif hasattr(source, name):
            return getattr(source, name)
    return default


@dataclass(frozen=True)
class StandardLengthEntry:
    """A catalogued standard length exactly as supplied by the caller.

    The length is kept in its external representation; it is parsed and
    validated by the optimizer so that a malformed entry can be skipped
    rather than rejecting the whole material.
    """

    length: Any
    unit: str


@dataclass(frozen=True)
class StockEntry:
    """Number of physical pipes on hand for one standard length."""

    length: Any
    unit: str
    quantity: Any


@dataclass(frozen=True)
class GaugeWeight:
    """Weight per unit length of a profile at a given gauge.

    Attributes:
        gauge: Gauge label, e.g. "18G".
        weight_per_unit_length: Weight in the material's weight unit per
            one ``unit_length``.
        unit_length: Linear unit the weight is quoted against.
    """

    gauge: str
    weight_per_unit_length: Any
    unit_length: str


@dataclass(frozen=True)
class ProfileMaterial:
    """Immutable snapshot of a profile material's catalogue data."""

    id: str | None
    company_id: str | None
    category: str | None = PROFILE_CATEGORY
    name: str = ""
    standard_lengths: tuple[StandardLengthEntry, ...] = ()
    stock_by_length: tuple[StockEntry, ...] = ()
    gauge_weights: tuple[GaugeWeight, ...] = ()
    weight_unit: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or str(self.id)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ProfileMaterial:
        """Copy a material document (camelCase or snake_case keys).

        Args:
            data: Material document, e.g. ``{"_id": ..., "companyId": ...,
                "standardLengths": [{"length": ..., "unit": ...}]}``.

        Returns:
            A ProfileMaterial holding plain copies of the catalogue arrays.
        """
        material_id = _field(data, "id", "_id")
        company_id = _field(data, "company_id", "companyId")
        category = _field(data, "category")
        standard_lengths = tuple(
            StandardLengthEntry(
                length=_field(entry, "length"),
                unit=str(_field(entry, "unit", default="")),
            )
            for entry in _field(data, "standard_lengths", "standardLengths", default=())
            or ()
        )
        stock_by_length = tuple(
            StockEntry(
                length=_field(entry, "length"),
                unit=str(_field(entry, "unit", "lengthUnit", default="")),
                quantity=_field(entry, "quantity", default=0),
            )
            for entry in _field(data, "stock_by_length", "stockByLength", default=())
            or ()
        )
        gauge_weights = tuple(
            GaugeWeight(
                gauge=str(_field(entry, "gauge", default="")),
                weight_per_unit_length=_field(
                    entry, "weight_per_unit_length", "weightPerUnitLength"
                ),
                unit_length=str(_field(entry, "unit_length", "unitLength", default="")),
            )
            for entry in _field(
                data, "gauge_weights", "gaugeSpecificWeights", default=()
            )
            or ()
        )
        return cls(
            id=None if material_id is None else str(material_id),
            company_id=None if company_id is None else str(company_id),
            category=None if category is None else str(category),
            name=str(_field(data, "name", default="") or ""),
            standard_lengths=standard_lengths,
            stock_by_length=stock_by_length,
            gauge_weights=gauge_weights,
            weight_unit=_field(data, "weight_unit", "weightUnit"),
        )


@dataclass(frozen=True)
class StandardStockLength:
    """A purchasable pipe size normalized to inches.

    Attributes:
        length: Catalogue length as entered (e.g. "12").
        unit: Unit of the catalogue length.
        length_in_inches: Converted length, always positive.
        index: Position in the material's catalogue; identifies the entry.
    """

    length: str
    unit: str
    length_in_inches: float
    index: int

    def __post_init__(self) -> None:
        if self.length_in_inches <= 0:
            raise ValueError("Standard length must be positive")

    @property
    def key(self) -> str:
        return f"{self.length}_{self.unit}_{self.index}"

    @property
    def length_in_feet(self) -> float:
        return self.length_in_inches / 12


@dataclass(frozen=True)
class PipeLayout:
    """One physical stock pipe and the cuts packed onto it.

    Attributes:
        stock: Standard length the pipe was taken from.
        cuts_in: Packed cut lengths in inches, in packing order.
        length_used_in: Total consumed length including kerf losses.
        immediate_scrap_in: Leftover on this pipe after cutting.
    """

    stock: StandardStockLength
    cuts_in: tuple[float, ...]
    length_used_in: float
    immediate_scrap_in: float

    @property
    def cut_count(self) -> int:
        return len(self.cuts_in)

    @property
    def kerf_loss_in(self) -> float:
        """Material lost to the blade on this pipe."""
        return self.length_used_in - sum(self.cuts_in)


@dataclass(frozen=True)
class PipePurchase:
    """How many pipes of one standard length were consumed."""

    length: str
    unit: str
    length_in_inches: float
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "length": self.length,
            "unit": self.unit,
            "lengthInInches": self.length_in_inches,
            "count": self.count,
        }


@dataclass(frozen=True)
class OptimizationResult:
    """Aggregate purchase and scrap figures for one optimization run.

    Attributes:
        layouts: Every pipe consumed, in the order it was chosen.
        pipes_taken_per_standard_length: Purchase counts grouped by
            standard-length entry, in order of first use.
        total_scrap_ft: Unusable leftovers plus unfulfillable cuts, in feet
            rounded to 3 decimals.
        usable_offcuts_ft: Reusable leftovers in feet, ascending.
        unfulfillable_cuts_in: Cuts that could not be placed on any pipe.
    """

    layouts: tuple[PipeLayout, ...] = ()
    pipes_taken_per_standard_length: tuple[PipePurchase, ...] = ()
    total_scrap_ft: float = 0.0
    usable_offcuts_ft: tuple[float, ...] = ()
    unfulfillable_cuts_in: tuple[float, ...] = ()

    @property
    def total_pipes_from_stock(self) -> int:
        return len(self.layouts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the field names consumers of the estimate expect."""
        return {
            "totalPipesFromStock": self.total_pipes_from_stock,
            "pipesTakenPerStandardLength": [
                p.to_dict() for p in self.pipes_taken_per_standard_length
            ],
            "totalScrapGenerated_ft": self.total_scrap_ft,
            "finalUsableOffcuts_ft": list(self.usable_offcuts_ft),
        }


@dataclass(frozen=True)
class RequiredCutItem:
    """A required cut with an identifier, in the material's usage unit."""

    length: Any
    identifier: str | None = None


@dataclass(frozen=True)
class PlannedCut:
    """A cut assigned to a pipe in a cutting plan (usage unit)."""

    length: float
    identifier: str | None = None


@dataclass(frozen=True)
class PlannedPipe:
    """A pipe taken from stock in a cutting plan.

    Lengths other than ``standard_length`` are in the plan's usage unit.
    """

    standard_length: str
    standard_length_unit: str
    cuts: tuple[PlannedCut, ...]
    total_cut_length: float
    scrap_length: float
    weight: float | None = None


@dataclass(frozen=True)
class PipeUsageSummary:
    """Pipes consumed and scrap generated for one standard length."""

    length: float
    unit: str
    quantity: int
    total_scrap: float
    scrap_unit: str


@dataclass(frozen=True)
class CuttingPlan:
    """Stock-limited cutting plan for one material."""

    material_name: str
    usage_unit: str
    pipes: tuple[PlannedPipe, ...] = ()
    summary: tuple[PipeUsageSummary, ...] = ()
    total_weight: float = 0.0
    weight_unit: str | None = None
    remaining_stock: dict[str, int] = field(default_factory=dict)

    @property
    def total_pipes(self) -> int:
        return len(self.pipes)


def as_material(material: ProfileMaterial | Mapping[str, Any] | None) -> ProfileMaterial | None:
    """Return a ProfileMaterial snapshot for either accepted input shape."""
    if material is None or isinstance(material, ProfileMaterial):
        return material
    return ProfileMaterial.from_mapping(material)


def as_cut_items(cuts: Sequence[Any]) -> tuple[RequiredCutItem, ...]:
    """Coerce plan cut inputs (items, mappings or bare lengths) to items."""
    items: list[RequiredCutItem] = []
    for cut in cuts:
        if isinstance(cut, RequiredCutItem):
            items.append(cut)
        elif isinstance(cut, Mapping) and "length" in cut:
            identifier = cut.get("identifier")
            items.append(
                RequiredCutItem(
                    length=cut["length"],
                    identifier=None if identifier is None else str(identifier),
                )
            )
        else:
            items.append(RequiredCutItem(length=cut))
    return tuple(items)
