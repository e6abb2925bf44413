"""Unit conversion for linear, area and count units.

Linear units convert through feet and area units through square feet.
Count units (pieces, sets, ...) only convert to each other, as identity.
Conversion never raises: failures are reported on the returned
ConversionResult so callers can attach their own context.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any


class UnitType(str, Enum):
    """Families of units a value can be expressed in."""

    LINEAR = "linear"
    AREA = "area"
    COUNT = "count"
    WEIGHT = "weight"
    UNKNOWN = "unknown"


# Factor to convert one unit into feet
LINEAR_CONVERSION_TO_FEET: dict[str, float] = {
    "inches": 1 / 12,
    "ft": 1.0,
    "mm": 1 / 304.8,
    "cm": 1 / 30.48,
    "m": 1 / 0.3048,
}

# Factor to convert one unit into square feet
AREA_CONVERSION_TO_SQFT: dict[str, float] = {
    "sqin": 1 / 144,
    "sqft": 1.0,
    "sqmm": 1 / (304.8 * 304.8),
    "sqcm": 1 / (30.48 * 30.48),
    "sqm": 1 / (0.3048 * 0.3048),
}

COUNT_UNITS: frozenset[str] = frozenset({"pcs", "piece", "item", "unit", "set"})

# Recognised for classification only; there is no weight conversion table.
WEIGHT_UNITS: frozenset[str] = frozenset(
    {"kg", "g", "lb", "ton", "tonne", "quintal"}
)

SUPPORTED_LINEAR_UNITS: tuple[str, ...] = tuple(LINEAR_CONVERSION_TO_FEET)
SUPPORTED_AREA_UNITS: tuple[str, ...] = tuple(AREA_CONVERSION_TO_SQFT)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a unit conversion.

    Exactly one of ``result`` and ``error`` is set.

    Attributes:
        result: Converted value, or None when the conversion failed.
        error: Human-readable reason for the failure, or None on success.
    """

    result: float | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the conversion produced a value."""
        return self.error is None and self.result is not None

    @classmethod
    def failure(cls, error: str) -> ConversionResult:
        return cls(result=None, error=error)


def _normalize(unit: Any) -> str:
    return str(unit).strip().lower()


def get_unit_type(unit: Any) -> UnitType:
    """Classify a unit name into its family.

    Args:
        unit: Unit name, matched case-insensitively.

    Returns:
        The UnitType family, UNKNOWN if the name is not recognised.
    """
    name = _normalize(unit)
    if name in LINEAR_CONVERSION_TO_FEET:
        return UnitType.LINEAR
    if name in AREA_CONVERSION_TO_SQFT:
        return UnitType.AREA
    if name in COUNT_UNITS:
        return UnitType.COUNT
    if name in WEIGHT_UNITS:
        return UnitType.WEIGHT
    return UnitType.UNKNOWN


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, Decimal))


def convert_unit(value: Any, from_unit: str, to_unit: str) -> ConversionResult:
    """Convert a scalar between two units of the same family.

    Args:
        value: Numeric value expressed in ``from_unit``.
        from_unit: Source unit name (case-insensitive).
        to_unit: Target unit name (case-insensitive).

    Returns:
        ConversionResult with the converted value, or with an error when the
        input is not a finite number, the units belong to different families,
        or the result is not finite.

    Example:
        >>> convert_unit(12, "ft", "inches").result
        144.0
        >>> convert_unit(1, "pcs", "ft").ok
        False
    """
    if not _is_number(value):
        return ConversionResult.failure("Invalid input value. Must be a number.")
    try:
        numeric = float(value)
    except OverflowError:
        numeric = math.inf
    if not math.isfinite(numeric):
        return ConversionResult.failure("Invalid input value. Must be a finite number.")

    source = _normalize(from_unit)
    target = _normalize(to_unit)

    if source == target:
        return ConversionResult(result=numeric)

    source_is_count = source in COUNT_UNITS
    target_is_count = target in COUNT_UNITS
    if source_is_count and target_is_count:
        return ConversionResult(result=numeric)
    if source_is_count or target_is_count:
        return ConversionResult.failure(
            f"Cannot convert between count unit and dimensional unit "
            f"('{from_unit}' to '{to_unit}')."
        )

    if source in LINEAR_CONVERSION_TO_FEET and target in LINEAR_CONVERSION_TO_FEET:
        table = LINEAR_CONVERSION_TO_FEET
    elif source in AREA_CONVERSION_TO_SQFT and target in AREA_CONVERSION_TO_SQFT:
        table = AREA_CONVERSION_TO_SQFT
    else:
        return ConversionResult.failure(
            f"Unsupported unit conversion from '{from_unit}' "
            f"(type: {get_unit_type(source).value}) to '{to_unit}' "
            f"(type: {get_unit_type(target).value}). Check unit compatibility."
        )

    result = numeric * table[source] / table[target]
    if not math.isfinite(result):
        return ConversionResult.failure("Conversion resulted in a non-finite value.")
    return ConversionResult(result=result)
