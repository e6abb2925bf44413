"""Length-to-weight conversion for profiles using gauge weight tables."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..exceptions import ProfileCuttingError
from ..numbers import parse_external_length
from ..units import convert_unit
from ..value_objects import GaugeWeight

WEIGHT_PLACES = Decimal("0.00001")


@dataclass(frozen=True)
class WeightResult:
    """Outcome of a weight calculation; ``error`` is set on failure."""

    weight: float | None
    weight_unit: str | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.weight is not None

    @classmethod
    def failure(cls, error: str) -> WeightResult:
        return cls(weight=None, weight_unit=None, error=error)


def find_gauge_weight(
    gauge_weights: Iterable[GaugeWeight], gauge: str
) -> GaugeWeight | None:
    return next((gw for gw in gauge_weights if gw.gauge == gauge), None)


def profile_length_to_weight(
    length: Any,
    length_unit: str,
    gauge_weights: Iterable[GaugeWeight],
    gauge: str | None,
    weight_unit: str | None,
) -> WeightResult:
    """Weigh a length of profile at the given gauge.

    The gauge entry's ``weight_per_unit_length`` is taken to already be in
    ``weight_unit``; the length is converted into the entry's ``unit_length``
    before multiplying.

    Args:
        length: Positive length of profile.
        length_unit: Linear unit of ``length``.
        gauge_weights: The material's gauge weight table.
        gauge: Gauge to weigh at.
        weight_unit: The material's weight unit, reported on the result.

    Returns:
        WeightResult with the weight rounded to 5 decimals, or an error.
    """
    if (
        isinstance(length, bool)
        or not isinstance(length, (int, float))
        or not math.isfinite(length)
        or length <= 0
    ):
        return WeightResult.failure("Invalid input length. Must be a positive number.")
    if not weight_unit:
        return WeightResult.failure("Material has no weight unit.")
    if not gauge:
        return WeightResult.failure(
            "Gauge must be specified for profile weight calculation."
        )

    gauge_info = find_gauge_weight(gauge_weights, gauge)
    if gauge_info is None:
        return WeightResult.failure(f"Weight information for gauge '{gauge}' not found.")
    if gauge_info.weight_per_unit_length is None or not gauge_info.unit_length:
        return WeightResult.failure(f"Incomplete weight/length data for gauge '{gauge}'.")

    try:
        per_unit = parse_external_length(
            gauge_info.weight_per_unit_length, f"gauge '{gauge}' weight"
        )
    except ProfileCuttingError as exc:
        return WeightResult.failure(str(exc))

    conversion = convert_unit(length, length_unit, gauge_info.unit_length)
    if not conversion.ok:
        return WeightResult.failure(
            f"Error converting input length unit: {conversion.error}"
        )

    weight = (Decimal(str(conversion.result)) * Decimal(str(per_unit))).quantize(
        WEIGHT_PLACES, rounding=ROUND_HALF_UP
    )
    return WeightResult(weight=float(weight), weight_unit=weight_unit)
