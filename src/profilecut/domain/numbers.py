"""Parsing of externally supplied numeric values.

Lengths reach the optimizer as plain numbers, numeric strings, Decimal
instances, or the ``{"$numberDecimal": "..."}`` wrapper used by document
stores. This module is the only place that knows about those shapes.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from .exceptions import ProfileCuttingError

DECIMAL_WRAPPER_KEY = "$numberDecimal"


def parse_external_length(
    value: Any,
    description: str | None = None,
    error_type: str = "invalid_input",
) -> float:
    """Normalize an external numeric representation to a finite float.

    Args:
        value: Number, numeric string, Decimal, or mapping with a
            ``$numberDecimal`` entry.
        description: Optional context for the error message, such as
            "standard length at index 2".
        error_type: error_type to raise with on failure.

    Returns:
        The value as a float.

    Raises:
        ProfileCuttingError: If the value has an unsupported shape, cannot be
            parsed, or is not finite.
    """
    context = f" for {description}" if description else ""

    if isinstance(value, bool) or value is None:
        raise ProfileCuttingError(
            f"Invalid length value{context}: {value!r}", error_type
        )

    raw: Any = value
    if isinstance(value, Mapping):
        if DECIMAL_WRAPPER_KEY not in value:
            raise ProfileCuttingError(
                f"Invalid object length value{context}: {value!r}",
                error_type,
            )
        raw = value[DECIMAL_WRAPPER_KEY]

    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            number = float(raw)
        except OverflowError:
            number = math.inf
    elif isinstance(raw, (str, Decimal)):
        try:
            number = float(Decimal(str(raw).strip()))
        except (InvalidOperation, ValueError):
            raise ProfileCuttingError(
                f"Cannot parse length{context} from {value!r}", error_type
            ) from None
    else:
        raise ProfileCuttingError(
            f"Invalid length value type{context}: {value!r}", error_type
        )

    if not math.isfinite(number):
        raise ProfileCuttingError(
            f"Length{context} must be a finite number, got {value!r}",
            error_type,
        )
    return number


def length_to_string(value: Any) -> str:
    """Return the catalogue string form of an external length value.

    Used to label standard lengths the way they were entered ("12", "6.5").
    """
    if isinstance(value, Mapping) and DECIMAL_WRAPPER_KEY in value:
        return str(value[DECIMAL_WRAPPER_KEY]).strip()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
