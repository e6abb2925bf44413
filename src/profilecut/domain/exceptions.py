"""Domain errors for profile cutting calculations."""

from __future__ import annotations

from typing import Any


class ProfileCuttingError(Exception):
    """Raised when a cutting calculation cannot be performed for its input.

    Every instance is a client/input error: re-running the same call with the
    same input fails the same way, so callers should not retry.

    Attributes:
        message: Human-readable description of the problem.
        error_type: Category of the error (invalid_material, invalid_catalogue,
            invalid_cut, infeasible, insufficient_stock, conversion).
        details: Optional structured context for API responses.
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        error_type: str = "invalid_input",
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message
