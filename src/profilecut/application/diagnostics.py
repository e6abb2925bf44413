"""Diagnostics sinks for cutting calculations."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class CollectingDiagnostics:
    """Records warnings in memory and forwards them to a logger.

    Used where warnings must be shown to a user (job validation, API
    responses) instead of only going to the log.
    """

    def __init__(self, forward_to: logging.Logger | None = None) -> None:
        self.warnings: list[str] = []
        self._forward_to = forward_to or logger

    def warning(self, msg: str, *args: Any) -> None:
        self.warnings.append(msg % args if args else msg)
        self._forward_to.warning(msg, *args)
