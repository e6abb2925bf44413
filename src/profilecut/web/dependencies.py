"""FastAPI dependency injection for cutting services."""

from typing import Annotated

from fastapi import Depends

from profilecut.application.diagnostics import CollectingDiagnostics


def get_diagnostics() -> CollectingDiagnostics:
    """Fresh warning collector per request."""
    return CollectingDiagnostics()


DiagnosticsDep = Annotated[CollectingDiagnostics, Depends(get_diagnostics)]
