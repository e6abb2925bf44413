"""Pytest configuration and shared fixtures for profile cutting tests."""

from __future__ import annotations

from typing import Any

import pytest

from profilecut.application.diagnostics import CollectingDiagnostics
from profilecut.domain import ProfileMaterial, StandardLengthEntry


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


@pytest.fixture
def diagnostics() -> CollectingDiagnostics:
    """Create a fresh warning collector."""
    return CollectingDiagnostics()


@pytest.fixture
def twelve_foot_material() -> ProfileMaterial:
    """Profile sold only in 12ft pipes."""
    return ProfileMaterial(
        id="mat-12",
        company_id="acme",
        name="Square Tube 40x40",
        standard_lengths=(StandardLengthEntry(length=12, unit="ft"),),
    )


@pytest.fixture
def material_document() -> dict[str, Any]:
    """Material as stored, with camelCase keys and decimal wrappers."""
    return {
        "_id": "mat-frame",
        "companyId": "acme",
        "category": "Profile",
        "name": "Window Frame Profile",
        "standardLengths": [
            {"length": {"$numberDecimal": "12"}, "unit": "ft"},
            {"length": "20", "unit": "ft"},
        ],
        "stockByLength": [
            {"length": {"$numberDecimal": "12"}, "unit": "ft", "quantity": 2},
            {"length": 20, "lengthUnit": "ft", "quantity": 1},
        ],
        "gaugeSpecificWeights": [
            {"gauge": "16", "weightPerUnitLength": 0.5, "unitLength": "ft"},
        ],
        "weightUnit": "kg",
    }


@pytest.fixture
def job_data() -> dict[str, Any]:
    """Minimal valid job configuration as a dictionary."""
    return {
        "schema_version": "1.1",
        "company_id": "acme",
        "material": {
            "id": "mat-12",
            "name": "Square Tube 40x40",
            "company_id": "acme",
            "standard_lengths": [{"length": 12, "unit": "ft"}],
            "stock_by_length": [{"length": 12, "unit": "ft", "quantity": 3}],
            "gauge_weights": [
                {"gauge": "18", "weight_per_unit_length": 0.25, "unit_length": "ft"}
            ],
            "weight_unit": "kg",
        },
        "required_cuts_ft": [5, 5, 1.9],
        "plan": {
            "usage_unit": "inches",
            "gauge": "18",
            "cuts": [
                {"length": 60, "identifier": "jamb-left"},
                {"length": 60, "identifier": "jamb-right"},
                {"length": 22.8},
            ],
        },
    }
