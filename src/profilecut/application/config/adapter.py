"""Convert validated job configuration into domain objects."""

from __future__ import annotations

from typing import Any

from profilecut.application.config.schema import (
    CuttingConfigSchema,
    JobConfiguration,
    MaterialConfig,
    PlanConfig,
)
from profilecut.domain.services import CuttingConfig
from profilecut.domain.value_objects import (
    GaugeWeight,
    ProfileMaterial,
    RequiredCutItem,
    StandardLengthEntry,
    StockEntry,
)


def config_to_material(config: MaterialConfig) -> ProfileMaterial:
    """Convert the material section to an immutable ProfileMaterial."""
    return ProfileMaterial(
        id=config.id,
        company_id=config.company_id,
        category=config.category,
        name=config.name,
        standard_lengths=tuple(
            StandardLengthEntry(length=sl.length, unit=sl.unit)
            for sl in config.standard_lengths
        ),
        stock_by_length=tuple(
            StockEntry(length=s.length, unit=s.unit, quantity=s.quantity)
            for s in config.stock_by_length
        ),
        gauge_weights=tuple(
            GaugeWeight(
                gauge=gw.gauge,
                weight_per_unit_length=gw.weight_per_unit_length,
                unit_length=gw.unit_length.value,
            )
            for gw in config.gauge_weights
        ),
        weight_unit=config.weight_unit,
    )


def config_to_cutting_config(config: CuttingConfigSchema | None) -> CuttingConfig:
    """Convert cutting parameters; defaults apply when the section is absent."""
    if config is None:
        return CuttingConfig()
    return CuttingConfig(
        kerf_in=config.kerf_in,
        scrap_threshold_ft=config.scrap_threshold_ft,
        epsilon_in=config.epsilon_in,
    )


def config_to_required_cuts(config: JobConfiguration) -> list[Any]:
    """Required cut lengths in feet, as supplied."""
    return list(config.required_cuts_ft)


def config_to_plan_cuts(config: PlanConfig) -> list[RequiredCutItem]:
    """Identified plan cuts; unnamed cuts are labelled by position."""
    return [
        RequiredCutItem(length=cut.length, identifier=cut.identifier or f"cut-{i + 1}")
        for i, cut in enumerate(config.cuts)
    ]
