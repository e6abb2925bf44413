"""Job configuration schema and loading.

Public API:
    - JobConfiguration: Root job model
    - MaterialConfig: Profile material and catalogue
    - PlanConfig: Stock-limited cutting plan request
    - CuttingConfigSchema: Kerf, offcut threshold and tolerance
    - load_config: Load a job from a JSON file
    - load_config_from_dict: Load a job from a dictionary
    - ConfigError: Exception for configuration errors
    - config_to_*: Convert configuration sections to domain objects

Example:
    >>> from pathlib import Path
    >>> from profilecut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     job = load_config(Path("window-frames.json"))
    ...     print(f"{len(job.required_cuts_ft)} cuts for {job.material.name}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from profilecut.application.config.adapter import (
    config_to_cutting_config,
    config_to_material,
    config_to_plan_cuts,
    config_to_required_cuts,
)
from profilecut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from profilecut.application.config.schema import (
    SUPPORTED_VERSIONS,
    CuttingConfigSchema,
    GaugeWeightConfig,
    JobConfiguration,
    MaterialConfig,
    PlanConfig,
    PlanCutConfig,
    StandardLengthConfig,
    StockConfig,
)

__all__ = [
    "ConfigError",
    "CuttingConfigSchema",
    "GaugeWeightConfig",
    "JobConfiguration",
    "MaterialConfig",
    "PlanConfig",
    "PlanCutConfig",
    "SUPPORTED_VERSIONS",
    "StandardLengthConfig",
    "StockConfig",
    "config_to_cutting_config",
    "config_to_material",
    "config_to_plan_cuts",
    "config_to_required_cuts",
    "load_config",
    "load_config_from_dict",
]
