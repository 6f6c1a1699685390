"""Job file configuration for the nesting optimizer.

Public API:
    - NestingConfiguration: Root job file model
    - PanelConfig, SheetConfig, SheetSearchConfig: Nested models
    - load_config: Load a job from a JSON file
    - load_config_from_dict: Load a job from a dictionary
    - ConfigError: Exception for configuration errors
    - config_to_request: Convert a job into an OptimizationRequest

Example:
    >>> from pathlib import Path
    >>> from panelnest.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("job.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from panelnest.application.config.adapter import config_to_request, search_config_to_input
from panelnest.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from panelnest.application.config.schema import (
    SUPPORTED_VERSIONS,
    NestingConfiguration,
    PanelConfig,
    SheetConfig,
    SheetSearchConfig,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "NestingConfiguration",
    "PanelConfig",
    "SheetConfig",
    "SheetSearchConfig",
    "config_to_request",
    "load_config",
    "load_config_from_dict",
    "search_config_to_input",
]
