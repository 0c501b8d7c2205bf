"""Job configuration schema and loading system.

This package provides JSON-based loading and validation of cut jobs. It
includes Pydantic models for schema validation, a loader with
comprehensive error handling, CLI override merging and the adapter that
turns a job into engine inputs.

Public API:
    - JobConfiguration: Root configuration model
    - SheetConfigSchema: Stock sheet model
    - FurnitureConfig: Furniture item model
    - CutConfig: Single part model
    - PresetConfig: Reusable furniture template model
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - merge_config_with_cli: Apply CLI overrides to a configuration
    - config_to_pieces: Expand furniture into engine pieces
    - config_to_bin_packing: Convert the sheet section to engine config

Example:
    >>> from pathlib import Path
    >>> from plycut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("job.json"))
    ...     print(f"Sheet: {config.sheet.width}x{config.sheet.height}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from plycut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from plycut.application.config.schema import (
    SUPPORTED_VERSIONS,
    CutConfig,
    FurnitureConfig,
    JobConfiguration,
    PresetConfig,
    SheetConfigSchema,
)
from plycut.application.config.merger import merge_config_with_cli
from plycut.application.config.adapter import (
    PALETTE,
    ResolvedFurniture,
    config_to_bin_packing,
    config_to_pieces,
    resolve_furniture,
)

__all__ = [
    # Loader
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    # Schema
    "SUPPORTED_VERSIONS",
    "CutConfig",
    "FurnitureConfig",
    "JobConfiguration",
    "PresetConfig",
    "SheetConfigSchema",
    # Merger
    "merge_config_with_cli",
    # Adapter
    "PALETTE",
    "ResolvedFurniture",
    "config_to_bin_packing",
    "config_to_pieces",
    "resolve_furniture",
]
