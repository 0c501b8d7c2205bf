"""Configuration merging utilities for CLI override support.

This module merges CLI arguments with job file values, following the
precedence: CLI args > config values > defaults.

Only non-None CLI arguments override configuration values.
"""

from typing import Any

from plycut.application.config.loader import validate_model
from plycut.application.config.schema import JobConfiguration, SheetConfigSchema
from plycut.domain.value_objects import Unit


def merge_config_with_cli(
    config: JobConfiguration,
    *,
    sheet_width: float | None = None,
    sheet_height: float | None = None,
    sheets: int | None = None,
    kerf: float | None = None,
    unit: Unit | str | None = None,
) -> JobConfiguration:
    """Merge CLI arguments with job configuration values.

    Args:
        config: The base JobConfiguration to merge with
        sheet_width: Override for sheet.width (if not None)
        sheet_height: Override for sheet.height (if not None)
        sheets: Override for sheet.quantity (if not None)
        kerf: Override for sheet.kerf (if not None)
        unit: Override for unit (if not None)

    Returns:
        A new JobConfiguration with merged values.

    Raises:
        ConfigError: If an override fails the job file validation rules.

    Example:
        >>> config = load_config(Path("job.json"))
        >>> merged = merge_config_with_cli(config, kerf=3.0)
        >>> merged.sheet.kerf
        3.0
    """
    sheet_data = _build_sheet_data(config, sheet_width, sheet_height, sheets, kerf)

    return JobConfiguration(
        schema_version=config.schema_version,
        unit=Unit(unit) if unit is not None else config.unit,
        sheet=validate_model(SheetConfigSchema, sheet_data),
        furniture=config.furniture,
    )


def _build_sheet_data(
    config: JobConfiguration,
    width: float | None,
    height: float | None,
    quantity: int | None,
    kerf: float | None,
) -> dict[str, Any]:
    sheet_data = config.sheet.model_dump()
    overrides = {
        "width": width,
        "height": height,
        "quantity": quantity,
        "kerf": kerf,
    }
    for key, value in overrides.items():
        if value is not None:
            sheet_data[key] = value
    return sheet_data
