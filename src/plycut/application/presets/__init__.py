"""Furniture presets.

This package provides bundled furniture presets, a JSON store for
user-saved presets and a PresetManager class for accessing both.
"""

from plycut.application.presets.manager import (
    BUILTIN_PRESETS,
    PresetManager,
    PresetNotFoundError,
    PresetSummary,
    default_store_path,
    slugify,
)

__all__ = [
    "BUILTIN_PRESETS",
    "PresetManager",
    "PresetNotFoundError",
    "PresetSummary",
    "default_store_path",
    "slugify",
]
