"""Preset manager for bundled and user-saved furniture presets.

Bundled presets ship as package data. Custom presets live in a JSON store
file keyed by ``custom-<slug>``.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from plycut.application.config.loader import (
    ConfigError,
    read_json_file,
    validate_model,
)
from plycut.application.config.schema import (
    CutConfig,
    JobConfiguration,
    PresetConfig,
)

logger = logging.getLogger(__name__)

PRESETS_FILE_ENV = "PLYCUT_PRESETS_FILE"
CUSTOM_PREFIX = "custom-"

# Bundled preset metadata: key -> description
BUILTIN_PRESETS: dict[str, str] = {
    "chair": "Four legs, a seat and two back slats",
    "table": "Four legs and a top",
    "shelf": "Two sides and three shelf boards",
    "bed-frame": "Rails and twelve slats",
}


class PresetNotFoundError(Exception):
    """Raised when a requested preset does not exist."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Preset not found: {key}")


@dataclass(frozen=True)
class PresetSummary:
    """Listing entry for a preset.

    Attributes:
        key: Lookup key used in job files.
        name: Furniture display name.
        description: Short description of the preset.
        builtin: True for bundled presets.
        piece_count: Number of pieces one item expands to.
    """

    key: str
    name: str
    description: str
    builtin: bool
    piece_count: int


def default_store_path() -> Path:
    """Return the custom preset store path, honoring PLYCUT_PRESETS_FILE."""
    override = os.environ.get(PRESETS_FILE_ENV)
    if override:
        return Path(override)
    return Path.home() / ".plycut" / "presets.json"


def slugify(name: str) -> str:
    """Lowercase ``name`` and collapse non-alphanumerics into dashes."""
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "preset"


class PresetManager:
    """Manager for furniture presets.

    Example:
        manager = PresetManager()
        for summary in manager.list_presets():
            print(f"{summary.key}: {summary.name}")

        key = manager.save_custom("Desk", cuts)
        manager.delete_custom(key)
    """

    def __init__(self, store_path: Path | None = None) -> None:
        """Initialize the PresetManager.

        Args:
            store_path: Custom preset store file. Defaults to
                ``default_store_path()``.
        """
        self._data_package = "plycut.application.presets.data"
        self.store_path = (
            store_path if store_path is not None else default_store_path()
        )

    def list_presets(self) -> list[PresetSummary]:
        """List bundled presets followed by custom presets."""
        summaries = []
        for key, description in BUILTIN_PRESETS.items():
            preset = self.get_preset(key)
            summaries.append(
                PresetSummary(key, preset.name, description, True, _piece_count(preset))
            )
        for key, preset in self._load_custom().items():
            summaries.append(
                PresetSummary(
                    key, preset.name, "Custom preset", False, _piece_count(preset)
                )
            )
        return summaries

    def exists(self, key: str) -> bool:
        """Check if a preset with the given key exists."""
        return key in BUILTIN_PRESETS or key in self._load_custom()

    def is_builtin(self, key: str) -> bool:
        """Check if ``key`` names a bundled preset."""
        return key in BUILTIN_PRESETS

    def get_preset(self, key: str) -> PresetConfig:
        """Get a preset by key.

        Raises:
            PresetNotFoundError: If the preset does not exist.
        """
        if key in BUILTIN_PRESETS:
            return validate_model(PresetConfig, json.loads(self._read_builtin(key)))

        custom = self._load_custom()
        if key not in custom:
            raise PresetNotFoundError(key)
        return custom[key]

    def _read_builtin(self, key: str) -> str:
        try:
            data_files = resources.files(self._data_package)
            return data_files.joinpath(f"{key}.json").read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PresetNotFoundError(key) from e

    def save_custom(self, name: str, cuts: list[CutConfig]) -> str:
        """Save a custom preset and return its key.

        Args:
            name: Furniture display name.
            cuts: Parts making up one item.

        Returns:
            The new key, ``custom-<slug>`` with a numeric suffix when the
            slug is already taken.
        """
        preset = PresetConfig(name=name, cuts=list(cuts))
        custom = self._load_custom()

        base = f"{CUSTOM_PREFIX}{slugify(name)}"
        key = base
        suffix = 2
        while key in custom or key in BUILTIN_PRESETS:
            key = f"{base}-{suffix}"
            suffix += 1

        custom[key] = preset
        self._write_custom(custom)
        logger.info("Saved custom preset %s to %s", key, self.store_path)
        return key

    def delete_custom(self, key: str) -> None:
        """Delete a custom preset.

        Raises:
            ValueError: If ``key`` names a bundled preset.
            PresetNotFoundError: If no custom preset has this key.
        """
        if key in BUILTIN_PRESETS:
            raise ValueError(f"Bundled presets cannot be deleted: {key}")

        custom = self._load_custom()
        if key not in custom:
            raise PresetNotFoundError(key)
        del custom[key]
        self._write_custom(custom)
        logger.info("Deleted custom preset %s", key)

    def init_preset(self, key: str, output_path: Path) -> None:
        """Write a job file that builds one item of the preset.

        Raises:
            PresetNotFoundError: If the preset does not exist.
        """
        preset = self.get_preset(key)
        job = JobConfiguration.model_validate(
            {"furniture": [{"name": preset.name, "preset": key}]}
        )
        content = json.dumps(job.model_dump(mode="json"), indent=2)
        output_path.write_text(content + "\n", encoding="utf-8")

    def _load_custom(self) -> dict[str, PresetConfig]:
        if not self.store_path.exists():
            return {}
        data = read_json_file(self.store_path)
        if not isinstance(data, dict):
            raise ConfigError(
                message=f"Preset store must be a JSON object: {self.store_path}",
                error_type="validation",
                path=self.store_path,
            )
        return {
            key: validate_model(PresetConfig, value, self.store_path)
            for key, value in data.items()
        }

    def _write_custom(self, presets: dict[str, PresetConfig]) -> None:
        self.store_path.parent.mkdir(parents=True, exist_ok=True)
        data = {key: preset.model_dump(mode="json") for key, preset in presets.items()}
        self.store_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _piece_count(preset: PresetConfig) -> int:
    return sum(cut.quantity for cut in preset.cuts)
