"""Unit tests for PresetManager."""

import json
from pathlib import Path

import pytest

from plycut.application.config import ConfigError, CutConfig, load_config
from plycut.application.presets import (
    BUILTIN_PRESETS,
    PresetManager,
    PresetNotFoundError,
    default_store_path,
    slugify,
)

DESK_CUTS = [
    CutConfig(name="Top", width=1200, height=600),
    CutConfig(name="Side", width=600, height=720, quantity=2),
]


@pytest.fixture
def manager(preset_store: Path) -> PresetManager:
    """Manager writing to a temporary store."""
    return PresetManager(preset_store)


class TestSlugify:
    """Tests for slugify."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Desk", "desk"),
            ("Kid's Bunk Bed", "kid-s-bunk-bed"),
            ("  Shelf  #2 ", "shelf-2"),
            ("???", "preset"),
        ],
    )
    def test_slugify(self, name: str, expected: str) -> None:
        assert slugify(name) == expected


class TestDefaultStorePath:
    """Tests for default_store_path."""

    def test_env_override(self, preset_store: Path) -> None:
        assert default_store_path() == preset_store

    def test_home_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PLYCUT_PRESETS_FILE")
        assert default_store_path() == Path.home() / ".plycut" / "presets.json"


class TestBuiltinPresets:
    """Tests for bundled presets."""

    def test_all_bundled_presets_load(self, manager: PresetManager) -> None:
        for key in BUILTIN_PRESETS:
            preset = manager.get_preset(key)
            assert preset.cuts

    def test_chair(self, manager: PresetManager) -> None:
        chair = manager.get_preset("chair")
        assert chair.name == "Chair"
        assert [(c.name, c.width, c.height, c.quantity) for c in chair.cuts] == [
            ("Leg", 50, 400, 4),
            ("Seat", 400, 400, 1),
            ("Back Slat", 80, 300, 2),
        ]

    def test_list_bundled(self, manager: PresetManager) -> None:
        summaries = manager.list_presets()
        assert [s.key for s in summaries] == list(BUILTIN_PRESETS)
        assert all(s.builtin for s in summaries)
        chair = summaries[0]
        assert chair.piece_count == 7
        assert chair.description == BUILTIN_PRESETS["chair"]

    def test_exists_and_builtin(self, manager: PresetManager) -> None:
        assert manager.exists("bed-frame")
        assert manager.is_builtin("bed-frame")
        assert not manager.exists("wardrobe")

    def test_not_found(self, manager: PresetManager) -> None:
        with pytest.raises(PresetNotFoundError, match="Preset not found: wardrobe"):
            manager.get_preset("wardrobe")


class TestCustomPresets:
    """Tests for saving and deleting custom presets."""

    def test_save_and_get(self, manager: PresetManager, preset_store: Path) -> None:
        key = manager.save_custom("Desk", DESK_CUTS)

        assert key == "custom-desk"
        assert preset_store.exists()
        preset = manager.get_preset(key)
        assert preset.name == "Desk"
        saved = [c.model_dump() for c in preset.cuts]
        assert saved == [c.model_dump() for c in DESK_CUTS]
        assert not manager.is_builtin(key)

    def test_keys_unique(self, manager: PresetManager) -> None:
        """Saving the same name twice adds a numeric suffix."""
        assert manager.save_custom("Desk", DESK_CUTS) == "custom-desk"
        assert manager.save_custom("Desk", DESK_CUTS) == "custom-desk-2"
        assert manager.save_custom("desk", DESK_CUTS) == "custom-desk-3"

    def test_listed_after_bundled(self, manager: PresetManager) -> None:
        manager.save_custom("Desk", DESK_CUTS)
        summary = manager.list_presets()[-1]
        assert summary.key == "custom-desk"
        assert summary.builtin is False
        assert summary.description == "Custom preset"
        assert summary.piece_count == 3

    def test_persisted_between_managers(self, preset_store: Path) -> None:
        PresetManager(preset_store).save_custom("Desk", DESK_CUTS)
        assert PresetManager(preset_store).exists("custom-desk")

    def test_delete(self, manager: PresetManager) -> None:
        key = manager.save_custom("Desk", DESK_CUTS)
        manager.delete_custom(key)
        assert not manager.exists(key)

    def test_delete_bundled_rejected(self, manager: PresetManager) -> None:
        with pytest.raises(ValueError, match="Bundled presets cannot be deleted"):
            manager.delete_custom("chair")

    def test_delete_missing(self, manager: PresetManager) -> None:
        with pytest.raises(PresetNotFoundError):
            manager.delete_custom("custom-nothing")

    def test_corrupt_store(self, manager: PresetManager, preset_store: Path) -> None:
        """A store that is not a JSON object is a configuration error."""
        preset_store.parent.mkdir(parents=True, exist_ok=True)
        preset_store.write_text(json.dumps(["desk"]), encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            manager.list_presets()
        assert exc_info.value.error_type == "validation"


class TestInitPreset:
    """Tests for init_preset."""

    def test_writes_loadable_job(self, manager: PresetManager, tmp_path: Path) -> None:
        output = tmp_path / "table.json"
        manager.init_preset("table", output)

        config = load_config(output)
        assert len(config.furniture) == 1
        assert config.furniture[0].preset == "table"
        assert config.furniture[0].name == "Table"

    def test_unknown_key(self, manager: PresetManager, tmp_path: Path) -> None:
        with pytest.raises(PresetNotFoundError):
            manager.init_preset("sofa", tmp_path / "sofa.json")
