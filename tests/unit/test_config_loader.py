"""Unit tests for the job file loader and its error reporting."""

import json
from pathlib import Path

import pytest

from plycut.application.config import ConfigError, load_config, load_config_from_dict
from plycut.application.config.loader import _format_json_path


class TestFormatJsonPath:
    """Tests for location formatting."""

    def test_nested_fields(self) -> None:
        assert _format_json_path(("sheet", "width")) == "sheet.width"

    def test_list_indices(self) -> None:
        loc = ("furniture", 0, "cuts", 1, "height")
        assert _format_json_path(loc) == "furniture[0].cuts[1].height"

    def test_leading_index(self) -> None:
        assert _format_json_path((2, "name")) == "[2].name"


class TestLoadConfig:
    """Tests for load_config."""

    def test_valid_file(self, write_job) -> None:
        """A valid job file loads."""
        path = write_job(json.dumps({"furniture": [{"preset": "table"}]}))
        config = load_config(path)
        assert config.furniture[0].preset == "table"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file reports file_not_found."""
        path = tmp_path / "nope.json"
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == path
        assert str(exc_info.value) == f"Config file not found: {path}"

    def test_invalid_json(self, write_job) -> None:
        """Malformed JSON reports line and column."""
        path = write_job('{\n  "sheet": {,\n}')
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 2
        assert "line 2" in error.message

    def test_validation_error_details(self, write_job) -> None:
        """Schema violations carry JSON paths and offending values."""
        path = write_job(
            json.dumps(
                {"furniture": [{"cuts": [{"name": "Leg", "width": -5, "height": 10}]}]}
            )
        )
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        error = exc_info.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "furniture[0].cuts[0].width"
        assert error.details[0]["value"] == -5
        assert error.message.startswith("Configuration validation failed:")
        assert "furniture[0].cuts[0].width" in error.message
        assert "(got: -5)" in error.message


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict."""

    def test_valid(self) -> None:
        config = load_config_from_dict({"sheet": {"width": 1000, "height": 1000}})
        assert config.sheet.width == 1000

    def test_unknown_field(self) -> None:
        """Extra top-level keys are rejected with a validation error."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"grain": "length"})
        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == "grain"
        assert exc_info.value.path is None
