"""Pytest configuration and shared fixtures for plycut tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from plycut.domain.value_objects import Piece
from plycut.infrastructure.bin_packing import BinPackingConfig, SheetConfig


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def preset_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the custom preset store at a per-test file.

    Keeps tests away from the user's ~/.plycut/presets.json.
    """
    store = tmp_path / "presets" / "presets.json"
    monkeypatch.setenv("PLYCUT_PRESETS_FILE", str(store))
    return store


# =============================================================================
# Engine fixtures
# =============================================================================


@pytest.fixture
def square_sheet() -> SheetConfig:
    """Create a 1000x1000 sheet."""
    return SheetConfig(width=1000.0, height=1000.0)


@pytest.fixture
def square_config(square_sheet: SheetConfig) -> BinPackingConfig:
    """Create a packing configuration for 1000x1000 sheets, no kerf."""
    return BinPackingConfig(sheet_size=square_sheet, kerf=0.0, max_sheets=5)


@pytest.fixture
def make_piece() -> Callable[..., Piece]:
    """Factory for pieces with generated ids."""
    counter = iter(range(1_000_000))

    def _make(
        width: float, height: float, label: str = "Part", **kwargs: str
    ) -> Piece:
        return Piece(
            id=f"p{next(counter)}",
            label=label,
            width=width,
            height=height,
            **kwargs,
        )

    return _make


# =============================================================================
# Job files
# =============================================================================


@pytest.fixture
def write_job(tmp_path: Path) -> Callable[..., Path]:
    """Write a job file and return its path.

    Dictionaries are dumped as JSON; strings are written unchanged so tests
    can produce malformed files.
    """

    def _write(content: dict[str, Any] | str, name: str = "job.json") -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
