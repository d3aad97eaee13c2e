"""Tests for Config validation and display."""

import pytest

from farmplanner.config import Config


def test_defaults_are_usable():
    assert Config.TILE_SIZE > 0
    assert "Tile Size" in Config.display()


def test_validate_rejects_bad_tile_size(monkeypatch):
    monkeypatch.setattr(Config, "TILE_SIZE", 0)
    with pytest.raises(ValueError, match="TILE_SIZE"):
        Config.validate()


def test_validate_rejects_missing_data_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "DATA_DIR", tmp_path / "missing")
    with pytest.raises(ValueError, match="DATA_DIR"):
        Config.validate()


def test_validate_accepts_existing_data_dir(monkeypatch, data_dir):
    monkeypatch.setattr(Config, "DATA_DIR", data_dir)
    Config.validate()
