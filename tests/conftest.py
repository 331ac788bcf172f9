"""Pytest configuration and fixtures for bbox2d tests."""

import pytest

from bbox2d import BoundingBox, config


@pytest.fixture
def unit_box():
    """The unit square [0, 1] x [0, 1]."""
    return BoundingBox(0.0, 1.0, 0.0, 1.0)


@pytest.fixture
def fresh_settings(monkeypatch):
    """Reload settings from the environment after monkeypatching env vars."""

    def _reload() -> config.Settings:
        settings = config.Settings()
        monkeypatch.setattr(config, "settings", settings)
        return settings

    return _reload
