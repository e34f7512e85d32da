"""Shared fixtures for the helper test-suite."""

from __future__ import annotations

import pytest

from mvctest.comm import config as helpers_config

pytest_plugins = ["mvctest.plugin", "pytester"]


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from the default helper configuration."""
    helpers_config.reset()
    yield helpers_config.get_config()
    helpers_config.reset()
