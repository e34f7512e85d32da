"""pytest plugin. Enable with ``pytest_plugins = ["mvctest.plugin"]``."""

from __future__ import annotations

import pytest

from mvctest.comm import config as helpers_config
from mvctest.comm.types import ConfigError
from mvctest.helpers import TestingHelpers


def pytest_addoption(parser):
    parser.addoption(
        "--mvctest-config",
        default=None,
        help="Path to an mvctest YAML config file (optional)",
    )


def pytest_configure(config):
    path = config.getoption("--mvctest-config")
    if path is None:
        return
    try:
        helpers_config.set_config(helpers_config.load_config(path))
    except ConfigError as exc:
        raise pytest.UsageError(str(exc)) from exc


@pytest.fixture(scope="session")
def mvctest_config():
    return helpers_config.get_config()


@pytest.fixture()
def helpers():
    """A :class:`TestingHelpers` instance for function-style tests."""
    return TestingHelpers()
