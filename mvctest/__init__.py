"""Assertion helpers for testing Flask views and model classes."""

from mvctest.comm.config import HelpersConfig, get_config, load_config, set_config
from mvctest.comm.types import (
    BuilderCall,
    ConfigError,
    MissingCapabilityError,
    MvcTestError,
    RelationKind,
    RuleSpecError,
)
from mvctest.helpers import TestingHelpers
from mvctest.model.helpers import ModelHelpers
from mvctest.web.helpers import ControllerHelpers
from mvctest.web.views import ViewResponse, capture_templates

__all__ = [
    "BuilderCall",
    "ConfigError",
    "ControllerHelpers",
    "HelpersConfig",
    "MissingCapabilityError",
    "ModelHelpers",
    "MvcTestError",
    "RelationKind",
    "RuleSpecError",
    "TestingHelpers",
    "ViewResponse",
    "capture_templates",
    "get_config",
    "load_config",
    "set_config",
]
