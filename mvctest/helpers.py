"""Combined controller + model helpers."""

from __future__ import annotations

from mvctest.model.helpers import ModelHelpers
from mvctest.web.helpers import ControllerHelpers


class TestingHelpers(ControllerHelpers, ModelHelpers):
    """Every assertion helper in one mixin."""
