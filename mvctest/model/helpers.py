"""Model assertion helpers: validity, declared rules and relationships.

Mix :class:`ModelHelpers` into a test class (pytest or unittest) and call the
``assert_*`` methods on model classes or instances::

    class TestPost(ModelHelpers):
        def test_title_rules(self):
            self.assert_validates_required(Post(), "title")
            self.assert_validates_between(Post(), "title", 3, 120)

        def test_relations(self):
            self.assert_belongs_to(Post, "author")
            self.assert_has_many(Post, "comments")
"""

from __future__ import annotations

import logging
from typing import Any

from mvctest.comm.capability import (
    assert_contains,
    assert_true,
    class_name,
    require_method,
    responds_to,
)
from mvctest.comm.config import get_config
from mvctest.comm.types import BuilderCall, RelationKind, RuleSpecError
from mvctest.model import relations
from mvctest.model.rules import format_rule, normalize_rule_map

logger = logging.getLogger(__name__)


class ModelHelpers:
    """Assertions about model validity, validation rules and relationships."""

    # -- validity ------------------------------------------------------------

    def assert_valid(self, model: Any, message: str | None = None) -> None:
        """Assert that *model* is valid. Requires an ``is_valid()`` method."""
        method = get_config().methods.is_valid
        message = message or f"Expected {class_name(model)} model to be valid."

        require_method(model, method, f"Expected {method}() method on model.")
        assert_true(getattr(model, method)(), message)

    def assert_invalid(self, model: Any, message: str | None = None) -> None:
        """Assert that *model* is invalid. Requires an ``is_invalid()`` method."""
        method = get_config().methods.is_invalid
        message = message or f"Expected {class_name(model)} model to be invalid."

        require_method(model, method, f"Expected {method}() method on model.")
        assert_true(getattr(model, method)(), message)

    def assert_valid_with(
        self, model: Any, attribute: str, value: Any = None, message: str | None = None
    ) -> None:
        """Assert that *model* is valid once *attribute* is set to *value*."""
        message = message or f"Expected {class_name(model)} to be valid with {attribute} as {value!r}."
        self.set_model_attribute(model, attribute, value)
        self.assert_valid(model, message)

    def assert_valid_without(self, model: Any, attribute: str, message: str | None = None) -> None:
        message = message or f"Expected {class_name(model)} to be valid without {attribute}."
        self.assert_valid_with(model, attribute, None, message)

    def assert_invalid_with(
        self, model: Any, attribute: str, value: Any = None, message: str | None = None
    ) -> None:
        """Assert that *model* is invalid once *attribute* is set to *value*."""
        message = message or f"Expected {class_name(model)} to be invalid with {attribute} as {value!r}."
        self.set_model_attribute(model, attribute, value)
        self.assert_invalid(model, message)

    def assert_invalid_without(self, model: Any, attribute: str, message: str | None = None) -> None:
        message = message or f"Expected {class_name(model)} to be invalid without {attribute}."
        self.assert_invalid_with(model, attribute, None, message)

    def set_model_attribute(self, model: Any, attribute: str, value: Any) -> None:
        """Set *attribute* through the model's setter, or ``setattr`` without one."""
        setter = get_config().methods.set_attribute
        if responds_to(model, setter):
            getattr(model, setter)(attribute, value)
        else:
            setattr(model, attribute, value)

    # -- rules ---------------------------------------------------------------

    def get_default_rules(self, model: Any) -> dict[str, list[str]]:
        """Return the model's default rules, every spec normalized to a list."""
        method = get_config().methods.default_rules
        require_method(model, method, f"Expected {method}() method on model.")
        try:
            return normalize_rule_map(getattr(model, method)())
        except RuleSpecError as exc:
            raise AssertionError(f"Invalid rules on {class_name(model)}: {exc}") from exc

    def get_attribute_rules(self, model: Any, attribute: str) -> list[str]:
        """Return the rule tokens of *attribute*, ``[]`` if it has none."""
        return self.get_default_rules(model).get(attribute, [])

    def assert_validates_with(
        self, model: Any, attribute: str, rule: str, message: str | None = None
    ) -> None:
        """Assert that *attribute* is validated with the rule token *rule*."""
        rules = self.get_attribute_rules(model, attribute)
        assert_contains(
            rule, rules,
            message or f"Expected {attribute} to have '{rule}' validation, got {rules!r}.",
        )

    def _validates(self, model: Any, attribute: str, name: str, *params: Any) -> None:
        if params:
            joined = format_rule(name, *params).split(":", 1)[1]
            message = f"Expected {attribute} to have '{name}' validation with {joined}."
        else:
            message = f"Expected {attribute} to have '{name}' validation."
        self.assert_validates_with(model, attribute, format_rule(name, *params), message)

    def assert_validates_accepted(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "accepted")

    def assert_validates_active_url(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "active_url")

    def assert_validates_after(self, model: Any, attribute: str, date: str) -> None:
        self._validates(model, attribute, "after", date)

    def assert_validates_alpha(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "alpha")

    def assert_validates_alpha_dash(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "alpha_dash")

    def assert_validates_alpha_num(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "alpha_num")

    def assert_validates_array(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "array")

    def assert_validates_before(self, model: Any, attribute: str, date: str) -> None:
        self._validates(model, attribute, "before", date)

    def assert_validates_between(self, model: Any, attribute: str, min: Any, max: Any) -> None:
        self._validates(model, attribute, "between", min, max)

    def assert_validates_boolean(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "boolean")

    def assert_validates_confirmed(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "confirmed")

    def assert_validates_date(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "date")

    def assert_validates_date_format(self, model: Any, attribute: str, format: str) -> None:
        self._validates(model, attribute, "date_format", format)

    def assert_validates_different(self, model: Any, attribute: str, field: str) -> None:
        self._validates(model, attribute, "different", field)

    def assert_validates_digits(self, model: Any, attribute: str, value: Any) -> None:
        self._validates(model, attribute, "digits", value)

    def assert_validates_digits_between(self, model: Any, attribute: str, min: Any, max: Any) -> None:
        self._validates(model, attribute, "digits_between", min, max)

    def assert_validates_email(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "email")

    def assert_validates_exists(self, model: Any, attribute: str, parameters: Any) -> None:
        """``exists:table,column``; *parameters* as a joined string or a sequence."""
        self._validates(model, attribute, "exists", parameters)

    def assert_validates_image(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "image")

    def assert_validates_in(self, model: Any, attribute: str, values: Any) -> None:
        self._validates(model, attribute, "in", values)

    def assert_validates_integer(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "integer")

    def assert_validates_ip(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "ip")

    def assert_validates_max(self, model: Any, attribute: str, value: Any) -> None:
        self._validates(model, attribute, "max", value)

    def assert_validates_mimes(self, model: Any, attribute: str, values: Any) -> None:
        self._validates(model, attribute, "mimes", values)

    def assert_validates_min(self, model: Any, attribute: str, value: Any) -> None:
        self._validates(model, attribute, "min", value)

    def assert_validates_not_in(self, model: Any, attribute: str, values: Any) -> None:
        self._validates(model, attribute, "not_in", values)

    def assert_validates_numeric(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "numeric")

    def assert_validates_regex(self, model: Any, attribute: str, pattern: str) -> None:
        self._validates(model, attribute, "regex", pattern)

    def assert_validates_required(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "required")

    def assert_validates_required_if(self, model: Any, attribute: str, field: str, value: Any) -> None:
        self._validates(model, attribute, "required_if", field, value)

    def assert_validates_required_with(self, model: Any, attribute: str, values: Any) -> None:
        self._validates(model, attribute, "required_with", values)

    def assert_validates_required_with_all(self, model: Any, attribute: str, values: Any) -> None:
        self._validates(model, attribute, "required_with_all", values)

    def assert_validates_required_without(self, model: Any, attribute: str, values: Any) -> None:
        self._validates(model, attribute, "required_without", values)

    def assert_validates_required_without_all(self, model: Any, attribute: str, values: Any) -> None:
        self._validates(model, attribute, "required_without_all", values)

    def assert_validates_same(self, model: Any, attribute: str, field: str) -> None:
        self._validates(model, attribute, "same", field)

    def assert_validates_size(self, model: Any, attribute: str, value: Any) -> None:
        self._validates(model, attribute, "size", value)

    def assert_validates_timezone(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "timezone")

    def assert_validates_unique(self, model: Any, attribute: str, parameters: Any) -> None:
        """``unique:table,column,except,id_column``; a joined string or a sequence."""
        self._validates(model, attribute, "unique", parameters)

    def assert_validates_url(self, model: Any, attribute: str) -> None:
        self._validates(model, attribute, "url")

    # -- relationships -------------------------------------------------------

    def assert_responds_to(
        self, target: Any, method: str, message: str = "Expected class to have method."
    ) -> None:
        require_method(target, method, message)

    def assert_belongs_to(self, target: Any, relation: str) -> None:
        self.assert_relationship(target, relation, RelationKind.BELONGS_TO)

    def assert_belongs_to_many(self, target: Any, relation: str) -> None:
        self.assert_relationship(target, relation, RelationKind.BELONGS_TO_MANY)

    def assert_has_one(self, target: Any, relation: str) -> None:
        self.assert_relationship(target, relation, RelationKind.HAS_ONE)

    def assert_has_many(self, target: Any, relation: str) -> None:
        self.assert_relationship(target, relation, RelationKind.HAS_MANY)

    def assert_relationship(self, target: Any, relation: str, kind: RelationKind | str) -> None:
        """Assert that *target* declares *relation* as a relationship of *kind*.

        *target* may be a class or an instance. Builder-style relations are
        called twice against a spy: the first call records the builder
        arguments, the second checks that the builder runs exactly once with
        a target matching the relation name (singularized, or as given) and
        the same trailing arguments. When the builder gets no positional
        arguments, e.g. ``self.belongs_to(related=Comment)``, only the call
        count is checked. SQLAlchemy mapped relationships are checked through
        the mapper instead.
        """
        logger.debug("Checking %s.%s is %s", class_name(target), relation, RelationKind(kind).value)
        relations.check_relationship(target, relation, kind)

    def get_relationship_arguments(
        self, target: Any, relation: str, kind: RelationKind | str
    ) -> BuilderCall | None:
        """Return the arguments *relation* passes to the *kind* builder."""
        require_method(relations.as_class(target), relation, "Expected class to have method.")
        return relations.capture_builder_call(target, relation, kind)
