"""Tests for ModelHelpers rule-presence assertions."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from mvctest.comm.types import MissingCapabilityError
from mvctest.model.helpers import ModelHelpers


class Ruled:
    def __init__(self, rules):
        self.rules = rules

    def get_default_rules(self):
        return self.rules


@pytest.fixture()
def user():
    return Ruled({
        "name": "required|alpha_dash|between:3,32",
        "email": ["required", "email", "unique:users,email"],
        "role": "in:admin,editor,viewer",
        "age": "integer|min:13|max:120",
        "password": "required|confirmed|different:name",
    })


class TestGetRules(ModelHelpers):
    def test_get_default_rules_normalizes(self, user):
        rules = self.get_default_rules(user)
        assert rules["name"] == ["required", "alpha_dash", "between:3,32"]
        assert rules["email"] == ["required", "email", "unique:users,email"]

    def test_get_attribute_rules(self):
        assert self.get_attribute_rules(Ruled({"zero": "bar"}), "zero") == ["bar"]

    def test_get_attribute_rules_unknown_attribute(self, user):
        assert self.get_attribute_rules(user, "nickname") == []

    def test_missing_get_default_rules(self):
        with pytest.raises(MissingCapabilityError, match=r"get_default_rules\(\)"):
            self.get_default_rules(object())

    def test_non_mapping_rules(self):
        with pytest.raises(AssertionError, match="Invalid rules on Ruled"):
            self.get_default_rules(Ruled("foo"))

    def test_rules_fetched_once_per_assertion(self):
        model = MagicMock()
        model.get_default_rules.return_value = {"foo": "min:5"}
        self.assert_validates_min(model, "foo", 5)
        model.get_default_rules.assert_called_once_with()


class TestAssertValidatesWith(ModelHelpers):
    def test_present(self, user):
        self.assert_validates_with(user, "age", "min:13")

    def test_absent(self, user):
        with pytest.raises(AssertionError, match="Expected age to have 'min:18' validation"):
            self.assert_validates_with(user, "age", "min:18")

    def test_unknown_attribute_fails(self, user):
        with pytest.raises(AssertionError, match="nickname"):
            self.assert_validates_with(user, "nickname", "required")

    def test_custom_message(self, user):
        with pytest.raises(AssertionError, match="^custom$"):
            self.assert_validates_with(user, "age", "min:18", "custom")

    def test_token_must_match_exactly(self):
        model = Ruled({"foo": "min:50"})
        with pytest.raises(AssertionError):
            self.assert_validates_min(model, "foo", 5)


class TestNamedRules(ModelHelpers):
    def test_no_parameter(self):
        self.assert_validates_required(Ruled({"foo": "required"}), "foo")

    def test_one_parameter(self):
        self.assert_validates_min(Ruled({"foo": "min:5"}), "foo", 5)

    def test_two_parameters(self):
        self.assert_validates_required_if(Ruled({"foo": "required_if:foo,bar"}), "foo", "foo", "bar")

    def test_multiple_parameters_list_and_string(self):
        model = Ruled({"foo": "not_in:foo,bar,baz"})
        self.assert_validates_not_in(model, "foo", ["foo", "bar", "baz"])
        self.assert_validates_not_in(model, "foo", "foo,bar,baz")

    def test_failure_message_with_parameters(self):
        with pytest.raises(AssertionError, match="Expected foo to have 'between' validation with 1,10."):
            self.assert_validates_between(Ruled({"foo": "between:1,5"}), "foo", 1, 10)

    def test_failure_message_without_parameters(self):
        with pytest.raises(AssertionError, match="Expected foo to have 'email' validation."):
            self.assert_validates_email(Ruled({"foo": "required"}), "foo")

    @pytest.mark.parametrize(
        "helper, args, token",
        [
            ("accepted", (), "accepted"),
            ("active_url", (), "active_url"),
            ("after", ("2024-01-01",), "after:2024-01-01"),
            ("alpha", (), "alpha"),
            ("alpha_dash", (), "alpha_dash"),
            ("alpha_num", (), "alpha_num"),
            ("array", (), "array"),
            ("before", ("tomorrow",), "before:tomorrow"),
            ("between", (1, 10), "between:1,10"),
            ("boolean", (), "boolean"),
            ("confirmed", (), "confirmed"),
            ("date", (), "date"),
            ("date_format", ("Y-m-d",), "date_format:Y-m-d"),
            ("different", ("name",), "different:name"),
            ("digits", (4,), "digits:4"),
            ("digits_between", (4, 6), "digits_between:4,6"),
            ("email", (), "email"),
            ("exists", ("users,id",), "exists:users,id"),
            ("exists", (["users", "id"],), "exists:users,id"),
            ("image", (), "image"),
            ("in", (["a", "b"],), "in:a,b"),
            ("integer", (), "integer"),
            ("ip", (), "ip"),
            ("max", (255,), "max:255"),
            ("mimes", (("jpeg", "png"),), "mimes:jpeg,png"),
            ("min", (5,), "min:5"),
            ("not_in", ("a,b",), "not_in:a,b"),
            ("numeric", (), "numeric"),
            ("regex", ("^[a-z]+$",), "regex:^[a-z]+$"),
            ("required", (), "required"),
            ("required_if", ("kind", "company"), "required_if:kind,company"),
            ("required_with", (["first", "last"],), "required_with:first,last"),
            ("required_with_all", (["first", "last"],), "required_with_all:first,last"),
            ("required_without", ("phone",), "required_without:phone"),
            ("required_without_all", (["phone", "fax"],), "required_without_all:phone,fax"),
            ("same", ("password",), "same:password"),
            ("size", (10,), "size:10"),
            ("timezone", (), "timezone"),
            ("unique", ("users,email,1,id",), "unique:users,email,1,id"),
            ("url", (), "url"),
        ],
    )
    def test_token_formatting(self, helper, args, token):
        assertion = getattr(self, f"assert_validates_{helper}")
        assertion(Ruled({"field": ["required", token]}), "field", *args)
        with pytest.raises(AssertionError):
            assertion(Ruled({"field": ["nullable"]}), "field", *args)

    def test_realistic_model(self, user):
        self.assert_validates_alpha_dash(user, "name")
        self.assert_validates_between(user, "name", 3, 32)
        self.assert_validates_unique(user, "email", "users,email")
        self.assert_validates_in(user, "role", ("admin", "editor", "viewer"))
        self.assert_validates_integer(user, "age")
        self.assert_validates_max(user, "age", 120)
        self.assert_validates_confirmed(user, "password")
        self.assert_validates_different(user, "password", "name")
