"""Tests for ControllerHelpers — view assertions against Flask routes."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from mvctest.comm.types import MissingCapabilityError
from mvctest.web.helpers import ControllerHelpers
from mvctest.web.views import ViewResponse


class TestCall(ControllerHelpers):
    def test_get_stores_response(self, client):
        resp = self.get(client, "/posts")
        assert isinstance(resp, ViewResponse)
        assert self.response is resp
        assert resp.status_code == 200

    def test_call_with_method(self, client):
        resp = self.call(client, "post", "/posts")
        assert resp.status_code == 201
        self.assert_view_is("posts/show.html")

    def test_each_call_replaces_response(self, client):
        self.get(client, "/posts")
        self.get(client, "/posts/3")
        self.assert_view_is("posts/show.html")


class TestAssertViewIs(ControllerHelpers):
    def test_matches(self, client):
        self.get(client, "/posts")
        self.assert_view_is("posts/index.html")

    def test_last_rendered_view_wins(self, client):
        self.get(client, "/posts/with-header")
        self.assert_view_is("posts/index.html")

    def test_mismatch_message(self, client):
        self.get(client, "/posts/1")
        with pytest.raises(
            AssertionError,
            match=r"Failed asserting that view 'posts/show.html' is 'posts/index.html'.",
        ):
            self.assert_view_is("posts/index.html")

    def test_custom_message(self, client):
        self.get(client, "/posts/1")
        with pytest.raises(AssertionError, match="^wrong page$"):
            self.assert_view_is("posts/index.html", "wrong page")

    def test_no_view_rendered(self, client):
        self.get(client, "/ping")
        with pytest.raises(MissingCapabilityError):
            self.assert_view_is("ping.html")

    def test_no_response(self):
        with pytest.raises(MissingCapabilityError, match="No response recorded"):
            self.assert_view_is("foo")

    def test_any_response_with_named_content(self):
        response = MagicMock()
        response.original_content.name = "foo"
        self.response = response
        self.assert_view_is("foo")


class TestAssertViewHas(ControllerHelpers):
    def test_key(self, client):
        self.get(client, "/posts")
        self.assert_view_has("posts")

    def test_key_and_value(self, client):
        self.get(client, "/posts/5")
        self.assert_view_has("post", "post 5")

    def test_missing_key(self, client):
        self.get(client, "/posts/5")
        with pytest.raises(AssertionError, match="Expected view context to have 'posts'"):
            self.assert_view_has("posts")

    def test_wrong_value(self, client):
        self.get(client, "/posts/5")
        with pytest.raises(AssertionError, match="to be 'post 6', got 'post 5'"):
            self.assert_view_has("post", "post 6")

    def test_none_is_a_value(self, client):
        self.get(client, "/posts/5")
        with pytest.raises(AssertionError):
            self.assert_view_has("post", None)
