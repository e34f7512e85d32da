"""Controller assertion helpers for Flask views."""

from __future__ import annotations

from typing import Any

from flask.testing import FlaskClient

from mvctest.comm.capability import assert_contains, assert_equal
from mvctest.comm.types import MissingCapabilityError
from mvctest.web.views import ViewResponse, capture_templates, rendered_view_name

_MISSING = object()


class ControllerHelpers:
    """Assertions about the most recent response (``self.response``).

    Issue requests with :meth:`call` / :meth:`get` so the rendered templates
    are recorded, or assign any object exposing ``original_content.name`` to
    ``self.response`` directly.
    """

    response: Any = None

    def call(self, client: FlaskClient, method: str, path: str, **kwargs: Any) -> ViewResponse:
        """Issue a request through *client* and remember the response."""
        with capture_templates(client.application) as rendered:
            resp = client.open(path, method=method.upper(), **kwargs)
        self.response = ViewResponse(resp, rendered)
        return self.response

    def get(self, client: FlaskClient, path: str, **kwargs: Any) -> ViewResponse:
        return self.call(client, "GET", path, **kwargs)

    def _last_response(self) -> Any:
        if self.response is None:
            raise MissingCapabilityError("No response recorded; call() a route first.")
        return self.response

    def assert_view_is(self, expected_view: str, message: str | None = None) -> None:
        """Assert that *expected_view* is the view rendered by the last action."""
        actual_view = rendered_view_name(self._last_response())
        assert_equal(
            expected_view, actual_view,
            message or f"Failed asserting that view {actual_view!r} is {expected_view!r}.",
        )

    def assert_view_has(self, key: str, value: Any = _MISSING, message: str | None = None) -> None:
        """Assert that the rendered view received *key* (equal to *value* if given)."""
        response = self._last_response()
        context = getattr(response, "context", None)
        if context is None:
            raise MissingCapabilityError("Expected response to carry a view context.")
        assert_contains(key, context, message or f"Expected view context to have {key!r}.")
        if value is not _MISSING:
            assert_equal(
                value, context[key],
                message or f"Expected view context {key!r} to be {value!r}, got {context[key]!r}.",
            )
