"""Record which templates a Flask request rendered."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from flask import Flask, template_rendered
from jinja2 import Template

from mvctest.comm.types import MissingCapabilityError

logger = logging.getLogger(__name__)

RenderedTemplate = tuple[Template, dict[str, Any]]


@contextmanager
def capture_templates(app: Flask) -> Iterator[list[RenderedTemplate]]:
    """Collect ``(template, context)`` pairs rendered by *app* inside the block."""
    recorded: list[RenderedTemplate] = []

    def record(sender: Flask, template: Template, context: dict[str, Any], **extra: Any) -> None:
        logger.debug("Rendered template %s", template.name)
        recorded.append((template, context))

    template_rendered.connect(record, app)
    try:
        yield recorded
    finally:
        template_rendered.disconnect(record, app)


class ViewResponse:
    """A test-client response together with the templates it rendered.

    ``original_content`` is the most recently rendered template, so
    ``response.original_content.name`` is the view the action produced.
    Other attributes are looked up on the wrapped response.
    """

    def __init__(self, response: Any, rendered: list[RenderedTemplate] | None = None) -> None:
        self.response = response
        self.rendered: list[RenderedTemplate] = list(rendered or [])

    @property
    def original_content(self) -> Template | None:
        return self.rendered[-1][0] if self.rendered else None

    @property
    def context(self) -> dict[str, Any]:
        return self.rendered[-1][1] if self.rendered else {}

    @property
    def template_names(self) -> list[str | None]:
        return [template.name for template, _ in self.rendered]

    def __getattr__(self, name: str) -> Any:
        if name == "response":
            raise AttributeError(name)
        return getattr(self.response, name)

    def __repr__(self) -> str:
        status = getattr(self.response, "status", "?")
        return f"<ViewResponse {status} views={self.template_names!r}>"


def rendered_view_name(response: Any) -> str:
    """Return the name of the view recorded on *response*.

    Raises:
        MissingCapabilityError: If *response* carries no rendered content or
            the content has no name.
    """
    content = getattr(response, "original_content", None)
    if content is None:
        raise MissingCapabilityError("Expected response to carry rendered view content.")
    name = getattr(content, "name", None)
    if name is None:
        raise MissingCapabilityError(
            f"Expected rendered content {type(content).__name__} to have a name."
        )
    return name
