"""Capability probes and the failure helpers every assertion goes through.

Failures are raised explicitly instead of with ``assert`` statements so the
helpers keep working when Python runs with ``-O``.
"""

from __future__ import annotations

from typing import Any

from mvctest.comm.types import MissingCapabilityError


def class_name(target: Any) -> str:
    """Name of *target* if it is a class, else of its class."""
    cls = target if isinstance(target, type) else type(target)
    return cls.__name__


def responds_to(target: Any, method: str) -> bool:
    """Return True if *target* (class or instance) has a callable *method*."""
    return callable(getattr(target, method, None))


def require_method(target: Any, method: str, message: str | None = None) -> None:
    """Raise :class:`MissingCapabilityError` unless *target* has *method*."""
    if not responds_to(target, method):
        raise MissingCapabilityError(
            message or f"Expected {method}() method on {class_name(target)}."
        )


def assert_true(condition: Any, message: str) -> None:
    if not condition:
        raise AssertionError(message)


def assert_equal(expected: Any, actual: Any, message: str | None = None) -> None:
    if expected != actual:
        raise AssertionError(message or f"Failed asserting that {actual!r} matches expected {expected!r}.")


def assert_contains(needle: Any, haystack: Any, message: str | None = None) -> None:
    if needle not in haystack:
        raise AssertionError(message or f"Failed asserting that {list(haystack)!r} contains {needle!r}.")
