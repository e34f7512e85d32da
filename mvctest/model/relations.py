"""Relationship capture and verification.

Two ways of declaring a relationship are understood:

* builder methods: ``def comments(self): return self.has_many(Comment)``.
  The builder is replaced by a :class:`BuilderSpy` on a blank instance and
  the relation method is called to record what it passes.
* SQLAlchemy mapped relationships (``relationship()`` on a declarative
  class). The kind is read from the mapper.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import inflection
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import MANYTOMANY, MANYTOONE, ONETOMANY, RelationshipProperty, configure_mappers

from mvctest.comm.capability import assert_equal, assert_true, class_name, require_method
from mvctest.comm.config import get_config
from mvctest.comm.types import BuilderCall, RelationKind
from mvctest.model.spy import BuilderSpy, blank_instance, install_spy

logger = logging.getLogger(__name__)


def as_class(target: Any) -> type:
    return target if isinstance(target, type) else type(target)


def relation_names(relation: str) -> list[str]:
    """Names a related model may match: the singular form, then *relation*.

    Uncountable nouns keep their plural ("data" singularizes to "datum").
    """
    singular = inflection.singularize(relation)
    return [singular] if singular == relation else [singular, relation]


def relation_pattern(relation: str) -> re.Pattern[str]:
    """Case-insensitive pattern of the relation name, singular or as given."""
    return re.compile("|".join(re.escape(name) for name in relation_names(relation)), re.IGNORECASE)


def describe_names(relation: str) -> str:
    return " or ".join(f"'{name}'" for name in relation_names(relation))


def target_label(target: Any) -> str:
    """Text the relation pattern is matched against."""
    if isinstance(target, type):
        return target.__name__
    return str(target)


# ---------------------------------------------------------------------------
# SQLAlchemy mapped relationships
# ---------------------------------------------------------------------------

def mapped_relationship(cls: type, relation: str) -> RelationshipProperty | None:
    """Return the mapped relationship *relation* of *cls*, if there is one."""
    mapper = sa_inspect(cls, raiseerr=False)
    if mapper is None or not hasattr(mapper, "relationships"):
        return None
    configure_mappers()
    return mapper.relationships.get(relation)


def relation_kind_of(prop: RelationshipProperty) -> RelationKind:
    if prop.direction is MANYTOMANY:
        return RelationKind.BELONGS_TO_MANY
    if prop.direction is MANYTOONE:
        return RelationKind.BELONGS_TO
    if prop.direction is ONETOMANY and not prop.uselist:
        return RelationKind.HAS_ONE
    return RelationKind.HAS_MANY


def mapped_relation_kind(cls: type, relation: str) -> RelationKind | None:
    """Kind of the mapped relationship *relation*, or ``None`` if unmapped."""
    prop = mapped_relationship(as_class(cls), relation)
    return relation_kind_of(prop) if prop is not None else None


def mapped_relation_kinds(cls: type) -> dict[str, RelationKind]:
    """Kind of every mapped relationship of *cls*."""
    mapper = sa_inspect(as_class(cls), raiseerr=False)
    if mapper is None or not hasattr(mapper, "relationships"):
        return {}
    configure_mappers()
    return {name: relation_kind_of(prop) for name, prop in mapper.relationships.items()}


def _check_mapped(cls: type, relation: str, prop: RelationshipProperty, kind: RelationKind) -> None:
    actual = relation_kind_of(prop)
    assert_equal(
        kind, actual,
        f"Expected {cls.__name__}.{relation} to be a {kind.value} relationship, "
        f"got {actual.value}.",
    )
    related = prop.mapper.class_.__name__
    assert_true(
        relation_pattern(relation).search(related),
        f"Expected {cls.__name__}.{relation} to relate to a model matching "
        f"{describe_names(relation)}, got {related}.",
    )


# ---------------------------------------------------------------------------
# Builder methods
# ---------------------------------------------------------------------------

def _run_relation(cls: type, relation: str, builder: str) -> BuilderSpy:
    instance = blank_instance(cls)
    spy = install_spy(instance, builder)
    getattr(instance, relation)()
    return spy


def capture_builder_call(target: Any, relation: str, kind: RelationKind | str) -> BuilderCall | None:
    """Call *relation* against a spy and return what it passed to the builder.

    Returns the last recorded call, or ``None`` when the builder never ran.
    """
    cls = as_class(target)
    builder = get_config().builder_for(kind)
    require_method(cls, builder, f"Expected {builder}() method on {cls.__name__}.")
    spy = _run_relation(cls, relation, builder)
    logger.debug("%s.%s() made %d %s() call(s)", cls.__name__, relation, spy.call_count, builder)
    return spy.last_call


def _check_builder(cls: type, relation: str, kind: RelationKind) -> None:
    builder = get_config().builder_for(kind)
    require_method(cls, builder, f"Expected {builder}() method on {cls.__name__}.")

    captured = _run_relation(cls, relation, builder)
    expected = captured.last_call

    spy = _run_relation(cls, relation, builder)
    assert_equal(
        1, spy.call_count,
        f"Expected {cls.__name__}.{relation}() to call {builder}() exactly once, "
        f"called {spy.call_count} time(s).",
    )
    if expected is None or not expected.args:
        return

    actual = spy.last_call
    assert actual is not None
    label = target_label(actual.target)
    assert_true(
        relation_pattern(relation).search(label),
        f"Expected {cls.__name__}.{relation}() to call {builder}() with a model matching "
        f"{describe_names(relation)}, got {label!r}.",
    )
    assert_equal(
        (expected.trailing, expected.kwargs), (actual.trailing, actual.kwargs),
        f"Expected {builder}() arguments {expected.trailing!r} {expected.kwargs!r}, "
        f"got {actual.trailing!r} {actual.kwargs!r}.",
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def check_relationship(target: Any, relation: str, kind: RelationKind | str) -> None:
    """Assert that *target* declares *relation* as a relationship of *kind*.

    Args:
        target: Model class or instance. Instances are never mutated; a blank
            instance of their class is used.
        relation: Name of the relation method or mapped relationship.
        kind: Expected :class:`RelationKind` (or its value).

    Raises:
        MissingCapabilityError: If *relation* or the builder is missing.
        AssertionError: If the relationship does not match.
    """
    cls = as_class(target)
    kind = RelationKind(kind)

    prop = mapped_relationship(cls, relation)
    if prop is not None:
        _check_mapped(cls, relation, prop, kind)
        return

    require_method(cls, relation, f"Expected {relation}() method on {class_name(cls)}.")
    _check_builder(cls, relation, kind)
