"""Data classes and exceptions shared by the helper modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RelationKind(str, Enum):
    """Relationship kinds a model can declare."""

    BELONGS_TO = "belongs_to"
    BELONGS_TO_MANY = "belongs_to_many"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"


# ---------------------------------------------------------------------------
# Result data classes
# ---------------------------------------------------------------------------

@dataclass
class BuilderCall:
    """One recorded call to a relationship builder."""

    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)

    @property
    def target(self) -> Any:
        """First positional argument (the related model), or ``None``."""
        return self.args[0] if self.args else None

    @property
    def trailing(self) -> tuple[Any, ...]:
        return self.args[1:]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class MvcTestError(Exception):
    """Base exception for helper misuse."""


class ConfigError(MvcTestError):
    """Raised when the helper configuration is invalid or missing."""


class RuleSpecError(MvcTestError):
    """Raised when model rules are neither a mapping nor a rule spec."""


class MissingCapabilityError(AssertionError):
    """Raised when the object under test lacks a required method."""
