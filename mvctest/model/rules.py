"""Validation-rule normalization and rule-token formatting.

A model's default rules map attribute names to a rule spec that is either
an ordered sequence of tokens (``["required", "min:5"]``) or a single
delimited string (``"required|min:5"``). Everything past this module sees
only ``list[str]``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from mvctest.comm.config import get_config
from mvctest.comm.types import RuleSpecError

logger = logging.getLogger(__name__)


def normalize_rules(spec: Any, delimiter: str | None = None) -> list[str]:
    """Return *spec* as an ordered list of rule tokens.

    Args:
        spec: Delimited string or sequence of tokens. ``None`` means no rules.
        delimiter: Token separator for string specs; defaults to the
            configured ``rule_delimiter``.

    Raises:
        RuleSpecError: If *spec* is neither a string nor an iterable.
    """
    if spec is None:
        return []
    if isinstance(spec, str):
        sep = delimiter or get_config().rule_delimiter
        return [token for token in spec.split(sep) if token]
    if isinstance(spec, Mapping) or not isinstance(spec, Iterable):
        raise RuleSpecError(f"Unsupported rule spec: {spec!r}")
    return [str(token) for token in spec if token is not None and str(token)]


def normalize_rule_map(rules: Any, delimiter: str | None = None) -> dict[str, list[str]]:
    """Normalize every value of an attribute -> rule spec mapping."""
    if not isinstance(rules, Mapping):
        raise RuleSpecError(f"Expected a mapping of attribute rules, got {type(rules).__name__}")
    normalized = {str(attr): normalize_rules(spec, delimiter) for attr, spec in rules.items()}
    logger.debug("Normalized rules: %s", normalized)
    return normalized


def join_values(values: Any, delimiter: str | None = None) -> str:
    """Join a multi-valued rule parameter.

    A string is taken as already joined, so ``["a", "b"]`` and ``"a,b"``
    produce the same parameter.
    """
    if isinstance(values, str):
        return values
    sep = delimiter or get_config().param_delimiter
    if isinstance(values, Iterable):
        return sep.join(str(v) for v in values)
    return str(values)


def format_rule(name: str, *params: Any) -> str:
    """Format a rule token: ``format_rule("between", 1, 10) == "between:1,10"``.

    Sequence parameters are flattened, so ``format_rule("in", ["a", "b"])``
    gives ``"in:a,b"``.
    """
    if not params:
        return name
    sep = get_config().param_delimiter
    return f"{name}:{sep.join(join_values(p, sep) for p in params)}"
