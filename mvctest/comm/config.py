"""Parse and hold the helper configuration (``mvctest.yaml``)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from mvctest.comm.types import ConfigError, RelationKind

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "mvctest.yaml"


@dataclass
class MethodNames:
    """Names of the model methods the helpers call."""

    is_valid: str = "is_valid"
    is_invalid: str = "is_invalid"
    default_rules: str = "get_default_rules"
    set_attribute: str = "set_attribute"


def _default_builders() -> dict[RelationKind, str]:
    return {kind: kind.value for kind in RelationKind}


@dataclass
class HelpersConfig:
    """Parsed representation of ``mvctest.yaml``.

    Attributes:
        rule_delimiter: Separator of a rule string (``"required|min:5"``).
        param_delimiter: Separator of multi-valued rule parameters.
        methods: Model method names used by the validity and rule helpers.
        builders: Relationship builder method name per kind.
    """

    rule_delimiter: str = "|"
    param_delimiter: str = ","
    methods: MethodNames = field(default_factory=MethodNames)
    builders: dict[RelationKind, str] = field(default_factory=_default_builders)

    def builder_for(self, kind: RelationKind | str) -> str:
        """Return the builder method name for *kind*."""
        return self.builders[RelationKind(kind)]

    def to_dict(self) -> dict:
        """Plain-dict view of the config, as it would appear in ``mvctest.yaml``."""
        return {
            "rule_delimiter": self.rule_delimiter,
            "param_delimiter": self.param_delimiter,
            "methods": {
                "is_valid": self.methods.is_valid,
                "is_invalid": self.methods.is_invalid,
                "default_rules": self.methods.default_rules,
                "set_attribute": self.methods.set_attribute,
            },
            "builders": {kind.value: name for kind, name in self.builders.items()},
        }


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _require_str(section: str, key: str, value: object) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{section}.{key} must be a non-empty string, got {value!r}")
    return value


def _parse_methods(raw: dict | None) -> MethodNames:
    if not raw:
        return MethodNames()
    if not isinstance(raw, dict):
        raise ConfigError(f"'methods' must be a mapping, got {type(raw).__name__}")
    known = {f.name for f in fields(MethodNames)}
    unknown = set(raw) - known
    if unknown:
        raise ConfigError(f"Unknown method keys: {', '.join(sorted(unknown))}")
    return MethodNames(**{k: _require_str("methods", k, v) for k, v in raw.items()})


def _parse_builders(raw: dict | None) -> dict[RelationKind, str]:
    builders = _default_builders()
    if not raw:
        return builders
    if not isinstance(raw, dict):
        raise ConfigError(f"'builders' must be a mapping, got {type(raw).__name__}")
    for key, name in raw.items():
        try:
            kind = RelationKind(key)
        except ValueError:
            raise ConfigError(f"Unknown relationship kind in builders: {key!r}") from None
        builders[kind] = _require_str("builders", key, name)
    return builders


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_config(data: dict) -> HelpersConfig:
    """Build a :class:`HelpersConfig` from an already-loaded mapping."""
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping, got {type(data).__name__}")
    unknown = set(data) - {f.name for f in fields(HelpersConfig)}
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(map(str, unknown)))}")
    return HelpersConfig(
        rule_delimiter=_require_str("config", "rule_delimiter", data.get("rule_delimiter", "|")),
        param_delimiter=_require_str("config", "param_delimiter", data.get("param_delimiter", ",")),
        methods=_parse_methods(data.get("methods")),
        builders=_parse_builders(data.get("builders")),
    )


def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> HelpersConfig:
    """Load and parse ``mvctest.yaml``.

    Args:
        path: Path to the configuration file.

    Returns:
        Parsed :class:`HelpersConfig`.

    Raises:
        ConfigError: If the file is missing or malformed.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Configuration file not found: {p}")

    try:
        with open(p, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {p}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {p}, got {type(data).__name__}")

    cfg = parse_config(data)
    logger.debug("Loaded helper config from %s: %s", p, cfg.to_dict())
    return cfg


# -- process-wide current config ---------------------------------------------

_current: HelpersConfig | None = None


def get_config() -> HelpersConfig:
    """Return the current configuration, creating the default on first call."""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = HelpersConfig()
    return _current


def set_config(cfg: HelpersConfig) -> None:
    global _current  # noqa: PLW0603
    _current = cfg


def reset() -> None:
    """Reset global state (useful in tests)."""
    global _current  # noqa: PLW0603
    _current = None
