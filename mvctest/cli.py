"""Command-line inspection of model rules and relationships.

Usage::

    mvctest rules <module:Class> [--attribute NAME]
    mvctest relations <module:Class>
    mvctest [--config mvctest.yaml] [-v] ...
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys

from mvctest.comm import config as helpers_config
from mvctest.comm.types import MvcTestError
from mvctest.model.helpers import ModelHelpers
from mvctest.model.relations import mapped_relation_kinds
from mvctest.model.spy import blank_instance


def _json_dumps(obj: object) -> str:
    return json.dumps(obj, indent=2, default=str)


def load_target(spec: str) -> type:
    """Import ``package.module:Class`` and return the class."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise MvcTestError(f"Expected <module:Class>, got {spec!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise MvcTestError(f"Cannot import {module_name}: {exc}") from exc
    target = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise MvcTestError(f"{module_name} has no attribute {attr}") from None
    if not isinstance(target, type):
        raise MvcTestError(f"{spec} is not a class")
    return target


# ---------------------------------------------------------------------------
# Sub-command handlers
# ---------------------------------------------------------------------------

def _rules_model(cls: type) -> object:
    try:
        return cls()
    except TypeError:
        return blank_instance(cls)


def _cmd_rules(args: argparse.Namespace) -> None:
    cls = load_target(args.target)
    try:
        rules = ModelHelpers().get_default_rules(_rules_model(cls))
    except AssertionError:
        raise
    except Exception as exc:
        raise MvcTestError(f"Cannot read rules of {cls.__name__}: {exc}") from exc
    if args.attribute:
        rules = {args.attribute: rules.get(args.attribute, [])}
    print(_json_dumps(rules))


def _cmd_relations(args: argparse.Namespace) -> None:
    cls = load_target(args.target)
    kinds = mapped_relation_kinds(cls)
    print(_json_dumps({name: kind.value for name, kind in kinds.items()}))


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mvctest",
        description="Inspect the rules and relationships the test helpers see",
    )
    parser.add_argument("--config", default=None, help="Path to an mvctest YAML config")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("rules", help="Print a model's normalized default rules")
    p.add_argument("target", help="module:Class")
    p.add_argument("--attribute", default=None, help="Only this attribute")

    p = sub.add_parser("relations", help="Print a model's mapped relationship kinds")
    p.add_argument("target", help="module:Class")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry-point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dispatch = {
        "rules": _cmd_rules,
        "relations": _cmd_relations,
    }
    handler = dispatch.get(args.command or "")
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        if args.config:
            helpers_config.set_config(helpers_config.load_config(args.config))
        handler(args)
    except (MvcTestError, AssertionError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
