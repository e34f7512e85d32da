"""Builder spy: a stand-in for a relationship builder that records calls."""

from __future__ import annotations

import logging
from typing import Any

from mvctest.comm.types import BuilderCall

logger = logging.getLogger(__name__)


class Chain:
    """Relationship descriptor returned by the spy.

    Relation methods often chain on the builder result
    (``self.has_many(Comment).order_by("id")``); every attribute access and
    call returns the same object so those chains complete.
    """

    def __getattr__(self, name: str) -> Chain:
        if name.startswith("__"):
            raise AttributeError(name)
        return self

    def __call__(self, *args: Any, **kwargs: Any) -> Chain:
        return self


class BuilderSpy:
    """Callable recording every invocation in order.

    Args:
        name: Builder method name, used in log records and messages.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[BuilderCall] = []
        self.result = Chain()

    def __call__(self, *args: Any, **kwargs: Any) -> Chain:
        call = BuilderCall(args=args, kwargs=dict(kwargs))
        self.calls.append(call)
        logger.debug("%s() called with args=%r kwargs=%r", self.name, args, kwargs)
        return self.result

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> BuilderCall | None:
        return self.calls[-1] if self.calls else None


def blank_instance(cls: type) -> Any:
    """Create an instance of *cls* without running ``__init__``."""
    return cls.__new__(cls)


def install_spy(instance: Any, builder: str) -> BuilderSpy:
    """Shadow *builder* on *instance* with a fresh :class:`BuilderSpy`."""
    spy = BuilderSpy(builder)
    object.__setattr__(instance, builder, spy)
    return spy
