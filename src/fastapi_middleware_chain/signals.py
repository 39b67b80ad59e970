"""DispatchSignal values returned by handlers to the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi_middleware_chain.exceptions import Failure


class DispatchSignal:
    """Base for the three outcomes a handler can report."""

    __slots__ = ()


@dataclass(frozen=True)
class Continue(DispatchSignal):
    """Proceed to the next matching handler of the current kind."""

    def __repr__(self) -> str:
        return "CONTINUE"


@dataclass(frozen=True)
class Complete(DispatchSignal):
    """A response has been produced; stop walking the chain."""

    def __repr__(self) -> str:
        return "COMPLETE"


@dataclass(frozen=True)
class Fail(DispatchSignal):
    """Skip forward to the next matching error handler, carrying ``error``."""

    error: Failure


CONTINUE = Continue()
COMPLETE = Complete()
