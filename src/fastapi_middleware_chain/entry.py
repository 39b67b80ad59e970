"""HandlerEntry and HandlerKind — one registered step of the chain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fastapi_middleware_chain._types import AnyHandler
from fastapi_middleware_chain.matching import Matcher


class HandlerKind(Enum):
    """Which walk mode an entry is eligible in."""

    NORMAL = "normal"
    ERROR = "error"


@dataclass(frozen=True)
class HandlerEntry:
    """Immutable registration record; position in the chain is significant."""

    matcher: Matcher
    kind: HandlerKind
    action: AnyHandler
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", handler_name(self.action))


def handler_name(action: object) -> str:
    name = getattr(action, "__qualname__", None) or getattr(action, "__name__", None)
    if name is None:
        name = type(action).__name__
    return str(name)
