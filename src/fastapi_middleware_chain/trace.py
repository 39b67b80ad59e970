"""DispatchTrace and TraceEntry — debug execution recording."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from fastapi_middleware_chain.entry import HandlerKind
from fastapi_middleware_chain.exceptions import Failure


@dataclass(frozen=True)
class TraceEntry:
    """Single handler invocation record."""

    handler_name: str
    kind: HandlerKind
    index: int
    duration_ms: float
    signal: Literal["CONTINUE", "FAIL", "COMPLETE"]
    reason: str | None = None


@dataclass
class DispatchTrace:
    """Structured record of a single chain walk."""

    entries: list[TraceEntry] = field(default_factory=list)
    total_duration_ms: float = 0.0
    outcome: Literal["COMPLETED", "UNHANDLED_ERROR", "EXHAUSTED"] = "COMPLETED"
    error: Failure | None = None

    @property
    def handler_names(self) -> list[str]:
        return [entry.handler_name for entry in self.entries]
