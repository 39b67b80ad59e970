"""Dispatcher — walks a resolved chain for one request.

The walk keeps a cursor and a mode flag. In normal mode the next matching
NORMAL entry after the cursor runs; after a ``Fail`` only ERROR entries
after the failing position are eligible. The cursor never moves backwards,
so an error handler registered before the failing handler is never reached.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.entry import HandlerEntry, HandlerKind
from fastapi_middleware_chain.exceptions import (
    ChainContractError,
    Failure,
    InternalFailure,
)
from fastapi_middleware_chain.router import ResolvedChain
from fastapi_middleware_chain.signals import Complete, DispatchSignal, Fail
from fastapi_middleware_chain.trace import DispatchTrace, TraceEntry

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Terminal state of a walk."""

    COMPLETED = "completed"
    UNHANDLED_ERROR = "unhandled_error"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class DispatchResult:
    outcome: Outcome
    error: Failure | None = None
    last_index: int | None = None


def _find_next(
    entries: tuple[HandlerEntry, ...],
    start: int,
    kind: HandlerKind,
    ctx: RequestContext,
) -> tuple[int, HandlerEntry, dict[str, Any]] | None:
    method, path = ctx.method, ctx.path
    for index in range(start, len(entries)):
        entry = entries[index]
        if entry.kind is not kind:
            continue
        params = entry.matcher.match(method, path)
        if params is not None:
            return index, entry, params
    return None


async def _invoke(
    entry: HandlerEntry, ctx: RequestContext, error: Failure | None
) -> DispatchSignal:
    try:
        if entry.kind is HandlerKind.ERROR:
            signal = await entry.action(error, ctx)  # type: ignore[call-arg,arg-type]
        else:
            signal = await entry.action(ctx)  # type: ignore[call-arg]
    except Failure as exc:
        signal = Fail(exc)
    except ChainContractError:
        raise
    except Exception as exc:
        logger.exception("Handler %s raised an unexpected error", entry.name)
        signal = Fail(InternalFailure("Internal server error", cause=exc))

    if not isinstance(signal, DispatchSignal):
        raise ChainContractError(
            f"Handler {entry.name} returned {signal!r} instead of a DispatchSignal"
        )
    if isinstance(signal, Complete):
        if ctx.response is None:
            raise ChainContractError(
                f"Handler {entry.name} signalled COMPLETE without a response"
            )
    elif ctx.response is not None:
        raise ChainContractError(
            f"Handler {entry.name} wrote a response and signalled {signal!r}"
        )
    return signal


async def dispatch(chain: ResolvedChain, ctx: RequestContext) -> DispatchResult:
    """Walk ``chain`` for the request held by ``ctx`` until a terminal state."""
    trace = DispatchTrace() if chain.debug else None
    walk_start = time.perf_counter()

    entries = chain.entries
    cursor = 0
    seeking_error = False
    error: Failure | None = None
    last_index: int | None = None
    outcome: Outcome

    while True:
        kind = HandlerKind.ERROR if seeking_error else HandlerKind.NORMAL
        found = _find_next(entries, cursor, kind, ctx)
        if found is None:
            outcome = Outcome.UNHANDLED_ERROR if seeking_error else Outcome.EXHAUSTED
            break

        index, entry, params = found
        ctx.path_params = params
        last_index = index

        handler_start = time.perf_counter()
        signal = await _invoke(entry, ctx, error)
        logger.debug(
            "%s %s: [%d] %s -> %r", ctx.method, ctx.path, index, entry.name, signal
        )

        if trace is not None:
            trace.entries.append(
                TraceEntry(
                    handler_name=entry.name,
                    kind=entry.kind,
                    index=index,
                    duration_ms=(time.perf_counter() - handler_start) * 1000,
                    signal=_signal_label(signal),
                    reason=signal.error.detail if isinstance(signal, Fail) else None,
                )
            )
        for hook in chain.hooks:
            await hook.on_handler(ctx, entry, signal)

        cursor = index + 1
        if isinstance(signal, Complete):
            outcome = Outcome.COMPLETED
            break
        if isinstance(signal, Fail):
            seeking_error = True
            error = signal.error

    if trace is not None:
        trace.total_duration_ms = (time.perf_counter() - walk_start) * 1000
        trace.outcome = outcome.name  # type: ignore[assignment]
        trace.error = error
        ctx.state["trace"] = trace

    return DispatchResult(outcome=outcome, error=error, last_index=last_index)


def _signal_label(signal: DispatchSignal) -> Any:
    if isinstance(signal, Complete):
        return "COMPLETE"
    if isinstance(signal, Fail):
        return "FAIL"
    return "CONTINUE"
