"""Tests for DispatchTrace, TraceEntry, and debug recording."""

from __future__ import annotations

from typing import Any

import pytest

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.dispatcher import dispatch
from fastapi_middleware_chain.entry import HandlerKind
from fastapi_middleware_chain.exceptions import Failure, NotFound
from fastapi_middleware_chain.router import Router
from fastapi_middleware_chain.signals import CONTINUE, DispatchSignal, Fail
from fastapi_middleware_chain.trace import DispatchTrace, TraceEntry


async def tag(ctx: RequestContext) -> DispatchSignal:
    return CONTINUE


async def lookup(ctx: RequestContext) -> DispatchSignal:
    return Fail(NotFound("invalid id"))


async def render(error: Failure, ctx: RequestContext) -> DispatchSignal:
    return ctx.json({"message": error.detail}, status_code=error.status_code)


class TestTraceEntry:
    def test_construction(self) -> None:
        entry = TraceEntry(
            handler_name="tag",
            kind=HandlerKind.NORMAL,
            index=0,
            duration_ms=1.5,
            signal="CONTINUE",
        )
        assert entry.handler_name == "tag"
        assert entry.kind is HandlerKind.NORMAL
        assert entry.reason is None

    def test_frozen(self) -> None:
        entry = TraceEntry(
            handler_name="tag",
            kind=HandlerKind.NORMAL,
            index=0,
            duration_ms=1.5,
            signal="CONTINUE",
        )
        with pytest.raises(AttributeError):
            entry.handler_name = "other"  # type: ignore[misc]


class TestDispatchTrace:
    def test_defaults(self) -> None:
        trace = DispatchTrace()
        assert trace.entries == []
        assert trace.outcome == "COMPLETED"
        assert trace.error is None


class TestDebugRecording:
    async def test_trace_recorded_when_debug(self, make_request: Any) -> None:
        chain = (
            Router(debug=True)
            .use(tag, lookup, tag)
            .register_error_handler(render)
            .resolve()
        )
        ctx = RequestContext(request=make_request())
        await dispatch(chain, ctx)

        trace = ctx.state["trace"]
        assert isinstance(trace, DispatchTrace)
        assert trace.handler_names == ["tag", "lookup", "render"]
        assert [e.signal for e in trace.entries] == ["CONTINUE", "FAIL", "COMPLETE"]
        assert [e.index for e in trace.entries] == [0, 1, 3]
        assert trace.entries[1].reason == "invalid id"
        assert trace.entries[2].kind is HandlerKind.ERROR
        assert trace.outcome == "COMPLETED"
        assert isinstance(trace.error, NotFound)
        assert trace.total_duration_ms >= 0

    async def test_unhandled_outcome_recorded(self, make_request: Any) -> None:
        chain = Router(debug=True).use(lookup).resolve()
        ctx = RequestContext(request=make_request())
        await dispatch(chain, ctx)
        assert ctx.state["trace"].outcome == "UNHANDLED_ERROR"

    async def test_no_trace_without_debug(self, make_request: Any) -> None:
        chain = Router().use(tag).resolve()
        ctx = RequestContext(request=make_request())
        await dispatch(chain, ctx)
        assert "trace" not in ctx.state
