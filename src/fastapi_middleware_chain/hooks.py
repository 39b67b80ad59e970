"""ChainHook base and convenience hook classes."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.entry import HandlerEntry
from fastapi_middleware_chain.signals import DispatchSignal

if TYPE_CHECKING:
    from fastapi_middleware_chain.dispatcher import DispatchResult

access_logger = logging.getLogger("fastapi_middleware_chain.access")


class ChainHook:
    """Base abstraction for lifecycle hooks. All methods are no-op by default."""

    async def on_request_start(self, ctx: RequestContext) -> None:
        pass

    async def on_request_end(self, ctx: RequestContext, result: DispatchResult) -> None:
        pass

    async def on_handler(
        self,
        ctx: RequestContext,
        entry: HandlerEntry,
        signal: DispatchSignal,
    ) -> None:
        pass


class BeforeRequest(ChainHook):
    """Convenience hook that only fires when a request enters the chain."""

    def __init__(self, callback: Callable[[RequestContext], Awaitable[None]]) -> None:
        self._callback = callback

    async def on_request_start(self, ctx: RequestContext) -> None:
        await self._callback(ctx)


class AfterRequest(ChainHook):
    """Convenience hook that only fires once the response is decided."""

    def __init__(
        self,
        callback: Callable[[RequestContext, DispatchResult], Awaitable[None]],
    ) -> None:
        self._callback = callback

    async def on_request_end(self, ctx: RequestContext, result: DispatchResult) -> None:
        await self._callback(ctx, result)


class AfterHandler(ChainHook):
    """Convenience hook that fires after each invoked handler."""

    def __init__(
        self,
        callback: Callable[
            [RequestContext, HandlerEntry, DispatchSignal], Awaitable[None]
        ],
    ) -> None:
        self._callback = callback

    async def on_handler(
        self,
        ctx: RequestContext,
        entry: HandlerEntry,
        signal: DispatchSignal,
    ) -> None:
        await self._callback(ctx, entry, signal)


class AccessLogHook(ChainHook):
    """Writes one access line per request, leveled by response status."""

    async def on_request_end(self, ctx: RequestContext, result: DispatchResult) -> None:
        status = ctx.response.status_code if ctx.response is not None else 0
        if status >= 500 or status == 0:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        access_logger.log(
            level,
            "%s %s %d %s",
            ctx.method,
            ctx.path,
            status,
            result.outcome.value,
            extra={
                "method": ctx.method,
                "path": ctx.path,
                "status": status,
                "outcome": result.outcome.value,
            },
        )
