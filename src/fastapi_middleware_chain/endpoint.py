"""chain_endpoint() — request lifecycle driver for a resolved chain."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.dispatcher import DispatchResult, Outcome, dispatch
from fastapi_middleware_chain.exceptions import (
    ChainContractError,
    ChainExhausted,
    InternalFailure,
)
from fastapi_middleware_chain.router import ResolvedChain, Router

logger = logging.getLogger(__name__)

HTTP_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def chain_endpoint(
    chain: Router | ResolvedChain, *, strict: bool = False
) -> Callable[[Request], Awaitable[Response]]:
    """Return a Starlette endpoint that runs every request through ``chain``.

    Request-end hooks run for every request, including ones that end in a
    contract violation or in ``ChainExhausted`` under ``strict``.
    """
    resolved = chain.resolve() if isinstance(chain, Router) else chain

    async def endpoint(request: Request) -> Response:
        ctx = RequestContext(request=request)

        for hook in resolved.hooks:
            await hook.on_request_start(ctx)

        result = DispatchResult(outcome=Outcome.UNHANDLED_ERROR)
        try:
            try:
                result = await dispatch(resolved, ctx)
            except ChainContractError as exc:
                logger.exception(
                    "Handler contract violated for %s %s", ctx.method, ctx.path
                )
                result = DispatchResult(
                    outcome=Outcome.UNHANDLED_ERROR,
                    error=InternalFailure(str(exc), cause=exc),
                )
                ctx.response = _server_error()
                if strict:
                    raise

            if result.outcome is Outcome.UNHANDLED_ERROR and ctx.response is None:
                _log_unhandled(ctx, result)
                ctx.response = _server_error()
            elif result.outcome is Outcome.EXHAUSTED:
                logger.error(
                    "Chain exhausted without a response for %s %s",
                    ctx.method,
                    ctx.path,
                )
                if strict:
                    raise ChainExhausted(ctx.method, ctx.path)
                ctx.response = JSONResponse(
                    {"message": f"Cannot {ctx.method} {ctx.path}"}, status_code=404
                )
        finally:
            for hook in resolved.hooks:
                await hook.on_request_end(ctx, result)

        if ctx.response is None:
            raise ChainContractError(
                f"No response produced for {ctx.method} {ctx.path}"
            )
        return ctx.response

    endpoint._chain_resolved = resolved  # type: ignore[attr-defined]
    return endpoint


def _server_error() -> JSONResponse:
    return JSONResponse({"message": "Internal Server Error"}, status_code=500)


def _log_unhandled(ctx: RequestContext, result: DispatchResult) -> None:
    error = result.error
    cause = error.cause if error is not None else None
    logger.error(
        "No error handler after position %s for %s %s: %s",
        result.last_index,
        ctx.method,
        ctx.path,
        error.detail if error is not None else "unknown failure",
        exc_info=cause,
    )


def mount_chain(
    app: Any, chain: Router | ResolvedChain, *, strict: bool = False
) -> None:
    """Route every path and method of a FastAPI/Starlette ``app`` into ``chain``."""
    app.add_route(
        "/{path:path}",
        chain_endpoint(chain, strict=strict),
        methods=HTTP_METHODS,
        include_in_schema=False,
    )
