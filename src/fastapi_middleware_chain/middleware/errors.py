"""Terminal error handler — the single place error responses are formatted."""

from __future__ import annotations

import logging

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.exceptions import Failure
from fastapi_middleware_chain.signals import DispatchSignal

logger = logging.getLogger(__name__)


def status_for(error: Failure) -> int:
    """Explicit status first, then the failure kind, else 400."""
    return error.status_code


async def error_handler(error: Failure, ctx: RequestContext) -> DispatchSignal:
    status = status_for(error)
    if status >= 500:
        logger.error(
            "%s %s failed: %s",
            ctx.method,
            ctx.path,
            error.detail,
            exc_info=error.cause,
        )
    else:
        logger.warning("%s %s failed: %s", ctx.method, ctx.path, error.detail)
    return ctx.json({"message": error.detail}, status_code=status)
