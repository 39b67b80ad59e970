"""Method logging middleware."""

from __future__ import annotations

import logging

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.signals import CONTINUE, DispatchSignal


class MethodLogger:
    """Logs the request method and passes control on."""

    def __init__(
        self, logger: logging.Logger | str = __name__, *, level: int = logging.INFO
    ) -> None:
        self._logger = (
            logging.getLogger(logger) if isinstance(logger, str) else logger
        )
        self._level = level

    async def __call__(self, ctx: RequestContext) -> DispatchSignal:
        self._logger.log(self._level, "%s request", ctx.method)
        return CONTINUE


def method_logger(
    logger: logging.Logger | str = __name__, *, level: int = logging.INFO
) -> MethodLogger:
    return MethodLogger(logger, level=level)
