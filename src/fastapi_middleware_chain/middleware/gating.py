"""Ad-hoc request gating — time-based gate and maintenance lockout."""

from __future__ import annotations

import logging
import time

from fastapi_middleware_chain._types import ClockCallback
from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.signals import CONTINUE, DispatchSignal

logger = logging.getLogger(__name__)


def _current_second() -> int:
    return time.localtime().tm_sec


class TimeGate:
    """Refuses requests that arrive on a second divisible by ``divisor``."""

    def __init__(
        self,
        divisor: int = 3,
        *,
        clock: ClockCallback | None = None,
        message: str = "you shall not pass",
    ) -> None:
        if divisor < 1:
            raise ValueError("divisor must be a positive integer")
        self._divisor = divisor
        self._clock = clock or _current_second
        self._message = message

    async def __call__(self, ctx: RequestContext) -> DispatchSignal:
        seconds = self._clock()
        if seconds % self._divisor == 0:
            logger.info("Gated %s %s at second %d", ctx.method, ctx.path, seconds)
            return ctx.json(
                {"message": self._message, "seconds": seconds}, status_code=403
            )
        return CONTINUE


class Lockout:
    """Answers every request with 403 while the API is in maintenance."""

    def __init__(self, message: str = "api in maintenance mode") -> None:
        self._message = message

    async def __call__(self, ctx: RequestContext) -> DispatchSignal:
        return ctx.json({"message": self._message}, status_code=403)


def lockout(message: str = "api in maintenance mode") -> Lockout:
    return Lockout(message)
