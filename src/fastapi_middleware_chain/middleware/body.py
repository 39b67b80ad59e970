"""JSON body parsing middleware."""

from __future__ import annotations

import json
import logging

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.exceptions import BadRequest
from fastapi_middleware_chain.signals import CONTINUE, DispatchSignal, Fail

logger = logging.getLogger(__name__)


class JSONBody:
    """Parses a JSON request body into ``ctx.body``.

    Requests without a body, or whose content type is not JSON, leave
    ``ctx.body`` as ``None``.
    """

    def __init__(
        self, *, content_types: tuple[str, ...] = ("application/json",)
    ) -> None:
        self._content_types = content_types

    async def __call__(self, ctx: RequestContext) -> DispatchSignal:
        content_type = ctx.request.headers.get("content-type", "")
        media_type = content_type.split(";", 1)[0].strip().lower()
        if media_type not in self._content_types:
            return CONTINUE

        raw = await ctx.request.body()
        if not raw.strip():
            return CONTINUE

        try:
            ctx.body = json.loads(raw)
        except ValueError as exc:
            logger.debug("Rejected malformed JSON body: %s", exc)
            return Fail(BadRequest("malformed JSON body", cause=exc))
        return CONTINUE


def json_body() -> JSONBody:
    return JSONBody()
