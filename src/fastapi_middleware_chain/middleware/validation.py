"""Validation middleware — resource lookup and required body."""

from __future__ import annotations

import logging
from collections.abc import Sized

from fastapi_middleware_chain._types import LookupCallback
from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.exceptions import BadRequest, InternalFailure, NotFound
from fastapi_middleware_chain.signals import CONTINUE, DispatchSignal, Fail

logger = logging.getLogger(__name__)


class ValidateResource:
    """Looks up the entity named by a path parameter and attaches it to ctx.

    Found: ``ctx.state[state_key]`` is set and the walk continues.
    Absent: fails with NotFound. Lookup error: fails with InternalFailure.
    """

    def __init__(
        self,
        lookup: LookupCallback,
        *,
        param: str = "id",
        state_key: str = "resource",
        message: str = "invalid id",
    ) -> None:
        self._lookup = lookup
        self._param = param
        self._state_key = state_key
        self._message = message

    async def __call__(self, ctx: RequestContext) -> DispatchSignal:
        if self._param not in ctx.path_params:
            return Fail(BadRequest(f"missing path parameter '{self._param}'"))
        identifier = ctx.path_params[self._param]

        try:
            entity = await self._lookup(identifier)
        except Exception as exc:
            logger.warning("Lookup of %s=%r failed: %s", self._param, identifier, exc)
            return Fail(InternalFailure(str(exc) or "lookup failed", cause=exc))

        if entity is None:
            return Fail(NotFound(self._message))
        ctx.state[self._state_key] = entity
        return CONTINUE


class RequireBody:
    """Fails with BadRequest when the request body is absent or empty."""

    def __init__(self, message: str = "body is required") -> None:
        self._message = message

    async def __call__(self, ctx: RequestContext) -> DispatchSignal:
        body = ctx.body
        if body is None:
            return Fail(BadRequest(self._message))
        if isinstance(body, Sized) and len(body) == 0:
            return Fail(BadRequest(self._message))
        return CONTINUE


def validate_resource(
    lookup: LookupCallback,
    *,
    param: str = "id",
    state_key: str = "resource",
    message: str = "invalid id",
) -> ValidateResource:
    return ValidateResource(lookup, param=param, state_key=state_key, message=message)


def require_body(message: str = "body is required") -> RequireBody:
    return RequireBody(message)
