"""Header injection middleware."""

from __future__ import annotations

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.signals import CONTINUE, DispatchSignal


class AddName:
    """Copies a request header into ``ctx.state`` unless a value is already set."""

    def __init__(self, header: str = "x-name", *, state_key: str = "name") -> None:
        self._header = header
        self._state_key = state_key

    async def __call__(self, ctx: RequestContext) -> DispatchSignal:
        if not ctx.state.get(self._state_key):
            value = ctx.request.headers.get(self._header)
            if value:
                ctx.state[self._state_key] = value
        return CONTINUE


def add_name(header: str = "x-name", *, state_key: str = "name") -> AddName:
    return AddName(header, state_key=state_key)
