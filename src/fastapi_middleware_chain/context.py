"""RequestContext — per-request state threaded through the chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, Response

from fastapi_middleware_chain.exceptions import ChainContractError
from fastapi_middleware_chain.signals import COMPLETE, Complete


@dataclass
class RequestContext:
    """Mutable attribute bag for one in-flight request.

    Upstream handlers write into ``state`` and downstream handlers read it.
    ``response`` is set exactly once, by the handler that completes the request.
    """

    request: Request
    path_params: dict[str, Any] = field(default_factory=dict)
    body: Any | None = None
    state: dict[str, Any] = field(default_factory=dict)
    response: Response | None = None

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.url.path

    def respond(self, response: Response) -> Complete:
        if self.response is not None:
            raise ChainContractError("A response has already been written")
        self.response = response
        return COMPLETE

    def json(self, content: Any, *, status_code: int = 200) -> Complete:
        return self.respond(JSONResponse(content, status_code=status_code))

    def html(self, content: str, *, status_code: int = 200) -> Complete:
        return self.respond(HTMLResponse(content, status_code=status_code))

    def text(self, content: str, *, status_code: int = 200) -> Complete:
        return self.respond(
            Response(content, status_code=status_code, media_type="text/plain")
        )
