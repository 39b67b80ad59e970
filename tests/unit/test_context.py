"""Tests for RequestContext."""

from __future__ import annotations

import json
from typing import Any

import pytest

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.exceptions import ChainContractError
from fastapi_middleware_chain.signals import COMPLETE


class TestRequestContext:
    def test_construction_with_request(self, make_request: Any) -> None:
        request = make_request()
        ctx = RequestContext(request=request)
        assert ctx.request is request

    def test_defaults(self, make_request: Any) -> None:
        ctx = RequestContext(request=make_request())
        assert ctx.path_params == {}
        assert ctx.body is None
        assert ctx.state == {}
        assert ctx.response is None

    def test_method_and_path(self, make_request: Any) -> None:
        ctx = RequestContext(request=make_request(method="PUT", path="/items/1"))
        assert ctx.method == "PUT"
        assert ctx.path == "/items/1"

    def test_state_not_shared_between_instances(self, make_request: Any) -> None:
        ctx1 = RequestContext(request=make_request())
        ctx2 = RequestContext(request=make_request())
        ctx1.state["x"] = 1
        assert "x" not in ctx2.state


class TestResponses:
    def test_json_sets_response_and_completes(self, make_request: Any) -> None:
        ctx = RequestContext(request=make_request())
        signal = ctx.json({"id": 1}, status_code=201)
        assert signal is COMPLETE
        assert ctx.response is not None
        assert ctx.response.status_code == 201
        assert json.loads(bytes(ctx.response.body)) == {"id": 1}

    def test_html(self, make_request: Any) -> None:
        ctx = RequestContext(request=make_request())
        ctx.html("<h2>hi</h2>")
        assert ctx.response is not None
        assert ctx.response.media_type == "text/html"

    def test_text(self, make_request: Any) -> None:
        ctx = RequestContext(request=make_request())
        ctx.text("deleted")
        assert ctx.response is not None
        assert bytes(ctx.response.body) == b"deleted"

    def test_second_response_rejected(self, make_request: Any) -> None:
        ctx = RequestContext(request=make_request())
        ctx.json({})
        with pytest.raises(ChainContractError):
            ctx.text("again")
