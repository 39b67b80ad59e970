"""Tests for JSONBody."""

from __future__ import annotations

from typing import Any

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.exceptions import BadRequest
from fastapi_middleware_chain.middleware.body import JSONBody, json_body
from fastapi_middleware_chain.signals import CONTINUE, Fail


class TestJSONBody:
    async def test_parses_json_object(self, make_request: Any) -> None:
        ctx = RequestContext(request=make_request("POST", json_body={"name": "Acme"}))
        assert await json_body()(ctx) is CONTINUE
        assert ctx.body == {"name": "Acme"}

    async def test_content_type_parameters_accepted(self, make_request: Any) -> None:
        request = make_request(
            "POST",
            headers={"content-type": "application/json; charset=utf-8"},
            body=b'{"a": 1}',
        )
        ctx = RequestContext(request=request)
        await JSONBody()(ctx)
        assert ctx.body == {"a": 1}

    async def test_empty_body_leaves_none(self, make_request: Any) -> None:
        request = make_request("POST", headers={"content-type": "application/json"})
        ctx = RequestContext(request=request)
        assert await json_body()(ctx) is CONTINUE
        assert ctx.body is None

    async def test_other_content_type_ignored(self, make_request: Any) -> None:
        request = make_request(
            "POST", headers={"content-type": "text/plain"}, body=b"not json"
        )
        ctx = RequestContext(request=request)
        assert await json_body()(ctx) is CONTINUE
        assert ctx.body is None

    async def test_malformed_json_fails_bad_request(self, make_request: Any) -> None:
        request = make_request(
            "POST", headers={"content-type": "application/json"}, body=b"{oops"
        )
        signal = await json_body()(RequestContext(request=request))
        assert isinstance(signal, Fail)
        assert isinstance(signal.error, BadRequest)
        assert signal.error.detail == "malformed JSON body"
