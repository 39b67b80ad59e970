"""Tests for ResourceController handlers in isolation."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.exceptions import BadRequest, InternalFailure, NotFound
from fastapi_middleware_chain.resources.controller import ResourceController
from fastapi_middleware_chain.signals import COMPLETE, Fail


def _ctx(
    make_request: Any, *, body: Any = None, resource: Any = None, **kw: Any
) -> RequestContext:
    ctx = RequestContext(request=make_request(**kw), body=body)
    if resource is not None:
        ctx.state["resource"] = resource
    return ctx


def _payload(ctx: RequestContext) -> Any:
    assert ctx.response is not None
    return json.loads(ctx.response.body)


class TestListResources:
    async def test_passes_query_params_as_filters(
        self, make_request: Any, mock_store: AsyncMock
    ) -> None:
        mock_store.find.return_value = [{"id": 1}]
        ctx = _ctx(make_request, query_string="name=Acme&limit=1")

        signal = await ResourceController(mock_store).list_resources(ctx)

        assert signal is COMPLETE
        mock_store.find.assert_awaited_once_with({"name": "Acme", "limit": "1"})
        assert _payload(ctx) == [{"id": 1}]

    async def test_store_error_becomes_internal_failure(
        self, make_request: Any, mock_store: AsyncMock
    ) -> None:
        mock_store.find.side_effect = RuntimeError("db down")
        ctx = _ctx(make_request)

        signal = await ResourceController(mock_store).list_resources(ctx)

        assert isinstance(signal, Fail)
        assert isinstance(signal.error, InternalFailure)
        assert signal.error.detail == "error retrieving resources"
        assert ctx.response is None


class TestCreateResource:
    async def test_created_with_201(
        self, make_request: Any, mock_store: AsyncMock
    ) -> None:
        mock_store.add.return_value = {"id": 3, "name": "Initech"}
        ctx = _ctx(make_request, body={"name": "Initech"})

        signal = await ResourceController(mock_store).create_resource(ctx)

        assert signal is COMPLETE
        assert ctx.response is not None
        assert ctx.response.status_code == 201

    async def test_non_object_body_rejected(
        self, make_request: Any, mock_store: AsyncMock
    ) -> None:
        ctx = _ctx(make_request, body=[1, 2])

        signal = await ResourceController(mock_store).create_resource(ctx)

        assert isinstance(signal, Fail)
        assert isinstance(signal.error, BadRequest)
        mock_store.add.assert_not_awaited()

    async def test_store_message_is_reported(
        self, make_request: Any, mock_store: AsyncMock
    ) -> None:
        mock_store.add.side_effect = ValueError("name taken")
        ctx = _ctx(make_request, body={"name": "Acme"})

        signal = await ResourceController(mock_store).create_resource(ctx)

        assert isinstance(signal, Fail)
        assert signal.error.detail == "name taken"


class TestUpdateResource:
    async def test_vanished_resource_is_not_found(
        self, make_request: Any, mock_store: AsyncMock
    ) -> None:
        ctx = _ctx(make_request, body={"name": "x"}, resource={"id": 1})

        signal = await ResourceController(mock_store).update_resource(ctx)

        assert isinstance(signal, Fail)
        assert isinstance(signal.error, NotFound)
        mock_store.update.assert_awaited_once_with(1, {"name": "x"})


class TestRemoveResource:
    async def test_confirmation_message(
        self, make_request: Any, mock_store: AsyncMock
    ) -> None:
        ctx = _ctx(make_request, resource={"id": 2})

        await ResourceController(mock_store).remove_resource(ctx)

        assert _payload(ctx) == {"message": "resource #2 removed"}


class TestChildren:
    async def test_child_is_bound_to_parent(
        self, make_request: Any, mock_store: AsyncMock
    ) -> None:
        mock_store.add_child.return_value = {"id": 5, "resource_id": 1}
        ctx = _ctx(
            make_request, body={"resource_id": 9, "text": "x"}, resource={"id": 1}
        )

        signal = await ResourceController(mock_store).create_child(ctx)

        assert signal is COMPLETE
        mock_store.add_child.assert_awaited_once_with({"resource_id": 1, "text": "x"})
        assert ctx.response is not None
        assert ctx.response.status_code == 201

    async def test_list_children_error(
        self, make_request: Any, mock_store: AsyncMock
    ) -> None:
        mock_store.find_children.side_effect = OSError()
        ctx = _ctx(make_request, resource={"id": 1})

        signal = await ResourceController(mock_store).list_children(ctx)

        assert isinstance(signal, Fail)
        assert signal.error.detail == "error getting children"
