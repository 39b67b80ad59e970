"""Resource handlers.

Routes that take an ``id`` run ``validate`` first, which attaches the
resource to ``ctx.state["resource"]``; routes that take a body run
``require_body`` first. Store errors become InternalFailure signals and
are rendered by the terminal error handler.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.exceptions import BadRequest, InternalFailure, NotFound
from fastapi_middleware_chain.middleware.validation import (
    RequireBody,
    ValidateResource,
)
from fastapi_middleware_chain.resources.store import ResourceStore
from fastapi_middleware_chain.signals import DispatchSignal, Fail

logger = logging.getLogger(__name__)


def _object_body(ctx: RequestContext) -> Mapping[str, Any] | None:
    return ctx.body if isinstance(ctx.body, Mapping) else None


class ResourceController:
    """Handlers for the resources API, bound to one store."""

    def __init__(self, store: ResourceStore) -> None:
        self._store = store
        self.validate = ValidateResource(store.find_by_id)
        self.require_body = RequireBody()

    async def list_resources(self, ctx: RequestContext) -> DispatchSignal:
        try:
            resources = await self._store.find(dict(ctx.request.query_params))
        except Exception as exc:
            return Fail(InternalFailure("error retrieving resources", cause=exc))
        return ctx.json(resources)

    async def show_resource(self, ctx: RequestContext) -> DispatchSignal:
        return ctx.json(ctx.state["resource"])

    async def create_resource(self, ctx: RequestContext) -> DispatchSignal:
        payload = _object_body(ctx)
        if payload is None:
            return Fail(BadRequest("body must be a JSON object"))
        try:
            resource = await self._store.add(payload)
        except Exception as exc:
            detail = str(exc) or "error adding the resource"
            return Fail(InternalFailure(detail, cause=exc))
        logger.info("Created resource #%s", resource.get("id"))
        return ctx.json(resource, status_code=201)

    async def update_resource(self, ctx: RequestContext) -> DispatchSignal:
        payload = _object_body(ctx)
        if payload is None:
            return Fail(BadRequest("body must be a JSON object"))
        resource_id = ctx.state["resource"]["id"]
        try:
            resource = await self._store.update(resource_id, payload)
        except Exception as exc:
            return Fail(InternalFailure("error updating the resource", cause=exc))
        if resource is None:
            return Fail(NotFound("invalid id"))
        return ctx.json(resource)

    async def remove_resource(self, ctx: RequestContext) -> DispatchSignal:
        resource_id = ctx.state["resource"]["id"]
        try:
            await self._store.remove(resource_id)
        except Exception as exc:
            return Fail(InternalFailure("error removing the resource", cause=exc))
        logger.info("Removed resource #%s", resource_id)
        return ctx.json({"message": f"resource #{resource_id} removed"})

    async def list_children(self, ctx: RequestContext) -> DispatchSignal:
        try:
            children = await self._store.find_children(ctx.state["resource"]["id"])
        except Exception as exc:
            return Fail(InternalFailure("error getting children", cause=exc))
        return ctx.json(children)

    async def create_child(self, ctx: RequestContext) -> DispatchSignal:
        payload = _object_body(ctx)
        if payload is None:
            return Fail(BadRequest("body must be a JSON object"))
        child_info = {**payload, "resource_id": ctx.state["resource"]["id"]}
        try:
            child = await self._store.add_child(child_info)
        except Exception as exc:
            return Fail(InternalFailure("error adding child", cause=exc))
        return ctx.json(child, status_code=201)
