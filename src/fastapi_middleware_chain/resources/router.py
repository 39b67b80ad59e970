"""Resources router — wires controller handlers into an ordered chain."""

from __future__ import annotations

import logging

from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.resources.controller import ResourceController
from fastapi_middleware_chain.resources.store import ResourceStore
from fastapi_middleware_chain.router import Router
from fastapi_middleware_chain.signals import CONTINUE, DispatchSignal

logger = logging.getLogger(__name__)


async def _router_hit(ctx: RequestContext) -> DispatchSignal:
    logger.debug("resources router")
    return CONTINUE


def resources_router(store: ResourceStore) -> Router:
    """Build the router for ``/resources``; mount it with ``Router.use``."""
    c = ResourceController(store)
    router = Router()

    # Only runs for paths beneath the mount prefix
    router.use(_router_hit)

    router.get("/", c.list_resources)
    router.get("/:id", c.validate, c.show_resource)
    router.post("/", c.require_body, c.create_resource)
    router.put("/:id", c.validate, c.require_body, c.update_resource)
    router.delete("/:id", c.validate, c.remove_resource)
    router.get("/:id/children", c.validate, c.list_children)
    router.post("/:id/children", c.validate, c.require_body, c.create_child)
    return router
