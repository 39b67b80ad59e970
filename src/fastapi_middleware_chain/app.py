"""Application factory — builds the server chain and hosts it in FastAPI.

Chain order (registration order is dispatch order):

    json_body -> method_logger -> add_name -> [lockout] -> [time gate]
    -> /resources router -> GET / -> DELETE / -> error_handler

The error handler is registered last so that every failure raised above it
can reach it.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from html import escape

from fastapi import FastAPI

from fastapi_middleware_chain.config import Settings
from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.endpoint import mount_chain
from fastapi_middleware_chain.hooks import AccessLogHook
from fastapi_middleware_chain.log import setup_logging
from fastapi_middleware_chain.middleware import (
    TimeGate,
    add_name,
    error_handler,
    json_body,
    lockout,
    method_logger,
)
from fastapi_middleware_chain.resources import (
    InMemoryResourceStore,
    ResourceStore,
    resources_router,
)
from fastapi_middleware_chain.router import Router
from fastapi_middleware_chain.signals import DispatchSignal

logger = logging.getLogger(__name__)


async def welcome(ctx: RequestContext) -> DispatchSignal:
    name = ctx.state.get("name")
    name_insert = f" {escape(name)}" if name else ""
    return ctx.html(
        "\n    <h2>Resources API</h2>\n"
        f"    <p>Welcome{name_insert} to the Resources API</p>\n    "
    )


async def delete_root(ctx: RequestContext) -> DispatchSignal:
    return ctx.text("deleted")


def build_chain(settings: Settings, store: ResourceStore) -> Router:
    chain = Router(debug=settings.debug_trace)
    chain.use(json_body(), method_logger(), add_name())

    # Gates sit in front of the resources router so they cover every route.
    if settings.maintenance_mode:
        chain.use(lockout())
    if settings.gate_divisor:
        chain.use(TimeGate(settings.gate_divisor))

    chain.use(settings.resources_prefix, resources_router(store))
    chain.get("/", welcome)
    chain.delete("/", delete_root)

    chain.register_error_handler(error_handler)
    chain.add_hook(AccessLogHook())
    return chain


def create_app(
    settings: Settings | None = None, store: ResourceStore | None = None
) -> FastAPI:
    settings = settings or Settings()
    store = store if store is not None else InMemoryResourceStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(settings.log_level)
        logger.info("%s starting", settings.app_name)
        yield
        logger.info("%s stopped", settings.app_name)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    chain = build_chain(settings, store)
    mount_chain(app, chain, strict=settings.strict)

    app.state.settings = settings
    app.state.store = store
    app.state.chain = chain.resolve()
    return app
