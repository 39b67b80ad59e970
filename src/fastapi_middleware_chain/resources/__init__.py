"""Resources API built on the middleware chain."""

from fastapi_middleware_chain.resources.controller import ResourceController
from fastapi_middleware_chain.resources.router import resources_router
from fastapi_middleware_chain.resources.store import (
    InMemoryResourceStore,
    ResourceStore,
)

__all__ = [
    "InMemoryResourceStore",
    "ResourceController",
    "ResourceStore",
    "resources_router",
]
