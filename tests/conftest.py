"""Shared pytest fixtures for fastapi-middleware-chain tests."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request

from fastapi_middleware_chain.resources.store import InMemoryResourceStore


@pytest.fixture
def make_request() -> Any:
    """Factory for creating Starlette Request objects with an optional body."""

    def _make(
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
        query_string: str = "",
        body: bytes | None = None,
        json_body: Any = None,
    ) -> Request:
        headers = dict(headers or {})
        if json_body is not None:
            body = json.dumps(json_body).encode()
            headers.setdefault("content-type", "application/json")
        payload = body or b""

        scope: dict[str, Any] = {
            "type": "http",
            "scheme": "http",
            "server": ("testserver", 80),
            "method": method,
            "path": path,
            "query_string": query_string.encode(),
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
            "root_path": "",
        }

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": payload, "more_body": False}

        return Request(scope, receive)

    return _make


@pytest.fixture
def store() -> InMemoryResourceStore:
    """In-memory store seeded with two resources and one child."""
    return InMemoryResourceStore(
        resources=[
            {"id": 1, "name": "Acme"},
            {"id": 2, "name": "Globex"},
        ],
        children=[{"id": 1, "resource_id": 1, "text": "hello"}],
    )


@pytest.fixture
def mock_store() -> AsyncMock:
    """Store double whose methods all return 'nothing found' by default."""
    mock = AsyncMock()
    mock.find.return_value = []
    mock.find_by_id.return_value = None
    mock.update.return_value = None
    mock.remove.return_value = 0
    mock.find_children.return_value = []
    return mock
