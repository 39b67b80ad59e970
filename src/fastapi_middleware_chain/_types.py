"""Shared type aliases for handler callables."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from fastapi_middleware_chain.context import RequestContext
    from fastapi_middleware_chain.exceptions import Failure
    from fastapi_middleware_chain.signals import DispatchSignal

# Ordinary middleware: receives the context, reports an outcome
Handler = Callable[["RequestContext"], Awaitable["DispatchSignal"]]
# Error middleware: receives the stashed failure first
ErrorHandler = Callable[["Failure", "RequestContext"], Awaitable["DispatchSignal"]]
AnyHandler = Union[Handler, ErrorHandler]

# Data-access lookup used by validation middleware
LookupCallback = Callable[[Any], Awaitable[Any]]
# Clock used by time-based gating, returns the current second of the minute
ClockCallback = Callable[[], int]
