"""FastAPI Middleware Chain - ordered, Express-style middleware dispatch for FastAPI."""

from fastapi_middleware_chain.app import build_chain, create_app
from fastapi_middleware_chain.config import Settings
from fastapi_middleware_chain.context import RequestContext
from fastapi_middleware_chain.dispatcher import DispatchResult, Outcome, dispatch
from fastapi_middleware_chain.endpoint import chain_endpoint, mount_chain
from fastapi_middleware_chain.entry import HandlerEntry, HandlerKind
from fastapi_middleware_chain.exceptions import (
    BadRequest,
    ChainContractError,
    ChainException,
    ChainExhausted,
    Failure,
    FailureKind,
    InternalFailure,
    NotFound,
)
from fastapi_middleware_chain.hooks import (
    AccessLogHook,
    AfterHandler,
    AfterRequest,
    BeforeRequest,
    ChainHook,
)
from fastapi_middleware_chain.matching import (
    AnyMatcher,
    Matcher,
    PrefixMatcher,
    RouteMatcher,
)
from fastapi_middleware_chain.middleware import (
    AddName,
    JSONBody,
    Lockout,
    MethodLogger,
    RequireBody,
    TimeGate,
    ValidateResource,
    add_name,
    error_handler,
    json_body,
    lockout,
    method_logger,
    require_body,
    validate_resource,
)
from fastapi_middleware_chain.router import ResolvedChain, Router
from fastapi_middleware_chain.signals import (
    COMPLETE,
    CONTINUE,
    Complete,
    Continue,
    DispatchSignal,
    Fail,
)
from fastapi_middleware_chain.trace import DispatchTrace, TraceEntry

__all__ = [
    "AccessLogHook",
    "AddName",
    "AfterHandler",
    "AfterRequest",
    "AnyMatcher",
    "BadRequest",
    "BeforeRequest",
    "COMPLETE",
    "CONTINUE",
    "ChainContractError",
    "ChainException",
    "ChainExhausted",
    "ChainHook",
    "Complete",
    "Continue",
    "DispatchResult",
    "DispatchSignal",
    "DispatchTrace",
    "Fail",
    "Failure",
    "FailureKind",
    "HandlerEntry",
    "HandlerKind",
    "InternalFailure",
    "JSONBody",
    "Lockout",
    "Matcher",
    "MethodLogger",
    "NotFound",
    "Outcome",
    "PrefixMatcher",
    "RequestContext",
    "RequireBody",
    "ResolvedChain",
    "RouteMatcher",
    "Router",
    "Settings",
    "TimeGate",
    "TraceEntry",
    "ValidateResource",
    "add_name",
    "build_chain",
    "chain_endpoint",
    "create_app",
    "dispatch",
    "error_handler",
    "json_body",
    "lockout",
    "method_logger",
    "mount_chain",
    "require_body",
    "validate_resource",
]
