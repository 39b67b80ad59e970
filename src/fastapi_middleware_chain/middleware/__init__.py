"""Built-in middleware handlers."""

from fastapi_middleware_chain.middleware.body import JSONBody, json_body
from fastapi_middleware_chain.middleware.errors import error_handler, status_for
from fastapi_middleware_chain.middleware.gating import Lockout, TimeGate, lockout
from fastapi_middleware_chain.middleware.headers import AddName, add_name
from fastapi_middleware_chain.middleware.request_logging import (
    MethodLogger,
    method_logger,
)
from fastapi_middleware_chain.middleware.validation import (
    RequireBody,
    ValidateResource,
    require_body,
    validate_resource,
)

__all__ = [
    "AddName",
    "JSONBody",
    "Lockout",
    "MethodLogger",
    "RequireBody",
    "TimeGate",
    "ValidateResource",
    "add_name",
    "error_handler",
    "json_body",
    "lockout",
    "method_logger",
    "require_body",
    "status_for",
    "validate_resource",
]
