"""Failure taxonomy and engine-level exceptions."""

from __future__ import annotations

from enum import Enum


class FailureKind(Enum):
    """Closed set of failure classes a handler may report."""

    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _KIND_STATUS[self]


_KIND_STATUS = {
    FailureKind.NOT_FOUND: 404,
    FailureKind.BAD_REQUEST: 400,
    FailureKind.INTERNAL: 500,
}


class ChainException(Exception):
    """Base for all chain exceptions."""


class Failure(ChainException):
    """Payload carried by a ``Fail`` signal to the next error handler.

    A failure without a kind is unclassified and renders as 400.
    """

    kind: FailureKind | None = None

    def __init__(
        self,
        detail: str,
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.cause = cause
        self._status_code = status_code

    @property
    def status_code(self) -> int:
        if self._status_code is not None:
            return self._status_code
        if self.kind is not None:
            return self.kind.status_code
        return 400


class NotFound(Failure):
    """Requested entity is absent (404)."""

    kind = FailureKind.NOT_FOUND

    def __init__(
        self,
        detail: str = "Not found",
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(detail, status_code=status_code, cause=cause)


class BadRequest(Failure):
    """Missing or malformed required input (400)."""

    kind = FailureKind.BAD_REQUEST

    def __init__(
        self,
        detail: str = "Bad request",
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(detail, status_code=status_code, cause=cause)


class InternalFailure(Failure):
    """Collaborator or I/O failure (500)."""

    kind = FailureKind.INTERNAL

    def __init__(
        self,
        detail: str = "Internal server error",
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(detail, cause=cause)


class ChainContractError(ChainException):
    """A handler broke the Continue/Fail/Complete protocol."""


class ChainExhausted(ChainContractError):
    """The walk reached the end of the chain without a response."""

    def __init__(self, method: str, path: str) -> None:
        super().__init__(f"No handler responded to {method} {path}")
        self.method = method
        self.path = path
