"""Router — ordered registration of handler entries.

Every registration call appends entries; the position of an entry is fixed
at registration time and is the only ordering the dispatcher knows about.
Mounting a router inside another flattens its entries at the mount point.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from fastapi_middleware_chain._types import AnyHandler, ErrorHandler, Handler
from fastapi_middleware_chain.entry import HandlerEntry, HandlerKind
from fastapi_middleware_chain.hooks import ChainHook
from fastapi_middleware_chain.matching import (
    AnyMatcher,
    Matcher,
    PrefixMatcher,
    RouteMatcher,
    join_paths,
)


@dataclass(frozen=True)
class ResolvedChain:
    """Immutable, pre-computed handler list shared by all requests."""

    entries: tuple[HandlerEntry, ...]
    hooks: tuple[ChainHook, ...] = ()
    debug: bool = False


@dataclass(frozen=True)
class _Registration:
    """Entry as declared on a router, before mount prefixes are applied."""

    kind: HandlerKind
    action: AnyHandler
    method: str | None = None
    path: str | None = None
    prefix: str | None = None


class Router:
    """Ordered container of handler registrations."""

    def __init__(self, *, debug: bool = False) -> None:
        self._items: list[_Registration | tuple[str, Router]] = []
        self._hooks: list[ChainHook] = []
        self._debug = debug
        self._resolved: ResolvedChain | None = None

    def register_always(self, *handlers: Handler) -> Router:
        """Run ``handlers`` for every request reaching this point."""
        return self._append(
            _Registration(kind=HandlerKind.NORMAL, action=h) for h in handlers
        )

    def register_for(
        self, method: str | None, path: str, *handlers: Handler
    ) -> Router:
        """Run ``handlers`` in order when method and path match.

        ``method=None`` matches every method.
        """
        if not handlers:
            raise ValueError(f"No handlers given for {method or 'ANY'} {path}")
        return self._append(
            _Registration(kind=HandlerKind.NORMAL, action=h, method=method, path=path)
            for h in handlers
        )

    def register_error_handler(self, *handlers: ErrorHandler) -> Router:
        return self._append(
            _Registration(kind=HandlerKind.ERROR, action=h) for h in handlers
        )

    def use(self, *items: str | Handler | Router) -> Router:
        """Express-style ``use``: optional leading prefix, then handlers or routers."""
        prefix = "/"
        if items and isinstance(items[0], str):
            prefix, items = items[0], items[1:]
        if not items:
            raise ValueError("use() needs at least one handler or router")
        for item in items:
            if isinstance(item, Router):
                self._items.append((prefix, item))
            elif isinstance(item, str):
                raise TypeError("use() accepts a single leading prefix")
            else:
                self._items.append(
                    _Registration(kind=HandlerKind.NORMAL, action=item, prefix=prefix)
                )
        self._resolved = None
        return self

    def get(self, path: str, *handlers: Handler) -> Router:
        return self.register_for("GET", path, *handlers)

    def post(self, path: str, *handlers: Handler) -> Router:
        return self.register_for("POST", path, *handlers)

    def put(self, path: str, *handlers: Handler) -> Router:
        return self.register_for("PUT", path, *handlers)

    def patch(self, path: str, *handlers: Handler) -> Router:
        return self.register_for("PATCH", path, *handlers)

    def delete(self, path: str, *handlers: Handler) -> Router:
        return self.register_for("DELETE", path, *handlers)

    def add_hook(self, hook: ChainHook) -> Router:
        self._hooks.append(hook)
        self._resolved = None
        return self

    def resolve(self) -> ResolvedChain:
        if self._resolved is not None:
            return self._resolved

        flat: list[HandlerEntry] = []
        self._flatten(self, "/", flat)

        self._resolved = ResolvedChain(
            entries=tuple(flat),
            hooks=tuple(self._hooks),
            debug=self._debug,
        )
        return self._resolved

    def _append(self, registrations: Iterable[_Registration]) -> Router:
        self._items.extend(registrations)
        self._resolved = None
        return self

    @staticmethod
    def _flatten(router: Router, mount: str, out: list[HandlerEntry]) -> None:
        for item in router._items:
            if isinstance(item, tuple):
                prefix, child = item
                Router._flatten(child, join_paths(mount, prefix), out)
            else:
                out.append(
                    HandlerEntry(
                        matcher=Router._matcher_for(item, mount),
                        kind=item.kind,
                        action=item.action,
                    )
                )

    @staticmethod
    def _matcher_for(item: _Registration, mount: str) -> Matcher:
        if item.path is not None:
            return RouteMatcher(item.method, join_paths(mount, item.path))
        scope = join_paths(mount, item.prefix or "/")
        if scope == "/":
            return AnyMatcher()
        return PrefixMatcher(scope)
