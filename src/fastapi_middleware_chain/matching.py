"""Method + path predicates backed by Starlette's path compiler."""

from __future__ import annotations

import re
from typing import Any, Protocol, runtime_checkable

from starlette.routing import compile_path

_EXPRESS_PARAM = re.compile(r"(?<=/):(\w+)")


@runtime_checkable
class Matcher(Protocol):
    """Decides whether an entry applies to a request.

    Returns ``None`` for no match, otherwise the extracted path parameters.
    """

    def match(self, method: str, path: str) -> dict[str, Any] | None: ...


def normalize_path(pattern: str) -> str:
    """Accept ``:name`` parameters, force a leading slash, drop a trailing one."""
    pattern = pattern.strip()
    if not pattern.startswith("/"):
        pattern = "/" + pattern
    pattern = _EXPRESS_PARAM.sub(r"{\1}", pattern)
    if len(pattern) > 1:
        pattern = pattern.rstrip("/") or "/"
    return pattern


def join_paths(prefix: str, path: str) -> str:
    prefix = normalize_path(prefix)
    path = normalize_path(path)
    if path == "/":
        return prefix
    if prefix == "/":
        return path
    return prefix + path


def _strip_trailing(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


class AnyMatcher:
    """Matches every request."""

    def match(self, method: str, path: str) -> dict[str, Any] | None:
        return {}

    def __repr__(self) -> str:
        return "AnyMatcher()"


class PrefixMatcher:
    """Matches any method when the path equals ``prefix`` or lies beneath it."""

    def __init__(self, prefix: str) -> None:
        self.prefix = normalize_path(prefix)
        regex, _, self._convertors = compile_path(self.prefix)
        # "^/a/(?P<x>[^/]+)$" -> "^/a/(?P<x>[^/]+)(?:/.*)?$"
        self._regex = re.compile(regex.pattern[:-1] + "(?:/.*)?$")

    def match(self, method: str, path: str) -> dict[str, Any] | None:
        if self.prefix == "/":
            return {}
        found = self._regex.match(_strip_trailing(path))
        if found is None:
            return None
        return {
            key: self._convertors[key].convert(value)
            for key, value in found.groupdict().items()
        }

    def __repr__(self) -> str:
        return f"PrefixMatcher({self.prefix!r})"


class RouteMatcher:
    """Matches one HTTP method (or any, when ``method`` is None) and a full path."""

    def __init__(self, method: str | None, pattern: str) -> None:
        self.method = method.upper() if method is not None else None
        self.pattern = normalize_path(pattern)
        self._regex, _, self._convertors = compile_path(self.pattern)

    def match(self, method: str, path: str) -> dict[str, Any] | None:
        if self.method is not None:
            requested = method.upper()
            # HEAD is answered by GET routes
            if requested != self.method and not (
                requested == "HEAD" and self.method == "GET"
            ):
                return None
        found = self._regex.match(_strip_trailing(path))
        if found is None:
            return None
        return {
            key: self._convertors[key].convert(value)
            for key, value in found.groupdict().items()
        }

    def __repr__(self) -> str:
        return f"RouteMatcher({self.method!r}, {self.pattern!r})"
