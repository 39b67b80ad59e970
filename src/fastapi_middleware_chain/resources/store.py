"""Data-access collaborator for resources and their children."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

Entity = dict[str, Any]

_RESERVED_QUERY_KEYS = frozenset({"sortby", "sortdir", "limit", "offset"})


@runtime_checkable
class ResourceStore(Protocol):
    """Pluggable storage interface consumed by the resources controller.

    Any method may raise; callers turn the exception into a failure signal.
    """

    async def find(self, filters: Mapping[str, Any] | None = None) -> list[Entity]: ...
    async def find_by_id(self, resource_id: Any) -> Entity | None: ...
    async def add(self, payload: Mapping[str, Any]) -> Entity: ...
    async def update(
        self, resource_id: Any, payload: Mapping[str, Any]
    ) -> Entity | None: ...
    async def remove(self, resource_id: Any) -> int: ...
    async def find_children(self, parent_id: Any) -> list[Entity]: ...
    async def add_child(self, payload: Mapping[str, Any]) -> Entity: ...


def _key(value: Any) -> int | None:
    """Coerce a path or body identifier to an integer key."""
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class InMemoryResourceStore:
    """Default in-memory store. Single-process only."""

    def __init__(
        self,
        resources: Iterable[Mapping[str, Any]] = (),
        children: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        self._resources: dict[int, Entity] = {}
        self._children: dict[int, Entity] = {}
        self._next_id = 1
        self._next_child_id = 1
        for resource in resources:
            self._insert(self._resources, dict(resource), child=False)
        for child in children:
            self._insert(self._children, dict(child), child=True)

    def _insert(
        self, table: dict[int, Entity], record: Entity, *, child: bool
    ) -> Entity:
        key = _key(record.pop("id", None))
        if key is None:
            key = self._next_child_id if child else self._next_id
        if child:
            self._next_child_id = max(self._next_child_id, key + 1)
        else:
            self._next_id = max(self._next_id, key + 1)
        entity = {"id": key, **record}
        table[key] = entity
        return dict(entity)

    async def find(self, filters: Mapping[str, Any] | None = None) -> list[Entity]:
        filters = dict(filters or {})
        sortby = filters.get("sortby", "id")
        descending = str(filters.get("sortdir", "asc")).lower() == "desc"

        rows = [
            dict(row)
            for row in self._resources.values()
            if all(
                str(row.get(field)) == str(expected)
                for field, expected in filters.items()
                if field not in _RESERVED_QUERY_KEYS
            )
        ]
        if sortby == "id":
            rows.sort(key=lambda row: row["id"], reverse=descending)
        else:
            rows.sort(key=lambda row: str(row.get(sortby, "")), reverse=descending)

        offset = max(_key(filters.get("offset")) or 0, 0)
        limit = _key(filters.get("limit"))
        if limit is not None:
            return rows[offset : offset + max(limit, 0)]
        return rows[offset:]

    async def find_by_id(self, resource_id: Any) -> Entity | None:
        key = _key(resource_id)
        if key is None or key not in self._resources:
            return None
        return dict(self._resources[key])

    async def add(self, payload: Mapping[str, Any]) -> Entity:
        record = {k: v for k, v in payload.items() if k != "id"}
        return self._insert(self._resources, record, child=False)

    async def update(
        self, resource_id: Any, payload: Mapping[str, Any]
    ) -> Entity | None:
        key = _key(resource_id)
        if key is None or key not in self._resources:
            return None
        changes = {k: v for k, v in payload.items() if k != "id"}
        self._resources[key].update(changes)
        return dict(self._resources[key])

    async def remove(self, resource_id: Any) -> int:
        key = _key(resource_id)
        if key is None or key not in self._resources:
            return 0
        del self._resources[key]
        self._children = {
            cid: child
            for cid, child in self._children.items()
            if child.get("resource_id") != key
        }
        return 1

    async def find_children(self, parent_id: Any) -> list[Entity]:
        key = _key(parent_id)
        return [
            dict(child)
            for child in self._children.values()
            if child.get("resource_id") == key
        ]

    async def add_child(self, payload: Mapping[str, Any]) -> Entity:
        parent = _key(payload.get("resource_id"))
        if parent is None or parent not in self._resources:
            raise LookupError(f"resource {parent!r} does not exist")
        record = {k: v for k, v in payload.items() if k != "id"}
        record["resource_id"] = parent
        return self._insert(self._children, record, child=True)
