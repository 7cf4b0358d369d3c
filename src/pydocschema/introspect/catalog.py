"""Collection listing and storage statistics for a database."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pymongo.errors import OperationFailure

from pydocschema._constants import NAMESPACE_NOT_FOUND
from pydocschema._store import CollectionHandle, DatabaseHandle
from pydocschema.schema import TableInfo

_SYSTEM_PREFIX = "system."


def get_table_listing(database: DatabaseHandle) -> list[str]:
    """Names of the collections in ``database``, sorted.

    Views and ``system.*`` namespaces are excluded.
    """
    names = database.list_collection_names(filter={"type": "collection"})
    return sorted(name for name in names if not name.startswith(_SYSTEM_PREFIX))


def get_tables(database: DatabaseHandle) -> list[TableInfo]:
    """Name and storage size of every collection in ``database``, sorted by name.

    Sizes come from ``$collStats`` storage statistics (``totalSize``, data
    plus indexes), not from document counts.
    """
    return [
        TableInfo(name=name, size_bytes=_storage_size(database.get_collection(name)))
        for name in get_table_listing(database)
    ]


def get_collection_info(database: DatabaseHandle, name: str) -> Mapping[str, Any] | None:
    """The ``listCollections`` entry for ``name`` (with its options), or None."""
    for info in database.list_collections(filter={"name": name}):
        return info
    return None


def _storage_size(collection: CollectionHandle) -> int:
    pipeline = [
        {"$collStats": {"storageStats": {"scale": 1}}},
        {"$project": {"storageStats.totalSize": 1, "storageStats.storageSize": 1}},
    ]
    try:
        stats = list(collection.aggregate(pipeline))
    except OperationFailure as exc:
        # Dropped between listing and stats.
        if exc.code == NAMESPACE_NOT_FOUND:
            return 0
        raise

    # Sharded collections report one entry per shard.
    total = 0
    for entry in stats:
        storage = entry.get("storageStats") or {}
        total += int(storage.get("totalSize", storage.get("storageSize", 0)) or 0)
    return total
