"""Minimal structural protocols for the document store.

``pymongo.database.Database`` and ``pymongo.collection.Collection``
satisfy these; tests substitute in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CollectionHandle(Protocol):
    """Minimal collection protocol (``pymongo.collection.Collection``)."""

    @property
    def name(self) -> str: ...

    def list_indexes(self) -> Iterable[Mapping[str, Any]]: ...
    def create_indexes(self, indexes: list[Any], **kwargs: Any) -> list[str]: ...
    def drop_index(self, index_or_name: Any, **kwargs: Any) -> None: ...
    def find(self, *args: Any, **kwargs: Any) -> Iterable[Mapping[str, Any]]: ...
    def aggregate(self, pipeline: list[Any], **kwargs: Any) -> Iterable[Mapping[str, Any]]: ...
    def update_one(self, filter: Mapping[str, Any], update: Any, **kwargs: Any) -> Any: ...
    def count_documents(self, filter: Mapping[str, Any], **kwargs: Any) -> int: ...
    def rename(self, new_name: str, **kwargs: Any) -> Any: ...


@runtime_checkable
class DatabaseHandle(Protocol):
    """Minimal database protocol (``pymongo.database.Database``)."""

    @property
    def name(self) -> str: ...

    def get_collection(self, name: str, **kwargs: Any) -> CollectionHandle: ...
    def create_collection(self, name: str, **kwargs: Any) -> CollectionHandle: ...
    def drop_collection(self, name_or_collection: Any, **kwargs: Any) -> Any: ...
    def list_collections(self, filter: Mapping[str, Any] | None = None, **kwargs: Any) -> Iterable[Mapping[str, Any]]: ...
    def list_collection_names(self, filter: Mapping[str, Any] | None = None, **kwargs: Any) -> list[str]: ...
