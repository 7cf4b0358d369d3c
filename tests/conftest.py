"""Shared test fixtures: an in-memory stand-in for a pymongo database.

Only the slice of the pymongo API that pydocschema calls is modelled,
with the server's error codes for the failure paths it relies on.
"""

from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any

import bson
import pytest
from bson.objectid import ObjectId
from pymongo import IndexModel
from pymongo.errors import CollectionInvalid, OperationFailure

from pydocschema import SchemaBuilder

_MISSING = object()


def _matches(document: dict[str, Any], query: dict[str, Any] | None) -> bool:
    for key, condition in (query or {}).items():
        if isinstance(condition, dict) and "$exists" in condition:
            if (key in document) != bool(condition["$exists"]):
                return False
        elif document.get(key, _MISSING) != condition:
            return False
    return True


class FakeCollection:
    """Stateless handle; all state lives on the owning FakeDatabase."""

    def __init__(self, database: FakeDatabase, name: str) -> None:
        self.database = database
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def _state(self) -> dict[str, Any] | None:
        return self.database.collections.get(self._name)

    def _ensure(self) -> dict[str, Any]:
        if self._state is None:
            self.database.collections[self._name] = FakeDatabase.new_state()
        return self._state

    # --- Documents ---

    def insert_one(self, document: dict[str, Any]) -> SimpleNamespace:
        document = dict(document)
        document.setdefault("_id", ObjectId())
        self._ensure()["docs"].append(document)
        return SimpleNamespace(inserted_id=document["_id"])

    def insert_many(self, documents: list[dict[str, Any]]) -> SimpleNamespace:
        ids = [self.insert_one(document).inserted_id for document in documents]
        return SimpleNamespace(inserted_ids=ids)

    def find(
        self,
        filter: dict[str, Any] | None = None,
        projection: dict[str, Any] | None = None,
        limit: int = 0,
    ) -> list[dict[str, Any]]:
        self.database.calls.append(("find", self._name, filter, limit))
        if self._state is None:
            return []
        found = [d for d in self._state["docs"] if _matches(d, filter)]
        if limit:
            found = found[:limit]
        if projection:
            keep = [k for k, v in projection.items() if v]
            return [{k: d[k] for k in keep if k in d} for d in found]
        return copy.deepcopy(found)

    def count_documents(self, filter: dict[str, Any], limit: int = 0) -> int:
        count = len(self.find(filter))
        return min(count, limit) if limit else count

    def update_one(self, filter: dict[str, Any], update: dict[str, Any]) -> SimpleNamespace:
        if self._state is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        for document in self._state["docs"]:
            if not _matches(document, filter):
                continue
            if document["_id"] in self.database.failing_ids:
                raise OperationFailure("WriteConflict", code=112)
            modified = 0
            for source, target in update.get("$rename", {}).items():
                if source in document:
                    document[target] = document.pop(source)
                    modified = 1
            return SimpleNamespace(matched_count=1, modified_count=modified)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def aggregate(self, pipeline: list[dict[str, Any]]) -> list[dict[str, Any]]:
        self.database.calls.append(("aggregate", self._name, pipeline))
        stage = pipeline[0]
        if "$collStats" in stage:
            if self._state is None:
                raise OperationFailure("ns does not exist", code=26)
            data = sum(len(bson.encode(d)) for d in self._state["docs"])
            return [{"storageStats": {"totalSize": 4096 * len(self._state["indexes"]) + data}}]
        if "$sample" in stage:
            return self.find({}, limit=stage["$sample"]["size"])
        raise NotImplementedError(stage)

    # --- Indexes ---

    def list_indexes(self) -> list[dict[str, Any]]:
        if self._state is None:
            return []
        return copy.deepcopy(self._state["indexes"])

    def create_indexes(self, indexes: list[IndexModel]) -> list[str]:
        return [self._create_one(dict(model.document)) for model in indexes]

    def _create_one(self, document: dict[str, Any]) -> str:
        state = self._ensure()
        key = dict(document.pop("key"))
        name = document.pop("name")
        for index in state["indexes"]:
            if index["name"] == name:
                if list(index["key"].items()) != list(key.items()):
                    raise OperationFailure("IndexKeySpecsConflict", code=86)
                return name
            if list(index["key"].items()) == list(key.items()):
                raise OperationFailure("IndexOptionsConflict", code=85)
        state["indexes"].append({"v": 2, "key": key, "name": name, **document})
        return name

    def drop_index(self, name: str) -> None:
        state = self._state
        if state is None:
            raise OperationFailure("ns not found", code=26)
        if name == "_id_":
            raise OperationFailure("cannot drop _id index", code=72)
        for index in state["indexes"]:
            if index["name"] == name:
                state["indexes"].remove(index)
                return
        raise OperationFailure(f"index not found with name [{name}]", code=27)

    def rename(self, new_name: str) -> None:
        self.database.collections[new_name] = self.database.collections.pop(self._name)


class FakeDatabase:
    def __init__(self, name: str = "testdb") -> None:
        self.name = name
        self.collections: dict[str, dict[str, Any]] = {}
        self.views: set[str] = set()
        self.failing_ids: set[Any] = set()
        self.calls: list[tuple[Any, ...]] = []

    @staticmethod
    def new_state(options: dict[str, Any] | None = None) -> dict[str, Any]:
        return {
            "docs": [],
            "indexes": [{"v": 2, "key": {"_id": 1}, "name": "_id_"}],
            "options": dict(options or {}),
        }

    def __getitem__(self, name: str) -> FakeCollection:
        return self.get_collection(name)

    def get_collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def create_collection(self, name: str, **options: Any) -> FakeCollection:
        if name in self.collections or name in self.views:
            raise CollectionInvalid(f"collection {name} already exists")
        self.collections[name] = self.new_state(options)
        return self.get_collection(name)

    def create_view(self, name: str) -> None:
        self.views.add(name)

    def drop_collection(self, name: str) -> None:
        self.collections.pop(name, None)
        self.views.discard(name)

    def list_collections(self, filter: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        entries = [
            {"name": n, "type": "collection", "options": s["options"], "info": {"readOnly": False}}
            for n, s in self.collections.items()
        ]
        entries += [{"name": n, "type": "view", "options": {}, "info": {"readOnly": True}} for n in self.views]
        return [e for e in entries if _matches(e, filter)]

    def list_collection_names(self, filter: dict[str, Any] | None = None) -> list[str]:
        return [e["name"] for e in self.list_collections(filter)]


@pytest.fixture
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def schema(db: FakeDatabase) -> SchemaBuilder:
    return SchemaBuilder(db)


@pytest.fixture
def index_names(db: FakeDatabase):
    def _names(collection: str) -> list[str]:
        return [index["name"] for index in db[collection].list_indexes()]

    return _names
