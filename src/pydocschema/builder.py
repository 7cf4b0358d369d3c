"""Schema entry points bound to one database."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydocschema import indexes, introspect
from pydocschema._constants import DEFAULT_SAMPLE_SIZE
from pydocschema._store import CollectionHandle, DatabaseHandle
from pydocschema.blueprint import Blueprint
from pydocschema.schema import ColumnDescriptor, IndexDescriptor, TableInfo

logger = logging.getLogger(__name__)

Configurator = Callable[[Blueprint], Any]


class SchemaBuilder:
    """Create, alter and inspect the collections of a database.

    Args:
        database: A ``pymongo.database.Database``.
        sample_size: Documents sampled by :meth:`get_columns`.
    """

    def __init__(self, database: DatabaseHandle, *, sample_size: int = DEFAULT_SAMPLE_SIZE) -> None:
        if sample_size < 1:
            raise ValueError(f"sample_size must be at least 1, got {sample_size}")
        self._database = database
        self._sample_size = sample_size

    @property
    def database(self) -> DatabaseHandle:
        return self._database

    def collection(self, name: str) -> CollectionHandle:
        return self._database.get_collection(name)

    # --- Schema sessions ---

    def create(
        self,
        name: str,
        configurator: Configurator | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Blueprint:
        """Create collection ``name``, then run ``configurator`` on a blueprint.

        Args:
            name: Collection name.
            configurator: Called with the :class:`Blueprint` before commit.
            options: Passed to ``create_collection`` unchanged, e.g. ``capped``,
                ``size``, ``max``, ``validator``, ``collation`` or ``timeseries``.

        Returns:
            The committed blueprint.
        """
        self._database.create_collection(name, **dict(options or {}))
        logger.info("created collection %s", name)
        return self._run(self.collection(name), configurator)

    def table(self, name: str, configurator: Configurator) -> Blueprint:
        """Run ``configurator`` on a blueprint for an existing (or implicit) collection."""
        return self._run(self.collection(name), configurator)

    def drop(self, name: str) -> None:
        self._database.drop_collection(name)
        logger.info("dropped collection %s", name)

    def drop_if_exists(self, name: str) -> None:
        if self.has_collection(name):
            self.drop(name)

    def rename(self, source: str, target: str) -> None:
        self.collection(source).rename(target)
        logger.info("renamed collection %s to %s", source, target)

    def has_collection(self, name: str) -> bool:
        return bool(self._database.list_collection_names(filter={"name": name}))

    create_collection = create
    configure_collection = table
    drop_collection = drop
    has_table = has_collection

    def _run(self, collection: CollectionHandle, configurator: Configurator | None) -> Blueprint:
        blueprint = Blueprint(collection)
        if configurator is not None:
            configurator(blueprint)
        blueprint.commit()
        return blueprint

    # --- Introspection ---

    def get_collection(self, name: str) -> Mapping[str, Any] | None:
        return introspect.get_collection_info(self._database, name)

    def get_columns(self, name: str) -> list[ColumnDescriptor]:
        return introspect.get_columns(self.collection(name), self._sample_size)

    def has_column(self, name: str, column: str) -> bool:
        return introspect.has_column(self.collection(name), column)

    def has_columns(self, name: str, columns: str | Sequence[str]) -> bool:
        return introspect.has_columns(self.collection(name), columns)

    def get_indexes(self, name: str) -> list[IndexDescriptor]:
        return indexes.list_indexes(self.collection(name))

    def get_tables(self) -> list[TableInfo]:
        return introspect.get_tables(self._database)

    def get_table_listing(self) -> list[str]:
        return introspect.get_table_listing(self._database)
