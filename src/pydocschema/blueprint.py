"""Fluent schema-change session for one collection.

A :class:`Blueprint` records index and rename directives in call order
and applies them on :meth:`Blueprint.commit`. Each directive is applied
on its own; when one fails the remaining ones are skipped and nothing
already applied is undone.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

from pydocschema import indexes
from pydocschema._constants import DEFAULT_GEO_KIND
from pydocschema._errors import ERR_MSG_BLUEPRINT_COMMITTED, BlueprintStateError
from pydocschema._store import CollectionHandle
from pydocschema.index_spec import IndexSpec, KeysInput, build_index_spec, geospatial_spec
from pydocschema.rewrite import RewriteReport, rename_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CreateIndex:
    spec: IndexSpec


@dataclass(frozen=True)
class _DropIndex:
    name_or_keys: KeysInput
    if_exists: bool = False


@dataclass(frozen=True)
class _RenameField:
    source: str
    target: str


Directive = Union[_CreateIndex, _DropIndex, _RenameField]


class ColumnDefinition:
    """A declared field whose index modifiers are forwarded to the blueprint.

    Only the index side effects matter to a document store; type and
    other modifiers are recorded but not enforced.
    """

    def __init__(self, blueprint: Blueprint, name: str, type_name: str) -> None:
        self._blueprint = blueprint
        self.name = name
        self.type_name = type_name
        self.attributes: dict[str, Any] = {}

    def index(self, name: str | None = None) -> ColumnDefinition:
        self._blueprint.index(self.name, name=name)
        return self

    def unique(self, name: str | None = None) -> ColumnDefinition:
        self._blueprint.unique(self.name, name=name)
        return self

    def sparse(self, name: str | None = None) -> ColumnDefinition:
        self._blueprint.sparse(self.name, name=name)
        return self

    def primary(self, name: str | None = None) -> ColumnDefinition:
        # No secondary primary keys in a document store; a unique index
        # is the closest equivalent.
        return self.unique(name)

    def nullable(self, value: bool = True) -> ColumnDefinition:
        self.attributes["nullable"] = value
        return self

    def default(self, value: Any) -> ColumnDefinition:
        self.attributes["default"] = value
        return self

    def unsigned(self) -> ColumnDefinition:
        self.attributes["unsigned"] = True
        return self

    def comment(self, text: str) -> ColumnDefinition:
        self.attributes["comment"] = text
        return self


class Blueprint:
    """Accumulates schema directives for one collection until committed."""

    def __init__(self, collection: CollectionHandle) -> None:
        self._collection = collection
        self._pending: list[Directive] = []
        self._committed = False
        self.columns: list[ColumnDefinition] = []
        self.rewrite_reports: list[RewriteReport] = []

    @property
    def collection(self) -> CollectionHandle:
        return self._collection

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def pending(self) -> list[Directive]:
        return list(self._pending)

    # --- Index directives ---

    def index(
        self,
        columns: KeysInput,
        name: str | None = None,
        *,
        unique: bool = False,
        sparse: bool = False,
        ttl_seconds: int | None = None,
    ) -> Blueprint:
        spec = build_index_spec(
            columns, name=name, unique=unique, sparse=sparse, ttl_seconds=ttl_seconds
        )
        return self._record(_CreateIndex(spec))

    def unique(self, columns: KeysInput, name: str | None = None) -> Blueprint:
        return self.index(columns, name, unique=True)

    def sparse(self, columns: KeysInput, name: str | None = None) -> Blueprint:
        return self.index(columns, name, sparse=True)

    def sparse_and_unique(self, columns: KeysInput, name: str | None = None) -> Blueprint:
        return self.index(columns, name, unique=True, sparse=True)

    def expire(self, columns: KeysInput, seconds: int, name: str | None = None) -> Blueprint:
        return self.index(columns, name, ttl_seconds=seconds)

    def geospatial(
        self,
        columns: str | Sequence[str],
        kind: str = DEFAULT_GEO_KIND,
        name: str | None = None,
    ) -> Blueprint:
        return self._record(_CreateIndex(geospatial_spec(columns, kind, name=name)))

    def drop_index(self, index: KeysInput) -> Blueprint:
        return self._record(_DropIndex(index))

    def drop_index_if_exists(self, index: KeysInput) -> Blueprint:
        return self._record(_DropIndex(index, if_exists=True))

    def has_index(self, index: KeysInput) -> bool:
        """Whether the index exists, after applying directives recorded so far."""
        self._ensure_open()
        self._flush()
        return indexes.has_index(self._collection, index)

    # --- Field directives ---

    def rename_column(self, source: str, target: str) -> Blueprint:
        return self._record(_RenameField(source, target))

    def column(self, name: str, type_name: str = "string") -> ColumnDefinition:
        self._ensure_open()
        definition = ColumnDefinition(self, name, type_name)
        self.columns.append(definition)
        return definition

    def string(self, name: str, length: int | None = None) -> ColumnDefinition:
        return self.column(name, "string")

    def text(self, name: str) -> ColumnDefinition:
        return self.column(name, "string")

    def integer(self, name: str) -> ColumnDefinition:
        return self.column(name, "int")

    def float(self, name: str) -> ColumnDefinition:
        return self.column(name, "double")

    def boolean(self, name: str) -> ColumnDefinition:
        return self.column(name, "bool")

    def date(self, name: str) -> ColumnDefinition:
        return self.column(name, "date")

    def timestamp(self, name: str) -> ColumnDefinition:
        return self.column(name, "date")

    def json(self, name: str) -> ColumnDefinition:
        return self.column(name, "object")

    def timestamps(self) -> Blueprint:
        self.timestamp("created_at")
        self.timestamp("updated_at")
        return self

    def soft_deletes(self, name: str = "deleted_at") -> Blueprint:
        self.timestamp(name)
        return self

    # --- Session ---

    def commit(self) -> None:
        """Apply every pending directive in order. Terminal."""
        self._ensure_open()
        try:
            self._flush()
        finally:
            self._committed = True
            self._pending.clear()

    def _record(self, directive: Directive) -> Blueprint:
        self._ensure_open()
        self._pending.append(directive)
        return self

    def _ensure_open(self) -> None:
        if self._committed:
            raise BlueprintStateError(
                ERR_MSG_BLUEPRINT_COMMITTED,
                f"blueprint for {self._collection.name!r} was already committed",
            )

    def _flush(self) -> None:
        while self._pending:
            directive = self._pending.pop(0)
            self._apply(directive)

    def _apply(self, directive: Directive) -> None:
        logger.debug("applying %r to %s", directive, self._collection.name)
        if isinstance(directive, _CreateIndex):
            indexes.create_index(self._collection, directive.spec)
        elif isinstance(directive, _DropIndex):
            if directive.if_exists:
                indexes.drop_index_if_exists(self._collection, directive.name_or_keys)
            else:
                indexes.drop_index(self._collection, directive.name_or_keys)
        elif isinstance(directive, _RenameField):
            self.rewrite_reports.append(
                rename_field(self._collection, directive.source, directive.target)
            )
        else:
            raise TypeError(f"unknown directive {directive!r}")
