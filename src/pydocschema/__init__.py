"""pydocschema - Schema builder and column introspection for MongoDB collections."""

from __future__ import annotations

try:
    from pydocschema._version import __version__
except ModuleNotFoundError:  # editable install without VCS metadata
    __version__ = "0.0.0.dev0"

from pydocschema._errors import (
    BlueprintStateError,
    DocumentRewriteError,
    IndexNameConflictError,
    IndexNotFoundError,
    InvalidSpecError,
    SchemaError,
)
from pydocschema._types import IndexType, ValueKind
from pydocschema.blueprint import Blueprint, ColumnDefinition
from pydocschema.builder import SchemaBuilder
from pydocschema.index_spec import (
    IndexSpec,
    build_index_spec,
    geospatial_spec,
    index_name,
    resolve_index_name,
)
from pydocschema.indexes import (
    create_index,
    drop_index,
    drop_index_if_exists,
    has_index,
    list_indexes,
)
from pydocschema.introspect import get_columns, get_table_listing, get_tables
from pydocschema.rewrite import RewriteReport, rename_field
from pydocschema.schema import ColumnDescriptor, IndexDescriptor, TableInfo

__all__ = [
    "build_index_spec",
    "create_index",
    "drop_index",
    "drop_index_if_exists",
    "geospatial_spec",
    "get_columns",
    "get_table_listing",
    "get_tables",
    "has_index",
    "index_name",
    "list_indexes",
    "rename_field",
    "resolve_index_name",
    "Blueprint",
    "ColumnDefinition",
    "ColumnDescriptor",
    "IndexDescriptor",
    "IndexSpec",
    "IndexType",
    "RewriteReport",
    "SchemaBuilder",
    "TableInfo",
    "ValueKind",
    "BlueprintStateError",
    "DocumentRewriteError",
    "IndexNameConflictError",
    "IndexNotFoundError",
    "InvalidSpecError",
    "SchemaError",
]
