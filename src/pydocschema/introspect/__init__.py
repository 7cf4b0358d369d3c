"""Read-only introspection of collections and their inferred columns.

A missing collection is never an error here: every function returns an
empty result for it.
"""

from __future__ import annotations

from pydocschema.introspect.catalog import get_collection_info, get_table_listing, get_tables
from pydocschema.introspect.columns import get_columns, has_column, has_columns

__all__ = [
    "get_collection_info",
    "get_columns",
    "get_table_listing",
    "get_tables",
    "has_column",
    "has_columns",
]
