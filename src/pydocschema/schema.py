"""Value types returned by schema introspection."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class ColumnDescriptor:
    """Inferred shape of one field across a document sample."""

    name: str
    type: str
    type_name: str
    nullable: bool
    comment: str = ""
    generation: dict[str, Any] | None = None
    default: None = None
    auto_increment: bool = False
    collation: None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class IndexDescriptor:
    """Normalized view of one index on a collection."""

    name: str
    type: str
    columns: tuple[str, ...]
    unique: bool = False
    primary: bool = False

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["columns"] = list(self.columns)
        return d


@dataclass(frozen=True)
class TableInfo:
    """A collection name with its store-reported storage size."""

    name: str
    size_bytes: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
