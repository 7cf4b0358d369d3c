"""Column inference for schema-less collections.

Samples documents, classifies each field value into a BSON kind and
merges the kinds seen per field into one :class:`ColumnDescriptor`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pymongo.errors import OperationFailure

from pydocschema._constants import (
    DEFAULT_SAMPLE_SIZE,
    IDENTITY_FIELD,
    IDENTITY_TYPE,
    NAMESPACE_NOT_FOUND,
)
from pydocschema._store import CollectionHandle
from pydocschema._types import ValueKind
from pydocschema.introspect._kinds import value_kind
from pydocschema.schema import ColumnDescriptor

logger = logging.getLogger(__name__)


@dataclass
class _FieldShape:
    """Kinds observed for one field, merged across sampled documents."""

    name: str
    kinds: set[ValueKind] = field(default_factory=set)
    present: int = 0
    nulls: int = 0

    def observe(self, value: Any) -> None:
        kind = value_kind(value)
        if kind is ValueKind.NULL:
            self.nulls += 1
        else:
            self.kinds.add(kind)
            self.present += 1

    def describe(self, sampled: int) -> ColumnDescriptor:
        # Absent from some documents, or null in some.
        nullable = self.present < sampled
        if not self.kinds:
            type_ = ValueKind.NULL.value
            comment = ""
        elif len(self.kinds) == 1:
            type_ = next(iter(self.kinds)).value
            comment = ""
        else:
            type_ = ", ".join(sorted(kind.value for kind in self.kinds))
            comment = f"{self.present} occurrences"
        return ColumnDescriptor(
            name=self.name,
            type=type_,
            type_name=type_,
            nullable=nullable,
            comment=comment,
        )


def _identity_column() -> ColumnDescriptor:
    return ColumnDescriptor(
        name=IDENTITY_FIELD,
        type=IDENTITY_TYPE,
        type_name=IDENTITY_TYPE,
        nullable=False,
        generation={"type": IDENTITY_TYPE, "expression": None},
    )


def _sample(
    collection: CollectionHandle, sample_size: int, random: bool
) -> Iterable[Mapping[str, Any]]:
    try:
        if random:
            return list(collection.aggregate([{"$sample": {"size": sample_size}}]))
        return list(collection.find({}, limit=sample_size))
    except OperationFailure as exc:
        if exc.code == NAMESPACE_NOT_FOUND:
            return []
        raise


def get_columns(
    collection: CollectionHandle,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    *,
    random: bool = False,
) -> list[ColumnDescriptor]:
    """Infer one column per field observed in a sample of ``collection``.

    The identity field comes first, then the other fields in the order
    they were first seen. A field with more than one kind reports the
    sorted kinds joined by ``", "`` and a ``"<n> occurrences"`` comment,
    where ``n`` is the number of sampled documents holding a non-null
    value for it.

    Args:
        collection: The collection to sample.
        sample_size: Maximum number of documents to read.
        random: Sample with ``$sample`` instead of natural order.

    Returns:
        Column descriptors; empty for an empty or missing collection.

    Raises:
        ValueError: If ``sample_size`` is less than 1.
    """
    if sample_size < 1:
        raise ValueError(f"sample_size must be at least 1, got {sample_size}")

    shapes: dict[str, _FieldShape] = {}
    sampled = 0
    for document in _sample(collection, sample_size, random):
        sampled += 1
        for name, value in document.items():
            if name == IDENTITY_FIELD:
                continue
            shape = shapes.get(name)
            if shape is None:
                shape = shapes[name] = _FieldShape(name)
            shape.observe(value)

    if sampled == 0:
        return []

    logger.debug(
        "sampled %d documents from %s, %d fields", sampled, collection.name, len(shapes)
    )
    return [_identity_column(), *(shape.describe(sampled) for shape in shapes.values())]


def has_column(collection: CollectionHandle, name: str) -> bool:
    """Whether any document in ``collection`` has field ``name`` set."""
    return collection.count_documents({name: {"$exists": True}}, limit=1) > 0


def has_columns(collection: CollectionHandle, names: str | Sequence[str]) -> bool:
    """Whether every field in ``names`` is set on at least one document.

    A bare string is one field name.
    """
    if isinstance(names, str):
        names = [names]
    return all(has_column(collection, name) for name in names)
