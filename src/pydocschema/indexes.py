"""Apply, drop and query index specs on a collection."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pymongo.errors import OperationFailure

from pydocschema._constants import (
    IDENTITY_INDEX_NAME,
    INDEX_KEY_SPECS_CONFLICT,
    INDEX_NOT_FOUND,
    NAMESPACE_NOT_FOUND,
)
from pydocschema._errors import (
    ERR_MSG_INDEX_CONFLICT,
    ERR_MSG_INDEX_NOT_FOUND,
    IndexNameConflictError,
    IndexNotFoundError,
)
from pydocschema._store import CollectionHandle
from pydocschema._types import IndexType
from pydocschema.index_spec import IndexSpec, KeysInput, resolve_index_name
from pydocschema.schema import IndexDescriptor

logger = logging.getLogger(__name__)


def _index_documents(collection: CollectionHandle) -> list[Mapping[str, Any]]:
    try:
        return list(collection.list_indexes())
    except OperationFailure as exc:
        if exc.code == NAMESPACE_NOT_FOUND:
            return []
        raise


def get_index(collection: CollectionHandle, name: str) -> Mapping[str, Any] | None:
    """Return the raw index document named ``name``, or None."""
    for index in _index_documents(collection):
        if index["name"] == name:
            return index
    return None


def create_index(collection: CollectionHandle, spec: IndexSpec) -> str:
    """Create ``spec`` on ``collection`` unless an identical index exists.

    Returns:
        The index name.

    Raises:
        IndexNameConflictError: If an index with the same name but a
            different key pattern already exists.
    """
    existing = get_index(collection, spec.name)
    if existing is not None:
        if spec.matches_key_pattern(existing["key"]):
            logger.debug("index %s already exists on %s", spec.name, collection.name)
            return spec.name
        raise IndexNameConflictError(
            ERR_MSG_INDEX_CONFLICT,
            f"index {spec.name!r} on {collection.name!r} has keys "
            f"{dict(existing['key'])!r}, requested {dict(spec.keys)!r}",
        )

    try:
        (name,) = collection.create_indexes([spec.model()])
    except OperationFailure as exc:
        # Another writer created the name between our check and the create.
        if exc.code == INDEX_KEY_SPECS_CONFLICT:
            raise IndexNameConflictError(
                ERR_MSG_INDEX_CONFLICT,
                f"index {spec.name!r} on {collection.name!r}: {exc}",
                wrapped=exc,
            ) from exc
        raise
    logger.info("created index %s on %s", name, collection.name)
    return name


def drop_index(collection: CollectionHandle, name_or_keys: KeysInput) -> str:
    """Drop an index by explicit name or by the name derived from its keys.

    Returns:
        The resolved index name.

    Raises:
        IndexNotFoundError: If no index with the resolved name exists.
    """
    name = resolve_index_name(name_or_keys)
    try:
        collection.drop_index(name)
    except OperationFailure as exc:
        if exc.code in (INDEX_NOT_FOUND, NAMESPACE_NOT_FOUND):
            raise IndexNotFoundError(
                ERR_MSG_INDEX_NOT_FOUND,
                f"index {name!r} not found on {collection.name!r}",
                wrapped=exc,
            ) from exc
        raise
    logger.info("dropped index %s on %s", name, collection.name)
    return name


def drop_index_if_exists(collection: CollectionHandle, name_or_keys: KeysInput) -> bool:
    """Like :func:`drop_index`, but absent indexes are a no-op.

    Returns:
        True if an index was dropped.
    """
    try:
        drop_index(collection, name_or_keys)
    except IndexNotFoundError as exc:
        logger.debug("skipping drop: %s", exc.internal())
        return False
    return True


def has_index(collection: CollectionHandle, name_or_keys: KeysInput) -> bool:
    """Whether an index with exactly the resolved name exists.

    Key specifications are only used to compute a name; an index with
    equivalent keys under another name does not count.
    """
    return get_index(collection, resolve_index_name(name_or_keys)) is not None


def list_indexes(collection: CollectionHandle) -> list[IndexDescriptor]:
    """Describe every index on ``collection``, the identity index included.

    A missing collection has no indexes.
    """
    return [_describe(index) for index in _index_documents(collection)]


def _describe(index: Mapping[str, Any]) -> IndexDescriptor:
    key = index["key"]
    primary = index["name"] == IDENTITY_INDEX_NAME
    return IndexDescriptor(
        name=index["name"],
        type=_index_type(index),
        columns=tuple(key),
        unique=primary or bool(index.get("unique", False)),
        primary=primary,
    )


def _index_type(index: Mapping[str, Any]) -> str:
    directions = set(index["key"].values())
    if "2dsphere" in directions:
        return IndexType.GEO_2DSPHERE
    if "2d" in directions:
        return IndexType.GEO_2D
    if "text" in directions:
        return IndexType.TEXT
    if "hashed" in directions:
        return IndexType.HASHED
    if "expireAfterSeconds" in index:
        return IndexType.TTL
    return IndexType.BTREE
