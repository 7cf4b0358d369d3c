"""Enumerations shared by the introspection and index modules."""

from __future__ import annotations

import enum


class ValueKind(enum.StrEnum):
    """BSON type aliases, as reported by the ``$type`` aggregation operator."""

    DOUBLE = "double"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    BIN_DATA = "binData"
    UNDEFINED = "undefined"
    OBJECT_ID = "objectId"
    BOOL = "bool"
    DATE = "date"
    NULL = "null"
    REGEX = "regex"
    DB_POINTER = "dbPointer"
    JAVASCRIPT = "javascript"
    SYMBOL = "symbol"
    INT = "int"
    TIMESTAMP = "timestamp"
    LONG = "long"
    DECIMAL = "decimal"
    MIN_KEY = "minKey"
    MAX_KEY = "maxKey"


class IndexType(enum.StrEnum):
    """Descriptive index types reported by ``list_indexes``."""

    BTREE = "btree"
    GEO_2D = "2d"
    GEO_2DSPHERE = "2dsphere"
    TEXT = "text"
    HASHED = "hashed"
    TTL = "ttl"
