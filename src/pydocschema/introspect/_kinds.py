"""Classification of decoded document values into BSON value kinds."""

from __future__ import annotations

import datetime
import re
import uuid
from collections.abc import Mapping
from typing import Any

from bson.binary import Binary
from bson.code import Code
from bson.datetime_ms import DatetimeMS
from bson.dbref import DBRef
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp

from pydocschema._types import ValueKind

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

# Checked in order: subclasses before their bases (Int64 and bool are ints,
# Code is a str, Binary is bytes).
_KIND_BY_TYPE: tuple[tuple[type | tuple[type, ...], ValueKind], ...] = (
    (bool, ValueKind.BOOL),
    (Int64, ValueKind.LONG),
    (Code, ValueKind.JAVASCRIPT),
    (str, ValueKind.STRING),
    (float, ValueKind.DOUBLE),
    (ObjectId, ValueKind.OBJECT_ID),
    ((datetime.datetime, DatetimeMS), ValueKind.DATE),
    (Timestamp, ValueKind.TIMESTAMP),
    ((Binary, bytes, uuid.UUID), ValueKind.BIN_DATA),
    ((Regex, re.Pattern), ValueKind.REGEX),
    (Decimal128, ValueKind.DECIMAL),
    (MinKey, ValueKind.MIN_KEY),
    (MaxKey, ValueKind.MAX_KEY),
    ((DBRef, Mapping), ValueKind.OBJECT),
    ((list, tuple), ValueKind.ARRAY),
)


def value_kind(value: Any) -> ValueKind:
    """Return the BSON kind the server would report for ``value``."""
    if value is None:
        return ValueKind.NULL
    for types, kind in _KIND_BY_TYPE:
        if isinstance(value, types):
            return kind
    if isinstance(value, int):
        return ValueKind.INT if _INT32_MIN <= value <= _INT32_MAX else ValueKind.LONG
    return ValueKind.OBJECT
