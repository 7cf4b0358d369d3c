"""Exception hierarchy for schema and index management."""

from __future__ import annotations

from typing import Any


class SchemaError(Exception):
    """Base exception for schema and index management errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class InvalidSpecError(SchemaError):
    """Raised when an index directive is malformed."""


class IndexNotFoundError(SchemaError):
    """Raised when a strict drop targets an index that does not exist."""


class IndexNameConflictError(SchemaError):
    """Raised when an index name is already used by a different key pattern."""


class BlueprintStateError(SchemaError):
    """Raised when a committed blueprint is used again."""


class DocumentRewriteError(SchemaError):
    """A single document could not be rewritten during a field rename.

    Collected into a :class:`~pydocschema.rewrite.RewriteReport` rather
    than raised, so one bad document never stops the rest.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
        *,
        document_id: Any = None,
    ) -> None:
        super().__init__(user_message, internal_details, wrapped)
        self.document_id = document_id


# Sanitized user-facing error message constants
ERR_MSG_EMPTY_KEYS = "index requires at least one key"
ERR_MSG_INVALID_FIELD = "invalid index field name"
ERR_MSG_INVALID_DIRECTION = "invalid index direction"
ERR_MSG_INVALID_GEO_KIND = "unrecognized geospatial index kind"
ERR_MSG_INVALID_TTL = "invalid index expiry"
ERR_MSG_INDEX_NOT_FOUND = "index not found"
ERR_MSG_INDEX_CONFLICT = "index name already in use with a different key pattern"
ERR_MSG_REWRITE_FAILED = "document rewrite failed"
ERR_MSG_BLUEPRINT_COMMITTED = "blueprint already committed"
