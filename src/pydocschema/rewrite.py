"""Field renames applied by rewriting documents one at a time."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pymongo.errors import PyMongoError

from pydocschema._constants import IDENTITY_FIELD
from pydocschema._errors import ERR_MSG_REWRITE_FAILED, DocumentRewriteError
from pydocschema._store import CollectionHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewriteReport:
    """Outcome of one field rename across a collection."""

    collection: str
    source: str
    target: str
    matched: int = 0
    renamed: int = 0
    failures: tuple[DocumentRewriteError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


def rename_field(collection: CollectionHandle, source: str, target: str) -> RewriteReport:
    """Rename ``source`` to ``target`` on every document that has ``source``.

    Each document is rewritten with its own single-document ``$rename``
    update, so identity and all other fields are preserved and documents
    without ``source`` (null values count as present) are never touched.
    A failing document is recorded in the report and the rest still run;
    there is no collection-wide rollback.

    Raises:
        ValueError: If either name is empty, names the identity field, or
            the two names are equal.
    """
    if not source or not target:
        raise ValueError("field names must be non-empty")
    if IDENTITY_FIELD in (source, target):
        raise ValueError(f"cannot rename the {IDENTITY_FIELD} field")
    if source == target:
        raise ValueError(f"source and target are both {source!r}")

    present = {source: {"$exists": True}}
    matched = 0
    renamed = 0
    failures: list[DocumentRewriteError] = []

    for document in collection.find(present, projection={IDENTITY_FIELD: 1}):
        matched += 1
        document_id = document[IDENTITY_FIELD]
        try:
            result = collection.update_one(
                {IDENTITY_FIELD: document_id, **present},
                {"$rename": {source: target}},
            )
        except PyMongoError as exc:
            error = DocumentRewriteError(
                ERR_MSG_REWRITE_FAILED,
                f"renaming {source!r} to {target!r} on document {document_id!r} "
                f"in {collection.name!r}: {exc}",
                wrapped=exc,
                document_id=document_id,
            )
            logger.warning("%s", error.internal())
            failures.append(error)
            continue
        renamed += result.modified_count

    logger.info(
        "renamed %s to %s on %d of %d documents in %s",
        source, target, renamed, matched, collection.name,
    )
    return RewriteReport(
        collection=collection.name,
        source=source,
        target=target,
        matched=matched,
        renamed=renamed,
        failures=tuple(failures),
    )
