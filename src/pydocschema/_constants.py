"""Defaults and store constants for schema management."""

from pymongo import GEO2D, GEOSPHERE

DEFAULT_SAMPLE_SIZE = 1000
"""Maximum number of documents read when inferring columns."""

DEFAULT_GEO_KIND = GEO2D
"""Geospatial index kind used when none is given."""

GEO_KINDS = (GEO2D, GEOSPHERE)
"""Recognized geospatial index kinds."""

IDENTITY_FIELD = "_id"
"""Field MongoDB assigns to every document."""

IDENTITY_INDEX_NAME = "_id_"
"""Name of the implicit index on the identity field."""

IDENTITY_TYPE = "objectId"
"""Type reported for the identity field."""

NAMESPACE_NOT_FOUND = 26
"""Server error code for operations against a missing collection."""

INDEX_NOT_FOUND = 27
"""Server error code for dropping a missing index."""

INDEX_KEY_SPECS_CONFLICT = 86
"""Server error code for an index name reused with different keys."""
