"""Common query, result, document and schema models."""

from unisearch.models.document import Doc, DocumentBuilder
from unisearch.models.query import HighlightConfig, QueryBuilder, QueryConfig, SearchQuery
from unisearch.models.result import SearchHit, SearchResults
from unisearch.models.schema import FieldType, Schema, SchemaBuilder, SchemaField

__all__ = [
    "Doc",
    "DocumentBuilder",
    "FieldType",
    "HighlightConfig",
    "QueryBuilder",
    "QueryConfig",
    "Schema",
    "SchemaBuilder",
    "SchemaField",
    "SearchHit",
    "SearchQuery",
    "SearchResults",
]
