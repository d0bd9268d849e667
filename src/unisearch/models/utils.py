"""Query, index and schema helpers shared by provider adapters."""

from __future__ import annotations

from unisearch.exceptions import InvalidQueryError
from unisearch.models.query import HighlightConfig, SearchQuery
from unisearch.models.schema import FieldType, Schema, SchemaField

MAX_QUERY_CHARS = 10_000
MAX_PER_PAGE = 1_000
MAX_PAGE = 10_000
MAX_OFFSET = 100_000
MAX_NAME_BYTES = 255


def validate_query(query: SearchQuery) -> None:
    """Check that a query is well-formed before it is sent anywhere.

    Raises:
        InvalidQueryError: On a blank or oversized query string, out-of-range
            pagination, or blank filter/sort expressions.
    """
    if query.q is not None:
        if not query.q.strip():
            raise InvalidQueryError("Query string cannot be empty")
        if len(query.q) > MAX_QUERY_CHARS:
            raise InvalidQueryError("Query string too long")

    if query.page is not None and query.per_page is not None:
        if query.per_page == 0:
            raise InvalidQueryError("per_page must be greater than 0")
        if query.per_page > MAX_PER_PAGE:
            raise InvalidQueryError(f"per_page cannot exceed {MAX_PER_PAGE}")
        if query.page > MAX_PAGE:
            raise InvalidQueryError(f"page cannot exceed {MAX_PAGE}")

    if query.offset is not None and query.offset > MAX_OFFSET:
        raise InvalidQueryError(f"offset cannot exceed {MAX_OFFSET}")

    if any(not f.strip() for f in query.filters):
        raise InvalidQueryError("Filter cannot be empty")
    if any(not s.strip() for s in query.sort):
        raise InvalidQueryError("Sort field cannot be empty")


def extract_highlight_fields(query: SearchQuery) -> list[str]:
    return list(query.highlight.fields) if query.highlight else []


def create_basic_highlight(fields: list[str]) -> HighlightConfig:
    """Highlight config with ``<mark>`` tags and 200-character snippets."""
    return HighlightConfig(fields=fields, pre_tag="<mark>", post_tag="</mark>", max_length=200)


def normalize_query_string(query: str) -> str:
    """Collapse every whitespace run (newlines, tabs included) to one space."""
    return " ".join(query.split())


def validate_index_name(name: str) -> None:
    """Check an index name against the rules every provider accepts.

    Names are non-blank, at most 255 UTF-8 bytes, made of alphanumerics,
    hyphens and underscores, and do not start with a hyphen or underscore.

    Raises:
        InvalidQueryError: If the name breaks any of those rules.
    """
    if not name.strip():
        raise InvalidQueryError("Index name cannot be empty")
    if len(name.encode("utf-8")) > MAX_NAME_BYTES:
        raise InvalidQueryError("Index name too long")
    if not all(ch.isalnum() or ch in "-_" for ch in name):
        raise InvalidQueryError(
            "Index name can only contain alphanumeric characters, hyphens, and underscores"
        )
    if name.startswith(("-", "_")):
        raise InvalidQueryError("Index name cannot start with hyphen or underscore")


def validate_schema(schema: Schema) -> None:
    """Check field names, per-type flag combinations and the primary key.

    Raises:
        InvalidQueryError: On an empty schema, duplicate or invalid fields,
            or a primary key that names no field.
    """
    if not schema.fields:
        raise InvalidQueryError("Schema must have at least one field")

    names: set[str] = set()
    for field in schema.fields:
        if field.name in names:
            raise InvalidQueryError(f"Duplicate field name: {field.name}")
        names.add(field.name)
        _validate_field(field)

    if schema.primary_key is not None and schema.primary_key not in names:
        raise InvalidQueryError("Primary key field must be defined in schema")


def _validate_field(field: SchemaField) -> None:
    if not field.name.strip():
        raise InvalidQueryError("Field name cannot be empty")
    if len(field.name.encode("utf-8")) > MAX_NAME_BYTES:
        raise InvalidQueryError("Field name too long")

    if field.type is FieldType.GEO_POINT:
        if field.facet:
            raise InvalidQueryError("Geo-point fields cannot be faceted")
        if field.sort:
            raise InvalidQueryError("Geo-point fields cannot be sorted")
    elif field.type is FieldType.TEXT and field.sort:
        raise InvalidQueryError(
            "Text fields are typically not suitable for sorting. Consider using keyword type."
        )
