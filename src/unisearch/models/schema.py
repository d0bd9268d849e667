"""Schema models — Index field definitions shared by all providers."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class FieldType(str, Enum):
    TEXT = "text"
    KEYWORD = "keyword"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    GEO_POINT = "geo_point"


class SchemaField(BaseModel):
    """One field of an index schema."""

    name: str = Field(description="Field name")
    type: FieldType = Field(description="Field type")
    required: bool = Field(default=False, description="Documents must carry this field")
    facet: bool = Field(default=False, description="Field can be faceted")
    sort: bool = Field(default=False, description="Field can be sorted on")
    index: bool = Field(default=True, description="Field is searchable")


class Schema(BaseModel):
    """Field definitions plus an optional primary key."""

    fields: list[SchemaField] = Field(default_factory=list)
    primary_key: str | None = Field(default=None, description="Name of the primary key field")


class SchemaBuilder:
    """Fluent builder for ``Schema`` values.

    The typed helpers pick facet/sort/index flags that suit the field type:
    text is searchable only, keywords, numbers and dates facet and sort,
    booleans facet, and geo points are searchable only.

    Example:
        >>> schema = (
        ...     SchemaBuilder()
        ...     .primary_key("id")
        ...     .text_field("title")
        ...     .keyword_field("category")
        ...     .float_field("price")
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._fields: list[SchemaField] = []
        self._primary_key: str | None = None

    def primary_key(self, key: str) -> SchemaBuilder:
        self._primary_key = key
        return self

    def field(
        self,
        name: str,
        field_type: FieldType,
        required: bool = False,
        facet: bool = False,
        sort: bool = False,
        index: bool = True,
    ) -> SchemaBuilder:
        self._fields.append(
            SchemaField(name=name, type=field_type, required=required, facet=facet, sort=sort, index=index)
        )
        return self

    def text_field(self, name: str) -> SchemaBuilder:
        return self.field(name, FieldType.TEXT)

    def keyword_field(self, name: str) -> SchemaBuilder:
        return self.field(name, FieldType.KEYWORD, facet=True, sort=True)

    def integer_field(self, name: str) -> SchemaBuilder:
        return self.field(name, FieldType.INTEGER, facet=True, sort=True)

    def float_field(self, name: str) -> SchemaBuilder:
        return self.field(name, FieldType.FLOAT, facet=True, sort=True)

    def boolean_field(self, name: str) -> SchemaBuilder:
        return self.field(name, FieldType.BOOLEAN, facet=True)

    def date_field(self, name: str) -> SchemaBuilder:
        return self.field(name, FieldType.DATE, facet=True, sort=True)

    def geo_field(self, name: str) -> SchemaBuilder:
        return self.field(name, FieldType.GEO_POINT)

    def build(self) -> Schema:
        return Schema(fields=list(self._fields), primary_key=self._primary_key)
