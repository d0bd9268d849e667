"""Document model — A JSON document addressed by id, plus document helpers."""

from __future__ import annotations

import json
import uuid
from typing import Any

from pydantic import BaseModel, Field

from unisearch.exceptions import InvalidQueryError


class Doc(BaseModel):
    """A document as exchanged with providers."""

    id: str = Field(description="Document identifier")
    content: str = Field(description="JSON-encoded document body")


class DocumentBuilder:
    """Fluent builder for ``Doc`` values.

    A random UUID is assigned when no id is set.
    """

    def __init__(self) -> None:
        self._id: str | None = None
        self._content: dict[str, Any] = {}

    def id(self, doc_id: str) -> DocumentBuilder:
        self._id = doc_id
        return self

    def field(self, key: str, value: Any) -> DocumentBuilder:
        self._content[key] = value
        return self

    def fields(self, values: dict[str, Any]) -> DocumentBuilder:
        self._content.update(values)
        return self

    def build(self) -> Doc:
        return Doc(id=self._id or str(uuid.uuid4()), content=_encode(self._content))


def validate_document(doc: Doc) -> None:
    """Check that ``doc`` has an id and parseable JSON content.

    Raises:
        InvalidQueryError: On a blank id or malformed content.
    """
    if not doc.id.strip():
        raise InvalidQueryError("Document ID cannot be empty")
    try:
        json.loads(doc.content)
    except json.JSONDecodeError as e:
        raise InvalidQueryError(f"Invalid JSON content: {e}") from e


def extract_field(doc: Doc, field: str) -> Any | None:
    """Value of a top-level field, or None when absent."""
    content = _decode(doc.content)
    return content.get(field) if isinstance(content, dict) else None


def set_field(doc: Doc, field: str, value: Any) -> None:
    """Set a top-level field, rewriting ``doc.content`` in place.

    Raises:
        InvalidQueryError: If the content is not a JSON object.
    """
    content = _decode(doc.content)
    if not isinstance(content, dict):
        raise InvalidQueryError("Document content is not a JSON object")
    content[field] = value
    doc.content = _encode(content)


def document_size(doc: Doc) -> int:
    """Payload size of ``doc`` in UTF-8 bytes (id plus content)."""
    return len(doc.id.encode("utf-8")) + len(doc.content.encode("utf-8"))


def batch_documents(docs: list[Doc], max_batch_size: int, max_bytes: int) -> list[list[Doc]]:
    """Split ``docs`` into ordered batches for bulk indexing.

    A batch is closed once it holds ``max_batch_size`` documents, or when the
    next document would push it past ``max_bytes``. A single document larger
    than ``max_bytes`` still gets a batch of its own.

    Raises:
        InvalidQueryError: If ``max_batch_size`` is less than 1.
    """
    if max_batch_size < 1:
        raise InvalidQueryError("max_batch_size must be greater than 0")

    batches: list[list[Doc]] = []
    current: list[Doc] = []
    current_size = 0
    for doc in docs:
        size = document_size(doc)
        if len(current) >= max_batch_size or (current and current_size + size > max_bytes):
            batches.append(current)
            current = []
            current_size = 0
        current.append(doc)
        current_size += size

    if current:
        batches.append(current)
    return batches


def _decode(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidQueryError(f"JSON parsing error: {e}") from e


def _encode(content: dict[str, Any]) -> str:
    try:
        return json.dumps(content, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise InvalidQueryError(f"JSON parsing error: {e}") from e
