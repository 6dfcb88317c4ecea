"""
Batch application of filled-in fields with per-field fault isolation.

Fields are drawn one after another, in the order given, onto a single
document session. A field without a value is skipped; a field that fails
is recorded and the remaining fields are still applied.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..exceptions.errors import EmbeddingError, InvalidFieldValueError
from ..models.embed_config import EmbedConfig
from ..models.field_enums import FieldType
from ..models.field_position import FieldPosition
from .field_embedder import field_context
from .pdf_document import PdfDocumentSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    field_id: str
    field_type: Union[FieldType, str]
    position: FieldPosition
    value: Any = None

    @property
    def has_value(self) -> bool:
        if self.value is None:
            return False
        if isinstance(self.value, (str, bytes, bytearray)):
            return len(self.value) > 0
        return True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldSpec":
        """``{"id", "type", "value", "x", "y", "width", "height", "page"}``"""
        position = data.get("position")
        return cls(
            field_id=str(data.get("id", "")),
            field_type=str(data.get("type", "")),
            position=FieldPosition.from_dict(position if isinstance(position, Mapping) else data),
            value=data.get("value"),
        )


@dataclass(frozen=True)
class FieldFailure:
    field_id: str
    error: EmbeddingError


@dataclass
class BatchResult:
    pdf_bytes: bytes
    embedded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failures: List[FieldFailure] = field(default_factory=list)

    @property
    def embedded_count(self) -> int:
        return len(self.embedded)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures


def embed_fields(pdf_bytes: bytes, fields: Iterable[Union[FieldSpec, Mapping[str, Any]]],
                 config: Optional[EmbedConfig] = None) -> BatchResult:
    """
    Apply *fields* sequentially. Raises PdfDecodeError only if the document
    itself cannot be read.
    """
    session = PdfDocumentSession(pdf_bytes, config)
    result = BatchResult(pdf_bytes=pdf_bytes)

    for index, item in enumerate(fields):
        try:
            spec = item if isinstance(item, FieldSpec) else FieldSpec.from_dict(item)
        except (TypeError, ValueError) as exc:
            field_id = str(item.get("id", index)) if isinstance(item, Mapping) else str(index)
            logger.error("Field %s has a malformed specification: %s", field_id, exc)
            result.failures.append(FieldFailure(
                field_id,
                InvalidFieldValueError(f"Malformed field specification: {exc}", operation="embed_fields"),
            ))
            continue
        if not spec.has_value:
            logger.debug("Field %s has no value; skipped", spec.field_id)
            result.skipped.append(spec.field_id)
            continue
        try:
            with field_context("embed_fields", spec.field_type, spec.position.page):
                session.draw(spec.field_type, spec.value, spec.position)
        except EmbeddingError as exc:
            logger.error("Field %s could not be embedded: %s", spec.field_id, exc, exc_info=True)
            result.failures.append(FieldFailure(spec.field_id, exc))
            continue
        result.embedded.append(spec.field_id)

    if result.embedded:
        result.pdf_bytes = session.to_bytes()

    logger.info(
        "Embedded %d field(s), skipped %d, failed %d",
        result.embedded_count, len(result.skipped), result.failed_count,
    )
    return result
