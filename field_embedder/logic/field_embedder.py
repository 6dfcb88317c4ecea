"""
Single-field operations: PDF bytes in, new PDF bytes out.

Each call parses the whole document, draws one field and serializes a new
byte string. To fill several fields, feed the output of one call into the
next (or use PdfDocumentSession / embed_fields to parse only once).
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Union

from ..exceptions.errors import EmbeddingError, InvalidFieldValueError
from ..models.embed_config import EmbedConfig
from ..models.field_enums import FieldType
from ..models.field_position import FieldPosition
from ..models.image_blob import ImageBlob
from .date_formatter import DateValue
from .pdf_document import PdfDocumentSession, page_count

ImageValue = Union[ImageBlob, bytes, str]


@contextmanager
def field_context(operation: str, field_type: Any, page: Optional[int]) -> Iterator[None]:
    """
    Attach operation/field/page context to any failure inside the block;
    library exceptions are wrapped into EmbeddingError.
    """
    try:
        yield
    except EmbeddingError as exc:
        raise exc.with_context(operation=operation, field_type=field_type, page=page)
    except Exception as exc:
        raise EmbeddingError(
            f"{operation} failed: {exc}",
            operation=operation,
            field_type=getattr(field_type, "value", field_type),
            page=page,
        ) from exc


def _position(position: Union[FieldPosition, dict]) -> FieldPosition:
    if isinstance(position, FieldPosition):
        return position
    try:
        return FieldPosition.from_dict(position)
    except (AttributeError, TypeError, ValueError) as exc:
        raise InvalidFieldValueError(f"Invalid field position: {exc}") from exc


def _page_hint(position: Any) -> Optional[int]:
    """Page of a not yet validated position, for error context only."""
    page = getattr(position, "page", None)
    if page is None and isinstance(position, Mapping):
        page = position.get("page", 1)
    try:
        return int(page) if page is not None else None
    except (TypeError, ValueError):
        return None


def embed_signature(pdf_bytes: bytes, image: ImageValue,
                    position: Union[FieldPosition, dict], *,
                    field_type: FieldType = FieldType.SIGNATURE,
                    config: Optional[EmbedConfig] = None) -> bytes:
    """Draw a PNG/JPEG signature, initials or image stretched over the field box."""
    with field_context("embed_signature", field_type, _page_hint(position)):
        pos = _position(position)
        session = PdfDocumentSession(pdf_bytes, config)
        session.draw_image(image, pos)
        return session.to_bytes()


def embed_image(pdf_bytes: bytes, image: ImageValue,
                position: Union[FieldPosition, dict], *,
                config: Optional[EmbedConfig] = None) -> bytes:
    return embed_signature(pdf_bytes, image, position, field_type=FieldType.IMAGE, config=config)


def embed_text(pdf_bytes: bytes, text: str,
               position: Union[FieldPosition, dict], *,
               field_type: FieldType = FieldType.TEXT,
               config: Optional[EmbedConfig] = None) -> bytes:
    """Draw one line of text (text, name or hyperlink as plain text)."""
    with field_context("embed_text", field_type, _page_hint(position)):
        pos = _position(position)
        session = PdfDocumentSession(pdf_bytes, config)
        session.draw_text(text, pos)
        return session.to_bytes()


def embed_date(pdf_bytes: bytes, value: DateValue,
               position: Union[FieldPosition, dict], *,
               config: Optional[EmbedConfig] = None) -> bytes:
    """Draw a date as day, full month name and year."""
    with field_context("embed_date", FieldType.DATE, _page_hint(position)):
        pos = _position(position)
        session = PdfDocumentSession(pdf_bytes, config)
        session.draw_date(value, pos)
        return session.to_bytes()


def embed_checkbox(pdf_bytes: bytes, checked: bool,
                   position: Union[FieldPosition, dict], *,
                   field_type: FieldType = FieldType.CHECKBOX,
                   config: Optional[EmbedConfig] = None) -> bytes:
    """Draw a checkbox (or radio mark) centred in the field box."""
    with field_context("embed_checkbox", field_type, _page_hint(position)):
        pos = _position(position)
        session = PdfDocumentSession(pdf_bytes, config)
        session.draw_toggle(checked, pos, shape=FieldType(field_type))
        return session.to_bytes()


def embed_field(pdf_bytes: bytes, field_type: Union[FieldType, str], value: Any,
                position: Union[FieldPosition, dict], *,
                config: Optional[EmbedConfig] = None) -> bytes:
    """Dispatch on *field_type*."""
    with field_context("embed_field", field_type, _page_hint(position)):
        pos = _position(position)
        session = PdfDocumentSession(pdf_bytes, config)
        session.draw(field_type, value, pos)
        return session.to_bytes()


def get_page_count(pdf_bytes: bytes) -> int:
    with field_context("get_page_count", None, None):
        return page_count(pdf_bytes)
