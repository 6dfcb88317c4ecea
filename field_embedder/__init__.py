"""
Field embedder.

Burns filled-in form fields (signature/initials/image, text/name/hyperlink,
date, checkbox/radio) into PDF pages. Field positions come from the web
editor: pixels at a fixed 612 px page width, origin top-left. Every
operation takes PDF bytes and returns new PDF bytes.
"""
from field_embedder.exceptions.errors import (
    EmbeddingError,
    ImageDecodeError,
    InvalidFieldValueError,
    PageOutOfRangeError,
    PdfDecodeError,
)
from field_embedder.logic.batch_embedder import BatchResult, FieldFailure, FieldSpec, embed_fields
from field_embedder.logic.coordinate_transform import compute_scale, resolve_page_index, to_pdf_rect
from field_embedder.logic.date_formatter import format_long_date
from field_embedder.logic.field_embedder import (
    embed_checkbox,
    embed_date,
    embed_field,
    embed_image,
    embed_signature,
    embed_text,
    get_page_count,
)
from field_embedder.logic.pdf_document import PdfDocumentSession
from field_embedder.models import (
    EmbedConfig,
    FieldPosition,
    FieldType,
    ImageBlob,
    PageGeometry,
    PagePolicy,
    PdfRect,
)

__all__ = [
    "BatchResult",
    "EmbedConfig",
    "EmbeddingError",
    "FieldFailure",
    "FieldPosition",
    "FieldSpec",
    "FieldType",
    "ImageBlob",
    "ImageDecodeError",
    "InvalidFieldValueError",
    "PageGeometry",
    "PageOutOfRangeError",
    "PagePolicy",
    "PdfDecodeError",
    "PdfDocumentSession",
    "PdfRect",
    "compute_scale",
    "embed_checkbox",
    "embed_date",
    "embed_field",
    "embed_fields",
    "embed_image",
    "embed_signature",
    "embed_text",
    "format_long_date",
    "get_page_count",
    "resolve_page_index",
    "to_pdf_rect",
]
