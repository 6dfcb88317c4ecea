from field_embedder.exceptions.errors import (
    EmbeddingError,
    ImageDecodeError,
    InvalidFieldValueError,
    PageOutOfRangeError,
    PdfDecodeError,
)

__all__ = [
    "EmbeddingError",
    "ImageDecodeError",
    "InvalidFieldValueError",
    "PageOutOfRangeError",
    "PdfDecodeError",
]
