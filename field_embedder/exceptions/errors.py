"""Field embedder exceptions."""
from __future__ import annotations

from typing import Any, Optional


class EmbeddingError(Exception):
    """
    Base exception for embedding failures.

    ``operation``, ``field_type`` and ``page`` identify the field that
    failed; the public operations fill them in when they are unset.
    """

    def __init__(self, message: str, *, operation: Optional[str] = None,
                 field_type: Optional[str] = None, page: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.field_type = field_type
        self.page = page

    def with_context(self, *, operation: Optional[str] = None,
                     field_type: Any = None, page: Optional[int] = None) -> "EmbeddingError":
        """Fill in missing context attributes and return self."""
        if self.operation is None:
            self.operation = operation
        if self.field_type is None and field_type is not None:
            self.field_type = getattr(field_type, "value", field_type)
        if self.page is None:
            self.page = page
        return self

    def __str__(self) -> str:
        ctx = []
        if self.operation:
            ctx.append(f"operation={self.operation}")
        if self.field_type:
            ctx.append(f"field_type={self.field_type}")
        if self.page is not None:
            ctx.append(f"page={self.page}")
        if not ctx:
            return self.message
        return f"{self.message} [{', '.join(ctx)}]"


class PdfDecodeError(EmbeddingError):
    """Raised when the input bytes are not a readable PDF document."""


class ImageDecodeError(EmbeddingError):
    """Raised when an image blob is not a valid PNG or JPEG."""


class PageOutOfRangeError(EmbeddingError):
    """Raised under the strict page policy for a page the document lacks."""

    def __init__(self, message: str, *, page_count: int, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.page_count = page_count


class InvalidFieldValueError(EmbeddingError, ValueError):
    """Raised when a value does not fit the field type."""
