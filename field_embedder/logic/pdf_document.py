"""
PdfDocumentSession: open a PDF once, draw any number of fields, save once.

Each draw renders its own overlay page and merges it onto the target page
immediately, so the order of draws is the stacking order on the page.
"""
from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Optional, Union

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from ..exceptions.errors import (
    EmbeddingError,
    ImageDecodeError,
    InvalidFieldValueError,
    PdfDecodeError,
)
from ..models.embed_config import EmbedConfig
from ..models.field_enums import FieldType
from ..models.field_position import FieldPosition
from ..models.image_blob import ImageBlob
from ..models.pdf_rect import PageGeometry, PdfRect
from .coordinate_transform import resolve_page_index, to_pdf_rect
from .date_formatter import DateValue, format_long_date
from .overlay_painter import (
    OverlayPainter,
    load_image_reader,
    text_anchor,
    toggle_box,
    unsupported_glyphs,
)

logger = logging.getLogger(__name__)

_PDF_ERRORS = (PyPdfError, ValueError, KeyError, TypeError, OSError)


def load_reader(pdf_bytes: bytes) -> PdfReader:
    """Parse *pdf_bytes* and its page tree; raise PdfDecodeError if unreadable."""
    if not pdf_bytes:
        raise PdfDecodeError("Empty PDF input")
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        if reader.is_encrypted:
            raise PdfDecodeError("Encrypted PDF documents are not supported")
        len(reader.pages)
    except _PDF_ERRORS as exc:
        raise PdfDecodeError(f"Cannot read PDF document: {exc}") from exc
    return reader


def page_count(pdf_bytes: bytes) -> int:
    return len(load_reader(pdf_bytes).pages)


def _geometry_of(page: Any) -> PageGeometry:
    box = page.mediabox
    return PageGeometry(
        width=float(box.width),
        height=float(box.height),
        left=float(box.left),
        bottom=float(box.bottom),
    )


class PdfDocumentSession:
    """In-memory document that fields are drawn onto."""

    def __init__(self, pdf_bytes: bytes, config: Optional[EmbedConfig] = None) -> None:
        self.config = config or EmbedConfig.from_settings()
        reader = load_reader(pdf_bytes)
        # full clone keeps outline, page labels, AcroForm and named destinations
        try:
            self._writer = PdfWriter(clone_from=reader)
        except _PDF_ERRORS as exc:
            raise PdfDecodeError(f"Cannot read PDF document: {exc}") from exc
        if reader.metadata:
            self._writer.add_metadata(dict(reader.metadata))
        self.draw_count = 0

    # ------------------------------------------------------------------ #
    #  Pages                                                             #
    # ------------------------------------------------------------------ #
    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    def resolve_page(self, page: int) -> int:
        """0-based index of the page a field lands on (page policy applied)."""
        if self.page_count == 0:
            raise PdfDecodeError("PDF document has no pages", page=page)
        return resolve_page_index(page, self.page_count, self.config.page_policy)

    def page_geometry(self, page: int) -> PageGeometry:
        return _geometry_of(self._writer.pages[self.resolve_page(page)])

    def _target(self, position: FieldPosition):
        index = self.resolve_page(position.page)
        page = self._writer.pages[index]
        geometry = _geometry_of(page)
        rect = to_pdf_rect(position, geometry, self.config.reference_width)
        logger.debug(
            "Field on page %d -> index %d: scale=%.4f rect=(%.2f, %.2f, %.2f x %.2f)",
            position.page, index, rect.scale, rect.x, rect.y, rect.width, rect.height,
        )
        return page, geometry, rect

    def _merge(self, page: Any, overlay_pdf: bytes) -> None:
        overlay = PdfReader(BytesIO(overlay_pdf)).pages[0]
        page.merge_page(overlay)
        self.draw_count += 1

    # ------------------------------------------------------------------ #
    #  Drawing                                                           #
    # ------------------------------------------------------------------ #
    def draw_image(self, image: Union[ImageBlob, bytes, str], position: FieldPosition) -> PdfRect:
        try:
            blob = ImageBlob.coerce(image)
        except (TypeError, ValueError) as exc:
            raise ImageDecodeError(f"Invalid image value: {exc}", page=position.page) from exc
        reader = load_image_reader(blob)
        page, geometry, rect = self._target(position)
        self._merge(page, OverlayPainter.image(geometry, rect, reader))
        return rect

    def draw_text(self, text: str, position: FieldPosition) -> PdfRect:
        text = "" if text is None else str(text)
        missing = unsupported_glyphs(text)
        if missing:
            logger.warning(
                "Text on page %d contains characters outside %s: %s (rendered as fallback glyphs)",
                position.page, self.config.font_name, "".join(missing),
            )
        page, geometry, rect = self._target(position)
        x, baseline, font_size = text_anchor(rect, position.has_height, self.config)
        self._merge(page, OverlayPainter.text(geometry, text, x, baseline, font_size, self.config))
        return rect

    def draw_date(self, value: DateValue, position: FieldPosition) -> PdfRect:
        text = format_long_date(value, self.config.date_language, self.config.date_pattern)
        return self.draw_text(text, position)

    def draw_toggle(self, checked: bool, position: FieldPosition,
                    shape: FieldType = FieldType.CHECKBOX) -> PdfRect:
        checked = coerce_checked(checked)
        page, geometry, rect = self._target(position)
        box = toggle_box(rect, self.config)
        self._merge(page, OverlayPainter.toggle(geometry, box, checked, shape, self.config))
        return box

    def draw(self, field_type: Union[FieldType, str], value: Any, position: FieldPosition) -> PdfRect:
        """Route *value* to the renderer for *field_type*."""
        try:
            ftype = FieldType(getattr(field_type, "value", field_type))
        except ValueError as exc:
            raise InvalidFieldValueError(f"Unknown field type: {field_type!r}",
                                         page=position.page) from exc
        if ftype.is_image:
            return self.draw_image(value, position)
        if ftype.is_text:
            return self.draw_text(value, position)
        if ftype == FieldType.DATE:
            return self.draw_date(value, position)
        return self.draw_toggle(value, position, shape=ftype)

    # ------------------------------------------------------------------ #
    #  Output                                                            #
    # ------------------------------------------------------------------ #
    def to_bytes(self) -> bytes:
        out = BytesIO()
        try:
            self._writer.write(out)
        except _PDF_ERRORS as exc:
            raise EmbeddingError(f"Cannot serialize PDF document: {exc}") from exc
        return out.getvalue()


def coerce_checked(value: Any) -> bool:
    """Booleans, 0/1 and the strings true/false/yes/no/on/off/checked."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in {"true", "1", "yes", "on", "checked"}:
            return True
        if s in {"false", "0", "no", "off", "", "unchecked"}:
            return False
    raise InvalidFieldValueError(f"Not a checkbox value: {value!r}")
