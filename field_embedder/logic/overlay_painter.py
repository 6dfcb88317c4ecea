"""
Overlay rendering with reportlab.

Every draw produces a one-page PDF the size of the target page; the
document session merges it on top of the page content.
"""
from __future__ import annotations

import logging
from io import BytesIO
from typing import List, Tuple

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..exceptions.errors import ImageDecodeError
from ..models.embed_config import EmbedConfig, hex_to_rgb
from ..models.field_enums import FieldType, ImageFormat
from ..models.image_blob import ImageBlob
from ..models.pdf_rect import PageGeometry, PdfRect

logger = logging.getLogger(__name__)

SYMBOL_FONT = "ZapfDingbats"
CHECK_GLYPH = "4"   # ✔ in ZapfDingbats
RADIO_GLYPH = "l"   # ● in ZapfDingbats

_IMAGE_ERRORS = (UnidentifiedImageError, OSError, SyntaxError, ValueError)


# --------------------------------------------------------------------------- #
#  Image decoding                                                             #
# --------------------------------------------------------------------------- #
def _png_reader(data: bytes) -> ImageReader:
    try:
        img = Image.open(BytesIO(data))
        if img.format != "PNG":
            raise ImageDecodeError(f"Expected PNG data, Pillow read {img.format}")
        img.load()
    except _IMAGE_ERRORS as exc:
        raise ImageDecodeError(f"Cannot decode PNG image: {exc}") from exc
    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA")
    return ImageReader(img)


def _jpeg_reader(data: bytes) -> ImageReader:
    # Pillow validates the full stream; reportlab embeds the original DCT bytes.
    try:
        with Image.open(BytesIO(data)) as img:
            if img.format != "JPEG":
                raise ImageDecodeError(f"Expected JPEG data, Pillow read {img.format}")
            img.load()
    except _IMAGE_ERRORS as exc:
        raise ImageDecodeError(f"Cannot decode JPEG image: {exc}") from exc
    return ImageReader(BytesIO(data))


def load_image_reader(blob: ImageBlob) -> ImageReader:
    """Dispatch PNG/JPEG decoding on the magic header of *blob*."""
    fmt = blob.format
    if fmt is None:
        raise ImageDecodeError("Image data is neither PNG nor JPEG")
    declared = blob.declared_format
    if declared is not None and declared != fmt:
        logger.warning(
            "Image declared as %s but data is %s; decoding as %s",
            blob.declared_type, fmt.value, fmt.value,
        )
    if fmt == ImageFormat.PNG:
        return _png_reader(blob.data)
    return _jpeg_reader(blob.data)


# --------------------------------------------------------------------------- #
#  Placement helpers (pure)                                                   #
# --------------------------------------------------------------------------- #
def text_anchor(rect: PdfRect, has_height: bool, config: EmbedConfig) -> Tuple[float, float, float]:
    """
    Return ``(x, baseline_y, font_size)`` for a single line of text in *rect*.

    With a known box height the baseline sits ``baseline_ratio`` of the box
    height below its top edge; otherwise a fixed offset is used.
    """
    scale = rect.scale
    font_size = config.font_size * scale
    x = rect.x + config.text_padding * scale
    if has_height:
        baseline = rect.top - rect.height * config.baseline_ratio
    else:
        baseline = rect.top - config.default_text_offset * scale
    return x, baseline, font_size


def toggle_box(rect: PdfRect, config: EmbedConfig) -> PdfRect:
    """Fixed-size (scaled) box centred on the field rectangle."""
    size = config.checkbox_size * rect.scale
    return PdfRect(
        x=rect.center_x - size / 2.0,
        y=rect.center_y - size / 2.0,
        width=size,
        height=size,
        scale=rect.scale,
    )


def unsupported_glyphs(text: str) -> List[str]:
    """Characters the built-in fonts (WinAnsi encoding) cannot show."""
    missing: List[str] = []
    for ch in text:
        try:
            ch.encode("cp1252")
        except UnicodeEncodeError:
            if ch not in missing:
                missing.append(ch)
    return missing


# --------------------------------------------------------------------------- #
#  Overlay pages                                                              #
# --------------------------------------------------------------------------- #
class OverlayPainter:
    @staticmethod
    def _new_canvas(geometry: PageGeometry) -> Tuple[BytesIO, canvas.Canvas]:
        buf = BytesIO()
        c = canvas.Canvas(
            buf,
            pagesize=(geometry.left + geometry.width, geometry.bottom + geometry.height),
        )
        return buf, c

    @staticmethod
    def _finish(buf: BytesIO, c: canvas.Canvas) -> bytes:
        c.showPage()
        c.save()
        return buf.getvalue()

    @staticmethod
    def image(geometry: PageGeometry, rect: PdfRect, reader: ImageReader) -> bytes:
        """Image stretched to exactly fill *rect* (aspect ratio not preserved)."""
        buf, c = OverlayPainter._new_canvas(geometry)
        if rect.width > 0 and rect.height > 0:
            c.drawImage(reader, rect.x, rect.y, width=rect.width, height=rect.height,
                        mask="auto", preserveAspectRatio=False)
        else:
            logger.debug("Zero-area image field at (%.2f, %.2f); nothing drawn", rect.x, rect.y)
        return OverlayPainter._finish(buf, c)

    @staticmethod
    def text(geometry: PageGeometry, text: str, x: float, baseline: float,
             font_size: float, config: EmbedConfig) -> bytes:
        buf, c = OverlayPainter._new_canvas(geometry)
        if font_size > 0 and text:
            c.setFillColorRGB(*hex_to_rgb(config.text_color))
            c.setFont(config.font_name, font_size)
            c.drawString(x, baseline, text)
        return OverlayPainter._finish(buf, c)

    @staticmethod
    def toggle(geometry: PageGeometry, box: PdfRect, checked: bool,
               shape: FieldType, config: EmbedConfig) -> bytes:
        """
        Checkbox: square border, ✔ when checked.
        Radio: circle border, ● when checked.
        """
        buf, c = OverlayPainter._new_canvas(geometry)
        if box.width <= 0:
            return OverlayPainter._finish(buf, c)

        c.setStrokeColorRGB(*hex_to_rgb(config.border_color))
        c.setLineWidth(config.border_width * box.scale)
        if shape == FieldType.RADIO:
            c.circle(box.center_x, box.center_y, box.width / 2.0, stroke=1, fill=0)
            glyph, glyph_size = RADIO_GLYPH, box.width * 0.55
        else:
            c.rect(box.x, box.y, box.width, box.height, stroke=1, fill=0)
            glyph, glyph_size = CHECK_GLYPH, box.width * 0.8

        if checked:
            c.setFillColorRGB(*hex_to_rgb(config.check_color))
            c.setFont(SYMBOL_FONT, glyph_size)
            # ZapfDingbats glyphs sit ~0.35 em above the baseline at their centre
            c.drawCentredString(box.center_x, box.center_y - glyph_size * 0.35, glyph)
        return OverlayPainter._finish(buf, c)
