"""Dataclasses and enums shared by the field embedder."""

from field_embedder.models.embed_config import EmbedConfig, hex_to_rgb
from field_embedder.models.field_enums import FieldType, ImageFormat, PagePolicy
from field_embedder.models.field_position import FieldPosition
from field_embedder.models.image_blob import ImageBlob, sniff_format
from field_embedder.models.pdf_rect import PageGeometry, PdfRect

__all__ = [
    "EmbedConfig",
    "FieldPosition",
    "FieldType",
    "ImageBlob",
    "ImageFormat",
    "PageGeometry",
    "PagePolicy",
    "PdfRect",
    "hex_to_rgb",
    "sniff_format",
]
