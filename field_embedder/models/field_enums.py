# field_embedder/models/field_enums.py
from __future__ import annotations
from enum import Enum


class FieldType(str, Enum):
    """Kinds of fields an editor can place on a page."""
    SIGNATURE = "signature"
    INITIALS  = "initials"
    IMAGE     = "image"
    TEXT      = "text"
    NAME      = "name"
    HYPERLINK = "hyperlink"
    DATE      = "date"
    CHECKBOX  = "checkbox"
    RADIO     = "radio"

    @property
    def is_image(self) -> bool:
        return self in (FieldType.SIGNATURE, FieldType.INITIALS, FieldType.IMAGE)

    @property
    def is_text(self) -> bool:
        return self in (FieldType.TEXT, FieldType.NAME, FieldType.HYPERLINK)

    @property
    def is_toggle(self) -> bool:
        return self in (FieldType.CHECKBOX, FieldType.RADIO)


class PagePolicy(str, Enum):
    """What to do with a field whose page does not exist in the document."""
    LENIENT = "lenient"   # fall back to page 1, log a warning
    STRICT  = "strict"    # raise PageOutOfRangeError


class ImageFormat(str, Enum):
    PNG  = "png"
    JPEG = "jpeg"
