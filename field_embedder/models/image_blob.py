from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import unquote_to_bytes

from .field_enums import ImageFormat

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8\xff"

_MIME_FORMATS = {
    "image/png": ImageFormat.PNG,
    "image/jpeg": ImageFormat.JPEG,
    "image/jpg": ImageFormat.JPEG,
    "image/pjpeg": ImageFormat.JPEG,
}


def sniff_format(data: bytes) -> Optional[ImageFormat]:
    """Identify PNG/JPEG from the leading magic bytes; None if neither."""
    if data.startswith(PNG_MAGIC):
        return ImageFormat.PNG
    if data.startswith(JPEG_MAGIC):
        return ImageFormat.JPEG
    return None


@dataclass(frozen=True)
class ImageBlob:
    """
    Raster image payload of a signature/initials/image field.

    ``declared_type`` is the MIME type the client claimed (for example the
    ``image/png`` of a data URL). The magic header decides the actual format.
    """
    data: bytes
    declared_type: Optional[str] = None

    @property
    def format(self) -> Optional[ImageFormat]:
        return sniff_format(self.data)

    @property
    def declared_format(self) -> Optional[ImageFormat]:
        if not self.declared_type:
            return None
        return _MIME_FORMATS.get(self.declared_type.strip().lower())

    @classmethod
    def from_bytes(cls, data: bytes, declared_type: Optional[str] = None) -> "ImageBlob":
        return cls(data=bytes(data), declared_type=declared_type)

    @classmethod
    def from_data_url(cls, data_url: str) -> "ImageBlob":
        """
        Parse ``data:<mime>[;base64],<payload>``. Raises ValueError on a
        malformed URL or payload.
        """
        if not data_url.startswith("data:"):
            raise ValueError("Not a data URL")
        header, sep, payload = data_url[5:].partition(",")
        if not sep:
            raise ValueError("Data URL has no payload separator")
        params = header.split(";")
        mime = params[0] or None
        if "base64" in params[1:]:
            try:
                raw = base64.b64decode("".join(payload.split()), validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ValueError(f"Invalid base64 payload in data URL: {exc}") from exc
        else:
            raw = unquote_to_bytes(payload)
        return cls(data=raw, declared_type=mime)

    @classmethod
    def coerce(cls, value: Union["ImageBlob", bytes, bytearray, str]) -> "ImageBlob":
        """Accept an ImageBlob, raw image bytes or a ``data:`` URL string."""
        if isinstance(value, ImageBlob):
            return value
        if isinstance(value, (bytes, bytearray)):
            return cls.from_bytes(bytes(value))
        if isinstance(value, str):
            return cls.from_data_url(value.strip())
        raise TypeError(f"Unsupported image value type: {type(value).__name__}")
