# field_embedder/models/embed_config.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from .field_enums import PagePolicy


def hex_to_rgb(hexstr: str) -> Tuple[float, float, float]:
    """
    Convert hex color (#RRGGBB or #RGB) into an RGB tuple in 0..1 for reportlab.
    """
    s = (hexstr or "#000000").strip()
    if not s.startswith("#"):
        s = "#" + s
    if len(s) == 4:
        r = int(s[1] * 2, 16); g = int(s[2] * 2, 16); b = int(s[3] * 2, 16)
    elif len(s) == 7:
        r = int(s[1:3], 16); g = int(s[3:5], 16); b = int(s[5:7], 16)
    else:
        raise ValueError(f"Invalid hex color: {hexstr!r}")
    return (r / 255.0, g / 255.0, b / 255.0)


@dataclass(frozen=True)
class EmbedConfig:
    """
    Rendering constants for embedded fields. Lengths are UI pixels at the
    reference width; they are multiplied by the page scale when drawn.
    """
    reference_width: float = 612.0
    page_policy: PagePolicy = PagePolicy.LENIENT

    # Text / date / hyperlink
    font_name: str = "Helvetica"
    font_size: float = 12.0
    text_padding: float = 4.0
    baseline_ratio: float = 0.7        # baseline offset from box top, as fraction of box height
    default_text_offset: float = 12.0  # baseline offset from top when box height is unknown
    text_color: str = "#000000"

    # Checkbox / radio
    checkbox_size: float = 14.0
    border_width: float = 1.0
    border_color: str = "#000000"
    check_color: str = "#16a34a"

    # Dates
    date_language: str = "id"
    date_pattern: Optional[str] = None

    def __post_init__(self) -> None:
        if self.reference_width <= 0:
            raise ValueError(f"reference_width must be positive: {self.reference_width}")
        if not isinstance(self.page_policy, PagePolicy):
            object.__setattr__(self, "page_policy", PagePolicy(str(self.page_policy).strip().lower()))
        for color in (self.text_color, self.border_color, self.check_color):
            hex_to_rgb(color)
        if self.date_pattern:
            from core.i18n.locale import validate_pattern
            validate_pattern(self.date_pattern)

    @property
    def strict_pages(self) -> bool:
        return self.page_policy == PagePolicy.STRICT

    def with_overrides(self, **changes: Any) -> "EmbedConfig":
        return replace(self, **changes)

    @classmethod
    def from_settings(cls, service: Any = None) -> "EmbedConfig":
        """Build from the layered configuration service (see core.config)."""
        if service is None:
            from core.config.config_service import get_config_service
            service = get_config_service()
        emb = service.embedding
        dt = service.date
        return cls(
            reference_width=float(emb.reference_width),
            page_policy=PagePolicy(str(emb.page_policy).strip().lower()),
            font_name=str(emb.font_name),
            font_size=float(emb.font_size),
            text_padding=float(emb.text_padding),
            baseline_ratio=float(emb.baseline_ratio),
            default_text_offset=float(emb.default_text_offset),
            text_color=str(emb.text_color),
            checkbox_size=float(emb.checkbox_size),
            border_width=float(emb.border_width),
            border_color=str(emb.border_color),
            check_color=str(emb.check_color),
            date_language=str(dt.language or "id"),
            date_pattern=str(dt.pattern) if dt.pattern else None,
        )
