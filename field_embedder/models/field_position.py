from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class FieldPosition:
    """
    Field rectangle in editor (UI) space: pixels at a fixed 612 px page
    width, origin top-left. ``page`` is 1-based.

    ``height`` may be None for text fields whose box height is unknown.
    """
    x: float
    y: float
    width: float = 0.0
    height: Optional[float] = None
    page: int = 1

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError(f"Field width must not be negative: {self.width}")
        if self.height is not None and self.height < 0:
            raise ValueError(f"Field height must not be negative: {self.height}")

    @property
    def has_height(self) -> bool:
        return self.height is not None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldPosition":
        height = data.get("height")
        return cls(
            x=float(data.get("x", 0) or 0),
            y=float(data.get("y", 0) or 0),
            width=float(data.get("width", 0) or 0),
            height=float(height) if height is not None else None,
            page=int(data.get("page", 1) or 1),
        )
