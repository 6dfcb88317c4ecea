from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class PageGeometry:
    """
    Native page box in PDF points (1 pt = 1/72 inch), origin bottom-left.
    ``left``/``bottom`` are the MediaBox origin, usually 0.
    """
    width: float
    height: float
    left: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class PdfRect:
    """Rectangle in PDF space plus the UI->PDF scale it was derived with."""
    x: float
    y: float
    width: float
    height: float
    scale: float = 1.0

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2.0

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2.0
