"""
UI space -> PDF space.

The editor always shows a page at a fixed width (612 px), origin top-left.
PDF pages use their native size in points, origin bottom-left. One scale,
``page_width / reference_width``, applies to both axes.
"""
from __future__ import annotations

import logging

from ..exceptions.errors import PageOutOfRangeError
from ..models.field_enums import PagePolicy
from ..models.field_position import FieldPosition
from ..models.pdf_rect import PageGeometry, PdfRect

logger = logging.getLogger(__name__)

REFERENCE_WIDTH = 612.0


def compute_scale(page_width: float, reference_width: float = REFERENCE_WIDTH) -> float:
    return float(page_width) / float(reference_width)


def to_pdf_rect(position: FieldPosition, geometry: PageGeometry,
                reference_width: float = REFERENCE_WIDTH) -> PdfRect:
    """
    Map a field rectangle onto a page.

    The vertical axis is flipped and the field height subtracted so the
    UI top edge lands on the PDF top edge. A field without a height is
    treated as zero-height (its top edge is its y).
    """
    scale = compute_scale(geometry.width, reference_width)
    height = position.height or 0.0
    pdf_width = position.width * scale
    pdf_height = height * scale
    pdf_x = position.x * scale
    pdf_y = geometry.height - (position.y * scale) - pdf_height
    return PdfRect(
        x=geometry.left + pdf_x,
        y=geometry.bottom + pdf_y,
        width=pdf_width,
        height=pdf_height,
        scale=scale,
    )


def resolve_page_index(page: int, page_count: int,
                       policy: PagePolicy = PagePolicy.LENIENT) -> int:
    """
    Return the 0-based index for a 1-based page ordinal.

    Out-of-range ordinals fall back to page 1 under the lenient policy and
    raise PageOutOfRangeError under the strict one.
    """
    if 1 <= page <= page_count:
        return page - 1
    if policy == PagePolicy.STRICT:
        raise PageOutOfRangeError(
            f"Page {page} does not exist (document has {page_count} page(s))",
            page=page,
            page_count=page_count,
        )
    logger.warning(
        "Page %s out of range for %d-page document; falling back to page 1",
        page, page_count,
    )
    return 0
