"""In-memory fixtures: PDFs and images, plus content-stream inspection helpers."""
from __future__ import annotations

import base64
from io import BytesIO
from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image
from pypdf import PdfReader, PdfWriter
from pypdf.constants import PageLabelStyle
from pypdf.generic import ContentStream
from reportlab.pdfgen import canvas

LETTER = (612.0, 792.0)
A4 = (595.28, 841.89)
DOUBLE_LETTER = (1224.0, 1584.0)

Matrix = Tuple[float, float, float, float, float, float]
IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def make_pdf(page_sizes: Sequence[Tuple[float, float]] = (LETTER,), *,
             title: Optional[str] = None) -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=page_sizes[0])
    if title:
        c.setTitle(title)
    for number, size in enumerate(page_sizes, start=1):
        c.setPageSize(size)
        c.setFont("Helvetica", 10)
        c.drawString(36, 36, f"Page {number}")
        c.showPage()
    c.save()
    return buf.getvalue()


def make_offset_pdf(left: float, bottom: float, width: float, height: float) -> bytes:
    """One page whose MediaBox does not start at the origin."""
    reader = PdfReader(BytesIO(make_pdf([(left + width, bottom + height)])))
    writer = PdfWriter()
    page = reader.pages[0]
    page.mediabox.lower_left = (left, bottom)
    page.mediabox.upper_right = (left + width, bottom + height)
    writer.add_page(page)
    out = BytesIO()
    writer.write(out)
    return out.getvalue()


def make_outlined_pdf() -> bytes:
    """Two Letter pages with one bookmark and lowercase roman page labels."""
    writer = PdfWriter(clone_from=PdfReader(BytesIO(make_pdf([LETTER, LETTER]))))
    writer.add_outline_item("Terms", 1)
    writer.set_page_label(0, 1, style=PageLabelStyle.LOWERCASE_ROMAN)
    out = BytesIO()
    writer.write(out)
    return out.getvalue()


def make_encrypted_pdf() -> bytes:
    writer = PdfWriter(clone_from=PdfReader(BytesIO(make_pdf())))
    writer.encrypt("secret")
    out = BytesIO()
    writer.write(out)
    return out.getvalue()


def make_png(size: Tuple[int, int] = (40, 20), color=(0, 0, 255, 255)) -> bytes:
    buf = BytesIO()
    Image.new("RGBA", size, color).save(buf, format="PNG")
    return buf.getvalue()


def make_jpeg(size: Tuple[int, int] = (40, 20), color=(200, 30, 30)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format="JPEG")
    return buf.getvalue()


def data_url(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


# --------------------------------------------------------------------------- #
#  Content-stream inspection                                                  #
# --------------------------------------------------------------------------- #
def _mul(m: Matrix, n: Matrix) -> Matrix:
    a, b, c, d, e, f = m
    A, B, C, D, E, F = n
    return (a * A + b * C, a * B + b * D,
            c * A + d * C, c * B + d * D,
            e * A + f * C + E, e * B + f * D + F)


def _floats(operands: Iterable) -> Matrix:
    return tuple(float(o) for o in operands)  # type: ignore[return-value]


def operations(pdf_bytes: bytes, page_index: int = 0) -> List[Tuple[list, bytes]]:
    reader = PdfReader(BytesIO(pdf_bytes))
    page = reader.pages[page_index]
    contents = page.get_contents()
    if contents is None:
        return []
    return list(ContentStream(contents, reader).operations)


def image_placements(pdf_bytes: bytes, page_index: int = 0) -> List[Matrix]:
    """CTM in effect at every ``Do`` (for an image: width, 0, 0, height, x, y)."""
    ctm, stack, found = IDENTITY, [], []
    for operands, op in operations(pdf_bytes, page_index):
        if op == b"q":
            stack.append(ctm)
        elif op == b"Q":
            ctm = stack.pop() if stack else IDENTITY
        elif op == b"cm":
            ctm = _mul(_floats(operands), ctm)
        elif op == b"Do":
            found.append(ctm)
    return found


def text_placements(pdf_bytes: bytes, page_index: int = 0) -> List[Tuple[str, float, float, float]]:
    """``(text, x, y, font_size)`` for every ``Tj`` on the page, in stream order."""
    ctm, stack, found = IDENTITY, [], []
    tm, size = IDENTITY, 0.0
    for operands, op in operations(pdf_bytes, page_index):
        if op == b"q":
            stack.append(ctm)
        elif op == b"Q":
            ctm = stack.pop() if stack else IDENTITY
        elif op == b"cm":
            ctm = _mul(_floats(operands), ctm)
        elif op == b"BT":
            tm = IDENTITY
        elif op == b"Tf":
            size = float(operands[1])
        elif op == b"Tm":
            tm = _floats(operands)
        elif op == b"Td":
            tm = _mul((1.0, 0.0, 0.0, 1.0, float(operands[0]), float(operands[1])), tm)
        elif op == b"Tj":
            raw = operands[0]
            text = raw if isinstance(raw, str) else bytes(raw).decode("latin-1")
            origin = _mul(tm, ctm)
            found.append((str(text), origin[4], origin[5], size))
    return found


def stroked_rects(pdf_bytes: bytes, page_index: int = 0) -> List[Tuple[float, float, float, float]]:
    """``re`` rectangles that are stroked (clip rectangles are ignored)."""
    ops = operations(pdf_bytes, page_index)
    rects = []
    for i, (operands, op) in enumerate(ops):
        if op == b"re" and i + 1 < len(ops) and ops[i + 1][1] in (b"S", b"s", b"B", b"b"):
            rects.append(tuple(float(o) for o in operands))
    return rects


def image_xobjects(pdf_bytes: bytes, page_index: int = 0) -> list:
    reader = PdfReader(BytesIO(pdf_bytes))
    resources = reader.pages[page_index].get("/Resources")
    if resources is None:
        return []
    xobjects = resources.get_object().get("/XObject")
    if xobjects is None:
        return []
    xobjects = xobjects.get_object()
    images = []
    for name in xobjects:
        obj = xobjects[name].get_object()
        if obj.get("/Subtype") == "/Image":
            images.append(obj)
    return images


def image_filters(xobject) -> List[str]:
    flt = xobject.get("/Filter")
    if flt is None:
        return []
    flt = flt.get_object()
    if isinstance(flt, list):
        return [str(f) for f in flt]
    return [str(flt)]


def paint_order(pdf_bytes: bytes, page_index: int = 0) -> List[str]:
    """``"<image>"`` for every ``Do`` and the string of every ``Tj``, in stream order."""
    order = []
    for operands, op in operations(pdf_bytes, page_index):
        if op == b"Do":
            order.append("<image>")
        elif op == b"Tj":
            raw = operands[0]
            text = raw if isinstance(raw, str) else bytes(raw).decode("latin-1")
            if not str(text).startswith("Page "):
                order.append(str(text))
    return order
