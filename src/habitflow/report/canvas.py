"""Drawing surface used by the report layout.

The layout works in millimetres with the origin at the top-left corner of
the page. ``PDFCanvas`` maps that onto reportlab's bottom-left point space.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Protocol

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas as rl_canvas

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]

BLACK: RGB = (0, 0, 0)
WHITE: RGB = (255, 255, 255)


class TextAlign(Enum):
    """Horizontal anchor of a text run relative to its x position."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


def hex_to_rgb(value: str) -> RGB:
    """Convert ``#rrggbb`` to an RGB tuple.

    Raises:
        ValueError: If the string is not a six-digit hex colour.
    """
    digits = value.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Expected #rrggbb colour, got {value!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


class DrawingSurface(Protocol):
    """Primitive drawing operations the report layout relies on."""

    @property
    def page_width(self) -> float:
        """Page width in millimetres."""
        ...

    @property
    def page_height(self) -> float:
        """Page height in millimetres."""
        ...

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: RGB | None = None,
        stroke: RGB | None = None,
        line_width: float = 0.1,
    ) -> None:
        """Draw a rectangle; ``fill`` and/or ``stroke`` select the style."""
        ...

    def rounded_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        fill: RGB | None = None,
        stroke: RGB | None = None,
    ) -> None:
        """Draw a rectangle with rounded corners."""
        ...

    def line(
        self, x1: float, y1: float, x2: float, y2: float, color: RGB, width: float = 0.3
    ) -> None:
        """Draw a straight line."""
        ...

    def circle(self, x: float, y: float, radius: float, fill: RGB) -> None:
        """Draw a filled circle centred on ``(x, y)``."""
        ...

    def text(
        self,
        x: float,
        y: float,
        value: str,
        size: float = 10,
        color: RGB = BLACK,
        bold: bool = False,
        align: TextAlign = TextAlign.LEFT,
    ) -> None:
        """Draw a single line of text with its baseline at ``y``."""
        ...

    def new_page(self) -> None:
        """Finish the current page and start a blank one."""
        ...


class PDFCanvas:
    """Landscape A4 PDF surface backed by reportlab."""

    def __init__(self, path: Path) -> None:
        """Initialize the canvas.

        Args:
            path: Destination PDF file, written on ``save``.
        """
        self._path = path
        self._width_pt, self._height_pt = landscape(A4)
        self._canvas = rl_canvas.Canvas(str(path), pagesize=(self._width_pt, self._height_pt))
        self._pages = 1

    @property
    def page_width(self) -> float:
        return self._width_pt / mm

    @property
    def page_height(self) -> float:
        return self._height_pt / mm

    @property
    def page_count(self) -> int:
        """Pages started so far."""
        return self._pages

    def _y(self, y: float) -> float:
        return self._height_pt - y * mm

    def _set_fill(self, color: RGB) -> None:
        r, g, b = color
        self._canvas.setFillColorRGB(r / 255, g / 255, b / 255)

    def _set_stroke(self, color: RGB) -> None:
        r, g, b = color
        self._canvas.setStrokeColorRGB(r / 255, g / 255, b / 255)

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: RGB | None = None,
        stroke: RGB | None = None,
        line_width: float = 0.1,
    ) -> None:
        if fill is None and stroke is None:
            return
        if fill is not None:
            self._set_fill(fill)
        if stroke is not None:
            self._set_stroke(stroke)
            self._canvas.setLineWidth(line_width * mm)
        self._canvas.rect(
            x * mm,
            self._y(y + height),
            width * mm,
            height * mm,
            stroke=int(stroke is not None),
            fill=int(fill is not None),
        )

    def rounded_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        fill: RGB | None = None,
        stroke: RGB | None = None,
    ) -> None:
        if fill is None and stroke is None:
            return
        if fill is not None:
            self._set_fill(fill)
        if stroke is not None:
            self._set_stroke(stroke)
            self._canvas.setLineWidth(0.2 * mm)
        self._canvas.roundRect(
            x * mm,
            self._y(y + height),
            width * mm,
            height * mm,
            radius * mm,
            stroke=int(stroke is not None),
            fill=int(fill is not None),
        )

    def line(
        self, x1: float, y1: float, x2: float, y2: float, color: RGB, width: float = 0.3
    ) -> None:
        self._set_stroke(color)
        self._canvas.setLineWidth(width * mm)
        self._canvas.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def circle(self, x: float, y: float, radius: float, fill: RGB) -> None:
        self._set_fill(fill)
        self._canvas.circle(x * mm, self._y(y), radius * mm, stroke=0, fill=1)

    def text(
        self,
        x: float,
        y: float,
        value: str,
        size: float = 10,
        color: RGB = BLACK,
        bold: bool = False,
        align: TextAlign = TextAlign.LEFT,
    ) -> None:
        self._canvas.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        self._set_fill(color)
        px, py = x * mm, self._y(y)
        if align is TextAlign.RIGHT:
            self._canvas.drawRightString(px, py, value)
        elif align is TextAlign.CENTER:
            self._canvas.drawCentredString(px, py, value)
        else:
            self._canvas.drawString(px, py, value)

    def new_page(self) -> None:
        self._canvas.showPage()
        self._pages += 1

    def save(self) -> Path:
        """Write the PDF to disk.

        Returns:
            Path of the written file.
        """
        self._canvas.save()
        logger.info(f"Wrote {self._pages}-page report to {self._path}")
        return self._path


__all__ = [
    "BLACK",
    "RGB",
    "WHITE",
    "DrawingSurface",
    "PDFCanvas",
    "TextAlign",
    "hex_to_rgb",
]
