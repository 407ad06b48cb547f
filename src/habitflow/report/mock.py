"""Recording drawing surface for testing.

Captures every primitive instead of rendering it, so layout decisions
(pagination, glyph counts, labels) can be asserted directly.
"""

from dataclasses import dataclass, field
from typing import Any

from .canvas import BLACK, RGB, TextAlign


@dataclass
class DrawOp:
    """A single recorded drawing call."""

    kind: str
    page: int
    args: dict[str, Any] = field(default_factory=dict)


class RecordingCanvas:
    """Drawing surface that records operations per page."""

    def __init__(self, width: float = 297.0, height: float = 210.0) -> None:
        """Initialize with a page size in millimetres (landscape A4 by default)."""
        self._width = width
        self._height = height
        self._page = 1
        self._ops: list[DrawOp] = []

    @property
    def page_width(self) -> float:
        return self._width

    @property
    def page_height(self) -> float:
        return self._height

    @property
    def page_count(self) -> int:
        """Number of pages started."""
        return self._page

    @property
    def ops(self) -> list[DrawOp]:
        """All recorded operations."""
        return self._ops.copy()

    def _record(self, kind: str, **args: Any) -> None:
        self._ops.append(DrawOp(kind=kind, page=self._page, args=args))

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
        self._record("rect", x=x, y=y, width=width, height=height, fill=fill, stroke=stroke)

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
        self._record("rounded_rect", x=x, y=y, width=width, height=height, fill=fill, stroke=stroke)

    def line(
        self, x1: float, y1: float, x2: float, y2: float, color: RGB, width: float = 0.3
    ) -> None:
        self._record("line", x1=x1, y1=y1, x2=x2, y2=y2, color=color, width=width)

    def circle(self, x: float, y: float, radius: float, fill: RGB) -> None:
        self._record("circle", x=x, y=y, radius=radius, fill=fill)

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
        self._record("text", x=x, y=y, value=value, size=size, color=color, bold=bold, align=align)

    def new_page(self) -> None:
        self._page += 1

    def of_kind(self, kind: str, page: int | None = None) -> list[DrawOp]:
        """Recorded operations of one kind, optionally limited to a page."""
        return [op for op in self._ops if op.kind == kind and (page is None or op.page == page)]

    def texts(self, page: int | None = None) -> list[str]:
        """Text strings drawn, in order."""
        return [op.args["value"] for op in self.of_kind("text", page)]


__all__ = ["DrawOp", "RecordingCanvas"]
