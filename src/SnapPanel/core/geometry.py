"""
Plain geometry values used by the panel state machine.

These are kept independent of Qt so that the docking and resizing math can be
exercised without a running QApplication. Conversion helpers to and from the
Qt value types are provided for the widget layer.
"""

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QPoint, QRect, QSize


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def to_qpoint(self) -> QPoint:
        return QPoint(round(self.x), round(self.y))

    @classmethod
    def from_qpoint(cls, point: QPoint) -> Point:
        return cls(point.x(), point.y())


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @classmethod
    def from_qsize(cls, size: QSize) -> Size:
        return cls(size.width(), size.height())


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle. ``right`` and ``bottom`` are exclusive edges."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @classmethod
    def from_parts(cls, position: Point, size: Size) -> Rect:
        return cls(position.x, position.y, size.width, size.height)

    def to_qrect(self) -> QRect:
        return QRect(round(self.x), round(self.y), round(self.width), round(self.height))


@dataclass(frozen=True)
class ReferenceBounds:
    """The content region the panel docks against, in host coordinates."""
    left: float
    right: float
    top: float
    bottom: float

    @classmethod
    def from_qrect(cls, rect: QRect) -> ReferenceBounds:
        return cls(
            left=rect.x(),
            right=rect.x() + rect.width(),
            top=rect.y(),
            bottom=rect.y() + rect.height(),
        )

    @classmethod
    def viewport_fallback(cls, viewport: Size, header_height: float, footer_height: float) -> ReferenceBounds:
        """Full viewport width, minus the fixed header and footer bands."""
        return cls(
            left=0,
            right=viewport.width,
            top=header_height,
            bottom=viewport.height - footer_height,
        )
