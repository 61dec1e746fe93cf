from __future__ import annotations

from dataclasses import dataclass
from enum import Flag
from typing import Optional

from ..core.docking_state import DockSide
from ..core.geometry import Point, Rect, Size
from ..core.panel_config import PanelConfig
from .position_validator import clamp_position


class Edge(Flag):
    """The edges a resize handle drags. Corner handles combine two edges."""
    NONE = 0
    TOP = 1
    RIGHT = 2
    BOTTOM = 4
    LEFT = 8

    TOP_LEFT = TOP | LEFT
    TOP_RIGHT = TOP | RIGHT
    BOTTOM_LEFT = BOTTOM | LEFT
    BOTTOM_RIGHT = BOTTOM | RIGHT

    @property
    def is_valid_handle(self) -> bool:
        """One edge, or two adjacent edges; never two opposite ones."""
        if not self:
            return False
        if Edge.TOP in self and Edge.BOTTOM in self:
            return False
        if Edge.LEFT in self and Edge.RIGHT in self:
            return False
        return True


def edge_at(x: float, y: float, width: float, height: float, margin: float) -> Edge:
    """
    Hit-tests a point in panel-local coordinates against the resize margins.
    Returns Edge.NONE for the interior.
    """
    if width <= 0 or height <= 0:
        return Edge.NONE

    edges = Edge.NONE
    if 0 <= y < margin:
        edges |= Edge.TOP
    elif height - margin < y <= height:
        edges |= Edge.BOTTOM
    if 0 <= x < margin:
        edges |= Edge.LEFT
    elif width - margin < x <= width:
        edges |= Edge.RIGHT
    return edges


def free_edge(side: DockSide) -> Edge:
    """The only edge a docked panel can be resized from: the one facing the content."""
    if side is DockSide.LEFT:
        return Edge.RIGHT
    if side is DockSide.RIGHT:
        return Edge.LEFT
    return Edge.BOTTOM


def _clamp(value: float, minimum: float, maximum: float) -> float:
    # The minimum wins when the viewport is too small for it.
    return max(minimum, min(maximum, value))


@dataclass(frozen=True)
class ResizeSession:
    """
    An in-progress resize. Only exists between press and release.

    All math is relative to ``start_rect`` and ``start_pointer`` rather than
    to the previous move, so rounding never accumulates.
    """
    start_pointer: Point
    start_rect: Rect
    edges: Edge
    docked: Optional[DockSide] = None

    @classmethod
    def start(cls, pointer: Point, start_rect: Rect, edges: Edge,
              docked: Optional[DockSide] = None) -> ResizeSession:
        if not edges.is_valid_handle:
            raise ValueError(f"Invalid resize handle: {edges!r}")
        if docked is not None:
            edges &= free_edge(docked)
            if not edges:
                raise ValueError(f"Edge cannot resize a panel docked {docked.value}")
        return cls(start_pointer=pointer, start_rect=start_rect, edges=edges, docked=docked)

    def resized_rect(self, pointer: Point, viewport: Size, config: PanelConfig) -> Rect:
        """
        Anchor-preserving floating resize.

        Growing from the left or top moves the origin by exactly the amount the
        dimension changed after clamping, so the opposite edge stays pinned even
        when the size limit stops the drag.
        """
        delta = pointer - self.start_pointer
        start = self.start_rect
        max_width = viewport.width - config.max_width_margin
        max_height = viewport.height - config.reserved_vertical_margin

        x, y = start.x, start.y
        width, height = start.width, start.height

        if Edge.RIGHT in self.edges:
            width = _clamp(start.width + delta.x, config.min_width, max_width)
        if Edge.LEFT in self.edges:
            width_change = start.width - _clamp(start.width - delta.x, config.min_width, max_width)
            width = start.width - width_change
            x = start.x + width_change

        if Edge.BOTTOM in self.edges:
            height = _clamp(start.height + delta.y, config.min_height, max_height)
        if Edge.TOP in self.edges:
            height_change = start.height - _clamp(start.height - delta.y, config.min_height, max_height)
            height = start.height - height_change
            y = start.y + height_change

        position = clamp_position(Point(x, y), width, viewport, config.reserved_vertical_margin)
        return Rect(position.x, position.y, width, height)

    def resized_docked_size(self, pointer: Point, viewport: Size, config: PanelConfig) -> Size:
        """Resizes the docked extent: width for side docks, height for a top dock."""
        delta = pointer - self.start_pointer
        width, height = self.start_rect.width, self.start_rect.height
        max_width = viewport.width * config.docked_max_width_ratio
        max_height = viewport.height * config.docked_max_height_ratio

        if self.docked is DockSide.LEFT:
            width = _clamp(width + delta.x, config.min_width, max_width)
        elif self.docked is DockSide.RIGHT:
            width = _clamp(width - delta.x, config.min_width, max_width)
        elif self.docked is DockSide.TOP:
            height = _clamp(height + delta.y, config.min_height, max_height)
        return Size(width, height)
