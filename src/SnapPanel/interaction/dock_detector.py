from typing import Optional

from ..core.docking_state import DockSide
from ..core.geometry import Point, Rect, ReferenceBounds, Size

DOCK_THRESHOLD = 50
OVERLAP_TOLERANCE = 50
HEADER_HEIGHT = 120
FOOTER_HEIGHT = 50


def _overlaps_vertically(rect: Rect, bounds: ReferenceBounds, tolerance: float) -> bool:
    return rect.y >= bounds.top - tolerance and rect.bottom <= bounds.bottom + tolerance


def _overlaps_horizontally(rect: Rect, bounds: ReferenceBounds, tolerance: float) -> bool:
    return rect.x >= bounds.left - tolerance and rect.right <= bounds.right + tolerance


def detect_dock_side(rect: Rect, bounds: ReferenceBounds,
                     threshold: float = DOCK_THRESHOLD,
                     tolerance: float = OVERLAP_TOLERANCE) -> Optional[DockSide]:
    """
    Decides whether a candidate panel rectangle should snap to the reference
    bounds.

    Sides are tested in the order left, right, top and the first match wins,
    so a rectangle near a corner always resolves the same way.
    """
    # Left: the panel's right edge meets the reference's left edge.
    if abs(rect.right - bounds.left) <= threshold and _overlaps_vertically(rect, bounds, tolerance):
        return DockSide.LEFT
    # Right: the panel's left edge meets the reference's right edge.
    if abs(rect.x - bounds.right) <= threshold and _overlaps_vertically(rect, bounds, tolerance):
        return DockSide.RIGHT
    # Top: the panel's bottom edge meets the reference's top edge.
    if abs(rect.bottom - bounds.top) <= threshold and _overlaps_horizontally(rect, bounds, tolerance):
        return DockSide.TOP
    return None


def anchored_position(side: DockSide, bounds: ReferenceBounds, size: Size) -> Point:
    """The position a panel takes when docked on ``side``, aligned to the reference top."""
    if side is DockSide.RIGHT:
        return Point(bounds.right - size.width, bounds.top)
    return Point(bounds.left, bounds.top)


def detect_edge_contact(rect: Rect, viewport: Size, margin: float,
                        header_height: float = HEADER_HEIGHT,
                        footer_height: float = FOOTER_HEIGHT) -> Optional[DockSide]:
    """
    Checks whether a floating panel has been pushed against a viewport edge,
    typically after the host window shrank.

    Top and bottom are measured against the header and footer bands, not the
    bare viewport. The right edge is checked first, then left, then top.
    Reaching into the footer band resolves to the right side.
    """
    if rect.right >= viewport.width - margin:
        return DockSide.RIGHT
    if rect.x <= margin:
        return DockSide.LEFT
    if rect.y <= header_height + margin:
        return DockSide.TOP
    if rect.bottom >= viewport.height - footer_height - margin:
        return DockSide.RIGHT
    return None
