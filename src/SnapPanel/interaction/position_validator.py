from typing import Optional

from ..core.geometry import Point, Size

EDGE_MARGIN = 50
# Header band plus footer band.
RESERVED_VERTICAL_MARGIN = 170


def is_off_screen(position: Point, size: Size, screen: Size, edge_margin: float = EDGE_MARGIN) -> bool:
    """
    True when the panel is too far outside the screen to be reached: its left
    edge is past the right side, its top is below the bottom, it lies fully to
    the left, or it is above the top.
    """
    return (
        position.x > screen.width - edge_margin
        or position.y > screen.height - edge_margin
        or position.x + size.width < edge_margin
        or position.y < -edge_margin
    )


def clamp_position(position: Point, width: float, screen: Size, reserved_vertical_margin: float) -> Point:
    """Clamps a top-left corner into ``[0, maxX] x [0, maxY]``."""
    max_x = screen.width - width
    max_y = screen.height - reserved_vertical_margin
    return Point(
        max(0, min(position.x, max_x)),
        max(0, min(position.y, max_y)),
    )


def validate_position(position: Point, size: Size, screen: Size,
                      reserved_vertical_margin: float = RESERVED_VERTICAL_MARGIN,
                      edge_margin: float = EDGE_MARGIN) -> Optional[Point]:
    """
    Validates a panel position against the screen.

    Returns None when the panel is off-screen; the caller decides the fallback,
    which by convention is docking to the right. Otherwise returns the position
    clamped into the visible area.
    """
    if is_off_screen(position, size, screen, edge_margin):
        return None
    return clamp_position(position, size.width, screen, reserved_vertical_margin)
