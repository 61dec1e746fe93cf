from enum import Enum
from typing import Optional


class DockSide(Enum):
    """The reference edge a panel is docked against."""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"

    @classmethod
    def from_value(cls, value) -> Optional["DockSide"]:
        """
        Maps a persisted value back to a side. ``None`` stays ``None``; an
        unknown string raises ValueError.
        """
        if value is None or isinstance(value, cls):
            return value
        return cls(value)


class DockingState(Enum):
    """Which interaction session, if any, currently owns the pointer."""
    IDLE = "idle"
    DRAGGING_WINDOW = "dragging_window"
    RESIZING_WINDOW = "resizing_window"
