from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .docking_state import DockSide
from .geometry import Point, Rect, Size


@dataclass(frozen=True)
class WindowState:
    """
    The canonical state of the panel.

    While ``docked`` is set, ``position`` and ``size`` are advisory: the host
    lays the panel out and only reads the docked extent from ``size``.
    """
    docked: Optional[DockSide]
    position: Point
    size: Size
    minimized: bool = False

    @property
    def is_floating(self) -> bool:
        return self.docked is None

    @property
    def rect(self) -> Rect:
        return Rect.from_parts(self.position, self.size)

    def with_changes(self, **changes) -> WindowState:
        return replace(self, **changes)
