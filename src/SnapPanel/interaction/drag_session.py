from __future__ import annotations

from dataclasses import dataclass

from ..core.geometry import Point


@dataclass(frozen=True)
class DragSession:
    """
    An in-progress title bar drag. Only exists between press and release.

    ``pointer_offset`` is where the pointer grabbed the panel, relative to the
    panel's top-left corner, so the panel does not jump under the cursor.
    """
    pointer_offset: Point

    @classmethod
    def start(cls, pointer: Point, panel_top_left: Point) -> DragSession:
        return cls(pointer_offset=pointer - panel_top_left)

    def candidate_position(self, pointer: Point) -> Point:
        return pointer - self.pointer_offset
