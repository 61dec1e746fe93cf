import math
from numbers import Real

from ..core.docking_state import DockSide
from ..core.errors import InvalidPersistedState
from ..core.geometry import Point, Size
from ..core.window_state import WindowState


class StateSerializer:
    """
    Converts WindowState to and from the persisted record:

        {"docked": "left" | "right" | "top" | None,
         "position": {"x": number, "y": number},
         "size": {"width": number, "height": number}}

    ``minimized`` is never written; a restored panel always starts expanded.
    """

    @staticmethod
    def to_record(state: WindowState) -> dict:
        return {
            'docked': state.docked.value if state.docked else None,
            'position': {'x': state.position.x, 'y': state.position.y},
            'size': {'width': state.size.width, 'height': state.size.height},
        }

    @classmethod
    def from_record(cls, record) -> WindowState:
        """
        Rebuilds a WindowState from a record.

        Raises:
            InvalidPersistedState: the record is not a mapping, a field is
                missing or has the wrong type, or a size is not positive.
        """
        if not isinstance(record, dict):
            raise InvalidPersistedState(f"Expected a mapping, got {type(record).__name__}")

        try:
            docked = DockSide.from_value(record.get('docked'))
        except ValueError as e:
            raise InvalidPersistedState(f"Unknown dock side: {record.get('docked')!r}") from e

        position = record.get('position')
        size = record.get('size')
        if not isinstance(position, dict) or not isinstance(size, dict):
            raise InvalidPersistedState("Record is missing 'position' or 'size'")

        x = cls._number(position, 'x')
        y = cls._number(position, 'y')
        width = cls._number(size, 'width')
        height = cls._number(size, 'height')
        if width <= 0 or height <= 0:
            raise InvalidPersistedState(f"Non-positive size {width}x{height}")

        return WindowState(docked=docked, position=Point(x, y), size=Size(width, height))

    @staticmethod
    def _number(mapping: dict, key: str) -> float:
        value = mapping.get(key)
        # bool is a Real subclass but never a valid coordinate.
        if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
            raise InvalidPersistedState(f"Field {key!r} is not a finite number: {value!r}")
        return value
