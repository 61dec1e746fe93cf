"""
SnapPanel - a floating overlay panel that can be dragged, resized from any
edge, docked against a content region, minimized, and restored across runs.
"""

from .core.docking_state import DockingState, DockSide
from .core.errors import InvalidPersistedState, PersistenceWriteFailure, SnapPanelError
from .core.geometry import Point, Rect, ReferenceBounds, Size
from .core.panel_config import PanelConfig, PanelSettings
from .core.window_manager import PanelSignals, WindowManager
from .core.window_state import WindowState
from .interaction.resize_session import Edge
from .model.persistence import InMemoryPersistenceAdapter, PersistenceAdapter, QSettingsPersistenceAdapter

__all__ = [
    "DockingState", "DockSide", "Edge",
    "InvalidPersistedState", "PersistenceWriteFailure", "SnapPanelError",
    "Point", "Rect", "ReferenceBounds", "Size",
    "PanelConfig", "PanelSettings", "PanelSignals", "WindowManager", "WindowState",
    "InMemoryPersistenceAdapter", "PersistenceAdapter", "QSettingsPersistenceAdapter",
]
