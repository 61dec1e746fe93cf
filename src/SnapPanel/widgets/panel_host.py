from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEvent, QObject, QPoint, QRect, QSize
from PySide6.QtWidgets import QApplication, QHBoxLayout, QVBoxLayout, QWidget

from ..core.docking_state import DockSide
from ..core.geometry import Point, ReferenceBounds, Size
from ..core.panel_config import PanelSettings
from ..core.window_manager import WindowManager
from ..core.window_state import WindowState
from ..interaction.resize_session import Edge
from ..model.persistence import PersistenceAdapter, QSettingsPersistenceAdapter
from ..utils.logger import get_logger
from .docked_panel import DockedPanel
from .floating_panel import FloatingPanel

logger = get_logger(__name__)


class PointerSessionFilter(QObject):
    """
    Application-wide pointer filter that exists only while a drag or resize
    session is active, so the session keeps receiving moves even when the
    widget that was pressed gets hidden (e.g. a docked panel undocking).
    """

    def __init__(self, host: PanelHost):
        super().__init__(host)
        self._host = host
        self.installed = False

    def install(self):
        if not self.installed:
            QApplication.instance().installEventFilter(self)
            self.installed = True

    def remove(self):
        if self.installed:
            QApplication.instance().removeEventFilter(self)
            self.installed = False

    def eventFilter(self, watched, event):
        event_type = event.type()
        if event_type == QEvent.Type.MouseMove:
            self._host.route_pointer_move(event.globalPosition().toPoint())
            return True
        if event_type == QEvent.Type.MouseButtonRelease:
            self._host.finish_session()
            return True
        return False


class PanelHost(QWidget):
    """
    A host window that lays out a reference content view, the dock slots
    around it, and the floating overlay panel.

    The content view is the region the panel docks against. Its geometry is
    read on demand, so the host never has to push bounds to the manager.
    """

    def __init__(self, content_view: QWidget, panel_content: Optional[QWidget] = None,
                 persistence: Optional[PersistenceAdapter] = None,
                 settings: Optional[PanelSettings] = None,
                 title: str = "Panel", initial_size: QSize = QSize(1280, 800), parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.resize(initial_size)

        self.content_view = content_view
        self._panel_content = panel_content

        self.manager = WindowManager(
            persistence if persistence is not None else QSettingsPersistenceAdapter(),
            Size.from_qsize(self.size()),
            reference_bounds=self._content_bounds,
            settings=settings,
            parent=self,
        )

        # Left slot | (top slot / content) | right slot
        self.row_layout = QHBoxLayout(self)
        self.row_layout.setContentsMargins(0, 0, 0, 0)
        self.row_layout.setSpacing(0)
        self.center = QWidget(self)
        self.column_layout = QVBoxLayout(self.center)
        self.column_layout.setContentsMargins(0, 0, 0, 0)
        self.column_layout.setSpacing(0)
        self.column_layout.addWidget(self.content_view, 1)
        self.row_layout.addWidget(self.center, 1)

        self.docked_panel = DockedPanel(self, title, parent=self)
        self.docked_panel.hide()
        self.floating_panel = FloatingPanel(self, title)
        self.floating_panel.hide()

        self._pointer_filter = PointerSessionFilter(self)
        self._docked_side = None

        self.manager.signals.state_changed.connect(self._sync_from_state)
        self.manager.signals.dock_changed.connect(self._on_dock_changed)

        # Host resizes are observed for the lifetime of the host.
        self.installEventFilter(self)
        self._on_dock_changed(self.manager.state.docked)

    # --- Geometry helpers ---

    def _content_bounds(self) -> Optional[ReferenceBounds]:
        if self.content_view is None or not self.content_view.isVisible():
            return None
        top_left = self.content_view.mapTo(self, QPoint(0, 0))
        return ReferenceBounds.from_qrect(QRect(top_left, self.content_view.size()))

    def _to_host_point(self, global_pos: QPoint) -> Point:
        return Point.from_qpoint(self.mapFromGlobal(global_pos))

    def _panel_top_left(self, panel: QWidget) -> Point:
        return Point.from_qpoint(panel.mapTo(self, QPoint(0, 0)))

    # --- Sessions ---

    def start_drag(self, global_pos: QPoint, panel: QWidget) -> bool:
        started = self.manager.begin_drag(self._to_host_point(global_pos), self._panel_top_left(panel))
        if started:
            self._pointer_filter.install()
        return started

    def start_resize(self, global_pos: QPoint, edges: Edge) -> bool:
        started = self.manager.begin_resize(self._to_host_point(global_pos), edges)
        if started:
            self._pointer_filter.install()
        return started

    def route_pointer_move(self, global_pos: QPoint):
        pointer = self._to_host_point(global_pos)
        if self.manager.drag_session is not None:
            self.manager.drag_move(pointer)
        elif self.manager.resize_session is not None:
            self.manager.resize_move(pointer)

    def finish_session(self):
        self._pointer_filter.remove()
        self.manager.end_interaction()

    @property
    def has_pointer_session(self) -> bool:
        return self._pointer_filter.installed

    # --- State sync ---

    def _on_dock_changed(self, side: Optional[DockSide]):
        content = self._panel_content
        if side is None:
            self._remove_docked_panel()
            if content is not None:
                self.floating_panel.body.set_content(content)
        else:
            self._place_docked_panel(side)
            if content is not None:
                self.docked_panel.body.set_content(content)
        self._sync_from_state(self.manager.state)
        # Content bounds must reflect the new slot before the next pointer move.
        self.row_layout.activate()
        self.column_layout.activate()

    def _remove_docked_panel(self):
        if self._docked_side is None:
            return
        self.row_layout.removeWidget(self.docked_panel)
        self.column_layout.removeWidget(self.docked_panel)
        self.docked_panel.hide()
        self._docked_side = None

    def _place_docked_panel(self, side: DockSide):
        self._remove_docked_panel()
        logger.debug("Placing docked panel in the %s slot", side.value)
        if side is DockSide.LEFT:
            self.row_layout.insertWidget(0, self.docked_panel)
        elif side is DockSide.RIGHT:
            self.row_layout.addWidget(self.docked_panel)
        else:
            self.column_layout.insertWidget(0, self.docked_panel)
        self._docked_side = side

    def _sync_from_state(self, state: WindowState):
        if state.docked is None:
            self.docked_panel.hide()
            self.floating_panel.apply_state(state, self.manager.config)
            self.floating_panel.show()
            self.floating_panel.raise_()
        else:
            self.floating_panel.hide()
            self.docked_panel.apply_state(state)
            self.docked_panel.show()

    def set_panel_content(self, widget: QWidget):
        self._panel_content = widget
        self._on_dock_changed(self.manager.state.docked)

    # --- Host events ---

    def eventFilter(self, watched, event):
        if watched is self and event.type() == QEvent.Type.Resize:
            self.manager.handle_viewport_resize(Size.from_qsize(event.size()))
        return super().eventFilter(watched, event)

    def teardown(self):
        """Releases the pointer filter, the resize listener and the manager's subscriptions."""
        self._pointer_filter.remove()
        self.removeEventFilter(self)
        self.manager.teardown()

    def closeEvent(self, event):
        self.teardown()
        super().closeEvent(event)
