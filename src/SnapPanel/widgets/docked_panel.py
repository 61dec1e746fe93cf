from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QVBoxLayout, QWidget

from ..core.docking_state import DockSide
from ..core.window_state import WindowState
from ..interaction.resize_session import Edge, edge_at, free_edge
from .floating_panel import PanelBody, cursor_for_edges
from .title_bar import TitleBar

QWIDGETSIZE_MAX = 16777215


class DockedPanel(QWidget):
    """
    The panel while it sits in one of the host's dock slots. The host layout
    decides its geometry; only the extent facing the content (width for side
    docks, height for a top dock) comes from the WindowState.
    """

    def __init__(self, host, title, parent=None):
        super().__init__(parent)
        self.setObjectName("DockedPanel")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setStyleSheet("""
            QWidget#DockedPanel {
                background-color: #F0F0F0;
                border: 1px solid #6A8EAE;
            }
        """)
        self._host = host
        self._title_bar_color = QColor("#C0D3E8")
        self.side = None
        self.resize_margin = host.manager.config.resize_margin

        self.main_layout = QVBoxLayout(self)
        self.main_layout.setContentsMargins(1, 1, 1, 1)
        self.main_layout.setSpacing(0)

        self.title_bar = TitleBar(title, self, host, docked=True)
        self.main_layout.addWidget(self.title_bar, 0)

        self.body = PanelBody(self)
        self.main_layout.addWidget(self.body, 1)

        self.setMouseTracking(True)

    def resize_edges_at(self, pos) -> Edge:
        if self.side is None:
            return Edge.NONE
        edges = edge_at(pos.x(), pos.y(), self.width(), self.height(), self.resize_margin)
        return edges & free_edge(self.side)

    def apply_state(self, state: WindowState):
        self.side = state.docked
        self.title_bar.set_minimized(state.minimized)
        if state.docked in (DockSide.LEFT, DockSide.RIGHT):
            self.setMinimumHeight(0)
            self.setMaximumHeight(QWIDGETSIZE_MAX)
            self.setFixedWidth(round(state.size.width))
        elif state.docked is DockSide.TOP:
            self.setMinimumWidth(0)
            self.setMaximumWidth(QWIDGETSIZE_MAX)
            self.setFixedHeight(round(state.size.height))

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            edges = self.resize_edges_at(event.position().toPoint())
            if edges and self._host.start_resize(event.globalPosition().toPoint(), edges):
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        cursor = cursor_for_edges(self.resize_edges_at(event.position().toPoint()))
        if cursor is None:
            self.unsetCursor()
        else:
            self.setCursor(cursor)
        super().mouseMoveEvent(event)
