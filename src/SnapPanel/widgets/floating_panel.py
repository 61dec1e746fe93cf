from PySide6.QtCore import QRect, QSize, Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QVBoxLayout, QWidget

from ..core.window_state import WindowState
from ..core.panel_config import PanelConfig
from ..interaction.resize_session import Edge, edge_at
from .title_bar import TitleBar


def cursor_for_edges(edges: Edge):
    """Maps an edge set to the matching resize cursor, or None for no resize."""
    if edges in (Edge.TOP_LEFT, Edge.BOTTOM_RIGHT):
        return Qt.SizeFDiagCursor
    if edges in (Edge.TOP_RIGHT, Edge.BOTTOM_LEFT):
        return Qt.SizeBDiagCursor
    if edges in (Edge.LEFT, Edge.RIGHT):
        return Qt.SizeHorCursor
    if edges in (Edge.TOP, Edge.BOTTOM):
        return Qt.SizeVerCursor
    return None


class PanelBody(QWidget):
    """Holds the host-supplied content. The content itself is never inspected."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("PanelBody")
        self.content_layout = QVBoxLayout(self)
        self.content_layout.setContentsMargins(8, 8, 8, 8)
        self.content_layout.setSpacing(0)
        self.content = None

    def set_content(self, widget):
        if widget is self.content:
            return
        self.take_content()
        if widget is not None:
            self.content_layout.addWidget(widget)
            widget.show()
        self.content = widget

    def take_content(self):
        widget = self.content
        if widget is not None:
            self.content_layout.removeWidget(widget)
            widget.setParent(None)
        self.content = None
        return widget


class FloatingPanel(QWidget):
    """
    The panel while it floats over the host. Position and size always come
    from the manager's WindowState; mouse presses on the outer margin start a
    resize session through the host.
    """

    def __init__(self, host, title, parent=None):
        super().__init__(parent if parent is not None else host)
        self.setObjectName("FloatingPanel")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setStyleSheet("""
            QWidget#FloatingPanel {
                background-color: #F0F0F0;
                border: 1px solid #6A8EAE;
                border-radius: 8px;
            }
        """)
        self._host = host
        self._title_bar_color = QColor("#C0D3E8")
        self._minimized = False
        self.resize_margin = host.manager.config.resize_margin

        self.main_layout = QVBoxLayout(self)
        self.main_layout.setContentsMargins(1, 1, 1, 1)
        self.main_layout.setSpacing(0)

        self.title_bar = TitleBar(title, self, host, docked=False)
        self.main_layout.addWidget(self.title_bar, 0)

        self.body = PanelBody(self)
        self.main_layout.addWidget(self.body, 1)

        self.setMouseTracking(True)
        self.title_bar.setMouseTracking(True)

    def resize_edges_at(self, pos) -> Edge:
        if self._minimized:
            return Edge.NONE
        return edge_at(pos.x(), pos.y(), self.width(), self.height(), self.resize_margin)

    def apply_state(self, state: WindowState, config: PanelConfig):
        self._minimized = state.minimized
        self.resize_margin = config.resize_margin
        self.title_bar.set_minimized(state.minimized)
        self.body.setVisible(not state.minimized)

        if state.minimized:
            # Collapsed to the title bar; the width is intrinsic.
            width = max(self.title_bar.sizeHint().width(), config.minimized_width_fallback)
            margins = self.main_layout.contentsMargins()
            height = self.title_bar.height() + margins.top() + margins.bottom()
            self.setGeometry(QRect(state.position.to_qpoint(), QSize(width, height)))
        else:
            self.setGeometry(state.rect.to_qrect())

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            edges = self.resize_edges_at(event.position().toPoint())
            if edges and self._host.start_resize(event.globalPosition().toPoint(), edges):
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        # Hover feedback only; active sessions are routed by the host.
        cursor = cursor_for_edges(self.resize_edges_at(event.position().toPoint()))
        if cursor is None:
            self.unsetCursor()
        else:
            self.setCursor(cursor)
        super().mouseMoveEvent(event)
