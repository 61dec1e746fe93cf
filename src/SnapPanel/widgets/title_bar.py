# title_bar.py

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QBrush, QColor, QPainter, QPainterPath
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

from ..utils.icon_cache import IconCache


class TitleBar(QWidget):
    """
    Title bar shared by the floating and the docked panel.

    Pressing on the bar (outside the buttons) asks the host to start a drag
    session; the host then owns the pointer until release.
    """

    def __init__(self, title, panel, host, docked=False, parent=None):
        super().__init__(parent if parent is not None else panel)
        self._panel = panel
        self._host = host
        self._docked = docked
        self.setObjectName(f"TitleBar_{title.replace(' ', '_')}")
        self.setAutoFillBackground(False)
        self.setFixedHeight(35)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 0, 4, 0)
        layout.setSpacing(4)

        self.title_label = QLabel(title)
        self.title_label.setStyleSheet("background: transparent; color: #101010;")
        self.title_label.setAttribute(Qt.WA_TransparentForMouseEvents)
        layout.addWidget(self.title_label, 1)

        button_style = """
            QPushButton { background-color: transparent; border: none; }
            QPushButton:hover { background-color: #D0D0D0; border-radius: 4px; }
            QPushButton:pressed { background-color: #B8B8B8; }
        """

        manager = host.manager

        self.minimize_button = self._make_button("minimize", button_style)
        self.minimize_button.clicked.connect(manager.toggle_minimize)
        layout.addWidget(self.minimize_button)

        # Docked panels offer "undock", floating panels offer "dock to side".
        self.dock_button = self._make_button("undock" if docked else "dock", button_style)
        if docked:
            self.dock_button.setToolTip("Undock")
            self.dock_button.clicked.connect(manager.undock)
        else:
            self.dock_button.setToolTip("Dock to Side")
            self.dock_button.clicked.connect(lambda: manager.dock())
        layout.addWidget(self.dock_button)

        self.close_button = self._make_button("close", button_style)
        self.close_button.clicked.connect(manager.close)
        layout.addWidget(self.close_button)

    def _make_button(self, icon_type, style):
        button = QPushButton()
        button.setIcon(IconCache.get_control_icon(icon_type, "#303030", 24))
        button.setFixedSize(24, 24)
        button.setStyleSheet(style)
        return button

    def set_minimized(self, minimized: bool):
        self.minimize_button.setIcon(IconCache.get_control_icon("expand" if minimized else "minimize"))
        self.minimize_button.setToolTip("Expand" if minimized else "Collapse")

    def paintEvent(self, event):
        """Paint the title bar background with rounded top corners to match the panel."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        bg_color = getattr(self._panel, '_title_bar_color', QColor("#C0D3E8"))

        rect = QRectF(self.rect())
        radius = 0.0 if self._docked else 8.0
        path = QPainterPath()
        path.moveTo(rect.left(), rect.bottom())
        path.lineTo(rect.left(), rect.top() + radius)
        path.arcTo(rect.left(), rect.top(), radius * 2, radius * 2, 180, -90)
        path.lineTo(rect.right() - radius, rect.top())
        path.arcTo(rect.right() - radius * 2, rect.top(), radius * 2, radius * 2, 90, -90)
        path.lineTo(rect.right(), rect.bottom())
        path.closeSubpath()

        painter.fillPath(path, QBrush(bg_color))
        super().paintEvent(event)

    def _on_button(self, pos):
        return any(button.geometry().contains(pos)
                   for button in (self.minimize_button, self.dock_button, self.close_button))

    def mousePressEvent(self, event):
        # Do not start a drag when clicking on any of the control buttons.
        if event.button() != Qt.LeftButton or self._on_button(event.position().toPoint()):
            super().mousePressEvent(event)
            return

        # Panels resize from their outer margin; a press there is not a drag.
        panel_pos = self.mapTo(self._panel, event.position().toPoint())
        if self._panel.resize_edges_at(panel_pos):
            event.ignore()
            return

        if self._host.start_drag(event.globalPosition().toPoint(), self._panel):
            event.accept()
        else:
            super().mousePressEvent(event)
