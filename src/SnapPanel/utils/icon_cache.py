from functools import lru_cache

from PySide6.QtCore import QPoint, QRect, Qt
from PySide6.QtGui import QColor, QIcon, QPainter, QPen, QPixmap, QPolygon


class IconCache:
    """
    Centralized icon caching for the panel title bar buttons.
    Icons are painted once per (type, color, size) and reused.
    """

    CONTROL_ICONS = ("minimize", "expand", "dock", "undock", "close")

    @staticmethod
    @lru_cache(maxsize=50)
    def get_control_icon(icon_type: str, color_hex: str = "#303030", size: int = 24) -> QIcon:
        """
        Creates and caches a title bar control icon.

        Args:
            icon_type: One of "minimize", "expand", "dock", "undock", "close"
            color_hex: Hex color string for the icon
            size: Size of the icon in pixels

        Returns:
            QIcon: Cached or newly created icon
        """
        if icon_type not in IconCache.CONTROL_ICONS:
            raise ValueError(f"Unknown control icon '{icon_type}'")

        color = QColor(color_hex)
        pixmap = QPixmap(size, size)
        pixmap.fill(Qt.transparent)
        painter = QPainter(pixmap)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(QPen(color, 1.2))

        # Center the drawing in a 10x10 area inside the pixmap
        margin = (size - 10) // 2
        rect = QRect(margin, margin, 10, 10)

        if icon_type == "minimize":
            painter.drawLine(rect.left(), rect.center().y() + 1, rect.right(), rect.center().y() + 1)
        elif icon_type == "expand":
            painter.drawRect(rect)
        elif icon_type == "dock":
            # Frame with a filled right-hand strip
            painter.drawRect(rect)
            painter.fillRect(rect.adjusted(6, 0, 0, 0), color)
        elif icon_type == "undock":
            # Arrow leaving a frame towards the top right
            painter.drawRect(rect.adjusted(0, 3, -3, 0))
            painter.drawLine(rect.center(), rect.topRight())
            arrow = QPolygon([rect.topRight(), rect.topRight() + QPoint(-4, 0), rect.topRight() + QPoint(0, 4)])
            painter.drawPolyline(arrow)
        elif icon_type == "close":
            painter.drawLine(rect.topLeft(), rect.bottomRight())
            painter.drawLine(rect.topRight(), rect.bottomLeft())

        painter.end()
        return QIcon(pixmap)

    @staticmethod
    def clear_cache():
        IconCache.get_control_icon.cache_clear()

    @staticmethod
    def cache_info():
        return {'control_icons': IconCache.get_control_icon.cache_info()}
