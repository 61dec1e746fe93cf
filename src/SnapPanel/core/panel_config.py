from dataclasses import dataclass, fields, replace
from typing import Optional

from PySide6.QtCore import QObject, QSettings, Signal

from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PanelConfig:
    """All tunable constants of the panel geometry, in pixels unless noted."""
    # Drag-time snapping
    dock_threshold: int = 50
    overlap_tolerance: int = 50

    # Off-screen classification
    edge_margin: int = 50

    # Host-resize auto-dock. Tighter than dock_threshold.
    auto_dock_margin: int = 10

    # Floating size limits
    min_width: int = 300
    min_height: int = 200
    max_width_margin: int = 100
    minimized_width_fallback: int = 100

    # Fixed host bands outside the reference region
    header_height: int = 120
    footer_height: int = 50

    # Docked extent limits, as a share of the viewport
    docked_max_width_ratio: float = 0.5
    docked_max_height_ratio: float = 0.6

    # Construction defaults
    default_width: int = 600
    default_height: int = 600
    default_right_offset: int = 650
    default_min_x: int = 50
    default_y: int = 100

    # Widget hit testing
    resize_margin: int = 8

    @property
    def reserved_vertical_margin(self) -> int:
        return self.header_height + self.footer_height


class PanelSettings(QObject):
    """
    Owns the current PanelConfig and publishes every change.

    Subscribers connect to ``settings_changed`` instead of re-reading the
    config on a timer.
    """

    settings_changed = Signal(object)  # PanelConfig

    SETTINGS_GROUP = "snap_panel/config"

    def __init__(self, config: Optional[PanelConfig] = None, parent=None):
        super().__init__(parent)
        self._config = config or PanelConfig()

    @property
    def config(self) -> PanelConfig:
        return self._config

    def update(self, **changes) -> PanelConfig:
        """
        Replaces the given fields and notifies subscribers if anything changed.
        Unknown field names raise TypeError.
        """
        new_config = replace(self._config, **changes)
        if new_config != self._config:
            self._config = new_config
            logger.debug("Panel config updated: %s", changes)
            self.settings_changed.emit(new_config)
        return self._config

    def load_overrides(self, settings: QSettings) -> PanelConfig:
        """
        Reads per-field overrides from a QSettings group. Values that cannot be
        converted to the field's type are skipped.
        """
        changes = {}
        settings.beginGroup(self.SETTINGS_GROUP)
        try:
            for f in fields(PanelConfig):
                if not settings.contains(f.name):
                    continue
                raw = settings.value(f.name)
                try:
                    changes[f.name] = type(getattr(self._config, f.name))(raw)
                except (TypeError, ValueError):
                    logger.warning("Ignoring invalid panel setting %s=%r", f.name, raw)
        finally:
            settings.endGroup()
        return self.update(**changes) if changes else self._config
