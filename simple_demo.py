#!/usr/bin/env python3
"""Simple demo script showcasing a SnapPanel docked next to a document view."""

import logging
import sys

from PySide6.QtCore import QSettings, Qt
from PySide6.QtWidgets import (QApplication, QLabel, QListWidget, QSlider, QSpinBox,
                               QTextEdit, QVBoxLayout, QWidget)

# Add the src directory to the path so we can import SnapPanel
sys.path.insert(0, 'src')

from SnapPanel import PanelSettings, QSettingsPersistenceAdapter
from SnapPanel.widgets import PanelHost


def create_document_view():
    """Create the reference content region the panel docks against."""
    text_edit = QTextEdit()
    text_edit.setPlainText(
        "This is the document view.\n\n"
        "Drag the panel's title bar so its edge touches this view to dock it.\n"
        "Drag a docked panel by its title bar to float it again.\n\n"
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit."
    )
    return text_edit


def create_panel_content():
    """Create a widget with a few controls to show inside the panel."""
    widget = QWidget()
    layout = QVBoxLayout(widget)

    layout.addWidget(QLabel("Criteria"))
    list_widget = QListWidget()
    for item in ['Structure', 'Clarity', 'Evidence', 'Style']:
        list_widget.addItem(item)
    layout.addWidget(list_widget)

    layout.addWidget(QLabel("Weight:"))
    slider = QSlider(Qt.Horizontal)
    slider.setValue(50)
    layout.addWidget(slider)

    layout.addWidget(QLabel("Points:"))
    spinbox = QSpinBox()
    spinbox.setRange(0, 100)
    spinbox.setValue(42)
    layout.addWidget(spinbox)

    return widget


def main():
    logging.basicConfig(level=logging.DEBUG)
    app = QApplication(sys.argv)
    app.setOrganizationName("SnapPanel")
    app.setApplicationName("SnapPanel Demo")

    store = QSettings()
    settings = PanelSettings()
    settings.load_overrides(store)

    host = PanelHost(
        create_document_view(),
        panel_content=create_panel_content(),
        persistence=QSettingsPersistenceAdapter(store),
        settings=settings,
        title="SnapPanel Demo",
    )
    host.manager.signals.dock_changed.connect(
        lambda side: print(f"--- SIGNAL[dock_changed]: {side.value if side else 'floating'} ---")
    )
    host.manager.signals.close_requested.connect(host.close)
    host.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
