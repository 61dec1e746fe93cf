"""
Shared pytest fixtures for SnapPanel tests.
"""
import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from SnapPanel import (InMemoryPersistenceAdapter, PanelConfig, PanelSettings, ReferenceBounds,
                       Size, WindowManager)

VIEWPORT = Size(1600, 1000)
BOUNDS = ReferenceBounds(left=400, right=1200, top=120, bottom=950)


def floating_record(x, y, width, height, docked=None):
    return {
        "docked": docked,
        "position": {"x": x, "y": y},
        "size": {"width": width, "height": height},
    }


@pytest.fixture(scope='session')
def qt_app():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture
def config():
    return PanelConfig()


@pytest.fixture
def store():
    return InMemoryPersistenceAdapter()


@pytest.fixture
def make_manager(qt_app):
    """Factory for WindowManagers against the standard viewport and bounds."""
    created = []

    def _make(persistence=None, viewport=VIEWPORT, bounds=BOUNDS, settings=None, **kwargs):
        manager = WindowManager(
            persistence if persistence is not None else InMemoryPersistenceAdapter(),
            viewport,
            reference_bounds=bounds,
            settings=settings if settings is not None else PanelSettings(),
            **kwargs,
        )
        created.append(manager)
        return manager

    yield _make
    for manager in created:
        manager.teardown()
