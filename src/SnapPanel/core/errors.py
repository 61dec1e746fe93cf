"""
Exception types raised inside SnapPanel.

None of these ever reach the interaction loop: the window manager catches
them, logs them and falls back to defaults or to its in-memory state.
"""


class SnapPanelError(Exception):
    """Base class for all SnapPanel errors."""


class InvalidPersistedState(SnapPanelError, ValueError):
    """A persisted window record is missing fields, malformed, or out of range."""


class PersistenceWriteFailure(SnapPanelError):
    """The underlying store rejected a write."""
