"""
Storage backends for the panel's window state.

The window manager only talks to the PersistenceAdapter interface, so the
store can be swapped for QSettings in an application and an in-memory fake in
tests. Records are kept as JSON text in both cases.
"""

import json
from abc import ABC, abstractmethod
from typing import Optional

from PySide6.QtCore import QSettings

from ..core.errors import InvalidPersistedState, PersistenceWriteFailure
from ..core.window_state import WindowState
from .state_serializer import StateSerializer

DEFAULT_STATE_KEY = "snap_panel/window_state"


def _decode(text) -> Optional[WindowState]:
    if text is None or text == "":
        return None
    try:
        record = json.loads(text)
    except (TypeError, ValueError) as e:
        raise InvalidPersistedState(f"Stored window state is not valid JSON: {e}") from e
    return StateSerializer.from_record(record)


class PersistenceAdapter(ABC):
    """Loads and saves the last known window state."""

    @abstractmethod
    def load(self) -> Optional[WindowState]:
        """
        Returns the stored state, or None if nothing was stored.

        Raises:
            InvalidPersistedState: a record exists but cannot be used.
        """

    @abstractmethod
    def save(self, state: WindowState) -> None:
        """
        Overwrites the stored state.

        Raises:
            PersistenceWriteFailure: the store rejected the write.
        """


class InMemoryPersistenceAdapter(PersistenceAdapter):
    """Keeps the record in a Python attribute. Useful for tests and previews."""

    def __init__(self, text: Optional[str] = None):
        self.text = text
        self.save_count = 0

    @classmethod
    def with_record(cls, record) -> "InMemoryPersistenceAdapter":
        return cls(json.dumps(record))

    @property
    def record(self):
        return json.loads(self.text) if self.text else None

    def load(self) -> Optional[WindowState]:
        return _decode(self.text)

    def save(self, state: WindowState) -> None:
        self.text = json.dumps(StateSerializer.to_record(state))
        self.save_count += 1


class QSettingsPersistenceAdapter(PersistenceAdapter):
    """Stores the record as a JSON string under one QSettings key."""

    def __init__(self, settings: Optional[QSettings] = None, key: str = DEFAULT_STATE_KEY):
        self.settings = settings if settings is not None else QSettings()
        self.key = key

    def load(self) -> Optional[WindowState]:
        return _decode(self.settings.value(self.key))

    def save(self, state: WindowState) -> None:
        self.settings.setValue(self.key, json.dumps(StateSerializer.to_record(state)))
        self.settings.sync()
        status = self.settings.status()
        if status != QSettings.Status.NoError:
            raise PersistenceWriteFailure(f"QSettings write to {self.key!r} failed: {status.name}")

    def clear(self):
        self.settings.remove(self.key)
