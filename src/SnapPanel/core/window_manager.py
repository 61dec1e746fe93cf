from typing import Callable, Optional, Union

from PySide6.QtCore import QObject, Signal

from ..interaction.dock_detector import anchored_position, detect_dock_side, detect_edge_contact
from ..interaction.drag_session import DragSession
from ..interaction.position_validator import clamp_position, validate_position
from ..interaction.resize_session import Edge, ResizeSession
from ..model.persistence import PersistenceAdapter
from ..utils.logger import get_logger
from .docking_state import DockingState, DockSide
from .errors import InvalidPersistedState, PersistenceWriteFailure
from .geometry import Point, Rect, ReferenceBounds, Size
from .panel_config import PanelConfig, PanelSettings
from .window_state import WindowState

logger = get_logger(__name__)

BoundsSource = Union[ReferenceBounds, Callable[[], Optional[ReferenceBounds]], None]


class PanelSignals(QObject):
    """
    Signals the host application can connect to.
    """
    # Emitted whenever the dock side changes. Args: DockSide or None
    dock_changed = Signal(object)

    # Emitted after every change to the window state. Args: WindowState
    state_changed = Signal(object)

    # Emitted when the minimized flag flips. Args: bool
    minimized_changed = Signal(bool)

    # Emitted when the user asks to close the panel.
    close_requested = Signal()


class WindowManager(QObject):
    """
    Owns the canonical WindowState of one overlay panel.

    All drag, resize, dock and minimize transitions go through this object.
    Widgets feed it pointer positions in host coordinates and redraw from
    ``state`` whenever ``signals.state_changed`` fires.
    """

    def __init__(self, persistence: PersistenceAdapter, viewport: Size,
                 reference_bounds: BoundsSource = None,
                 settings: Optional[PanelSettings] = None,
                 on_dock_change: Optional[Callable] = None,
                 on_close: Optional[Callable] = None,
                 parent=None):
        super().__init__(parent)
        self.persistence = persistence
        self.settings = settings if settings is not None else PanelSettings()
        self.signals = PanelSignals()

        self._viewport = viewport
        self._reference_bounds = reference_bounds
        self._drag_session: Optional[DragSession] = None
        self._resize_session: Optional[ResizeSession] = None
        self._interaction_state = DockingState.IDLE
        self._revalidate_after_session = False

        self._state = self._load_initial_state()

        self.settings.settings_changed.connect(self._on_settings_changed)
        if on_dock_change is not None:
            self.signals.dock_changed.connect(on_dock_change)
        if on_close is not None:
            self.signals.close_requested.connect(on_close)

    # --- Read-only views ---

    @property
    def state(self) -> WindowState:
        return self._state

    @property
    def config(self) -> PanelConfig:
        return self.settings.config

    @property
    def viewport(self) -> Size:
        return self._viewport

    @property
    def interaction_state(self) -> DockingState:
        return self._interaction_state

    @property
    def drag_session(self) -> Optional[DragSession]:
        return self._drag_session

    @property
    def resize_session(self) -> Optional[ResizeSession]:
        return self._resize_session

    def reference_bounds(self) -> ReferenceBounds:
        """
        The rectangle the panel docks against. Falls back to the viewport minus
        the header and footer bands when the host supplies nothing.
        """
        source = self._reference_bounds
        bounds = source() if callable(source) else source
        if bounds is None:
            cfg = self.config
            bounds = ReferenceBounds.viewport_fallback(self._viewport, cfg.header_height, cfg.footer_height)
        return bounds

    def set_reference_bounds(self, reference_bounds: BoundsSource):
        self._reference_bounds = reference_bounds

    # --- Construction ---

    def _default_position(self) -> Point:
        cfg = self.config
        return Point(max(cfg.default_min_x, self._viewport.width - cfg.default_right_offset), cfg.default_y)

    def _floor_size(self, size: Size) -> Size:
        cfg = self.config
        return Size(max(size.width, cfg.min_width), max(size.height, cfg.min_height))

    def _load_initial_state(self) -> WindowState:
        cfg = self.config
        default = WindowState(
            docked=None,
            position=self._default_position(),
            size=Size(cfg.default_width, cfg.default_height),
        )

        try:
            saved = self.persistence.load()
        except InvalidPersistedState as e:
            logger.warning("Ignoring invalid persisted window state: %s", e)
            return default

        if saved is None:
            return default

        size = self._floor_size(saved.size)
        position = validate_position(saved.position, size, self._viewport,
                                     cfg.reserved_vertical_margin, cfg.edge_margin)
        if position is None:
            logger.info("Persisted panel position %s is off-screen, docking right", saved.position)
            return WindowState(docked=DockSide.RIGHT, position=self._default_position(), size=size)

        return WindowState(docked=saved.docked, position=position, size=size)

    # --- Commit / persistence ---

    def _commit(self, new_state: WindowState, persist: bool = True) -> bool:
        old_state = self._state
        if new_state == old_state:
            return False

        self._state = new_state
        if persist:
            self._persist()

        if new_state.docked != old_state.docked:
            logger.debug("Dock side changed: %s -> %s", old_state.docked, new_state.docked)
            self.signals.dock_changed.emit(new_state.docked)
        if new_state.minimized != old_state.minimized:
            self.signals.minimized_changed.emit(new_state.minimized)
        self.signals.state_changed.emit(new_state)
        return True

    def _persist(self):
        try:
            self.persistence.save(self._state)
        except (PersistenceWriteFailure, OSError) as e:
            # In-memory state stays authoritative until the next successful write.
            logger.warning("Could not persist panel state: %s", e)

    def _docked_state(self, side: DockSide, **changes) -> WindowState:
        # A docked panel is always shown expanded.
        return self._state.with_changes(docked=side, minimized=False, **changes)

    def _fit_position(self, candidate: Point, state: WindowState) -> Point:
        """Keeps a floating panel reachable. Off-screen candidates are clamped."""
        cfg = self.config
        if state.minimized:
            # The collapsed width is intrinsic, so only a fixed strip is kept visible.
            return clamp_position(candidate, cfg.minimized_width_fallback, self._viewport,
                                  cfg.reserved_vertical_margin)
        position = validate_position(candidate, state.size, self._viewport,
                                     cfg.reserved_vertical_margin, cfg.edge_margin)
        if position is None:
            position = clamp_position(candidate, state.size.width, self._viewport,
                                      cfg.reserved_vertical_margin)
        return position

    # --- Sessions ---

    def _set_state(self, interaction_state: DockingState):
        self._interaction_state = interaction_state

    def _end_session(self):
        self._drag_session = None
        self._resize_session = None
        self._set_state(DockingState.IDLE)
        if self._revalidate_after_session:
            self._revalidate_after_session = False
            self._revalidate()

    def begin_drag(self, pointer: Point, panel_top_left: Optional[Point] = None) -> bool:
        """
        Starts a title bar drag. A docked panel is undocked immediately, before
        any move is processed, and keeps the on-screen position it had.

        Returns False if another session is already active.
        """
        if self._interaction_state is not DockingState.IDLE:
            return False

        top_left = panel_top_left if panel_top_left is not None else self._state.position
        self._drag_session = DragSession.start(pointer, top_left)
        self._set_state(DockingState.DRAGGING_WINDOW)

        if self._state.docked is not None:
            logger.debug("Undocking %s panel on title bar grab", self._state.docked.value)
            floating = self._state.with_changes(docked=None)
            self._commit(floating.with_changes(position=self._fit_position(top_left, floating)))
        return True

    def drag_move(self, pointer: Point) -> WindowState:
        """
        Moves the panel under the pointer. If the candidate rectangle snaps to
        the reference bounds the panel docks and the drag ends.
        """
        if self._drag_session is None:
            return self._state

        candidate = self._drag_session.candidate_position(pointer)
        cfg = self.config
        bounds = self.reference_bounds()
        side = detect_dock_side(Rect.from_parts(candidate, self._state.size), bounds,
                                cfg.dock_threshold, cfg.overlap_tolerance)
        if side is not None:
            logger.debug("Panel snapped to %s edge", side.value)
            self._commit(self._docked_state(side, position=anchored_position(side, bounds, self._state.size)))
            self._end_session()
            return self._state

        self._commit(self._state.with_changes(position=self._fit_position(candidate, self._state)),
                     persist=False)
        return self._state

    def end_drag(self):
        if self._drag_session is None:
            return
        self._end_session()
        self._persist()

    def begin_resize(self, pointer: Point, edges: Edge, start_rect: Optional[Rect] = None) -> bool:
        """
        Starts a resize from the given edge set. A docked panel can only be
        resized from the edge facing the content. Minimized panels cannot be
        resized.

        Returns False when the request is ignored.
        """
        if self._interaction_state is not DockingState.IDLE or self._state.minimized:
            return False

        rect = start_rect if start_rect is not None else self._state.rect
        try:
            self._resize_session = ResizeSession.start(pointer, rect, edges, self._state.docked)
        except ValueError as e:
            logger.debug("Ignoring resize request: %s", e)
            return False
        self._set_state(DockingState.RESIZING_WINDOW)
        return True

    def resize_move(self, pointer: Point) -> WindowState:
        session = self._resize_session
        if session is None:
            return self._state

        if session.docked is not None:
            size = session.resized_docked_size(pointer, self._viewport, self.config)
            self._commit(self._state.with_changes(size=size), persist=False)
        else:
            rect = session.resized_rect(pointer, self._viewport, self.config)
            self._commit(self._state.with_changes(position=rect.position, size=rect.size), persist=False)
        return self._state

    def end_resize(self):
        if self._resize_session is None:
            return
        self._end_session()
        self._persist()

    def end_interaction(self):
        """Pointer release: ends whichever session is active."""
        if self._drag_session is not None:
            self.end_drag()
        elif self._resize_session is not None:
            self.end_resize()

    # --- Discrete transitions ---

    def dock(self, side: DockSide = DockSide.RIGHT):
        """Docks the panel, expanding it first if it was minimized."""
        logger.debug("Docking panel to %s", side.value)
        self._commit(self._docked_state(side))

    def undock(self):
        if self._state.docked is None:
            return
        floating = self._state.with_changes(docked=None)
        position = validate_position(floating.position, floating.size, self._viewport,
                                     self.config.reserved_vertical_margin, self.config.edge_margin)
        self._commit(floating.with_changes(position=position or self._default_position()))

    def toggle_minimize(self):
        """
        Flips the minimized flag. Minimizing a docked panel also undocks it so
        the content region gets its space back.
        """
        state = self._state.with_changes(minimized=not self._state.minimized)
        if state.minimized and state.docked is not None:
            state = state.with_changes(docked=None)
            state = state.with_changes(position=self._fit_position(state.position, state))
        self._commit(state)

    def close(self):
        self.signals.close_requested.emit()

    # --- Host events ---

    def handle_viewport_resize(self, viewport: Size):
        """
        Records the new host viewport and re-checks a floating panel: one that
        now touches a viewport edge is docked there, one that is off-screen is
        docked right, and anything else is clamped back into view.
        """
        if viewport == self._viewport:
            return
        self._viewport = viewport
        if self._interaction_state is not DockingState.IDLE:
            self._revalidate_after_session = True
            return
        self._revalidate()

    def _revalidate(self):
        state = self._state
        if state.docked is not None:
            return

        cfg = self.config
        side = detect_edge_contact(state.rect, self._viewport, cfg.auto_dock_margin,
                                   cfg.header_height, cfg.footer_height)
        if side is not None:
            logger.info("Panel at viewport edge after resize, docking %s", side.value)
            self._commit(self._docked_state(side))
            return

        position = validate_position(state.position, state.size, self._viewport,
                                     cfg.reserved_vertical_margin, cfg.edge_margin)
        if position is None:
            logger.info("Panel off-screen after resize, docking right")
            self._commit(self._docked_state(DockSide.RIGHT))
        elif position != state.position:
            logger.info("Moving panel back on screen: %s -> %s", state.position, position)
            self._commit(state.with_changes(position=position))

    def _on_settings_changed(self, config: PanelConfig):
        logger.debug("Re-validating panel against new settings")
        size = self._floor_size(self._state.size)
        if size != self._state.size:
            self._commit(self._state.with_changes(size=size))
        if self._interaction_state is DockingState.IDLE:
            self._revalidate()
        else:
            self._revalidate_after_session = True

    def teardown(self):
        """Ends any session and stops listening to settings changes."""
        self._revalidate_after_session = False
        self._end_session()
        try:
            self.settings.settings_changed.disconnect(self._on_settings_changed)
        except (RuntimeError, TypeError):
            # Already disconnected.
            pass
