import logging

import pytest

from SnapPanel import (DockingState, DockSide, Edge, InMemoryPersistenceAdapter, PanelConfig, PanelSettings,
                       PersistenceWriteFailure, Point, ReferenceBounds, Size)

from conftest import VIEWPORT, floating_record


class FailingStore(InMemoryPersistenceAdapter):
    def save(self, state):
        raise PersistenceWriteFailure("disk full")


def store_with(x, y, width, height, docked=None):
    return InMemoryPersistenceAdapter.with_record(floating_record(x, y, width, height, docked))


class TestInitialState:

    def test_defaults_without_saved_state(self, make_manager):
        state = make_manager().state
        assert state.is_floating
        assert state.position == Point(950, 100)
        assert state.size == Size(600, 600)
        assert not state.minimized

    def test_default_x_never_below_fifty(self, make_manager):
        assert make_manager(viewport=Size(600, 800)).state.position == Point(50, 100)

    def test_off_screen_saved_state_loads_docked_right(self, make_manager):
        state = make_manager(store_with(-9999, 100, 600, 600)).state
        assert state.docked is DockSide.RIGHT
        assert state.position == Point(950, 100)

    def test_saved_dock_side_is_restored(self, make_manager):
        state = make_manager(store_with(40, 60, 500, 700, docked="left")).state
        assert state.docked is DockSide.LEFT
        assert state.size == Size(500, 700)

    def test_saved_position_is_clamped(self, make_manager):
        assert make_manager(store_with(1200, 100, 600, 600)).state.position == Point(1000, 100)

    def test_corrupt_saved_state_falls_back_to_defaults(self, make_manager):
        state = make_manager(InMemoryPersistenceAdapter("{not json")).state
        assert state.position == Point(950, 100)
        assert state.is_floating

    def test_saved_size_is_floored_to_minimum(self, make_manager):
        assert make_manager(store_with(100, 100, 100, 50)).state.size == Size(300, 200)

    def test_minimized_is_never_restored(self, make_manager):
        store = InMemoryPersistenceAdapter.with_record(dict(floating_record(100, 100, 600, 600), minimized=True))
        assert not make_manager(store).state.minimized


class TestDrag:

    def test_drag_to_left_of_content_docks_left(self, make_manager, store):
        manager = make_manager(store)
        sides = []
        manager.signals.dock_changed.connect(sides.append)

        assert manager.begin_drag(Point(1000, 120))
        manager.drag_move(Point(-130, 220))

        assert manager.state.docked is DockSide.LEFT
        assert manager.state.position == Point(400, 120)
        assert sides == [DockSide.LEFT]
        assert manager.drag_session is None
        assert manager.interaction_state is DockingState.IDLE
        assert store.record["docked"] == "left"

    def test_drag_far_right_of_content_stays_floating(self, make_manager):
        manager = make_manager()
        manager.begin_drag(Point(1000, 120))
        manager.drag_move(Point(1450, 220))
        assert manager.state.is_floating
        assert manager.state.position == Point(1000, 200)

    def test_live_moves_persist_on_release(self, make_manager, store):
        manager = make_manager(store)
        manager.begin_drag(Point(1000, 120))
        manager.drag_move(Point(600, 420))
        assert manager.state.position == Point(550, 400)
        assert store.save_count == 0

        manager.end_drag()
        assert store.save_count == 1
        assert store.record["position"] == {"x": 550, "y": 400}

    def test_grabbing_a_docked_panel_undocks_immediately(self, make_manager):
        manager = make_manager(store_with(600, 120, 600, 600, docked="right"))
        sides = []
        manager.signals.dock_changed.connect(sides.append)

        manager.begin_drag(Point(1230, 140), panel_top_left=Point(1200, 120))
        assert manager.state.is_floating
        assert manager.state.position == Point(1000, 120)
        assert sides == [None]

        manager.drag_move(Point(900, 400))
        assert manager.state.is_floating
        assert manager.state.position == Point(870, 380)

    def test_minimized_drag_clamps_with_fallback_width(self, make_manager):
        manager = make_manager()
        manager.toggle_minimize()

        manager.begin_drag(Point(1000, 120))
        manager.drag_move(Point(1700, 420))
        assert manager.state.minimized
        assert manager.state.position == Point(1500, 400)

    def test_snap_during_minimized_drag_expands(self, make_manager):
        manager = make_manager()
        manager.toggle_minimize()
        flags = []
        manager.signals.minimized_changed.connect(flags.append)

        manager.begin_drag(Point(1000, 120))
        manager.drag_move(Point(-130, 220))
        assert manager.state.docked is DockSide.LEFT
        assert not manager.state.minimized
        assert flags == [False]

    def test_moves_without_a_session_are_ignored(self, make_manager):
        manager = make_manager()
        before = manager.state
        assert manager.drag_move(Point(0, 0)) == before
        assert manager.resize_move(Point(0, 0)) == before


class TestResize:

    def test_left_edge_resize_keeps_right_edge(self, make_manager):
        manager = make_manager()
        assert manager.begin_resize(Point(950, 400), Edge.LEFT)
        assert manager.interaction_state is DockingState.RESIZING_WINDOW
        manager.resize_move(Point(850, 400))
        assert manager.state.size.width == 700
        assert manager.state.position.x == 850
        assert manager.state.rect.right == 1550

    def test_resize_persists_on_release(self, make_manager, store):
        manager = make_manager(store)
        manager.begin_resize(Point(1550, 700), Edge.BOTTOM_RIGHT)
        manager.resize_move(Point(1450, 600))
        assert store.save_count == 0
        manager.end_interaction()
        assert store.save_count == 1
        assert store.record["size"] == {"width": 500, "height": 500}

    def test_docked_resize_changes_width_only(self, make_manager):
        manager = make_manager(store_with(600, 120, 400, 600, docked="right"))
        assert manager.begin_resize(Point(1200, 500), Edge.LEFT)
        manager.resize_move(Point(1100, 500))
        assert manager.state.size == Size(500, 600)
        assert manager.state.docked is DockSide.RIGHT

    def test_docked_panel_rejects_wall_edge(self, make_manager):
        manager = make_manager(store_with(600, 120, 400, 600, docked="right"))
        assert not manager.begin_resize(Point(1600, 500), Edge.RIGHT)
        assert manager.interaction_state is DockingState.IDLE

    def test_minimized_panel_cannot_resize(self, make_manager):
        manager = make_manager()
        manager.toggle_minimize()
        assert not manager.begin_resize(Point(950, 400), Edge.LEFT)


class TestSessionExclusivity:

    def test_cannot_drag_while_resizing(self, make_manager):
        manager = make_manager()
        manager.begin_resize(Point(950, 400), Edge.LEFT)
        assert not manager.begin_drag(Point(1000, 120))
        assert manager.drag_session is None

    def test_cannot_resize_while_dragging(self, make_manager):
        manager = make_manager()
        manager.begin_drag(Point(1000, 120))
        assert not manager.begin_resize(Point(950, 400), Edge.LEFT)
        assert manager.resize_session is None


class TestDiscreteTransitions:

    def test_minimizing_a_docked_panel_floats_it(self, make_manager):
        manager = make_manager(store_with(600, 120, 600, 600, docked="right"))
        flags = []
        manager.signals.minimized_changed.connect(flags.append)

        manager.toggle_minimize()
        assert manager.state.is_floating
        assert manager.state.minimized
        assert flags == [True]

    def test_minimize_round_trip_keeps_floating(self, make_manager):
        manager = make_manager()
        manager.toggle_minimize()
        manager.toggle_minimize()
        assert manager.state.is_floating
        assert not manager.state.minimized
        assert manager.state.size == Size(600, 600)

    def test_docking_expands_a_minimized_panel(self, make_manager):
        manager = make_manager()
        manager.toggle_minimize()
        manager.dock()
        assert manager.state.docked is DockSide.RIGHT
        assert not manager.state.minimized

    def test_undock_returns_to_a_valid_position(self, make_manager):
        manager = make_manager(store_with(-9999, 100, 600, 600))
        assert manager.state.docked is DockSide.RIGHT
        manager.undock()
        assert manager.state.is_floating
        assert manager.state.position == Point(950, 100)

    def test_discrete_transitions_persist_immediately(self, make_manager, store):
        manager = make_manager(store)
        manager.dock(DockSide.TOP)
        assert store.record["docked"] == "top"

    def test_close_invokes_callback(self, make_manager):
        closed = []
        manager = make_manager(on_close=lambda: closed.append(True))
        manager.close()
        assert closed == [True]

    def test_dock_change_callback(self, make_manager):
        sides = []
        manager = make_manager(on_dock_change=sides.append)
        manager.dock(DockSide.LEFT)
        manager.undock()
        assert sides == [DockSide.LEFT, None]


class TestViewportResize:

    def test_shrinking_onto_the_panel_docks_right(self, make_manager):
        manager = make_manager(store_with(500, 300, 600, 400))
        manager.handle_viewport_resize(Size(1105, 1000))
        assert manager.state.docked is DockSide.RIGHT
        assert manager.viewport == Size(1105, 1000)

    def test_panel_in_header_band_docks_top(self, make_manager):
        manager = make_manager(store_with(500, 125, 600, 400))
        manager.handle_viewport_resize(Size(1500, 1000))
        assert manager.state.docked is DockSide.TOP

    def test_panel_reaching_footer_band_docks_right(self, make_manager):
        manager = make_manager(store_with(500, 300, 600, 600))
        manager.handle_viewport_resize(Size(1500, 950))
        assert manager.state.docked is DockSide.RIGHT

    def test_off_screen_after_resize_docks_right(self, make_manager):
        settings = PanelSettings(PanelConfig(edge_margin=400))
        manager = make_manager(store_with(1100, 300, 300, 300), settings=settings)
        assert manager.state.position == Point(1100, 300)

        manager.handle_viewport_resize(Size(1450, 1000))
        assert manager.state.docked is DockSide.RIGHT

    def test_panel_below_reserved_band_is_moved_back(self, make_manager):
        settings = PanelSettings(PanelConfig(min_height=50))
        manager = make_manager(store_with(500, 780, 600, 50), settings=settings)

        manager.handle_viewport_resize(Size(1600, 900))
        assert manager.state.is_floating
        assert manager.state.position == Point(500, 730)

    def test_panel_clear_of_edges_stays_put(self, make_manager):
        manager = make_manager(store_with(500, 300, 600, 400))
        manager.handle_viewport_resize(Size(1300, 900))
        assert manager.state.is_floating
        assert manager.state.position == Point(500, 300)

    def test_docked_panel_ignores_viewport_changes(self, make_manager):
        manager = make_manager(store_with(600, 120, 600, 600, docked="left"))
        manager.handle_viewport_resize(Size(700, 500))
        assert manager.state.docked is DockSide.LEFT

    def test_revalidation_waits_for_the_session_to_end(self, make_manager):
        manager = make_manager(store_with(500, 300, 600, 400))
        manager.begin_drag(Point(520, 310))
        manager.handle_viewport_resize(Size(1105, 1000))
        assert manager.state.is_floating

        manager.end_drag()
        assert manager.state.docked is DockSide.RIGHT


class TestPersistenceFailures:

    def test_write_failure_is_logged_and_state_kept(self, make_manager, caplog):
        manager = make_manager(FailingStore())
        with caplog.at_level(logging.WARNING):
            manager.dock(DockSide.LEFT)
        assert manager.state.docked is DockSide.LEFT
        assert "Could not persist panel state" in caplog.text


class TestSettings:

    def test_raising_minimum_width_regrows_panel(self, make_manager, store):
        settings = PanelSettings()
        manager = make_manager(store_with(300, 300, 600, 400), settings=settings)
        settings.update(min_width=700)
        assert manager.state.size == Size(700, 400)
        assert manager.state.is_floating

    def test_teardown_stops_listening(self, make_manager):
        settings = PanelSettings()
        manager = make_manager(store_with(300, 300, 600, 400), settings=settings)
        manager.teardown()
        settings.update(min_width=700)
        assert manager.state.size == Size(600, 400)

    def test_teardown_ends_active_session(self, make_manager):
        manager = make_manager()
        manager.begin_drag(Point(1000, 120))
        manager.teardown()
        assert manager.drag_session is None
        assert manager.interaction_state is DockingState.IDLE


class TestReferenceBounds:

    def test_falls_back_to_viewport_bands(self, make_manager):
        manager = make_manager(bounds=None)
        assert manager.reference_bounds() == ReferenceBounds(left=0, right=1600, top=120, bottom=950)

    def test_callable_source_returning_none_falls_back(self, make_manager):
        manager = make_manager(bounds=lambda: None)
        assert manager.reference_bounds().right == VIEWPORT.width

    def test_bounds_can_be_replaced(self, make_manager):
        manager = make_manager()
        manager.set_reference_bounds(ReferenceBounds(left=0, right=800, top=0, bottom=1000))
        assert manager.reference_bounds().right == 800
