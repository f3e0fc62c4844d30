"""
Tests for the selection state machine.

The machine is bound to a 10 second asset shown 1000 pixels wide, so one
pixel is 10 ms and pixel 200 is 2.0 s.
"""
import random

import pytest

from wavecut.core.config import EditMode, SelectionConfig
from wavecut.core.selection import Selection, SelectionInfo, SelectionStateMachine

DURATION = 10.0
WIDTH = 1000


@pytest.fixture
def changes() -> list:
    return []


@pytest.fixture
def seeks() -> list:
    return []


@pytest.fixture
def machine(changes, seeks) -> SelectionStateMachine:
    m = SelectionStateMachine(on_changed=changes.append, on_seek=seeks.append)
    m.reset(DURATION)
    m.set_viewport_width(WIDTH)
    changes.clear()
    return m


@pytest.fixture
def selected(machine) -> SelectionStateMachine:
    """Machine with [2.0, 5.0] committed."""
    machine.set_selection(2.0, 5.0)
    return machine


def drag(machine, *xs):
    machine.pointer_down(xs[0])
    for x in xs[1:]:
        machine.pointer_move(x)
    return machine.pointer_up(xs[-1])


class TestSelectionValue:
    def test_duration_is_absolute(self):
        assert Selection(5.0, 2.0).duration == 3.0

    def test_contains_is_inclusive(self):
        sel = Selection(2.0, 5.0)
        assert sel.contains(2.0)
        assert sel.contains(5.0)
        assert not sel.contains(5.01)

    def test_normalized(self):
        assert Selection(5.0, 2.0).normalized() == Selection(2.0, 5.0)

    def test_info_formats_bounds(self):
        info = SelectionInfo.from_selection(Selection(2.0, 65.5))
        assert info == SelectionInfo("00:02.00", "01:05.50", "01:03.50")


class TestCreating:
    def test_initial_state(self, machine):
        assert machine.mode == EditMode.IDLE
        assert machine.selection is None

    def test_press_starts_zero_width_selection(self, machine):
        assert machine.pointer_down(200) == EditMode.CREATING
        assert machine.selection == Selection(2.0, 2.0)

    def test_drag_creates_selection(self, machine):
        drag(machine, 200, 350, 500)
        assert machine.mode == EditMode.IDLE
        assert machine.selection == Selection(2.0, 5.0)

    def test_backwards_drag_is_transient_until_release(self, machine):
        machine.pointer_down(500)
        machine.pointer_move(200)
        assert machine.mode == EditMode.CREATING
        assert machine.selection == Selection(5.0, 2.0)

        machine.pointer_up(200)
        assert machine.selection == Selection(2.0, 5.0)

    def test_narrow_selection_collapses(self, machine):
        drag(machine, 300, 305)
        assert machine.selection is None
        assert machine.mode == EditMode.IDLE

    def test_narrow_programmatic_selection_collapses(self, machine):
        assert machine.set_selection(3.0, 3.05) is None
        assert machine.selection is None

    def test_move_is_clamped_to_asset(self, machine):
        drag(machine, 800, 1400)
        assert machine.selection == Selection(8.0, 10.0)

    def test_leave_commits_like_release(self, machine, seeks):
        machine.pointer_down(100)
        machine.pointer_move(400)
        machine.pointer_leave()
        assert machine.mode == EditMode.IDLE
        assert machine.selection == Selection(1.0, 4.0)
        assert seeks == []

    def test_every_mutation_notifies(self, machine, changes):
        drag(machine, 200, 300, 500)
        # down, two moves, release
        assert len(changes) == 4
        assert changes[-1] == Selection(2.0, 5.0)

    def test_collapse_notifies_absent(self, machine, changes):
        drag(machine, 300, 302)
        assert changes[-1] is None


class TestEdgeDragging:
    def test_press_near_start_edge(self, selected):
        assert selected.pointer_down(204) == EditMode.DRAGGING_START

    def test_press_near_end_edge(self, selected):
        assert selected.pointer_down(495) == EditMode.DRAGGING_END

    def test_edge_tolerance_is_six_pixels(self, selected):
        assert selected.edge_at(206) == EditMode.DRAGGING_START
        assert selected.edge_at(207) is None
        assert selected.edge_at(194) == EditMode.DRAGGING_START
        assert selected.edge_at(193) is None

    def test_custom_tolerance(self):
        m = SelectionStateMachine(config=SelectionConfig(edge_hit_px=12.0))
        m.reset(DURATION)
        m.set_viewport_width(WIDTH)
        m.set_selection(2.0, 5.0)
        assert m.edge_at(211) == EditMode.DRAGGING_START

    def test_drag_start_edge(self, selected):
        drag(selected, 200, 150, 100)
        assert selected.selection == Selection(1.0, 5.0)
        assert selected.mode == EditMode.IDLE

    def test_start_edge_cannot_cross_end(self, selected):
        selected.pointer_down(200)
        selected.pointer_move(600)
        assert selected.selection == Selection(2.0, 5.0)
        selected.pointer_move(450)
        assert selected.selection == Selection(4.5, 5.0)

    def test_drag_end_edge(self, selected):
        drag(selected, 500, 800)
        assert selected.selection == Selection(2.0, 8.0)

    def test_end_edge_cannot_cross_start(self, selected):
        selected.pointer_down(500)
        selected.pointer_move(100)
        assert selected.selection == Selection(2.0, 5.0)

    def test_edge_drag_ending_too_narrow_collapses(self, selected):
        drag(selected, 500, 205)
        assert selected.selection is None

    def test_no_edges_without_selection(self, machine):
        assert machine.edge_at(0) is None


class TestPressAndClick:
    def test_press_inside_keeps_selection(self, selected, changes):
        changes.clear()
        assert selected.pointer_down(350) == EditMode.IDLE
        assert selected.selection == Selection(2.0, 5.0)
        assert changes == []

    def test_click_inside_does_not_seek(self, selected, seeks):
        assert drag(selected, 350) is None
        assert seeks == []
        assert selected.selection == Selection(2.0, 5.0)

    def test_click_outside_clears_and_seeks(self, selected, seeks):
        assert drag(selected, 800) == pytest.approx(8.0)
        assert seeks == [pytest.approx(8.0)]
        assert selected.selection is None

    def test_click_without_selection_seeks(self, machine, seeks):
        drag(machine, 250)
        assert seeks == [pytest.approx(2.5)]

    def test_drag_is_not_a_click(self, machine, seeks):
        drag(machine, 100, 400)
        assert seeks == []

    def test_hover_does_nothing(self, selected, changes):
        changes.clear()
        selected.pointer_move(700)
        assert selected.mode == EditMode.IDLE
        assert changes == []


class TestUnbound:
    def test_events_ignored_without_asset(self):
        m = SelectionStateMachine()
        m.set_viewport_width(WIDTH)
        assert m.pointer_down(100) == EditMode.IDLE
        m.pointer_move(300)
        assert m.pointer_up(300) is None
        assert m.selection is None

    def test_reset_drops_selection_and_gesture(self, machine):
        machine.pointer_down(100)
        machine.pointer_move(300)
        machine.reset(4.0)
        assert machine.mode == EditMode.IDLE
        assert machine.selection is None
        assert machine.duration == 4.0

    def test_clear(self, selected, changes):
        selected.clear()
        assert selected.selection is None
        assert changes[-1] is None


class TestRandomizedGestures:
    """Invariants under random pointer sequences."""

    def test_start_edge_never_reaches_end(self, machine):
        rng = random.Random(1234)
        for _ in range(200):
            start = rng.uniform(0, 8)
            machine.set_selection(start, rng.uniform(start + 0.5, DURATION))
            sel = machine.selection
            machine.pointer_down(sel.start / DURATION * WIDTH)
            assert machine.mode == EditMode.DRAGGING_START
            for _ in range(20):
                machine.pointer_move(rng.uniform(-100, WIDTH + 100))
                assert machine.selection.start < machine.selection.end
            machine.pointer_leave()

    def test_end_edge_never_reaches_start(self, machine):
        rng = random.Random(4321)
        for _ in range(200):
            start = rng.uniform(0, 8)
            machine.set_selection(start, rng.uniform(start + 0.5, DURATION))
            sel = machine.selection
            machine.pointer_down(sel.end / DURATION * WIDTH)
            assert machine.mode == EditMode.DRAGGING_END
            for _ in range(20):
                machine.pointer_move(rng.uniform(-100, WIDTH + 100))
                assert machine.selection.end > machine.selection.start
            machine.pointer_up()

    def test_committed_selection_invariant(self, machine):
        rng = random.Random(99)
        for _ in range(500):
            machine.pointer_down(rng.uniform(0, WIDTH))
            for _ in range(rng.randint(0, 5)):
                machine.pointer_move(rng.uniform(-50, WIDTH + 50))
            if rng.random() < 0.2:
                machine.pointer_leave()
            else:
                machine.pointer_up(rng.uniform(0, WIDTH))

            assert machine.mode == EditMode.IDLE
            sel = machine.selection
            if sel is not None:
                assert 0.0 <= sel.start < sel.end <= DURATION
                assert sel.end - sel.start >= 0.1
