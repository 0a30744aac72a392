# test_windows.py
# Tests for floating inspector window placement, stacking and dragging.

from windows import FloatingWindowManager


def test_open_places_window_near_anchor():
    manager = FloatingWindowManager(container_width=1000)
    window = manager.open('a', None, 100, 200)
    assert (window.x, window.y) == (120, 150)
    assert window.z_index == 11


def test_reopening_only_raises():
    manager = FloatingWindowManager()
    first = manager.open('a', None, 100, 200)
    manager.open('b', None, 300, 300)
    again = manager.open('a', None, 500, 500)
    assert again is first
    assert len(manager) == 2
    assert (again.x, again.y) == (120, 150)
    assert manager.stacking_order()[-1].id == 'a'


def test_new_windows_cascade_and_stay_on_screen():
    manager = FloatingWindowManager(container_width=800)
    manager.open('a', None, 0, 0)
    second = manager.open('b', None, 780, 10)
    assert second.x == 500  # 800 - 300
    assert second.y == 20
    third = manager.open('c', None, 100, 400)
    assert (third.x, third.y) == (140, 370)


def test_narrow_container_never_goes_negative():
    manager = FloatingWindowManager(container_width=200)
    assert manager.open('a', None, 150, 100).x == 0


def test_close_and_bring_to_front():
    manager = FloatingWindowManager()
    manager.open('a', None, 0, 0)
    manager.open('b', None, 0, 0)
    assert manager.bring_to_front('a').z_index == 13
    assert manager.bring_to_front('missing') is None
    manager.close('a')
    assert 'a' not in manager
    assert manager.close('a') is None
    assert manager.ids() == {'b'}


def test_drag_is_exclusive_by_id():
    manager = FloatingWindowManager()
    a = manager.open('a', None, 100, 100)
    manager.open('b', None, 100, 100)
    assert manager.begin_drag('a', a.x + 5, a.y + 5)
    assert not manager.begin_drag('b', 0, 0)
    manager.drag_to(a.x + 55, a.y + 25)
    assert (a.x, a.y) == (170, 70)
    assert manager.stacking_order()[-1].id == 'a'
    manager.end_drag()
    assert manager.drag_to(0, 0) is None


def test_closing_the_dragged_window_ends_drag():
    manager = FloatingWindowManager()
    manager.open('a', None, 0, 0)
    manager.begin_drag('a', 0, 0)
    manager.close('a')
    assert manager.dragging_id is None


def test_clear():
    manager = FloatingWindowManager()
    manager.open('a', None, 0, 0)
    manager.open('b', None, 0, 0)
    manager.clear()
    assert len(manager) == 0
