import pytest

from symbol_map.interaction import DragMode, DragRotateController


@pytest.fixture
def angles():
    return []


@pytest.fixture
def controller(angles):
    controller = DragRotateController(angles.append)
    controller.configure(900)
    return controller


def test_starts_idle(controller):
    assert controller.mode is DragMode.IDLE
    assert controller.angle == 0.0
    assert not controller.is_dragging


def test_move_without_press_is_ignored(controller, angles):
    assert controller.pointer_move(300) is False
    assert controller.angle == 0.0
    assert angles == []


def test_drag_maps_width_to_half_turn(controller, angles):
    controller.pointer_down(100)
    assert controller.is_dragging
    assert controller.pointer_move(550) is True
    assert controller.angle == pytest.approx(90.0)
    assert angles == [pytest.approx(90.0)]


def test_drags_accumulate(controller):
    # 150px is +30 degrees and 50px is 10 degrees on a 900px surface.
    controller.pointer_down(100)
    controller.pointer_move(250)
    controller.pointer_up(250)
    controller.pointer_down(400)
    controller.pointer_move(350)
    controller.pointer_up(350)
    assert controller.angle == pytest.approx(20.0)


def test_each_move_reports_the_running_angle(controller, angles):
    controller.pointer_down(0)
    controller.pointer_move(45)
    controller.pointer_move(90)
    controller.pointer_move(45)
    assert angles == [pytest.approx(9.0), pytest.approx(18.0), pytest.approx(9.0)]


def test_release_stops_rotation(controller, angles):
    controller.pointer_down(0)
    controller.pointer_move(90)
    controller.pointer_up()
    controller.pointer_move(900)
    assert controller.mode is DragMode.IDLE
    assert controller.angle == pytest.approx(18.0)
    assert len(angles) == 1


def test_angle_is_not_clamped(controller):
    controller.pointer_down(0)
    for x in range(900, 9001, 900):
        controller.pointer_move(x)
    assert controller.angle == pytest.approx(1800.0)
