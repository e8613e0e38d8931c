import math

import pytest

from terrainroute.editor import MapEditor, Mode
from terrainroute.mapfile import DEFAULT_WIDTH, MapDocument
from terrainroute.obstacle import Obstacle


def _square(x0, y0, x1, y1, transparency):
    return Obstacle(((x0, y0), (x1, y0), (x1, y1), (x0, y1)), transparency)


def test_click_ignored_when_idle():
    editor = MapEditor(20, 20)
    assert editor.click(3, 3) is False
    assert editor.points == ()


def test_add_obstacle():
    editor = MapEditor(20, 20)
    editor.begin_add()
    assert editor.mode is Mode.ADD
    for x, y in [(1, 1), (5, 1), (5, 5)]:
        assert editor.click(x, y)
    assert editor.ready
    editor.confirm(50)
    assert editor.obstacles == [Obstacle(((1, 1), (5, 1), (5, 5)), 50)]
    assert editor.mode is Mode.IDLE
    assert editor.points == ()


def test_confirm_before_ready_raises():
    editor = MapEditor(20, 20)
    editor.begin_add()
    editor.click(1, 1)
    with pytest.raises(RuntimeError):
        editor.confirm(10)


def test_begin_while_busy_raises():
    editor = MapEditor(20, 20)
    editor.begin_delete()
    with pytest.raises(RuntimeError):
        editor.begin_route()


def test_click_rounds_to_grid():
    editor = MapEditor(20, 20)
    editor.begin_add()
    editor.click(2.5, 3.4)
    assert editor.points == ((3, 3),)


def test_delete_removes_containing_obstacle():
    first = _square(0, 0, 4, 4, 30)
    second = _square(10, 10, 14, 14, 30)
    editor = MapEditor(20, 20)
    editor.load(MapDocument(20, 20, 1.0, (first, second)))
    editor.begin_delete()
    editor.click(2, 2)
    editor.confirm()
    assert editor.obstacles == [second]


def test_route_rejects_impassable_point():
    editor = MapEditor(20, 20)
    editor.load(MapDocument(20, 20, 1.0, (_square(0, 0, 6, 6, 100),)))
    editor.begin_route()
    assert editor.click(3, 3) is False
    assert editor.points == ()


def test_route_takes_only_two_points():
    editor = MapEditor(20, 20)
    editor.begin_route()
    assert editor.click(1, 1)
    assert editor.click(5, 5)
    assert editor.click(8, 8) is False
    assert len(editor.points) == 2


def test_straight_route_and_report():
    editor = MapEditor(20, 20)
    editor.begin_route()
    editor.click(2, 2)
    editor.click(10, 2)
    editor.confirm()
    assert editor.route[0] == (2, 2)
    assert editor.route[-1] == (10, 2)
    report = editor.route_report(4)
    assert report.length == pytest.approx(math.dist((2, 2), (10, 2)))
    assert report.time == pytest.approx(report.length / 4)


def test_route_not_found():
    wall = Obstacle(((4, -2), (6, -2), (6, 12), (4, 12)), 100)
    editor = MapEditor(10, 10)
    editor.load(MapDocument(10, 10, 1.0, (wall,)))
    editor.begin_route()
    assert editor.click(1, 5)
    assert editor.click(8, 5)
    with pytest.raises(ValueError):
        editor.confirm()
    assert editor.mode is Mode.IDLE
    assert editor.route == ()


def test_route_report_without_route_raises():
    with pytest.raises(RuntimeError):
        MapEditor(20, 20).route_report(5)


def test_new_action_clears_route():
    editor = MapEditor(20, 20)
    editor.begin_route()
    editor.click(1, 1)
    editor.click(4, 1)
    editor.confirm()
    assert editor.route
    editor.begin_add()
    assert editor.route == ()


def test_cancel_clears_points():
    editor = MapEditor(20, 20)
    editor.begin_add()
    editor.click(1, 1)
    editor.cancel()
    assert editor.mode is Mode.IDLE
    assert editor.points == ()
    assert editor.obstacles == []


def test_width_and_view():
    editor = MapEditor()
    editor.set_width(500)
    assert (editor.width, editor.view_width) == (500, 500)
    editor.set_width(2000)
    assert (editor.width, editor.view_width) == (2000, DEFAULT_WIDTH)


def test_status_message_initial():
    assert MapEditor().status_message(0, 0) == "Масштаб: 1px/m  |  Координаты: (0, 0)"


def test_zoom_in_message_and_back():
    editor = MapEditor()
    editor.zoom_in()
    assert editor.status_message(3, 4) == "Масштаб: 1.2px/m  |  Координаты: (3, 4)"
    editor.zoom_out()
    assert editor.scale == pytest.approx(1.0)


def test_load_document_round_trip():
    document = MapDocument(300, 200, 2.0, (_square(1, 1, 5, 5, 40),))
    editor = MapEditor()
    editor.load(document)
    assert editor.document() == document
    assert (editor.view_width, editor.view_height) == (300, 200)