import math

import pytest

from stewartmon.hexagon import HexagonBars, bar_color, servo_angle_to_value


def test_bar_color_endpoints():
    assert bar_color(0.0) == (0, 255, 0)
    assert bar_color(0.5) == (255, 255, 0)
    assert bar_color(1.0) == (255, 0, 0)


@pytest.mark.parametrize("value", [0.0, 0.1, 0.3, 0.5, 0.6, 0.9, 1.0])
def test_bar_color_components_in_range(value):
    red, green, blue = bar_color(value)
    assert 0 <= red <= 255 and 0 <= green <= 255 and blue == 0


def test_bar_color_monotonic():
    values = [i / 20 for i in range(21)]
    reds = [bar_color(v)[0] for v in values]
    greens = [bar_color(v)[1] for v in values]
    assert reds == sorted(reds)
    assert greens == sorted(greens, reverse=True)


def test_servo_angle_to_value():
    assert servo_angle_to_value(-90) == 0.0
    assert servo_angle_to_value(0) == 0.5
    assert servo_angle_to_value(90) == 1.0


def test_default_values():
    bars = HexagonBars()
    assert [bars.bar_value(i) for i in range(6)] == [0.5] * 6


def test_set_bar_value_clamps():
    bars = HexagonBars()
    bars.set_bar_value(0, 2.0)
    bars.set_bar_value(1, -1.0)
    bars.set_bar_value(2, 0.25)
    assert bars.values[:3] == (1.0, 0.0, 0.25)


@pytest.mark.parametrize("index", [-1, 6, 100])
def test_out_of_range_index_ignored(index):
    bars = HexagonBars()
    bars.set_bar_value(index, 0.9)
    assert bars.bar_value(index) == 0.0
    assert bars.values == (0.5,) * 6


def test_hexagon_points_on_circle():
    bars = HexagonBars(200, 200)
    points = bars.hexagon_points()
    assert len(points) == 6
    for x, y in points:
        assert math.isclose(math.hypot(x - 100, y - 100), 100.0)


def test_hexagon_first_point_on_x_axis():
    bars = HexagonBars(200, 200)
    x, y = bars.hexagon_points()[0]
    assert math.isclose(y, 100.0) and x > 100


def test_hexagon_uses_integer_center():
    bars = HexagonBars(201, 201)
    assert bars.center == (100.0, 100.0)


def test_bar_tips_zero_value_at_corner():
    bars = HexagonBars()
    for i in range(6):
        bars.set_bar_value(i, 0.0)
    for tip, corner in zip(bars.bar_tips(), bars.hexagon_points()):
        assert math.isclose(tip[0], corner[0]) and math.isclose(tip[1], corner[1])


def test_bar_tips_full_value_at_bar_length():
    bars = HexagonBars()
    for i in range(6):
        bars.set_bar_value(i, 1.0)
    cx, cy = bars.center
    for (tx, ty), (ox, oy) in zip(bars.bar_tips(), bars.hexagon_points()):
        assert math.isclose(math.hypot(tx - ox, ty - oy), 50.0)
        assert math.isclose(math.hypot(tx - cx, ty - cy), 50.0)


def test_bar_heights_scale():
    bars = HexagonBars()
    bars.set_bar_value(3, 1.0)
    bars.set_bar_value(4, 0.0)
    heights = bars.bar_heights()
    assert heights[3] == 10.0
    assert heights[4] == 0.0
    assert heights[0] == 5.0