import pytest

from ibomscope.measurement import (
    MeasureResult,
    Measurement,
    Mode,
    angle,
    distance,
    polygon_area,
)


def test_distance_three_four_five():
    assert distance((0, 0), (3, 4)) == pytest.approx(5.0)


def test_distance_is_symmetric():
    a, b = (1.5, -2.0), (7.25, 3.5)
    assert distance(a, b) == pytest.approx(distance(b, a))


def test_right_angle():
    assert angle((1, 0), (0, 0), (0, 1)) == pytest.approx(90.0)


def test_angle_with_degenerate_arm_is_zero():
    assert angle((5, 5), (5, 5), (9, 1)) == 0.0


def test_angle_is_symmetric_in_arms():
    a, v, b = (3, 1), (0, 0), (-2, 4)
    assert angle(a, v, b) == pytest.approx(angle(b, v, a))


def test_polygon_area_square():
    assert polygon_area([(0, 0), (2, 0), (2, 2), (0, 2)]) == pytest.approx(4.0)


def test_polygon_area_independent_of_orientation_and_start():
    pts = [(0, 0), (5, 1), (4, 6), (-1, 3)]
    base = polygon_area(pts)
    assert polygon_area(list(reversed(pts))) == pytest.approx(base)
    assert polygon_area(pts[2:] + pts[:2]) == pytest.approx(base)


def test_distance_mode_completes_after_two_points():
    m = Measurement()
    m.set_calibration(20)
    done = []
    m.measurement_complete.connect(done.append)
    m.add_point((0, 0))
    assert m.current_result() is None
    m.add_point((30, 40))
    assert len(m.history) == 1
    result = m.history[0]
    assert result.mode is Mode.DISTANCE
    assert result.value_pixels == pytest.approx(distance((0, 0), (30, 40)))
    assert result.value_mm == pytest.approx(result.value_pixels / 20)
    assert done == [result]
    assert m.points == []


def test_uncalibrated_distance_has_zero_mm():
    m = Measurement()
    assert not m.is_calibrated()
    m.add_point((0, 0))
    m.add_point((10, 0))
    assert m.history[0].value_mm == 0


def test_angle_mode_reports_degrees_as_mm_value():
    m = Measurement()
    m.set_mode(Mode.ANGLE)
    m.set_calibration(10)
    for p in [(1, 0), (0, 0), (0, 1)]:
        m.add_point(p)
    result = m.history[0]
    assert result.value_mm == result.value_pixels
    assert result.points == [(1.0, 0.0), (0.0, 0.0), (0.0, 1.0)]


def test_area_mode_never_completes_automatically():
    m = Measurement()
    m.set_mode(Mode.AREA)
    m.set_calibration(2)
    pts = [(0, 0), (10, 0), (10, 10), (0, 10)]
    for p in pts:
        m.add_point(p)
    assert m.history == []
    result = m.current_result()
    assert isinstance(result, MeasureResult)
    assert result.value_pixels == pytest.approx(polygon_area(pts))
    assert result.value_mm == pytest.approx(result.value_pixels / 4)


def test_pin_pitch_behaves_like_distance():
    m = Measurement()
    m.set_mode(Mode.PIN_PITCH)
    m.add_point((0, 0))
    m.add_point((6, 8))
    assert m.history[0].mode is Mode.PIN_PITCH
    assert m.history[0].value_pixels == pytest.approx(distance((0, 0), (6, 8)))


def test_set_mode_clears_points_and_emits_only_on_change():
    m = Measurement()
    changes = []
    m.mode_changed.connect(changes.append)
    m.add_point((1, 1))
    m.set_mode(Mode.DISTANCE)
    assert changes == []
    assert m.points == [(1.0, 1.0)]
    m.set_mode(Mode.AREA)
    assert changes == [Mode.AREA]
    assert m.points == []


def test_point_added_reports_running_count():
    m = Measurement()
    m.set_mode(Mode.AREA)
    seen = []
    m.point_added.connect(lambda p, n: seen.append((p, n)))
    m.add_point((2, 3))
    m.add_point((4, 5))
    assert seen == [((2.0, 3.0), 1), ((4.0, 5.0), 2)]


def test_clear_history():
    m = Measurement()
    m.add_point((0, 0))
    m.add_point((1, 1))
    m.clear_history()
    assert m.history == []