import math

import pytest

from stewartmon.platform import (
    PlatformSimulation,
    Quaternion,
    Vector3,
    orientation_from_accel,
)


def _components(v):
    return (v.x, v.y, v.z)


def test_vector_dot():
    assert Vector3(1, 2, 3).dot(Vector3(4, -5, 6)) == 1 * 4 + 2 * -5 + 3 * 6


def test_vector_normalized_has_unit_length():
    v = Vector3(3, -7, 2).normalized()
    assert math.isclose(v.dot(v), 1.0)


def test_zero_vector_normalizes_to_zero():
    assert Vector3().normalized() == Vector3()


def test_identity_euler_angles():
    q = Quaternion.from_euler_angles(0, 0, 0)
    assert q == Quaternion()


def test_roll_rotates_about_z():
    q = orientation_from_accel(17000, 0)
    rotated = q.rotate(Vector3(0, 1, 0))
    assert _components(rotated) == pytest.approx((-1.0, 0.0, 0.0), abs=1e-9)


def test_pitch_rotates_about_x():
    q = orientation_from_accel(0, 17000)
    rotated = q.rotate(Vector3(0, 1, 0))
    assert _components(rotated) == pytest.approx((0.0, 0.0, 1.0), abs=1e-9)


def test_euler_order_is_yaw_pitch_roll():
    combined = Quaternion.from_euler_angles(30, 40, 50)
    composed = (
        Quaternion.from_euler_angles(0, 40, 0)
        * Quaternion.from_euler_angles(30, 0, 0)
        * Quaternion.from_euler_angles(0, 0, 50)
    )
    v = Vector3(0.3, -1.2, 2.0)
    expected = _components(composed.rotate(v))
    assert _components(combined.rotate(v)) == pytest.approx(expected, abs=1e-9)


@pytest.mark.parametrize("angles", [(10, 20, 30), (-45, 0, 80), (90, 90, 90)])
def test_rotation_preserves_length(angles):
    q = Quaternion.from_euler_angles(*angles)
    v = Vector3(1.5, -2.0, 0.5)
    assert math.isclose(q.rotate(v).length(), v.length())


def test_orientation_is_clamped():
    assert orientation_from_accel(34000, -50000) == orientation_from_accel(17000, -17000)


def test_update_orientation_sets_rotation():
    sim = PlatformSimulation()
    sim.update_orientation(5000, -3000, 16000)
    assert sim.rotation == orientation_from_accel(5000, -3000)


def test_ball_settles_on_flat_platform():
    sim = PlatformSimulation()
    for _ in range(300):
        sim.step()
    assert math.isclose(sim.ball_position.y, 0.75, abs_tol=1e-9)
    assert sim.ball_velocity.y == 0.0
    assert sim.ball_position.x == 0.0


def test_ball_falls_initially():
    sim = PlatformSimulation()
    sim.step()
    assert sim.ball_velocity.y < 0
    assert sim.ball_position.y < 2.0


def test_ball_rolls_downhill_and_falls_off():
    sim = PlatformSimulation()
    for _ in range(200):
        sim.step()
    sim.update_orientation(4000, 0, 0)
    for _ in range(20):
        sim.step()
    assert sim.ball_position.x < 0
    for _ in range(1000):
        sim.step()
    assert sim.ball_position.x < -2.0
    assert sim.ball_position.y < 0


def test_zero_gravity_ball_stays_put():
    sim = PlatformSimulation(gravity=0.0)
    for _ in range(50):
        sim.step()
    assert sim.ball_position == Vector3(0, 2.0, 0)


def test_reset_ball():
    sim = PlatformSimulation()
    for _ in range(30):
        sim.step()
    sim.reset_ball()
    assert sim.ball_position == Vector3(0, 2.0, 0)
    assert sim.ball_velocity == Vector3()