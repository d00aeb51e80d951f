import math
import numpy as np

from critters.spatial import clamp_speed, reflect_axis, reflect_in_viewport, heading_of


def test_clamp_speed_rescales_uniformly():
    v = np.array([3.0, 4.0])
    clamped = clamp_speed(v, 2.5)
    assert np.isclose(np.hypot(*clamped), 2.5)
    assert np.allclose(clamped, [1.5, 2.0])


def test_clamp_speed_leaves_slow_vectors_alone():
    v = np.array([0.3, -0.4])
    assert clamp_speed(v, 1.0) is v


def test_clamp_speed_zero_vector():
    v = np.array([0.0, 0.0])
    out = clamp_speed(v, 0.0)
    assert np.all(np.isfinite(out))
    assert np.allclose(out, [0.0, 0.0])


def test_reflect_axis_inside_is_untouched():
    assert reflect_axis(5.0, -1.0, 10.0) == (5.0, -1.0, False)
    # Bounds themselves are inside
    assert reflect_axis(0.0, -1.0, 10.0) == (0.0, -1.0, False)
    assert reflect_axis(10.0, 1.0, 10.0) == (10.0, 1.0, False)


def test_reflect_axis_low_and_high():
    assert reflect_axis(-0.5, -2.0, 10.0) == (0.0, 2.0, True)
    assert reflect_axis(12.0, 3.0, 10.0) == (10.0, -3.0, True)


def test_reflect_axis_degenerate_extent():
    assert reflect_axis(0.0, 1.5, 0.0) == (0.0, -1.5, True)
    assert reflect_axis(4.0, -1.5, -10.0) == (0.0, 1.5, True)


def test_reflect_in_viewport_corner():
    pos, vel, hit = reflect_in_viewport(np.array([-1.0, 101.0]), np.array([-3.0, 2.0]), 100.0, 100.0)
    assert hit
    assert np.allclose(pos, [0.0, 100.0])
    assert np.allclose(vel, [3.0, -2.0])


def test_reflection_preserves_speed():
    vel_in = np.array([-3.0, 4.0])
    _, vel_out, _ = reflect_in_viewport(np.array([-1.0, 50.0]), vel_in, 100.0, 100.0)
    assert np.hypot(*vel_out) == np.hypot(*vel_in)


def test_heading_of():
    assert np.isclose(heading_of(np.array([0.0, -1.0])), -math.pi / 2)
    assert np.isclose(heading_of(np.array([-1.0, 0.0])), math.pi)
