#!/usr/bin/env python3
"""
Test odometry math helpers
"""

import math

import pytest

from encoder_to_odom.utils import (
    SMALL_ANGLE_THRESHOLD, angle_delta, calculate_velocities, degrees_to_meters,
    differential_kinematics_2wd, normalize_angle, update_pose
)


@pytest.mark.parametrize('previous, current, expected', [
    (350.0, 10.0, 20.0),
    (10.0, 350.0, -20.0),
    (100.0, 120.0, 20.0),
    (120.0, 100.0, -20.0),
    (0.0, 100.0, 100.0),     # exactly at threshold, no correction
    (300.0, 100.0, 160.0),
    (120.0, 350.0, -130.0),
])
def test_angle_delta_rollover(previous, current, expected):
    """Large jumps are read as a wrap past the 0/360 boundary"""
    assert angle_delta(current, previous, 100.0) == pytest.approx(expected)


def test_angle_delta_readings_not_normalized():
    """Readings outside [0, 360) are differenced as they are"""
    assert angle_delta(725.0, 700.0, 100.0) == pytest.approx(25.0)
    assert angle_delta(-20.0, 10.0, 100.0) == pytest.approx(-30.0)


def test_degrees_to_meters_full_revolution():
    """One encoder revolution moves the wheel circumference / gear ratio"""
    meters = degrees_to_meters(360.0, 2.0, 1.0)
    assert meters == pytest.approx(0.5)


def test_degrees_to_meters_direction():
    """Wheels whose reading decreases going forward are sign flipped"""
    forward = degrees_to_meters(90.0, 1.0, 2.0, forward_increases=True)
    flipped = degrees_to_meters(90.0, 1.0, 2.0, forward_increases=False)
    assert forward == pytest.approx(0.5)
    assert flipped == pytest.approx(-0.5)


def test_differential_kinematics_2wd():
    linear, angular = differential_kinematics_2wd(0.1, 0.3, 0.5)
    assert linear == pytest.approx(0.2)
    assert angular == pytest.approx(0.4)


@pytest.mark.parametrize('angle, expected', [
    (0.0, 0.0),
    (math.pi, math.pi),
    (-math.pi, math.pi),
    (1.5 * math.pi, -0.5 * math.pi),
    (-1.5 * math.pi, 0.5 * math.pi),
    (0.25, 0.25),
    (2.0 * math.pi + 0.25, 0.25),
])
def test_normalize_angle(angle, expected):
    """Headings land in (-pi, pi]"""
    result = normalize_angle(angle)
    assert result == pytest.approx(expected)
    assert -math.pi < result <= math.pi


@pytest.mark.parametrize('angle', [
    math.nextafter(math.pi, 4.0),
    math.nextafter(3.0 * math.pi, 10.0),
    math.nextafter(-math.pi, -4.0),
] + [math.nextafter((2 * k + 1) * math.pi, math.inf) for k in range(-5, 6)])
def test_normalize_angle_just_past_odd_multiple_of_pi(angle):
    """Rounding near pi + 2k*pi never yields -pi"""
    result = normalize_angle(angle)
    assert -math.pi < result <= math.pi
    assert abs(result) == pytest.approx(math.pi)


def test_update_pose_heading_just_past_pi():
    _, _, theta = update_pose(0.0, 0.0, 3.1, 0.01, math.nextafter(math.pi, 4.0) - 3.1)
    assert -math.pi < theta <= math.pi
    assert abs(theta) == pytest.approx(math.pi)


def test_update_pose_straight():
    x, y, theta = update_pose(1.0, 2.0, 0.0, 0.5, 0.0)
    assert (x, y, theta) == pytest.approx((1.5, 2.0, 0.0))


def test_update_pose_quarter_circle():
    """A quarter turn on a unit radius ends one radius forward and one to the left"""
    x, y, theta = update_pose(0.0, 0.0, 0.0, math.pi / 2.0, math.pi / 2.0)
    assert x == pytest.approx(1.0)
    assert y == pytest.approx(1.0)
    assert theta == pytest.approx(math.pi / 2.0)


def test_update_pose_uses_midpoint_heading():
    """Small turns move along the heading halfway through the turn"""
    d_theta = 0.005
    x, y, theta = update_pose(0.0, 0.0, 0.0, 1.0, d_theta)
    assert theta == pytest.approx(d_theta)
    assert x == pytest.approx(math.cos(d_theta / 2.0))
    assert y == pytest.approx(math.sin(d_theta / 2.0))


def test_update_pose_wraps_heading():
    _, _, theta = update_pose(0.0, 0.0, 3.0, 0.1, 0.5)
    assert theta == pytest.approx(3.5 - 2.0 * math.pi)


@pytest.mark.parametrize('start_theta', [0.0, 1.0, -2.5, math.pi])
def test_update_pose_branch_continuity(start_theta):
    """Both integration rules agree around the switch point"""
    eps = 1e-7
    below = update_pose(0.0, 0.0, start_theta, 0.2, SMALL_ANGLE_THRESHOLD - eps)
    above = update_pose(0.0, 0.0, start_theta, 0.2, SMALL_ANGLE_THRESHOLD + eps)
    assert abs(below[0] - above[0]) < 1e-4
    assert abs(below[1] - above[1]) < 1e-4

    below = update_pose(0.0, 0.0, start_theta, 0.2, -SMALL_ANGLE_THRESHOLD + eps)
    above = update_pose(0.0, 0.0, start_theta, 0.2, -SMALL_ANGLE_THRESHOLD - eps)
    assert abs(below[0] - above[0]) < 1e-4
    assert abs(below[1] - above[1]) < 1e-4


def test_calculate_velocities():
    linear, angular = calculate_velocities(0.1, 0.02, 500)
    assert linear == pytest.approx(0.2)
    assert angular == pytest.approx(0.04)


@pytest.mark.parametrize('dt_ms', [0, -10])
def test_calculate_velocities_no_elapsed_time(dt_ms):
    assert calculate_velocities(0.1, 0.02, dt_ms) == (0.0, 0.0)


if __name__ == '__main__':
    pytest.main([__file__])
