#!/usr/bin/env python3
"""
Utility functions for encoder angle odometry calculations
"""

import math
from typing import Tuple

# Below this heading change (radians) the pose update uses the midpoint
# approximation instead of the exact arc
SMALL_ANGLE_THRESHOLD = 0.01

THREE_SIXTY = 360.0


def normalize_angle(angle: float) -> float:
    """
    Normalize angle to (-pi, pi]

    Args:
        angle (float): Angle in radians

    Returns:
        float: Normalized angle
    """
    result = math.pi - ((math.pi - angle) % (2.0 * math.pi))

    # The modulo can round up to exactly 2*pi just above an odd multiple of pi
    if result <= -math.pi:
        return math.pi
    return result


def angle_delta(current: float, previous: float, rollover_threshold: float) -> float:
    """
    Signed change between two encoder angle readings with rollover handling

    A jump larger than the threshold is read as the encoder wrapping past
    its 0/360 boundary, e.g. 350 -> 10 is +20 and 10 -> 350 is -20.
    Assumes less than one revolution between samples.

    Args:
        current (float): Current reading in degrees
        previous (float): Previous reading in degrees
        rollover_threshold (float): Jump size in degrees that counts as a wrap

    Returns:
        float: Delta in degrees
    """
    delta = current - previous

    if delta > rollover_threshold:
        # Rollunder (e.g. 10 -> 350)
        delta = -(THREE_SIXTY - delta)
    elif delta < -rollover_threshold:
        # Rollover (e.g. 350 -> 10)
        delta = THREE_SIXTY + delta

    return delta


def degrees_to_meters(
    delta_degrees: float, gear_ratio: float, wheel_circumference: float,
    forward_increases: bool = True
) -> float:
    """
    Convert an encoder angle delta to linear wheel travel

    Args:
        delta_degrees (float): Encoder angle delta in degrees
        gear_ratio (float): Encoder degrees per wheel degree
        wheel_circumference (float): Wheel circumference in meters
        forward_increases (bool): Whether forward motion increases the reading

    Returns:
        float: Distance in meters
    """
    if not forward_increases:
        delta_degrees = -delta_degrees

    encoder_rotations = delta_degrees / THREE_SIXTY
    wheel_rotations = encoder_rotations / gear_ratio
    return wheel_rotations * wheel_circumference


def differential_kinematics_2wd(
    left_dist: float, right_dist: float, track_width: float
) -> Tuple[float, float]:
    """
    Calculate linear and angular displacement using 2WD kinematics

    Args:
        left_dist (float): Left wheel distance
        right_dist (float): Right wheel distance
        track_width (float): Distance between wheels

    Returns:
        Tuple[float, float]: (linear_displacement, angular_displacement)
    """
    # Linear displacement (average of both wheels)
    linear_displacement = (left_dist + right_dist) / 2.0

    # Angular displacement (difference divided by track width)
    angular_displacement = (right_dist - left_dist) / track_width

    return linear_displacement, angular_displacement


def update_pose(
    x: float, y: float, theta: float,
    linear_disp: float, angular_disp: float
) -> Tuple[float, float, float]:
    """
    Update robot pose using odometry displacement

    Small turns use the midpoint heading, larger turns integrate the exact
    arc around the instantaneous center of rotation.

    Args:
        x (float): Current x position
        y (float): Current y position
        theta (float): Current orientation
        linear_disp (float): Linear displacement
        angular_disp (float): Angular displacement

    Returns:
        Tuple[float, float, float]: (new_x, new_y, new_theta)
    """
    # Update orientation first
    new_theta = normalize_angle(theta + angular_disp)

    if abs(angular_disp) < SMALL_ANGLE_THRESHOLD:
        # Near-straight motion
        mid_theta = new_theta - angular_disp / 2.0
        dx = linear_disp * math.cos(mid_theta)
        dy = linear_disp * math.sin(mid_theta)
    else:
        # Curved motion
        radius = linear_disp / angular_disp
        prev_theta = new_theta - angular_disp
        dx = radius * (math.sin(new_theta) - math.sin(prev_theta))
        dy = radius * (math.cos(prev_theta) - math.cos(new_theta))

    return x + dx, y + dy, new_theta


def calculate_velocities(
    linear_disp: float, angular_disp: float, dt_ms: int
) -> Tuple[float, float]:
    """
    Calculate linear and angular velocities

    Args:
        linear_disp (float): Linear displacement in meters
        angular_disp (float): Angular displacement in radians
        dt_ms (int): Time delta in milliseconds

    Returns:
        Tuple[float, float]: (linear_velocity, angular_velocity)
    """
    if dt_ms <= 0:
        return 0.0, 0.0

    dt = dt_ms / 1000.0
    return linear_disp / dt, angular_disp / dt
