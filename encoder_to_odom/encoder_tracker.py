#!/usr/bin/env python3
"""
Encoder Angle Tracker

Keeps the current and previous angle reading of each drive wheel encoder
and turns them into per-frame and cumulative angular/linear travel.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

import numpy as np

from .utils import angle_delta, degrees_to_meters

logger = logging.getLogger(__name__)


class WheelId(IntEnum):
    """Drive wheel an encoder is attached to"""
    LEFT = 0
    RIGHT = 1


WheelLike = Union[WheelId, str]


def resolve_wheel(wheel: WheelLike) -> WheelId:
    """
    Resolve a wheel identifier

    Args:
        wheel (WheelLike): WheelId or 'left'/'right' (any case)

    Returns:
        WheelId: Matching wheel
    """
    if isinstance(wheel, WheelId):
        return wheel
    if isinstance(wheel, str):
        try:
            return WheelId[wheel.upper()]
        except KeyError:
            pass
    raise ValueError(f"Unknown wheel '{wheel}'")


@dataclass
class EncoderState:
    """State information for a single wheel encoder"""
    current_angle: float = 0.0
    previous_angle: float = 0.0
    frame_degrees: float = 0.0
    total_degrees: float = 0.0
    frame_meters: float = 0.0
    total_meters: float = 0.0


class EncoderTracker:
    """
    Per-wheel encoder bookkeeping for a two-wheel differential drive

    All per-wheel values live in two-slot arrays indexed by WheelId.
    """

    def __init__(self, rollover_threshold: float):
        """
        Initialize encoder tracker

        Args:
            rollover_threshold (float): Angle jump in degrees treated as a wrap
        """
        self.rollover_threshold = rollover_threshold
        self.reset()

    def reset(self):
        """Reset readings and accumulators for both wheels"""
        self.current_angles = np.zeros(len(WheelId))
        self.previous_angles = np.zeros(len(WheelId))
        self.frame_degrees = np.zeros(len(WheelId))
        self.total_degrees = np.zeros(len(WheelId))
        self.frame_meters = np.zeros(len(WheelId))
        self.total_meters = np.zeros(len(WheelId))

    def reset_total_degrees(self):
        """Reset total degrees of both wheels"""
        self.total_degrees[:] = 0.0

    def reset_total_meters(self):
        """Reset total meters of both wheels"""
        self.total_meters[:] = 0.0

    def record_reading(self, wheel: WheelLike, angle_deg: float):
        """
        Shift the current reading to previous and store a new one

        Args:
            wheel (WheelLike): Wheel the reading belongs to
            angle_deg (float): Encoder angle in degrees
        """
        idx = resolve_wheel(wheel)
        self.previous_angles[idx] = self.current_angles[idx]
        self.current_angles[idx] = angle_deg

    def compute_delta(self, current: float, previous: float) -> float:
        """Rollover-corrected angle delta in degrees"""
        return angle_delta(current, previous, self.rollover_threshold)

    def update_frame_degrees(self, wheel: WheelLike) -> float:
        """
        Calculate the degrees a wheel encoder moved in this frame

        Args:
            wheel (WheelLike): Wheel to update

        Returns:
            float: Corrected delta in degrees
        """
        idx = resolve_wheel(wheel)
        current = float(self.current_angles[idx])
        previous = float(self.previous_angles[idx])
        delta = self.compute_delta(current, previous)

        if delta != current - previous:
            logger.debug(
                f"{idx.name} encoder wrapped: {previous:.1f} -> {current:.1f} "
                f"read as {delta:+.1f} deg"
            )

        self.frame_degrees[idx] = delta
        self.total_degrees[idx] += delta
        return delta

    def update_frame_meters(
        self, wheel: WheelLike, gear_ratio: float,
        wheel_circumference: float, forward_increases: bool
    ) -> float:
        """
        Convert the wheel's frame degrees to meters and accumulate them

        Args:
            wheel (WheelLike): Wheel to update
            gear_ratio (float): Encoder degrees per wheel degree
            wheel_circumference (float): Wheel circumference in meters
            forward_increases (bool): Whether forward motion increases the reading

        Returns:
            float: Meters traveled by the wheel in this frame
        """
        idx = resolve_wheel(wheel)
        meters = degrees_to_meters(
            float(self.frame_degrees[idx]), gear_ratio,
            wheel_circumference, forward_increases
        )
        self.frame_meters[idx] = meters
        self.total_meters[idx] += meters
        return meters

    def get_state(self, wheel: WheelLike) -> EncoderState:
        """Get a snapshot of one wheel's readings and accumulators"""
        idx = resolve_wheel(wheel)
        return EncoderState(
            current_angle=float(self.current_angles[idx]),
            previous_angle=float(self.previous_angles[idx]),
            frame_degrees=float(self.frame_degrees[idx]),
            total_degrees=float(self.total_degrees[idx]),
            frame_meters=float(self.frame_meters[idx]),
            total_meters=float(self.total_meters[idx]),
        )
