#!/usr/bin/env python3
"""
Shared fixtures for encoder_to_odom tests
"""

import pytest

from encoder_to_odom import OdometryProcessor, WheelId

# Reference robot
WHEEL_CIRCUMFERENCE = 1.0373
WHEEL_BASE = 0.5065
GEAR_RATIO = 2.38462
ROLLOVER = 100.0
RIGHT_INCREASE = True
LEFT_INCREASE = False

SETTLE_READINGS = 3


class FrameDriver:
    """Feeds frames into a processor the way a sampling loop would"""

    def __init__(self, processor: OdometryProcessor):
        self.processor = processor
        self.clock = 0

    def frame(self, left: float, right: float, step_ms: int = 1000):
        self.processor.record_reading(WheelId.LEFT, left)
        self.processor.record_reading(WheelId.RIGHT, right)
        self.clock += step_ms
        self.processor.update_timestamp(self.clock)
        self.processor.process_data()

    def settle(self, left: float, right: float):
        """Pass in enough readings for the processor to be settled"""
        for _ in range(SETTLE_READINGS):
            self.frame(left, right)

    def drive_full_encoder_rotation(self):
        """One full encoder rotation per wheel, wheels not kept in step"""
        self.settle(120, 300)
        self.frame(350, 100)  # -130 / +160
        self.frame(260, 190)  # -90 / +90
        self.frame(160, 290)  # -100 / +100
        self.frame(120, 300)  # -40 / +10

    def drive_straight_one_encoder_rotation(self):
        """One full encoder rotation with both wheels kept in step"""
        self.settle(120, 300)
        self.frame(350, 70)   # -130 / +130
        self.frame(260, 160)  # -90 / +90
        self.frame(160, 260)  # -100 / +100
        self.frame(120, 300)  # -40 / +40


@pytest.fixture
def processor():
    return OdometryProcessor(
        WHEEL_CIRCUMFERENCE, WHEEL_BASE, GEAR_RATIO, ROLLOVER,
        right_forward_increases=RIGHT_INCREASE,
        left_forward_increases=LEFT_INCREASE,
    )


@pytest.fixture
def driver(processor):
    return FrameDriver(processor)
