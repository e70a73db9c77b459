#!/usr/bin/env python3
"""
Encoder Angle Odometry Processor

Converts two-wheel encoder angle readings and a 16-bit millisecond
timestamp into pose, velocity and traveled distance for a differential
drive robot.
"""

import copy
import logging
from dataclasses import dataclass

from .config import OdometryConfig
from .encoder_tracker import EncoderState, EncoderTracker, WheelId, WheelLike
from .utils import (
    differential_kinematics_2wd, update_pose, calculate_velocities
)

logger = logging.getLogger(__name__)

# Number of initial frames discarded while the encoders settle
STABILIZATION_FRAMES = 3

TIMESTAMP_MODULUS = 1 << 16


@dataclass
class Pose:
    """Position from the start point, heading in radians in (-pi, pi]"""
    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0


@dataclass
class Velocity:
    """Velocity of the robot over the most recent frame"""
    linear_x: float = 0.0   # m/s
    angular_z: float = 0.0  # rad/s


@dataclass
class Distance:
    """Distance moved by the robot center in meters"""
    frame_distance: float = 0.0
    total_distance: float = 0.0  # signed running sum of frame_distance


class OdometryProcessor:
    """
    Dead-reckoning odometry from two wheel encoder angles

    Per frame the caller records both wheel readings, updates the
    timestamp and then calls process_data(). Not thread safe.
    """

    def __init__(
        self,
        wheel_circumference: float,
        wheel_base: float,
        gear_ratio: float,
        rollover_threshold: float,
        right_forward_increases: bool = True,
        left_forward_increases: bool = True
    ):
        """
        Initialize odometry processor

        Args:
            wheel_circumference (float): Drive wheel circumference in meters
            wheel_base (float): Distance between the drive wheel centers in meters
            gear_ratio (float): Encoder degrees read per wheel degree
            rollover_threshold (float): Degrees moved in one frame that count as a wrap
            right_forward_increases (bool): Right reading increases when driving forward
            left_forward_increases (bool): Left reading increases when driving forward
        """
        self.config = OdometryConfig(
            wheel_circumference=wheel_circumference,
            wheel_base=wheel_base,
            gear_ratio=gear_ratio,
            rollover_threshold=rollover_threshold,
            right_forward_increases=right_forward_increases,
            left_forward_increases=left_forward_increases,
        )
        self.encoders = EncoderTracker(rollover_threshold)
        self._init_state()

    @classmethod
    def from_config(cls, config: OdometryConfig) -> 'OdometryProcessor':
        """Create a processor from an OdometryConfig"""
        return cls(
            config.wheel_circumference,
            config.wheel_base,
            config.gear_ratio,
            config.rollover_threshold,
            right_forward_increases=config.right_forward_increases,
            left_forward_increases=config.left_forward_increases,
        )

    def _init_state(self):
        self.position = Pose()
        self.velocity = Velocity()
        self.distance = Distance()
        self.timestamp = 0
        self.delta_time = 0
        self.stabilization_amount = STABILIZATION_FRAMES

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def record_reading(self, wheel: WheelLike, angle_deg: float):
        """
        Update with the latest encoder reading of one wheel

        Args:
            wheel (WheelLike): Wheel the encoder is attached to
            angle_deg (float): Encoder angle reading in degrees
        """
        self.encoders.record_reading(wheel, angle_deg)

    def update_timestamp(self, timestamp: int):
        """
        Update the frame timestamp

        Only the low 16 bits are used; the delta wraps modulo 2**16 so a
        counter rollover still yields a small positive delta.

        Args:
            timestamp (int): Millisecond timestamp from the encoder source
        """
        timestamp = int(timestamp) % TIMESTAMP_MODULUS
        self.delta_time = (timestamp - self.timestamp) % TIMESTAMP_MODULUS
        self.timestamp = timestamp

    def process_data(self):
        """
        Run the odometry pipeline once with the latest readings

        Does nothing while the stabilization period is still running.
        """
        if not self._settled():
            logger.debug(
                f"Stabilizing, skipping frame ({self.stabilization_amount} left)"
            )
            return

        cfg = self.config

        # Encoder deltas and wheel travel
        self.encoders.update_frame_degrees(WheelId.LEFT)
        self.encoders.update_frame_degrees(WheelId.RIGHT)
        left_m = self.encoders.update_frame_meters(
            WheelId.LEFT, cfg.gear_ratio, cfg.wheel_circumference,
            cfg.left_forward_increases
        )
        right_m = self.encoders.update_frame_meters(
            WheelId.RIGHT, cfg.gear_ratio, cfg.wheel_circumference,
            cfg.right_forward_increases
        )

        # Robot displacement
        frame_distance, delta_theta = differential_kinematics_2wd(
            left_m, right_m, cfg.wheel_base
        )

        # Pose
        self.position.x, self.position.y, self.position.theta = update_pose(
            self.position.x, self.position.y, self.position.theta,
            frame_distance, delta_theta
        )
        self.distance.frame_distance = frame_distance
        self.distance.total_distance += frame_distance

        # Velocity
        if self.delta_time == 0:
            logger.debug("No elapsed time since last frame, velocity set to zero")
        self.velocity.linear_x, self.velocity.angular_z = calculate_velocities(
            frame_distance, delta_theta, self.delta_time
        )

    def _settled(self) -> bool:
        """Count down the stabilization frames, True once they are used up"""
        if self.stabilization_amount > 0:
            self.stabilization_amount -= 1
            return False
        return True

    @property
    def is_settled(self) -> bool:
        """Whether the stabilization period is over"""
        return self.stabilization_amount <= 0

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------

    def reset(self):
        """Reset the processor to its initial state"""
        self.encoders.reset()
        self._init_state()
        logger.info("Odometry reset to origin")

    def reset_distance(self):
        """Reset frame and total distance to zero"""
        self.distance = Distance()

    def reset_position(self):
        """Reset x, y and heading to zero"""
        self.position = Pose()

    def reset_total_degrees_traveled(self):
        """Reset the total degrees traveled by both wheels to zero"""
        self.encoders.reset_total_degrees()

    def reset_total_meters_traveled(self):
        """Reset the total meters traveled by both wheels to zero"""
        self.encoders.reset_total_meters()

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    def get_position(self) -> Pose:
        """Get (x, y, theta) of the robot in the odometry frame"""
        return copy.copy(self.position)

    def get_velocity(self) -> Velocity:
        """Get linear (m/s) and angular (rad/s) velocity of the last frame"""
        return copy.copy(self.velocity)

    def get_distance(self) -> Distance:
        """Get meters traveled in the last frame and since start"""
        return copy.copy(self.distance)

    def get_total_degrees_traveled(self, wheel: WheelLike) -> float:
        """Get the encoder degrees a wheel traveled since start"""
        return self.encoders.get_state(wheel).total_degrees

    def get_total_meters_traveled(self, wheel: WheelLike) -> float:
        """Get the meters a wheel traveled since start"""
        return self.encoders.get_state(wheel).total_meters

    def get_degrees_traveled_in_frame(self, wheel: WheelLike) -> float:
        """Get the encoder degrees a wheel traveled in the last frame"""
        return self.encoders.get_state(wheel).frame_degrees

    def get_meters_traveled_in_frame(self, wheel: WheelLike) -> float:
        """Get the meters a wheel traveled in the last frame"""
        return self.encoders.get_state(wheel).frame_meters

    def get_current_encoder_angle(self, wheel: WheelLike) -> float:
        """Get the latest recorded encoder angle of a wheel"""
        return self.encoders.get_state(wheel).current_angle

    def get_previous_encoder_angle(self, wheel: WheelLike) -> float:
        """Get the encoder angle recorded before the latest one"""
        return self.encoders.get_state(wheel).previous_angle

    def get_encoder_state(self, wheel: WheelLike) -> EncoderState:
        """Get a snapshot of one wheel's encoder state"""
        return self.encoders.get_state(wheel)

    def get_delta_time(self) -> int:
        """Get timestamp units elapsed between the last two timestamps"""
        return self.delta_time
