"""
Encoder To Odom Package

Dead-reckoning odometry for two-wheel differential drive robots from
absolute encoder angle readings.
"""

from .config import OdometryConfig, load_config
from .encoder_tracker import EncoderState, WheelId
from .processor import Distance, OdometryProcessor, Pose, Velocity

__version__ = "1.1.0"

__all__ = [
    'Distance',
    'EncoderState',
    'OdometryConfig',
    'OdometryProcessor',
    'Pose',
    'Velocity',
    'WheelId',
    'load_config',
]
