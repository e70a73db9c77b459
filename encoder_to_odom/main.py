#!/usr/bin/env python3
"""
Encoder Odometry Replay

Runs recorded encoder frames (timestamp, left angle, right angle) through
the odometry processor and writes the resulting pose, velocity and
distance for every frame.
"""

import argparse
import logging
import math
import sys
from typing import List, Optional

import numpy as np

from .config import OdometryConfig, load_config
from .encoder_tracker import WheelId
from .processor import OdometryProcessor

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ('timestamp', 'left_deg', 'right_deg')
OUTPUT_COLUMNS = (
    'timestamp', 'x', 'y', 'theta', 'linear_x', 'angular_z',
    'frame_distance', 'total_distance'
)


def load_frames(path: str) -> np.ndarray:
    """
    Load recorded encoder frames from CSV

    Args:
        path (str): CSV file with a 'timestamp,left_deg,right_deg' header

    Returns:
        np.ndarray: Array of shape (N, 3)
    """
    try:
        frames = np.loadtxt(path, delimiter=',', skiprows=1, ndmin=2)
    except ValueError as e:
        raise ValueError(f"Could not parse frame log {path}: {e}")

    if frames.size and frames.shape[1] != len(FRAME_COLUMNS):
        raise ValueError(
            f"Frame log {path} must have {len(FRAME_COLUMNS)} columns "
            f"({','.join(FRAME_COLUMNS)}), found {frames.shape[1]}"
        )
    return frames


def replay(
    processor: OdometryProcessor, frames: np.ndarray, diagnostics_every: int = 0
) -> np.ndarray:
    """
    Feed frames through the processor in capture order

    Args:
        processor (OdometryProcessor): Processor to drive
        frames (np.ndarray): Rows of (timestamp, left_deg, right_deg)
        diagnostics_every (int): Log diagnostics every N frames (0 = off)

    Returns:
        np.ndarray: One row of OUTPUT_COLUMNS per frame
    """
    results = np.zeros((len(frames), len(OUTPUT_COLUMNS)))

    for i, (timestamp, left_deg, right_deg) in enumerate(frames):
        processor.record_reading(WheelId.LEFT, float(left_deg))
        processor.record_reading(WheelId.RIGHT, float(right_deg))
        processor.update_timestamp(int(timestamp))
        processor.process_data()

        pose = processor.get_position()
        velocity = processor.get_velocity()
        distance = processor.get_distance()
        results[i] = (
            timestamp, pose.x, pose.y, pose.theta,
            velocity.linear_x, velocity.angular_z,
            distance.frame_distance, distance.total_distance
        )

        if diagnostics_every and (i + 1) % diagnostics_every == 0:
            log_diagnostics(processor, i + 1)

    return results


def log_diagnostics(processor: OdometryProcessor, frame_count: int):
    """Log pose, velocity and per-wheel totals"""
    pose = processor.get_position()
    velocity = processor.get_velocity()

    wheel_strings = []
    for wheel in WheelId:
        state = processor.get_encoder_state(wheel)
        wheel_strings.append(
            f"{wheel.name.lower()}: {state.total_degrees:.1f}° / {state.total_meters:.3f}m"
        )

    logger.info(f"Frame {frame_count} - Encoders - {', '.join(wheel_strings)}")
    logger.info(
        f"Pose: x={pose.x:.3f}, y={pose.y:.3f}, θ={math.degrees(pose.theta):.1f}°"
    )
    logger.info(
        f"Velocity: linear={velocity.linear_x:.3f}m/s, "
        f"angular={math.degrees(velocity.angular_z):.1f}°/s"
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Replay recorded wheel encoder angles through the odometry processor'
    )
    parser.add_argument('frames', help='CSV file with timestamp,left_deg,right_deg rows')
    parser.add_argument('--config', help='YAML odometry parameter file')
    parser.add_argument('--output', help='Write per-frame results to this CSV file')
    parser.add_argument(
        '--diagnostics-every', type=int, default=0, metavar='N',
        help='Log diagnostics every N frames (default: off)'
    )
    parser.add_argument(
        '--log-level', default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args.config) if args.config else OdometryConfig()
        processor = OdometryProcessor.from_config(config)
        logger.info(f"Wheel circumference: {config.wheel_circumference:.4f}m")
        logger.info(f"Wheel base: {config.wheel_base:.4f}m")
        logger.info(f"Gear ratio: {config.gear_ratio:.5f}")

        frames = load_frames(args.frames)
        results = replay(processor, frames, args.diagnostics_every)

        if args.output:
            np.savetxt(
                args.output, results, delimiter=',',
                header=','.join(OUTPUT_COLUMNS), comments='', fmt='%.6f'
            )
            logger.info(f"Wrote {len(results)} frames to {args.output}")
    except KeyboardInterrupt:
        return 1
    except (ValueError, OSError) as e:
        logger.error(f"Replay failed: {e}")
        return 1

    pose = processor.get_position()
    distance = processor.get_distance()
    logger.info(
        f"Replayed {len(frames)} frames: x={pose.x:.3f}, y={pose.y:.3f}, "
        f"θ={math.degrees(pose.theta):.1f}°, total distance={distance.total_distance:.3f}m"
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
