#!/usr/bin/env python3
"""
Odometry configuration

Robot geometry and encoder direction settings, loadable from a YAML
parameter file.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OdometryConfig:
    """Immutable robot and encoder parameters"""
    wheel_circumference: float = 1.0373  # meters
    wheel_base: float = 0.5065           # meters between wheel centers
    gear_ratio: float = 2.38462          # encoder degrees per wheel degree
    rollover_threshold: float = 100.0    # degrees
    right_forward_increases: bool = True
    left_forward_increases: bool = True


# YAML section -> fields read from it
CONFIG_SECTIONS = {
    'robot': ('wheel_circumference', 'wheel_base', 'gear_ratio', 'rollover_threshold'),
    'direction': ('right_forward_increases', 'left_forward_increases'),
}


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Parameter '{name}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Parameter '{name}' must be a number, got {value!r}")


def _as_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Parameter '{name}' must be true or false, got {value!r}")
    return value


def config_from_dict(data: Dict[str, Any]) -> OdometryConfig:
    """
    Build a configuration from a nested parameter mapping

    Missing parameters keep their defaults, unknown ones are ignored with a
    warning.

    Args:
        data (Dict[str, Any]): Mapping with 'robot' and 'direction' sections

    Returns:
        OdometryConfig: Parsed configuration
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Odometry configuration must be a mapping")

    types = {f.name: f.type for f in fields(OdometryConfig)}
    values = {}

    for section, content in data.items():
        if section not in CONFIG_SECTIONS:
            logger.warning(f"Ignoring unknown configuration section '{section}'")
            continue
        if content is None:
            continue
        if not isinstance(content, dict):
            raise ValueError(f"Configuration section '{section}' must be a mapping")

        for name, value in content.items():
            if name not in CONFIG_SECTIONS[section]:
                logger.warning(f"Ignoring unknown parameter '{section}.{name}'")
                continue
            if types[name] in (bool, 'bool'):
                values[name] = _as_bool(f"{section}.{name}", value)
            else:
                values[name] = _as_float(f"{section}.{name}", value)

    return OdometryConfig(**values)


def load_config(path: str) -> OdometryConfig:
    """
    Load odometry parameters from a YAML file

    Args:
        path (str): Path to the YAML parameter file

    Returns:
        OdometryConfig: Parsed configuration
    """
    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    config = config_from_dict(data)
    logger.info(f"Loaded odometry configuration from {path}")
    return config
