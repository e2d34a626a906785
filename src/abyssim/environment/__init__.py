"""
Environment module - Depth and pressure hazards.

This module contains:
- EnvironmentModel: Pressure zone classification and hazard draws
- PressureZone: Discrete hazard tiers
- ZoneProfile: Effects of a zone on oxygen and power
"""

from abyssim.environment.pressure import (
    EnvironmentModel,
    EnvironmentConfig,
    PressureZone,
    ZoneProfile,
    max_safe_depth,
)

__all__ = [
    "EnvironmentModel",
    "EnvironmentConfig",
    "PressureZone",
    "ZoneProfile",
    "max_safe_depth",
]
