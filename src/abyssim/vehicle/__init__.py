"""
Vehicle module - The player's submersible.

This module contains:
- Vehicle: Pose and motion state
- ControlIntent: Per-tick player intent
- VehicleConfig: Spawn configuration
"""

from abyssim.vehicle.vehicle import Vehicle, ControlIntent, VehicleConfig

__all__ = [
    "Vehicle",
    "ControlIntent",
    "VehicleConfig",
]
