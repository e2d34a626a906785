"""
abyssim - Simulation core for a real-time underwater exploration game.

This package turns per-frame time deltas and player intent into world state:
- Submersible motion with smoothed, power-gated handling
- Depth pressure zones driving oxygen and power consumption
- Oxygen and power bookkeeping with gated warnings
- Mineral crystals, pickups, and hull upgrades
- Ambient fish steering
"""

__version__ = "0.1.0"

from abyssim.simulation.simulator import Simulator, SimulatorConfig
from abyssim.vehicle.vehicle import Vehicle, ControlIntent

__all__ = ["Simulator", "SimulatorConfig", "Vehicle", "ControlIntent", "__version__"]
