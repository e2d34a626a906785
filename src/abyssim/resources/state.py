"""
Resource state - Oxygen, power, and wallet of the submersible.
"""

from dataclasses import dataclass
from typing import Dict, Any

from abyssim.environment.pressure import PressureZone


OXYGEN_MAX = 100.0
POWER_MAX = 85.0


@dataclass
class ResourceState:
    """Consumables, wallet, and the derived depth readings.

    Power regenerates only up to ``POWER_MAX`` (85), never to 100.
    """
    oxygen: float = OXYGEN_MAX
    power: float = POWER_MAX
    minerals: int = 0
    credits: int = 500

    # Derived each tick from the vehicle pose
    depth: float = 0.0
    is_at_surface: bool = False

    # Derived each tick from depth and hull level
    pressure_zone: PressureZone = PressureZone.SURFACE
    oxygen_consumption_rate: float = 0.02
    power_efficiency: float = 1.0

    # Notification gating
    last_oxygen_warning_at: float = 0.0  # ms
    power_depleted_notified: bool = False

    @property
    def atmospheres(self) -> int:
        """Ambient pressure in whole atmospheres."""
        return int(self.depth // 10) + 1

    def get_state(self) -> Dict[str, Any]:
        """Get resource state for display.

        Returns:
            Dictionary containing resource values
        """
        return {
            "oxygen": self.oxygen,
            "power": self.power,
            "minerals": self.minerals,
            "credits": self.credits,
            "depth": self.depth,
            "is_at_surface": self.is_at_surface,
            "pressure_zone": self.pressure_zone.value,
            "atmospheres": self.atmospheres,
        }


@dataclass
class Upgrades:
    """Purchased upgrade levels."""
    hull_level: int = 1
