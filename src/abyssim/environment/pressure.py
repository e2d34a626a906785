"""
Pressure model - Depth hazard zones.

Provides:
- Pressure zone classification from depth and hull level
- Per-zone oxygen consumption and power efficiency
- Random hull-stress hazard notifications
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from abyssim.simulation.context import SimulationContext


logger = logging.getLogger(__name__)


class PressureZone(Enum):
    """Discrete hazard tiers, shallowest first."""
    SURFACE = "Surface"
    SHALLOW = "Shallow"
    DEEP = "Deep"
    ABYSSAL = "Abyssal"
    CRUSH_DEPTH = "CrushDepth"

    @property
    def label(self) -> str:
        """Text shown on the HUD."""
        if self is PressureZone.CRUSH_DEPTH:
            return "CRUSH DEPTH"
        return self.value


@dataclass(frozen=True)
class ZoneProfile:
    """Effects of one pressure zone."""
    zone: PressureZone
    upper_bound_fraction: Optional[float]  # Fraction of max safe depth, None = unbounded
    oxygen_rate: float                     # Oxygen consumed per tick
    power_efficiency: float                # Divides power drain
    hazard_chance: float = 0.0             # Bernoulli probability per tick
    hazard_message: str = ""


def _default_zones() -> List[ZoneProfile]:
    return [
        ZoneProfile(PressureZone.SHALLOW, 0.3, 0.03, 1.0),
        ZoneProfile(PressureZone.DEEP, 0.6, 0.045, 0.9),
        ZoneProfile(
            PressureZone.ABYSSAL, 1.0, 0.06, 0.8,
            hazard_chance=0.005,
            hazard_message="⚠️ High Pressure - Hull Stress Detected!",
        ),
        ZoneProfile(
            PressureZone.CRUSH_DEPTH, None, 0.15, 0.6,
            hazard_chance=0.02,
            hazard_message="🚨 DANGER - HULL INTEGRITY FAILING!",
        ),
    ]


@dataclass
class EnvironmentConfig:
    """Pressure zone table configuration."""
    # Surface band is fixed in meters, not scaled by hull level
    surface_band_m: float = 10.0
    surface_oxygen_rate: float = 0.02
    surface_power_efficiency: float = 1.0

    # Max safe depth = base + (hull_level - 1) * per_level
    base_safe_depth_m: float = 100.0
    safe_depth_per_hull_level_m: float = 50.0

    # Zones below the surface band, evaluated in order
    zones: List[ZoneProfile] = field(default_factory=_default_zones)


def max_safe_depth(hull_level: int, config: EnvironmentConfig | None = None) -> float:
    """Maximum safe depth for a hull level.

    Args:
        hull_level: Hull upgrade level (>= 1)
        config: Environment configuration

    Returns:
        Depth in meters
    """
    config = config or EnvironmentConfig()
    return config.base_safe_depth_m + (hull_level - 1) * config.safe_depth_per_hull_level_m


class EnvironmentModel:
    """Derives the pressure zone and its effects.

    ``evaluate`` is a pure function of (depth, hull_level). ``update`` is
    the pipeline stage: it writes the result into the context and draws
    the per-tick hazard notification.

    Usage:
        model = EnvironmentModel()
        profile = model.evaluate(depth=65.0, hull_level=1)
        assert profile.zone is PressureZone.DEEP
    """

    def __init__(self, config: EnvironmentConfig | None = None):
        """Initialize environment model.

        Args:
            config: Environment configuration. Uses defaults if None.
        """
        self.config = config or EnvironmentConfig()
        self._surface = ZoneProfile(
            PressureZone.SURFACE,
            None,
            self.config.surface_oxygen_rate,
            self.config.surface_power_efficiency,
        )

    def max_safe_depth(self, hull_level: int) -> float:
        """Maximum safe depth for a hull level."""
        return max_safe_depth(hull_level, self.config)

    def evaluate(self, depth: float, hull_level: int) -> ZoneProfile:
        """Classify a depth into a pressure zone.

        Ranges are half-open and checked shallowest first; the first match
        wins.

        Args:
            depth: Depth in meters (>= 0)
            hull_level: Hull upgrade level

        Returns:
            Profile of the matching zone
        """
        if depth < self.config.surface_band_m:
            return self._surface

        limit = self.max_safe_depth(hull_level)
        for profile in self.config.zones:
            if profile.upper_bound_fraction is None:
                return profile
            if depth < limit * profile.upper_bound_fraction:
                return profile

        return self.config.zones[-1]

    def update(self, context: "SimulationContext") -> None:
        """Apply the current zone to the resource state.

        Args:
            context: Simulation context
        """
        if context.vehicle is None:
            return

        resources = context.resources
        profile = self.evaluate(resources.depth, context.upgrades.hull_level)

        if profile.zone is not resources.pressure_zone:
            logger.debug(
                f"Pressure zone {resources.pressure_zone.value} -> {profile.zone.value} "
                f"at {resources.depth:.1f}m"
            )

        resources.pressure_zone = profile.zone
        resources.oxygen_consumption_rate = profile.oxygen_rate
        resources.power_efficiency = profile.power_efficiency

        if profile.hazard_chance > 0 and context.rng.random() < profile.hazard_chance:
            context.notify(profile.hazard_message)
