"""
HUD snapshot - Read model handed to the UI collaborator after a tick.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, TYPE_CHECKING
import math

from abyssim.environment.pressure import PressureZone

if TYPE_CHECKING:
    from abyssim.simulation.context import SimulationContext
    from abyssim.resources.economy import EconomyUpgrade


ZONE_COLORS = {
    PressureZone.SURFACE: "#00ff88",
    PressureZone.SHALLOW: "#88ff00",
    PressureZone.DEEP: "#ffff00",
    PressureZone.ABYSSAL: "#ff8800",
    PressureZone.CRUSH_DEPTH: "#ff0000",
}


@dataclass(frozen=True)
class HudSnapshot:
    """Display values for one frame.

    Gauges are rounded the way they are displayed: oxygen and power up,
    depth down.
    """
    oxygen: float
    power: float
    oxygen_display: int
    power_display: int
    minerals: int
    credits: int
    depth_m: int
    pressure_zone: str
    pressure_color: str
    atmospheres: int
    show_collect_prompt: bool
    hull_level: int
    upgrade_cost: int
    upgrade_label: str
    upgrade_enabled: bool

    @classmethod
    def capture(
        cls,
        context: "SimulationContext",
        economy: "EconomyUpgrade",
    ) -> "HudSnapshot":
        """Build a snapshot from the current simulation state.

        Args:
            context: Simulation context (after the tick)
            economy: Economy used to price the next upgrade

        Returns:
            HUD snapshot
        """
        resources = context.resources
        hull_level = context.upgrades.hull_level
        cost = economy.upgrade_cost(hull_level)

        return cls(
            oxygen=resources.oxygen,
            power=resources.power,
            oxygen_display=math.ceil(resources.oxygen),
            power_display=math.ceil(resources.power),
            minerals=resources.minerals,
            credits=resources.credits,
            depth_m=math.floor(resources.depth),
            pressure_zone=resources.pressure_zone.label,
            pressure_color=ZONE_COLORS[resources.pressure_zone],
            atmospheres=resources.atmospheres,
            show_collect_prompt=context.near_collectable is not None,
            hull_level=hull_level,
            upgrade_cost=cost,
            upgrade_label=f"Upgrade Hull (Lvl {hull_level + 1}) - {cost} Credits",
            upgrade_enabled=resources.credits >= cost,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot as a plain dictionary."""
        return asdict(self)
