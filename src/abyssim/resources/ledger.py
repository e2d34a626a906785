"""
Resource ledger - Per-tick oxygen and power bookkeeping.

Provides:
- Oxygen consumption underwater and regeneration at the surface
- Power drain while maneuvering and regeneration at rest
- Cooldown-gated oxygen warnings and a latched power-depleted alert
"""

from dataclasses import dataclass, field
from typing import List, TYPE_CHECKING
import logging

from abyssim.resources.state import OXYGEN_MAX, POWER_MAX

if TYPE_CHECKING:
    from abyssim.simulation.context import SimulationContext


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OxygenWarning:
    """Warning fired while oxygen is in (lower, upper]."""
    lower: float
    upper: float
    cooldown_ms: float
    message: str


def _default_oxygen_warnings() -> List[OxygenWarning]:
    return [
        OxygenWarning(15.0, 30.0, 3000.0, "⚠️ OXYGEN LOW - Consider Surfacing!"),
        OxygenWarning(5.0, 15.0, 2000.0, "🚨 CRITICAL OXYGEN - Surface NOW!"),
        OxygenWarning(0.0, 5.0, 1000.0, "💀 EMERGENCY - OXYGEN DEPLETED!"),
    ]


@dataclass
class LedgerConfig:
    """Resource ledger configuration. Rates are per tick."""
    # Oxygen
    oxygen_regen_per_tick: float = 2.0
    surface_notice_chance: float = 0.01
    surface_notice_message: str = "🌊 Surfaced - Oxygen Regenerating!"
    oxygen_warnings: List[OxygenWarning] = field(default_factory=_default_oxygen_warnings)

    # Power
    power_drain_per_tick: float = 0.03   # Divided by zone power efficiency
    power_regen_per_tick: float = 0.08
    power_rearm_threshold: float = 1.0   # Latch re-arms above this level
    power_depleted_message: str = "🚨 POWER DEPLETED - Movement Impaired!"


class ResourceLedger:
    """Applies drain and regeneration to oxygen and power.

    Oxygen warnings share a single cooldown timestamp, so whichever band
    fires last governs when the next warning may fire. The power alert is
    edge-triggered: it fires once when power hits zero and re-arms only
    after power climbs back above the re-arm threshold.
    """

    def __init__(self, config: LedgerConfig | None = None):
        """Initialize ledger.

        Args:
            config: Ledger configuration. Uses defaults if None.
        """
        self.config = config or LedgerConfig()

    def update(self, context: "SimulationContext") -> None:
        """Run one tick of resource bookkeeping.

        Args:
            context: Simulation context
        """
        if context.vehicle is None:
            return

        self._update_oxygen(context)
        self._check_oxygen_warnings(context)
        self._update_power(context)
        self._check_power_latch(context)

    def _update_oxygen(self, context: "SimulationContext") -> None:
        resources = context.resources

        if resources.is_at_surface and resources.oxygen < OXYGEN_MAX:
            resources.oxygen = min(OXYGEN_MAX, resources.oxygen + self.config.oxygen_regen_per_tick)
            if context.rng.random() < self.config.surface_notice_chance:
                context.notify(self.config.surface_notice_message)
        elif not resources.is_at_surface and resources.oxygen > 0:
            resources.oxygen = max(0.0, resources.oxygen - resources.oxygen_consumption_rate)

    def _check_oxygen_warnings(self, context: "SimulationContext") -> None:
        resources = context.resources
        elapsed = context.now_ms - resources.last_oxygen_warning_at

        for warning in self.config.oxygen_warnings:
            if warning.lower < resources.oxygen <= warning.upper:
                if elapsed >= warning.cooldown_ms:
                    context.notify(warning.message)
                    resources.last_oxygen_warning_at = context.now_ms
                return

    def _update_power(self, context: "SimulationContext") -> None:
        resources = context.resources
        moving = context.vehicle.is_moving

        if moving and resources.power > 0:
            drain = self.config.power_drain_per_tick / resources.power_efficiency
            resources.power = max(0.0, resources.power - drain)
        elif not moving and resources.power < POWER_MAX:
            resources.power = min(POWER_MAX, resources.power + self.config.power_regen_per_tick)

    def _check_power_latch(self, context: "SimulationContext") -> None:
        resources = context.resources

        if resources.power <= 0 and not resources.power_depleted_notified:
            context.notify(self.config.power_depleted_message)
            resources.power_depleted_notified = True
            logger.info("Power depleted, movement disabled until recharge")
        elif resources.power > self.config.power_rearm_threshold:
            resources.power_depleted_notified = False

