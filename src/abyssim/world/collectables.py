"""
Collectables - Mineral crystals and proximity detection.

Provides:
- Idle spin and bob animation driven by wall-clock time
- Nearest-in-range target selection and glow pulse
- Interact handling (pickup through the economy)
"""

from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING
import numpy as np

from abyssim.resources.economy import EconomyUpgrade

if TYPE_CHECKING:
    from abyssim.simulation.context import SimulationContext


@dataclass
class Collectable:
    """A mineral crystal that can be picked up once.

    Consumed crystals stay in the world list with ``alive=False``; they are
    skipped by every update and never reinstated.
    """
    collectable_id: int
    position: np.ndarray
    value: int = 1
    rotation_speed: float = 0.01  # radians per tick
    bob_speed: float = 0.02
    original_y: float | None = None
    rotation: float = 0.0
    glow_opacity: float = 0.1
    alive: bool = True

    def __post_init__(self):
        self.position = np.array(self.position, dtype=np.float64)
        if self.original_y is None:
            self.original_y = float(self.position[1])


@dataclass
class ProximityConfig:
    """Proximity detection configuration."""
    detection_range: float = 8.0
    bob_amplitude: float = 0.5
    bob_time_scale: float = 0.001

    # Glow pulse on the selected crystal
    glow_base: float = 0.3
    glow_amplitude: float = 0.1
    glow_frequency: float = 0.005
    glow_idle: float = 0.1


class ProximityDetector:
    """Animates collectables and picks the interact target.

    The bob phase comes from wall-clock milliseconds, not simulation dt,
    so crystals keep moving even on zero-length ticks.
    """

    def __init__(
        self,
        economy: EconomyUpgrade | None = None,
        config: ProximityConfig | None = None,
    ):
        """Initialize detector.

        Args:
            economy: Economy receiving pickups. A default one is created if None.
            config: Proximity configuration. Uses defaults if None.
        """
        self.economy = economy or EconomyUpgrade()
        self.config = config or ProximityConfig()

    def animate(self, collectables: List[Collectable], now_ms: float) -> None:
        """Advance spin and bob of every alive collectable.

        Args:
            collectables: World collectables
            now_ms: Wall-clock time in milliseconds
        """
        for item in collectables:
            if not item.alive:
                continue
            item.rotation += item.rotation_speed
            item.position[1] = item.original_y + np.sin(
                now_ms * item.bob_speed * self.config.bob_time_scale
            ) * self.config.bob_amplitude

    def find_nearest(
        self,
        collectables: List[Collectable],
        position: np.ndarray,
    ) -> Optional[Collectable]:
        """Nearest alive collectable within detection range.

        Ties keep the first one found in list order.

        Args:
            collectables: World collectables
            position: Vehicle position

        Returns:
            Closest collectable, or None if none is in range
        """
        nearest = None
        closest = np.inf

        for item in collectables:
            if not item.alive:
                continue
            distance = np.linalg.norm(item.position - position)
            if distance < self.config.detection_range and distance < closest:
                nearest = item
                closest = distance

        return nearest

    def update_glow(
        self,
        collectables: List[Collectable],
        selected: Optional[Collectable],
        now_ms: float,
    ) -> None:
        """Pulse the selected crystal and dim all others."""
        for item in collectables:
            if item is selected:
                item.glow_opacity = self.config.glow_base + np.sin(
                    now_ms * self.config.glow_frequency
                ) * self.config.glow_amplitude
            else:
                item.glow_opacity = self.config.glow_idle

    def update(self, context: "SimulationContext") -> None:
        """Pipeline stage: animate, select, and handle interact.

        Args:
            context: Simulation context
        """
        if context.vehicle is None:
            return

        self.animate(context.collectables, context.now_ms)

        nearest = self.find_nearest(context.collectables, context.vehicle.position)
        context.near_collectable = nearest
        self.update_glow(context.collectables, nearest, context.now_ms)

        if context.intent.interact and nearest is not None:
            self.economy.collect(context, nearest)
            context.near_collectable = None
