"""
Simulation context - Everything one tick reads and writes.

Holds:
- Session state (vehicle, resources, upgrades, crystals, fish)
- Per-tick inputs (intent, dt, wall-clock time)
- The random generator and notification sink shared by all stages
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
import logging
import numpy as np

from abyssim.hud.notifications import Notification, NotificationSink, DEFAULT_DURATION_MS
from abyssim.resources.state import ResourceState, Upgrades
from abyssim.vehicle.vehicle import Vehicle, ControlIntent
from abyssim.world.collectables import Collectable
from abyssim.world.marine_life import FishAgent


logger = logging.getLogger(__name__)


def _discard(notification: Notification) -> None:
    pass


@dataclass
class SimulationContext:
    """Explicit world state threaded through the tick pipeline.

    There is exactly one context per simulator; stages receive it by
    reference and never look state up globally. ``vehicle`` is None until
    the world is built, and every stage no-ops in that case.
    """
    vehicle: Optional[Vehicle] = None
    resources: ResourceState = field(default_factory=ResourceState)
    upgrades: Upgrades = field(default_factory=Upgrades)
    collectables: List[Collectable] = field(default_factory=list)
    fish: List[FishAgent] = field(default_factory=list)

    # Per-tick inputs
    intent: ControlIntent = field(default_factory=ControlIntent)
    dt: float = 0.0
    now_ms: float = 0.0

    # Per-tick outputs
    near_collectable: Optional[Collectable] = None

    # Shared services
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    sink: NotificationSink = _discard
    notification_duration_ms: float = DEFAULT_DURATION_MS

    # Timing
    time: float = 0.0
    frame: int = 0

    @property
    def alive_collectables(self) -> List[Collectable]:
        """Collectables not yet picked up."""
        return [c for c in self.collectables if c.alive]

    def get_collectable(self, collectable_id: int) -> Optional[Collectable]:
        """Get collectable by stable ID.

        Args:
            collectable_id: Collectable ID

        Returns:
            Collectable if found, consumed or not
        """
        for item in self.collectables:
            if item.collectable_id == collectable_id:
                return item
        return None

    def begin_tick(self, intent: ControlIntent, dt: float, now_ms: float) -> None:
        """Load the inputs of a new tick.

        Args:
            intent: Player control intent
            dt: Elapsed seconds since the previous tick
            now_ms: Wall-clock time in milliseconds
        """
        self.intent = intent
        self.dt = dt
        self.now_ms = now_ms

    def advance_time(self, dt: float) -> None:
        """Advance simulation time.

        Args:
            dt: Time step in seconds
        """
        self.time += dt
        self.frame += 1

    def notify(self, text: str) -> None:
        """Emit a player notification.

        Args:
            text: Message text
        """
        logger.info(f"Notification: {text}")
        self.sink(Notification(text, self.now_ms, self.notification_duration_ms))

    def get_state(self) -> Dict[str, Any]:
        """Get context state for serialization.

        Returns:
            Dictionary containing world state
        """
        return {
            "time": self.time,
            "frame": self.frame,
            "vehicle": self.vehicle.get_telemetry() if self.vehicle else None,
            "resources": self.resources.get_state(),
            "hull_level": self.upgrades.hull_level,
            "collectables_remaining": len(self.alive_collectables),
            "near_collectable": (
                self.near_collectable.collectable_id if self.near_collectable else None
            ),
            "fish_count": len(self.fish),
        }
