"""
Marine life - Steering for ambient fish.

Each fish is pulled back toward its home area, pushed away from the
submersible, and nudged by a small random jitter.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import numpy as np

from abyssim.simulation.physics import PhysicsEngine

if TYPE_CHECKING:
    from abyssim.simulation.context import SimulationContext


@dataclass
class FishAgent:
    """An ambient fish. Lives for the whole session."""
    fish_id: int
    position: np.ndarray
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    home_center: np.ndarray | None = None
    swim_radius: float = 30.0
    facing: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0]))

    def __post_init__(self):
        self.position = np.array(self.position, dtype=np.float64)
        self.velocity = np.array(self.velocity, dtype=np.float64)
        if self.home_center is None:
            self.home_center = self.position.copy()
        else:
            self.home_center = np.array(self.home_center, dtype=np.float64)


@dataclass
class MarineLifeConfig:
    """Fish steering configuration. Forces are per tick."""
    homing_strength: float = 0.01
    avoidance_radius: float = 15.0
    avoidance_strength: float = 0.05
    jitter: tuple[float, float, float] = (0.0025, 0.0015, 0.0025)  # Half-widths
    facing_threshold: float = 0.001
    damping: float = 0.98


class MarineLifeAI:
    """Per-fish steering and integration.

    Velocity changes are applied before the position update and damping
    after it, so damping only affects the next tick's movement.
    """

    def __init__(
        self,
        config: MarineLifeConfig | None = None,
        physics: PhysicsEngine | None = None,
    ):
        """Initialize marine life AI.

        Args:
            config: Steering configuration. Uses defaults if None.
            physics: Shared physics helpers
        """
        self.config = config or MarineLifeConfig()
        self.physics = physics or PhysicsEngine()
        self._jitter = np.array(self.config.jitter, dtype=float)

    def steer(
        self,
        fish: FishAgent,
        vehicle_position: np.ndarray | None,
        rng: np.random.Generator,
    ) -> None:
        """Advance one fish by one tick.

        Args:
            fish: Fish to update in place
            vehicle_position: Submersible position, or None if absent
            rng: Random generator for jitter
        """
        to_home = fish.home_center - fish.position
        if np.linalg.norm(to_home) > fish.swim_radius:
            fish.velocity += self.physics.normalize(to_home) * self.config.homing_strength

        if vehicle_position is not None:
            away = fish.position - vehicle_position
            if np.linalg.norm(away) < self.config.avoidance_radius:
                fish.velocity += self.physics.normalize(away) * self.config.avoidance_strength

        fish.velocity += rng.uniform(-self._jitter, self._jitter)

        fish.position += fish.velocity

        if np.linalg.norm(fish.velocity) > self.config.facing_threshold:
            fish.facing = self.physics.normalize(fish.velocity)

        fish.velocity *= self.config.damping

    def update(self, context: "SimulationContext") -> None:
        """Pipeline stage: steer every fish.

        Args:
            context: Simulation context
        """
        if context.vehicle is None:
            return

        vehicle_position = context.vehicle.position
        for fish in context.fish:
            self.steer(fish, vehicle_position, context.rng)

