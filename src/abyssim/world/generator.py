"""
World generator - Procedural placement of crystals and fish.

Generates:
- Mineral crystals scattered near the sea floor
- Fish schools in the upper water column, each with a home area
"""

from dataclasses import dataclass
from typing import List, Tuple
import numpy as np

from abyssim.world.collectables import Collectable
from abyssim.world.marine_life import FishAgent


@dataclass
class GeneratorConfig:
    """Configuration for procedural world population."""
    # Crystals
    collectable_count: int = 15
    collectable_spread: float = 150.0              # Width of the square area (x, z)
    collectable_y_range: Tuple[float, float] = (-45.0, -35.0)
    collectable_value_range: Tuple[int, int] = (1, 5)  # Inclusive
    rotation_speed_range: Tuple[float, float] = (0.01, 0.03)
    bob_speed_range: Tuple[float, float] = (0.02, 0.05)

    # Fish
    fish_count: int = 8
    fish_spread: float = 200.0
    fish_y_range: Tuple[float, float] = (-20.0, 10.0)
    fish_initial_speed: Tuple[float, float, float] = (0.1, 0.05, 0.1)  # Half-widths
    swim_radius_range: Tuple[float, float] = (30.0, 50.0)

    # Random seed (None for random)
    seed: int | None = None


class WorldGenerator:
    """Procedural world population.

    The simulation core never spawns entities on its own; everything it
    updates is created here (or handed in by the host) once, at world
    build time.

    Usage:
        generator = WorldGenerator(GeneratorConfig(seed=7))
        collectables, fish = generator.generate()
    """

    def __init__(self, config: GeneratorConfig | None = None):
        """Initialize generator with optional configuration.

        Args:
            config: Generator configuration. Uses defaults if None.
        """
        self.config = config or GeneratorConfig()
        self._rng = np.random.default_rng(self.config.seed)

    def generate(self) -> Tuple[List[Collectable], List[FishAgent]]:
        """Generate a new random layout.

        Returns:
            Tuple of (collectables, fish)
        """
        return self._generate_collectables(), self._generate_fish()

    def generate_with_seed(self, seed: int) -> Tuple[List[Collectable], List[FishAgent]]:
        """Generate a layout with a specific seed.

        Args:
            seed: Random seed

        Returns:
            Tuple of (collectables, fish)
        """
        self._rng = np.random.default_rng(seed)
        return self.generate()

    def _generate_collectables(self) -> List[Collectable]:
        cfg = self.config
        half = cfg.collectable_spread / 2
        low_value, high_value = cfg.collectable_value_range
        collectables = []

        for i in range(cfg.collectable_count):
            position = np.array([
                self._rng.uniform(-half, half),
                self._rng.uniform(*cfg.collectable_y_range),
                self._rng.uniform(-half, half),
            ])
            collectables.append(Collectable(
                collectable_id=i,
                position=position,
                value=int(self._rng.integers(low_value, high_value + 1)),
                rotation_speed=float(self._rng.uniform(*cfg.rotation_speed_range)),
                bob_speed=float(self._rng.uniform(*cfg.bob_speed_range)),
            ))

        return collectables

    def _generate_fish(self) -> List[FishAgent]:
        cfg = self.config
        half = cfg.fish_spread / 2
        speed = np.array(cfg.fish_initial_speed)
        fish = []

        for i in range(cfg.fish_count):
            position = np.array([
                self._rng.uniform(-half, half),
                self._rng.uniform(*cfg.fish_y_range),
                self._rng.uniform(-half, half),
            ])
            fish.append(FishAgent(
                fish_id=i,
                position=position,
                velocity=self._rng.uniform(-speed, speed),
                swim_radius=float(self._rng.uniform(*cfg.swim_radius_range)),
            ))

        return fish
