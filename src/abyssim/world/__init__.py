"""
World module - Entities living in the water around the submersible.

This module contains:
- Collectable / ProximityDetector: Mineral crystals and pickup targeting
- FishAgent / MarineLifeAI: Ambient fish steering
- WorldGenerator: Procedural population of crystals and fish
"""

from abyssim.world.collectables import Collectable, ProximityDetector, ProximityConfig
from abyssim.world.marine_life import FishAgent, MarineLifeAI, MarineLifeConfig
from abyssim.world.generator import WorldGenerator, GeneratorConfig

__all__ = [
    "Collectable",
    "ProximityDetector",
    "ProximityConfig",
    "FishAgent",
    "MarineLifeAI",
    "MarineLifeConfig",
    "WorldGenerator",
    "GeneratorConfig",
]
