"""
Economy - Collection rewards and upgrade purchases.

Provides:
- Mineral and credit rewards for collected crystals
- Hull upgrades that extend the safe diving depth
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from abyssim.simulation.context import SimulationContext
    from abyssim.world.collectables import Collectable


logger = logging.getLogger(__name__)


class EconomyError(Exception):
    """Base class for rejected economy transactions."""


class InsufficientCredits(EconomyError):
    """Raised when a purchase costs more than the player holds."""

    def __init__(self, cost: int, credits: int):
        super().__init__(f"Upgrade costs {cost} credits, only {credits} available")
        self.cost = cost
        self.credits = credits


@dataclass
class EconomyConfig:
    """Economy configuration."""
    credits_per_mineral: int = 10
    hull_cost_per_level: int = 1000
    insufficient_credits_message: str = "Not enough credits for hull upgrade!"


class EconomyUpgrade:
    """Applies rewards and purchases to the resource state.

    Usage:
        economy = EconomyUpgrade()
        economy.collect(context, crystal)
        economy.upgrade_hull(context)
    """

    def __init__(self, config: EconomyConfig | None = None):
        """Initialize economy.

        Args:
            config: Economy configuration. Uses defaults if None.
        """
        self.config = config or EconomyConfig()

    def collect(self, context: "SimulationContext", item: "Collectable") -> bool:
        """Award an item and mark it consumed.

        Args:
            context: Simulation context
            item: Collectable to pick up

        Returns:
            True if the item was awarded, False if it was already consumed
        """
        if not item.alive:
            return False

        credits = item.value * self.config.credits_per_mineral
        context.resources.minerals += item.value
        context.resources.credits += credits
        item.alive = False

        context.notify(f"+{item.value} Minerals, +{credits} Credits")
        return True

    def upgrade_cost(self, hull_level: int) -> int:
        """Price of the next hull level.

        Args:
            hull_level: Current hull level

        Returns:
            Cost in credits
        """
        return self.config.hull_cost_per_level * hull_level

    def can_afford_upgrade(self, context: "SimulationContext") -> bool:
        """Whether the next hull level is affordable."""
        return context.resources.credits >= self.upgrade_cost(context.upgrades.hull_level)

    def upgrade_hull(self, context: "SimulationContext") -> int:
        """Buy the next hull level.

        Args:
            context: Simulation context

        Returns:
            New hull level

        Raises:
            InsufficientCredits: If credits are below the cost. Nothing is
                deducted in that case.
        """
        resources = context.resources
        upgrades = context.upgrades
        cost = self.upgrade_cost(upgrades.hull_level)

        if resources.credits < cost:
            context.notify(self.config.insufficient_credits_message)
            raise InsufficientCredits(cost, resources.credits)

        resources.credits -= cost
        upgrades.hull_level += 1
        logger.info(f"Hull upgraded to level {upgrades.hull_level} for {cost} credits")
        context.notify(f"Hull Upgraded to Level {upgrades.hull_level}!")
        return upgrades.hull_level
