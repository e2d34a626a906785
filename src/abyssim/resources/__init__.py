"""
Resources module - Consumables and economy.

This module contains:
- ResourceState: Oxygen, power, minerals, credits, depth readings
- ResourceLedger: Per-tick drain, regeneration, and warnings
- EconomyUpgrade: Collection rewards and hull upgrades
"""

from abyssim.resources.state import ResourceState, Upgrades
from abyssim.resources.ledger import ResourceLedger, LedgerConfig
from abyssim.resources.economy import (
    EconomyUpgrade,
    EconomyConfig,
    EconomyError,
    InsufficientCredits,
)

__all__ = [
    "ResourceState",
    "Upgrades",
    "ResourceLedger",
    "LedgerConfig",
    "EconomyUpgrade",
    "EconomyConfig",
    "EconomyError",
    "InsufficientCredits",
]
