"""
HUD module - Outputs for the UI collaborator.

This module contains:
- Notification / NotificationLog: Transient player messages and a sink
- HudSnapshot: Display values captured after each tick
"""

from abyssim.hud.notifications import Notification, NotificationLog, NotificationSink
from abyssim.hud.snapshot import HudSnapshot

__all__ = [
    "Notification",
    "NotificationLog",
    "NotificationSink",
    "HudSnapshot",
]
