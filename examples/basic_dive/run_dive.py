#!/usr/bin/env python3
"""
Basic Dive Example

This example demonstrates how to:
1. Build a seeded world
2. Drive the submersible with scripted control intent
3. Collect a crystal and try a hull upgrade
4. Read the HUD snapshot and notifications

Run with: python run_dive.py
"""

import logging
import sys

from abyssim import Simulator, SimulatorConfig, ControlIntent
from abyssim.hud import NotificationLog


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def scripted_intent(step: int) -> ControlIntent:
    """Dive, cruise in wide left turns, then surface."""
    if step < 240:
        return ControlIntent(descend=True, forward=True)
    if step < 600:
        return ControlIntent(forward=True, turn_left=(step % 120) < 30)
    return ControlIntent(ascend=True)


def main():
    setup_logging()

    print("=" * 60)
    print("abyssim Basic Dive Example")
    print("=" * 60)

    # Step 1: Build the world
    print("\n1. Building world...")
    log = NotificationLog()
    sim = Simulator(SimulatorConfig(seed=42), notification_sink=log)
    sim.build_world()

    print(f"   Crystals: {len(sim.collectables)}")
    print(f"   Fish: {len(sim.fish)}")

    # Step 2: Run the dive
    print("\n2. Running dive (900 ticks at 60Hz = 15 seconds)...")
    sim.start()

    dt = sim.config.default_dt
    for step in range(900):
        intent = scripted_intent(step)
        if sim.context.near_collectable is not None:
            intent.interact = True

        hud = sim.step(intent, dt, now_ms=step * dt * 1000.0)

        if (step + 1) % 150 == 0:
            print(f"   Tick {step + 1}: Depth = {hud.depth_m}m ({hud.pressure_zone}), "
                  f"O2 = {hud.oxygen_display}%, Power = {hud.power_display}%, "
                  f"Credits = {hud.credits}")

    # Step 3: Try an upgrade
    print("\n3. Attempting hull upgrade...")
    hud = sim.hud()
    print(f"   {hud.upgrade_label}")
    purchased = sim.purchase_upgrade("hull")
    print(f"   Purchased: {purchased}")

    # Step 4: Final state
    print("\n4. Final state:")
    hud = sim.hud()
    for key, value in hud.to_dict().items():
        print(f"   {key}: {value}")

    print(f"\n   Notifications emitted: {len(log)}")
    for text in log.texts[-5:]:
        print(f"   - {text}")

    sim.stop()


if __name__ == "__main__":
    main()
