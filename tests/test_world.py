"""Tests for collectables, proximity detection, marine life, and world generation."""

import pytest
import numpy as np

from abyssim.hud.notifications import NotificationLog
from abyssim.simulation.context import SimulationContext
from abyssim.vehicle.vehicle import Vehicle, ControlIntent
from abyssim.world.collectables import Collectable, ProximityDetector
from abyssim.world.generator import WorldGenerator, GeneratorConfig
from abyssim.world.marine_life import FishAgent, MarineLifeAI


class ZeroJitter:
    """Random source returning the midpoint of every uniform range."""

    def uniform(self, low, high):
        return (np.asarray(low) + np.asarray(high)) / 2.0


def _crystal(cid, x, value=1):
    return Collectable(collectable_id=cid, position=[x, 0.0, 0.0], value=value, bob_speed=0.0)


def _context(collectables, interact=False):
    log = NotificationLog()
    context = SimulationContext(
        vehicle=Vehicle(position=[0.0, 0.0, 0.0]),
        collectables=collectables,
        sink=log,
    )
    context.begin_tick(ControlIntent(interact=interact), 1.0 / 60.0, now_ms=0.0)
    return context, log


class TestProximityDetector:
    """Test target selection and pickup."""

    def test_nearest_in_range_wins(self):
        """With crystals at 5 and 3, the one at 3 is selected."""
        detector = ProximityDetector()
        far = _crystal(0, 5.0)
        near = _crystal(1, 3.0)
        context, _ = _context([far, near])

        detector.update(context)

        assert context.near_collectable is near

    def test_out_of_range_ignored(self):
        """Nothing at or beyond 8 units is selected."""
        detector = ProximityDetector()
        context, _ = _context([_crystal(0, 8.0), _crystal(1, 20.0)])

        detector.update(context)

        assert context.near_collectable is None

    def test_tie_keeps_first_found(self):
        """Equal distances resolve to list order."""
        detector = ProximityDetector()
        first = _crystal(0, 4.0)
        second = Collectable(collectable_id=1, position=[-4.0, 0.0, 0.0], bob_speed=0.0)
        context, _ = _context([first, second])

        detector.update(context)

        assert context.near_collectable is first

    def test_glow_pulses_selected_and_dims_others(self):
        """Selected glow is 0.3 + 0.1 sin(t*0.005); the rest sit at 0.1."""
        detector = ProximityDetector()
        near = _crystal(0, 2.0)
        other = _crystal(1, 6.0)
        context, _ = _context([near, other])
        context.now_ms = 314.0
        near.glow_opacity = 0.9
        other.glow_opacity = 0.9

        detector.update(context)

        assert near.glow_opacity == pytest.approx(0.3 + 0.1 * np.sin(314.0 * 0.005))
        assert other.glow_opacity == pytest.approx(0.1)

    def test_animation_uses_wall_clock(self):
        """Bob height follows now_ms even with dt of zero."""
        detector = ProximityDetector()
        crystal = Collectable(
            collectable_id=0, position=[50.0, -40.0, 0.0], bob_speed=0.03, rotation_speed=0.02,
        )
        context, _ = _context([crystal])
        context.dt = 0.0
        context.now_ms = 1000.0

        detector.update(context)

        assert crystal.position[1] == pytest.approx(-40.0 + np.sin(1000.0 * 0.03 * 0.001) * 0.5)
        assert crystal.rotation == pytest.approx(0.02)
        assert crystal.original_y == -40.0

    def test_interact_collects_target(self):
        """Interact picks up the selected crystal and clears the target."""
        detector = ProximityDetector()
        crystal = _crystal(0, 2.0, value=4)
        context, log = _context([crystal], interact=True)
        credits = context.resources.credits

        detector.update(context)

        assert not crystal.alive
        assert context.near_collectable is None
        assert context.resources.minerals == 4
        assert context.resources.credits == credits + 40
        assert log.texts == ["+4 Minerals, +40 Credits"]

    def test_consumed_crystals_are_skipped(self):
        """Dead crystals are neither animated nor selectable."""
        detector = ProximityDetector()
        crystal = _crystal(0, 2.0)
        crystal.alive = False
        context, _ = _context([crystal], interact=True)

        detector.update(context)

        assert context.near_collectable is None
        assert crystal.rotation == 0.0
        assert context.resources.minerals == 0

    def test_no_vehicle_is_noop(self):
        """Before the world exists the stage does nothing."""
        detector = ProximityDetector()
        crystal = _crystal(0, 2.0)
        context = SimulationContext(collectables=[crystal])

        detector.update(context)

        assert crystal.rotation == 0.0


class TestMarineLife:
    """Test fish steering."""

    def test_homing_pulls_back(self):
        """A fish outside its radius accelerates toward home."""
        ai = MarineLifeAI()
        fish = FishAgent(fish_id=0, position=[40.0, 0.0, 0.0], home_center=[0.0, 0.0, 0.0],
                         swim_radius=30.0)

        ai.steer(fish, None, ZeroJitter())

        # +0.01 toward home, then damped
        assert fish.position[0] == pytest.approx(40.0 - 0.01)
        assert fish.velocity[0] == pytest.approx(-0.01 * 0.98)

    def test_avoids_vehicle(self):
        """A fish within 15 units is pushed away from the submersible."""
        ai = MarineLifeAI()
        fish = FishAgent(fish_id=0, position=[10.0, 0.0, 0.0], swim_radius=30.0)

        ai.steer(fish, np.zeros(3), ZeroJitter())

        assert fish.position[0] == pytest.approx(10.05)
        assert np.allclose(fish.facing, [1.0, 0.0, 0.0])

    def test_far_vehicle_ignored(self):
        """Beyond 15 units the submersible has no effect."""
        ai = MarineLifeAI()
        fish = FishAgent(fish_id=0, position=[20.0, 0.0, 0.0], swim_radius=30.0)

        ai.steer(fish, np.zeros(3), ZeroJitter())

        assert np.allclose(fish.position, [20.0, 0.0, 0.0])

    def test_damping_applies_after_move(self):
        """Velocity is damped only after the position update."""
        ai = MarineLifeAI()
        fish = FishAgent(fish_id=0, position=[0.0, 0.0, 0.0], velocity=[1.0, 0.0, 0.0])

        ai.steer(fish, None, ZeroJitter())

        assert fish.position[0] == pytest.approx(1.0)
        assert fish.velocity[0] == pytest.approx(0.98)

    def test_slow_fish_keeps_facing(self):
        """Below the speed threshold the facing direction is kept."""
        ai = MarineLifeAI()
        fish = FishAgent(fish_id=0, position=[0.0, 0.0, 0.0], velocity=[0.0, 0.0, 0.0005],
                         facing=[1.0, 0.0, 0.0])

        ai.steer(fish, None, ZeroJitter())

        assert np.allclose(fish.facing, [1.0, 0.0, 0.0])

    def test_jitter_bounds(self):
        """Random jitter stays within its per-axis half-widths."""
        ai = MarineLifeAI()
        rng = np.random.default_rng(3)

        for _ in range(200):
            fish = FishAgent(fish_id=0, position=[0.0, 0.0, 0.0])
            ai.steer(fish, None, rng)
            assert abs(fish.position[0]) <= 0.0025
            assert abs(fish.position[1]) <= 0.0015
            assert abs(fish.position[2]) <= 0.0025

    def test_home_center_fixed_at_spawn(self):
        """The home center defaults to the spawn position and never moves."""
        ai = MarineLifeAI()
        fish = FishAgent(fish_id=0, position=[1.0, 2.0, 3.0], velocity=[0.5, 0.0, 0.0])

        for _ in range(10):
            ai.steer(fish, None, ZeroJitter())

        assert np.allclose(fish.home_center, [1.0, 2.0, 3.0])


class TestWorldGenerator:
    """Test procedural world population."""

    def test_default_counts(self):
        """The default world has 15 crystals and 8 fish."""
        collectables, fish = WorldGenerator(GeneratorConfig(seed=1)).generate()

        assert len(collectables) == 15
        assert len(fish) == 8

    def test_values_and_ranges(self):
        """Generated entities respect the configured ranges."""
        collectables, fish = WorldGenerator(GeneratorConfig(seed=2)).generate()

        for item in collectables:
            assert 1 <= item.value <= 5
            assert -45.0 <= item.position[1] <= -35.0
            assert 0.01 <= item.rotation_speed <= 0.03
            assert item.original_y == item.position[1]
            assert item.alive

        for agent in fish:
            assert 30.0 <= agent.swim_radius <= 50.0
            assert np.allclose(agent.home_center, agent.position)

    def test_stable_unique_ids(self):
        """IDs are unique and follow creation order."""
        collectables, fish = WorldGenerator(GeneratorConfig(seed=3)).generate()

        assert [c.collectable_id for c in collectables] == list(range(15))
        assert [f.fish_id for f in fish] == list(range(8))

    def test_seed_reproducible(self):
        """The same seed yields the same layout."""
        a, _ = WorldGenerator().generate_with_seed(42)
        b, _ = WorldGenerator().generate_with_seed(42)

        assert all(np.allclose(x.position, y.position) for x, y in zip(a, b))
        assert [x.value for x in a] == [y.value for y in b]
