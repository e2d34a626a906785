"""Tests for the tick pipeline and the simulator."""

import pytest
import numpy as np

from abyssim.hud.notifications import NotificationLog
from abyssim.hud.snapshot import HudSnapshot
from abyssim.simulation.pipeline import Pipeline, PipelineOrderError, stage
from abyssim.simulation.simulator import Simulator, SimulatorConfig
from abyssim.vehicle.vehicle import ControlIntent
from abyssim.world.collectables import Collectable


def _noop(context):
    pass


def _empty_world(seed=0):
    log = NotificationLog()
    sim = Simulator(SimulatorConfig(seed=seed), notification_sink=log)
    sim.build_world(collectables=[], fish=[])
    sim.start()
    return sim, log


class TestPipeline:
    """Test stage order validation."""

    def test_valid_order_accepted(self):
        """A reader placed after its writer is fine."""
        pipeline = Pipeline([
            stage("a", _noop, writes=["x"]),
            stage("b", _noop, reads=["x", "dt"], writes=["y"]),
        ])

        assert pipeline.names == ["a", "b"]

    def test_read_before_write_rejected(self):
        """Reading a field that only a later stage writes is an error."""
        with pytest.raises(PipelineOrderError):
            Pipeline([
                stage("b", _noop, reads=["x"]),
                stage("a", _noop, writes=["x"]),
            ])

    def test_previous_tick_read_allowed(self):
        """Declaring the read as previous-tick makes the order legal."""
        pipeline = Pipeline([
            stage("b", _noop, reads_previous=["x"]),
            stage("a", _noop, writes=["x"]),
        ])

        assert pipeline.names == ["b", "a"]

    def test_duplicate_names_rejected(self):
        """Stage names are unique."""
        with pytest.raises(PipelineOrderError):
            Pipeline([stage("a", _noop), stage("a", _noop)])

    def test_read_both_ways_rejected(self):
        """A field cannot be both a current and a previous-tick read."""
        with pytest.raises(PipelineOrderError):
            Pipeline([stage("a", _noop, reads=["x"], reads_previous=["x"])])

    def test_runs_in_order(self):
        """Stages run in declaration order."""
        calls = []
        pipeline = Pipeline([
            stage("first", lambda ctx: calls.append("first")),
            stage("second", lambda ctx: calls.append("second")),
        ])

        pipeline.run(None)

        assert calls == ["first", "second"]

    def test_order_error_is_value_error(self):
        """Order errors can be caught as ValueError."""
        assert issubclass(PipelineOrderError, ValueError)


class TestSimulatorLifecycle:
    """Test session lifecycle."""

    def test_stage_order(self):
        """The tick runs motion, environment, resources, proximity, marine life."""
        sim = Simulator()

        assert sim.pipeline.names == [
            "motion", "environment", "resources", "proximity", "marine_life",
        ]

    def test_start_requires_world(self):
        """Starting before building the world is an error."""
        sim = Simulator()

        with pytest.raises(RuntimeError):
            sim.start()

    def test_build_world_generates_defaults(self):
        """Without host entities the default layout is generated."""
        sim = Simulator(SimulatorConfig(seed=5))
        vehicle = sim.build_world()

        assert np.allclose(vehicle.position, [0.0, -10.0, 0.0])
        assert len(sim.collectables) == 15
        assert len(sim.fish) == 8

    def test_step_when_stopped_returns_none(self):
        """Stopped or paused simulators do not tick."""
        sim, _ = _empty_world()
        sim.stop()
        assert sim.step(ControlIntent(forward=True)) is None

        sim.start()
        sim.pause()
        assert sim.step(ControlIntent(forward=True)) is None
        assert sim.time == 0.0

        sim.resume()
        assert sim.step(ControlIntent(forward=True)) is not None

    def test_negative_dt_rejected(self):
        """Negative time steps are rejected."""
        sim, _ = _empty_world()

        with pytest.raises(ValueError):
            sim.step(dt=-0.01, now_ms=0.0)

    def test_zero_dt_accepted(self):
        """A zero-length tick still runs every stage."""
        sim, _ = _empty_world()

        hud = sim.step(dt=0.0, now_ms=0.0)

        assert hud is not None
        assert sim.context.frame == 1

    def test_step_advances_time(self):
        """Each step adds dt to simulation time."""
        sim, _ = _empty_world()

        sim.step(dt=0.5, now_ms=0.0)
        sim.step(now_ms=16.0)

        assert sim.time == pytest.approx(0.5 + 1.0 / 60.0)

    def test_callbacks(self):
        """Pre and post callbacks receive the simulator and dt."""
        sim, _ = _empty_world()
        seen = []
        sim.add_pre_step_callback(lambda s, dt: seen.append(("pre", dt)))
        sim.add_post_step_callback(lambda s, dt: seen.append(("post", dt)))

        sim.step(dt=0.02, now_ms=0.0)

        assert seen == [("pre", 0.02), ("post", 0.02)]

    def test_step_until(self):
        """step_until stops when the condition holds."""
        sim, _ = _empty_world()

        steps = sim.step_until(lambda s: s.context.frame >= 30)

        assert steps == 30
        assert sim.time == pytest.approx(0.5)

    def test_step_until_max_steps(self):
        """step_until never exceeds max_steps."""
        sim, _ = _empty_world()

        steps = sim.step_until(lambda s: False, max_steps=7)

        assert steps == 7

    def test_reset(self):
        """Reset discards the world and stops the session."""
        sim, _ = _empty_world()
        sim.step(now_ms=0.0)

        sim.reset()

        assert sim.vehicle is None
        assert not sim.is_running
        assert sim.time == 0.0
        assert sim.resources.credits == 500

    def test_reset_with_rebuild(self):
        """Rebuilding replaces the old entities with a fresh world."""
        sim, _ = _empty_world()
        crystal = Collectable(collectable_id=0, position=[0.0, -10.0, 0.0], bob_speed=0.0)
        sim.build_world(collectables=[crystal], fish=[])
        sim.step(ControlIntent(interact=True), now_ms=0.0)
        assert not crystal.alive

        sim.reset(rebuild_world=True)

        assert np.allclose(sim.vehicle.position, [0.0, -10.0, 0.0])
        assert crystal not in sim.collectables
        assert len(sim.collectables) == 15
        assert all(c.alive for c in sim.collectables)
        assert len(sim.fish) == 8
        assert sim.resources.minerals == 0
        assert not sim.is_running

        sim.start()
        assert sim.step(now_ms=0.0) is not None

    def test_get_state(self):
        """State includes the stage order and world summary."""
        sim, _ = _empty_world()
        sim.step(now_ms=0.0)

        state = sim.get_state()

        assert state["running"]
        assert state["stages"][0] == "motion"
        assert state["world"]["frame"] == 1
        assert state["world"]["vehicle"] is not None


class TestSimulatorTick:
    """Test behavior across stages."""

    def test_power_gate_uses_previous_tick(self):
        """Motion sees the power left by the previous tick's resources stage."""
        sim, _ = _empty_world()
        sim.resources.power = 0.0

        sim.step(ControlIntent(forward=True), now_ms=0.0)
        assert np.allclose(sim.vehicle.velocity, 0.0)
        assert sim.resources.power == pytest.approx(0.08)

        sim.step(ControlIntent(forward=True), now_ms=16.0)
        assert np.linalg.norm(sim.vehicle.velocity) > 0.0

    def test_ascending_reaches_surface(self):
        """Rising above -10 switches to the surface zone and refills oxygen."""
        sim, _ = _empty_world()
        sim.resources.oxygen = 50.0

        for i in range(30):
            sim.step(ControlIntent(ascend=True), now_ms=i * 16.0)

        assert sim.resources.is_at_surface
        assert sim.hud().pressure_zone == "Surface"
        assert sim.resources.oxygen > 50.0

    def test_collect_through_interact(self):
        """Interacting next to a crystal collects it."""
        sim, log = _empty_world()
        crystal = Collectable(collectable_id=7, position=[1.0, -10.0, 0.0], value=2, bob_speed=0.0)
        sim.build_world(collectables=[crystal], fish=[])

        hud = sim.step(now_ms=0.0)
        assert hud.show_collect_prompt

        hud = sim.step(ControlIntent(interact=True), now_ms=16.0)
        assert not hud.show_collect_prompt
        assert hud.minerals == 2
        assert hud.credits == 520
        assert "+2 Minerals, +20 Credits" in log.texts

        hud = sim.step(ControlIntent(interact=True), now_ms=32.0)
        assert hud.minerals == 2
        assert sim.context.get_collectable(7) is crystal
        assert not crystal.alive

    def test_same_seed_same_world(self):
        """Two sessions with the same seed evolve identically."""
        a = Simulator(SimulatorConfig(seed=9))
        b = Simulator(SimulatorConfig(seed=9))
        for sim in (a, b):
            sim.build_world()
            sim.start()
            for i in range(50):
                sim.step(ControlIntent(forward=True, turn_left=True), now_ms=i * 16.0)

        assert all(np.allclose(x.position, y.position) for x, y in zip(a.fish, b.fish))
        assert np.allclose(a.vehicle.position, b.vehicle.position)


class TestUpgradesAndHud:
    """Test host-facing purchases and the HUD snapshot."""

    def test_purchase_rejected_without_credits(self):
        """A rejected purchase returns False and notifies."""
        sim, log = _empty_world()

        assert not sim.purchase_upgrade("hull")
        assert log.texts == ["Not enough credits for hull upgrade!"]
        assert sim.context.upgrades.hull_level == 1

    def test_purchase_succeeds(self):
        """With enough credits the hull level rises."""
        sim, log = _empty_world()
        sim.resources.credits = 1000

        assert sim.purchase_upgrade()
        assert sim.context.upgrades.hull_level == 2
        assert sim.resources.credits == 0
        assert log.latest.text == "Hull Upgraded to Level 2!"

    def test_unknown_upgrade(self):
        """Only hull upgrades exist."""
        sim, _ = _empty_world()

        with pytest.raises(ValueError):
            sim.purchase_upgrade("engine")

    def test_hud_after_first_tick(self):
        """The HUD shows rounded gauges and the upgrade offer."""
        sim, _ = _empty_world()

        hud = sim.step(now_ms=0.0)

        assert isinstance(hud, HudSnapshot)
        assert hud.oxygen_display == 100
        assert hud.power_display == 85
        assert hud.depth_m == 10
        assert hud.pressure_zone == "Shallow"
        assert hud.atmospheres == 2
        assert hud.upgrade_label == "Upgrade Hull (Lvl 2) - 1000 Credits"
        assert not hud.upgrade_enabled
        assert hud.to_dict()["credits"] == 500

    def test_crush_depth_label_and_color(self):
        """Crush depth is shown in capitals and red."""
        sim, _ = _empty_world()
        sim.vehicle.position[1] = -150.0

        hud = sim.step(now_ms=0.0)

        assert hud.pressure_zone == "CRUSH DEPTH"
        assert hud.pressure_color == "#ff0000"


class TestNotificationLog:
    """Test the in-memory notification sink."""

    def test_visible_window(self):
        """A message is visible for its duration only."""
        sim, log = _empty_world()
        sim.step(now_ms=1000.0)
        sim.context.notify("hello")

        assert log.visible(1000.0).text == "hello"
        assert log.visible(2999.0).text == "hello"
        assert log.visible(3000.0) is None

    def test_newer_message_replaces_visible(self):
        """Only the latest message occupies the banner."""
        log = NotificationLog()
        sim = Simulator(notification_sink=log)
        sim.context.notify("first")
        sim.context.notify("second")

        assert log.visible(0.0).text == "second"
        assert log.count("first") == 1

    def test_custom_sink(self):
        """Any callable can receive notifications."""
        received = []
        sim = Simulator(notification_sink=received.append)
        sim.build_world(collectables=[], fish=[])
        sim.start()

        sim.purchase_upgrade()

        assert [n.text for n in received] == ["Not enough credits for hull upgrade!"]
