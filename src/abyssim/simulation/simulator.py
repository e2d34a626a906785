"""
Simulator - Main simulation loop and controller.

Provides:
- World building and session lifecycle
- The fixed per-tick stage order
- Upgrade purchases and HUD snapshots for the host
"""

from dataclasses import dataclass
from typing import List, Dict, Any, Callable, Optional
import logging
import time
import numpy as np

from abyssim.environment.pressure import EnvironmentModel, EnvironmentConfig
from abyssim.hud.notifications import NotificationLog, NotificationSink, DEFAULT_DURATION_MS
from abyssim.hud.snapshot import HudSnapshot
from abyssim.resources.economy import EconomyUpgrade, EconomyConfig, InsufficientCredits
from abyssim.resources.ledger import ResourceLedger, LedgerConfig
from abyssim.resources.state import ResourceState
from abyssim.simulation.context import SimulationContext
from abyssim.simulation.motion import MotionIntegrator, MotionConfig
from abyssim.simulation.physics import PhysicsEngine, PhysicsConfig
from abyssim.simulation.pipeline import Pipeline, stage
from abyssim.vehicle.vehicle import Vehicle, VehicleConfig, ControlIntent
from abyssim.world.collectables import Collectable, ProximityDetector, ProximityConfig
from abyssim.world.generator import WorldGenerator, GeneratorConfig
from abyssim.world.marine_life import FishAgent, MarineLifeAI, MarineLifeConfig


logger = logging.getLogger(__name__)


@dataclass
class SimulatorConfig:
    """Simulator configuration.

    Component configs default to their own defaults when None.
    """
    # Time stepping
    default_dt: float = 1.0 / 60.0    # Used when the host passes no dt

    # Random seed for every stochastic stage (None for random)
    seed: int | None = None

    # Notifications
    notification_duration_ms: float = DEFAULT_DURATION_MS

    # Component configs
    physics: PhysicsConfig | None = None
    vehicle: VehicleConfig | None = None
    motion: MotionConfig | None = None
    environment: EnvironmentConfig | None = None
    ledger: LedgerConfig | None = None
    proximity: ProximityConfig | None = None
    marine_life: MarineLifeConfig | None = None
    economy: EconomyConfig | None = None
    generator: GeneratorConfig | None = None


class Simulator:
    """Underwater exploration simulator.

    Runs one synchronous tick per rendered frame. Each tick passes a single
    SimulationContext through the stages in a fixed order:

        motion -> environment -> resources -> proximity -> marine_life

    Every stage reads what the previous ones just produced; the order is
    validated when the pipeline is built.

    Usage:
        sim = Simulator(SimulatorConfig(seed=42))
        sim.build_world()
        sim.start()

        while sim.is_running:
            hud = sim.step(intent, dt, now_ms)
    """

    def __init__(
        self,
        config: SimulatorConfig | None = None,
        notification_sink: NotificationSink | None = None,
    ):
        """Initialize simulator.

        Args:
            config: Simulator configuration. Uses defaults if None.
            notification_sink: Receives every notification. A
                NotificationLog is created if None.
        """
        self.config = config or SimulatorConfig()
        self.sink = notification_sink if notification_sink is not None else NotificationLog()

        # Core components
        self.physics = PhysicsEngine(self.config.physics)
        self.economy = EconomyUpgrade(self.config.economy)
        self.motion = MotionIntegrator(self.config.motion, self.physics)
        self.environment = EnvironmentModel(self.config.environment)
        self.ledger = ResourceLedger(self.config.ledger)
        self.proximity = ProximityDetector(self.economy, self.config.proximity)
        self.marine_life = MarineLifeAI(self.config.marine_life, self.physics)

        self.pipeline = self._build_pipeline()
        self.context = self._new_context()

        # State
        self._running: bool = False
        self._paused: bool = False

        # Step callbacks
        self._pre_step_callbacks: List[Callable] = []
        self._post_step_callbacks: List[Callable] = []

    def _new_context(self) -> SimulationContext:
        return SimulationContext(
            rng=np.random.default_rng(self.config.seed),
            sink=self.sink,
            notification_duration_ms=self.config.notification_duration_ms,
        )

    def _build_pipeline(self) -> Pipeline:
        return Pipeline([
            stage(
                "motion",
                self.motion.update,
                reads=[
                    "intent", "dt",
                    "vehicle.velocity", "vehicle.angular_velocity",
                    "vehicle.orientation", "vehicle.position",
                ],
                writes=[
                    "vehicle.target_velocity", "vehicle.target_angular_velocity",
                    "vehicle.velocity", "vehicle.angular_velocity",
                    "vehicle.orientation", "vehicle.position", "vehicle.propeller_angle",
                    "resources.depth", "resources.is_at_surface",
                ],
                # Movement is gated on the power left at the end of last tick
                reads_previous=["resources.power"],
            ),
            stage(
                "environment",
                self.environment.update,
                reads=["rng", "resources.depth", "upgrades.hull_level"],
                writes=[
                    "resources.pressure_zone", "resources.oxygen_consumption_rate",
                    "resources.power_efficiency", "notifications",
                ],
            ),
            stage(
                "resources",
                self.ledger.update,
                reads=[
                    "now_ms", "rng",
                    "resources.is_at_surface", "resources.oxygen_consumption_rate",
                    "resources.power_efficiency", "resources.oxygen", "resources.power",
                    "resources.last_oxygen_warning_at", "resources.power_depleted_notified",
                    "vehicle.target_velocity", "vehicle.target_angular_velocity",
                ],
                writes=[
                    "resources.oxygen", "resources.power",
                    "resources.last_oxygen_warning_at", "resources.power_depleted_notified",
                    "notifications",
                ],
            ),
            stage(
                "proximity",
                self.proximity.update,
                reads=["now_ms", "intent", "vehicle.position", "collectables"],
                writes=[
                    "collectables", "near_collectable",
                    "resources.minerals", "resources.credits", "notifications",
                ],
            ),
            stage(
                "marine_life",
                self.marine_life.update,
                reads=["rng", "vehicle.position", "fish"],
                writes=["fish"],
            ),
        ])

    @property
    def is_running(self) -> bool:
        """Check if simulation is running."""
        return self._running

    @property
    def is_paused(self) -> bool:
        """Check if simulation is paused."""
        return self._paused

    @property
    def time(self) -> float:
        """Current simulation time."""
        return self.context.time

    @property
    def vehicle(self) -> Optional[Vehicle]:
        """The player's submersible."""
        return self.context.vehicle

    @property
    def resources(self) -> ResourceState:
        """Current resource state."""
        return self.context.resources

    @property
    def collectables(self) -> List[Collectable]:
        """All collectables, consumed ones included."""
        return self.context.collectables

    @property
    def fish(self) -> List[FishAgent]:
        """All fish."""
        return self.context.fish

    def build_world(
        self,
        collectables: List[Collectable] | None = None,
        fish: List[FishAgent] | None = None,
    ) -> Vehicle:
        """Spawn the vehicle and populate the world.

        Entities not provided by the host are generated procedurally.

        Args:
            collectables: Crystals to place, or None to generate
            fish: Fish to place, or None to generate

        Returns:
            The spawned vehicle
        """
        if collectables is None or fish is None:
            generator_config = self.config.generator or GeneratorConfig(seed=self.config.seed)
            generated_collectables, generated_fish = WorldGenerator(generator_config).generate()
            if collectables is None:
                collectables = generated_collectables
            if fish is None:
                fish = generated_fish

        self.context.vehicle = Vehicle.spawn(self.config.vehicle)
        self.context.collectables = list(collectables)
        self.context.fish = list(fish)

        logger.info(
            f"World built: {len(self.context.collectables)} collectables, "
            f"{len(self.context.fish)} fish"
        )
        return self.context.vehicle

    def add_pre_step_callback(self, callback: Callable) -> None:
        """Add callback called before each step.

        Args:
            callback: Function taking (simulator, dt) arguments
        """
        self._pre_step_callbacks.append(callback)

    def add_post_step_callback(self, callback: Callable) -> None:
        """Add callback called after each step.

        Args:
            callback: Function taking (simulator, dt) arguments
        """
        self._post_step_callbacks.append(callback)

    def start(self) -> None:
        """Start the simulation."""
        if self.context.vehicle is None:
            raise RuntimeError("No world built; call build_world() first")

        self._running = True
        self._paused = False
        logger.info("Simulation started")

    def stop(self) -> None:
        """Stop the simulation."""
        self._running = False
        logger.info(f"Simulation stopped at t={self.context.time:.2f}s")

    def pause(self) -> None:
        """Pause the simulation."""
        self._paused = True

    def resume(self) -> None:
        """Resume the simulation."""
        self._paused = False

    def step(
        self,
        intent: ControlIntent | None = None,
        dt: float | None = None,
        now_ms: float | None = None,
    ) -> Optional[HudSnapshot]:
        """Advance simulation by one tick.

        Args:
            intent: Player control intent (no keys held if None)
            dt: Seconds since the previous tick (default_dt if None)
            now_ms: Wall-clock milliseconds (read from the clock if None)

        Returns:
            HUD snapshot after the tick, or None if not running
        """
        if not self._running or self._paused:
            return None

        if dt is None:
            dt = self.config.default_dt
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if now_ms is None:
            now_ms = time.time() * 1000.0

        for callback in self._pre_step_callbacks:
            callback(self, dt)

        self.context.begin_tick(intent or ControlIntent(), dt, now_ms)
        self.pipeline.run(self.context)
        self.context.advance_time(dt)

        for callback in self._post_step_callbacks:
            callback(self, dt)

        return self.hud()

    def step_until(
        self,
        condition: Callable[["Simulator"], bool],
        intent_provider: Callable[["Simulator"], ControlIntent] | None = None,
        dt: float | None = None,
        max_steps: int = 100000,
    ) -> int:
        """Step simulation until condition is met.

        Wall-clock time is synthesized from simulation time so that runs
        are reproducible.

        Args:
            condition: Function returning True when should stop
            intent_provider: Function providing intent for the next tick
            dt: Time step per tick
            max_steps: Maximum steps to take

        Returns:
            Number of steps taken
        """
        dt = self.config.default_dt if dt is None else dt
        steps = 0

        while self._running and steps < max_steps:
            if condition(self):
                break

            intent = intent_provider(self) if intent_provider else ControlIntent()
            self.step(intent, dt, now_ms=(self.context.time + dt) * 1000.0)
            steps += 1

        return steps

    def purchase_upgrade(self, upgrade_type: str = "hull") -> bool:
        """Buy an upgrade on behalf of the player.

        Rejections are reported through a notification and never raise.

        Args:
            upgrade_type: Upgrade kind; only "hull" exists

        Returns:
            True if the purchase went through
        """
        if upgrade_type != "hull":
            raise ValueError(f"Unknown upgrade type: {upgrade_type}")

        try:
            self.economy.upgrade_hull(self.context)
        except InsufficientCredits as e:
            logger.warning(f"Hull upgrade rejected: {e}")
            return False
        return True

    def hud(self) -> HudSnapshot:
        """Capture display values for the UI collaborator."""
        return HudSnapshot.capture(self.context, self.economy)

    def reset(self, rebuild_world: bool = False) -> None:
        """Reset simulation.

        The old world is always discarded. Without a rebuild the vehicle is
        None until build_world() is called again.

        Args:
            rebuild_world: Build a fresh world in place of the old one
        """
        self.context = self._new_context()
        if rebuild_world:
            self.build_world()
        self._running = False
        self._paused = False

    def get_state(self) -> Dict[str, Any]:
        """Get complete simulation state.

        Returns:
            Dictionary containing simulation state
        """
        return {
            "config": {
                "default_dt": self.config.default_dt,
                "seed": self.config.seed,
            },
            "running": self._running,
            "paused": self._paused,
            "stages": self.pipeline.names,
            "world": self.context.get_state(),
        }
