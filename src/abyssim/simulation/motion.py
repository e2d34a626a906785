"""
Motion integrator - Control intent to vehicle pose.

Provides:
- Intent to target velocity mapping (gated by power)
- Low-pass smoothing of velocity and yaw rate
- World-space yaw and local-to-world translation
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np

from abyssim.simulation.physics import PhysicsEngine

if TYPE_CHECKING:
    from abyssim.simulation.context import SimulationContext
    from abyssim.vehicle.vehicle import Vehicle, ControlIntent


@dataclass
class MotionConfig:
    """Handling configuration."""
    # Targets
    rotation_speed: float = 1.5     # rad/s
    move_speed: float = 5.0         # units/s
    vertical_factor: float = 0.7    # Ascend/descend speed relative to move_speed

    # Smoothing factors, applied once per tick
    linear_smoothing: float = 0.1
    angular_smoothing: float = 0.15

    # Off by default; blends with 1 - exp(-k * dt) instead of per-tick factors
    time_normalized_smoothing: bool = False

    # Dead zones
    yaw_rate_epsilon: float = 0.001
    speed_squared_epsilon: float = 0.0001

    # Propeller animation while any movement key is held
    propeller_spin_per_tick: float = 0.5  # radians

    # Depth above which the vehicle counts as surfaced (y > -surface_band)
    surface_band_m: float = 10.0


class MotionIntegrator:
    """Turns control intent into vehicle motion.

    Smoothing is frame-coupled by default: the blend factors apply once
    per tick regardless of dt, so handling feel depends on tick rate.

    Usage:
        integrator = MotionIntegrator()
        integrator.update(context)
    """

    def __init__(
        self,
        config: MotionConfig | None = None,
        physics: PhysicsEngine | None = None,
    ):
        """Initialize integrator.

        Args:
            config: Motion configuration. Uses defaults if None.
            physics: Shared physics helpers
        """
        self.config = config or MotionConfig()
        self.physics = physics or PhysicsEngine()

    def compute_targets(
        self,
        vehicle: "Vehicle",
        intent: "ControlIntent",
        power: float,
    ) -> None:
        """Set target velocities from intent.

        Targets are zero when power is exhausted. Interact is not a
        movement action and is never gated here.

        Args:
            vehicle: Vehicle to update
            intent: Player control intent
            power: Current power level
        """
        cfg = self.config
        vehicle.target_velocity = np.zeros(3)
        vehicle.target_angular_velocity = np.zeros(3)

        if power <= 0:
            return

        if intent.turn_left:
            vehicle.target_angular_velocity[1] = cfg.rotation_speed
        elif intent.turn_right:
            vehicle.target_angular_velocity[1] = -cfg.rotation_speed

        if intent.forward:
            vehicle.target_velocity[0] = cfg.move_speed
        elif intent.backward:
            vehicle.target_velocity[0] = -cfg.move_speed

        vertical = cfg.move_speed * cfg.vertical_factor
        if intent.ascend:
            vehicle.target_velocity[1] = vertical
        elif intent.descend:
            vehicle.target_velocity[1] = -vertical

    def smooth(self, vehicle: "Vehicle", dt: float) -> None:
        """Blend current velocities toward their targets.

        Args:
            vehicle: Vehicle to update
            dt: Time step in seconds
        """
        linear = self.config.linear_smoothing
        angular = self.config.angular_smoothing
        if self.config.time_normalized_smoothing:
            linear = self.physics.time_normalized_alpha(linear, dt)
            angular = self.physics.time_normalized_alpha(angular, dt)

        vehicle.velocity = self.physics.lerp(vehicle.velocity, vehicle.target_velocity, linear)
        vehicle.angular_velocity = self.physics.lerp(
            vehicle.angular_velocity, vehicle.target_angular_velocity, angular
        )

    def integrate(self, vehicle: "Vehicle", dt: float) -> None:
        """Apply yaw and translation for one time step.

        Args:
            vehicle: Vehicle to update
            dt: Time step in seconds
        """
        yaw_rate = vehicle.angular_velocity[1]
        if abs(yaw_rate) > self.config.yaw_rate_epsilon:
            vehicle.orientation = self.physics.rotate_yaw_world(
                vehicle.orientation, yaw_rate * dt
            )

        if np.dot(vehicle.velocity, vehicle.velocity) > self.config.speed_squared_epsilon:
            world_velocity = self.physics.local_to_world(vehicle.velocity, vehicle.orientation)
            vehicle.position = self.physics.integrate_position(
                vehicle.position, world_velocity, dt
            )

    def update(self, context: "SimulationContext") -> None:
        """Pipeline stage: intent to pose, then depth readings.

        Args:
            context: Simulation context
        """
        vehicle = context.vehicle
        if vehicle is None:
            return

        self.compute_targets(vehicle, context.intent, context.resources.power)
        self.smooth(vehicle, context.dt)
        self.integrate(vehicle, context.dt)

        if context.intent.any_movement:
            vehicle.propeller_angle += self.config.propeller_spin_per_tick

        resources = context.resources
        resources.depth = max(0.0, -float(vehicle.position[1]))
        resources.is_at_surface = bool(vehicle.position[1] > -self.config.surface_band_m)
