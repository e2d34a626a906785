"""
Physics engine - Vector and quaternion math for the simulation.

Provides:
- Frame-coupled and time-normalized blending
- Quaternion construction and composition
- Coordinate transformations (vehicle local frame to world frame)
"""

from dataclasses import dataclass, field
import numpy as np


WORLD_UP = np.array([0.0, 1.0, 0.0])


@dataclass
class PhysicsConfig:
    """Physics simulation configuration."""
    # World vertical axis (yaw is applied about this axis)
    up_axis: np.ndarray = field(default_factory=lambda: WORLD_UP.copy())

    # Threshold under which vectors are treated as zero length
    epsilon: float = 1e-9

    # Reference tick rate used to convert per-tick factors to rates
    reference_rate_hz: float = 60.0


class PhysicsEngine:
    """Physics helpers shared by the vehicle and marine life.

    Quaternions are stored as numpy arrays in [w, x, y, z] order.
    Vectors are 3-element float arrays in a Y-up world frame.
    """

    def __init__(self, config: PhysicsConfig | None = None):
        """Initialize physics engine.

        Args:
            config: Physics configuration. Uses defaults if None.
        """
        self.config = config or PhysicsConfig()

    def lerp(
        self,
        current: np.ndarray,
        target: np.ndarray,
        alpha: float,
    ) -> np.ndarray:
        """Linearly blend current toward target.

        Args:
            current: Current vector
            target: Target vector
            alpha: Blend factor in [0, 1]

        Returns:
            Blended vector
        """
        return current + (target - current) * alpha

    def time_normalized_alpha(self, per_tick_alpha: float, dt: float) -> float:
        """Convert a per-tick blend factor into a dt-aware one.

        The decay rate k is chosen so that a tick at the reference rate
        reproduces ``per_tick_alpha`` exactly.

        Args:
            per_tick_alpha: Blend factor tuned for one reference tick
            dt: Elapsed time in seconds

        Returns:
            Blend factor 1 - exp(-k * dt)
        """
        if per_tick_alpha >= 1.0:
            return 1.0
        k = -np.log(1.0 - per_tick_alpha) * self.config.reference_rate_hz
        return float(1.0 - np.exp(-k * dt))

    def normalize(self, vector: np.ndarray) -> np.ndarray:
        """Return the unit vector, or zeros for a degenerate input.

        Args:
            vector: Any vector

        Returns:
            Unit-length vector or zero vector
        """
        length = np.linalg.norm(vector)
        if length < self.config.epsilon:
            return np.zeros_like(vector, dtype=float)
        return vector / length

    def quaternion_from_axis_angle(
        self,
        axis: np.ndarray,
        angle: float,
    ) -> np.ndarray:
        """Build a rotation quaternion.

        Args:
            axis: Rotation axis (normalized internally)
            angle: Rotation angle in radians

        Returns:
            Unit quaternion [w, x, y, z]
        """
        axis = self.normalize(np.asarray(axis, dtype=float))
        half = angle * 0.5
        s = np.sin(half)
        return np.array([np.cos(half), axis[0] * s, axis[1] * s, axis[2] * s])

    def quaternion_multiply(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Hamilton product a * b (apply b first, then a).

        Args:
            a: Left quaternion
            b: Right quaternion

        Returns:
            Product quaternion
        """
        aw, ax, ay, az = a
        bw, bx, by, bz = b
        return np.array([
            aw * bw - ax * bx - ay * by - az * bz,
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
        ])

    def quaternion_normalize(self, q: np.ndarray) -> np.ndarray:
        """Renormalize a quaternion to unit length.

        Args:
            q: Quaternion

        Returns:
            Unit quaternion (identity if degenerate)
        """
        length = np.linalg.norm(q)
        if length < self.config.epsilon:
            return np.array([1.0, 0.0, 0.0, 0.0])
        return q / length

    def rotate_yaw_world(self, orientation: np.ndarray, angle: float) -> np.ndarray:
        """Yaw an orientation about the world vertical axis.

        The delta rotation is pre-multiplied, so the turn happens in world
        space rather than in the vehicle's local frame.

        Args:
            orientation: Current orientation quaternion
            angle: Yaw angle in radians

        Returns:
            New orientation quaternion
        """
        delta = self.quaternion_from_axis_angle(self.config.up_axis, angle)
        return self.quaternion_normalize(self.quaternion_multiply(delta, orientation))

    def rotate_vector(self, vector: np.ndarray, q: np.ndarray) -> np.ndarray:
        """Rotate a vector by a unit quaternion.

        Args:
            vector: 3D vector
            q: Unit quaternion [w, x, y, z]

        Returns:
            Rotated vector
        """
        w = q[0]
        u = q[1:]
        t = 2.0 * np.cross(u, vector)
        return vector + w * t + np.cross(u, t)

    def local_to_world(
        self,
        local_vec: np.ndarray,
        orientation: np.ndarray,
    ) -> np.ndarray:
        """Convert a local (vehicle) vector to the world frame.

        Args:
            local_vec: Vector in vehicle coordinates
            orientation: Vehicle orientation quaternion

        Returns:
            Vector in world coordinates
        """
        return self.rotate_vector(local_vec, orientation)

    def integrate_position(
        self,
        position: np.ndarray,
        velocity: np.ndarray,
        dt: float,
    ) -> np.ndarray:
        """Integrate position from velocity.

        Args:
            position: Current position [x, y, z]
            velocity: Velocity [vx, vy, vz]
            dt: Time step

        Returns:
            New position
        """
        return position + velocity * dt
