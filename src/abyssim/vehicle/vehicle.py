"""
Vehicle - The player's submersible.

Holds:
- Pose (position, orientation quaternion)
- Smoothed and target velocities in the local frame
- Propeller animation state
"""

from dataclasses import dataclass, field
from typing import Dict, Any
import numpy as np


@dataclass
class ControlIntent:
    """Player control intent for one tick.

    Produced by the input collaborator; conflicting pairs are resolved by
    priority (left over right, forward over backward, ascend over descend).
    """
    turn_left: bool = False
    turn_right: bool = False
    forward: bool = False
    backward: bool = False
    ascend: bool = False
    descend: bool = False
    interact: bool = False

    @property
    def any_movement(self) -> bool:
        """True while any movement key is held."""
        return (
            self.turn_left or self.turn_right
            or self.forward or self.backward
            or self.ascend or self.descend
        )


@dataclass
class VehicleConfig:
    """Vehicle spawn configuration."""
    spawn_position: tuple[float, float, float] = (0.0, -10.0, 0.0)


@dataclass
class Vehicle:
    """Submersible pose and motion state.

    ``velocity`` and ``angular_velocity`` lag behind their targets; only
    the y component (yaw) of the angular vectors is used.
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0, 0.0]))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    target_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    target_angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    propeller_angle: float = 0.0

    def __post_init__(self):
        """Ensure arrays are numpy arrays with correct dtype."""
        for attr in [
            "position", "orientation", "velocity", "angular_velocity",
            "target_velocity", "target_angular_velocity",
        ]:
            setattr(self, attr, np.array(getattr(self, attr), dtype=np.float64))

    @classmethod
    def spawn(cls, config: VehicleConfig | None = None) -> "Vehicle":
        """Create a vehicle at the configured spawn point.

        Args:
            config: Vehicle configuration. Uses defaults if None.

        Returns:
            New vehicle at rest
        """
        config = config or VehicleConfig()
        return cls(position=np.array(config.spawn_position, dtype=float))

    @property
    def depth(self) -> float:
        """Depth below the waterline in meters."""
        return max(0.0, -float(self.position[1]))

    @property
    def yaw_rate(self) -> float:
        """Smoothed yaw rate in rad/s."""
        return float(self.angular_velocity[1])

    @property
    def speed(self) -> float:
        """Smoothed speed in units/s."""
        return float(np.linalg.norm(self.velocity))

    @property
    def is_moving(self) -> bool:
        """Whether the current intent asks for any motion."""
        return bool(
            np.any(self.target_velocity != 0.0)
            or np.any(self.target_angular_velocity != 0.0)
        )

    def get_telemetry(self) -> Dict[str, Any]:
        """Get vehicle pose for the rendering collaborator.

        Returns:
            Dictionary containing vehicle state
        """
        return {
            "position": self.position.tolist(),
            "orientation": self.orientation.tolist(),
            "velocity": self.velocity.tolist(),
            "yaw_rate": self.yaw_rate,
            "speed": self.speed,
            "propeller_angle": self.propeller_angle,
        }
