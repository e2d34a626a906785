"""
Simulation module - The per-tick update loop.

This module contains:
- PhysicsEngine: Vector and quaternion math
- MotionIntegrator: Control intent to vehicle pose
- Pipeline / Stage: Ordered stages with declared read/write sets
- SimulationContext: Explicit world state threaded through a tick
- Simulator: Session lifecycle and tick driver
"""

from abyssim.simulation.physics import PhysicsEngine
from abyssim.simulation.motion import MotionIntegrator
from abyssim.simulation.pipeline import Pipeline, Stage, PipelineOrderError
from abyssim.simulation.context import SimulationContext
from abyssim.simulation.simulator import Simulator, SimulatorConfig

__all__ = [
    "PhysicsEngine",
    "MotionIntegrator",
    "Pipeline",
    "Stage",
    "PipelineOrderError",
    "SimulationContext",
    "Simulator",
    "SimulatorConfig",
]
