"""GOAP Kernel data models."""

from goap_kernel.models.goal import SubGoal
from goap_kernel.models.restaurant import (
    CookTop,
    Menu,
    Order,
    Position,
    SceneObject,
    Seat,
)
from goap_kernel.models.scheduler import AgentPhase, SchedulerConfig
from goap_kernel.models.simulation import SimulationConfig, SpawnConfig

__all__ = [
    "AgentPhase",
    "CookTop",
    "Menu",
    "Order",
    "Position",
    "SceneObject",
    "SchedulerConfig",
    "Seat",
    "SimulationConfig",
    "SpawnConfig",
    "SubGoal",
]
