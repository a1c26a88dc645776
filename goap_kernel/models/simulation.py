"""Simulation configuration — restaurant size, staffing and spawn cadence."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from goap_kernel.models.restaurant import Menu
from goap_kernel.models.scheduler import SchedulerConfig


class SpawnConfig(BaseModel):
    """Customer spawn cadence."""

    enabled: bool = True
    initial_delay: float = Field(ge=0, default=5.0)
    min_interval: float = Field(ge=0, default=2.0)
    max_interval: float = Field(ge=0, default=10.0)
    max_customers: int = Field(ge=1, default=6)
    global_cooldown: float = Field(ge=0, default=120.0)   # Applied once the cap is hit
    max_threshold: int = Field(ge=1, default=100)         # Cap doubling stops spawning past this

    @model_validator(mode="after")
    def _check_interval(self) -> "SpawnConfig":
        if self.min_interval > self.max_interval:
            raise ValueError("min_interval must not exceed max_interval")
        return self


class SimulationConfig(BaseModel):
    """Top-level configuration for a restaurant simulation."""

    tick_seconds: float = Field(gt=0, default=0.1)
    seats: int = Field(ge=0, default=4)
    cooktops: int = Field(ge=0, default=2)
    cooks: int = Field(ge=0, default=1)
    wait_staff: int = Field(ge=0, default=1)
    walk_speed: float = Field(gt=0, default=3.5)
    wrong_order_probability: float = Field(ge=0.0, le=1.0, default=0.4)
    max_order_items: int = Field(ge=1, default=3)
    seed: Optional[int] = None
    menu: Menu = Field(default_factory=Menu)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    spawn: SpawnConfig = Field(default_factory=SpawnConfig)
