"""Agent scheduler configuration and execution phases."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class AgentPhase(str, Enum):
    IDLE = "idle"                           # Free to plan
    ACTION_PENDING = "action_pending"       # Moving towards the action target
    WAITING_DURATION = "waiting_duration"   # Arrived, waiting out the duration
    COOLDOWN = "cooldown"                   # Replan delay after an action completes


class SchedulerConfig(BaseModel):
    """Configuration for the per-agent execution loop."""

    replan_cooldown_min: float = Field(ge=0, default=0.4)
    replan_cooldown_max: float = Field(ge=0, default=1.2)
    arrival_slack: float = Field(ge=0, default=0.5)

    @model_validator(mode="after")
    def _check_cooldown_range(self) -> "SchedulerConfig":
        if self.replan_cooldown_min > self.replan_cooldown_max:
            raise ValueError(
                "replan_cooldown_min must not exceed replan_cooldown_max"
            )
        return self
