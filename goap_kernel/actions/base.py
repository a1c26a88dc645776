"""
Action — a capability unit an agent can plan with and execute.

Every action declares:
  preconditions   Fact thresholds that must hold (current[k] >= required[k])
  effects         Fact deltas the planner applies while searching
  cost            Added to the plan's cumulative cost

and implements two hooks:
  pre_commit()    Before movement. Claims contested resources, re-validates
                  what the plan assumed, sets the movement target.
  post_commit()   After arrival and the action's duration. Applies the
                  authoritative registry and inventory changes.

The planner only simulates effects. Hooks are where the world really
changes, so each one re-checks that the resource it needs still exists.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

if TYPE_CHECKING:
    from goap_kernel.agents.agent import Agent


class Action(ABC):
    """Base class for every GOAP action. One instance per agent."""

    name: str = "Action"
    cost: float = 1.0
    duration: float = 0.0
    target_tag: str = ""
    stopping_distance: float = 0.0
    preconditions: Dict[str, int] = {}
    effects: Dict[str, int] = {}

    def __init__(
        self,
        *,
        name: Optional[str] = None,
        cost: Optional[float] = None,
        duration: Optional[float] = None,
        preconditions: Optional[Dict[str, int]] = None,
        effects: Optional[Dict[str, int]] = None,
        target: Any = None,
        target_tag: Optional[str] = None,
    ):
        cls = type(self)
        self.name = name if name is not None else cls.__name__
        self.cost = cost if cost is not None else cls.cost
        self.duration = duration if duration is not None else cls.duration
        self.preconditions = dict(
            preconditions if preconditions is not None else cls.preconditions
        )
        self.effects = dict(effects if effects is not None else cls.effects)
        self.target_tag = target_tag if target_tag is not None else cls.target_tag
        self.target = target
        self.running = False
        self.agent: Optional[Agent] = None
        self._fixed_target = target is not None

    def bind(self, agent: Agent) -> None:
        """Attach this action to the agent that owns it."""
        self.agent = agent

    # --- Convenience accessors for hooks ---

    @property
    def registry(self):
        return self.agent.registry

    @property
    def inventory(self):
        return self.agent.inventory

    @property
    def beliefs(self):
        return self.agent.beliefs

    def reset(self) -> None:
        """Clear per-run state before the action executes again."""
        self.running = False
        if not self._fixed_target:
            self.target = None

    # --- Planning ---

    def is_achievable(self) -> bool:
        """Availability gate independent of facts. Always true by default."""
        return True

    def is_achievable_given(self, state: Mapping[str, int]) -> bool:
        """True if every precondition threshold is met. Absent facts count as 0."""
        return all(
            state.get(key, 0) >= required
            for key, required in self.preconditions.items()
        )

    # --- Execution hooks ---

    @abstractmethod
    def pre_commit(self) -> bool:
        """Claim resources and pick a target. False abandons the plan."""

    @abstractmethod
    def post_commit(self) -> bool:
        """Apply the action's real effects once it has completed."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} cost={self.cost}>"
