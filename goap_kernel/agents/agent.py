"""
Agent — the per-actor GOAP scheduler.

Each simulation step the agent moves through:
  COOLDOWN → IDLE (plan) → ACTION_PENDING (moving) → WAITING_DURATION
           → post_commit → COOLDOWN

Planning picks the highest-priority goal the planner can satisfy. Actions
then run one at a time: pre_commit, move to the target, wait out the
duration, post_commit. A failed pre_commit discards the whole remaining
plan. Timers are advanced by the step's ``dt``; nothing here blocks.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from goap_kernel.actions.base import Action
from goap_kernel.agents.inventory import Inventory
from goap_kernel.execution.movement import Movement
from goap_kernel.models.goal import SubGoal
from goap_kernel.models.restaurant import Position
from goap_kernel.models.scheduler import AgentPhase, SchedulerConfig
from goap_kernel.strategy.planner import Plan, Planner
from goap_kernel.world_model.registry import ResourceRegistry
from goap_kernel.world_model.scene import Scene
from goap_kernel.world_model.store import FactStore

logger = logging.getLogger(__name__)


class Agent:
    """A GOAP-driven actor with its own goals, beliefs and inventory."""

    tag: str = "Agent"

    def __init__(
        self,
        name: str,
        registry: ResourceRegistry,
        scene: Scene,
        movement: Movement,
        *,
        tag: Optional[str] = None,
        config: Optional[SchedulerConfig] = None,
        planner: Optional[Planner] = None,
        rng: Optional[random.Random] = None,
    ):
        self.name = name
        self.tag = tag or type(self).tag
        self.registry = registry
        self.scene = scene
        self.movement = movement
        self.config = config or SchedulerConfig()
        self.planner = planner or Planner(registry)
        self.rng = rng or random.Random()

        self.actions: List[Action] = []
        self.beliefs = FactStore()
        self.inventory = Inventory()
        self.idle_locked = False                # Holds the agent in place
        self.destroyed = False

        self._goals: Dict[str, Tuple[SubGoal, int]] = {}
        self.current_goal: Optional[SubGoal] = None
        self.current_plan: Optional[Plan] = None
        self.current_action: Optional[Action] = None
        self._queue: Optional[Deque[Action]] = None
        self._completion_timer: Optional[float] = None
        self._cooldown_remaining = 0.0
        self._cooling_down = False

    # --- Setup ---

    def add_action(self, action: Action) -> Action:
        """Give the agent a capability. Insertion order is planning order."""
        action.bind(self)
        self.actions.append(action)
        return action

    def add_goal(self, goal: SubGoal, priority: int) -> None:
        """Register a goal. Re-adding a goal name replaces it."""
        self._goals[goal.name] = (goal, priority)

    def remove_goal(self, name: str) -> bool:
        """Drop a goal by fact name."""
        if self._goals.pop(name, None) is None:
            logger.warning("[%s] Tried to remove non-existing goal: %s", self.name, name)
            return False
        return True

    def has_goal(self, name: str) -> bool:
        return name in self._goals

    @property
    def goals(self) -> List[Tuple[SubGoal, int]]:
        """Goals with their priorities, highest priority first."""
        return sorted(self._goals.values(), key=lambda entry: entry[1], reverse=True)

    # --- State ---

    @property
    def position(self) -> Position:
        return self.movement.position

    @property
    def phase(self) -> AgentPhase:
        if self._cooling_down:
            return AgentPhase.COOLDOWN
        if self.current_action is not None and self.current_action.running:
            if self._completion_timer is None:
                return AgentPhase.ACTION_PENDING
            return AgentPhase.WAITING_DURATION
        return AgentPhase.IDLE

    @property
    def remaining_actions(self) -> List[Action]:
        return list(self._queue) if self._queue else []

    def lock_idle(self) -> None:
        self.idle_locked = True

    def release_idle(self) -> None:
        self.idle_locked = False

    # --- Execution loop ---

    def step(self, dt: float) -> None:
        """
        Advance the agent by ``dt`` seconds.

        The whole transition runs under the registry lock; plan, queue and
        timers are only ever touched by one thread at a time.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        with self.registry.lock:
            if not self.destroyed:
                self._advance(dt)

    def _advance(self, dt: float) -> None:
        if self._cooling_down:
            self._cooldown_remaining -= dt
            if self._cooldown_remaining > 0:
                return
            self._cooling_down = False

        action = self.current_action
        if action is not None and action.running:
            if self._completion_timer is None:
                if not self._has_arrived():
                    return
                self._completion_timer = action.duration
            else:
                self._completion_timer -= dt
            if self._completion_timer <= 0:
                self._complete_action()
            return

        if self._queue is not None and not self._queue:
            if self.current_goal is not None and self.current_goal.remove:
                self._goals.pop(self.current_goal.name, None)
            self._clear_plan()

        if self._queue is None:
            self._select_plan()

        if self._queue:
            self._start_next_action()

    def _has_arrived(self) -> bool:
        movement = self.movement
        return (
            not movement.path_pending
            and movement.remaining_distance
            <= movement.stopping_distance + self.config.arrival_slack
        )

    def _select_plan(self) -> None:
        for goal, priority in self.goals:
            plan = self.planner.plan(self.actions, goal.conditions, self.beliefs)
            if plan:
                self.current_goal = goal
                self.current_plan = plan
                self._queue = deque(plan.actions)
                logger.debug(
                    "[%s] Pursuing %s (priority %d) via %s",
                    self.name, goal.name, priority, plan.action_names,
                )
                return
        logger.debug("[%s] No achievable goal", self.name)

    def _start_next_action(self) -> None:
        action = self._queue.popleft()
        self.current_action = action
        action.reset()

        if not action.pre_commit():
            logger.debug(
                "[%s] %s could not start; abandoning plan for %s",
                self.name, action.name,
                self.current_goal.name if self.current_goal else None,
            )
            self._clear_plan()
            return

        if self.idle_locked:
            logger.debug("[%s] Idle lock held; %s not dispatched", self.name, action.name)
            return

        if action.target is None and action.target_tag:
            action.target = self.scene.find_with_tag(action.target_tag)

        if action.target is None:
            logger.warning("[%s] %s has no target; skipping", self.name, action.name)
            return

        action.running = True
        self.movement.stopping_distance = action.stopping_distance
        self.movement.set_destination(action.target.position)

    def _complete_action(self) -> None:
        action = self.current_action
        action.running = False
        action.post_commit()
        self._completion_timer = None

        self._cooling_down = True
        self._cooldown_remaining = self.rng.uniform(
            self.config.replan_cooldown_min, self.config.replan_cooldown_max
        )

    def _clear_plan(self) -> None:
        self.current_goal = None
        self.current_plan = None
        self._queue = None

    # --- Inspection ---

    def describe(self) -> dict:
        """Serializable view of the agent for debugging."""
        return {
            "name": self.name,
            "tag": self.tag,
            "phase": self.phase.value,
            "position": list(self.position),
            "idle_locked": self.idle_locked,
            "goals": [
                {
                    "name": goal.name,
                    "threshold": goal.threshold,
                    "remove": goal.remove,
                    "priority": priority,
                }
                for goal, priority in self.goals
            ],
            "current_goal": self.current_goal.name if self.current_goal else None,
            "current_action": (
                self.current_action.name if self.current_action else None
            ),
            "remaining_actions": [a.name for a in self.remaining_actions],
            "beliefs": self.beliefs.snapshot(),
            "inventory": self.inventory.to_dict(),
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} {self.phase.value}>"
