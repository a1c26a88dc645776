"""
Planner — assembles the cheapest action sequence that reaches a goal.

Search:
  ROOT (world facts + agent beliefs)
    → expand every action whose preconditions hold in the node's state
    → child state = parent state + action effects
    → goal met? record leaf : recurse without the action just taken
  → cheapest leaf (first found wins ties) → walk back to the root

An action is never used twice on one branch. That bounds the tree and rules
out loops, and it also means a plan cannot repeat a capability.

The planner keeps no cache between calls. Action sets are small and the
scheduler's replan cooldown throttles how often it runs.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional, Sequence

from goap_kernel.actions.base import Action
from goap_kernel.world_model.registry import ResourceRegistry
from goap_kernel.world_model.store import FactStore

logger = logging.getLogger(__name__)


class Node:
    """One simulated state in the planning tree."""

    __slots__ = ("parent", "cost", "state", "action")

    def __init__(
        self,
        parent: Optional[Node],
        cost: float,
        state: Dict[str, int],
        action: Optional[Action],
    ):
        self.parent = parent
        self.cost = cost
        self.state = state
        self.action = action

    def path(self) -> List[Action]:
        """Actions from the root down to this node."""
        actions: List[Action] = []
        node: Optional[Node] = self
        while node is not None:
            if node.action is not None:
                actions.append(node.action)
            node = node.parent
        actions.reverse()
        return actions


class Plan:
    """An ordered action sequence and its total cost."""

    def __init__(self, actions: List[Action], cost: float, goal: Dict[str, int]):
        self.actions = actions
        self.cost = cost
        self.goal = goal

    @property
    def action_names(self) -> List[str]:
        return [a.name for a in self.actions]

    def __iter__(self) -> Iterator[Action]:
        return iter(self.actions)

    def __len__(self) -> int:
        return len(self.actions)

    def __repr__(self) -> str:
        return f"Plan({self.action_names}, cost={self.cost})"


def goal_achieved(goal: Mapping[str, int], state: Mapping[str, int]) -> bool:
    """Every goal fact is present and at or above its threshold."""
    return all(
        key in state and state[key] >= required for key, required in goal.items()
    )


class Planner:
    """Cost-minimising forward search over simulated fact states."""

    def __init__(self, registry: ResourceRegistry):
        self.registry = registry

    def plan(
        self,
        actions: Sequence[Action],
        goal: Mapping[str, int],
        beliefs: Optional[FactStore] = None,
    ) -> Optional[Plan]:
        """
        Find the cheapest sequence of ``actions`` that satisfies ``goal``.

        Returns None when the goal cannot be reached from the current
        world facts and the agent's beliefs.
        """
        usable = [a for a in actions if a.is_achievable()]
        root_state = self.initial_state(beliefs)

        leaves = self.find_leaves(usable, goal, root_state)
        if not leaves:
            logger.debug("No plan for goal %s", dict(goal))
            return None

        cheapest = leaves[0]
        for leaf in leaves[1:]:
            if leaf.cost < cheapest.cost:
                cheapest = leaf

        plan = Plan(cheapest.path(), cheapest.cost, dict(goal))
        logger.debug("Planned %s for goal %s", plan, dict(goal))
        return plan

    def initial_state(self, beliefs: Optional[FactStore] = None) -> Dict[str, int]:
        """World facts with beliefs merged in. World facts win on collision."""
        state = self.registry.snapshot_facts()
        if beliefs is not None:
            for key, value in beliefs.snapshot().items():
                state.setdefault(key, value)
        return state

    def find_leaves(
        self,
        actions: Sequence[Action],
        goal: Mapping[str, int],
        state: Dict[str, int],
    ) -> List[Node]:
        """Every goal-satisfying node reachable from ``state``, in discovery order."""
        leaves: List[Node] = []
        self._build_graph(Node(None, 0.0, dict(state), None), leaves, list(actions), goal)
        return leaves

    def _build_graph(
        self,
        parent: Node,
        leaves: List[Node],
        actions: List[Action],
        goal: Mapping[str, int],
    ) -> bool:
        found = False
        for action in actions:
            if not action.is_achievable_given(parent.state):
                continue

            # Zero and negative counts are fine mid-search.
            state = dict(parent.state)
            for key, delta in action.effects.items():
                state[key] = state.get(key, 0) + delta

            node = Node(parent, parent.cost + action.cost, state, action)

            if goal_achieved(goal, state):
                leaves.append(node)
                found = True
            else:
                remaining = [a for a in actions if a is not action]
                if self._build_graph(node, leaves, remaining, goal):
                    found = True
        return found
