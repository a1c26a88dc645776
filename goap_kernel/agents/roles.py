"""
Restaurant roles — the goal catalog and capabilities of each actor type.

Cook        orderReady(5) > finishedOrder(4) > Idle(1)            persistent
WaitStaff   OrderDelivered(5) > HoldingFood(3)
            > DeliveredOrderToCustomer(2) > Idle(1)               persistent
Customer    isFull(10) > isWaiting(3) > isSeated(2) > isHome(1)   one-shot

Staff carry a zero-cost ``Idle`` fallback so they always have
something to plan. The customer's ``isFull`` goal outranks everything so it
takes over as soon as the customer learns there is no seat.
"""

import random
from typing import List, Optional

from goap_kernel.actions.base import Action
from goap_kernel.actions.cook import CookOrder, FinishOrder, GetOrderFromKitchen, ReturnToWindow
from goap_kernel.actions.customer import (
    CheckOrderGoHome,
    GoHomeFull,
    GoToCheckIn,
    GoToRestaurant,
    GoToTableCustomer,
    WaitForTable,
)
from goap_kernel.actions.wait_staff import (
    DeliverOrderToCustomer,
    DeliverOrderToKitchen,
    GetOrderForCustomer,
    ReturnToWaitArea,
    ServeSeatedCustomer,
    TakeOrder,
)
from goap_kernel.agents.agent import Agent
from goap_kernel.execution.movement import Movement
from goap_kernel.models.goal import SubGoal
from goap_kernel.models.restaurant import Menu, Order, Seat
from goap_kernel.models.scheduler import SchedulerConfig
from goap_kernel.strategy.planner import Planner
from goap_kernel.world_model.registry import ResourceRegistry
from goap_kernel.world_model.scene import Scene


class RoleAgent(Agent):
    """An agent that registers its role's goals and actions on creation."""

    def __init__(
        self,
        name: str,
        registry: ResourceRegistry,
        scene: Scene,
        movement: Movement,
        *,
        actions: Optional[List[Action]] = None,
        config: Optional[SchedulerConfig] = None,
        planner: Optional[Planner] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(
            name, registry, scene, movement,
            config=config, planner=planner, rng=rng,
        )
        for action in actions if actions is not None else self.default_actions():
            self.add_action(action)
        self.register_goals()

    def default_actions(self) -> List[Action]:
        return []

    def register_goals(self) -> None:
        pass


class Cook(RoleAgent):
    tag = "Cook"

    def default_actions(self) -> List[Action]:
        return [GetOrderFromKitchen(), CookOrder(), FinishOrder(), ReturnToWindow()]

    def register_goals(self) -> None:
        self.add_goal(SubGoal(name="orderReady"), 5)
        self.add_goal(SubGoal(name="finishedOrder"), 4)
        self.add_goal(SubGoal(name="Idle"), 1)


class WaitStaff(RoleAgent):
    tag = "WaitStaff"

    def __init__(
        self,
        *args,
        menu: Optional[Menu] = None,
        wrong_order_probability: float = 0.0,
        max_order_items: int = 3,
        **kwargs,
    ):
        self.menu = menu or Menu()
        self.wrong_order_probability = wrong_order_probability
        self.max_order_items = max_order_items
        super().__init__(*args, **kwargs)

    def default_actions(self) -> List[Action]:
        return [
            ServeSeatedCustomer(),
            TakeOrder(),
            DeliverOrderToKitchen(),
            GetOrderForCustomer(),
            DeliverOrderToCustomer(),
            ReturnToWaitArea(),
        ]

    def register_goals(self) -> None:
        self.add_goal(SubGoal(name="OrderDelivered"), 5)
        self.add_goal(SubGoal(name="HoldingFood"), 3)
        self.add_goal(SubGoal(name="DeliveredOrderToCustomer"), 2)
        self.add_goal(SubGoal(name="Idle"), 1)


class Customer(RoleAgent):
    """A diner: wait for a table, sit, eat, go home. Every goal is one-shot."""

    tag = "Customer"

    def __init__(self, *args, **kwargs):
        self.assigned_seat: Optional[Seat] = None
        self.table_number = -1
        self.is_seated = False
        self.being_served = False
        self.delivered_order: Optional[Order] = None
        super().__init__(*args, **kwargs)

    def default_actions(self) -> List[Action]:
        return [
            GoToRestaurant(),
            GoToCheckIn(),
            WaitForTable(),
            GoToTableCustomer(),
            CheckOrderGoHome(),
            GoHomeFull(),
        ]

    def register_goals(self) -> None:
        self.add_goal(SubGoal(name="isWaiting", remove=True), 3)
        self.add_goal(SubGoal(name="isSeated", remove=True), 2)
        self.add_goal(SubGoal(name="isHome", remove=True), 1)
        self.add_goal(SubGoal(name="isFull", remove=True), 10)

    def leave(self) -> None:
        """Leave the restaurant and the scene."""
        self.registry.customers.remove(self)
        self.scene.destroy(self)
        self.destroyed = True

    def describe(self) -> dict:
        info = super().describe()
        info.update({
            "table_number": self.table_number,
            "is_seated": self.is_seated,
            "being_served": self.being_served,
            "delivered_order": (
                self.delivered_order.model_dump(mode="json")
                if self.delivered_order
                else None
            ),
        })
        return info
