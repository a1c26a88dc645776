"""Cook actions — collect orders, cook them, hand them to the window."""

import logging
from typing import Optional

from goap_kernel.actions.base import Action
from goap_kernel.models.restaurant import CookTop, Order

logger = logging.getLogger(__name__)


class GetOrderFromKitchen(Action):
    target_tag = "KitchenWindow"
    stopping_distance = 1.0
    preconditions = {"OrderAtKitchen": 1}
    effects = {"OrderAtKitchen": -1, "OrderReadyToCook": 1}

    def pre_commit(self) -> bool:
        self.agent.release_idle()

        order = self.registry.orders.dequeue()
        if order is None:
            return False

        self.registry.facts.modify("OrderAtKitchen", -1)
        self.inventory.add_order(order)
        return True

    def post_commit(self) -> bool:
        self.registry.facts.modify("OrderReadyToCook", 1)
        return True


class CookOrder(Action):
    """Claim a free cooktop and cook the oldest held order on it."""

    duration = 5.0
    preconditions = {"OrderReadyToCook": 1, "Free_CookTop": 1}
    effects = {"OrderReadyToCook": -1, "OrderCooking": 1, "orderReady": 1}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._cooktop: Optional[CookTop] = None
        self._order: Optional[Order] = None

    def pre_commit(self) -> bool:
        self.agent.release_idle()

        self._order = self.inventory.first_order()
        if self._order is None:
            return False

        self._cooktop = self.registry.cooktops.dequeue()
        if self._cooktop is None:
            return False

        self._cooktop.is_occupied = True
        facts = self.registry.facts
        facts.modify("Free_CookTop", -1)
        facts.modify("OrderReadyToCook", -1)
        facts.modify("OrderCooking", 1)
        self.target = self._cooktop
        return True

    def post_commit(self) -> bool:
        facts = self.registry.facts
        if self._cooktop is not None:
            self._cooktop.is_occupied = False
            self.registry.cooktops.enqueue(self._cooktop)
            facts.modify("Free_CookTop", 1)
            self._cooktop = None

        facts.modify("OrderCooking", -1)

        if self._order is not None:
            self.inventory.remove_order(self._order)
            self.registry.ready_orders.enqueue(self._order)
            facts.modify("OrderCooked", 1)
            logger.debug("Finished cooking order #%d", self._order.ticket_number)
        return True


class FinishOrder(Action):
    """Plate a cooked order and announce it at the window."""

    target_tag = "KitchenWindow"
    stopping_distance = 1.0
    preconditions = {"OrderCooked": 1}
    effects = {"OrderCooked": -1, "finishedOrder": 1}

    def pre_commit(self) -> bool:
        self.agent.release_idle()
        if self.registry.facts.get("OrderCooked") < 1:
            return False
        self.registry.facts.modify("OrderCooked", -1)
        return True

    def post_commit(self) -> bool:
        self.registry.facts.modify("FoodReadyToDeliver", 1)
        return True


class ReturnToWindow(Action):
    cost = 0.0
    target_tag = "CookArea"
    stopping_distance = 1.0
    effects = {"Idle": 1}

    def pre_commit(self) -> bool:
        return True

    def post_commit(self) -> bool:
        self.agent.lock_idle()
        return True
