"""Wait staff actions — take orders to the kitchen and food to the tables."""

import logging
from typing import Optional

from goap_kernel.actions.base import Action
from goap_kernel.models.restaurant import Order, SceneObject, Seat

logger = logging.getLogger(__name__)


def _staff_spot(seat: Seat) -> SceneObject:
    return SceneObject(name=f"{seat.name}_StaffSpot", position=seat.staff_spot)


class ServeSeatedCustomer(Action):
    """Claim the next waiting customer and head to their table."""

    duration = 1.0
    preconditions = {"ReadyToOrder": 1}
    effects = {"ReadyToOrder": -1, "BeingServed": 1}

    def pre_commit(self) -> bool:
        self.agent.release_idle()

        customer = self.registry.customers.dequeue()
        if customer is None:
            return False

        if not customer.is_seated:
            self.registry.customers.enqueue(customer)  # Not ready yet
            return False

        if customer.assigned_seat is None or customer.being_served:
            return False

        customer.being_served = True
        self.inventory.add_item(customer.assigned_seat)
        self.target = _staff_spot(customer.assigned_seat)
        return True

    def post_commit(self) -> bool:
        self.registry.facts.modify("ReadyToOrder", -1)
        self.registry.facts.modify("BeingServed", 1)
        return True


class TakeOrder(Action):
    """Write up a random order for the customer at the held seat."""

    duration = 2.0
    preconditions = {"BeingServed": 1}
    effects = {"BeingServed": -1, "OrderTaken": 1}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._seat: Optional[Seat] = None
        self._customer = None

    def pre_commit(self) -> bool:
        self._seat = self.inventory.find_by_tag("Seat")
        if self._seat is None:
            return False

        self._customer = next(
            (
                c for c in self.agent.scene.find_all_with_tag("Customer")
                if c.assigned_seat is self._seat
            ),
            None,
        )
        if self._customer is None:
            return False

        self.target = _staff_spot(self._seat)
        return True

    def post_commit(self) -> bool:
        self.inventory.remove_item(self._seat)

        order = self._write_order()
        self.registry.orders.enqueue(order)
        logger.debug(
            "Created order #%d with items %s",
            order.ticket_number, list(order.food_items.values()),
        )

        if self._customer is not None:
            self._customer.inventory.add_order(order)
            self._customer.being_served = False

        self.registry.facts.modify("BeingServed", -1)
        self.registry.facts.modify("WaitingOnFood", 1)
        return True

    def _write_order(self) -> Order:
        menu = self.agent.menu
        rng = self.agent.rng
        order = Order(ticket_number=rng.randint(1000, 9999))
        wanted = rng.randint(1, min(self.agent.max_order_items, len(menu.items)) or 1)
        while len(order.food_items) < wanted:
            item = menu.random_item(rng)
            if item is None:
                break
            order.add_item(*item)
        return order


class DeliverOrderToKitchen(Action):
    target_tag = "KitchenWindow"
    stopping_distance = 1.0
    preconditions = {"OrderTaken": 1}
    effects = {"OrderTaken": -1, "OrderDelivered": 1}

    def pre_commit(self) -> bool:
        return True

    def post_commit(self) -> bool:
        self.registry.facts.modify("OrderAtKitchen", 1)
        return True


class GetOrderForCustomer(Action):
    """Pick up a cooked order from the kitchen window."""

    target_tag = "KitchenWindow"
    stopping_distance = 1.0
    preconditions = {"FoodReadyToDeliver": 1}
    effects = {"FoodReadyToDeliver": -1, "FoodInHand": 1, "HoldingFood": 1}

    def pre_commit(self) -> bool:
        self.agent.release_idle()

        order = self.registry.ready_orders.dequeue()
        if order is None:
            return False

        self.registry.facts.modify("FoodReadyToDeliver", -1)
        self.inventory.add_order(order)
        return True

    def post_commit(self) -> bool:
        self.registry.facts.modify("FoodInHand", 1)
        return True


class DeliverOrderToCustomer(Action):
    """
    Carry the held order to the customer who placed it.

    With ``wrong_order_probability`` the customer receives a random
    order instead.
    """

    duration = 1.0
    preconditions = {"FoodInHand": 1}
    effects = {"FoodInHand": -1, "DeliveredOrderToCustomer": 1}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._order: Optional[Order] = None
        self._customer = None

    def pre_commit(self) -> bool:
        self.agent.release_idle()

        self._order = self.inventory.first_order()
        if self._order is None:
            return False

        self._customer = next(
            (
                c for c in self.agent.scene.find_all_with_tag("Customer")
                if c.inventory.has_order(self._order)
            ),
            None,
        )
        if self._customer is None or self._customer.assigned_seat is None:
            return False

        self.target = _staff_spot(self._customer.assigned_seat)
        self.registry.facts.modify("FoodInHand", -1)
        return True

    def post_commit(self) -> bool:
        self.inventory.remove_order(self._order)
        agent = self.agent

        if agent.rng.random() < agent.wrong_order_probability:
            wrong = Order(ticket_number=agent.rng.randint(1000, 9999))
            item = agent.menu.random_item(agent.rng)
            if item is not None:
                wrong.add_item(*item)
            self._customer.delivered_order = wrong
            logger.debug("Delivered WRONG order to %s", self._customer.name)
        else:
            self._customer.delivered_order = self._order

        self._customer.beliefs.modify("ReceivedFood", 1)
        self.registry.facts.modify("WaitingOnFood", -1)
        return True


class ReturnToWaitArea(Action):
    """Walk back to the wait area and hold there until work turns up."""

    cost = 0.0
    target_tag = "WaitArea"
    stopping_distance = 1.0
    effects = {"Idle": 1}

    def pre_commit(self) -> bool:
        return True

    def post_commit(self) -> bool:
        self.agent.lock_idle()
        return True
