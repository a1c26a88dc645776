"""Customer actions — arrive, check in, sit, then leave."""

import logging

from goap_kernel.actions.base import Action
from goap_kernel.models.restaurant import SceneObject

logger = logging.getLogger(__name__)


class GoToRestaurant(Action):
    target_tag = "Restaurant"
    effects = {"AtEntrance": 1}

    def pre_commit(self) -> bool:
        self.agent.release_idle()
        return True

    def post_commit(self) -> bool:
        return True


class GoToCheckIn(Action):
    target_tag = "CheckIn"
    stopping_distance = 3.0                 # Don't crowd the reception
    preconditions = {"AtEntrance": 1}
    effects = {"AtCheckIn": 1}

    def pre_commit(self) -> bool:
        self.agent.release_idle()
        return True

    def post_commit(self) -> bool:
        return True


class WaitForTable(Action):
    """
    Queue at reception for a seat.

    Reserves the first unreserved seat up front. When there is none the
    customer learns the restaurant is full and gives up on being seated.
    """

    target_tag = "CheckIn"
    stopping_distance = 3.0
    duration = 2.0
    preconditions = {"AtCheckIn": 1}
    effects = {"isWaiting": 1}

    def pre_commit(self) -> bool:
        customer = self.agent
        seat = self.registry.peek_first_unreserved_seat()

        if seat is None:
            customer.beliefs.modify("RestaurantFull", 1)
            customer.remove_goal("isWaiting")
            customer.remove_goal("isSeated")
            return False

        seat.is_reserved = True
        customer.assigned_seat = seat
        customer.table_number = seat.table_number
        customer.beliefs.modify("RestaurantAvailable", 1)

        self.registry.customers.enqueue(customer)
        customer.beliefs.modify("AtRestaurant", 1)
        return True

    def post_commit(self) -> bool:
        self.registry.facts.modify("Free_Seat", -1)
        return True


class GoToTableCustomer(Action):
    duration = 1.0
    preconditions = {"RestaurantAvailable": 1}
    effects = {"isSeated": 1}

    def pre_commit(self) -> bool:
        customer = self.agent
        customer.release_idle()
        seat = customer.assigned_seat
        if seat is None:
            return False
        self.target = SceneObject(name=f"{seat.name}_Chair", position=seat.position)
        return True

    def post_commit(self) -> bool:
        self.registry.facts.modify("ReadyToOrder", 1)
        self.agent.is_seated = True
        return True


class CheckOrderGoHome(Action):
    """Judge the delivered food, free the seat and walk home."""

    target_tag = "Home"
    stopping_distance = 2.0
    preconditions = {"ReceivedFood": 1}
    effects = {"isHome": 1}

    def pre_commit(self) -> bool:
        customer = self.agent
        customer.release_idle()

        expected = customer.inventory.first_order()
        delivered = customer.delivered_order
        if expected is None or delivered is None:
            return False

        if expected.matches(delivered):
            self.registry.facts.modify("Customer_Satisfied", 1)
            logger.info("%s is SATISFIED with their order", customer.name)
        else:
            self.registry.facts.modify("Customer_Unsatisfied", 1)
            logger.info("%s is UNSATISFIED with their order", customer.name)

        if customer.assigned_seat is not None:
            customer.assigned_seat.is_reserved = False
            self.registry.facts.modify("Free_Seat", 1)

        customer.assigned_seat = None
        customer.table_number = -1
        customer.is_seated = False
        return True

    def post_commit(self) -> bool:
        logger.info("%s has returned home", self.agent.name)
        self.agent.leave()
        return True


class GoHomeFull(Action):
    target_tag = "Home"
    stopping_distance = 2.0
    preconditions = {"RestaurantFull": 1}
    effects = {"isFull": 1}

    def pre_commit(self) -> bool:
        self.agent.release_idle()
        self.registry.facts.modify("Restaurant_Full", 1)
        logger.info("The restaurant was full. %s going home", self.agent.name)
        return True

    def post_commit(self) -> bool:
        self.agent.leave()
        return True
