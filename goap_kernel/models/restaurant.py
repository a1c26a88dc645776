"""Restaurant entities — seats, cooktops, orders and the menu."""

import logging
import random
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

Position = Tuple[float, float, float]


class SceneObject(BaseModel):
    """Anything in the scene an action can move towards."""

    name: str
    tag: str = ""                           # e.g., "KitchenWindow", "Seat"
    position: Position = (0.0, 0.0, 0.0)


class Seat(SceneObject):
    """A seat at a table. Waitstaff serve it from its staff spot."""

    tag: str = "Seat"
    table_number: int
    staff_spot: Position = (0.0, 0.0, 0.0)
    is_reserved: bool = False               # Set when assigned to a customer


class CookTop(SceneObject):
    """A cooking station claimed by one cook at a time."""

    tag: str = "CookTop"
    is_occupied: bool = False


class Order(BaseModel):
    """A customer's food order."""

    ticket_number: int
    food_items: Dict[int, str] = {}         # menu id -> food name

    def add_item(self, menu_id: int, food_name: str) -> bool:
        """Add a menu item. Duplicate menu ids are ignored."""
        if menu_id in self.food_items:
            return False
        self.food_items[menu_id] = food_name
        return True

    def matches(self, other: "Order") -> bool:
        """Same ticket, or failing that exactly the same items."""
        if self.ticket_number == other.ticket_number:
            return True
        return self.food_items == other.food_items


class Menu(BaseModel):
    """The restaurant's menu, used to generate orders."""

    items: Dict[int, str] = Field(default_factory=lambda: {
        1: "Burger",
        2: "Fries",
        3: "Salad",
        4: "Soup",
        5: "Pasta",
    })

    def random_item(self, rng: random.Random) -> Optional[Tuple[int, str]]:
        """Pick a random (menu id, name) pair, or None if the menu is empty."""
        if not self.items:
            logger.warning("Menu is empty")
            return None
        menu_id = rng.choice(list(self.items))
        return menu_id, self.items[menu_id]
