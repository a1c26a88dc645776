"""Inventory — what an agent is currently holding."""

from typing import Any, List, Optional

from goap_kernel.models.restaurant import Order


class Inventory:
    """
    Per-agent bag of held objects and orders.

    Removal is by identity: two orders with the same contents are still
    different orders.
    """

    def __init__(self):
        self._items: List[Any] = []
        self._orders: List[Order] = []

    # --- Items ---

    @property
    def items(self) -> List[Any]:
        return list(self._items)

    def add_item(self, item: Any) -> None:
        self._items.append(item)

    def remove_item(self, item: Any) -> bool:
        for i, held in enumerate(self._items):
            if held is item:
                del self._items[i]
                return True
        return False

    def find_by_name(self, name: str) -> Optional[Any]:
        """First held object with the given name."""
        return next(
            (i for i in self._items if getattr(i, "name", None) == name), None
        )

    def find_by_tag(self, tag: str) -> Optional[Any]:
        """First held object with the given tag."""
        return next(
            (i for i in self._items if getattr(i, "tag", None) == tag), None
        )

    # --- Orders ---

    @property
    def orders(self) -> List[Order]:
        return list(self._orders)

    def add_order(self, order: Order) -> None:
        self._orders.append(order)

    def remove_order(self, order: Order) -> bool:
        for i, held in enumerate(self._orders):
            if held is order:
                del self._orders[i]
                return True
        return False

    def first_order(self) -> Optional[Order]:
        """Oldest held order, or None."""
        return self._orders[0] if self._orders else None

    def has_order(self, order: Order) -> bool:
        return any(held is order for held in self._orders)

    def to_dict(self) -> dict:
        return {
            "items": [getattr(i, "name", repr(i)) for i in self._items],
            "orders": [o.model_dump(mode="json") for o in self._orders],
        }
