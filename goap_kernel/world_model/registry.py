"""
Resource Registry — the shared world every agent reads and mutates.

Holds the world facts plus FIFO queues of contested entities:
  customers     Customers waiting to be served
  seats         Every seat (reservation is a flag, not a dequeue)
  cooktops      Free cooktops
  orders        Orders waiting for a cook
  ready_orders  Cooked orders waiting for wait staff

Behavioral Contract:
- Dequeue never raises; an empty queue yields None.
- All mutation happens under one re-entrant lock, so commit hooks of
  different agents never interleave.
- Planning reads a snapshot of the facts and needs the lock only for
  that read.
"""

import logging
import threading
from collections import deque
from typing import Deque, Dict, Generic, Iterator, List, Optional, TypeVar

from goap_kernel.models.restaurant import CookTop, Order, Seat
from goap_kernel.world_model.store import FactStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceQueue(Generic[T]):
    """FIFO queue of contested entities."""

    def __init__(self, name: str, lock: threading.RLock):
        self.name = name
        self._lock = lock
        self._items: Deque[T] = deque()

    def enqueue(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def dequeue(self) -> Optional[T]:
        """Pop the oldest item, or None if the queue is empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def remove(self, item: T) -> bool:
        """Remove a specific item by identity."""
        with self._lock:
            for i, queued in enumerate(self._items):
                if queued is item:
                    del self._items[i]
                    return True
            return False

    def items(self) -> List[T]:
        """Snapshot of the queue, oldest first."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items())


class ResourceRegistry:
    """
    Process-wide shared state for one restaurant.

    Constructed explicitly and handed to every agent and planner.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.facts = FactStore(lock=self.lock)
        self.customers: ResourceQueue = ResourceQueue("customers", self.lock)
        self.seats: ResourceQueue[Seat] = ResourceQueue("seats", self.lock)
        self.cooktops: ResourceQueue[CookTop] = ResourceQueue("cooktops", self.lock)
        self.orders: ResourceQueue[Order] = ResourceQueue("orders", self.lock)
        self.ready_orders: ResourceQueue[Order] = ResourceQueue("ready_orders", self.lock)

    def add_seat(self, seat: Seat) -> None:
        """Register a seat and count it as free."""
        with self.lock:
            self.seats.enqueue(seat)
            self.facts.modify("Free_Seat", 1)

    def add_cooktop(self, cooktop: CookTop) -> None:
        """Register a cooktop and count it as free."""
        with self.lock:
            self.cooktops.enqueue(cooktop)
            self.facts.modify("Free_CookTop", 1)

    def peek_first_unreserved_seat(self) -> Optional[Seat]:
        """
        Find the first unreserved seat without removing it.

        Rotates the whole queue once, so repeated scans leave the seats
        in the same relative order.
        """
        with self.lock:
            found: Optional[Seat] = None
            for _ in range(len(self.seats)):
                seat = self.seats.dequeue()
                self.seats.enqueue(seat)
                if found is None and seat is not None and not seat.is_reserved:
                    found = seat
            if found is None:
                logger.debug("No unreserved seat available")
            return found

    def snapshot_facts(self) -> Dict[str, int]:
        """Consistent copy of the world facts."""
        with self.lock:
            return self.facts.snapshot()

    def queue_sizes(self) -> Dict[str, int]:
        with self.lock:
            return {
                q.name: len(q)
                for q in (
                    self.customers,
                    self.seats,
                    self.cooktops,
                    self.orders,
                    self.ready_orders,
                )
            }
