"""
Movement — how agents get to their action targets.

The scheduler only needs to hand over a destination and later ask whether
the agent has arrived. Path generation and steering live outside the core;
``StraightLineMovement`` is the reference walker used by the simulation
and the tests.
"""

import math
from typing import Optional, Protocol

from goap_kernel.models.restaurant import Position


class Movement(Protocol):
    """Contract the scheduler requires from a movement backend."""

    position: Position
    stopping_distance: float

    @property
    def remaining_distance(self) -> float: ...

    @property
    def path_pending(self) -> bool: ...

    def set_destination(self, destination: Position) -> None: ...

    def advance(self, dt: float) -> None: ...


class StraightLineMovement:
    """Walks straight at the destination, stopping at ``stopping_distance``."""

    def __init__(
        self,
        position: Position = (0.0, 0.0, 0.0),
        speed: float = 3.5,
        stopping_distance: float = 0.0,
    ):
        self.position: Position = tuple(position)  # type: ignore[assignment]
        self.speed = speed
        self.stopping_distance = stopping_distance
        self.destination: Optional[Position] = None

    @property
    def remaining_distance(self) -> float:
        if self.destination is None:
            return 0.0
        return math.dist(self.position, self.destination)

    @property
    def path_pending(self) -> bool:
        # Straight lines need no path computation.
        return False

    def set_destination(self, destination: Position) -> None:
        self.destination = tuple(destination)  # type: ignore[assignment]

    def advance(self, dt: float) -> None:
        """Move up to ``speed * dt`` towards the destination."""
        if self.destination is None:
            return
        remaining = self.remaining_distance
        travel = remaining - self.stopping_distance
        if travel <= 0:
            return
        step = min(self.speed * dt, travel)
        ratio = step / remaining
        self.position = tuple(
            p + (d - p) * ratio for p, d in zip(self.position, self.destination)
        )  # type: ignore[assignment]
