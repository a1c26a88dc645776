"""Goal model — a single fact threshold an agent works towards."""

from typing import Dict

from pydantic import BaseModel, Field


class SubGoal(BaseModel):
    """
    A named fact that must reach a threshold.

    Goals flagged with ``remove`` are one-shot: the agent drops them once a
    plan achieving them has run to completion. The rest persist and are
    re-planned every time they are the best satisfiable goal.
    """

    name: str                               # e.g., "isSeated", "OrderDelivered"
    threshold: int = Field(ge=1, default=1)
    remove: bool = False                    # remove-on-satisfy

    @property
    def conditions(self) -> Dict[str, int]:
        """Fact thresholds the planner must reach."""
        return {self.name: self.threshold}
