"""
Fact Store — integer-valued facts describing the world or an agent's beliefs.

Used for: the shared world facts held by the Resource Registry
          + each agent's private beliefs
Queried by: Planner (snapshot) + Action hooks (modify)

Facts are never declared up front. They come into existence the first time
an action adds to them and disappear when their count drops to zero.
"""

import logging
from contextlib import nullcontext
from typing import ContextManager, Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


class FactStore:
    """
    Ordered mapping of fact name to counter.

    A value of zero or less is equivalent to absence: ``modify`` removes
    the key instead of keeping a non-positive counter.
    """

    def __init__(
        self,
        facts: Optional[Dict[str, int]] = None,
        lock: Optional[ContextManager] = None,
    ):
        self._facts: Dict[str, int] = dict(facts or {})
        self._lock = lock

    def _guard(self) -> ContextManager:
        return self._lock if self._lock is not None else nullcontext()

    def has(self, key: str) -> bool:
        """Check if a fact exists."""
        with self._guard():
            return key in self._facts

    def get(self, key: str, default: int = 0) -> int:
        """Get a fact's value. Absent facts count as ``default``."""
        with self._guard():
            return self._facts.get(key, default)

    def set(self, key: str, value: int) -> None:
        """Insert or replace a fact."""
        with self._guard():
            self._facts[key] = value

    def add(self, key: str, value: int) -> None:
        """Insert a fact if it is not already present."""
        with self._guard():
            self._facts.setdefault(key, value)

    def remove(self, key: str) -> None:
        """Remove a fact if present."""
        with self._guard():
            self._facts.pop(key, None)

    def modify(self, key: str, delta: int) -> None:
        """
        Increment or decrement a fact.

        Adds the fact when it is missing and ``delta`` is positive, and
        removes it once its value drops to zero or below. Subtracting from a
        missing fact changes nothing and only logs a warning.
        """
        with self._guard():
            if key in self._facts:
                self._facts[key] += delta
                if self._facts[key] <= 0:
                    del self._facts[key]
            elif delta > 0:
                self._facts[key] = delta
            else:
                logger.warning("Trying to subtract from missing fact: %s", key)

    def snapshot(self) -> Dict[str, int]:
        """Copy of the current facts, in insertion order."""
        with self._guard():
            return dict(self._facts)

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._guard():
            return len(self._facts)

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(self.snapshot().items())

    def __repr__(self) -> str:
        return f"FactStore({self.snapshot()!r})"
