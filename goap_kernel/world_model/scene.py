"""
Scene — the objects and agents actions can target.

Stands in for a game engine's tag lookup: actions that carry a target tag
instead of a direct reference are resolved against the scene when they
start.
"""

from typing import Any, List, Optional


class Scene:
    """Insertion-ordered collection of targetable objects."""

    def __init__(self):
        self._objects: List[Any] = []

    @property
    def objects(self) -> List[Any]:
        """All live objects, oldest first."""
        return [o for o in self._objects if not getattr(o, "destroyed", False)]

    def add(self, obj: Any) -> Any:
        """Place an object in the scene."""
        self._objects.append(obj)
        return obj

    def destroy(self, obj: Any) -> bool:
        """Remove an object. Agents are also flagged as destroyed."""
        for i, existing in enumerate(self._objects):
            if existing is obj:
                del self._objects[i]
                if hasattr(obj, "destroyed"):
                    obj.destroyed = True
                return True
        return False

    def find_with_tag(self, tag: str) -> Optional[Any]:
        """First live object carrying ``tag``."""
        for obj in self.objects:
            if getattr(obj, "tag", None) == tag:
                return obj
        return None

    def find_all_with_tag(self, tag: str) -> List[Any]:
        return [o for o in self.objects if getattr(o, "tag", None) == tag]

    def find_by_name(self, name: str) -> Optional[Any]:
        for obj in self.objects:
            if getattr(obj, "name", None) == name:
                return obj
        return None
