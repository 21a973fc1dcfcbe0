"""Action Catalogue: Extensible registration system for ant behavior kinds."""

from __future__ import annotations

import random
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

ActionRole = Literal["terminal", "conditional"]

Evaluator = Callable[[Any, Any], Any]


class ActionBehavior(BaseModel):
    """A registered behavior kind.

    Terminal evaluators apply an effect to ``(agent, world)``; conditional
    evaluators return the branch choice as a boolean.
    """

    kind: str
    role: ActionRole
    evaluator: Evaluator
    weight: float = Field(default=1.0, gt=0)
    description: str = ""

    model_config = {"arbitrary_types_allowed": True}

    @property
    def is_conditional(self) -> bool:
        return self.role == "conditional"


class ActionCatalogue(BaseModel):
    """Registry of behavior kinds and the weights used for random selection."""

    behaviors: Dict[str, ActionBehavior] = Field(default_factory=dict)

    @classmethod
    def with_defaults(cls) -> "ActionCatalogue":
        """Create a catalogue pre-populated with the built-in ant behaviors."""
        from .ant_behaviors import register_ant_behaviors

        catalogue = cls()
        register_ant_behaviors(catalogue)
        return catalogue

    def register(
        self,
        kind: str,
        role: ActionRole,
        evaluator: Evaluator,
        *,
        weight: float = 1.0,
        description: str = "",
    ) -> ActionBehavior:
        """
        Register a new behavior kind.

        Args:
            kind: Name stored in tree documents (e.g., "food_ahead")
            role: "terminal" or "conditional"
            evaluator: Callable taking (agent, world)
            weight: Relative probability used by random selection
            description: Human-readable summary

        Raises:
            ValueError: If the kind is already registered
        """
        if kind in self.behaviors:
            raise ValueError(f"Duplicate registration: {kind}")
        behavior = ActionBehavior(kind=kind, role=role, evaluator=evaluator, weight=weight, description=description)
        self.behaviors[kind] = behavior
        return behavior

    def register_terminal(self, kind: str, *, weight: float = 1.0, description: str = "") -> Callable[[Evaluator], Evaluator]:
        """Decorator form of :meth:`register` for terminal behaviors."""

        def _decorator(func: Evaluator) -> Evaluator:
            self.register(kind, "terminal", func, weight=weight, description=description or (func.__doc__ or "").strip())
            return func

        return _decorator

    def register_conditional(
        self, kind: str, *, weight: float = 1.0, description: str = ""
    ) -> Callable[[Evaluator], Evaluator]:
        """Decorator form of :meth:`register` for conditional behaviors."""

        def _decorator(func: Evaluator) -> Evaluator:
            self.register(kind, "conditional", func, weight=weight, description=description or (func.__doc__ or "").strip())
            return func

        return _decorator

    def get(self, kind: str) -> ActionBehavior:
        if kind not in self.behaviors:
            available = ", ".join(sorted(self.behaviors))
            raise KeyError(f"Unknown action kind: {kind}. Available: {available}")
        return self.behaviors[kind]

    def __contains__(self, kind: object) -> bool:
        return kind in self.behaviors

    def kinds(self, role: Optional[ActionRole] = None) -> List[str]:
        """Registered kinds in registration order, optionally filtered by role."""
        return [b.kind for b in self.behaviors.values() if role is None or b.role == role]

    def list_registered_types(self) -> List[str]:
        return sorted(self.behaviors)

    def set_weight(self, kind: str, weight: float) -> None:
        if weight <= 0:
            raise ValueError(f"Weight for '{kind}' must be positive, got {weight}")
        behavior = self.get(kind)
        self.behaviors[kind] = behavior.model_copy(update={"weight": weight})

    def choose(self, role: Optional[ActionRole], rng: random.Random) -> ActionBehavior:
        """
        Pick a behavior at random, proportionally to the registered weights.

        Args:
            role: Restrict the draw to one role, or None to draw from every kind
            rng: Random source

        Raises:
            ValueError: If no behavior matches the role
        """
        candidates = [b for b in self.behaviors.values() if role is None or b.role == role]
        if not candidates:
            raise ValueError(f"No {role or 'registered'} behaviors in catalogue")
        return rng.choices(candidates, weights=[b.weight for b in candidates], k=1)[0]


# Global singleton instance
_global_action_catalogue = ActionCatalogue()


def get_action_catalogue() -> ActionCatalogue:
    """Get the global catalogue, installing the ant behaviors on first use."""
    if not _global_action_catalogue.behaviors:
        from .ant_behaviors import register_ant_behaviors

        register_ant_behaviors(_global_action_catalogue)
    return _global_action_catalogue


__all__ = [
    "ActionBehavior",
    "ActionCatalogue",
    "ActionRole",
    "get_action_catalogue",
]
