"""
Action values held by decision-tree nodes.

An action is one of two variants:
- TerminalAction: performs an effect on the agent/world, never has children
- ConditionalAction: reads the agent/world and picks a branch

Both are frozen; mutation replaces an action with a new value of the same
variant, so a node's arity never changes under it. Behavior lookup goes
through an :class:`ActionCatalogue`.
"""

from __future__ import annotations

import random
import xml.etree.ElementTree as ET
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from antbrain.core.errors import TreeFormatError
from antbrain.utils.rng import resolve_rng

from .catalogue import ActionBehavior, ActionCatalogue, ActionRole, get_action_catalogue


class BaseAction(BaseModel):
    """Fields and operations shared by both action variants."""

    kind: str
    role: ActionRole

    model_config = {"frozen": True}

    def is_conditional(self) -> bool:
        return self.role == "conditional"

    def behavior(self, catalogue: Optional[ActionCatalogue] = None) -> ActionBehavior:
        """Resolve the registered behavior backing this action."""
        behavior = (catalogue or get_action_catalogue()).get(self.kind)
        if behavior.role != self.role:
            raise ValueError(f"Action '{self.kind}' is registered as {behavior.role}, not {self.role}")
        return behavior

    def clone_with_mutation(
        self,
        mutation_rate: float,
        rng: Optional[random.Random] = None,
        catalogue: Optional[ActionCatalogue] = None,
    ) -> "Action":
        """
        Copy this action, replacing it with probability ``mutation_rate``.

        The replacement is drawn from the same role, so conditional actions stay
        conditional and terminal actions stay terminal.
        """
        rng = resolve_rng(rng)
        if mutation_rate > 0 and rng.random() < mutation_rate:
            return random_action(self.role, rng, catalogue)
        return self.model_copy()

    def describe(self) -> str:
        return f"{self.kind}?" if self.is_conditional() else self.kind

    def to_element(self) -> ET.Element:
        return ET.Element("action", {"role": self.role, "kind": self.kind})


class TerminalAction(BaseAction):
    role: Literal["terminal"] = "terminal"

    def evaluate(self, agent: Any, world: Any, catalogue: Optional[ActionCatalogue] = None) -> bool:
        """Apply the effect and report completion."""
        self.behavior(catalogue).evaluator(agent, world)
        return True


class ConditionalAction(BaseAction):
    role: Literal["conditional"] = "conditional"

    def evaluate(self, agent: Any, world: Any, catalogue: Optional[ActionCatalogue] = None) -> bool:
        """Return the branch choice: True selects the right child, False the left."""
        return bool(self.behavior(catalogue).evaluator(agent, world))


Action = Annotated[Union[TerminalAction, ConditionalAction], Field(discriminator="role")]

_ACTION_TYPES = {"terminal": TerminalAction, "conditional": ConditionalAction}


def make_action(kind: str, catalogue: Optional[ActionCatalogue] = None) -> Union[TerminalAction, ConditionalAction]:
    """Build the action variant matching the registered role of ``kind``."""
    behavior = (catalogue or get_action_catalogue()).get(kind)
    return _ACTION_TYPES[behavior.role](kind=kind)


def random_action(
    role: Optional[ActionRole],
    rng: Optional[random.Random] = None,
    catalogue: Optional[ActionCatalogue] = None,
) -> Union[TerminalAction, ConditionalAction]:
    behavior = (catalogue or get_action_catalogue()).choose(role, resolve_rng(rng))
    return _ACTION_TYPES[behavior.role](kind=behavior.kind)


def random_conditional(
    rng: Optional[random.Random] = None, catalogue: Optional[ActionCatalogue] = None
) -> ConditionalAction:
    return random_action("conditional", rng, catalogue)  # type: ignore[return-value]


def random_terminal(rng: Optional[random.Random] = None, catalogue: Optional[ActionCatalogue] = None) -> TerminalAction:
    return random_action("terminal", rng, catalogue)  # type: ignore[return-value]


def random_any(
    rng: Optional[random.Random] = None, catalogue: Optional[ActionCatalogue] = None
) -> Union[TerminalAction, ConditionalAction]:
    return random_action(None, rng, catalogue)


def action_from_element(
    elem: ET.Element, catalogue: Optional[ActionCatalogue] = None
) -> Union[TerminalAction, ConditionalAction]:
    """
    Rebuild an action from its ``action`` element.

    The catalogue decides the role; a ``role`` attribute that disagrees with it
    is rejected.

    Raises:
        TreeFormatError: If the element is not a valid action
    """
    if elem.tag != "action":
        raise TreeFormatError(f"Expected an 'action' element, got '{elem.tag}'")
    kind = elem.get("kind")
    if not kind:
        raise TreeFormatError("Action element is missing the 'kind' attribute")
    try:
        action = make_action(kind, catalogue)
    except KeyError as exc:
        raise TreeFormatError(str(exc.args[0])) from exc
    declared = elem.get("role")
    if declared is not None and declared != action.role:
        raise TreeFormatError(f"Action '{kind}' is declared {declared} but registered as {action.role}")
    return action


__all__ = [
    "Action",
    "BaseAction",
    "ConditionalAction",
    "TerminalAction",
    "action_from_element",
    "make_action",
    "random_action",
    "random_any",
    "random_conditional",
    "random_terminal",
]
