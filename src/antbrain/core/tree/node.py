"""
Binary decision-tree node.

A node owns its action and its children. The parent link is a weak reference
kept in sync by :meth:`Node.set_left`, :meth:`Node.set_right` and
:meth:`Node.set_parent`; it is never used to own or traverse the tree.

Arity:
    conditional node -> exactly two children (none only while being generated)
    terminal node    -> no children
"""

from __future__ import annotations

import random
import weakref
import xml.etree.ElementTree as ET
from typing import Any, Iterator, List, Optional, Sequence, Union

from antbrain.core.actions.action import (
    ConditionalAction,
    TerminalAction,
    action_from_element,
)
from antbrain.core.actions.catalogue import ActionCatalogue
from antbrain.core.errors import TreeFormatError, TreeStructureError
from antbrain.utils.rng import resolve_rng

AnyAction = Union[TerminalAction, ConditionalAction]

CHILD_ROLES = ("left", "right")


class Node:
    def __init__(
        self,
        action: AnyAction,
        parent: Optional[Node] = None,
        left: Optional[Node] = None,
        right: Optional[Node] = None,
    ) -> None:
        self.action = action
        self.left: Optional[Node] = None
        self.right: Optional[Node] = None
        self._parent: Optional[weakref.ReferenceType[Node]] = None
        self.set_parent(parent)
        if left is not None:
            self.set_left(left)
        if right is not None:
            self.set_right(right)

    @classmethod
    def terminal(cls, kind: str) -> Node:
        """Build a leaf holding a terminal action."""
        return cls(TerminalAction(kind=kind))

    @classmethod
    def branch(cls, kind: str, left: Node, right: Node) -> Node:
        """Build a conditional node over two existing subtrees."""
        return cls(ConditionalAction(kind=kind), left=left, right=right)

    def __repr__(self) -> str:
        return f"Node({self.action.describe()}, level={self.get_level()})"

    # =========================================================================
    # Structure
    # =========================================================================

    @property
    def parent(self) -> Optional[Node]:
        return self._parent() if self._parent is not None else None

    def set_parent(self, parent: Optional[Node]) -> None:
        self._parent = weakref.ref(parent) if parent is not None else None

    def set_left(self, node: Optional[Node]) -> None:
        self._attach("left", node)

    def set_right(self, node: Optional[Node]) -> None:
        self._attach("right", node)

    def _attach(self, side: str, node: Optional[Node]) -> None:
        if node is not None and not self.is_conditional():
            raise TreeStructureError(f"Terminal node '{self.action.kind}' cannot have a {side} child")
        previous = getattr(self, side)
        if previous is not None and previous is not node and previous.parent is self:
            previous.set_parent(None)
        setattr(self, side, node)
        if node is not None:
            node.set_parent(self)

    def is_conditional(self) -> bool:
        return self.action.is_conditional()

    def is_root(self) -> bool:
        return self.parent is None

    def child(self, side: str) -> Node:
        """Return the child on ``side``, failing loudly when it is missing."""
        node = getattr(self, side)
        if node is None:
            raise TreeStructureError(f"Conditional node '{self.action.kind}' has no {side} child")
        return node

    def children(self) -> List[Node]:
        return [c for c in (self.left, self.right) if c is not None]

    def iter_nodes(self) -> Iterator[Node]:
        """Pre-order traversal of the subtree."""
        yield self
        for c in self.children():
            yield from c.iter_nodes()

    def node_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def leaf_depths(self, depth: int = 0) -> Iterator[int]:
        """Yield the depth of every terminal node below (and including) this one."""
        if not self.is_conditional():
            yield depth
            return
        for c in self.children():
            yield from c.leaf_depths(depth + 1)

    def get_level(self) -> int:
        if not self.is_conditional():
            return 0
        return 1 + max((c.get_level() for c in self.children()), default=0)

    def structurally_equal(self, other: Optional[Node]) -> bool:
        """Same actions in the same shape."""
        if other is None or self.action != other.action:
            return False
        for side in CHILD_ROLES:
            mine, theirs = getattr(self, side), getattr(other, side)
            if mine is None or theirs is None:
                if mine is not theirs:
                    return False
            elif not mine.structurally_equal(theirs):
                return False
        return True

    def describe(self) -> str:
        return self.action.describe()

    # =========================================================================
    # Execution
    # =========================================================================

    def execute(self, agent: Any, world: Any, catalogue: Optional[ActionCatalogue] = None) -> TerminalAction:
        """
        Run the decision rooted here.

        Conditional nodes pick a child (True -> right, False -> left) and recurse;
        the terminal action reached is applied and returned.

        Raises:
            TreeStructureError: If a conditional node misses the selected child
        """
        if not self.is_conditional():
            self.action.evaluate(agent, world, catalogue)
            return self.action  # type: ignore[return-value]
        side = "right" if self.action.evaluate(agent, world, catalogue) else "left"
        return self.child(side).execute(agent, world, catalogue)

    # =========================================================================
    # Genetic operators
    # =========================================================================

    def clone_node(
        self,
        mutation_rate: float = 0.0,
        rng: Optional[random.Random] = None,
        catalogue: Optional[ActionCatalogue] = None,
    ) -> Node:
        """
        Deep-copy the subtree, mutating each node's action independently.

        Nodes are visited pre-order and each gets one mutation roll. A mutated
        action keeps its role, so the copy always has the original's shape.
        """
        rng = resolve_rng(rng)
        clone = Node(self.action.clone_with_mutation(mutation_rate, rng, catalogue))
        if self.left is not None:
            clone.set_left(self.left.clone_node(mutation_rate, rng, catalogue))
        if self.right is not None:
            clone.set_right(self.right.clone_node(mutation_rate, rng, catalogue))
        return clone

    # =========================================================================
    # Simplification
    # =========================================================================

    def simplify_duplicate_sub_condition(
        self,
        path_left: Sequence[AnyAction],
        path_right: Sequence[AnyAction],
    ) -> Node:
        """
        Drop conditions whose outcome is already fixed by an ancestor.

        ``path_left`` holds the conditions whose False branch led here and
        ``path_right`` those whose True branch did. A repeated condition always
        takes the same branch within one decision, so the node is replaced by
        that branch.

        Returns:
            The root of the simplified subtree; the caller re-links it.
        """
        if not self.is_conditional():
            return self
        if self.action in path_right:
            return self.child("right").simplify_duplicate_sub_condition(path_left, path_right)
        if self.action in path_left:
            return self.child("left").simplify_duplicate_sub_condition(path_left, path_right)

        self.set_left(self.child("left").simplify_duplicate_sub_condition([*path_left, self.action], path_right))
        self.set_right(self.child("right").simplify_duplicate_sub_condition(path_left, [*path_right, self.action]))
        return self

    def simplify_symmetric_conditions(self) -> Node:
        """
        Collapse conditions whose two branches are identical.

        Children are simplified first so that collapses propagate upwards.

        Returns:
            The root of the simplified subtree; the caller re-links it.
        """
        if not self.is_conditional():
            return self
        self.set_left(self.child("left").simplify_symmetric_conditions())
        self.set_right(self.child("right").simplify_symmetric_conditions())
        if self.child("left").structurally_equal(self.right):
            return self.child("left")
        return self

    # =========================================================================
    # XML
    # =========================================================================

    def to_element(self, role: str = "head", index: int = 0) -> ET.Element:
        elem = ET.Element("node", {"role": role, "index": str(index)})
        elem.append(self.action.to_element())
        for position, side in enumerate(CHILD_ROLES):
            node = getattr(self, side)
            if node is not None:
                elem.append(node.to_element(side, position))
        return elem

    @classmethod
    def from_element(
        cls,
        elem: ET.Element,
        parent: Optional[Node] = None,
        catalogue: Optional[ActionCatalogue] = None,
    ) -> Node:
        """
        Rebuild a subtree from its ``node`` element.

        Child elements are ordered by their ``index`` attribute; a ``left`` or
        ``right`` role, when present, decides the slot, and children without a
        role take the free slots in that order.

        Raises:
            TreeFormatError: If the element does not describe a valid subtree
        """
        if elem.tag != "node":
            raise TreeFormatError(f"Expected a 'node' element, got '{elem.tag}'")
        action_elem = elem.find("action")
        if action_elem is None:
            raise TreeFormatError("Node element has no 'action' element")
        node = cls(action_from_element(action_elem, catalogue), parent=parent)

        child_elems = sorted(elem.findall("node"), key=_element_index)
        if len(child_elems) > 2:
            raise TreeFormatError(f"Node '{node.action.kind}' has {len(child_elems)} children, at most 2 allowed")
        if child_elems and not node.is_conditional():
            raise TreeFormatError(f"Terminal node '{node.action.kind}' cannot have children")
        if node.is_conditional() and len(child_elems) != 2:
            raise TreeFormatError(f"Conditional node '{node.action.kind}' needs 2 children, found {len(child_elems)}")

        slots = {}
        unplaced = []
        for child_elem in child_elems:
            side = child_elem.get("role")
            if side not in CHILD_ROLES:
                unplaced.append(child_elem)
                continue
            if side in slots:
                raise TreeFormatError(f"Node '{node.action.kind}' has two {side} children")
            slots[side] = child_elem
        free = [side for side in CHILD_ROLES if side not in slots]
        slots.update(zip(free, unplaced))
        for side, child_elem in slots.items():
            node._attach(side, cls.from_element(child_elem, node, catalogue))
        return node


def _element_index(elem: ET.Element) -> int:
    raw = elem.get("index", "0")
    try:
        return int(raw)
    except ValueError as exc:
        raise TreeFormatError(f"Invalid node index '{raw}'") from exc


__all__ = ["Node"]
