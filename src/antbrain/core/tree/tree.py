"""
Decision tree driving one ant.

The tree owns a single root :class:`Node` and exposes the operations a
population loop needs:

- make_decision: run the tree against an agent and its world
- generate_random_tree / random_population: depth-bounded random trees
- cross_breed: crossover of two parents with optional mutation
- simplify: remove redundant conditions
- save_to_xml / save_list_to_xml / load_from_xml / load_list_from_xml

Example:
    from antbrain.core.tree import Tree

    parents = Tree.random_population(2, min_level=2, max_level=4)
    child = Tree.cross_breed(parents[0], parents[1], mutation_rate=0.05)
    child.save_to_xml("child.xml")
"""

from __future__ import annotations

import logging
import random
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from antbrain.core.actions.action import TerminalAction, random_action, random_conditional
from antbrain.core.actions.catalogue import ActionCatalogue, ActionRole, get_action_catalogue
from antbrain.core.errors import TreeFormatError
from antbrain.core.tree.node import Node
from antbrain.io.errors import DocumentError
from antbrain.io.xml_store import POPULATION_TAG, TREE_TAG, read_trees, write_document
from antbrain.utils.rng import coin_flip, resolve_rng

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_ROOT_KIND = "forward"


class Tree:
    def __init__(self, root: Optional[Node] = None) -> None:
        self._root = Node(TerminalAction(kind=DEFAULT_ROOT_KIND)) if root is None else root
        self._root.set_parent(None)

    @property
    def root(self) -> Node:
        return self._root

    @root.setter
    def root(self, node: Node) -> None:
        node.set_parent(None)
        self._root = node

    def __repr__(self) -> str:
        return f"Tree(level={self.get_level()}, nodes={self.node_count()})"

    # =========================================================================
    # Queries
    # =========================================================================

    def get_level(self) -> int:
        return self.root.get_level()

    def node_count(self) -> int:
        return self.root.node_count()

    def structurally_equal(self, other: Tree) -> bool:
        return self.root.structurally_equal(other.root)

    def describe(self) -> str:
        """Indented outline, one node per line (False branch first)."""
        lines: List[str] = []

        def visit(node: Node, depth: int, label: str) -> None:
            lines.append(f"{'  ' * depth}{label}{node.describe()}")
            if node.left is not None:
                visit(node.left, depth + 1, "no: ")
            if node.right is not None:
                visit(node.right, depth + 1, "yes: ")

        visit(self.root, 0, "")
        return "\n".join(lines)

    # =========================================================================
    # Execution and simplification
    # =========================================================================

    def make_decision(self, agent: Any, world: Any, catalogue: Optional[ActionCatalogue] = None) -> TerminalAction:
        """Execute the tree once and return the terminal action applied."""
        return self.root.execute(agent, world, catalogue)

    def simplify(self) -> None:
        """Remove duplicate sub-conditions, then collapse symmetric conditions."""
        root = self.root.simplify_duplicate_sub_condition((), ())
        self.root = root.simplify_symmetric_conditions()

    # =========================================================================
    # Genetic operators
    # =========================================================================

    @staticmethod
    def cross_breed(
        t1: Tree,
        t2: Tree,
        mutation_rate: float = 0.0,
        rng: Optional[random.Random] = None,
        catalogue: Optional[ActionCatalogue] = None,
    ) -> Tree:
        """
        Create a child from two parents.

        When both roots are conditional the child is a mutated copy of ``t1``
        whose left or right subtree (fair coin) is replaced by a mutated copy of
        the same-side subtree of ``t2``; the result is simplified. Otherwise the
        child is a mutated copy of ``t1``. The child shares no node with either
        parent.
        """
        rng = resolve_rng(rng)
        if not (t1.root.is_conditional() and t2.root.is_conditional()):
            logger.debug("Cross-breed without conditional roots, cloning first parent")
            return Tree(t1.root.clone_node(mutation_rate, rng, catalogue))

        child = Tree(t1.root.clone_node(mutation_rate, rng, catalogue))
        side = "left" if coin_flip(rng) else "right"
        donor = t2.root.child(side).clone_node(mutation_rate, rng, catalogue)
        if side == "left":
            child.root.set_left(donor)
        else:
            child.root.set_right(donor)
        child.simplify()
        logger.debug("Cross-breed swapped %s subtree, child level %d", side, child.get_level())
        return child

    @staticmethod
    def generate_random_tree(
        min_level: int,
        max_level: int,
        rng: Optional[random.Random] = None,
        catalogue: Optional[ActionCatalogue] = None,
        simplified: bool = True,
    ) -> Tree:
        """
        Build a random tree rooted at a conditional action.

        Before simplification every root-to-terminal path has a length between
        ``max(min_level, 1)`` and ``max_level``. Simplification can only shorten
        paths, so callers must not rely on the exact depth of the result.

        Raises:
            ValueError: If ``max_level < 1`` or ``min_level > max_level``
        """
        if max_level < 1:
            raise ValueError(f"max_level must be at least 1, got {max_level}")
        if min_level > max_level:
            raise ValueError(f"min_level ({min_level}) must not exceed max_level ({max_level})")
        rng = resolve_rng(rng)
        catalogue = catalogue or get_action_catalogue()

        root = Node(random_conditional(rng, catalogue))
        _generate_sub_tree(root, 1, min_level, max_level, rng, catalogue)
        tree = Tree(root)
        if simplified:
            tree.simplify()
        return tree

    @staticmethod
    def random_population(
        size: int,
        min_level: int,
        max_level: int,
        rng: Optional[random.Random] = None,
        catalogue: Optional[ActionCatalogue] = None,
    ) -> List[Tree]:
        rng = resolve_rng(rng)
        trees = [Tree.generate_random_tree(min_level, max_level, rng, catalogue) for _ in range(size)]
        logger.info("Generated %d random tree(s) with levels in [%d, %d]", size, min_level, max_level)
        return trees

    # =========================================================================
    # XML
    # =========================================================================

    def to_element(self) -> ET.Element:
        elem = ET.Element(TREE_TAG)
        elem.append(self.root.to_element("head", 0))
        return elem

    @staticmethod
    def from_element(elem: ET.Element, catalogue: Optional[ActionCatalogue] = None) -> Tree:
        """
        Rebuild a tree from its ``tree`` element.

        Raises:
            TreeFormatError: If the element does not hold exactly one valid root node
        """
        if elem.tag != TREE_TAG:
            raise TreeFormatError(f"Expected a '{TREE_TAG}' element, got '{elem.tag}'")
        nodes = elem.findall("node")
        if len(nodes) != 1:
            raise TreeFormatError(f"Tree element must contain exactly one node, found {len(nodes)}")
        return Tree(Node.from_element(nodes[0], None, catalogue))

    def save_to_xml(self, path: PathLike) -> None:
        """
        Save this tree as a single-tree document.

        Raises:
            DocumentError: If the file cannot be written
        """
        write_document(path, self.to_element())
        logger.info("Saved tree to: %s", path)

    @staticmethod
    def save_list_to_xml(path: PathLike, trees: Sequence[Tree]) -> None:
        """
        Save several trees in one population document.

        Raises:
            DocumentError: If the file cannot be written
        """
        root = ET.Element(POPULATION_TAG)
        for tree in trees:
            root.append(tree.to_element())
        write_document(path, root)
        logger.info("Saved %d tree(s) to: %s", len(trees), path)

    @staticmethod
    def load_from_xml(path: PathLike, catalogue: Optional[ActionCatalogue] = None) -> Optional[Tree]:
        """Load the first tree of a document; None when there is none or the document is invalid."""
        try:
            trees = read_trees(path, catalogue, limit=1)
        except DocumentError as exc:
            logger.error("Could not load tree: %s", exc)
            return None
        return trees[0] if trees else None

    @staticmethod
    def load_list_from_xml(path: PathLike, catalogue: Optional[ActionCatalogue] = None) -> List[Tree]:
        """Load every tree of a document; an empty list when the document is invalid."""
        try:
            return read_trees(path, catalogue)
        except DocumentError as exc:
            logger.error("Could not load trees: %s", exc)
            return []


def _child_role(depth: int, min_level: int, max_level: int) -> Optional[ActionRole]:
    """Role forced on a node created at ``depth``; None leaves it to chance."""
    if depth < min_level:
        return "conditional"
    if depth >= max_level:
        return "terminal"
    return None


def _generate_sub_tree(
    current: Node,
    depth: int,
    min_level: int,
    max_level: int,
    rng: random.Random,
    catalogue: ActionCatalogue,
) -> None:
    """Give ``current`` two random children at ``depth`` and recurse into them."""
    if not current.is_conditional():
        return
    role = _child_role(depth, min_level, max_level)
    current.set_left(Node(random_action(role, rng, catalogue)))
    current.set_right(Node(random_action(role, rng, catalogue)))
    for child in current.children():
        _generate_sub_tree(child, depth + 1, min_level, max_level, rng, catalogue)


__all__ = ["Tree"]
