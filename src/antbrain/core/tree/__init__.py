"""
Decision-tree module.

Components:
- Node: binary node owning an action and up to two children
- Tree: root holder with generation, crossover, simplification and XML persistence

Example:
    from antbrain.core.tree import Tree
    from antbrain.core.world import Ant, World

    tree = Tree.generate_random_tree(min_level=2, max_level=5)
    action = tree.make_decision(Ant(), World())
    tree.save_to_xml("ant.xml")
"""

from antbrain.core.tree.node import Node
from antbrain.core.tree.tree import Tree

__all__ = ["Node", "Tree"]
