"""
Tests for random tree generation.
"""

import random

import pytest

from antbrain.core.actions import ActionCatalogue
from antbrain.core.tree import Tree


def _assert_arity(tree: Tree) -> None:
    for node in tree.root.iter_nodes():
        if node.is_conditional():
            assert node.left is not None and node.right is not None
        else:
            assert node.children() == []


class TestGenerateRandomTree:
    """Tests for Tree.generate_random_tree."""

    @pytest.mark.parametrize("min_level,max_level", [(1, 1), (2, 4), (3, 3), (0, 5), (4, 6)])
    def test_unsimplified_path_lengths_in_range(self, catalogue, min_level, max_level):
        """Every root-to-terminal path respects the level bounds before simplification."""
        rng = random.Random(min_level * 100 + max_level)
        for _ in range(20):
            tree = Tree.generate_random_tree(min_level, max_level, rng, catalogue, simplified=False)
            depths = list(tree.root.leaf_depths())
            assert min(depths) >= max(min_level, 1)
            assert max(depths) <= max_level
            _assert_arity(tree)

    def test_exact_level_when_bounds_equal(self, catalogue, rng):
        """With min == max every leaf sits exactly at that depth."""
        tree = Tree.generate_random_tree(3, 3, rng, catalogue, simplified=False)
        assert set(tree.root.leaf_depths()) == {3}
        assert tree.node_count() == 15

    def test_simplified_level_never_exceeds_max(self, catalogue, rng):
        for _ in range(30):
            tree = Tree.generate_random_tree(2, 5, rng, catalogue)
            assert tree.get_level() <= 5
            _assert_arity(tree)

    def test_simplified_tree_has_no_duplicate_conditions(self, catalogue, rng):
        """No condition repeats along a root-to-leaf path after simplification."""
        for _ in range(20):
            tree = Tree.generate_random_tree(3, 6, rng, catalogue)

            def visit(node, seen):
                if not node.is_conditional():
                    return
                assert node.action not in seen
                for child in node.children():
                    visit(child, seen | {node.action})

            visit(tree.root, frozenset())

    def test_root_parent_is_none(self, catalogue, rng):
        tree = Tree.generate_random_tree(2, 4, rng, catalogue)
        assert tree.root.parent is None

    def test_parents_consistent(self, catalogue, rng):
        tree = Tree.generate_random_tree(2, 5, rng, catalogue)
        for node in tree.root.iter_nodes():
            for child in node.children():
                assert child.parent is node

    def test_seed_reproducible(self, catalogue):
        first = Tree.generate_random_tree(2, 5, random.Random(42), catalogue)
        second = Tree.generate_random_tree(2, 5, random.Random(42), catalogue)
        assert first.structurally_equal(second)

    def test_uses_catalogue_kinds(self, rng):
        custom = ActionCatalogue()
        custom.register("rest", "terminal", lambda ant, world: None)
        custom.register("sunny", "conditional", lambda ant, world: True)
        custom.register("windy", "conditional", lambda ant, world: False)

        tree = Tree.generate_random_tree(2, 3, rng, custom, simplified=False)

        assert {n.action.kind for n in tree.root.iter_nodes()} <= {"rest", "sunny", "windy"}

    @pytest.mark.parametrize("min_level,max_level", [(3, 2), (0, 0), (-1, 0)])
    def test_invalid_bounds(self, catalogue, min_level, max_level):
        with pytest.raises(ValueError):
            Tree.generate_random_tree(min_level, max_level, catalogue=catalogue)


class TestRandomPopulation:
    """Tests for Tree.random_population."""

    def test_population_size(self, catalogue, rng):
        trees = Tree.random_population(7, 2, 4, rng, catalogue)
        assert len(trees) == 7
        assert all(t.get_level() <= 4 for t in trees)

    def test_empty_population(self, catalogue, rng):
        assert Tree.random_population(0, 2, 4, rng, catalogue) == []
