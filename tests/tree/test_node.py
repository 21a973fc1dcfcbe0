"""
Tests for Node structure, levels, execution and cloning.
"""

import gc

import pytest

from antbrain.core.actions import ConditionalAction, TerminalAction
from antbrain.core.errors import TreeStructureError
from antbrain.core.tree import Node, Tree
from antbrain.core.world import Ant, Heading, World


class TestStructure:
    """Tests for parent/child links."""

    def test_branch_sets_parents(self):
        left, right = Node.terminal("forward"), Node.terminal("drop")
        node = Node.branch("at_nest", left, right)

        assert left.parent is node
        assert right.parent is node
        assert node.parent is None
        assert node.is_root()

    def test_set_left_replaces_and_detaches(self):
        old = Node.terminal("forward")
        node = Node.branch("at_nest", old, Node.terminal("drop"))
        new = Node.terminal("turn_left")

        node.set_left(new)

        assert node.left is new
        assert new.parent is node
        assert old.parent is None

    def test_terminal_rejects_children(self):
        leaf = Node.terminal("forward")
        with pytest.raises(TreeStructureError):
            leaf.set_left(Node.terminal("drop"))
        with pytest.raises(TreeStructureError):
            leaf.set_right(Node.terminal("drop"))

    def test_parent_link_is_weak(self):
        """A parent is not kept alive by its children."""
        child = Node.terminal("forward")
        Node.branch("at_nest", child, Node.terminal("drop"))
        gc.collect()

        assert child.parent is None

    def test_missing_child_is_structural_error(self):
        node = Node(ConditionalAction(kind="at_nest"))
        with pytest.raises(TreeStructureError):
            node.child("left")

    def test_iter_nodes_is_pre_order(self, forager):
        kinds = [n.action.kind for n in forager.root.iter_nodes()]
        assert kinds[:4] == ["carrying_food", "on_food", "food_ahead", "turn_right"]
        assert len(kinds) == forager.node_count() == 11

    def test_parents_consistent(self, forager):
        for node in forager.root.iter_nodes():
            for child in node.children():
                assert child.parent is node


class TestLevel:
    """Tests for level computation."""

    def test_terminal_level_is_zero(self):
        assert Node.terminal("forward").get_level() == 0

    def test_conditional_level(self):
        node = Node.branch(
            "at_nest",
            Node.terminal("forward"),
            Node.branch("on_food", Node.terminal("pick_up"), Node.terminal("drop")),
        )
        assert node.get_level() == 2
        assert node.left.get_level() == 0
        assert node.right.get_level() == 1

    def test_level_matches_deepest_leaf(self, forager):
        assert forager.get_level() == max(forager.root.leaf_depths()) == 3

    def test_default_tree(self):
        """A default tree is a single forward leaf."""
        tree = Tree()
        assert tree.root.action == TerminalAction(kind="forward")
        assert tree.get_level() == 0


class TestExecute:
    """Tests for decision execution."""

    def test_true_selects_right(self):
        tree = Tree(Node.branch("carrying_food", Node.terminal("turn_left"), Node.terminal("drop")))
        ant = Ant(carrying_food=True)

        assert tree.make_decision(ant, World()).kind == "drop"

    def test_false_selects_left(self):
        tree = Tree(Node.branch("carrying_food", Node.terminal("turn_left"), Node.terminal("drop")))
        ant = Ant(carrying_food=False, heading=Heading.NORTH)

        assert tree.make_decision(ant, World()).kind == "turn_left"
        assert ant.heading == Heading.WEST

    def test_forager_picks_up_food(self, forager):
        ant = Ant(x=2, y=2)
        world = World(food={(2, 2)})

        assert forager.make_decision(ant, world).kind == "pick_up"
        assert ant.carrying_food

    def test_forager_delivers_at_nest(self, forager):
        ant = Ant(x=0, y=0, carrying_food=True)
        world = World(nest=(0, 0))

        assert forager.make_decision(ant, world).kind == "drop"
        assert ant.food_delivered == 1

    def test_missing_branch_fails_loudly(self):
        node = Node(ConditionalAction(kind="carrying_food"))
        node.set_left(Node.terminal("forward"))
        with pytest.raises(TreeStructureError):
            node.execute(Ant(carrying_food=True), World())

    def test_execution_does_not_change_tree(self, forager):
        before = forager.root.clone_node()
        forager.make_decision(Ant(), World(food={(1, 0)}))
        assert forager.root.structurally_equal(before)


class TestCloneNode:
    """Tests for deep cloning with mutation."""

    def test_zero_rate_is_structural_copy(self, forager):
        clone = forager.root.clone_node(0.0)
        assert clone.structurally_equal(forager.root)

    def test_clone_shares_no_nodes(self, forager):
        clone = forager.root.clone_node(0.0)
        originals = {id(n) for n in forager.root.iter_nodes()}
        assert originals.isdisjoint(id(n) for n in clone.iter_nodes())

    def test_clone_root_has_no_parent(self, forager):
        clone = forager.root.left.clone_node(0.0)
        assert clone.parent is None
        for node in clone.iter_nodes():
            for child in node.children():
                assert child.parent is node

    def test_zero_rate_behaves_identically(self, forager, decision_trace):
        assert decision_trace(Tree(forager.root.clone_node(0.0))) == decision_trace(forager)

    def test_mutation_keeps_shape_and_roles(self, forager, catalogue, rng):
        """Mutation perturbs actions, never topology."""
        clone = forager.root.clone_node(1.0, rng, catalogue)
        pairs = list(zip(forager.root.iter_nodes(), clone.iter_nodes()))

        assert clone.node_count() == forager.node_count()
        for original, copy in pairs:
            assert original.is_conditional() == copy.is_conditional()
            assert len(original.children()) == len(copy.children())

    def test_full_rate_changes_something(self, forager, catalogue, rng):
        clones = [forager.root.clone_node(1.0, rng, catalogue) for _ in range(5)]
        assert not all(c.structurally_equal(forager.root) for c in clones)

    def test_one_roll_per_node(self, forager, catalogue, scripted_rng):
        """Each node consumes one roll, in pre-order."""
        rolls = [0.99] * forager.node_count()
        source = scripted_rng(rolls)
        clone = forager.root.clone_node(0.5, source, catalogue)

        assert clone.structurally_equal(forager.root)
        assert source._values == []
