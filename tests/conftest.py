"""
Shared fixtures for decision-tree tests.
"""

import itertools
import random
from typing import Any, Callable, List, Tuple

import pytest

from antbrain.core.actions.catalogue import ActionCatalogue
from antbrain.core.tree import Node, Tree
from antbrain.core.world import Ant, Heading, World


class ScriptedRandom(random.Random):
    """Random source whose ``random()`` replays a fixed sequence."""

    def __init__(self, values):
        super().__init__(0)
        self._values = list(values)

    def random(self):
        if not self._values:
            raise AssertionError("ScriptedRandom ran out of values")
        return self._values.pop(0)


def _sample_states() -> List[Tuple[Ant, World]]:
    world = World(
        width=4,
        height=4,
        nest=(0, 0),
        food={(1, 0), (2, 2), (3, 1)},
        walls={(1, 2)},
    )
    states = []
    for x, y, heading, carrying in itertools.product(range(4), range(4), list(Heading), (False, True)):
        if (x, y) in world.walls:
            continue
        states.append((Ant(x=x, y=y, heading=heading, carrying_food=carrying), world))
    return states


@pytest.fixture
def catalogue() -> ActionCatalogue:
    """Fresh catalogue with the built-in ant behaviors."""
    return ActionCatalogue.with_defaults()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def scripted_rng() -> Callable[..., random.Random]:
    return ScriptedRandom


@pytest.fixture(scope="session")
def sample_states() -> List[Tuple[Ant, World]]:
    return _sample_states()


@pytest.fixture
def decision_trace(sample_states) -> Callable[[Tree], List[Any]]:
    """Run a tree once on a copy of every sample state and record the outcome."""

    def _trace(tree: Tree) -> List[Any]:
        outcomes = []
        for ant, world in sample_states:
            ant_copy = ant.model_copy(deep=True)
            world_copy = world.model_copy(deep=True)
            action = tree.make_decision(ant_copy, world_copy)
            outcomes.append((action.kind, ant_copy.model_dump(), sorted(world_copy.food)))
        return outcomes

    return _trace


@pytest.fixture
def forager() -> Tree:
    """Hand-built tree: deliver food when carrying, otherwise hunt for it.

    carrying_food?
      no:  on_food?
             no:  food_ahead?  no: turn_right / yes: forward
             yes: pick_up
      yes: at_nest?
             no:  wall_ahead?  no: forward / yes: turn_left
             yes: drop
    """
    hunt = Node.branch(
        "on_food",
        Node.branch("food_ahead", Node.terminal("turn_right"), Node.terminal("forward")),
        Node.terminal("pick_up"),
    )
    deliver = Node.branch(
        "at_nest",
        Node.branch("wall_ahead", Node.terminal("forward"), Node.terminal("turn_left")),
        Node.terminal("drop"),
    )
    return Tree(Node.branch("carrying_food", hunt, deliver))


@pytest.fixture
def wanderer() -> Tree:
    """Hand-built tree sharing no condition with the forager's root."""
    return Tree(
        Node.branch(
            "wall_ahead",
            Node.branch("food_ahead", Node.terminal("turn_left"), Node.terminal("forward")),
            Node.branch("on_food", Node.terminal("turn_right"), Node.terminal("pick_up")),
        )
    )
