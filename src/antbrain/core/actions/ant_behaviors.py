"""
Built-in ant behaviors.

Terminal behaviors change the :class:`~antbrain.core.world.Ant` and
:class:`~antbrain.core.world.World`; conditional behaviors only read them.
"""

from __future__ import annotations

from antbrain.core.world import Ant, World

from .catalogue import ActionCatalogue


def move_forward(ant: Ant, world: World) -> None:
    """Move one cell along the heading unless the cell ahead is blocked."""
    target = world.cell_ahead(ant)
    if not world.is_blocked(target):
        ant.move_to(target)


def turn_left(ant: Ant, world: World) -> None:
    """Rotate a quarter turn counter-clockwise."""
    ant.heading = ant.heading.turned_left()


def turn_right(ant: Ant, world: World) -> None:
    """Rotate a quarter turn clockwise."""
    ant.heading = ant.heading.turned_right()


def pick_up(ant: Ant, world: World) -> None:
    """Take the food lying on the current cell."""
    if ant.carrying_food or not world.has_food(ant.position):
        return
    world.food.discard(ant.position)
    ant.carrying_food = True


def drop(ant: Ant, world: World) -> None:
    """Drop carried food; food dropped on the nest counts as delivered."""
    if not ant.carrying_food:
        return
    ant.carrying_food = False
    if world.is_nest(ant.position):
        ant.food_delivered += 1
    else:
        world.food.add(ant.position)


def food_ahead(ant: Ant, world: World) -> bool:
    """The cell ahead holds food."""
    return world.has_food(world.cell_ahead(ant))


def wall_ahead(ant: Ant, world: World) -> bool:
    """The cell ahead is a wall or lies outside the grid."""
    return world.is_blocked(world.cell_ahead(ant))


def on_food(ant: Ant, world: World) -> bool:
    """The current cell holds food."""
    return world.has_food(ant.position)


def carrying_food(ant: Ant, world: World) -> bool:
    """The ant carries food."""
    return ant.carrying_food


def at_nest(ant: Ant, world: World) -> bool:
    """The ant stands on the nest."""
    return world.is_nest(ant.position)


TERMINAL_BEHAVIORS = {
    "forward": move_forward,
    "turn_left": turn_left,
    "turn_right": turn_right,
    "pick_up": pick_up,
    "drop": drop,
}

CONDITIONAL_BEHAVIORS = {
    "food_ahead": food_ahead,
    "wall_ahead": wall_ahead,
    "on_food": on_food,
    "carrying_food": carrying_food,
    "at_nest": at_nest,
}


def register_ant_behaviors(catalogue: ActionCatalogue) -> None:
    """Register every built-in behavior that the catalogue does not know yet."""
    for kind, func in TERMINAL_BEHAVIORS.items():
        if kind not in catalogue:
            catalogue.register_terminal(kind)(func)
    for kind, func in CONDITIONAL_BEHAVIORS.items():
        if kind not in catalogue:
            catalogue.register_conditional(kind)(func)


__all__ = ["CONDITIONAL_BEHAVIORS", "TERMINAL_BEHAVIORS", "register_ant_behaviors"]
