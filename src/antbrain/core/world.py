"""
Minimal ant world used by the built-in behavior catalogue.

The decision-tree core never inspects these models directly; they are the
agent/world state that the default terminal actions change and the default
conditional actions read. Coordinates grow east (x) and south (y).
"""

from __future__ import annotations

from enum import Enum
from typing import Set, Tuple

from pydantic import BaseModel, Field

Cell = Tuple[int, int]


class Heading(str, Enum):
    """Direction an ant is facing."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    def turned_left(self) -> "Heading":
        return _CLOCKWISE[(_CLOCKWISE.index(self) - 1) % len(_CLOCKWISE)]

    def turned_right(self) -> "Heading":
        return _CLOCKWISE[(_CLOCKWISE.index(self) + 1) % len(_CLOCKWISE)]

    def delta(self) -> Cell:
        return _DELTAS[self]


_CLOCKWISE = [Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST]
_DELTAS = {
    Heading.NORTH: (0, -1),
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, 1),
    Heading.WEST: (-1, 0),
}


class Ant(BaseModel):
    """Mutable agent state."""

    x: int = 0
    y: int = 0
    heading: Heading = Heading.EAST
    carrying_food: bool = False
    food_delivered: int = 0

    @property
    def position(self) -> Cell:
        return (self.x, self.y)

    def move_to(self, cell: Cell) -> None:
        self.x, self.y = cell


class World(BaseModel):
    """Rectangular grid with food, walls and a nest cell."""

    width: int = Field(default=10, gt=0)
    height: int = Field(default=10, gt=0)
    nest: Cell = (0, 0)
    food: Set[Cell] = Field(default_factory=set)
    walls: Set[Cell] = Field(default_factory=set)

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, cell: Cell) -> bool:
        """A cell is blocked when it is a wall or lies outside the grid."""
        return not self.in_bounds(cell) or cell in self.walls

    def has_food(self, cell: Cell) -> bool:
        return cell in self.food

    def is_nest(self, cell: Cell) -> bool:
        return cell == self.nest

    def cell_ahead(self, ant: Ant) -> Cell:
        dx, dy = ant.heading.delta()
        return (ant.x + dx, ant.y + dy)


__all__ = ["Ant", "Cell", "Heading", "World"]
