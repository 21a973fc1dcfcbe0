"""Errors raised by the decision-tree core."""

from __future__ import annotations


class TreeStructureError(RuntimeError):
    """A tree broke its arity or parent-link invariants.

    Signals a bug in generation, cloning or crossover; never swallowed.
    """


class TreeFormatError(ValueError):
    """An XML element does not describe a valid action, node or tree."""


__all__ = ["TreeFormatError", "TreeStructureError"]
