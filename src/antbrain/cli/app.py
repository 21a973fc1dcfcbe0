"""
antbrain CLI: generate, inspect, breed and run ant decision trees.

Trees are stored in XML documents; every command that writes produces a
population document that the other commands can read back.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import typer
from rich.console import Console

from antbrain.cli.formatters import build_catalogue_table, build_tree_view
from antbrain.cli.load_helpers import catalogue_or_exit, save_or_exit, settings_or_exit, trees_or_exit
from antbrain.core.tree import Tree
from antbrain.core.world import Ant, Cell, Heading, World
from antbrain.utils.logging import configure_logging

app = typer.Typer(help="antbrain CLI: generate, inspect, breed and run ant decision trees.")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    configure_logging(verbose)


def _parse_cell(raw: str) -> Cell:
    try:
        x, y = (int(part.strip()) for part in raw.split(","))
    except ValueError:
        console.print(f"[red]Bad cell[/red] (expected x,y): {raw}")
        raise typer.Exit(code=2)
    return (x, y)


@app.command()
def generate(
    output: str = typer.Argument(..., help="Population document to write"),
    count: Optional[int] = typer.Option(None, "--count", "-n", help="Number of trees (default: settings population_size)"),
    min_level: Optional[int] = typer.Option(None, "--min-level", help="Minimum level before simplification"),
    max_level: Optional[int] = typer.Option(None, "--max-level", help="Maximum level before simplification"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    settings_path: Optional[str] = typer.Option(None, "--settings", help="Path to a settings YAML file"),
) -> None:
    """Generate random trees."""
    settings = settings_or_exit(settings_path, console=console)
    overrides = {
        key: value
        for key, value in (("min_level", min_level), ("max_level", max_level), ("seed", seed), ("population_size", count))
        if value is not None
    }
    try:
        settings = settings.model_validate({**settings.model_dump(), **overrides})
    except ValueError as err:
        console.print(f"[red]Invalid parameters:[/red] {err}")
        raise typer.Exit(code=2)
    catalogue = catalogue_or_exit(settings, console=console)

    trees = Tree.random_population(
        settings.population_size,
        settings.min_level,
        settings.max_level,
        rng=settings.make_rng(),
        catalogue=catalogue,
    )
    save_or_exit(output, trees, console=console)
    console.print(f"[green]OK[/green] Wrote {len(trees)} tree(s) to {output}")


@app.command()
def show(
    path: str = typer.Argument(..., help="Tree document"),
    index: Optional[int] = typer.Option(None, "--index", "-i", help="Only show the tree at this position"),
) -> None:
    """Show the trees stored in a document."""
    trees = trees_or_exit(path, console=console)
    if index is not None:
        if not 0 <= index < len(trees):
            console.print(f"[red]Index out of range[/red]: {index} (document holds {len(trees)} tree(s))")
            raise typer.Exit(code=2)
        selected: List[Tuple[int, Tree]] = [(index, trees[index])]
    else:
        selected = list(enumerate(trees))
    for position, tree in selected:
        console.print(build_tree_view(tree, title=f"tree #{position}"))


@app.command()
def breed(
    first: str = typer.Argument(..., help="Document holding the first parent"),
    second: str = typer.Argument(..., help="Document holding the second parent"),
    output: str = typer.Argument(..., help="Document to write the child to"),
    mutation_rate: Optional[float] = typer.Option(None, "--mutation-rate", "-m", help="Per-node mutation probability"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    settings_path: Optional[str] = typer.Option(None, "--settings", help="Path to a settings YAML file"),
) -> None:
    """Cross the first tree of two documents."""
    settings = settings_or_exit(settings_path, console=console)
    rate = settings.mutation_rate if mutation_rate is None else mutation_rate
    if not 0.0 <= rate <= 1.0:
        console.print(f"[red]Mutation rate must be between 0 and 1[/red]: {rate}")
        raise typer.Exit(code=2)
    catalogue = catalogue_or_exit(settings, console=console)
    parent_a = trees_or_exit(first, console=console, catalogue=catalogue)[0]
    parent_b = trees_or_exit(second, console=console, catalogue=catalogue)[0]

    rng = settings.make_rng() if seed is None else settings.model_copy(update={"seed": seed}).make_rng()
    child = Tree.cross_breed(parent_a, parent_b, rate, rng=rng, catalogue=catalogue)
    save_or_exit(output, [child], console=console)
    console.print(build_tree_view(child, title="child"))
    console.print(f"[green]OK[/green] Wrote child to {output}")


@app.command()
def simplify(
    path: str = typer.Argument(..., help="Tree document"),
    output: str = typer.Argument(..., help="Document to write the simplified trees to"),
) -> None:
    """Simplify every tree of a document."""
    trees = trees_or_exit(path, console=console)
    removed = 0
    for tree in trees:
        before = tree.node_count()
        tree.simplify()
        removed += before - tree.node_count()
    save_or_exit(output, trees, console=console)
    console.print(f"[green]OK[/green] Simplified {len(trees)} tree(s), removed {removed} node(s)")


@app.command()
def catalogue(
    settings_path: Optional[str] = typer.Option(None, "--settings", help="Path to a settings YAML file"),
) -> None:
    """List the registered behaviors."""
    settings = settings_or_exit(settings_path, console=console)
    console.print(build_catalogue_table(catalogue_or_exit(settings, console=console)))


@app.command()
def decide(
    path: str = typer.Argument(..., help="Tree document (first tree is used)"),
    x: int = typer.Option(0, "--x", help="Ant column"),
    y: int = typer.Option(0, "--y", help="Ant row"),
    heading: Heading = typer.Option(Heading.EAST, "--heading", help="Ant heading"),
    carrying: bool = typer.Option(False, "--carrying", help="Ant carries food"),
    width: int = typer.Option(10, "--width", help="World width"),
    height: int = typer.Option(10, "--height", help="World height"),
    nest: str = typer.Option("0,0", "--nest", help="Nest cell as x,y"),
    food: List[str] = typer.Option([], "--food", help="Food cell as x,y (repeatable)"),
    walls: List[str] = typer.Option([], "--wall", help="Wall cell as x,y (repeatable)"),
) -> None:
    """Run one decision of a tree against a hand-made world."""
    tree = trees_or_exit(path, console=console)[0]
    try:
        world = World(
            width=width,
            height=height,
            nest=_parse_cell(nest),
            food={_parse_cell(c) for c in food},
            walls={_parse_cell(c) for c in walls},
        )
        ant = Ant(x=x, y=y, heading=heading, carrying_food=carrying)
    except ValueError as err:
        console.print(f"[red]Invalid world:[/red] {err}")
        raise typer.Exit(code=2)

    action = tree.make_decision(ant, world)
    console.print(f"[bold]Decision:[/bold] {action.kind}")
    console.print(
        f"Ant at ({ant.x}, {ant.y}) facing {ant.heading.value}, "
        f"carrying={ant.carrying_food}, delivered={ant.food_delivered}"
    )


__all__ = ["app"]
