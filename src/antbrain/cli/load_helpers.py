from __future__ import annotations

"""Shared helpers for loading documents and settings with CLI-friendly errors."""

from typing import List

import typer
from rich.console import Console

from antbrain.core.actions.catalogue import ActionCatalogue
from antbrain.core.settings import EvolutionSettings
from antbrain.core.tree import Tree
from antbrain.io.errors import DocumentError, LoaderError
from antbrain.io.settings_loader import load_settings
from antbrain.io.xml_store import read_trees


def settings_or_exit(path: str | None, *, console: Console) -> EvolutionSettings:
    try:
        return load_settings(path)
    except LoaderError as err:
        console.print(f"[red]Failed to load settings:[/red] {err}")
        raise typer.Exit(code=1)


def catalogue_or_exit(settings: EvolutionSettings, *, console: Console) -> ActionCatalogue:
    try:
        return settings.build_catalogue()
    except ValueError as err:
        console.print(f"[red]Invalid action weights:[/red] {err}")
        raise typer.Exit(code=1)


def trees_or_exit(path: str, *, console: Console, catalogue: ActionCatalogue | None = None) -> List[Tree]:
    """Read every tree of a document, exiting with code 1 when it is unusable or empty."""
    try:
        trees = read_trees(path, catalogue)
    except DocumentError as err:
        if err.cause is not None:
            console.print(f"[red]Failed to load trees:[/red] {err.message}\n{err.cause}")
        else:
            console.print(f"[red]Failed to load trees:[/red] {err}")
        raise typer.Exit(code=1)
    if not trees:
        console.print(f"[red]No trees found in[/red] {path}")
        raise typer.Exit(code=1)
    return trees


def save_or_exit(path: str, trees: List[Tree], *, console: Console) -> None:
    try:
        Tree.save_list_to_xml(path, trees)
    except DocumentError as err:
        console.print(f"[red]Failed to save trees:[/red] {err}")
        raise typer.Exit(code=1)


__all__ = ["catalogue_or_exit", "save_or_exit", "settings_or_exit", "trees_or_exit"]
