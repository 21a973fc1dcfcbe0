from __future__ import annotations

"""Rich renderables for trees and the action catalogue."""

from rich.table import Table
from rich.tree import Tree as RichTree

from antbrain.core.actions.catalogue import ActionCatalogue
from antbrain.core.tree import Node, Tree


def _node_label(node: Node, branch: str | None) -> str:
    prefix = f"[dim]{branch}:[/dim] " if branch else ""
    if node.is_conditional():
        return f"{prefix}[cyan]{node.action.kind}?[/cyan]"
    return f"{prefix}[green]{node.action.kind}[/green]"


def _add_children(view: RichTree, node: Node) -> None:
    for branch, child in (("no", node.left), ("yes", node.right)):
        if child is None:
            continue
        _add_children(view.add(_node_label(child, branch)), child)


def build_tree_view(tree: Tree, title: str | None = None) -> RichTree:
    heading = title or "tree"
    view = RichTree(f"[bold]{heading}[/bold] (level {tree.get_level()}, {tree.node_count()} nodes)")
    _add_children(view.add(_node_label(tree.root, None)), tree.root)
    return view


def build_catalogue_table(catalogue: ActionCatalogue) -> Table:
    table = Table(title="Action catalogue")
    table.add_column("Kind")
    table.add_column("Role")
    table.add_column("Weight", justify="right")
    table.add_column("Description")
    for behavior in catalogue.behaviors.values():
        table.add_row(behavior.kind, behavior.role, f"{behavior.weight:g}", behavior.description)
    return table


__all__ = ["build_catalogue_table", "build_tree_view"]
