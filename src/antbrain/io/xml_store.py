"""
XML documents holding decision trees.

Layout:
    single tree   -> <tree><node role="head" index="0">...</node></tree>
    several trees -> <population><tree>...</tree><tree>...</tree></population>

Readers here are strict and raise :class:`DocumentError`; the lenient
``Tree.load_*`` methods catch and log it instead.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

from antbrain.core.actions.catalogue import ActionCatalogue
from antbrain.core.errors import TreeFormatError
from antbrain.io.errors import DocumentError
from antbrain.utils.logging import log_calls

if TYPE_CHECKING:
    from antbrain.core.tree.tree import Tree

PathLike = Union[str, Path]

TREE_TAG = "tree"
POPULATION_TAG = "population"


@log_calls()
def write_document(path: PathLike, root: ET.Element) -> None:
    """
    Write ``root`` as an indented UTF-8 document.

    Raises:
        DocumentError: If the file cannot be written
    """
    ET.indent(root)
    document = ET.ElementTree(root)
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as handle:
            document.write(handle, encoding="utf-8", xml_declaration=True)
    except OSError as exc:
        raise DocumentError(str(path), "Failed to write tree document", cause=exc) from exc


@log_calls()
def read_document(path: PathLike) -> ET.Element:
    """
    Parse a document and return its root element.

    Raises:
        DocumentError: If the file is missing, unreadable or not well-formed XML
    """
    try:
        with open(path, "rb") as handle:
            return ET.parse(handle).getroot()
    except FileNotFoundError as exc:
        raise DocumentError(str(path), "Tree document not found", cause=exc) from exc
    except ET.ParseError as exc:
        raise DocumentError(str(path), "Malformed tree document", cause=exc) from exc
    except OSError as exc:
        raise DocumentError(str(path), "Failed to read tree document", cause=exc) from exc


def find_tree_elements(root: ET.Element) -> List[ET.Element]:
    """Every ``tree`` element in document order, the root included."""
    return list(root.iter(TREE_TAG))


def read_trees(
    path: PathLike,
    catalogue: Optional[ActionCatalogue] = None,
    limit: Optional[int] = None,
) -> List["Tree"]:
    """
    Load the trees stored in a document.

    Args:
        path: Document path
        catalogue: Catalogue used to resolve action kinds
        limit: Stop after this many trees

    Raises:
        DocumentError: If the document or one of its trees is invalid
    """
    from antbrain.core.tree.tree import Tree  # local import

    elements = find_tree_elements(read_document(path))
    if limit is not None:
        elements = elements[:limit]
    trees: List[Tree] = []
    for index, element in enumerate(elements):
        try:
            trees.append(Tree.from_element(element, catalogue))
        except TreeFormatError as exc:
            raise DocumentError(str(path), f"Invalid tree #{index}", cause=exc) from exc
        except RecursionError as exc:
            raise DocumentError(str(path), f"Tree #{index} is nested too deeply", cause=exc) from exc
    return trees


__all__ = [
    "POPULATION_TAG",
    "TREE_TAG",
    "find_tree_elements",
    "read_document",
    "read_trees",
    "write_document",
]
