"""Narrow interface to the host resource tree."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import BinaryIO, Protocol

from davbrowser.schemas.properties import PropertySet


@dataclass(frozen=True)
class Node:
    """A resolved resource. ``writable`` is False for read-only virtual collections."""

    path: str
    name: str
    is_collection: bool
    is_file: bool
    writable: bool = True


class ResourceTree(Protocol):
    """What the browser needs from the host tree.

    Every method that takes a path raises ``davbrowser.exceptions.NotFound``
    when the path does not resolve to a node.
    """

    def get_node(self, path: str) -> Node: ...

    def get_properties_for_children(self, path: str, names: Iterable[str]) -> dict[str, PropertySet]:
        """Return ``{child_path: {qname: value}}`` restricted to ``names``, in listing order."""
        ...

    def get_all_properties(self, path: str) -> PropertySet: ...

    def open_file(self, path: str) -> BinaryIO:
        """Open a leaf node for reading; raises ``NotFound`` for collections."""
        ...

    def create_directory(self, path: str) -> None: ...

    def create_file(self, path: str, data: BinaryIO) -> None: ...
