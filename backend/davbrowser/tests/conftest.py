import io
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

import pytest
from httpx import ASGITransport, AsyncClient

from davbrowser.adapters.filesystem_tree import FilesystemTree
from davbrowser.adapters.tree import Node
from davbrowser.config.config import Settings
from davbrowser.exceptions import NotFound
from davbrowser.main import app, build_browser
from davbrowser.routers.browser import get_browser, get_tree
from davbrowser.schemas.properties import PropertySet
from davbrowser.services.url_util import split_path

CALDAV = "urn:ietf:params:xml:ns:caldav"
CALSERVER = "http://calendarserver.org/ns/"


class InMemoryTree:
    """ResourceTree fake: nodes and properties are registered up front, mutations are recorded."""

    def __init__(self) -> None:
        self.nodes: dict[str, Node] = {}
        self.props: dict[str, PropertySet] = {}
        self.created_dirs: list[str] = []
        self.created_files: dict[str, bytes] = {}
        self.contents: dict[str, bytes] = {}
        self.add("", collection=True)

    def add(
        self,
        path: str,
        *,
        collection: bool,
        props: PropertySet | None = None,
        writable: bool = True,
        data: bytes = b"",
    ) -> Node:
        node = Node(
            path=path,
            name=split_path(path)[1],
            is_collection=collection,
            is_file=not collection,
            writable=writable,
        )
        self.nodes[path] = node
        self.props[path] = props or {}
        if not collection:
            self.contents[path] = data
        return node

    def get_node(self, path: str) -> Node:
        try:
            return self.nodes[path]
        except KeyError:
            raise NotFound(path) from None

    def get_properties_for_children(self, path: str, names: Iterable[str]) -> dict[str, PropertySet]:
        self.get_node(path)
        wanted = set(names)
        return {
            child: {k: v for k, v in self.props[child].items() if k in wanted}
            for child in self.nodes
            if child and split_path(child)[0] == path
        }

    def get_all_properties(self, path: str) -> PropertySet:
        self.get_node(path)
        return dict(self.props[path])

    def open_file(self, path: str) -> BinaryIO:
        if self.get_node(path).is_collection:
            raise NotFound(path)
        return io.BytesIO(self.contents[path])

    def create_directory(self, path: str) -> None:
        self.created_dirs.append(path)
        self.add(path, collection=True)

    def create_file(self, path: str, data: BinaryIO) -> None:
        self.created_files[path] = data.read()
        self.add(path, collection=False, data=self.created_files[path])


@pytest.fixture
def memory_tree() -> InMemoryTree:
    return InMemoryTree()


@pytest.fixture
def fs_root(tmp_path: Path) -> Path:
    root = tmp_path / "tree"
    root.mkdir()
    return root


@pytest.fixture
def fs_tree(fs_root: Path) -> FilesystemTree:
    return FilesystemTree(fs_root)


@pytest.fixture
def make_settings():
    def _factory(**overrides) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _factory


@pytest.fixture
async def make_client(make_settings):
    """Build a test client around any ResourceTree, injected via dependency override."""
    clients: list[AsyncClient] = []

    def _factory(tree, hooks=None, **overrides) -> AsyncClient:
        browser = build_browser(tree, make_settings(**overrides), hooks)
        app.dependency_overrides[get_browser] = lambda: browser
        app.dependency_overrides[get_tree] = lambda: tree
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _factory
    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()
