"""ResourceTree backed by a plain directory on disk."""

import mimetypes
import shutil
from collections.abc import Iterable
from email.utils import formatdate
from pathlib import Path
from typing import BinaryIO

import structlog

from davbrowser.adapters.tree import Node
from davbrowser.exceptions import Conflict, Forbidden, NotFound
from davbrowser.schemas.properties import PlainValue, PropertySet, QNameListValue
from davbrowser.services.path_guard import PathGuard
from davbrowser.services.url_util import join_path, split_path

logger = structlog.get_logger(__name__)


class FilesystemTree:
    """Serves the files below ``root``. Paths are relative to it, ``""`` being the root itself."""

    def __init__(self, root: str | Path) -> None:
        self._guard = PathGuard(root)

    def _resolve(self, path: str, *, must_exist: bool = True) -> Path:
        return self._guard.resolve(path.strip("/"), must_exist=must_exist)

    def get_node(self, path: str) -> Node:
        target = self._resolve(path)
        path = path.strip("/")
        return Node(
            path=path,
            name=split_path(path)[1],
            is_collection=target.is_dir(),
            is_file=target.is_file(),
        )

    def get_properties_for_children(self, path: str, names: Iterable[str]) -> dict[str, PropertySet]:
        target = self._resolve(path)
        if not target.is_dir():
            return {}
        wanted = set(names)
        result: dict[str, PropertySet] = {}
        for child in sorted(target.iterdir(), key=lambda p: p.name):
            try:
                # Links pointing outside the root are not part of the tree.
                if not child.resolve().is_relative_to(self._guard.root):
                    continue
                props = self._properties(child)
            except (OSError, RuntimeError) as exc:
                # Dangling links and entries removed mid-listing.
                logger.warning("child_skipped", path=join_path(path, child.name), reason=str(exc))
                continue
            result[join_path(path, child.name)] = {k: v for k, v in props.items() if k in wanted}
        return result

    def get_all_properties(self, path: str) -> PropertySet:
        try:
            return self._properties(self._resolve(path))
        except OSError as exc:
            raise NotFound(path) from exc

    def open_file(self, path: str) -> BinaryIO:
        target = self._resolve(path)
        if not target.is_file():
            raise NotFound(path)
        try:
            return open(target, "rb")
        except OSError as exc:
            raise _translate(exc, path) from exc

    def create_directory(self, path: str) -> None:
        target = self._resolve_new(path)
        try:
            target.mkdir()
        except OSError as exc:
            raise _translate(exc, path) from exc
        logger.info("directory_created", path=path)

    def create_file(self, path: str, data: BinaryIO) -> None:
        target = self._resolve_new(path)
        try:
            with open(target, "xb") as f:
                shutil.copyfileobj(data, f)
        except OSError as exc:
            raise _translate(exc, path) from exc
        logger.info("file_created", path=path)

    def _resolve_new(self, path: str) -> Path:
        parent, _ = split_path(path)
        if not self._resolve(parent).is_dir():
            raise NotFound("Parent collection does not exist")
        target = self._resolve(path, must_exist=False)
        if target.exists():
            raise Conflict("The resource you tried to create already exists")
        return target

    def _properties(self, target: Path) -> PropertySet:
        stat = target.stat()
        is_dir = target.is_dir()
        props: PropertySet = {
            "{DAV:}displayname": PlainValue(value=target.name),
            "{DAV:}resourcetype": QNameListValue(names=["{DAV:}collection"] if is_dir else []),
            "{DAV:}getlastmodified": PlainValue(value=formatdate(stat.st_mtime, usegmt=True)),
        }
        if not is_dir:
            content_type, _ = mimetypes.guess_type(target.name)
            props["{DAV:}getcontenttype"] = PlainValue(value=content_type or "application/octet-stream")
            props["{DAV:}getcontentlength"] = PlainValue(value=str(stat.st_size))
        return props


def _translate(exc: OSError, path: str) -> Exception:
    if isinstance(exc, FileExistsError):
        return Conflict("The resource you tried to create already exists")
    if isinstance(exc, PermissionError):
        return Forbidden(f"Permission denied: {path}")
    return NotFound(path)
