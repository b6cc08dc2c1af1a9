"""PathGuard — resolves a relative name below a root directory without letting it escape."""

from pathlib import Path

from davbrowser.exceptions import NotFound


class PathGuard:
    """Maps names onto files below ``root``.

    Both sides are canonicalised (``..`` collapsed, symlinks followed) before the
    containment check, so a name that looks harmless but resolves through a
    symlink to somewhere else is rejected too.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, name: str, *, must_exist: bool = True) -> Path:
        """Return the canonical path for ``name``.

        Raises:
            NotFound: if the canonical path is outside the root, or does not exist
                when ``must_exist`` is set. The message never includes the path.
        """
        if "\x00" in name:
            raise NotFound("Path does not exist, or escaping from the base path was detected")
        candidate = (self._root / name.lstrip("/")).resolve()
        if not candidate.is_relative_to(self._root):
            raise NotFound("Path does not exist, or escaping from the base path was detected")
        if must_exist and not candidate.exists():
            raise NotFound("Path does not exist, or escaping from the base path was detected")
        return candidate
