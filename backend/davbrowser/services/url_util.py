"""Path helpers for tree paths and the URLs that point at them."""

from urllib.parse import quote


def split_path(path: str) -> tuple[str, str]:
    """Split a path into ``(parent, basename)``.

    Surrounding slashes are ignored, so ``"a/b/"`` gives ``("a", "b")`` and a
    single segment gives ``("", segment)``.
    """
    trimmed = path.strip("/")
    if "/" not in trimmed:
        return "", trimmed
    parent, _, name = trimmed.rpartition("/")
    return parent, name


def join_path(parent: str, name: str) -> str:
    parent = parent.strip("/")
    return f"{parent}/{name}" if parent else name


def encode_path(path: str) -> str:
    """Percent-encode a path for use in an href, keeping the separators."""
    return quote(path, safe="/")
