"""Plain downloads for leaf nodes the browser leaves alone."""

from collections.abc import Iterator
from typing import BinaryIO

import structlog
from starlette.responses import StreamingResponse

from davbrowser.adapters.tree import ResourceTree
from davbrowser.exceptions import BrowserError

logger = structlog.get_logger(__name__)

CHUNK_SIZE = 64 * 1024


def _iter_chunks(f: BinaryIO) -> Iterator[bytes]:
    with f:
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk


def file_response(tree: ResourceTree, path: str) -> StreamingResponse | None:
    """Stream the body of the file at ``path``, or return None when there is no such file."""
    try:
        node = tree.get_node(path)
        if not node.is_file:
            return None
        props = tree.get_all_properties(path)
        f = tree.open_file(path)
    except BrowserError as exc:
        logger.debug("file_download_declined", path=path, reason=str(exc))
        return None

    headers = {}
    content_type = props.get("{DAV:}getcontenttype")
    length = props.get("{DAV:}getcontentlength")
    if length is not None and length.kind == "plain":
        headers["Content-Length"] = length.value
    media_type = content_type.value if content_type is not None and content_type.kind == "plain" else None
    return StreamingResponse(
        _iter_chunks(f),
        media_type=media_type or "application/octet-stream",
        headers=headers,
    )
