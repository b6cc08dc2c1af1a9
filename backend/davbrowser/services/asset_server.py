"""AssetServer — delivers the bundled icons and stylesheets referenced by the generated pages."""

from pathlib import Path
from urllib.parse import quote_plus

import structlog

from davbrowser.exceptions import NotFound
from davbrowser.schemas.browser import Asset
from davbrowser.services.path_guard import PathGuard

logger = structlog.get_logger(__name__)

# Rudimentary mime type detection, by extension only.
_CONTENT_TYPES = {
    "ico": "image/vnd.microsoft.icon",
    "png": "image/png",
    "css": "text/css",
}
_DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(asset_name: str) -> str:
    _, dot, ext = asset_name.rpartition(".")
    if not dot:
        return _DEFAULT_CONTENT_TYPE
    return _CONTENT_TYPES.get(ext, _DEFAULT_CONTENT_TYPE)


def asset_url(base_uri: str, asset_name: str) -> str:
    """Assets are addressed through the query string of the base URI, not a separate route."""
    return f"{base_uri}?sabreAction=asset&assetName={quote_plus(asset_name)}"


class AssetServer:
    def __init__(self, asset_dir: str | Path, max_age: int = 1209600) -> None:
        self._guard = PathGuard(asset_dir)
        self._cache_control = f"public, max-age={max_age}"

    def serve(self, asset_name: str) -> Asset:
        """Read an asset into memory.

        Raises:
            NotFound: for unknown names and for names that leave the asset directory.
        """
        try:
            path = self._guard.resolve(asset_name)
        except NotFound:
            logger.info("asset_not_found", asset_name=asset_name)
            raise
        if not path.is_file():
            logger.info("asset_not_found", asset_name=asset_name)
            raise NotFound("Path does not exist, or escaping from the base path was detected")

        body = path.read_bytes()
        return Asset(
            content_type=content_type_for(asset_name),
            length=len(body),
            body=body,
            cache_control=self._cache_control,
        )
