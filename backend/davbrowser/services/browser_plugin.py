"""BrowserPlugin — entry points for the read and form requests the browser intercepts.

Both methods return ``None`` when the plugin declines a request, leaving the
host free to handle it some other way.
"""

from collections.abc import Mapping
from typing import Any

import structlog
from starlette.responses import HTMLResponse, RedirectResponse, Response

from davbrowser.adapters.tree import ResourceTree
from davbrowser.exceptions import NotFound, UnsupportedMediaType
from davbrowser.services.asset_server import AssetServer
from davbrowser.services.browser_actions import BrowserActionHandler
from davbrowser.services.directory_index import CONTENT_SECURITY_POLICY, DirectoryIndexGenerator

logger = structlog.get_logger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def check_form_content_type(content_type: str | None) -> None:
    """Raise UnsupportedMediaType unless the body is an HTML form submission."""
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type not in FORM_CONTENT_TYPES:
        raise UnsupportedMediaType(media_type)


class BrowserPlugin:
    def __init__(
        self,
        tree: ResourceTree,
        generator: DirectoryIndexGenerator,
        assets: AssetServer,
        actions: BrowserActionHandler,
        *,
        enable_post: bool = True,
    ) -> None:
        self._tree = tree
        self._generator = generator
        self._assets = assets
        self._actions = actions
        self.enable_post = enable_post

    def wants_asset(self, query: Mapping[str, str]) -> bool:
        return query.get("sabreAction") == "asset" and "assetName" in query

    def serve_asset(self, asset_name: str) -> Response:
        """Raises NotFound; there is nothing to fall back to for assets."""
        asset = self._assets.serve(asset_name)
        return Response(
            content=asset.body,
            headers={
                "Content-Type": asset.content_type,
                "Content-Length": str(asset.length),
                "Cache-Control": asset.cache_control,
            },
        )

    def http_get(self, path: str) -> Response | None:
        """Render the index page for a collection.

        Asset requests are dispatched to ``serve_asset`` by the caller before
        this runs.
        """
        try:
            node = self._tree.get_node(path)
        except NotFound:
            # Stop here so another handler gets a chance at the request.
            logger.debug("browser_declined", path=path)
            return None
        if not node.is_collection:
            # Leaf nodes are left to the plain download handler.
            logger.debug("browser_declined", path=path, reason="not a collection")
            return None

        return HTMLResponse(
            self._generator.generate(path),
            headers={"Content-Security-Policy": CONTENT_SECURITY_POLICY},
        )

    def http_post(
        self,
        path: str,
        content_type: str | None,
        fields: Mapping[str, Any],
        redirect_to: str,
    ) -> Response | None:
        if not self.enable_post:
            return None
        try:
            check_form_content_type(content_type)
        except UnsupportedMediaType as exc:
            logger.debug("browser_declined", path=path, reason=str(exc))
            return None

        action = fields.get("sabreAction")
        if not isinstance(action, str):
            return None

        self._actions.handle(path, action, fields)
        return RedirectResponse(redirect_to, status_code=302)
