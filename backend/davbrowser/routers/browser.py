"""Tree browser — HTML listings for GET requests and form actions for POST requests.

The browser plugin gets the first look at every request. A declined GET on a
file is answered with the file body; anything else it declines falls through
to a plain error response.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from davbrowser.adapters.tree import ResourceTree
from davbrowser.exceptions import NotFound
from davbrowser.services.browser_plugin import BrowserPlugin
from davbrowser.services.file_download import file_response

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["browser"])


def get_browser(request: Request) -> BrowserPlugin:
    """FastAPI dependency — reads from app.state.browser."""
    return request.app.state.browser


def get_tree(request: Request) -> ResourceTree:
    return request.app.state.tree


def _not_handled(status_code: int = status.HTTP_404_NOT_FOUND) -> HTTPException:
    return HTTPException(status_code=status_code, detail="No handler for this request")


def _request_target(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


@router.get("/{path:path}")
async def http_get(
    path: str,
    request: Request,
    browser: Annotated[BrowserPlugin, Depends(get_browser)],
    tree: Annotated[ResourceTree, Depends(get_tree)],
) -> Response:
    query = request.query_params
    if browser.wants_asset(query):
        try:
            return browser.serve_asset(query["assetName"])
        except NotFound as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Asset not found") from exc

    path = path.strip("/")
    response = browser.http_get(path)
    if response is None:
        response = file_response(tree, path)
    if response is None:
        raise _not_handled()
    return response


@router.post("/{path:path}")
async def http_post(
    path: str,
    request: Request,
    browser: Annotated[BrowserPlugin, Depends(get_browser)],
) -> Response:
    content_type = request.headers.get("content-type")
    if not browser.enable_post:
        raise _not_handled(status.HTTP_501_NOT_IMPLEMENTED)

    async with request.form() as form:
        response = browser.http_post(path.strip("/"), content_type, form, redirect_to=_request_target(request))
    if response is None:
        raise _not_handled(status.HTTP_501_NOT_IMPLEMENTED)
    return response
