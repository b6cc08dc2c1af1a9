from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI

from davbrowser.adapters.filesystem_tree import FilesystemTree
from davbrowser.adapters.tree import ResourceTree
from davbrowser.config.config import Settings, settings
from davbrowser.routers import browser as browser_router
from davbrowser.services.actions_panel import tree_actions_panel
from davbrowser.services.asset_server import AssetServer
from davbrowser.services.browser_actions import BrowserActionHandler
from davbrowser.services.browser_plugin import BrowserPlugin
from davbrowser.services.directory_index import DirectoryIndexGenerator
from davbrowser.services.hooks import EventHooks

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer(),
    ]
)

logger = structlog.get_logger(__name__)


def build_browser(tree: ResourceTree, config: Settings, hooks: EventHooks | None = None) -> BrowserPlugin:
    """Wire the browser services around a resource tree."""
    hooks = hooks or EventHooks()
    if config.enable_post:
        hooks.on_actions_panel(tree_actions_panel, priority=200)

    generator = DirectoryIndexGenerator(
        tree,
        hooks,
        base_uri=config.base_uri,
        namespaces=config.xml_namespaces,
        version=config.app_version if config.expose_version else None,
        enable_post=config.enable_post,
    )
    return BrowserPlugin(
        tree,
        generator,
        AssetServer(config.asset_dir, max_age=config.asset_cache_max_age),
        BrowserActionHandler(tree, hooks),
        enable_post=config.enable_post,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    tree_root = Path(settings.tree_root)
    tree_root.mkdir(parents=True, exist_ok=True)
    app.state.tree = FilesystemTree(tree_root)
    app.state.browser = build_browser(app.state.tree, settings)
    logger.info("browser_ready", tree_root=str(tree_root.resolve()), enable_post=settings.enable_post)

    yield

    logger.info("shutdown")


app = FastAPI(
    title="davbrowser",
    description="HTML browser for a WebDAV-style resource tree",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.include_router(browser_router.router)
