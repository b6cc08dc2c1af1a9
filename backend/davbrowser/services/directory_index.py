"""DirectoryIndexGenerator — assembles the HTML page shown for a node.

The page has four parts: a header with a link to the parent, a table of
children (collections only), a table with every property of the node, and the
actions section contributed through ``EventHooks.actions_panel``.
"""

from datetime import datetime
from email.utils import parsedate_to_datetime
from html import escape

import structlog

from davbrowser.adapters.tree import ResourceTree
from davbrowser.schemas.properties import PropertySet
from davbrowser.services.asset_server import asset_url
from davbrowser.services.hooks import EventHooks
from davbrowser.services.property_renderer import PropertyRowRenderer
from davbrowser.services.resource_classifier import classify
from davbrowser.services.url_util import encode_path, split_path

logger = structlog.get_logger(__name__)

CONTENT_SECURITY_POLICY = "img-src 'self'; style-src 'unsafe-inline';"

CHILD_PROPERTIES = (
    "{DAV:}displayname",
    "{DAV:}resourcetype",
    "{DAV:}getcontenttype",
    "{DAV:}getcontentlength",
    "{DAV:}getlastmodified",
)


def format_long_date(value: datetime) -> str:
    """Format like ``January 5, 2024, 3:04 pm``."""
    hour = value.hour % 12 or 12
    meridiem = "am" if value.hour < 12 else "pm"
    return f"{value:%B} {value.day}, {value.year}, {hour}:{value:%M} {meridiem}"


def _plain(props: PropertySet, name: str) -> str | None:
    value = props.get(name)
    if value is None or value.kind != "plain":
        return None
    return value.value


def _resource_types(props: PropertySet) -> list[str]:
    value = props.get("{DAV:}resourcetype")
    if value is None or value.kind != "qnamelist":
        return []
    return value.names


class DirectoryIndexGenerator:
    def __init__(
        self,
        tree: ResourceTree,
        hooks: EventHooks,
        *,
        base_uri: str = "/",
        namespaces: dict[str, str] | None = None,
        version: str | None = None,
        enable_post: bool = True,
    ) -> None:
        self._tree = tree
        self._hooks = hooks
        self._base_uri = base_uri
        self._version = version or ""
        self._enable_post = enable_post
        self._renderer = PropertyRowRenderer(base_uri, namespaces or {})

    def generate(self, path: str) -> str:
        """Render the page for ``path``.

        The caller must have checked that ``path`` resolves; a missing node
        propagates ``NotFound`` from the tree.
        """
        node = self._tree.get_node(path)
        parts = [self._header(path), self._nav(path)]

        parts.append("<section><h1>Nodes</h1>\n")
        if node.is_collection:
            parts.append(self._children_table(path))
        parts.append("</section>")

        parts.append("<section><h1>Properties</h1><table>")
        for name, value in self._tree.get_all_properties(path).items():
            parts.append(self._renderer.render(name, value))
        parts.append("</table></section>")

        parts.append("<section><h1>Actions</h1>")
        if self._enable_post:
            parts.append(self._hooks.actions_panel(node))
        parts.append("</section>")

        parts.append(self._footer())
        logger.debug("directory_index_generated", path=path, collection=node.is_collection)
        return "".join(parts)

    def _header(self, path: str) -> str:
        display_path = escape(path)
        version = escape(self._version)
        favicon = escape(asset_url(self._base_uri, "favicon.ico"))
        style = escape(asset_url(self._base_uri, "sabredav.css"))
        icon_style = escape(asset_url(self._base_uri, "openiconic/open-iconic.css"))
        logo = escape(asset_url(self._base_uri, "sabredav.png"))
        base_url = escape(self._base_uri)
        return f"""<!DOCTYPE html>
<html>
<head>
    <title>{display_path}/ - davbrowser {version}</title>
    <link rel="shortcut icon" href="{favicon}" type="image/vnd.microsoft.icon" />
    <link rel="stylesheet" href="{style}" type="text/css" />
    <link rel="stylesheet" href="{icon_style}" type="text/css" />
</head>
<body>
    <header>
        <div class="logo">
            <a href="{base_url}"><img src="{logo}" alt="davbrowser" /> {display_path}/</a>
        </div>
    </header>

    <nav>"""

    def _nav(self, path: str) -> str:
        # The root has no parent.
        if not path:
            return '<span class="btn disabled">&#8676; Go to parent</span></nav>'
        parent, _ = split_path(path)
        href = escape(encode_path(self._base_uri + parent))
        return f'<a href="{href}" class="btn">&#8676; Go to parent</a></nav>'

    def _children_table(self, path: str) -> str:
        rows = ['<table class="nodeTable">']
        children = self._tree.get_properties_for_children(path, CHILD_PROPERTIES)
        for sub_path, props in children.items():
            sub_node = self._tree.get_node(sub_path)
            info = classify(_resource_types(props), sub_node.is_file)
            href = escape(encode_path(self._base_uri + sub_path))
            _, name = split_path(sub_path)

            size = _plain(props, "{DAV:}getcontentlength")
            modified = _plain(props, "{DAV:}getlastmodified")
            rows.append(
                "<tr>"
                f'<td class="namecolumn"><a href="{href}"><span class="oi" data-glyph="{escape(info.icon)}"></span> '
                f"{escape(name)}</a></td>"
                f"<td>{escape(info.label)}</td>"
                f"<td>{escape(size) + ' bytes' if size is not None else ''}</td>"
                f"<td>{self._modified(modified) if modified is not None else ''}</td>"
                "</tr>"
            )
        rows.append("</table>")
        return "".join(rows)

    def _modified(self, value: str) -> str:
        try:
            return escape(format_long_date(parsedate_to_datetime(value)))
        except (TypeError, ValueError):
            return escape(value)

    def _footer(self) -> str:
        return f"""
<address>Generated by davbrowser {escape(self._version)}</address>
</body>
</html>"""
