"""PropertyRowRenderer — one HTML table row per property, without knowing every property type."""

from html import escape

from davbrowser.schemas.properties import PropertyValue, display_name

_ABSOLUTE_PREFIXES = ("mailto:", "/", "http:", "https:")


def _anchor(url: str) -> str:
    url = escape(url)
    return f'<a href="{url}">{url}</a>'


class PropertyRowRenderer:
    """Renders ``<tr>`` rows for a node's property table.

    Qualified names are shown with their namespace prefix where one is known;
    the full ``{namespace}local`` name is always kept in the ``title`` attribute.
    """

    def __init__(self, base_uri: str, namespaces: dict[str, str]) -> None:
        self._base_uri = base_uri
        self._namespaces = namespaces

    def qname(self, name: str) -> str:
        return f'<span title="{escape(name)}">{escape(display_name(name, self._namespaces))}</span>'

    def render(self, name: str, value: PropertyValue) -> str:
        return f"<tr><th>{self.qname(name)}</th><td>{self.render_value(value)}</td></tr>"

    def render_value(self, value: PropertyValue) -> str:
        if value.kind == "plain":
            return escape(value.value)
        if value.kind == "href":
            return _anchor(self._base_uri + value.href)
        if value.kind == "hreflist":
            return "<br />".join(_anchor(self._absolute(href)) for href in value.hrefs)
        if value.kind == "qnamelist":
            return ", ".join(self.qname(name) for name in value.names)
        if value.kind == "valuelist":
            return escape(", ".join(value.values))
        if value.kind == "complex":
            return f'<em title="{escape(value.type_name)}">complex</em>'
        return "<em>unknown</em>"

    def _absolute(self, href: str) -> str:
        if href.lower().startswith(_ABSOLUTE_PREFIXES):
            return href
        return self._base_uri + href
