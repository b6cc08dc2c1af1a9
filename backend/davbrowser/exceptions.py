"""Error taxonomy for the browser component."""


class BrowserError(Exception):
    pass


class NotFound(BrowserError):
    """A path does not resolve to a node, or an asset is missing or outside the asset root."""


class UnsupportedMediaType(BrowserError):
    def __init__(self, content_type: str) -> None:
        super().__init__(f"Unsupported form content type: {content_type!r}")
        self.content_type = content_type


class ValidationSkip(BrowserError):
    """A required form field is missing or blank; the action is not performed."""


class Conflict(BrowserError):
    """The tree refused a mutation, e.g. because the target already exists."""


class Forbidden(BrowserError):
    """The host refused access to a path it holds."""
