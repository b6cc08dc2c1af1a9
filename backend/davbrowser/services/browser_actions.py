"""BrowserActionHandler — performs the create-folder and upload form actions."""

from collections.abc import Mapping
from typing import Any

import structlog
from starlette.datastructures import UploadFile

from davbrowser.adapters.tree import ResourceTree
from davbrowser.exceptions import BrowserError, ValidationSkip
from davbrowser.services.hooks import EventHooks
from davbrowser.services.url_util import join_path, split_path

logger = structlog.get_logger(__name__)

ACTIONS = frozenset({"mkcol", "put"})


def sanitize_name(name: Any) -> str:
    """Reduce a submitted name to its last path segment.

    Raises:
        ValidationSkip: if nothing usable is left.
    """
    if not isinstance(name, str):
        raise ValidationSkip("name is missing")
    _, base = split_path(name.strip())
    base = base.strip()
    if not base or base in (".", ".."):
        raise ValidationSkip("name is blank")
    return base


class BrowserActionHandler:
    def __init__(self, tree: ResourceTree, hooks: EventHooks) -> None:
        self._tree = tree
        self._hooks = hooks

    def handle(self, uri: str, action: str, fields: Mapping[str, Any]) -> bool:
        """Run ``action`` against the collection at ``uri``.

        Returns True when the tree was changed. Vetoed, unknown and incomplete
        actions are no-ops.
        """
        if action not in ACTIONS:
            logger.info("browser_action_unknown", path=uri, action=action)
            return False
        if not self._hooks.before_action(uri, action, fields):
            return False
        try:
            if action == "mkcol":
                self._mkcol(uri, fields)
            else:
                self._put(uri, fields)
        except ValidationSkip as exc:
            logger.info("browser_action_skipped", path=uri, action=action, reason=str(exc))
            return False
        except BrowserError as exc:
            logger.warning("browser_action_failed", path=uri, action=action, reason=str(exc))
            return False
        logger.info("browser_action_performed", path=uri, action=action)
        return True

    def _mkcol(self, uri: str, fields: Mapping[str, Any]) -> None:
        folder_name = sanitize_name(fields.get("name"))
        self._tree.create_directory(join_path(uri, folder_name))

    def _put(self, uri: str, fields: Mapping[str, Any]) -> None:
        # Only a genuine multipart file part counts; a plain text field is a spoofed upload.
        upload = next((value for value in fields.values() if isinstance(value, UploadFile)), None)
        if upload is None:
            raise ValidationSkip("no uploaded file")

        override = fields.get("name")
        if isinstance(override, str) and override.strip():
            new_name = sanitize_name(override)
        else:
            new_name = sanitize_name(upload.filename or "")
        self._tree.create_file(join_path(uri, new_name), upload.file)
