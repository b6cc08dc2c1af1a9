"""EventHooks — the two extension points other plugins use to join in on browser pages.

``actions_panel`` listeners receive the node being rendered and return an HTML
fragment (a string, a list of strings, or None). ``before_action`` listeners
receive ``(path, action, fields)`` before a form action runs and return False
to cancel it.

Listeners run in ascending ``priority``; equal priorities keep registration order.
"""

from collections.abc import Callable, Mapping
from typing import Any

import structlog

from davbrowser.adapters.tree import Node

logger = structlog.get_logger(__name__)

ActionsPanelHook = Callable[[Node], str | list[str] | None]
BeforeActionHook = Callable[[str, str, Mapping[str, Any]], bool | None]


class EventHooks:
    def __init__(self) -> None:
        self._actions_panel: list[tuple[int, ActionsPanelHook]] = []
        self._before_action: list[tuple[int, BeforeActionHook]] = []

    def on_actions_panel(self, callback: ActionsPanelHook, priority: int = 100) -> None:
        self._actions_panel.append((priority, callback))
        self._actions_panel.sort(key=lambda item: item[0])

    def on_before_action(self, callback: BeforeActionHook, priority: int = 100) -> None:
        self._before_action.append((priority, callback))
        self._before_action.sort(key=lambda item: item[0])

    def actions_panel(self, node: Node) -> str:
        fragments: list[str] = []
        for _, callback in self._actions_panel:
            result = callback(node)
            if result is None:
                continue
            if isinstance(result, str):
                fragments.append(result)
            else:
                fragments.extend(result)
        return "".join(fragments)

    def before_action(self, path: str, action: str, fields: Mapping[str, Any]) -> bool:
        """Return False as soon as one listener vetoes the action."""
        for _, callback in self._before_action:
            if callback(path, action, fields) is False:
                logger.info("browser_action_vetoed", path=path, action=action, hook=getattr(callback, "__name__", None))
                return False
        return True
