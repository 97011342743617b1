"""Hook surface of the admin host that bulk actions are wired into."""

from typing import Any, Callable, Dict, List, Protocol

import structlog


logger = structlog.get_logger(__name__)


class HookHost(Protocol):
    """Host framework capable of registering filter and action callbacks."""

    def add_filter(self, hook: str, callback: Callable[..., Any]) -> None:  # pragma: no cover - interface
        ...

    def add_action(self, hook: str, callback: Callable[..., Any]) -> None:  # pragma: no cover - interface
        ...


class HookRegistry:
    """In-memory host that stores callbacks and runs them on demand.

    Filters pass a value through each callback in registration order.
    Actions call every callback and collect what they return.
    """

    def __init__(self) -> None:
        self._filters: Dict[str, List[Callable[..., Any]]] = {}
        self._actions: Dict[str, List[Callable[..., Any]]] = {}

    def add_filter(self, hook: str, callback: Callable[..., Any]) -> None:
        self._filters.setdefault(hook, []).append(callback)
        logger.debug("Added filter", hook=hook)

    def add_action(self, hook: str, callback: Callable[..., Any]) -> None:
        self._actions.setdefault(hook, []).append(callback)
        logger.debug("Added action", hook=hook)

    def apply_filters(self, hook: str, value: Any, *args: Any) -> Any:
        """Pass ``value`` through every filter registered on ``hook``."""
        for callback in self._filters.get(hook, []):
            value = callback(value, *args)
        return value

    def do_action(self, hook: str, *args: Any) -> List[Any]:
        """Call every action registered on ``hook``."""
        return [callback(*args) for callback in self._actions.get(hook, [])]

    def has_filter(self, hook: str) -> bool:
        return bool(self._filters.get(hook))

    def has_action(self, hook: str) -> bool:
        return bool(self._actions.get(hook))

    def hooks(self) -> Dict[str, int]:
        """Count callbacks per hook name."""
        counts = {hook: len(callbacks) for hook, callbacks in self._filters.items()}
        for hook, callbacks in self._actions.items():
            counts[hook] = counts.get(hook, 0) + len(callbacks)
        return counts
