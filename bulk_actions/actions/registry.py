"""Bulk action registry scoped by object type and subtype."""

import threading
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

import structlog
from pydantic import ValidationError

from ..config import DEFAULT_CAPABILITY, ActionConfig
from .base import ActionDefinition, InvalidActionConfig, InvalidKey


logger = structlog.get_logger(__name__)

Scope = Tuple[str, str]

_EMPTY: Mapping[str, ActionDefinition] = MappingProxyType({})


class ActionRegistry:
    """Registry of bulk actions keyed by (object type, object subtype)."""

    def __init__(self, default_capability: str = DEFAULT_CAPABILITY) -> None:
        """Initialize the action registry.

        Args:
            default_capability: Capability given to actions that omit one
        """
        self.default_capability = default_capability
        self._actions: Dict[Scope, Dict[str, ActionDefinition]] = {}
        self._lock = threading.Lock()

        logger.info(
            "Initialized ActionRegistry", default_capability=default_capability
        )

    @staticmethod
    def _validate_key(key: Any) -> str:
        if not isinstance(key, str) or not key:
            raise InvalidKey(key)
        return key

    def register(
        self,
        object_type: str,
        object_subtype: str,
        key: str,
        definition: ActionDefinition,
    ) -> None:
        """Register an action definition under a scope.

        Args:
            object_type: Object type, e.g. "post" or "user"
            object_subtype: Object subtype, e.g. a post type or taxonomy
            key: Action key, unique within the scope
            definition: Fully populated definition

        Raises:
            InvalidKey: If key is empty or not a string
        """
        key = self._validate_key(key)

        with self._lock:
            scoped = self._actions.setdefault((object_type, object_subtype), {})
            if key in scoped:
                logger.warning(
                    "Overriding existing bulk action",
                    object_type=object_type,
                    object_subtype=object_subtype,
                    action=key,
                )

            scoped[key] = definition

        logger.debug(
            "Registered bulk action",
            object_type=object_type,
            object_subtype=object_subtype,
            action=key,
            capability=definition.capability,
        )

    def add_actions(
        self,
        object_type: str,
        object_subtype: str,
        actions: Mapping[Any, Any],
    ) -> None:
        """Validate partial definitions, apply defaults and register them.

        Entries are processed in order; the first invalid key aborts the call
        and earlier entries stay registered.

        Args:
            object_type: Object type
            object_subtype: Object subtype
            actions: Mapping of action key to partial definition

        Raises:
            InvalidKey: If an action key is invalid
            InvalidActionConfig: If a partial definition is malformed
        """
        for key, partial in actions.items():
            key = self._validate_key(key)
            config = self._parse_config(key, partial)

            capability = config.capability
            if capability is None:
                capability = self.default_capability

            self.register(
                object_type,
                object_subtype,
                key,
                ActionDefinition(
                    key=key,
                    label=config.label,
                    capability=capability,
                    handler=config.handler,
                ),
            )

        logger.info(
            "Added bulk actions",
            object_type=object_type,
            object_subtype=object_subtype,
            actions=[str(key) for key in actions],
        )

    @staticmethod
    def _parse_config(key: str, partial: Any) -> ActionConfig:
        if isinstance(partial, ActionConfig):
            return partial
        if partial is None:
            return ActionConfig()
        if not isinstance(partial, Mapping):
            raise InvalidActionConfig(
                f"Definition for action '{key}' must be a mapping, "
                f"got {type(partial).__name__}"
            )
        try:
            return ActionConfig.model_validate(dict(partial))
        except ValidationError as e:
            raise InvalidActionConfig(
                f"Invalid definition for action '{key}': {e}"
            ) from e

    def list(self, object_type: str, object_subtype: str) -> Mapping[str, ActionDefinition]:
        """Return a read-only snapshot of the actions in a scope.

        Args:
            object_type: Object type
            object_subtype: Object subtype

        Returns:
            Mapping of key to definition in registration order
        """
        with self._lock:
            scoped = self._actions.get((object_type, object_subtype))
            if not scoped:
                return _EMPTY
            return MappingProxyType(dict(scoped))

    def scopes(self) -> List[Scope]:
        """List all scopes that have at least one action."""
        with self._lock:
            return [scope for scope, scoped in self._actions.items() if scoped]

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics.

        Returns:
            Dictionary with statistics
        """
        with self._lock:
            return {
                "registered_scopes": len(self._actions),
                "registered_actions": sum(len(s) for s in self._actions.values()),
                "scopes": {
                    f"{object_type}/{object_subtype}": list(scoped.keys())
                    for (object_type, object_subtype), scoped in self._actions.items()
                },
            }
