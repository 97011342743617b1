"""Permission-gated dispatch of registered bulk actions."""

import time
from typing import Any, Dict, Iterable

import structlog
from prometheus_client import Counter, Histogram

from ..permissions import CapabilityOracle, is_permitted
from .base import ActionResult, DispatchOutcome, InvalidIdentifier
from .identifiers import coerce_ids
from .registry import ActionRegistry


logger = structlog.get_logger(__name__)

# Prometheus metrics
DISPATCHES_TOTAL = Counter(
    "bulk_actions_dispatched_total",
    "Total number of bulk action dispatches",
    ["object_type", "object_subtype", "action", "status"],
)

HANDLER_DURATION = Histogram(
    "bulk_actions_handler_duration_seconds",
    "Time spent inside bulk action handlers",
    ["object_type", "action"],
)


class Dispatcher:
    """Lists permitted actions and runs the selected one."""

    def __init__(
        self,
        registry: ActionRegistry,
        identifier_policy: str = "coerce",
        metrics_enabled: bool = True,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Registry to read actions from
            identifier_policy: "coerce", "filter" or "reject"
            metrics_enabled: Record Prometheus metrics
        """
        self.registry = registry
        self.identifier_policy = identifier_policy
        self.metrics_enabled = metrics_enabled

        logger.info(
            "Initialized Dispatcher",
            identifier_policy=identifier_policy,
            metrics_enabled=metrics_enabled,
        )

    def list_available(
        self, object_type: str, object_subtype: str, actor: CapabilityOracle
    ) -> Dict[str, str]:
        """Build the menu of actions the actor may run.

        Args:
            object_type: Object type
            object_subtype: Object subtype
            actor: Capability oracle for the current actor

        Returns:
            Mapping of action key to label, in registration order
        """
        return {
            key: definition.label
            for key, definition in self.registry.list(object_type, object_subtype).items()
            if is_permitted(actor, definition.capability)
        }

    def dispatch(
        self,
        object_type: str,
        object_subtype: str,
        action_key: str,
        raw_ids: Iterable[Any],
        actor: CapabilityOracle,
    ) -> DispatchOutcome:
        """Run an action against the selected ids.

        Unknown actions, actions the actor may not run and actions without a
        callable handler are all reported as unhandled. Handler exceptions
        become failed outcomes and are never raised from here.

        Args:
            object_type: Object type
            object_subtype: Object subtype
            action_key: Key chosen in the host menu
            raw_ids: Selected ids as submitted
            actor: Capability oracle for the current actor

        Returns:
            Outcome of the dispatch
        """
        definition = self.registry.list(object_type, object_subtype).get(action_key)

        if definition is None:
            return self._record(object_type, object_subtype, action_key, DispatchOutcome.unhandled())

        if not is_permitted(actor, definition.capability):
            logger.info(
                "Actor lacks capability for bulk action",
                object_type=object_type,
                object_subtype=object_subtype,
                action=action_key,
                capability=definition.capability,
            )
            return self._record(object_type, object_subtype, action_key, DispatchOutcome.unhandled())

        if not definition.is_dispatchable:
            logger.debug(
                "Bulk action has no callable handler",
                object_type=object_type,
                object_subtype=object_subtype,
                action=action_key,
            )
            return self._record(object_type, object_subtype, action_key, DispatchOutcome.unhandled())

        raw_ids = list(raw_ids)
        try:
            ids = coerce_ids(raw_ids, self.identifier_policy)
        except InvalidIdentifier as e:
            logger.warning(
                "Rejected bulk action identifiers",
                object_type=object_type,
                object_subtype=object_subtype,
                action=action_key,
                error=str(e),
            )
            outcome = DispatchOutcome.failed(action_key, len(raw_ids), str(e))
            return self._record(object_type, object_subtype, action_key, outcome)

        logger.info(
            "Executing bulk action",
            object_type=object_type,
            object_subtype=object_subtype,
            action=action_key,
            count=len(ids),
        )

        start_time = time.time()
        try:
            returned = definition.handler(ids)  # type: ignore[misc]
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(
                "Bulk action handler failed",
                object_type=object_type,
                object_subtype=object_subtype,
                action=action_key,
                error=str(e),
                error_type=type(e).__name__,
                execution_time=execution_time,
            )
            self._observe(object_type, action_key, execution_time)
            outcome = DispatchOutcome.failed(action_key, len(ids), str(e))
            return self._record(object_type, object_subtype, action_key, outcome)

        execution_time = time.time() - start_time
        self._observe(object_type, action_key, execution_time)

        result = ActionResult.from_return_value(returned)
        outcome = DispatchOutcome.completed(
            action_key,
            len(ids),
            message=result.message,
            error=result.success is False,
        )

        logger.info(
            "Bulk action completed",
            object_type=object_type,
            object_subtype=object_subtype,
            action=action_key,
            count=outcome.count,
            error=outcome.error,
            execution_time=execution_time,
        )

        return self._record(object_type, object_subtype, action_key, outcome)

    def _observe(self, object_type: str, action_key: str, seconds: float) -> None:
        if self.metrics_enabled:
            HANDLER_DURATION.labels(object_type=object_type, action=action_key).observe(seconds)

    def _record(
        self,
        object_type: str,
        object_subtype: str,
        action_key: str,
        outcome: DispatchOutcome,
    ) -> DispatchOutcome:
        # Only handled, registered keys become label values
        if self.metrics_enabled:
            DISPATCHES_TOTAL.labels(
                object_type=object_type,
                object_subtype=object_subtype,
                action=action_key if outcome.is_handled else "",
                status=outcome.status.value,
            ).inc()
        return outcome
