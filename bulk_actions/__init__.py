"""Registry and permission-gated dispatch of admin bulk actions."""

from .actions import (
    ActionDefinition,
    ActionRegistry,
    ActionResult,
    Dispatcher,
    DispatchOutcome,
    OutcomeStatus,
)
from .feedback import Notice, decode, encode
from .main import BulkActionsApp, create_app
from .permissions import CallableOracle, CapabilityOracle, CapabilitySet

__all__ = [
    "ActionDefinition",
    "ActionRegistry",
    "ActionResult",
    "BulkActionsApp",
    "CallableOracle",
    "CapabilityOracle",
    "CapabilitySet",
    "DispatchOutcome",
    "Dispatcher",
    "Notice",
    "OutcomeStatus",
    "decode",
    "create_app",
    "encode",
]
