"""Bulk action registry and dispatch."""

from .base import (
    ActionDefinition,
    ActionResult,
    BulkActionError,
    ConfigurationError,
    DispatchOutcome,
    InvalidActionConfig,
    InvalidIdentifier,
    InvalidKey,
    MissingObjectType,
    OutcomeStatus,
    RegistrationClosed,
)
from .dispatcher import Dispatcher
from .registry import ActionRegistry

__all__ = [
    "ActionDefinition",
    "ActionRegistry",
    "ActionResult",
    "BulkActionError",
    "ConfigurationError",
    "DispatchOutcome",
    "Dispatcher",
    "InvalidActionConfig",
    "InvalidIdentifier",
    "InvalidKey",
    "MissingObjectType",
    "OutcomeStatus",
    "RegistrationClosed",
]
