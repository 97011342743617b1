"""Base types for bulk action definitions and dispatch outcomes."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence


ActionHandler = Callable[[Sequence[int]], Any]


class BulkActionError(Exception):
    """Base class for all bulk action errors."""


class ConfigurationError(BulkActionError):
    """Setup-time defect; always propagated to the caller."""


class InvalidKey(ConfigurationError):
    """Action key is empty or not a string."""

    def __init__(self, key: Any) -> None:
        super().__init__(
            f"Invalid action key {key!r}. It must be a non-empty string."
        )
        self.key = key


class MissingObjectType(ConfigurationError):
    """An object table did not declare its object type."""


class InvalidActionConfig(ConfigurationError):
    """Partial action definition could not be validated."""


class RegistrationClosed(ConfigurationError):
    """Registration attempted after the hooks were activated."""


class InvalidIdentifier(BulkActionError):
    """A selected object id is not numeric."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid object identifier: {value!r}")
        self.value = value


class OutcomeStatus(Enum):
    """Status of a dispatch attempt."""

    UNHANDLED = "unhandled"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class ActionDefinition:
    """A registered bulk action."""

    key: str
    label: str
    capability: Optional[str]
    handler: Optional[ActionHandler] = None

    @property
    def is_dispatchable(self) -> bool:
        """Check if the action has an invocable handler."""
        return self.handler is not None and callable(self.handler)


def _truthy(value: Any) -> bool:
    # "0" and "" are false as well, matching form and query values
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


@dataclass(frozen=True)
class ActionResult:
    """Structured value a handler may return."""

    message: Optional[str] = None
    success: Optional[bool] = None

    @classmethod
    def from_return_value(cls, value: Any) -> "ActionResult":
        """Interpret whatever a handler returned.

        Args:
            value: Handler return value

        Returns:
            ActionResult; non-structured values mean success with no message
        """
        if isinstance(value, ActionResult):
            return value

        if isinstance(value, Mapping):
            message = value.get("message")
            success = value.get("success")
            return cls(
                message=None if message is None else str(message),
                success=None if success is None else _truthy(success),
            )

        return cls()


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of a dispatch attempt, ready to be encoded into a signal."""

    status: OutcomeStatus
    action: Optional[str] = None
    count: int = 0
    message: Optional[str] = None
    error: bool = False

    @classmethod
    def unhandled(cls) -> "DispatchOutcome":
        return cls(status=OutcomeStatus.UNHANDLED)

    @classmethod
    def completed(
        cls, action: str, count: int, message: Optional[str] = None, error: bool = False
    ) -> "DispatchOutcome":
        return cls(
            status=OutcomeStatus.COMPLETED,
            action=action,
            count=count,
            message=message,
            error=error,
        )

    @classmethod
    def failed(cls, action: str, count: int, message: str) -> "DispatchOutcome":
        return cls(
            status=OutcomeStatus.FAILED,
            action=action,
            count=count,
            message=message,
            error=True,
        )

    @property
    def is_handled(self) -> bool:
        return self.status is not OutcomeStatus.UNHANDLED
