"""Configuration models using Pydantic."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CAPABILITY = "manage_options"


class ActionConfig(BaseModel):
    """Partial definition of a single bulk action."""

    label: str = Field(
        default="",
        description="Display text shown in the bulk action menu"
    )
    capability: Optional[str] = Field(
        default=None,
        description="Capability required to see and run the action"
    )
    handler: Any = Field(
        default=None,
        alias="callback",
        description="Callable invoked with the list of selected ids"
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class BulkActionSettings(BaseSettings):
    """Global bulk action configuration settings."""

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: Literal["json", "plain"] = Field(
        default="json",
        description="Log format (json, plain)"
    )

    # Registration defaults
    default_capability: str = Field(
        default=DEFAULT_CAPABILITY,
        min_length=1,
        description="Capability applied to actions that do not declare one"
    )

    # Dispatch configuration
    identifier_policy: Literal["coerce", "filter", "reject"] = Field(
        default="coerce",
        description="How non-numeric object ids are treated on dispatch"
    )

    # Metrics configuration
    metrics_enabled: bool = Field(
        default=True,
        description="Record Prometheus metrics for dispatches"
    )

    # Host wiring
    notice_hook: str = Field(
        default="admin_notices",
        min_length=1,
        description="Host action fired when notices are rendered"
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    model_config = SettingsConfigDict(
        env_prefix="BULK_ACTIONS_",
        case_sensitive=False,
        validate_assignment=True,
    )
