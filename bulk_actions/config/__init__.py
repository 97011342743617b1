"""Configuration management with Pydantic models."""

from .settings import DEFAULT_CAPABILITY, ActionConfig, BulkActionSettings

__all__ = ["BulkActionSettings", "ActionConfig", "DEFAULT_CAPABILITY"]
