"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from bulk_actions.config import DEFAULT_CAPABILITY, ActionConfig, BulkActionSettings


class TestActionConfig:
    """Test ActionConfig model."""

    def test_defaults(self):
        """Test partial definition with nothing set."""
        config = ActionConfig()

        assert config.label == ""
        assert config.capability is None
        assert config.handler is None

    def test_callback_alias(self):
        """Test that ``callback`` populates the handler."""
        handler = lambda ids: None  # noqa: E731
        config = ActionConfig.model_validate({"label": "Feature", "callback": handler})

        assert config.label == "Feature"
        assert config.handler is handler

    def test_handler_by_name(self):
        """Test that ``handler`` is accepted directly."""
        handler = lambda ids: None  # noqa: E731
        config = ActionConfig.model_validate({"handler": handler, "capability": "edit_posts"})

        assert config.handler is handler
        assert config.capability == "edit_posts"

    def test_unknown_fields_ignored(self):
        """Test that unrelated keys do not break validation."""
        config = ActionConfig.model_validate({"label": "x", "priority": 10})

        assert config.label == "x"

    def test_label_must_be_string(self):
        """Test label type validation."""
        with pytest.raises(ValidationError):
            ActionConfig.model_validate({"label": ["not", "a", "label"]})


class TestBulkActionSettings:
    """Test BulkActionSettings model."""

    def test_default_settings(self):
        """Test default settings."""
        settings = BulkActionSettings()

        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.default_capability == DEFAULT_CAPABILITY == "manage_options"
        assert settings.identifier_policy == "coerce"
        assert settings.metrics_enabled is True
        assert settings.notice_hook == "admin_notices"

    def test_custom_settings(self):
        """Test custom settings."""
        settings = BulkActionSettings(
            log_level="debug",
            log_format="plain",
            default_capability="edit_posts",
            identifier_policy="reject",
        )

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "plain"
        assert settings.default_capability == "edit_posts"
        assert settings.identifier_policy == "reject"

    def test_environment_override(self, monkeypatch):
        """Test that settings are read from prefixed environment variables."""
        monkeypatch.setenv("BULK_ACTIONS_IDENTIFIER_POLICY", "filter")
        monkeypatch.setenv("BULK_ACTIONS_METRICS_ENABLED", "false")

        settings = BulkActionSettings()

        assert settings.identifier_policy == "filter"
        assert settings.metrics_enabled is False

    def test_invalid_values(self):
        """Test validation of constrained fields."""
        with pytest.raises(ValidationError):
            BulkActionSettings(identifier_policy="ignore")

        with pytest.raises(ValidationError):
            BulkActionSettings(log_format="xml")

        with pytest.raises(ValidationError):
            BulkActionSettings(log_level="LOUD")

        with pytest.raises(ValidationError):
            BulkActionSettings(default_capability="")

    def test_validate_assignment(self):
        """Test that assignment is validated."""
        settings = BulkActionSettings()

        with pytest.raises(ValidationError):
            settings.identifier_policy = "maybe"
