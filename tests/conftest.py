"""Pytest configuration and fixtures for bulk action tests."""

from unittest.mock import MagicMock

import pytest

from bulk_actions.actions import ActionRegistry, Dispatcher
from bulk_actions.config import BulkActionSettings
from bulk_actions.host import HookRegistry
from bulk_actions.permissions import CapabilitySet


@pytest.fixture
def settings():
    """Provide test settings."""
    return BulkActionSettings(
        log_level="DEBUG",
        log_format="plain",
        metrics_enabled=False,
    )


@pytest.fixture
def registry():
    """Provide an empty ActionRegistry."""
    return ActionRegistry()


@pytest.fixture
def dispatcher(registry):
    """Provide a Dispatcher over the registry fixture."""
    return Dispatcher(registry, metrics_enabled=False)


@pytest.fixture
def admin():
    """Actor holding every capability used in the tests."""
    return CapabilitySet(
        {"manage_options", "edit_posts", "edit_users", "moderate_comments", "upload_files"}
    )


@pytest.fixture
def editor():
    """Actor that may edit posts but holds no administrative capability."""
    return CapabilitySet({"edit_posts"})


@pytest.fixture
def nobody():
    """Actor without any capability."""
    return CapabilitySet()


@pytest.fixture
def host():
    """Provide an in-memory hook host."""
    return HookRegistry()


@pytest.fixture
def recording_handler():
    """Handler double that records the ids it receives."""
    handler = MagicMock(return_value=None)
    return handler


@pytest.fixture
def sample_actions(recording_handler):
    """Provide a typical actions configuration."""
    return {
        "mark_featured": {
            "label": "Mark as Featured",
            "capability": "edit_posts",
            "callback": recording_handler,
        },
        "purge": {
            "label": "Purge",
            "handler": recording_handler,
        },
    }
