"""Unit tests for ActionRegistry."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from bulk_actions.actions import (
    ActionDefinition,
    ActionRegistry,
    InvalidActionConfig,
    InvalidKey,
)


class TestRegister:
    """Test low-level registration."""

    def test_register_and_list(self, registry):
        """Test that a registered definition is listed under its scope."""
        definition = ActionDefinition("feature", "Feature", "edit_posts")
        registry.register("post", "post", "feature", definition)

        assert dict(registry.list("post", "post")) == {"feature": definition}

    @pytest.mark.parametrize("key", ["", None, 0, 3, ("a",)])
    def test_invalid_key(self, registry, key):
        """Test that empty and non-string keys are rejected."""
        definition = ActionDefinition("x", "", None)

        with pytest.raises(InvalidKey):
            registry.register("post", "post", key, definition)

        assert len(registry.list("post", "post")) == 0

    def test_unknown_scope_is_empty(self, registry):
        """Test listing a scope nothing was registered under."""
        assert dict(registry.list("post", "nothing")) == {}

    def test_list_is_read_only_snapshot(self, registry):
        """Test that callers cannot mutate the registry through a listing."""
        registry.register("post", "post", "a", ActionDefinition("a", "A", None))
        listing = registry.list("post", "post")

        with pytest.raises(TypeError):
            listing["b"] = ActionDefinition("b", "B", None)  # type: ignore[index]

        registry.register("post", "post", "c", ActionDefinition("c", "C", None))

        assert list(listing) == ["a"]
        assert list(registry.list("post", "post")) == ["a", "c"]


class TestAddActions:
    """Test the validating registration API."""

    def test_defaults_applied(self, registry):
        """Test that missing fields receive their defaults."""
        registry.add_actions("post", "post", {"bare": {}})

        definition = registry.list("post", "post")["bare"]
        assert definition.key == "bare"
        assert definition.label == ""
        assert definition.capability == "manage_options"
        assert definition.handler is None
        assert not definition.is_dispatchable

    def test_none_definition_uses_defaults(self, registry):
        """Test that a None partial definition is treated as empty."""
        registry.add_actions("user", "user", {"bare": None})

        assert registry.list("user", "user")["bare"].capability == "manage_options"

    def test_registry_default_capability(self):
        """Test a registry configured with a different default capability."""
        registry = ActionRegistry(default_capability="edit_posts")
        registry.add_actions("post", "post", {"bare": {"label": "Bare"}})

        assert registry.list("post", "post")["bare"].capability == "edit_posts"

    def test_explicit_empty_capability_kept(self, registry):
        """Test that an explicit empty capability is not replaced."""
        registry.add_actions("post", "post", {"open": {"capability": ""}})

        assert registry.list("post", "post")["open"].capability == ""

    def test_registration_order_preserved(self, registry):
        """Test that listings keep registration order."""
        registry.add_actions("post", "post", {"b": {}, "a": {}})
        registry.add_actions("post", "post", {"c": {}})

        assert list(registry.list("post", "post")) == ["b", "a", "c"]

    def test_overwrite_last_wins(self, registry):
        """Test that re-registering a key replaces the previous definition."""
        first = lambda ids: "first"  # noqa: E731
        second = lambda ids: "second"  # noqa: E731

        registry.add_actions("post", "post", {"feature": {"label": "One", "handler": first}})
        registry.add_actions("post", "post", {"feature": {"label": "Two", "handler": second}})

        definition = registry.list("post", "post")["feature"]
        assert definition.label == "Two"
        assert definition.handler is second
        assert list(registry.list("post", "post")) == ["feature"]

    def test_scopes_are_independent(self, registry):
        """Test that subtypes sharing an object type do not leak actions."""
        registry.add_actions("post", "post", {"feature": {"label": "Feature"}})
        registry.add_actions("post", "page", {"archive": {"label": "Archive"}})

        assert list(registry.list("post", "post")) == ["feature"]
        assert list(registry.list("post", "page")) == ["archive"]
        assert dict(registry.list("term", "post")) == {}

    def test_invalid_key_stops_processing(self, registry):
        """Test that entries before a bad key stay registered and later ones do not."""
        with pytest.raises(InvalidKey):
            registry.add_actions("post", "post", {"good": {}, "": {}, "later": {}})

        assert list(registry.list("post", "post")) == ["good"]

    def test_non_string_key(self, registry):
        """Test that integer keys are rejected."""
        with pytest.raises(InvalidKey):
            registry.add_actions("post", "post", {0: {"label": "Zero"}})

    def test_malformed_definition(self, registry):
        """Test that a definition that is not a mapping is rejected."""
        with pytest.raises(InvalidActionConfig):
            registry.add_actions("post", "post", {"feature": "Feature"})

        with pytest.raises(InvalidActionConfig):
            registry.add_actions("post", "post", {"feature": {"label": 42}})


class TestStats:
    """Test registry introspection."""

    def test_scopes_and_stats(self, registry):
        """Test scope listing and statistics."""
        registry.add_actions("post", "post", {"a": {}, "b": {}})
        registry.add_actions("comment", "comment", {"c": {}})

        assert registry.scopes() == [("post", "post"), ("comment", "comment")]

        stats = registry.get_stats()
        assert stats["registered_scopes"] == 2
        assert stats["registered_actions"] == 3
        assert stats["scopes"] == {"post/post": ["a", "b"], "comment/comment": ["c"]}


class TestConcurrency:
    """Test registration interleaved with reads from other threads."""

    def test_threaded_register_and_list(self, registry, dispatcher, admin):
        """Test that concurrent writers and readers see consistent scopes."""
        writers, per_writer = 8, 50
        start = threading.Barrier(writers + 2)

        def write(writer):
            start.wait()
            for i in range(per_writer):
                registry.add_actions("post", "post", {f"w{writer}_{i}": {"handler": lambda ids: None}})

        def read():
            start.wait()
            sizes = []
            for _ in range(per_writer):
                snapshot = registry.list("post", "post")
                sizes.append(len(snapshot))
                for key in list(snapshot)[:3]:
                    dispatcher.dispatch("post", "post", key, [1], admin)
            return sizes

        with ThreadPoolExecutor(max_workers=writers + 2) as pool:
            futures = [pool.submit(write, n) for n in range(writers)]
            readers = [pool.submit(read) for _ in range(2)]
            for future in futures:
                future.result()
            sizes = [reader.result() for reader in readers]

        assert len(registry.list("post", "post")) == writers * per_writer
        for seen in sizes:
            assert seen == sorted(seen)
