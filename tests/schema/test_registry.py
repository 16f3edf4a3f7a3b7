"""Tests for the schema registry."""

from __future__ import annotations

import pytest

from alloylsp.schema.registry import SchemaRegistry
from alloylsp.schema.template import snippet
from alloylsp.schema.types import CompletionItem, CompletionKind, make_item


def _item(label: str, kind: CompletionKind = CompletionKind.PROPERTY) -> CompletionItem:
    return make_item(label, kind, snippet(label), f"{label} docs", "string - optional")


@pytest.fixture
def registry() -> SchemaRegistry:
    return SchemaRegistry(
        blocks={
            "loki.write": (_item("endpoint", CompletionKind.BLOCK), _item("connection_timeout")),
            "endpoint": (_item("url"), _item("tls_config", CompletionKind.BLOCK)),
        },
        top_level=(_item("loki.write", CompletionKind.COMPONENT),),
    )


class TestLookup:
    """Tests for lookup and top_level_items."""

    def test_known_identity(self, registry: SchemaRegistry) -> None:
        """Known identity returns its items in insertion order."""
        assert [item.label for item in registry.lookup("loki.write")] == [
            "endpoint",
            "connection_timeout",
        ]

    def test_unknown_identity_is_empty(self, registry: SchemaRegistry) -> None:
        """Unknown identity returns an empty tuple, not an error."""
        assert registry.lookup("does.not.exist") == ()

    def test_exact_match_only(self, registry: SchemaRegistry) -> None:
        """No prefix, suffix or case-insensitive matching."""
        assert registry.lookup("loki") == ()
        assert registry.lookup("write") == ()
        assert registry.lookup("Endpoint") == ()

    def test_top_level_items(self, registry: SchemaRegistry) -> None:
        """Top-level set is separate from block entries."""
        assert [item.label for item in registry.top_level_items()] == ["loki.write"]
        assert "<top level>" not in registry

    def test_contains_and_len(self, registry: SchemaRegistry) -> None:
        """Membership and size reflect block entries."""
        assert "endpoint" in registry
        assert "tls_config" not in registry
        assert len(registry) == 2
        assert registry.identities() == ("loki.write", "endpoint")


class TestImmutability:
    """The registry cannot be changed after construction."""

    def test_source_mapping_changes_do_not_leak(self) -> None:
        """Mutating the constructor input does not affect the registry."""
        blocks = {"a": [_item("x")]}
        registry = SchemaRegistry(blocks=blocks, top_level=[])
        blocks["a"].append(_item("y"))
        blocks["b"] = [_item("z")]

        assert [item.label for item in registry.lookup("a")] == ["x"]
        assert "b" not in registry

    def test_lookup_returns_tuple(self, registry: SchemaRegistry) -> None:
        """Results are tuples so callers cannot mutate them."""
        assert isinstance(registry.lookup("endpoint"), tuple)
        assert isinstance(registry.top_level_items(), tuple)

    def test_no_attribute_assignment(self, registry: SchemaRegistry) -> None:
        """Slots prevent adding attributes."""
        with pytest.raises(AttributeError):
            registry.extra = 1  # type: ignore[attr-defined]


class TestValidation:
    """Construction-time checks."""

    def test_duplicate_label_rejected(self) -> None:
        """Labels must be unique within a completion set."""
        with pytest.raises(ValueError, match="Duplicate completion label 'url' in endpoint"):
            SchemaRegistry(blocks={"endpoint": (_item("url"), _item("url"))}, top_level=())

    def test_duplicate_top_level_label_rejected(self) -> None:
        """Top-level labels must be unique too."""
        with pytest.raises(ValueError, match="top level"):
            SchemaRegistry(blocks={}, top_level=(_item("a"), _item("a")))

    def test_same_label_in_different_sets_allowed(self) -> None:
        """Uniqueness is per set, not global."""
        registry = SchemaRegistry(
            blocks={"a": (_item("endpoint"),), "b": (_item("endpoint"),)}, top_level=()
        )
        assert len(registry) == 2

    def test_empty_identity_rejected(self) -> None:
        """Block identities must be non-empty."""
        with pytest.raises(ValueError, match="identity"):
            SchemaRegistry(blocks={"": ()}, top_level=())

    @pytest.mark.parametrize("label", ["", "   "])
    def test_directly_built_empty_label_rejected(self, label: str) -> None:
        """Items built without make_item cannot smuggle in an empty label."""
        item = CompletionItem(label, CompletionKind.PROPERTY, snippet("x"), "", "")
        with pytest.raises(ValueError, match="Empty completion label in endpoint"):
            SchemaRegistry(blocks={"endpoint": (item,)}, top_level=())
        with pytest.raises(ValueError, match="Empty completion label in <top level>"):
            SchemaRegistry(blocks={}, top_level=(item,))

    def test_empty_label_rejected(self) -> None:
        """make_item refuses empty labels."""
        with pytest.raises(ValueError, match="label"):
            make_item("  ", CompletionKind.PROPERTY, snippet("x"), "", "")


class TestUndeclaredBlockReferences:
    """Tests for undeclared_block_references."""

    def test_reports_missing_block_entries(self, registry: SchemaRegistry) -> None:
        """BLOCK items without a registry entry are reported with their owners."""
        assert registry.undeclared_block_references() == {"tls_config": ["endpoint"]}

    def test_properties_are_not_references(self) -> None:
        """Only BLOCK items count as references."""
        registry = SchemaRegistry(blocks={"a": (_item("missing"),)}, top_level=())
        assert registry.undeclared_block_references() == {}
