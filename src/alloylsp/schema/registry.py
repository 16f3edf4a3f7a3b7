"""Schema registry mapping block identities to their completions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from alloylsp.schema.types import CompletionItem, CompletionKind

__all__ = ["SchemaRegistry"]


class SchemaRegistry:
    """
    Read-only mapping from block identity to the completions valid inside it.

    Identities are matched exactly: a fully qualified component type such as
    ``prometheus.scrape`` or a nested block keyword such as ``endpoint``.
    A separate set holds the completions offered at top level.
    """

    __slots__ = ("_blocks", "_top_level")

    def __init__(
        self,
        *,
        blocks: Mapping[str, Sequence[CompletionItem]],
        top_level: Sequence[CompletionItem],
    ) -> None:
        frozen: dict[str, tuple[CompletionItem, ...]] = {}
        for identity, items in blocks.items():
            if not identity:
                raise ValueError("Block identity must not be empty")
            frozen[identity] = _checked_items(identity, items)

        self._blocks: Mapping[str, tuple[CompletionItem, ...]] = MappingProxyType(
            frozen
        )
        self._top_level = _checked_items("<top level>", top_level)

    def lookup(self, identity: str) -> tuple[CompletionItem, ...]:
        """Return completions for identity, or an empty tuple if unknown."""
        return self._blocks.get(identity, ())

    def top_level_items(self) -> tuple[CompletionItem, ...]:
        """Return completions offered outside any block."""
        return self._top_level

    def identities(self) -> tuple[str, ...]:
        """Return registered identities in registration order."""
        return tuple(self._blocks)

    def undeclared_block_references(self) -> dict[str, list[str]]:
        """
        Find BLOCK items whose identity has no registry entry.

        Returns:
            Mapping of missing identity -> identities whose completion sets
            reference it. Empty when the registry is self-consistent.
        """
        missing: dict[str, list[str]] = {}
        for owner, items in self._blocks.items():
            for item in items:
                if item.kind is CompletionKind.BLOCK and item.label not in self._blocks:
                    missing.setdefault(item.label, []).append(owner)
        return missing

    def __contains__(self, identity: object) -> bool:
        return identity in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)

    def __repr__(self) -> str:
        return (
            f"SchemaRegistry(blocks={len(self._blocks)}, "
            f"top_level={len(self._top_level)})"
        )


def _checked_items(
    owner: str, items: Iterable[CompletionItem]
) -> tuple[CompletionItem, ...]:
    """Freeze items, rejecting empty or duplicate labels within one set."""
    result = tuple(items)
    seen: set[str] = set()
    for item in result:
        if not item.label.strip():
            raise ValueError(f"Empty completion label in {owner}")
        if item.label in seen:
            raise ValueError(f"Duplicate completion label {item.label!r} in {owner}")
        seen.add(item.label)
    return result
