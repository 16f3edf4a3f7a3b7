"""Completion resolution for Alloy configuration files.

Determines which block encloses the cursor and returns the completions the
schema registry holds for it.
"""

from __future__ import annotations

import re

from alloylsp.lsp.block_context import find_enclosing_blocks
from alloylsp.lsp.types import CompletionContext
from alloylsp.schema.registry import SchemaRegistry
from alloylsp.schema.types import CompletionItem

__all__ = [
    "InvalidPosition",
    "completion_prefix",
    "get_completion_context",
    "get_completions",
    "resolve_completions",
]

_PREFIX_RE = re.compile(r"[A-Za-z0-9_.]*$")


class InvalidPosition(ValueError):
    """Cursor offset lies outside the document."""

    def __init__(self, offset: int, length: int) -> None:
        super().__init__(
            f"Offset {offset} is outside document of length {length}"
        )
        self.offset = offset
        self.length = length


def get_completion_context(text: str, offset: int) -> CompletionContext:
    """
    Get completion context at the given position.

    Args:
        text: The full document text.
        offset: Cursor position (0-based offset, 0 <= offset <= len(text)).

    Returns:
        CompletionContext with the enclosing block chain and typed prefix.

    Raises:
        InvalidPosition: If offset is outside the document.
    """
    if offset < 0 or offset > len(text):
        raise InvalidPosition(offset, len(text))

    return CompletionContext(
        chain=find_enclosing_blocks(text, offset),
        prefix=completion_prefix(text, offset),
    )


def get_completions(
    ctx: CompletionContext, registry: SchemaRegistry
) -> tuple[CompletionItem, ...]:
    """
    Get completion items for a resolved context.

    Only the innermost block matters. An unknown identity or an anonymous
    map/object literal yields no completions rather than the parent's.
    """
    innermost = ctx.innermost
    if innermost is None:
        return registry.top_level_items()
    if innermost.identity is None:
        return ()
    return registry.lookup(innermost.identity)


def resolve_completions(
    text: str, offset: int, registry: SchemaRegistry
) -> tuple[CompletionItem, ...]:
    """
    Resolve the completions valid at a cursor position.

    Args:
        text: The full document text.
        offset: Cursor position (0-based offset).
        registry: Schema registry to query.

    Returns:
        Completion items in registry order.

    Raises:
        InvalidPosition: If offset is outside the document.
    """
    return get_completions(get_completion_context(text, offset), registry)


def completion_prefix(text: str, offset: int) -> str:
    """Return the identifier path typed immediately before offset on its line."""
    line_start = text.rfind("\n", 0, offset) + 1
    match = _PREFIX_RE.search(text, line_start, offset)
    return match.group(0) if match else ""
