"""Type definitions for completion context resolution."""

from __future__ import annotations

from typing import NamedTuple


class EnclosingBlock(NamedTuple):
    """An opening brace still unmatched at the cursor."""

    identity: str | None  # Block identity, None for map/object literals
    label: str | None  # Quoted component label, if any
    offset: int  # Offset of the opening brace in the document


class CompletionContext(NamedTuple):
    """Context for completion at a specific position."""

    chain: tuple[EnclosingBlock, ...]  # Outermost first
    prefix: str  # Identifier path typed before the cursor on its line

    @property
    def innermost(self) -> EnclosingBlock | None:
        """The block closest to the cursor, or None at top level."""
        return self.chain[-1] if self.chain else None

    @property
    def identities(self) -> tuple[str | None, ...]:
        return tuple(block.identity for block in self.chain)
