"""Type definitions for the Alloy completion schema."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from alloylsp.schema.template import InsertTemplate


class _StrEnum(str, Enum):
    """String-valued enum that behaves like str at runtime."""

    def __str__(self) -> str:
        return str(self.value)


class CompletionKind(_StrEnum):
    """What accepting a completion item inserts."""

    COMPONENT = "component"  # Starts a top-level component declaration
    PROPERTY = "property"  # Sets a scalar, list or map argument
    BLOCK = "block"  # Opens a nested block


class CompletionItem(NamedTuple):
    """A completion suggestion."""

    label: str  # Identifier shown to the user, unique within its set
    kind: CompletionKind
    template: InsertTemplate
    documentation: str  # Human-readable description
    detail: str  # Type and requiredness, e.g. "list(string) - required"


def make_item(
    label: str,
    kind: CompletionKind,
    template: InsertTemplate,
    documentation: str,
    detail: str,
) -> CompletionItem:
    """
    Create a CompletionItem, rejecting empty labels.

    Raises:
        ValueError: If label is empty or whitespace only.
    """
    if not label.strip():
        raise ValueError("Completion item label must not be empty")
    return CompletionItem(
        label=label,
        kind=kind,
        template=template,
        documentation=documentation,
        detail=detail,
    )
