"""Completion context resolution for the Alloy language server."""

from alloylsp.lsp.block_context import find_enclosing_blocks
from alloylsp.lsp.completions import (
    InvalidPosition,
    get_completion_context,
    get_completions,
    resolve_completions,
)
from alloylsp.lsp.types import CompletionContext, EnclosingBlock

__all__ = [
    "CompletionContext",
    "EnclosingBlock",
    "InvalidPosition",
    "find_enclosing_blocks",
    "get_completion_context",
    "get_completions",
    "resolve_completions",
]
