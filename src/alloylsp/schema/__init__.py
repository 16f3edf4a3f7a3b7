"""Completion schema for the Alloy configuration language."""

from alloylsp.schema.defaults import build_default_registry
from alloylsp.schema.registry import SchemaRegistry
from alloylsp.schema.template import InsertTemplate, choice, snippet, tab
from alloylsp.schema.types import CompletionItem, CompletionKind, make_item

__all__ = [
    "CompletionItem",
    "CompletionKind",
    "InsertTemplate",
    "SchemaRegistry",
    "build_default_registry",
    "choice",
    "make_item",
    "snippet",
    "tab",
]
