"""Alloy LSP Server using pygls 2.0.

Provides context-aware completion for Alloy configuration files.
"""

from __future__ import annotations

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from alloylsp.logging import get_logger
from alloylsp.lsp.adapter import position_to_offset, to_lsp_completion_item
from alloylsp.lsp.completions import (
    InvalidPosition,
    get_completion_context,
    get_completions,
)
from alloylsp.lsp.error_handling import wrap_handler
from alloylsp.lsp.types import CompletionContext
from alloylsp.schema.registry import SchemaRegistry

SERVER_NAME = "alloy-lsp"
SERVER_VERSION = "v0.1.0"
TRIGGER_CHARACTERS = [".", "{", "=", " ", "\n"]


def build_completion_list(
    document: TextDocument,
    position: types.Position,
    registry: SchemaRegistry,
    logger: logging.Logger,
) -> types.CompletionList:
    """
    Compute the completion list for a position in a document.

    Args:
        document: Snapshot of the document being edited.
        position: LSP position of the cursor.
        registry: Schema registry to query.
        logger: Logger for request diagnostics.

    Returns:
        CompletionList in registry order.
    """
    offset = position_to_offset(document, position)

    ctx = get_completion_context(document.source, offset)
    logger.debug(
        "Completion context: chain=%s, prefix=%r", ctx.identities, ctx.prefix
    )

    items = get_completions(ctx, registry)
    if not items:
        logger.debug("No completions for %s", _describe_context(ctx))

    lsp_items = [
        to_lsp_completion_item(item, index=i, position=position, prefix=ctx.prefix)
        for i, item in enumerate(items)
    ]

    logger.debug("Returning %d completion items", len(lsp_items))
    return types.CompletionList(is_incomplete=False, items=lsp_items)


def _describe_context(ctx: CompletionContext) -> str:
    innermost = ctx.innermost
    if innermost is None:
        return "top level"
    if innermost.identity is None:
        return "map or object literal"
    return f"block {innermost.identity!r}"


def create_server(
    *,
    registry: SchemaRegistry,
    logger: logging.Logger | None = None,
) -> LanguageServer:
    """
    Create and configure the LSP server.

    Args:
        registry: Schema registry shared read-only by all requests.
        logger: Optional logger instance. If None, uses default alloylsp.lsp logger.

    Returns:
        Configured LanguageServer instance with completion support.
    """
    if logger is None:
        logger = get_logger("lsp")

    server = LanguageServer(SERVER_NAME, SERVER_VERSION)

    def _empty_completion_list() -> types.CompletionList:
        return types.CompletionList(is_incomplete=False, items=[])

    @server.feature(
        types.TEXT_DOCUMENT_COMPLETION,
        types.CompletionOptions(
            trigger_characters=TRIGGER_CHARACTERS,
            resolve_provider=False,
        ),
    )
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/completion",
        default_factory=_empty_completion_list,
        expected=(InvalidPosition,),
    )
    def completion(params: types.CompletionParams) -> types.CompletionList:
        """Handle textDocument/completion requests."""
        logger.debug(
            "Completion request for %s at %s",
            params.text_document.uri,
            params.position,
        )

        document = server.workspace.get_text_document(params.text_document.uri)
        return build_completion_list(document, params.position, registry, logger)

    return server
