"""Adapter module for converting between internal types and LSP protocol types."""

from __future__ import annotations

from lsprotocol import types
from pygls.workspace import TextDocument

from alloylsp.schema.types import CompletionItem, CompletionKind

__all__ = [
    "completion_kind_to_lsp",
    "position_to_offset",
    "to_lsp_completion_item",
]

_COMPLETION_KIND_TO_LSP: dict[CompletionKind, types.CompletionItemKind] = {
    CompletionKind.COMPONENT: types.CompletionItemKind.Module,
    CompletionKind.PROPERTY: types.CompletionItemKind.Property,
    CompletionKind.BLOCK: types.CompletionItemKind.Struct,
}


def position_to_offset(document: TextDocument, position: types.Position) -> int:
    """
    Convert LSP Position (line, character) to document offset.

    The character is in the client's position encoding (UTF-16 code units
    unless negotiated otherwise); the document's codec converts it to code
    points. Positions past the end of a line or of the document are clamped.

    Args:
        document: The text document
        position: LSP position with 0-based line and character

    Returns:
        0-based offset in the document
    """
    lines = document.lines
    if position.line >= len(lines):
        return len(document.source)

    line_start = sum(len(line) for line in lines[: position.line])
    line_end = line_start + len(lines[position.line].rstrip("\r\n"))

    offset = document.offset_at_position(position)
    return max(line_start, min(offset, line_end))


def completion_kind_to_lsp(kind: CompletionKind) -> types.CompletionItemKind:
    """Map internal CompletionKind to LSP CompletionItemKind."""
    return _COMPLETION_KIND_TO_LSP[kind]


def to_lsp_completion_item(
    item: CompletionItem,
    *,
    index: int = 0,
    position: types.Position | None = None,
    prefix: str = "",
) -> types.CompletionItem:
    """
    Convert internal CompletionItem to LSP CompletionItem.

    Args:
        item: Internal completion item
        index: Position of the item in its completion set; encoded in
            sort_text so clients keep registry order
        position: LSP position where completion is requested (optional)
        prefix: Typed text before the cursor to be replaced (optional)

    Returns:
        LSP-compatible snippet CompletionItem
    """
    new_text = item.template.render_snippet()

    completion_item = types.CompletionItem(
        label=item.label,
        kind=completion_kind_to_lsp(item.kind),
        detail=item.detail,
        documentation=types.MarkupContent(
            kind=types.MarkupKind.PlainText,
            value=item.documentation,
        ),
        sort_text=f"{index:04d}",
        insert_text=new_text,
        insert_text_format=types.InsertTextFormat.Snippet,
    )

    # Replace the typed prefix so dotted labels are not inserted twice
    if position is not None and prefix:
        start_character = max(0, position.character - len(prefix))
        completion_item.text_edit = types.TextEdit(
            range=types.Range(
                start=types.Position(line=position.line, character=start_character),
                end=types.Position(line=position.line, character=position.character),
            ),
            new_text=new_text,
        )

    return completion_item
