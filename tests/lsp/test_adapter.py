"""Tests for LSP adapter module."""

from __future__ import annotations

import pytest
from lsprotocol import types
from pygls.workspace import TextDocument

from alloylsp.lsp.adapter import (
    completion_kind_to_lsp,
    position_to_offset,
    to_lsp_completion_item,
)
from alloylsp.schema.template import choice, snippet, tab
from alloylsp.schema.types import CompletionItem, CompletionKind, make_item


def _document(source: str) -> TextDocument:
    return TextDocument(
        uri="file:///config.alloy",
        source=source,
        language_id="alloy",
        version=1,
    )


class TestPositionToOffset:
    """Tests for position_to_offset function."""

    @pytest.fixture
    def multi_line_doc(self) -> TextDocument:
        """Three-line document."""
        return _document('loki.write "w" {\n  endpoint {\n}\n')

    def test_start(self, multi_line_doc: TextDocument) -> None:
        """Position(0,0) -> offset 0."""
        assert position_to_offset(multi_line_doc, types.Position(line=0, character=0)) == 0

    def test_end_of_first_line(self, multi_line_doc: TextDocument) -> None:
        """Position(0,16) -> offset 16, just before the newline."""
        assert position_to_offset(multi_line_doc, types.Position(line=0, character=16)) == 16

    def test_second_line(self, multi_line_doc: TextDocument) -> None:
        """Position(1,2) -> offset 19."""
        assert position_to_offset(multi_line_doc, types.Position(line=1, character=2)) == 19

    def test_character_clamped_to_line(self, multi_line_doc: TextDocument) -> None:
        """Characters past the line end stop before the newline."""
        assert position_to_offset(multi_line_doc, types.Position(line=0, character=100)) == 16

    def test_line_past_document(self, multi_line_doc: TextDocument) -> None:
        """Lines past the end clamp to the document length."""
        offset = position_to_offset(multi_line_doc, types.Position(line=99, character=0))
        assert offset == len(multi_line_doc.source)

    def test_empty_document(self) -> None:
        """Position(0,0) on "" -> offset 0."""
        assert position_to_offset(_document(""), types.Position(line=0, character=0)) == 0

    def test_crlf_line_endings(self) -> None:
        """CRLF endings are not counted as line content."""
        doc = _document("a {\r\n  b\r\n")
        assert position_to_offset(doc, types.Position(line=0, character=10)) == 3
        assert position_to_offset(doc, types.Position(line=1, character=1)) == 6

    def test_utf16_columns_before_cursor(self) -> None:
        """An astral character counts as two columns but one offset."""
        doc = _document('a\nendpoint { x = "\U0001F600" } tls_config {}')
        # UTF-16 column 34 is right after "tls_config {"
        offset = position_to_offset(doc, types.Position(line=1, character=34))
        assert doc.source[offset - 1] == "{"
        assert offset == 2 + 33

    def test_utf16_clamped_to_line(self) -> None:
        """Clamping still stops before the newline on lines with astral characters."""
        doc = _document('x = "\U0001F600"\nnext')
        assert position_to_offset(doc, types.Position(line=0, character=50)) == 7


class TestCompletionKindToLsp:
    """Tests for completion_kind_to_lsp function."""

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            (CompletionKind.COMPONENT, types.CompletionItemKind.Module),
            (CompletionKind.PROPERTY, types.CompletionItemKind.Property),
            (CompletionKind.BLOCK, types.CompletionItemKind.Struct),
        ],
    )
    def test_mapping(
        self, kind: CompletionKind, expected: types.CompletionItemKind
    ) -> None:
        """Every kind has a distinct LSP counterpart."""
        assert completion_kind_to_lsp(kind) == expected

    def test_every_kind_mapped(self) -> None:
        """No CompletionKind is left without a mapping."""
        for kind in CompletionKind:
            completion_kind_to_lsp(kind)


class TestToLspCompletionItem:
    """Tests for to_lsp_completion_item function."""

    @pytest.fixture
    def item(self) -> CompletionItem:
        return make_item(
            "honor_labels",
            CompletionKind.PROPERTY,
            snippet("honor_labels = ", choice(1, "true", "false")),
            "Keep labels from scraped data.",
            "bool - optional",
        )

    def test_converts_all_fields(self, item: CompletionItem) -> None:
        """Label, kind, detail and documentation are carried over."""
        lsp_item = to_lsp_completion_item(item)
        assert lsp_item.label == "honor_labels"
        assert lsp_item.kind == types.CompletionItemKind.Property
        assert lsp_item.detail == "bool - optional"
        assert isinstance(lsp_item.documentation, types.MarkupContent)
        assert lsp_item.documentation.value == "Keep labels from scraped data."

    def test_snippet_insert_text(self, item: CompletionItem) -> None:
        """Insert text is the rendered snippet."""
        lsp_item = to_lsp_completion_item(item)
        assert lsp_item.insert_text == "honor_labels = ${1|true,false|}"
        assert lsp_item.insert_text_format == types.InsertTextFormat.Snippet

    def test_sort_text_keeps_registry_order(self, item: CompletionItem) -> None:
        """sort_text encodes the index so clients keep registry order."""
        assert to_lsp_completion_item(item, index=2).sort_text == "0002"
        assert to_lsp_completion_item(item, index=12).sort_text == "0012"

    def test_no_text_edit_without_prefix(self, item: CompletionItem) -> None:
        """No prefix means the client decides the replace range."""
        position = types.Position(line=3, character=2)
        lsp_item = to_lsp_completion_item(item, position=position, prefix="")
        assert lsp_item.text_edit is None

    def test_text_edit_replaces_dotted_prefix(self) -> None:
        """Typed dotted prefix is replaced by the snippet."""
        item = make_item(
            "loki.write",
            CompletionKind.COMPONENT,
            snippet('loki.write "', tab(1, "w"), '" {\n}'),
            "",
            "",
        )
        position = types.Position(line=4, character=5)
        lsp_item = to_lsp_completion_item(item, position=position, prefix="loki.")

        assert isinstance(lsp_item.text_edit, types.TextEdit)
        assert lsp_item.text_edit.range == types.Range(
            start=types.Position(line=4, character=0),
            end=types.Position(line=4, character=5),
        )
        assert lsp_item.text_edit.new_text == 'loki.write "${1:w}" {\n}'
