"""Enclosing block detection for Alloy configuration files.

Walks the text before the cursor backward, pairing braces, to find every
block that is still open at the cursor. Braces inside string literals and
comments are ignored. Indentation plays no part in the result.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import NamedTuple

from alloylsp.lsp.types import EnclosingBlock

# Text between the previous brace (or line start) and an opening brace:
#   prometheus.scrape "default"
#   tls_config
_HEADER_RE = re.compile(
    r'\s*(?P<identity>[A-Za-z_][A-Za-z0-9_.]*)(?:\s*"(?P<label>(?:[^"\\]|\\.)*)")?\s*'
)


class _Carry(Enum):
    """Lexical state still open at the end of a line."""

    NONE = "none"
    BLOCK_COMMENT = "block_comment"
    RAW_STRING = "raw_string"


class _ScannedLine(NamedTuple):
    code: str  # Line with comments blanked out, same length as the line
    braces: list[tuple[int, str]]  # (column, brace) outside strings and comments
    carry: _Carry  # State the next line starts in


def find_enclosing_blocks(text: str, offset: int) -> tuple[EnclosingBlock, ...]:
    """
    Find the blocks enclosing the given position.

    Args:
        text: The full document text.
        offset: Cursor position (0-based offset). Text at or after this
            offset is ignored.

    Returns:
        Enclosing blocks ordered from outermost to innermost. Empty at top
        level. Unmatched closing braces never raise; they absorb openers
        that precede them, so the worst case is an empty chain.
    """
    lines = text[:offset].split("\n")

    # Forward pass: comments and raw strings may span lines
    scanned: list[_ScannedLine] = []
    line_starts: list[int] = []
    carry = _Carry.NONE
    position = 0
    for line in lines:
        line_starts.append(position)
        position += len(line) + 1
        result = _scan_line(line, carry)
        scanned.append(result)
        carry = result.carry

    chain: list[EnclosingBlock] = []
    # Closing braces seen so far that have not yet met their opener
    pending = 0

    for line_no in range(len(lines) - 1, -1, -1):
        code, braces, _ = scanned[line_no]

        # Right to left within the line
        for i in range(len(braces) - 1, -1, -1):
            column, char = braces[i]
            if char == "}":
                pending += 1
                continue
            if pending > 0:
                pending -= 1
                continue

            # Unmatched opener: a block enclosing the cursor
            segment_start = braces[i - 1][0] + 1 if i > 0 else 0
            header = _HEADER_RE.fullmatch(code, segment_start, column)
            if header is None and i == 0 and not code[:column].strip():
                # Brace on its own line, header on the line above
                header = _HEADER_RE.fullmatch(_previous_code_line(scanned, line_no))

            brace_offset = line_starts[line_no] + column
            if header is None:
                chain.append(EnclosingBlock(None, None, brace_offset))
            else:
                chain.append(
                    EnclosingBlock(
                        header.group("identity"), header.group("label"), brace_offset
                    )
                )

    chain.reverse()
    return tuple(chain)


def _scan_line(line: str, carry: _Carry = _Carry.NONE) -> _ScannedLine:
    """
    Split a line into code text and brace positions.

    Comments are replaced by spaces so columns in the code text match the
    line. Strings are kept but their braces are not reported. A block
    comment or raw string left open is reported through ``carry``.
    """
    braces: list[tuple[int, str]] = []
    code: list[str] = []
    i = 0
    n = len(line)

    if carry is _Carry.BLOCK_COMMENT:
        end = line.find("*/")
        if end == -1:
            return _ScannedLine(" " * n, [], _Carry.BLOCK_COMMENT)
        i = end + 2
        code.append(" " * i)
    elif carry is _Carry.RAW_STRING:
        end = line.find("`")
        if end == -1:
            return _ScannedLine(line, [], _Carry.RAW_STRING)
        i = end + 1
        code.append(line[:i])

    while i < n:
        char = line[i]

        if char == '"':
            # Double quoted string - backslash escapes
            start = i
            i += 1
            while i < n and line[i] != '"':
                i += 2 if line[i] == "\\" else 1
            i = min(i + 1, n)
            code.append(line[start:i])
        elif char == "`":
            # Raw string - no escapes, may span lines
            end = line.find("`", i + 1)
            if end == -1:
                code.append(line[i:])
                return _ScannedLine("".join(code), braces, _Carry.RAW_STRING)
            code.append(line[i : end + 1])
            i = end + 1
        elif line.startswith("//", i):
            code.append(" " * (n - i))
            break
        elif line.startswith("/*", i):
            end = line.find("*/", i + 2)
            if end == -1:
                code.append(" " * (n - i))
                return _ScannedLine("".join(code), braces, _Carry.BLOCK_COMMENT)
            code.append(" " * (end + 2 - i))
            i = end + 2
        else:
            if char in "{}":
                braces.append((i, char))
            code.append(char)
            i += 1

    return _ScannedLine("".join(code), braces, _Carry.NONE)


def _previous_code_line(scanned: list[_ScannedLine], line_no: int) -> str:
    """Return the nearest non-blank code text above line_no, or ''."""
    for i in range(line_no - 1, -1, -1):
        code, braces, _ = scanned[i]
        if braces:
            return ""
        if code.strip():
            return code
    return ""
