"""Structured insertion templates for completion items.

A template is an ordered sequence of nodes: literal text, free-form tab stops
with a default value, and enumerated choices. Rendering to the LSP snippet
grammar happens only at the protocol boundary.
"""

from __future__ import annotations

import dataclasses
from typing import NamedTuple, Union


class TabStop(NamedTuple):
    """Free-form placeholder with a default value."""

    index: int
    default: str


class Choice(NamedTuple):
    """Placeholder restricted to a fixed set of literal alternatives."""

    index: int
    options: tuple[str, ...]


Placeholder = Union[TabStop, Choice]
TemplateNode = Union[str, TabStop, Choice]


@dataclasses.dataclass(frozen=True)
class InsertTemplate:
    """Immutable insertion template.

    Placeholder numbers must form the contiguous range 1..n. A number may be
    used more than once, in which case the editor mirrors the value.
    """

    nodes: tuple[TemplateNode, ...]

    def __post_init__(self) -> None:
        numbers: set[int] = set()
        for node in self.nodes:
            if isinstance(node, str):
                continue
            if isinstance(node, Choice) and not node.options:
                raise ValueError(f"Choice placeholder ${node.index} has no options")
            numbers.add(node.index)

        if numbers and numbers != set(range(1, max(numbers) + 1)):
            raise ValueError(
                f"Placeholder numbers must be contiguous from 1, got {sorted(numbers)}"
            )

    @property
    def placeholders(self) -> list[Placeholder]:
        """Placeholders in navigation order (ascending number, then position)."""
        found = [node for node in self.nodes if not isinstance(node, str)]
        return sorted(found, key=lambda node: node.index)

    def render_snippet(self) -> str:
        """Render the template using the LSP snippet grammar."""
        parts: list[str] = []
        for node in self.nodes:
            if isinstance(node, str):
                parts.append(_escape_text(node))
            elif isinstance(node, TabStop):
                parts.append(f"${{{node.index}:{_escape_default(node.default)}}}")
            else:
                options = ",".join(_escape_choice(option) for option in node.options)
                parts.append(f"${{{node.index}|{options}|}}")
        return "".join(parts)

    def render_plain(self) -> str:
        """Render the template with every placeholder replaced by its default."""
        parts: list[str] = []
        for node in self.nodes:
            if isinstance(node, str):
                parts.append(node)
            elif isinstance(node, TabStop):
                parts.append(node.default)
            else:
                parts.append(node.options[0])
        return "".join(parts)


def _escape_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("$", "\\$")


def _escape_default(text: str) -> str:
    return _escape_text(text).replace("}", "\\}")


def _escape_choice(option: str) -> str:
    return option.replace("\\", "\\\\").replace(",", "\\,").replace("|", "\\|")


def tab(index: int, default: str = "") -> TabStop:
    """Create a tab stop."""
    return TabStop(index=index, default=default)


def choice(index: int, *options: str) -> Choice:
    """Create an enumerated choice placeholder."""
    return Choice(index=index, options=tuple(options))


def snippet(*parts: TemplateNode) -> InsertTemplate:
    """
    Build a template from literal strings and placeholder nodes.

    Adjacent literal strings are merged so that equal templates compare equal
    regardless of how they were split in source.

    Args:
        *parts: Literal text, TabStop and Choice nodes in insertion order.

    Returns:
        Validated InsertTemplate.

    Raises:
        ValueError: If placeholder numbers are not contiguous from 1.
    """
    nodes: list[TemplateNode] = []
    for part in parts:
        if isinstance(part, str):
            if not part:
                continue
            if nodes and isinstance(nodes[-1], str):
                nodes[-1] = nodes[-1] + part
                continue
        nodes.append(part)
    return InsertTemplate(nodes=tuple(nodes))
