"""Line-oriented markdown to block classifier.

This is intentionally shallow: each line is classified on its own prefix, so
emphasis, links, nested lists and fenced code bodies are not interpreted.
Fence delimiter lines are emitted as individual ``CodeLine`` blocks and the
lines between two delimiters fall through the ordinary rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

CODE_FENCE = "```"

_HEADING_PREFIXES: tuple[tuple[str, int], ...] = (
    ("# ", 1),
    ("## ", 2),
    ("### ", 3),
)
_LIST_PREFIXES: tuple[str, ...] = ("- ", "* ")


@dataclass(frozen=True, slots=True)
class Heading:
    level: Literal[1, 2, 3]
    text: str
    kind: str = "heading"

    @property
    def plain_text(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Paragraph:
    text: str
    kind: str = "paragraph"

    @property
    def plain_text(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class ListItem:
    text: str
    kind: str = "list_item"

    @property
    def plain_text(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class CodeLine:
    raw_text: str
    kind: str = "code_line"

    @property
    def plain_text(self) -> str:
        return self.raw_text


RenderBlock = Union[Heading, Paragraph, ListItem, CodeLine]


def _classify(line: str) -> RenderBlock | None:
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, text=line[len(prefix):])  # type: ignore[arg-type]
    if line.startswith(CODE_FENCE):
        return CodeLine(raw_text=line)
    for prefix in _LIST_PREFIXES:
        if line.startswith(prefix):
            return ListItem(text=line[len(prefix):])
    return None


def parse(markdown_text: str) -> list[RenderBlock]:
    """Split *markdown_text* into an ordered list of render blocks.

    Consecutive plain lines are joined with a single space into one
    ``Paragraph``; blank lines only end the current paragraph.
    """

    blocks: list[RenderBlock] = []
    pending: list[str] = []

    def flush() -> None:
        if pending:
            blocks.append(Paragraph(text=" ".join(pending)))
            pending.clear()

    for line in markdown_text.split("\n"):
        if not line.strip():
            flush()
            continue
        block = _classify(line)
        if block is None:
            pending.append(line)
            continue
        flush()
        blocks.append(block)

    flush()
    return blocks


def plain_text(blocks: list[RenderBlock]) -> list[str]:
    return [block.plain_text for block in blocks]


__all__ = [
    "CODE_FENCE",
    "CodeLine",
    "Heading",
    "ListItem",
    "Paragraph",
    "RenderBlock",
    "parse",
    "plain_text",
]
