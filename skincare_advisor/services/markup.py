from __future__ import annotations
from typing import Annotated, List, Literal, Optional, Tuple, Union
import html, re

from pydantic import BaseModel, Field

# ---- Node tree ----

class TextNode(BaseModel):
    type: Literal["text"] = "text"
    text: str

class BoldNode(BaseModel):
    type: Literal["bold"] = "bold"
    children: List[InlineNode]

class ItalicNode(BaseModel):
    type: Literal["italic"] = "italic"
    children: List[InlineNode]

class LineBreakNode(BaseModel):
    type: Literal["break"] = "break"

class ListItemNode(BaseModel):
    type: Literal["list_item"] = "list_item"
    ordered: bool
    children: List[InlineNode]

class ListNode(BaseModel):
    type: Literal["list"] = "list"
    ordered: bool
    items: List[ListItemNode]

InlineNode = Annotated[Union[TextNode, BoldNode, ItalicNode], Field(discriminator="type")]
Node = Annotated[
    Union[TextNode, BoldNode, ItalicNode, LineBreakNode, ListNode], Field(discriminator="type")
]

BoldNode.model_rebuild()
ItalicNode.model_rebuild()
ListItemNode.model_rebuild()
ListNode.model_rebuild()

# ---- Patterns ----

_BOLD = re.compile(r"\*\*(.*?)\*\*")
# a lone asterisk pair; never fires on the edge of a ** marker
_ITALIC = re.compile(r"(?<!\*)\*([^*]+)\*(?!\*)")
_ORDERED_PREFIX = re.compile(r"^\d+\.\s")
_BULLET_PREFIX = re.compile(r"^[-*]\s")


def _italics(segment: str) -> List[InlineNode]:
    out: List[InlineNode] = []
    pos = 0
    for m in _ITALIC.finditer(segment):
        if m.start() > pos:
            out.append(TextNode(text=segment[pos:m.start()]))
        out.append(ItalicNode(children=[TextNode(text=m.group(1))]))
        pos = m.end()
    if pos < len(segment):
        out.append(TextNode(text=segment[pos:]))
    return out


def _inline(line: str) -> List[InlineNode]:
    """Bold first, then italics on whatever text the bold pass left over."""
    out: List[InlineNode] = []
    pos = 0
    for m in _BOLD.finditer(line):
        out.extend(_italics(line[pos:m.start()]))
        out.append(BoldNode(children=_italics(m.group(1))))
        pos = m.end()
    out.extend(_italics(line[pos:]))
    return out


def _list_item(nodes: List[InlineNode]) -> Optional[ListItemNode]:
    if not nodes or not isinstance(nodes[0], TextNode):
        return None
    lead = nodes[0].text
    for pattern, ordered in ((_ORDERED_PREFIX, True), (_BULLET_PREFIX, False)):
        m = pattern.match(lead)
        if not m:
            continue
        rest = lead[m.end():]
        children = ([TextNode(text=rest)] if rest else []) + nodes[1:]
        if not children:
            # a bare "1. " or "- " carries no item text
            return None
        return ListItemNode(ordered=ordered, children=children)
    return None


def _is_blank(entry: Union[ListItemNode, List[InlineNode]]) -> bool:
    return isinstance(entry, list) and all(
        isinstance(n, TextNode) and not n.text.strip() for n in entry
    )


def render(text: Optional[str]) -> List[Node]:
    """Convert assistant markup into a list of typed nodes.

    Supported: **bold**, *italic*, "1. " and "- "/"* " list lines, newlines.
    Consecutive list lines (blank lines between them included) become one
    list container; newlines between non-list lines become LineBreakNodes.
    """
    if not text:
        return []

    entries: List[Union[ListItemNode, List[InlineNode]]] = []
    for line in text.split("\n"):
        nodes = _inline(line)
        item = _list_item(nodes)
        entries.append(item if item is not None else nodes)

    # group list items into runs, absorbing blank lines that sit between two items
    blocks: List[Tuple[str, object]] = []
    i = 0
    while i < len(entries):
        entry = entries[i]
        if isinstance(entry, ListItemNode):
            items = [entry]
            j = i + 1
            while j < len(entries):
                if isinstance(entries[j], ListItemNode):
                    items.append(entries[j])
                    j += 1
                    continue
                k = j
                while k < len(entries) and _is_blank(entries[k]):
                    k += 1
                if k < len(entries) and k > j and isinstance(entries[k], ListItemNode):
                    j = k
                    continue
                break
            blocks.append(("list", ListNode(ordered=items[0].ordered, items=items)))
            i = j
        else:
            blocks.append(("line", entry))
            i += 1

    out: List[Node] = []
    previous = None
    for kind, block in blocks:
        if kind == "list":
            out.append(block)
        else:
            if previous == "line":
                out.append(LineBreakNode())
            out.extend(block)
        previous = kind
    return out


def render_html(nodes: List[Node]) -> str:
    """Serialize nodes to HTML. All text is escaped."""
    parts: List[str] = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(html.escape(node.text))
        elif isinstance(node, BoldNode):
            parts.append(f"<strong>{render_html(node.children)}</strong>")
        elif isinstance(node, ItalicNode):
            parts.append(f"<em>{render_html(node.children)}</em>")
        elif isinstance(node, LineBreakNode):
            parts.append("<br>")
        elif isinstance(node, ListNode):
            tag = "ol" if node.ordered else "ul"
            items = "".join(f"<li>{render_html(it.children)}</li>" for it in node.items)
            parts.append(f"<{tag}>{items}</{tag}>")
    return "".join(parts)
