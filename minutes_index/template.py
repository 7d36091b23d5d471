"""Mutable HTML template documents.

A template is parsed once with BeautifulSoup (lxml parser) and copied into
an arena: a flat list of nodes where parent and child links are integer
handles into the list. Callers locate slots by id, append generated
content, and serialize the result back to indented HTML.

Detached nodes stay in the arena but are no longer reachable from the
root, so they disappear from lookups and from the serialized output.
"""

import html
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

from bs4 import BeautifulSoup, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

logger = logging.getLogger(__name__)

INDENT = "  "

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})

# Content of these is written out exactly as parsed
PREFORMATTED_ELEMENTS = frozenset({"pre", "textarea", "script", "style"})
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# Elements that may stay on their parent's line when serializing
INLINE_ELEMENTS = frozenset({
    "a", "abbr", "b", "bdi", "bdo", "br", "button", "cite", "code", "data",
    "dfn", "em", "i", "img", "input", "kbd", "label", "mark", "q", "s",
    "samp", "small", "span", "strong", "sub", "sup", "time", "u", "var", "wbr",
})

_WHITESPACE = re.compile(r"\s+")


class NodeKind(str, Enum):
    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    DOCTYPE = "doctype"


@dataclass
class Node:
    kind: NodeKind
    name: str = ""
    attrs: dict[str, str] = field(default_factory=dict)
    data: str = ""
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)


class Document:
    """An HTML document whose nodes are addressed by integer handles."""

    ROOT = 0

    def __init__(self, markup: str):
        self._nodes: list[Node] = [Node(NodeKind.DOCUMENT)]
        soup = BeautifulSoup(markup, "lxml", multi_valued_attributes=None)
        self._import_children(self.ROOT, soup)

    @classmethod
    def from_file(cls, path: str | Path) -> "Document":
        """Load and parse a template file."""
        path = Path(path)
        logger.debug(f"Loading template {path}")
        return cls(path.read_text(encoding="utf-8"))

    # ── Building the arena ──────────────────────────────────────────────

    def _append(self, parent: int, node: Node) -> int:
        handle = len(self._nodes)
        node.parent = parent
        self._nodes.append(node)
        self._nodes[parent].children.append(handle)
        return handle

    def _import_children(self, parent: int, source: Tag) -> None:
        for child in source.contents:
            if isinstance(child, Tag):
                attrs = {
                    name: value if isinstance(value, str) else " ".join(value)
                    for name, value in child.attrs.items()
                }
                handle = self._append(parent, Node(NodeKind.ELEMENT, name=child.name, attrs=attrs))
                self._import_children(handle, child)
            elif isinstance(child, Doctype):
                self._append(parent, Node(NodeKind.DOCTYPE, data=str(child)))
            elif isinstance(child, Comment):
                self._append(parent, Node(NodeKind.COMMENT, data=str(child)))
            elif isinstance(child, (Declaration, ProcessingInstruction)):
                logger.debug(f"Dropping {type(child).__name__} from template: {child!r}")
            elif isinstance(child, NavigableString):
                self._append(parent, Node(NodeKind.TEXT, data=str(child)))

    def _import_fragment(self, parent: int, content: str) -> None:
        # html.parser does not wrap fragments in <html><body>
        fragment = BeautifulSoup(content, "html.parser", multi_valued_attributes=None)
        self._import_children(parent, fragment)

    def _node(self, handle: int) -> Node:
        if not 0 <= handle < len(self._nodes):
            raise ValueError(f"Unknown node handle {handle}")
        return self._nodes[handle]

    def _container(self, handle: int) -> Node:
        node = self._node(handle)
        if node.kind not in (NodeKind.ELEMENT, NodeKind.DOCUMENT):
            raise ValueError(f"Node {handle} is a {node.kind.value} node and cannot have children")
        return node

    # ── Queries ─────────────────────────────────────────────────────────

    def iter_elements(self, start: int = ROOT) -> Iterator[int]:
        """Yield the element handles below ``start`` in document order."""
        stack = list(reversed(self._node(start).children))
        while stack:
            handle = stack.pop()
            node = self._nodes[handle]
            if node.kind is NodeKind.ELEMENT:
                yield handle
                stack.extend(reversed(node.children))

    def get_element_by_id(self, element_id: str) -> Optional[int]:
        """Return the first attached element whose id matches, or None."""
        for handle in self.iter_elements():
            if self._nodes[handle].attrs.get("id") == element_id:
                return handle
        return None

    def find_all(self, tag_name: str, start: int = ROOT) -> list[int]:
        return [h for h in self.iter_elements(start) if self._nodes[h].name == tag_name]

    def tag_name(self, handle: int) -> str:
        return self._node(handle).name

    def parent(self, handle: int) -> Optional[int]:
        return self._node(handle).parent

    def children(self, handle: int) -> list[int]:
        return list(self._node(handle).children)

    def get_attribute(self, handle: int, name: str) -> Optional[str]:
        return self._node(handle).attrs.get(name)

    def inner_text(self, handle: int) -> str:
        """Concatenated text of all text nodes below ``handle``."""
        node = self._node(handle)
        if node.kind is NodeKind.TEXT:
            return node.data
        return "".join(self.inner_text(child) for child in node.children)

    # ── Mutation ────────────────────────────────────────────────────────

    def add_child(self, parent: int, tag_name: str, content: Optional[str] = None) -> int:
        """Append a new element as the last child of ``parent``.

        Args:
            parent: Handle of the element (or the document root) to append to.
            tag_name: Name of the new element.
            content: Optional inner markup. It is parsed, not escaped, so
                callers can inject pre-built HTML fragments.

        Returns:
            Handle of the new element.
        """
        self._container(parent)
        handle = self._append(parent, Node(NodeKind.ELEMENT, name=tag_name.lower()))
        if content:
            self._import_fragment(handle, content)
        return handle

    def set_attribute(self, handle: int, name: str, value: str) -> None:
        node = self._node(handle)
        if node.kind is not NodeKind.ELEMENT:
            raise ValueError(f"Node {handle} is not an element")
        node.attrs[name] = value

    def remove_child(self, parent: int, child: int) -> int:
        """Detach ``child`` (and its subtree) from ``parent``.

        Raises:
            ValueError: If ``child`` is not a child of ``parent``.
        """
        parent_node = self._container(parent)
        if child not in parent_node.children:
            raise ValueError(f"Node {child} is not a child of node {parent}")
        parent_node.children.remove(child)
        self._nodes[child].parent = None
        return child

    def set_inner_html(self, handle: int, content: str) -> None:
        """Replace the children of ``handle`` with the parsed ``content``."""
        node = self._container(handle)
        for child in list(node.children):
            self.remove_child(handle, child)
        self._import_fragment(handle, content)

    # ── Serialization ───────────────────────────────────────────────────

    def serialize(self) -> str:
        """Render the attached tree as indented HTML."""
        lines: list[str] = []
        for child in self._nodes[self.ROOT].children:
            self._write_block(child, 0, lines)
        return "\n".join(lines) + "\n"

    def _is_inline(self, handle: int) -> bool:
        for child in self._nodes[handle].children:
            node = self._nodes[child]
            if node.kind is NodeKind.ELEMENT and (node.name not in INLINE_ELEMENTS or not self._is_inline(child)):
                return False
        return True

    def _write_block(self, handle: int, depth: int, lines: list[str]) -> None:
        node = self._nodes[handle]
        indent = INDENT * depth

        if node.kind is NodeKind.TEXT:
            text = _WHITESPACE.sub(" ", node.data).strip()
            if text:
                lines.append(indent + html.escape(text, quote=False))
        elif node.kind is NodeKind.ELEMENT and not (node.name in PREFORMATTED_ELEMENTS or self._is_inline(handle)):
            lines.append(indent + _start_tag(node))
            for child in node.children:
                self._write_block(child, depth + 1, lines)
            lines.append(f"{indent}</{node.name}>")
        else:
            lines.append(indent + self._render_inline(handle))

    def _render_inline(self, handle: int, preformatted: bool = False, raw: bool = False) -> str:
        node = self._nodes[handle]

        if node.kind is NodeKind.TEXT:
            text = node.data if preformatted else _WHITESPACE.sub(" ", node.data)
            return text if raw else html.escape(text, quote=False)
        if node.kind is NodeKind.COMMENT:
            return f"<!--{node.data}-->"
        if node.kind is NodeKind.DOCTYPE:
            return f"<!DOCTYPE {node.data}>"

        start = _start_tag(node)
        if node.name in VOID_ELEMENTS:
            return start
        preformatted = preformatted or node.name in PREFORMATTED_ELEMENTS
        raw = node.name in RAW_TEXT_ELEMENTS
        inner = "".join(self._render_inline(child, preformatted, raw) for child in node.children)
        return f"{start}{inner}</{node.name}>"


def _start_tag(node: Node) -> str:
    attrs = "".join(f' {name}="{html.escape(value, quote=True)}"' for name, value in node.attrs.items())
    return f"<{node.name}{attrs}>"
