"""HTML helpers: parsing, simple element queries, text extraction and URLs."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Callable, Iterable
from urllib.parse import urljoin, urlsplit
from xml.dom import Node

import html5lib

_NODE_NAME_RE = re.compile(r"\w+|\*")
_WHITESPACE_RE = re.compile(r"[\t\n\f\r ]+")

_VOID_ELEMENTS = frozenset(
    "area base br col embed hr img input keygen link meta param source track wbr".split()
)
_RAW_TEXT_ELEMENTS = frozenset(
    "iframe noembed noframes noscript plaintext script style xmp".split()
)
_ESCAPES = {
    "&": "&amp;",
    "'": "&#39;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&#34;",
    "\r": "&#13;",
}
_ESCAPE_RE = re.compile("[&'<>\"\r]")


def parse_html(content: str):
    """Parse an HTML document into a DOM tree."""
    return html5lib.parse(content, treebuilder="dom", namespaceHTMLElements=False)


def _is_element(node) -> bool:
    return node.nodeType == Node.ELEMENT_NODE


def find_nodes(node, match: Callable[[object], bool]) -> list:
    """Return every node under ``node`` (itself included) accepted by ``match``, breadth first."""
    found = []
    queue = [node]
    while queue:
        current = queue.pop(0)
        if match(current):
            found.append(current)
        queue.extend(current.childNodes)
    return found


class Matcher(ABC):
    """Something that decides whether a node matches."""

    @abstractmethod
    def match(self, node) -> bool:
        """Return True when the node matches."""


@dataclass
class ElementMatch(Matcher):
    """Match elements by tag name, or any element with ``*``."""

    name: str

    def match(self, node) -> bool:
        return _is_element(node) and (node.tagName == self.name or self.name == "*")


@dataclass
class MultiMatch(Matcher):
    """Match when any of the contained matchers does."""

    matchers: list = field(default_factory=list)

    def add(self, matcher: Matcher) -> None:
        self.matchers.append(matcher)

    def match(self, node) -> bool:
        return any(m.match(node) for m in self.matchers)


def new_matcher(sel: str) -> Matcher:
    """Build a matcher from a comma separated list of tag names."""
    multi = MultiMatch()
    for part in sel.split(","):
        part = part.strip()
        if not _NODE_NAME_RE.search(part):
            raise ValueError(f"unsupported selector: {part}")
        multi.add(ElementMatch(part))
    return multi


def query(node, sel: str) -> list:
    return find_nodes(node, new_matcher(sel).match)


def closest(node, sel: str):
    """Return the nearest ancestor-or-self matching ``sel``, or None."""
    matcher = new_matcher(sel)
    current = node
    while current is not None:
        if matcher.match(current):
            return current
        current = current.parentNode
    return None


def _escape(value: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], value)


def _render(node, out: list) -> None:
    kind = node.nodeType
    if kind == Node.TEXT_NODE:
        parent = node.parentNode
        if parent is not None and _is_element(parent) and parent.tagName in _RAW_TEXT_ELEMENTS:
            out.append(node.data)
        else:
            out.append(_escape(node.data))
    elif kind == Node.ELEMENT_NODE:
        tag = node.tagName
        out.append("<" + tag)
        for key, value in node.attributes.items():
            out.append(f' {key}="{_escape(value)}"')
        if tag in _VOID_ELEMENTS:
            out.append("/>")
            return
        out.append(">")
        first = node.firstChild
        if (
            tag in ("pre", "listing", "textarea")
            and first is not None
            and first.nodeType == Node.TEXT_NODE
            and first.data.startswith("\n")
        ):
            out.append("\n")
        for child in node.childNodes:
            _render(child, out)
        out.append(f"</{tag}>")
    elif kind == Node.COMMENT_NODE:
        out.append(f"<!--{node.data}-->")
    elif kind == Node.DOCUMENT_TYPE_NODE:
        out.append(f"<!DOCTYPE {node.name}>")
    elif kind in (Node.DOCUMENT_NODE, Node.DOCUMENT_FRAGMENT_NODE):
        for child in node.childNodes:
            _render(child, out)


def html(node) -> str:
    """Serialize a node, including itself."""
    out: list = []
    _render(node, out)
    return "".join(out)


def inner_html(node) -> str:
    """Serialize the children of a node."""
    out: list = []
    for child in node.childNodes:
        _render(child, out)
    return "".join(out)


def attr(node, key: str) -> str:
    """Return an attribute value (case-insensitive key), or an empty string."""
    attributes = getattr(node, "attributes", None)
    if not attributes:
        return ""
    for name, value in attributes.items():
        if name.lower() == key.lower():
            return value
    return ""


def text(node) -> str:
    """Join the stripped text of every text node under ``node`` with spaces."""
    nodes = find_nodes(node, lambda n: n.nodeType == Node.TEXT_NODE)
    return " ".join(n.data.strip() for n in nodes)


class _TextCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: list = []

    def handle_data(self, data: str) -> None:
        self.parts.append(data)


def extract_text(content: str) -> str:
    """Strip tags from an HTML fragment and collapse whitespace."""
    collector = _TextCollector()
    collector.feed(content)
    collector.close()
    result = "".join(collector.parts).strip()
    return _WHITESPACE_RE.sub(" ", result)


def truncate_text(value: str, size: int) -> str:
    """Cut text at the last whitespace before ``size`` characters and append ' ...'."""
    if len(value) <= size:
        return value
    for i in range(size - 1, 0, -1):
        if value[i].isspace():
            return value[:i] + " ..."
    return value


def any_match(els: Iterable[str], el: str, match: Callable[[str, str], bool]) -> bool:
    return any(match(x, el) for x in els)


def absolute_url(href: str, base: str) -> str:
    """Resolve ``href`` against ``base``; an empty string if either is unparsable."""
    try:
        urlsplit(base)
        urlsplit(href)
        return urljoin(base, href)
    except ValueError:
        return ""


def url_domain(val: str) -> str:
    """Return the host (with port) of a URL, or the value itself if unparsable."""
    try:
        netloc = urlsplit(val).netloc
    except ValueError:
        return val
    return netloc.rsplit("@", 1)[-1]


def is_a_possible_link(val: str) -> bool:
    return val.startswith("http://") or val.startswith("https://")