"""Discovery of feed links and icons in HTML pages."""

from __future__ import annotations

from xml.dom import Node

from .htmlutil import absolute_url, attr, find_nodes, parse_html, text

_LINK_TYPES = ("application/atom+xml", "application/rss+xml", "application/json")
_FEED_HREFS = ("feed", "feed.xml", "rss.xml", "atom.xml")
_FEED_TEXTS = ("rss", "feed")


def _is_element(node, name: str) -> bool:
    return node.nodeType == Node.ELEMENT_NODE and node.tagName == name


def _is_feed_link(node) -> bool:
    return _is_element(node, "link") and attr(node, "type") in _LINK_TYPES


def _is_feed_hyperlink(node) -> bool:
    if not _is_element(node, "a"):
        return False
    href = attr(node, "href").strip("/")
    if any(href.endswith(suffix) for suffix in _FEED_HREFS):
        return True
    label = text(node).casefold()
    return any(label == word for word in _FEED_TEXTS)


def find_feeds(body: str, base: str) -> dict:
    """Map feed URLs found in a page to their titles (empty when unknown)."""
    candidates: dict = {}
    doc = parse_html(body)

    for node in find_nodes(doc, _is_feed_link):
        link = absolute_url(attr(node, "href"), base)
        if link:
            candidates[link] = attr(node, "title")

    if not candidates:
        for node in find_nodes(doc, _is_feed_hyperlink):
            link = absolute_url(attr(node, "href"), base)
            if link:
                candidates[link] = ""

    return candidates


def find_icons(body: str, base: str) -> list:
    """Return absolute URLs of ``<link rel="icon">`` elements, in document order."""
    doc = parse_html(body)
    icons = []
    for node in find_nodes(doc, lambda n: _is_element(n, "link")):
        for rel in attr(node, "rel").split(" "):
            if rel.casefold() == "icon":
                icons.append(absolute_url(attr(node, "href"), base))
    return icons