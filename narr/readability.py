"""Extraction of the main readable content of an HTML page."""

from __future__ import annotations

import re
from xml.dom import Node

from .htmlutil import attr, closest, inner_html, parse_html, query, text

DEFAULT_TAGS_TO_SCORE = "section,h2,h3,h4,h5,h6,p,td,pre,div"

_DIV_TO_P_ELEMENTS_RE = re.compile(r"<(a|blockquote|dl|div|img|ol|p|pre|table|ul)", re.I)
_SENTENCE_RE = re.compile(r"\.( |$)")
_BLACKLIST_CANDIDATES_RE = re.compile(r"popupbody|-ad|g-plus", re.I)
_OK_MAYBE_CANDIDATE_RE = re.compile(r"and|article|body|column|main|shadow", re.I)
_UNLIKELY_CANDIDATES_RE = re.compile(
    r"banner|breadcrumbs|combx|comment|community|cover-wrap|disqus|extra|foot|header|"
    r"legends|menu|modal|related|remark|replies|rss|shoutbox|sidebar|skyscraper|social|"
    r"sponsor|supplemental|ad-break|agegate|pagination|pager|popup|yom-remote",
    re.I,
)
_NEGATIVE_RE = re.compile(
    r"hidden|^hid$|hid$|hid|^hid |banner|combx|comment|com-|contact|foot|footer|footnote|"
    r"masthead|media|meta|modal|outbrain|promo|related|scroll|share|shoutbox|sidebar|"
    r"skyscraper|sponsor|shopping|tags|tool|widget|byline|author|dateline|writtenby|p-author",
    re.I,
)
_POSITIVE_RE = re.compile(
    r"article|body|content|entry|hentry|h-entry|main|page|pagination|post|text|blog|story",
    re.I,
)


class ExtractionError(ValueError):
    """No content could be extracted from the page."""


def _byte_len(value: str) -> int:
    return len(value.encode("utf-8"))


def _data(node) -> str:
    if node.nodeType == Node.ELEMENT_NODE:
        return node.tagName
    return getattr(node, "data", "") or ""


def _remove(node) -> None:
    parent = node.parentNode
    if parent is not None:
        parent.removeChild(node)


def extract_content(page) -> str:
    """Return the most relevant part of an HTML page wrapped in a ``<div>``.

    ``page`` may be a string, bytes or a readable object.
    """
    if hasattr(page, "read"):
        page = page.read()
    root = parse_html(page)

    for trash in query(root, "script,style"):
        _remove(trash)

    _transform_misused_divs_into_paragraphs(root)
    _remove_unlikely_candidates(root)

    scores = _get_candidates(root)
    best = _get_top_candidate(scores)
    if best is None:
        bodies = query(root, "body")
        if not bodies:
            raise ExtractionError("failed to extract content")
        best = bodies[0]
    return _get_article(best, scores)


def _siblings(node, attribute: str):
    current = getattr(node, attribute)
    while current is not None:
        yield current
        current = getattr(current, attribute)


def _get_article(best, scores: dict) -> str:
    threshold = max(10.0, scores.get(best, 0.0) * 0.2)
    nodes = [best, *_siblings(best, "nextSibling"), *_siblings(best, "previousSibling")]

    parts = ["<div>"]
    for node in nodes:
        is_p = _data(node) == "p"
        keep = node is best or scores.get(node, 0.0) >= threshold
        if not keep and is_p:
            density = _get_link_density(node)
            content = text(node)
            length = _byte_len(content)
            if length >= 80 and density < 0.25:
                keep = True
            elif length < 80 and density == 0 and _SENTENCE_RE.search(content):
                keep = True
        if keep:
            tag = "p" if is_p else "div"
            parts.append(f"<{tag}>{inner_html(node)}</{tag}>")
    parts.append("</div>")
    return "".join(parts)


def _remove_unlikely_candidates(root) -> None:
    bodies = query(root, "body")
    if not bodies:
        return
    for node in query(bodies[0], "*"):
        marker = attr(node, "class") + attr(node, "id")
        if closest(node, "table,code") is not None:
            continue
        blacklisted = bool(_BLACKLIST_CANDIDATES_RE.search(marker)) or (
            bool(_UNLIKELY_CANDIDATES_RE.search(marker))
            and not _OK_MAYBE_CANDIDATE_RE.search(marker)
        )
        if blacklisted:
            _remove(node)


def _get_top_candidate(scores: dict):
    top = None
    best_score = 0.0
    for node, score in scores.items():
        if score > best_score:
            top = node
            best_score = score
    return top


def _get_candidates(root) -> dict:
    scores: dict = {}
    for node in query(root, DEFAULT_TAGS_TO_SCORE):
        content = text(node)
        length = _byte_len(content)
        if length < 25:
            continue

        parent = node.parentNode
        grandparent = parent.parentNode
        if parent not in scores:
            scores[parent] = _score_node(parent)
        if grandparent is not None and grandparent not in scores:
            scores[grandparent] = _score_node(grandparent)

        content_score = 1.0
        content_score += content.count(",") + 1
        content_score += min(length // 100, 3)

        scores[parent] += content_score
        if grandparent is not None:
            scores[grandparent] += content_score / 2.0

    for node in scores:
        scores[node] *= 1 - _get_link_density(node)
    return scores


def _score_node(node) -> float:
    name = _data(node)
    score = 0.0
    if name == "div":
        score += 5
    elif name in ("pre", "td", "blockquote", "img"):
        score += 3
    elif name in ("address", "ol", "ul", "dl", "dd", "dt", "li", "form"):
        score -= 3
    elif name in ("h1", "h2", "h3", "h4", "h5", "h6", "th"):
        score -= 5
    return score + _get_class_weight(node)


def _get_link_density(node) -> float:
    length = _byte_len(text(node))
    if length == 0:
        return 0.0
    link_length = sum(_byte_len(text(a)) for a in query(node, "a"))
    return link_length / length


def _get_class_weight(node) -> float:
    weight = 0
    for value in (attr(node, "class"), attr(node, "id")):
        if not value:
            continue
        if _NEGATIVE_RE.search(value):
            weight -= 25
        if _POSITIVE_RE.search(value):
            weight += 25
    return float(weight)


def _transform_misused_divs_into_paragraphs(root) -> None:
    for node in query(root, "div"):
        if not _DIV_TO_P_ELEMENTS_RE.search(inner_html(node)):
            node.tagName = "p"
            node.nodeName = "p"