"""Reduce untrusted HTML to a safe subset of tags and attributes."""

from __future__ import annotations

import enum
import math
import re
from html.parser import HTMLParser
from typing import Iterator, NamedTuple

from .htmlutil import absolute_url, url_domain
from .whitelist import has_valid_uri_scheme, is_valid_attribute, is_valid_tag

_SPLIT_SRCSET_RE = re.compile(r",[\t\n\f\r ]+")
_ESCAPE_RE = re.compile("[&'<>\"]")
_ESCAPES = {"&": "&amp;", "'": "&#39;", "<": "&lt;", ">": "&gt;", '"': "&#34;"}
_FLOAT32_MAX = 3.4028234663852886e38

_BLOCKED_TAGS = frozenset({"noscript", "script", "style"})
_EXTERNAL_RESOURCE_ATTRS = frozenset({"src", "href", "poster", "cite"})
_REQUIRED_ATTRS = {
    "a": ("href",),
    "iframe": ("src",),
    "img": ("src",),
    "source": ("src", "srcset"),
}
_EXTRA_ATTRS = {
    "a": (
        ("rel", "target", "referrerpolicy"),
        ('rel="noopener noreferrer"', 'target="_blank"', 'referrerpolicy="no-referrer"'),
    ),
    "video": (("controls",), ("controls",)),
    "audio": (("controls",), ("controls",)),
    "iframe": (
        ("sandbox", "loading"),
        ('sandbox="allow-scripts allow-same-origin allow-popups"', 'loading="lazy"'),
    ),
    "img": (("loading",), ('loading="lazy"', 'referrerpolicy="no-referrer"')),
}
_BLOCKED_RESOURCES = (
    "feedsportal.com",
    "api.flattr.com",
    "stats.wordpress.com",
    "plus.google.com/share",
    "twitter.com/share",
    "feeds.feedburner.com",
)
_IFRAME_DOMAINS = frozenset(
    {
        "bandcamp.com",
        "cdn.embedly.com",
        "invidio.us",
        "player.bilibili.com",
        "player.vimeo.com",
        "soundcloud.com",
        "vk.com",
        "w.soundcloud.com",
        "www.dailymotion.com",
        "www.youtube-nocookie.com",
        "www.youtube.com",
    }
)
_VIDEO_DOMAINS = frozenset(
    {
        "player.bilibili.com",
        "player.vimeo.com",
        "www.dailymotion.com",
        "www.youtube-nocookie.com",
        "www.youtube.com",
    }
)
_DATA_PREFIXES = (
    "data:image/avif",
    "data:image/apng",
    "data:image/png",
    "data:image/svg",
    "data:image/svg+xml",
    "data:image/jpg",
    "data:image/jpeg",
    "data:image/gif",
    "data:image/webp",
)


class _Kind(enum.Enum):
    TEXT = enum.auto()
    START = enum.auto()
    END = enum.auto()
    SELF_CLOSING = enum.auto()


class _Token(NamedTuple):
    kind: _Kind
    data: str
    attrs: tuple = ()


class _Tokenizer(HTMLParser):
    # Elements whose content is raw text, never markup.
    CDATA_CONTENT_ELEMENTS = (
        "script",
        "style",
        "iframe",
        "noembed",
        "noframes",
        "noscript",
        "plaintext",
        "xmp",
    )

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tokens: list = []

    @staticmethod
    def _attrs(attrs) -> tuple:
        return tuple((key, value if value is not None else "") for key, value in attrs)

    def handle_data(self, data: str) -> None:
        self.tokens.append(_Token(_Kind.TEXT, data))

    def handle_starttag(self, tag: str, attrs) -> None:
        self.tokens.append(_Token(_Kind.START, tag, self._attrs(attrs)))

    def handle_startendtag(self, tag: str, attrs) -> None:
        self.tokens.append(_Token(_Kind.SELF_CLOSING, tag, self._attrs(attrs)))

    def handle_endtag(self, tag: str) -> None:
        self.tokens.append(_Token(_Kind.END, tag))


def _tokenize(content: str) -> Iterator[_Token]:
    tokenizer = _Tokenizer()
    tokenizer.feed(content)
    tokenizer.close()
    yield from tokenizer.tokens


def _escape(value: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], value)


def sanitize(base_url: str, content: str) -> str:
    """Return ``content`` with only allowed tags and attributes, URLs made absolute."""
    out: list = []
    opened: set = set()
    parent_tag = ""
    blocked_depth = 0

    for token in _tokenize(content):
        tag = token.data
        if token.kind is _Kind.TEXT:
            # An iframe never has fallback content.
            if blocked_depth > 0 or parent_tag == "iframe":
                continue
            out.append(_escape(token.data))
        elif token.kind is _Kind.START:
            parent_tag = tag
            if is_valid_tag(tag):
                names, attributes = _sanitize_attributes(base_url, tag, token.attrs)
                if not _has_required_attributes(tag, names):
                    continue
                wrap = _is_video_iframe(tag, token.attrs)
                if wrap:
                    out.append('<div class="video-wrapper">')
                out.append(f"<{tag} {attributes}>" if names else f"<{tag}>")
                if tag == "iframe":
                    out.append("</iframe>")
                    if wrap:
                        out.append("</div>")
                else:
                    opened.add(tag)
            elif tag in _BLOCKED_TAGS:
                blocked_depth += 1
        elif token.kind is _Kind.END:
            if tag == "iframe":
                continue
            if is_valid_tag(tag) and tag in opened:
                out.append(f"</{tag}>")
            elif tag in _BLOCKED_TAGS:
                blocked_depth -= 1
        elif token.kind is _Kind.SELF_CLOSING and is_valid_tag(tag):
            names, attributes = _sanitize_attributes(base_url, tag, token.attrs)
            if _has_required_attributes(tag, names):
                out.append(f"<{tag} {attributes}/>" if names else f"<{tag}/>")

    return "".join(out)


def _sanitize_attributes(base_url: str, tag: str, attributes) -> tuple:
    names: list = []
    rendered: list = []
    for key, raw in attributes:
        if not is_valid_attribute(tag, key):
            continue
        value = raw
        if tag in ("img", "source") and key == "srcset":
            value = _sanitize_srcset(base_url, value)

        if key in _EXTERNAL_RESOURCE_ATTRS:
            if tag == "iframe":
                if not _is_valid_iframe_source(base_url, raw):
                    continue
                value = raw
            elif tag == "img" and key == "src" and raw.startswith(_DATA_PREFIXES):
                value = raw
            else:
                value = absolute_url(value, base_url)
                if not value:
                    continue
                if not has_valid_uri_scheme(value) or _is_blocked_resource(value):
                    continue

        names.append(key)
        rendered.append(f'{key}="{_escape(value)}"')

    extra_names, extra_rendered = _EXTRA_ATTRS.get(tag, ((), ()))
    names.extend(extra_names)
    rendered.extend(extra_rendered)
    return names, " ".join(rendered)


def _has_required_attributes(tag: str, names: list) -> bool:
    required = _REQUIRED_ATTRS.get(tag)
    if required is None:
        return True
    return any(name in required for name in names)


def _is_blocked_resource(src: str) -> bool:
    return any(blocked in src for blocked in _BLOCKED_RESOURCES)


def _is_valid_iframe_source(base_url: str, src: str) -> bool:
    domain = url_domain(src)
    return url_domain(base_url) == domain or domain in _IFRAME_DOMAINS


def _is_video_iframe(tag: str, attributes) -> bool:
    if tag != "iframe":
        return False
    for key, value in attributes:
        if key == "src":
            return url_domain(value) in _VIDEO_DOMAINS
    return False


def _sanitize_srcset(base_url: str, value: str) -> str:
    sources = []
    for raw_source in _SPLIT_SRCSET_RE.split(value):
        parts = raw_source.strip().split(" ")
        source = parts[0]
        if not source.startswith("data:"):
            source = absolute_url(source, base_url)
            if not source:
                continue
        if len(parts) == 2 and _is_valid_descriptor(parts[1]):
            source += " " + parts[1]
        sources.append(source)
    return ", ".join(sources)


def _is_valid_descriptor(value: str) -> bool:
    if not value or value[-1] not in "wx":
        return False
    body = value[:-1]
    if not body or body != body.strip() or "_" in body:
        return False
    try:
        number = float(body)
    except ValueError:
        return False
    if math.isinf(number):
        return body.lower().lstrip("+-") in ("inf", "infinity")
    return abs(number) <= _FLOAT32_MAX