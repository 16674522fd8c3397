"""Helpers for well-known hosting sites: video embeds and redirect links."""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlsplit

_YOUTUBE_FRAME = (
    '<iframe src="https://www.youtube.com/embed/{}" width="560" height="315" '
    'frameborder="0" allowfullscreen></iframe>'
)
_VIMEO_FRAME = (
    '<iframe src="https://player.vimeo.com/video/{}" width="640" height="360" '
    'frameborder="0" allowfullscreen></iframe>'
)
_VIMEO_RE = re.compile(r"/(\d+)$")


def video_iframe(link: str) -> str:
    """Return an embed iframe for a YouTube or Vimeo link, or an empty string."""
    try:
        parts = urlsplit(link)
    except ValueError:
        return ""
    host = parts.netloc
    youtube_id = ""
    if host == "www.youtube.com" and parts.path == "/watch":
        youtube_id = parse_qs(parts.query).get("v", [""])[0]
    elif host == "youtu.be":
        youtube_id = parts.path.lstrip("/")
    if youtube_id:
        return _YOUTUBE_FRAME.format(youtube_id)
    if host == "vimeo.com":
        found = _VIMEO_RE.search(parts.path)
        if found:
            return _VIMEO_FRAME.format(found.group(1))
    return ""


def redirect_url(link: str) -> str:
    """Unwrap a Google redirect link to its target."""
    if link.startswith("https://www.google.com/url?"):
        try:
            target = parse_qs(urlsplit(link).query).get("url", [""])[0]
        except ValueError:
            target = ""
        if target:
            return target
    return link