"""Feed and item records with their normalisation steps."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from urllib.parse import urljoin, urlsplit

from .dates import ZERO_TIME
from .htmlutil import extract_text


def _rfc3339(moment: datetime) -> str:
    offset = moment.utcoffset()
    seconds = int(offset.total_seconds()) if offset is not None else 0
    if seconds == 0:
        zone = "Z"
    else:
        sign = "+" if seconds > 0 else "-"
        seconds = abs(seconds)
        zone = f"{sign}{seconds // 3600:02d}:{seconds % 3600 // 60:02d}"
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}{zone}"
    )


@dataclass
class Item:
    guid: str = ""
    date: datetime = ZERO_TIME
    last_updated: Optional[datetime] = None
    url: str = ""
    title: str = ""
    content: str = ""
    image_url: str = ""
    audio_url: str = ""


@dataclass
class Feed:
    title: str = ""
    site_url: str = ""
    items: list = field(default_factory=list)

    def cleanup(self) -> None:
        """Trim fields, strip markup from titles and drop media already in the content."""
        self.title = self.title.strip()
        self.site_url = self.site_url.strip()
        for item in self.items:
            original_content = item.content
            item.guid = item.guid.strip()
            item.url = item.url.strip()
            item.title = extract_text(item.title).strip()
            item.content = item.content.strip()
            if item.image_url and item.image_url in original_content:
                item.image_url = ""
            if item.audio_url and item.audio_url in original_content:
                item.audio_url = ""

    def set_missing_dates_to(self, newdate: datetime) -> None:
        for item in self.items:
            if item.date == ZERO_TIME:
                item.date = newdate

    def translate_urls(self, base: str) -> None:
        """Resolve the site URL against ``base``; raises ValueError on unparsable URLs."""
        try:
            urlsplit(base)
        except ValueError as exc:
            raise ValueError(f"failed to parse base url: {base!r}") from exc
        try:
            urlsplit(self.site_url)
        except ValueError as exc:
            raise ValueError(f"failed to parse feed url: {self.site_url!r}") from exc
        self.site_url = urljoin(base, self.site_url)
        for item in self.items:
            try:
                urlsplit(item.url)
            except ValueError as exc:
                raise ValueError(f"failed to parse item url: {item.url!r}") from exc

    def set_missing_guids(self) -> None:
        """Give items without a GUID one derived from title, date and URL."""
        for item in self.items:
            if not item.guid:
                ident = ";;".join([item.title, _rfc3339(item.date), item.url])
                item.guid = hashlib.sha256(ident.encode("utf-8")).hexdigest()