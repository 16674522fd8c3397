"""Small helpers for feed parsing: XML character cleaning and text utilities."""

from __future__ import annotations

import codecs
import re

_LINK_RE = re.compile(r"(https?://\S+)")
_CHUNK_SIZE = 4096


def first_non_empty(*args: str) -> str:
    """Return the first argument that is not blank, stripped."""
    for value in args:
        trimmed = value.strip()
        if trimmed:
            return trimmed
    return ""


def plain2html(text: str) -> str:
    """Turn links into anchors and newlines into ``<br>``."""
    text = _LINK_RE.sub(r'<a href="\1">\1</a>', text)
    return text.replace("\n", "<br>")


def is_in_character_range(ch: str) -> bool:
    """Whether a character is allowed in an XML document."""
    r = ord(ch)
    return (
        r in (0x09, 0x0A, 0x0D)
        or 0x20 <= r <= 0xD7FF
        or 0xE000 <= r <= 0xFFFD
        or 0x10000 <= r <= 0x10FFFF
    )


def strip_invalid_chars(text: str) -> str:
    return "".join(ch for ch in text if is_in_character_range(ch))


class SafeXMLReader:
    """A binary reader yielding UTF-8 with characters illegal in XML removed."""

    def __init__(self, source) -> None:
        self._source = source
        self._decoder = codecs.getincrementaldecoder("utf-8")("replace")
        self._buffer = bytearray()
        self._eof = False

    def _fill(self, size: int) -> None:
        while not self._eof and (size < 0 or len(self._buffer) < size):
            chunk = self._source.read(_CHUNK_SIZE)
            if not chunk:
                decoded = self._decoder.decode(b"", final=True)
                self._eof = True
            elif isinstance(chunk, str):
                decoded = chunk
            else:
                decoded = self._decoder.decode(chunk)
            self._buffer += strip_invalid_chars(decoded).encode("utf-8")

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all when negative); ``b""`` at end of input."""
        self._fill(size)
        if size < 0:
            out = bytes(self._buffer)
            self._buffer.clear()
        else:
            out = bytes(self._buffer[:size])
            del self._buffer[:size]
        return out


def proc_inst(param: str, s: str) -> str:
    """Extract ``param="..."`` (or single-quoted) from a processing instruction body."""
    key = param + "="
    idx = s.find(key)
    if idx == -1:
        return ""
    v = s[idx + len(key):]
    if not v or v[0] not in "'\"":
        return ""
    end = v.find(v[0], 1)
    if end == -1:
        return ""
    return v[1:end]