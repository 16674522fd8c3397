"""Lenient date parsing over a long list of layouts seen in real feeds.

Layouts are written with ``%`` directives:

    %Y four-digit year        %y two-digit year
    %B full month name        %b abbreviated month name
    %m month, two digits      %-m month, one or two digits
    %d day, two digits        %-d day, one or two digits
    %e day, space padded
    %A full weekday name      %a abbreviated weekday name
    %H hour 0-23              %I / %-I hour 1-12
    %M / %-M minute           %S / %-S second
    %p AM/PM                  %P am/pm
    %z +hhmm  %:z +hh:mm  %::z +hh:mm:ss  %~z +hh  %Ez Z or +hh:mm
    %Z zone abbreviation      %Nf fraction of a second with N digits
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

DATE_FORMATS = (
    "%d %b %y %H:%M %Z",
    "%d %b %y %H:%M %z",
    "%Y-%m-%dT%H:%M:%S%Ez",
    "%a %b %e %H:%M:%S %Z %Y",
    "%a %b %d %H:%M:%S %z %Y",
    "%A, %d-%b-%y %H:%M:%S %Z",
    "%a, %d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S %Z",
    "%a %b %e %H:%M:%S %Y",
    "%a, %d %b %Y %H:%M:%S %Z %:z",
    "%a, %B %-d, %Y, %-I:%M %p %Z",
    "%a, %B %-d %Y %H:%M:%S %z",
    "%a, %B %d, %Y, %H:%M:%S %Z",
    "%a, %B %d, %Y %H:%M:%S %Z",
    "%a, %b %-d, %Y %H:%M %Z",
    "%a, %b %-d %Y %H:%M %Z",
    "%a, %b %-d %Y %H:%M:%S %Z",
    "%a, %b %-d, %Y %H:%M:%S %Z",
    "%a, %b %-d %Y %H:%M:%S -700",
    "%a, %b %-d %Y %H:%M:%S %z",
    "%a %b %-d %H:%M %Y",
    "%a %b %-d %H:%M:%S %Y %Z",
    "%a %b %d, %Y %-I:%M %P",
    "%a, %b %d,%Y %H:%M:%S %Z",
    "%a %b %d %Y %H:%M:%S %z",
    "%a, %d/%m/%Y",
    "%A, %-d. %B %Y - %H:%M",
    "%A %d %B %Y",
    "%A, %B %-d, %Y %H:%M:%S %Z",
    "%A, %B %-d, %Y %I:%M %p",
    "%A, %B %-d, %Y",
    "%A, %B %d, %Y",
    "%A, %-d %B %Y %H:%M:%S %Z",
    "%A, %-d %B %Y %H:%M:%S %z",
    "%A, %-d %b %Y %H:%M:%S %Z",
    "%A, %-d %b %Y %H:%M:%S %z",
    "%A, %d %B %Y %H:%M:%S %Z",
    "%A, %d %B %Y %H:%M:%S %z",
    "%A, %d %B %Y %H:%M:%S",
    "%A, %B %d, %Y - %-I:%M%P",
    "%A, %B %-d, %Y - %-I:%M%P",
    "%a, %m/%d/%Y - %H:%M",
    "%a, %-d %B %Y %H:%M %Z",
    "%a, %-d %B %Y, %H:%M %z",
    "%a, %-d %B %Y, %H:%M:%S %Z",
    "%a, %-d %B %Y %H:%M:%S %Z",
    "%a, %-d %B %Y %H:%M:%S %z",
    "%a, %-d %B %Y",
    "nil%a, %-d %b %Y %-I:%M:%S %p %z",
    "%a, %-d %b %Y %H:%-M:%-S %Z",
    "%a, %-d %b %Y %H:%-M:%-S %z GMT",
    "%a, %-d, %b %Y %H:%-M",
    "%a, %-d %b %Y %H:%M %Z",
    "%a, %-d %b %Y, %H:%M %z",
    "%a, %-d %b %Y %H:%M %z",
    "%a, %-d %b %Y %H:%M:%S UT",
    "%a, %-d %b %Y %H:%M:%S%Z",
    "%a, %-d %b %Y %H:%M:%S %Z",
    "%a %-d %b %Y %H:%M:%S %Z",
    "mon,%-d %b %Y %H:%M:%S %Z",
    "%a, %-d %b %Y %H:%M:%S %z %Z",
    "%a, %-d %b %Y %H:%M:%S%z",
    "%a, %-d %b %Y %H:%M:%S %z",
    "%a, %-d %b %Y %H:%M:%S",
    "%a, %-d %b %Y %H:%M",
    "%a, %d %b %Y, %H:%M",
    "%a, %-d %b %Y, %H:%M",
    "%a,%-d %b %Y",
    "%a, %-d %b %Y",
    "%a, %-d %b %H:%M:%S %Z",
    "%a, %-d %b %y %H:%M:%S %Z",
    "%a, %-d %b %y %H:%M:%S %z",
    "%a, %Y-%m-%d %H:%M",
    "%a,%d %B %Y %-m%-M:%M:%S %Z",
    "%a, %d %B %Y",
    "%a, %d %b %Y %-I:%M:%S %p %Z",
    "%a, %d %b %Y %H %z",
    "%a,%d %b %Y %H:%M %Z",
    "%a, %d %b %Y %H:%M %Z",
    "%a, %d %b %Y %H:%M %z",
    "%a, %d %b %Y %H:%M:%S Z",
    "%a, %d %b %Y %H:%M:%S UT",
    "%a, %d %b %Y %H:%M:%S %Z%:z",
    "%a, %d %b %Y %H:%M:%S %Z %z",
    "%a, %d %b %Y, %H:%M:%S %Z",
    "%a, %d %b %Y %H:%M:%S%Z",
    "%a, %d %b %Y %H:%M:%S %Z",
    "%a , %d %b %Y %H:%M:%S %Z",
    "%a, %d %b %Y %H:%M:%S GMT%z",
    "%a,%d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S %:z",
    "%a, %d %b %Y %H:%M:%S -%z",
    "%a %d %b %Y %H:%M:%S %z",
    "%a %d %b %Y, %H:%M:%S %Z",
    "%a, %d %b %Y %H:%M:%S %Z",
    "%a, %d %b %Y %H:%M:%S %~z",
    "%a, %d %b %Y %H:%M:%S 00",
    "%a, %d %b %Y %H:%M:%S",
    "%a, %d %b %Y",
    "%a, %d %b %y %H:%M:%S %Z",
    "%a, %d %b %Y %-I:%M %p %Z",
    "%a %b %d %Y %H:%M:%S %Z",
    "%a, %m %d %Y %H:%M:%S %z",
    "%a, %-dth %b %Y %H:%S:%S %Z",
    "%b. %-d, %Y, %-I:%M a.m.",
    "fri, %d jan %Y %H:%M:%S %z",
    "%B %d %Y %I:%M:%S %p",
    "%B %-d, %Y %-I:%M %p",
    "%B %-d, %Y, %-I:%M p.m.",
    "%B %-d, %Y %H:%M:%S %Z",
    "%B %-d, %Y %H:%M:%S",
    "%B %-d, %Y %I:%M %p",
    "%B %-d, %Y",
    "%B %d, %Y %H:%M:%S %Z",
    "%B %d, %Y %H:%M",
    "%B %d, %Y %I:%M %p",
    "%B %d, %Y",
    "%b %-d, %Y %-I:%M:%S %p %Z",
    "%b %-d, %Y %-I:%M:%S %p",
    "%b %-d, %Y %H:%M:%S %Z",
    "%b %-d, %Y",
    "%b %d %Y %I:%M:%S%p",
    "%b %d, %Y",
    "6/%-m/%-d %H:%M",
    "6-%-m-%-d %H:%M",
    "%-d %B %Y %H:%M:%S %Z",
    "%-d %B %Y %H:%M:%S %z",
    "%-d %B %Y",
    "%-d %b %Y %H:%M:%S Z",
    "%-d %b %Y %H:%M:%S %Z",
    "%-d %b %Y %H:%M:%S %z",
    "%-d %b %Y",
    "%-d %b %Y %H:%M %Z",
    "%-d.%-m.%Y %H:%M:%S",
    "%-d/%-m/%Y",
    "%-d-%-m-%Y",
    "%Y %B %d",
    "%Y-%-m-%-dT%H:%M:%SZ",
    "%Y-%-m-%-d %H:%M:%S",
    "%Y-%-m-%-d",
    "%Y-%m-%dT%H:%M:%S%:zZ",
    "%Y-%-m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%MZ",
    "%Y-%m-%dT%H:%M%:z",
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S%::z",
    "%Y-%m-%dT%H:%M:%S:%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S%:z",
    "%Y-%m-%dT%H:%M:%S %z",
    "%Y-%m-%dT%H:%M:%S:00",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d at %H:%M:%S",
    "%Y-%m-%d %H:%M:%SZ",
    "%Y-%m-%d %H:%M:%S %Z",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S%:z",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d 00:00:00%1f %H:%M:%S%1f %z",
    "%Y/%m/%d",
    "%Y-%m-%d",
    "%H:%M %d.%m.%Y %z",
    "%-m/%-d/%Y %-I:%M %p %Z",
    "%-m/%-d/%Y %-I:%M:%S %p %Z",
    "%-m/%-d/%Y %-I:%M:%S %p",
    "%-m/%-d/%Y %H:%M:%S %Z",
    "%-m/%-d/%Y",
    "%y/%-m/%-d %H:%M",
    "%y-%-m-%-d %H:%M",
    "%d %A, %b %Y %H:%M",
    "%d %b %Y %H:%M %Z",
    "%d %b %Y %H:%M:%S UT",
    "%d %b %Y %H:%M:%S %Z",
    "%d %b %Y %H:%M:%S %z",
    "%d %b %Y %H:%M:%S",
    "%d %b %Y",
    "%d/%m/%Y %H:%M %Z",
    "%d-%m-%Y %H:%M:%S %Z",
    "%d.%m.%Y %H:%M:%S",
    "%d/%m/%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
    "%d/%m/%Y - %H:%M",
    "%d.%m.%Y %z",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%m/%d/%Y %-I:%M %p",
    "%m/%d/%Y %H:%M:%S %Z",
    "%m/%d/%Y - %H:%M",
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%b. %Y",
    "%b. %-d, %Y, %I:%M p.m.",
    "%Y-%m-%d %H:%M:%S %:z",
    "%-d %B, %Y",
)

_LONG_MONTHS = [calendar.month_name[i].lower() for i in range(1, 13)]
_SHORT_MONTHS = [calendar.month_abbr[i].lower() for i in range(1, 13)]
_LONG_DAYS = [calendar.day_name[i].lower() for i in range(7)]
_SHORT_DAYS = [calendar.day_abbr[i].lower() for i in range(7)]

_DIRECTIVES = {
    "B": "month_long",
    "b": "month_short",
    "A": "wday_long",
    "a": "wday_short",
    "Z": "zone",
    "m": "zmonth",
    "-m": "month_num",
    "d": "zday",
    "-d": "day",
    "e": "uday",
    "I": "zhour12",
    "-I": "hour12",
    "H": "hour",
    "M": "zminute",
    "-M": "minute",
    "S": "zsecond",
    "-S": "second",
    "y": "year2",
    "Y": "year4",
    "p": "PM",
    "P": "pm",
    "z": "tz_hhmm",
    ":z": "tz_hh:mm",
    "::z": "tz_hh:mm:ss",
    "~z": "tz_hh",
    "Ez": "Ztz_hh:mm",
}

_DIRECTIVE_RE = re.compile(r"%(::z|:z|~z|Ez|-[dmIMS]|(\d+)f|[BbAaZmdeIHMSyYpPz])")


class _BadValue(Exception):
    pass


@dataclass(frozen=True)
class _Chunk:
    kind: str
    literal: str = ""
    digits: int = 0


@lru_cache(maxsize=None)
def _tokenize(layout: str) -> tuple:
    chunks: list = []
    pos = 0
    for match in _DIRECTIVE_RE.finditer(layout):
        if match.start() > pos:
            chunks.append(_Chunk("literal", layout[pos:match.start()]))
        if match.group(2) is not None:
            chunks.append(_Chunk("frac_fixed", digits=int(match.group(2))))
        else:
            chunks.append(_Chunk(_DIRECTIVES[match.group(1)]))
        pos = match.end()
    if pos < len(layout):
        chunks.append(_Chunk("literal", layout[pos:]))
    return tuple(chunks)


class _Scanner:
    def __init__(self, value: str) -> None:
        self.value = value
        self.pos = 0

    def rest(self) -> str:
        return self.value[self.pos:]

    def skip_literal(self, prefix: str) -> None:
        v = self.value
        k = 0
        while k < len(prefix):
            if prefix[k] == " ":
                if self.pos < len(v) and v[self.pos] != " ":
                    raise _BadValue
                while k < len(prefix) and prefix[k] == " ":
                    k += 1
                while self.pos < len(v) and v[self.pos] == " ":
                    self.pos += 1
                continue
            if self.pos >= len(v) or v[self.pos] != prefix[k]:
                raise _BadValue
            self.pos += 1
            k += 1

    def digits(self, count: int) -> int:
        chunk = self.value[self.pos:self.pos + count]
        if len(chunk) != count or not chunk.isdigit() or not chunk.isascii():
            raise _BadValue
        self.pos += count
        return int(chunk)

    def number(self, fixed: bool) -> int:
        v = self.value
        if self.pos >= len(v) or not _is_digit(v[self.pos]):
            raise _BadValue
        if self.pos + 1 >= len(v) or not _is_digit(v[self.pos + 1]):
            if fixed:
                raise _BadValue
            self.pos += 1
            return int(v[self.pos - 1])
        self.pos += 2
        return int(v[self.pos - 2:self.pos])

    def lookup(self, names: list) -> int:
        lowered = self.rest().lower()
        for index, name in enumerate(names):
            if lowered.startswith(name):
                self.pos += len(name)
                return index
        raise _BadValue

    def sign(self) -> int:
        if self.pos >= len(self.value) or self.value[self.pos] not in "+-":
            raise _BadValue
        self.pos += 1
        return 1 if self.value[self.pos - 1] == "+" else -1


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _zone_length(value: str) -> int:
    if len(value) < 3:
        return 0
    if value[:4] in ("ChST", "MeST"):
        return 4
    if value.startswith("GMT"):
        rest = value[3:]
        if len(rest) >= 2 and rest[0] in "+-" and _is_digit(rest[1]):
            k = 1
            while k < len(rest) and _is_digit(rest[k]):
                k += 1
            hours = int(rest[1:k])
            if hours <= 23:
                return 3 + k
        return 3
    upper = 0
    while upper < len(value) and "A" <= value[upper] <= "Z":
        upper += 1
    if upper == 3:
        return 3
    if upper == 4 and (value[3] == "T" or value[:4] == "WITA"):
        return 4
    if upper == 5 and value[4] == "T":
        return 5
    return 0


def _parse_offset(scan: _Scanner, kind: str) -> int:
    if kind.startswith("Z"):
        if scan.rest().startswith("Z"):
            scan.pos += 1
            return 0
        kind = kind[1:]
    sign = scan.sign()
    hours = scan.digits(2)
    minutes = seconds = 0
    if kind == "tz_hhmm":
        minutes = scan.digits(2)
    elif kind == "tz_hh:mm":
        scan.skip_literal(":")
        minutes = scan.digits(2)
    elif kind == "tz_hh:mm:ss":
        scan.skip_literal(":")
        minutes = scan.digits(2)
        scan.skip_literal(":")
        seconds = scan.digits(2)
    return sign * (hours * 3600 + minutes * 60 + seconds)


def _parse_with(layout: str, value: str) -> datetime:
    chunks = _tokenize(layout)
    scan = _Scanner(value)
    year = None
    month = day = 1
    hour = minute = second = micro = 0
    meridiem = None
    offset = None
    zone_offset = None

    for index, chunk in enumerate(chunks):
        kind = chunk.kind
        if kind == "literal":
            scan.skip_literal(chunk.literal)
        elif kind == "year4":
            year = scan.digits(4)
        elif kind == "year2":
            y = scan.digits(2)
            year = y + (1900 if y >= 69 else 2000)
        elif kind == "month_long":
            month = scan.lookup(_LONG_MONTHS) + 1
        elif kind == "month_short":
            month = scan.lookup(_SHORT_MONTHS) + 1
        elif kind in ("month_num", "zmonth"):
            month = scan.number(kind == "zmonth")
            if not 1 <= month <= 12:
                raise _BadValue
        elif kind == "wday_long":
            scan.lookup(_LONG_DAYS)
        elif kind == "wday_short":
            scan.lookup(_SHORT_DAYS)
        elif kind in ("day", "zday", "uday"):
            if kind == "uday" and scan.rest().startswith(" "):
                scan.pos += 1
            day = scan.number(kind == "zday")
        elif kind == "hour":
            hour = scan.number(False)
            if hour > 23:
                raise _BadValue
        elif kind in ("hour12", "zhour12"):
            hour = scan.number(kind == "zhour12")
            if hour > 12:
                raise _BadValue
        elif kind in ("minute", "zminute"):
            minute = scan.number(kind == "zminute")
            if minute > 59:
                raise _BadValue
        elif kind in ("second", "zsecond"):
            second = scan.number(kind == "zsecond")
            if second > 59:
                raise _BadValue
            rest = scan.rest()
            following = chunks[index + 1].kind if index + 1 < len(chunks) else ""
            if (
                len(rest) > 1 and rest[0] in ".," and _is_digit(rest[1])
                and not following.startswith("frac")
            ):
                k = 1
                while k < len(rest) and _is_digit(rest[k]):
                    k += 1
                micro = int(rest[1:k][:6].ljust(6, "0"))
                scan.pos += k
        elif kind in ("PM", "pm"):
            pair = scan.rest()[:2]
            am, pm = ("AM", "PM") if kind == "PM" else ("am", "pm")
            if pair not in (am, pm):
                raise _BadValue
            meridiem = pair.lower()
            scan.pos += 2
        elif kind.startswith("tz") or kind.startswith("Ztz"):
            offset = _parse_offset(scan, kind)
        elif kind == "zone":
            rest = scan.rest()
            if rest.startswith("UTC"):
                scan.pos += 3
                zone_offset = 0
                continue
            length = _zone_length(rest)
            if not length:
                raise _BadValue
            name = rest[:length]
            scan.pos += length
            zone_offset = int(name[3:]) * 3600 if len(name) > 3 and name.startswith("GMT") else 0
        elif kind == "frac_fixed":
            rest = scan.rest()
            if len(rest) < chunk.digits + 1 or rest[0] not in ".,":
                raise _BadValue
            scan.pos += 1
            frac = scan.digits(chunk.digits)
            micro = int(str(frac).rjust(chunk.digits, "0")[:6].ljust(6, "0"))

    if scan.pos != len(value) or year is None:
        raise _BadValue
    if meridiem == "pm" and hour < 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0

    if offset is not None:
        tz = timezone.utc if offset == 0 else timezone(timedelta(seconds=offset))
    elif zone_offset:
        tz = timezone(timedelta(seconds=zone_offset))
    else:
        tz = timezone.utc
    try:
        return datetime(year, month, day, hour, minute, second, micro, tzinfo=tz)
    except ValueError as exc:
        raise _BadValue from exc


def parse_date(line: str) -> datetime:
    """Parse a date with the first matching layout; ``ZERO_TIME`` when nothing matches."""
    if not line:
        return ZERO_TIME
    for layout in DATE_FORMATS:
        try:
            return _parse_with(layout, line)
        except _BadValue:
            continue
    return ZERO_TIME