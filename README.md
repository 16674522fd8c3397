# narr

Building blocks for a news reader: an HTML sanitizer for feed content, a
readability-style article extractor, feed and icon discovery in web pages,
a lenient date parser, feed and item records with their normalisation
steps, and a few helpers for HTML, XML text, video links and redirects.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command-line tool

Write a Windows version-resource script for a given version:

```
narr-versioninfo -version 1.2.3 -outfile versioninfo.rc
```

`--version` and `--outfile` are accepted as well. The defaults are
`0.0.0` and `versioninfo.rc`. The same is available from Python as
`narr.versioninfo.render_versioninfo(version)`, which returns the script
as a string.

## Library use

### Sanitizing HTML

```python
from narr.sanitizer import sanitize

safe = sanitize("https://example.com/", '<p onclick="x()">Hi <script>bad()</script></p>')
# '<p>Hi </p>'
```

Only allowed tags and attributes are kept (see `narr.whitelist`:
`is_valid_tag`, `is_valid_attribute`, `has_valid_uri_scheme`). URLs are
made absolute against the base URL, and links with a scheme outside the
allowed list or pointing at known trackers are dropped. Links get
`rel="noopener noreferrer"`, `target="_blank"` and
`referrerpolicy="no-referrer"`. Images get `loading="lazy"`. Audio and
video get `controls`. `script`, `style` and `noscript` are removed with
their content. Iframes are kept only from the same host as the base URL or
from a fixed list of video and audio hosts. Iframes from video hosts are
wrapped in `<div class="video-wrapper">`.

### Extracting articles

```python
from narr.readability import extract_content, ExtractionError

with open("article.html", "rb") as fh:
    html = extract_content(fh)   # '<div>...</div>'
```

`extract_content` takes a string, bytes or a readable object. It scores
paragraphs and their containers, keeps the best candidate together with
related siblings, and raises `ExtractionError` when the page has neither a
candidate nor a `<body>`.

### Finding feeds and icons in a page

```python
from narr.scraper import find_feeds, find_icons

feeds = find_feeds(page_html, "https://example.com")   # {url: title}
icons = find_icons(page_html, "https://example.com")   # [url, ...]
```

`find_feeds` first looks for `<link>` elements of the RSS, Atom or JSON
types. Only when there are none does it guess from `<a>` elements whose
link ends in `feed`, `feed.xml`, `rss.xml` or `atom.xml`, or whose text is
`rss` or `feed`.

### Dates

```python
from narr.dates import parse_date, ZERO_TIME

parse_date("Mon, 02 Jan 2006 15:04:05 -0700")
parse_date("not a date") == ZERO_TIME   # True
```

`parse_date` tries a long list of layouts seen in real feeds
(`narr.dates.DATE_FORMATS`) and returns the first match as an aware
`datetime`. It returns `ZERO_TIME` (year 1, UTC) when nothing matches.

### Feed records

`narr.models.Feed` (`title`, `site_url`, `items`) and `narr.models.Item`
(`guid`, `date`, `last_updated`, `url`, `title`, `content`, `image_url`,
`audio_url`) are dataclasses. `Feed` provides these methods:

- `cleanup()`: trims fields, strips markup from item titles, and clears
  an item's image or audio URL when it already appears in the content.
- `set_missing_dates_to(moment)`: fills in items whose date is `ZERO_TIME`.
- `translate_urls(base)`: resolves the site URL against `base`. It raises
  `ValueError` when the base, site or an item URL cannot be parsed.
- `set_missing_guids()`: gives items without a GUID the SHA-256 of their
  title, date and URL.

### XML and text helpers

`narr.xmlutil.SafeXMLReader` wraps a binary or text reader. Its `read()`
returns UTF-8 bytes with characters that are not allowed in XML removed.
The same module has these functions:

- `strip_invalid_chars` and `is_in_character_range` for strings.
- `first_non_empty(*values)`.
- `plain2html(text)`, which turns links into anchors and newlines into
  `<br>`.
- `proc_inst(param, body)`, which reads a value such as `encoding` from a
  processing instruction.

`narr.htmlutil` parses HTML (`parse_html`) and finds elements by tag name
(`query`, `closest`, `find_nodes`). It also serializes nodes (`html`,
`inner_html`) and reads attributes and text (`attr`, `text`). For plain
strings it has `extract_text` and `truncate_text`, and for URLs it has
`absolute_url`, `url_domain` and `is_a_possible_link`.

### Links

```python
from narr.silo import video_iframe, redirect_url

video_iframe("https://youtu.be/abc123")   # embeddable <iframe> markup
redirect_url("https://www.google.com/url?url=https://example.com/")
# 'https://example.com/'
```

## What this package does not do

The package does not read RSS, Atom, RDF or JSON Feed documents into
`Feed` objects. It provides the records, dates and XML cleaning such a
reader would use, but no parser for the formats themselves. It does not
fetch anything over the network. It offers no command for converting
feeds or extracting articles, and it does not open pages in a browser.
The only command is `narr-versioninfo`.