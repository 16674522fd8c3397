import string
from datetime import datetime, timezone

import pytest

from narr.dates import ZERO_TIME
from narr.models import Feed, Item


def test_cleanup_trims_and_strips_titles():
    feed = Feed(title="  T  ", site_url=" http://example.com/ ",
                items=[Item(guid=" g ", url=" u ", title=" very <b>strong</b> title ", content=" c ")])
    feed.cleanup()
    assert feed.title == "T"
    assert feed.site_url == "http://example.com/"
    item = feed.items[0]
    assert (item.guid, item.url, item.title, item.content) == ("g", "u", "very strong title", "c")


def test_cleanup_drops_duplicated_media():
    image = "http://example.com/i.png"
    audio = "http://example.com/a.mp3"
    feed = Feed(items=[
        Item(content=f'<img src="{image}">', image_url=image),
        Item(content="text", image_url=image, audio_url=audio),
        Item(content=f'<audio src="{audio}"></audio>', audio_url=audio),
    ])
    feed.cleanup()
    assert feed.items[0].image_url == ""
    assert feed.items[1].image_url == image
    assert feed.items[1].audio_url == audio
    assert feed.items[2].audio_url == ""


def test_set_missing_dates():
    now = datetime(2024, 1, 2, tzinfo=timezone.utc)
    kept = datetime(2020, 5, 5, tzinfo=timezone.utc)
    feed = Feed(items=[Item(), Item(date=kept)])
    feed.set_missing_dates_to(now)
    assert [i.date for i in feed.items] == [now, kept]


def test_set_missing_guids_unique_and_stable():
    feed = Feed(items=[Item(title="foo"), Item(title="bar"), Item(guid="keep")])
    feed.set_missing_guids()
    first, second, third = (i.guid for i in feed.items)
    assert first != second
    assert third == "keep"
    assert len(first) == 64 and set(first) <= set(string.hexdigits)
    again = Feed(items=[Item(title="foo", date=ZERO_TIME)])
    again.set_missing_guids()
    assert again.items[0].guid == first


def test_translate_urls_resolves_site():
    feed = Feed(site_url="/blog/", items=[Item(url="post")])
    feed.translate_urls("http://example.com/feed.xml")
    assert feed.site_url == "http://example.com/blog/"
    assert feed.items[0].url == "post"


def test_translate_urls_bad_base():
    with pytest.raises(ValueError):
        Feed().translate_urls("http://[::1")