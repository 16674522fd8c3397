from narr.scraper import find_feeds, find_icons

BASE = "http://example.com"


def _page(head: str = "", body: str = "") -> str:
    return (
        "<!DOCTYPE html>\n<html lang='en'>\n"
        f"<head><meta charset='UTF-8'><title></title>{head}</head>\n"
        f"<body>{body}</body>\n</html>\n"
    )


def test_find_feeds_invalid_html():
    assert find_feeds("some nonsense", BASE) == {}


def test_find_feeds_links():
    head = (
        "<link rel='alternate' href='/feed.xml' type='application/rss+xml' title='rss with title'>"
        "<link rel='alternate' href='/atom.xml' type='application/atom+xml'>"
        "<link rel='alternate' href='/feed.json' type='application/json'>"
    )
    body = "<a href='/feed.xml'>rss</a>"
    assert find_feeds(_page(head, body), BASE) == {
        BASE + "/feed.xml": "rss with title",
        BASE + "/atom.xml": "",
        BASE + "/feed.json": "",
    }


def test_find_feeds_guess():
    body = (
        "<!-- negative -->"
        "<a href='/about'>what is rss?</a>"
        "<a href='/feed/cows'>moo</a>"
        "<!-- positive -->"
        "<a href='/feed.xml'>subscribe</a>"
        "<a href='/news'>rss</a>"
    )
    assert find_feeds(_page(body=body), BASE) == {
        BASE + "/feed.xml": "",
        BASE + "/news": "",
    }


def test_find_feeds_guess_is_case_insensitive():
    body = "<a href='/updates'>RSS</a>"
    assert find_feeds(_page(body=body), BASE) == {BASE + "/updates": ""}


def test_find_icons():
    head = (
        "<link rel='icon favicon' href='/favicon.ico'>"
        "<link rel='icon macicon' href='path/to/favicon.png'>"
    )
    assert find_icons(_page(head), BASE) == [
        BASE + "/favicon.ico",
        BASE + "/path/to/favicon.png",
    ]


def test_find_icons_ignores_other_links():
    head = "<link rel='stylesheet' href='/style.css'>"
    assert find_icons(_page(head), BASE) == []