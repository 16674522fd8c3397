import pytest

from narr import htmlutil


def test_query():
    doc = htmlutil.parse_html("""
        <!DOCTYPE html>
        <html lang="en">
        <head><meta charset="UTF-8"><title></title></head>
        <body><div><p>test</p></div></body>
        </html>
    """)
    nodes = htmlutil.query(doc, "p")
    assert len(nodes) == 1
    assert nodes[0].tagName == "p"


def test_query_multi():
    doc = htmlutil.parse_html("""
        <!DOCTYPE html>
        <html lang="en">
        <head><meta charset="UTF-8"><title></title></head>
        <body>
            <p>foo</p>
            <div>
                <p>bar</p>
                <span>baz</span>
            </div>
        </body>
        </html>
    """)
    nodes = htmlutil.query(doc, "p , span")
    assert [n.tagName for n in nodes] == ["p", "p", "span"]
    assert [htmlutil.text(n) for n in nodes] == ["foo", "bar", "baz"]


def test_closest():
    doc = htmlutil.parse_html("""
        <!DOCTYPE html>
        <html lang="en">
        <body>
            <div class="foo">
                <p><a class="bar" href=""></a></p>
            </div>
        </body>
        </html>
    """)
    links = htmlutil.query(doc, "a")
    assert htmlutil.attr(links[0], "class") == "bar"
    wrap = htmlutil.closest(links[0], "div")
    assert htmlutil.attr(wrap, "CLASS") == "foo"


def test_closest_none():
    doc = htmlutil.parse_html("<p><a href='x'>y</a></p>")
    assert htmlutil.closest(htmlutil.query(doc, "a")[0], "table") is None


def test_unsupported_selector():
    with pytest.raises(ValueError):
        htmlutil.new_matcher("#, .")


@pytest.mark.parametrize(
    "want, base",
    [
        ("hello", "<div>hello</div>"),
        ("hello world", "<div>hello</div> world"),
        ("helloworld", "<div>hello</div>world"),
        ("hello world", "hello <div>world</div>"),
        ("helloworld", "hello<div>world</div>"),
        ("hello world!", "hello <div>world</div>!"),
        ("hello world !", "hello <div>   world\r\n </div>!"),
    ],
)
def test_extract_text(want, base):
    assert htmlutil.extract_text(base) == want


def test_truncate_text():
    value = "Lorem ipsum — классический текст-«рыба»"
    assert htmlutil.truncate_text(value, 30) == "Lorem ipsum — классический ..."
    assert htmlutil.truncate_text(value, 1000) == value


def test_inner_html_round_trip():
    doc = htmlutil.parse_html("<div><p>a &amp; b</p><br></div>")
    div = htmlutil.query(doc, "div")[0]
    assert htmlutil.inner_html(div) == "<p>a &amp; b</p><br/>"
    assert htmlutil.html(div) == "<div><p>a &amp; b</p><br/></div>"


def test_urls():
    assert htmlutil.absolute_url("/a", "http://example.com/x/y") == "http://example.com/a"
    assert htmlutil.url_domain("https://example.com:8080/p") == "example.com:8080"
    assert htmlutil.is_a_possible_link("https://example.com")
    assert not htmlutil.is_a_possible_link("urn:uuid:1")
    assert htmlutil.any_match(["ab", "cd"], "c", lambda x, e: x.startswith(e))