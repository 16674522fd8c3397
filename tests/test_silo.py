import pytest

from narr.silo import redirect_url, video_iframe

YOUTUBE_EMBED = (
    '<iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ" width="560" '
    'height="315" frameborder="0" allowfullscreen></iframe>'
)
VIMEO_EMBED = (
    '<iframe src="https://player.vimeo.com/video/526381128" width="640" '
    'height="360" frameborder="0" allowfullscreen></iframe>'
)


@pytest.mark.parametrize(
    "link",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
    ],
)
def test_youtube_iframe(link):
    assert video_iframe(link) == YOUTUBE_EMBED


@pytest.mark.parametrize(
    "link",
    [
        "https://vimeo.com/channels/staffpicks/526381128",
        "https://vimeo.com/526381128",
    ],
)
def test_vimeo_iframe(link):
    assert video_iframe(link) == VIMEO_EMBED


def test_no_iframe():
    assert video_iframe("https://example.com/watch?v=x") == ""


def test_redirect_url_unwraps_google_link():
    target = "https://news.example.com/latest/2022/08/some-long-article-title/"
    link = "https://www.google.com/url?rct=j&sa=t&url=" + target + "&ct=ga&cd=placeholder&usg=placeholder"
    assert redirect_url(link) == target


@pytest.mark.parametrize(
    "link",
    ["https://example.com", "https://example.com/url?url=test.com"],
)
def test_redirect_url_leaves_other_links(link):
    assert redirect_url(link) == link