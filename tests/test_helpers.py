import pytest

from vvbot.utils.helpers import DEFAULT_IMAGE_CAPTION, image_caption, truncate_string


@pytest.mark.parametrize(
    "url, caption",
    [
        ("https://x/y/img.png", "img.png"),
        ("https://cdn.example.com/a/b/c.jpg?size=large#frag", "c.jpg"),
        ("https://x/dir/", "dir"),
        ("https://x", DEFAULT_IMAGE_CAPTION),
        ("http://[::1", DEFAULT_IMAGE_CAPTION),
    ],
)
def test_image_caption(url, caption):
    assert image_caption(url) == caption


def test_truncate_string():
    assert truncate_string("short", 10) == "short"
    assert truncate_string("a" * 20, 10) == "aaaaaaa..."
