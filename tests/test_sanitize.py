import pytest
from app.utils.sanitize import sanitize_html
from app.schemas.bookmark import BookmarkRead


def test_plain_text_is_unchanged():
    assert sanitize_html("Test description") == "Test description"


def test_script_tag_is_escaped():
    assert sanitize_html('<script>alert("xss");</script>') == '&lt;script&gt;alert("xss");&lt;/script&gt;'


def test_event_handler_attribute_is_stripped():
    cleaned = sanitize_html('<img src="https://example.com/a.png" onerror="alert(1)">')

    assert cleaned == '<img src="https://example.com/a.png">'


def test_javascript_link_is_neutralized():
    cleaned = sanitize_html('<a href="javascript:alert(1)">click</a>')

    assert "javascript:" not in cleaned
    assert "click" in cleaned


def test_comments_are_removed():
    assert sanitize_html("before<!-- hidden -->after") == "beforeafter"


def test_bare_ampersand_is_kept():
    assert sanitize_html("Tom & Jerry") == "Tom & Jerry"


def test_query_string_url_is_kept():
    url = "https://example.com/?a=1&b=2"

    assert sanitize_html(url) == url


def test_existing_entities_are_left_alone():
    assert sanitize_html("Fish &amp; chips &lt;3") == "Fish &amp; chips &lt;3"


def test_ampersand_next_to_markup_stays_inert():
    assert sanitize_html("&<script>x</script>") == "&&lt;script&gt;x&lt;/script&gt;"


def test_placeholder_character_in_input_is_preserved():
    value = "\ue000 & \ue001"

    assert sanitize_html(value) == value


def test_none_passes_through():
    assert sanitize_html(None) is None


@pytest.mark.parametrize("value", [
    "Tom & Jerry",
    "https://example.com/?a=1&b=2",
    "already &amp; escaped &lt;b&gt;",
    "&<script>x</script>",
    'Naughty <script>alert("xss");</script>',
    'Bad image <img src="https://url.to.file.which/does-not.exist" onerror="alert(document.cookie);">',
    "<strong>bold</strong> & plain",
    '<a href="https://example.com/?a=1&b=2">link</a>',
    "<div onclick=\"steal()\">x</div>",
])
def test_sanitize_is_idempotent(value):
    once = sanitize_html(value)

    assert sanitize_html(once) == once


def test_sanitize_is_deterministic():
    value = '<script>alert("xss");</script><b onmouseover="x()">hi</b>'

    assert sanitize_html(value) == sanitize_html(value)


def test_bookmark_read_sanitizes_text_fields_only():
    bookmark = BookmarkRead(
        id=7,
        title="<script>x</script>",
        url='<img src="https://example.com/a.png" onerror="alert(1)">',
        description="<b>fine</b>",
        rating=4,
    )

    assert bookmark.title == "&lt;script&gt;x&lt;/script&gt;"
    assert bookmark.url == '<img src="https://example.com/a.png">'
    assert bookmark.description == "<b>fine</b>"
    assert bookmark.id == 7
    assert bookmark.rating == 4
