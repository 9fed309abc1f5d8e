from solvinghub.business.services import (
    escape_html,
    sanitize_problem_data,
    sanitize_text,
    strip_html,
)


def test_strip_html_removes_markup():
    assert strip_html("<p>Hello <b>world</b></p>") == "Hello world"
    assert strip_html("<img src=x onerror=alert(1)>Caption") == "Caption"
    assert strip_html("Fish &amp; chips&nbsp;") == "Fish & chips"
    assert strip_html("<!-- note -->  text  ") == "text"


def test_strip_html_non_string():
    assert strip_html(None) == ""
    assert strip_html(42) == ""


def test_escape_html_keeps_markup_visible():
    assert escape_html("<b>bold</b>") == "&lt;b&gt;bold&lt;/b&gt;"


def test_sanitize_text_modes():
    assert sanitize_text("<i>x</i>", mode="strip") == "x"
    assert sanitize_text("<i>x</i>", mode="escape") == "&lt;i&gt;x&lt;/i&gt;"


def test_sanitize_problem_data():
    data = {
        "title": "<h1>No clean water</h1> in the village",
        "description": "Plain text stays as it is",
        "category": "Health",
        "tags": ["<b>water</b>", "<i></i>", "wells"],
    }

    cleaned = sanitize_problem_data(data, mode="strip")

    assert cleaned["title"] == "No clean water in the village"
    assert cleaned["description"] == "Plain text stays as it is"
    assert cleaned["category"] == "Health"
    # Items that are empty after cleaning are dropped
    assert cleaned["tags"] == ["water", "wells"]
    assert data["tags"][0] == "<b>water</b>"
