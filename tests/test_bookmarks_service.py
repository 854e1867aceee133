import pytest
from fastapi import HTTPException

from bookmarks import schemas, service


def _payload(**overrides):
    fields = {"title": "Example", "url": "https://example.com", "rating": 4}
    fields.update(overrides)
    return schemas.CreateBookmarkRequest(**fields)


def test_validate_new_bookmark_defaults_description():
    record = service.validate_new_bookmark(_payload())
    assert record == {
        "title": "Example",
        "url": "https://example.com",
        "description": "",
        "rating": 4,
    }


def test_validate_new_bookmark_accepts_integral_float_rating():
    assert service.validate_new_bookmark(_payload(rating=3.0))["rating"] == 3


def test_validate_new_bookmark_rejects_whitespace_title():
    with pytest.raises(HTTPException) as exc:
        service.validate_new_bookmark(_payload(title="   "))
    assert exc.value.status_code == 400
    assert exc.value.detail == "'title' is required"


def test_validate_new_bookmark_rejects_non_text_fields():
    with pytest.raises(HTTPException) as exc:
        service.validate_new_bookmark(_payload(title=42))
    assert exc.value.status_code == 400

    with pytest.raises(HTTPException) as exc:
        service.validate_new_bookmark(_payload(description={"a": 1}))
    assert "description" in exc.value.detail


def test_is_web_url():
    assert service.is_web_url("https://example.com")
    assert service.is_web_url("http://localhost:8000/path?q=1")
    assert not service.is_web_url("mailto:someone@example.com")
    assert not service.is_web_url(" https://example.com")
    assert not service.is_web_url(123)


def test_serialize_bookmark_sanitizes_text_and_coerces_rating():
    row = {
        "id": 7,
        "title": "<script>alert('x')</script>",
        "url": "https://example.com",
        "description": None,
        "rating": "3",
    }
    out = service.serialize_bookmark(row)

    assert out["id"] == 7
    assert out["title"].startswith("&lt;script&gt;")
    assert out["description"] == ""
    assert out["rating"] == 3


def test_serialize_bookmark_sanitizes_non_numeric_rating():
    out = service.serialize_bookmark(
        {"id": 1, "title": "t", "url": "https://example.com", "description": "", "rating": "<script>"}
    )
    assert out["rating"] == "&lt;script&gt;"


def test_is_web_url_rejects_forms_the_parser_would_repair():
    for url in [
        "https:example.com",
        "http:\\\\example.com",
        "https://example.com/a b",
        "https:///example.com",
        "https://exa<mple.com",
        "https://example.com:99999999/",
    ]:
        assert not service.is_web_url(url), url


def test_serialize_bookmark_keeps_ampersands():
    out = service.serialize_bookmark(
        {"id": 1, "title": "A & B", "url": "https://example.com/?a=1&b=2", "description": "", "rating": 2}
    )
    assert out["title"] == "A & B"
    assert out["url"] == "https://example.com/?a=1&b=2"
