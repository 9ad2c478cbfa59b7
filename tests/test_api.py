import asyncio
import json

from feedblog.api import API_HEADERS, ERROR_MESSAGE, ApiAssembler
from feedblog.extractors import first_image
from feedblog.repository import PostRepository
from tests.fakes import CONFIG, FakeResponse, FakeSession, make_posts


def _api(response, config=None):
    repo = PostRepository(dict(CONFIG if config is None else config), session=FakeSession(response))
    return ApiAssembler(repo)


def test_list_json_adds_featured_image_and_keeps_fields():
    posts = make_posts(3)
    posts[1]["content"] = "<p>no image</p>"
    posts[2]["extra"] = {"tags": ["a", "b"]}
    result = asyncio.run(_api(FakeResponse(posts)).list_json())

    assert result.status == 200
    assert result.headers == API_HEADERS
    data = json.loads(result.body)
    assert len(data) == 3
    for original, entry in zip(posts, data):
        assert entry["featured_image"] == first_image(original["content"])
        assert {k: v for k, v in entry.items() if k != "featured_image"} == original
    assert data[0]["featured_image"] == "https://img.example/0.png?a=1&b=2"
    assert data[1]["featured_image"] == "https://placehold.co/300x200/png"


def test_list_json_is_pretty_printed_utf8():
    posts = [{"slug": "s", "title": "Café", "content": ""}]
    result = asyncio.run(_api(FakeResponse(posts)).list_json())
    assert "Café" in result.body
    assert result.body.startswith("[\n  {")


def test_list_json_error_envelope_on_fetch_failure():
    result = asyncio.run(_api(FakeResponse(status_code=503)).list_json())
    assert result.status == 500
    assert result.headers == {"Content-Type": "application/json"}
    body = json.loads(result.body)
    assert body["status"] == "error"
    assert body["message"] == ERROR_MESSAGE
    assert "503" in body["details"]


def test_list_json_error_envelope_on_missing_config(caplog):
    with caplog.at_level("ERROR", logger="feedblog.api"):
        result = asyncio.run(_api(FakeResponse([]), config={}).list_json())
    assert result.status == 500
    assert "GITHUB_USERNAME" in json.loads(result.body)["details"]
    assert "API error" in caplog.text


def test_list_json_empty_entry_only_gains_featured_image():
    result = asyncio.run(_api(FakeResponse([{}])).list_json())
    assert json.loads(result.body) == [
        {"featured_image": "https://placehold.co/300x200/png"}
    ]
