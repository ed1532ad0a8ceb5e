"""Tests for the portal example."""

from typing import Any


async def _get(app, path: str, method: str = "GET") -> tuple[int, dict[bytes, bytes], str]:
    messages: list[dict[str, Any]] = []

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await app({"type": "http", "method": method, "path": path}, receive, send)

    start, body = messages
    return start["status"], dict(start["headers"]), body["body"].decode("utf-8")


class TestPortalApp:
    """Verify every route in the portal example through the ASGI callable."""

    async def test_index_uses_layout_and_nav(self, example_app) -> None:
        status, headers, text = await _get(example_app, "/")
        assert status == 200
        assert headers[b"content-type"] == b"text/html; charset=utf-8"
        assert "<title>Home | Portal</title>" in text
        assert '<a href="/users">Users</a>' in text
        assert "<h1>Welcome, guest</h1>" in text
        assert "use base" not in text

    async def test_users_page(self, example_app) -> None:
        status, _, text = await _get(example_app, "/users")
        assert status == 200
        assert "<h1>3 users</h1>" in text
        assert '<a href="/people/grace">Grace</a>' in text
        assert "javascript:" not in text

    async def test_content_length_matches_body(self, example_app) -> None:
        _, headers, text = await _get(example_app, "/about")
        assert int(headers[b"content-length"]) == len(text.encode("utf-8"))

    async def test_unknown_path_404(self, example_app) -> None:
        status, _, text = await _get(example_app, "/missing")
        assert status == 404
        assert text == "Not Found"

    async def test_render_failure_sends_no_partial_page(self, example_app) -> None:
        status, _, text = await _get(example_app, "/broken")
        assert status == 500
        assert text == "Internal Server Error"
        assert "<main>" not in text

    async def test_head_request(self, example_app) -> None:
        status, headers, text = await _get(example_app, "/about", method="HEAD")
        assert status == 200
        assert int(headers[b"content-length"]) > 0
        assert text == ""
