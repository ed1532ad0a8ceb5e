"""Tests for wren.transport: ASGI emission of rendered responses."""

from pathlib import Path

import pytest

from wren.errors import NotFoundError
from wren.registry import load
from wren.response import Response
from wren.sinks import ResponseSink
from wren.transport import send_page, send_response


async def _collect(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    @pytest.mark.asyncio
    async def test_start_and_body(self) -> None:
        messages = await _collect(Response("ok").with_header("X-Page", "home"))

        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"text/html; charset=utf-8"
        assert headers[b"x-page"] == b"home"
        assert headers[b"content-length"] == b"2"

        assert messages[1]["type"] == "http.response.body"
        assert messages[1]["body"] == b"ok"

    @pytest.mark.asyncio
    async def test_204_drops_body(self) -> None:
        messages = await _collect(Response("unexpected").with_status(204))

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    @pytest.mark.asyncio
    async def test_rendered_page_round_trip(self, site_tree: Path) -> None:
        sink = ResponseSink()
        load(site_tree).render(sink, "plain", {"title": "ASGI"}, 203)

        messages = await _collect(sink.to_response())

        assert messages[0]["status"] == 203
        assert b"<p>ASGI</p>" in messages[1]["body"]

    @pytest.mark.asyncio
    async def test_head_keeps_length_without_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response("four"), send, head=True)

        assert dict(messages[0]["headers"])[b"content-length"] == b"4"
        assert messages[1]["body"] == b""


class TestSendPage:
    @pytest.mark.asyncio
    async def test_renders_and_sends(self, site_tree: Path) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_page(load(site_tree), send, "plain", {"title": "Page"}, 202)

        assert messages[0]["status"] == 202
        assert b"<p>Page</p>" in messages[1]["body"]

    @pytest.mark.asyncio
    async def test_failure_sends_nothing(self, site_tree: Path) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        with pytest.raises(NotFoundError):
            await send_page(load(site_tree), send, "missing")

        assert messages == []
