"""Sink assertion helpers for wren tests.

Convenience functions to verify what a render wrote to a
:class:`~wren.sinks.ResponseSink`. Each assertion produces a clear error
message on failure::

    from wren.testing import assert_rendered, assert_untouched
"""

from wren.sinks import ResponseSink


def assert_rendered(
    sink: ResponseSink,
    *,
    status: int = 200,
    contains: str | tuple[str, ...] = (),
) -> None:
    """Assert the sink received a successful render.

    Checks the status code, a non-empty body, and that every string in
    *contains* appears in the body.
    """
    assert sink.status == status, f"Expected status {status}, got {sink.status}"
    text = sink.body.decode("utf-8")
    assert text.strip(), "Rendered body is empty"
    needles = (contains,) if isinstance(contains, str) else contains
    for needle in needles:
        assert needle in text, (
            f"Rendered body does not contain {needle!r}.\n"
            f"Body: {text[:500]}"
        )


def assert_not_rendered_text(sink: ResponseSink, text: str) -> None:
    """Assert the rendered body does **not** contain the given text."""
    body = sink.body.decode("utf-8")
    assert text not in body, (
        f"Rendered body unexpectedly contains {text!r}.\n"
        f"Body: {body[:500]}"
    )


def assert_untouched(sink: ResponseSink) -> None:
    """Assert nothing was written: no status, no headers, no body bytes."""
    assert sink.status is None, f"Sink received status {sink.status}"
    assert sink.headers == (), f"Sink received headers {sink.headers!r}"
    assert sink.body == b"", f"Sink received {len(sink.body)} body bytes"
