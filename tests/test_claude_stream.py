from __future__ import annotations

from types import SimpleNamespace

import anthropic
import httpx
import pytest

from claude_summarizer.common.config import SummarizerConfig
from claude_summarizer.common.errors import StreamOpenError, StreamReadError
from claude_summarizer.common.schema import StreamChunk, Usage
from claude_summarizer.remote.claude_stream import build_request, iter_chunks, open_stream
from tests.fakes import FakeClient, FakeStream, start_event, summary_events, text_event, usage_event


def _config() -> SummarizerConfig:
    return SummarizerConfig(model="claude-test", max_tokens=50, input_text="Some text.", api_key="k")


def test_build_request_single_user_message() -> None:
    kwargs = build_request(_config()).as_kwargs()
    assert kwargs["model"] == "claude-test"
    assert kwargs["max_tokens"] == 50
    assert kwargs["stream"] is True
    assert "three bullet points" in kwargs["system"]
    assert kwargs["messages"] == [{"role": "user", "content": "Some text."}]


def test_iter_chunks_text_then_usage() -> None:
    chunks = list(iter_chunks(summary_events()))
    assert chunks == [
        StreamChunk(text="- Greeting"),
        StreamChunk(text=" noted."),
        StreamChunk(text="", usage=Usage(input_tokens=12, output_tokens=6)),
    ]


def test_iter_chunks_prefers_reported_input_tokens() -> None:
    chunks = list(iter_chunks([start_event(12), usage_event(6, input_tokens=20)]))
    assert chunks[-1].usage == Usage(input_tokens=20, output_tokens=6)


def test_iter_chunks_skips_non_text_deltas() -> None:
    tool_delta = SimpleNamespace(
        type="content_block_delta", index=1, delta=SimpleNamespace(type="input_json_delta", partial_json="{")
    )
    chunks = list(iter_chunks([start_event(3), text_event("a"), tool_delta, text_event("b")]))
    assert [c.text for c in chunks] == ["a", "b"]


def test_iter_chunks_maps_transport_error() -> None:
    stream = FakeStream([start_event(3), text_event("partial")], error=httpx.ReadError("connection reset"))
    it = iter_chunks(stream)
    assert next(it).text == "partial"
    with pytest.raises(StreamReadError, match="connection reset"):
        next(it)


def test_open_stream_closes_after_use() -> None:
    stream = FakeStream([text_event("x")])
    client = FakeClient(stream)
    with open_stream(client, build_request(_config())) as s:
        assert list(iter_chunks(s)) == [StreamChunk(text="x")]
        assert not stream.closed
    assert stream.closed
    assert len(client.calls) == 1


def test_open_stream_closes_on_error() -> None:
    stream = FakeStream([], error=httpx.ReadError("boom"))
    client = FakeClient(stream)
    with pytest.raises(StreamReadError):
        with open_stream(client, build_request(_config())) as s:
            list(iter_chunks(s))
    assert stream.closed


def test_open_stream_maps_open_failure() -> None:
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    client = FakeClient(anthropic.APIConnectionError(request=request))
    with pytest.raises(StreamOpenError, match="ChatCompletion error"):
        with open_stream(client, build_request(_config())):
            pass
