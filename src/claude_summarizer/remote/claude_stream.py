"""Streaming summaries from the Anthropic Messages API.

The raw server-sent events are reduced to ``StreamChunk`` values: one chunk
per text delta, plus a terminating chunk carrying the usage totals.
"""
from __future__ import annotations
import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

import anthropic
import httpx

from claude_summarizer.common.config import SummarizerConfig
from claude_summarizer.common.errors import StreamOpenError, StreamReadError
from claude_summarizer.common.schema import StreamChunk, SummaryRequest, Usage
from claude_summarizer.common.templates import build_messages

LOGGER = logging.getLogger("claude_summarizer.remote.stream")

# Errors raised by the SDK itself, or leaked from the transport mid-stream.
TRANSPORT_ERRORS = (anthropic.APIError, httpx.HTTPError)


def create_client(api_key: str) -> anthropic.Anthropic:
    return anthropic.Anthropic(api_key=api_key)


def build_request(config: SummarizerConfig) -> SummaryRequest:
    return SummaryRequest(
        model=config.model,
        max_tokens=config.max_tokens,
        system=config.system_prompt,
        messages=build_messages(config.input_text),
        stream=True,
    )


@contextmanager
def open_stream(client: Any, request: SummaryRequest) -> Iterator[Any]:
    """
    Open a streaming response and close it on every exit path.

    Args:
        client: An ``anthropic.Anthropic`` (or compatible) client.
        request: The request to dispatch.
    """
    LOGGER.debug("Opening stream: model=%s max_tokens=%s", request.model, request.max_tokens)
    try:
        stream = client.messages.create(**request.as_kwargs())
    except TRANSPORT_ERRORS as e:
        raise StreamOpenError(f"ChatCompletion error: {e}") from e
    try:
        yield stream
    finally:
        stream.close()
        LOGGER.debug("Stream closed")


def iter_chunks(events: Iterable[Any]) -> Iterator[StreamChunk]:
    """
    Reduce raw stream events to text and usage chunks.

    Exhausting ``events`` ends the iteration normally. Transport errors while
    pulling the next event become ``StreamReadError``.
    """
    input_tokens = 0
    it = iter(events)
    while True:
        try:
            event = next(it)
        except StopIteration:
            return
        except TRANSPORT_ERRORS as e:
            raise StreamReadError(f"Stream error: {e}") from e

        if event.type == "message_start":
            input_tokens = event.message.usage.input_tokens
        elif event.type == "content_block_delta" and event.delta.type == "text_delta":
            yield StreamChunk(text=event.delta.text)
        elif event.type == "message_delta":
            # Newer API versions repeat the cumulative input count here.
            reported = getattr(event.usage, "input_tokens", None)
            usage = Usage(
                input_tokens=reported if reported is not None else input_tokens,
                output_tokens=event.usage.output_tokens,
            )
            yield StreamChunk(text="", usage=usage)
        else:
            LOGGER.debug("Skipping %s event", event.type)
