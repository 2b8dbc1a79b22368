"""Summarize text with Claude, streaming the summary to the terminal.

Prints the summary as it arrives, then token usage, output throughput and
total execution time.
"""
from __future__ import annotations
import argparse
import logging
import os
import sys
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TextIO

from claude_summarizer.common.config import API_KEY_ENV, SummarizerConfig, build_config
from claude_summarizer.common.errors import SummarizerError
from claude_summarizer.common.logging_setup import setup_logging
from claude_summarizer.common.schema import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, SummaryStats, Usage
from claude_summarizer.remote.claude_stream import build_request, create_client, iter_chunks, open_stream

LOGGER = logging.getLogger("claude_summarizer.cli")

_NS_PER_UNIT = (("ms", 1_000_000), ("µs", 1_000))


def _trim(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(seconds: float) -> str:
    """
    Format a duration like ``350ms``, ``1.5s``, ``1m2.5s`` or ``1h0m0s``.

    Args:
        seconds: Duration in seconds.
    """
    ns = round(seconds * 1_000_000_000)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000_000:
        for suffix, unit in _NS_PER_UNIT:
            if ns >= unit:
                return f"{sign}{_trim(ns, unit)}{suffix}"

    hours, rem = divmod(ns, 3_600 * 1_000_000_000)
    minutes, rem = divmod(rem, 60 * 1_000_000_000)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return f"{out}{_trim(rem, 1_000_000_000)}s"


def summarize(
    config: SummarizerConfig,
    client: Any,
    out: TextIO | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> SummaryStats:
    """
    Stream a summary of ``config.input_text`` to ``out``.

    Args:
        config: Resolved run configuration.
        client: Anthropic client used to open the stream.
        out: Where summary text is written as it arrives (default stdout).
        clock: Monotonic clock in seconds.

    Returns:
        Usage totals and the elapsed time from dispatch to end of stream.
    """
    if out is None:
        out = sys.stdout
    request = build_request(config)
    usage: Usage | None = None

    start = clock()
    with open_stream(client, request) as stream:
        for chunk in iter_chunks(stream):
            out.write(chunk.text)
            out.flush()
            if chunk.usage is not None:
                usage = chunk.usage
        elapsed = clock() - start

    if usage is None:
        LOGGER.warning("Stream ended without usage totals; reporting zero tokens")
        usage = Usage(input_tokens=0, output_tokens=0)
    return SummaryStats(
        input_tokens=usage.input_tokens,
        output_tokens=usage.output_tokens,
        elapsed_s=elapsed,
    )


def write_report(stats: SummaryStats, out: TextIO | None = None) -> None:
    if out is None:
        out = sys.stdout
    out.write(f"\n\nTokens generated: {stats.output_tokens}\n")
    out.write(f"\n\nInput token count: {stats.input_tokens}\n")
    out.write(f"Output tokens per Second: {stats.tokens_per_second:.2f}\n")
    out.write(f"Total Execution Time: {format_duration(stats.elapsed_s)}\n")
    out.flush()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Summarize text with Claude (streaming)",
        epilog=f"Requires {API_KEY_ENV} in the environment; a blank value counts as unset.",
    )
    ap.add_argument("--input-file", "-input-file", default="", help="Path to the input text file")
    ap.add_argument("--input-text", "-input-text", default="", help="Input text to summarize")
    ap.add_argument("--model", "-model", default=None, help=f"Model to use for the API (default: {DEFAULT_MODEL})")
    ap.add_argument(
        "--max-tokens",
        "-max-tokens",
        type=int,
        default=None,
        help=f"Maximum number of tokens in the summary (default: {DEFAULT_MAX_TOKENS})",
    )
    ap.add_argument("--cfg", default=None, help="Optional YAML config with model/max_tokens defaults")
    ap.add_argument("--system-prompt-file", default=None, help="Read the system prompt from this file")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return ap.parse_args(argv)


def main(argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = build_config(args, os.environ if environ is None else environ)
        client = create_client(config.api_key)
        stats = summarize(config, client)
    except SummarizerError as e:
        LOGGER.error("%s", e)
        raise SystemExit(e.exit_code) from e

    write_report(stats)

if __name__ == "__main__":
    main()
