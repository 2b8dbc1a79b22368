"""
Claude Summarizer package.

Provides:
- Streaming text summaries via the Anthropic Messages API
- A CLI reporting token usage, throughput and elapsed time
"""
