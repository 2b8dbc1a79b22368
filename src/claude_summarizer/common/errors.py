"""Error types raised by the summarizer.

Every failure is fatal to the CLI; the hierarchy only exists so callers can
tell the kinds apart (and map them to distinct exit codes later).
"""
from __future__ import annotations


class SummarizerError(Exception):
    """Base class for all fatal summarizer errors."""

    exit_code = 1


class ConfigError(SummarizerError):
    """Invalid or incomplete configuration."""


class MissingCredentialError(ConfigError):
    pass


class MissingInputError(ConfigError):
    pass


class ConflictingInputError(ConfigError):
    pass


class InputReadError(SummarizerError):
    """A local file (input text or prompt) could not be read."""


class StreamError(SummarizerError):
    """Transport failure talking to the completion service."""


class StreamOpenError(StreamError):
    pass


class StreamReadError(StreamError):
    pass
