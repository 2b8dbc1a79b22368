"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

DEFAULT_MODEL = "claude-3-haiku-20240307"
DEFAULT_MAX_TOKENS = 200


class FileConfig(BaseModel):
    """Optional defaults loaded from a YAML config file."""

    model_config = ConfigDict(extra="forbid")

    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    system_prompt_file: str | None = None


@dataclass(frozen=True)
class SummaryRequest:
    """A single streaming Messages API request."""
    model: str
    max_tokens: int
    system: str
    messages: list[dict[str, str]] = field(default_factory=list)
    stream: bool = True

    def as_kwargs(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": self.system,
            "messages": list(self.messages),
            "stream": self.stream,
        }


@dataclass(frozen=True)
class Usage:
    input_tokens: int
    output_tokens: int


@dataclass(frozen=True)
class StreamChunk:
    """One unit read from the stream; only the terminating chunk has usage."""
    text: str
    usage: Usage | None = None


@dataclass
class SummaryStats:
    """Usage totals and timing for one summary run."""
    input_tokens: int
    output_tokens: int
    elapsed_s: float

    @property
    def tokens_per_second(self) -> float:
        # No clamping: a zero elapsed time reports inf (or nan with no output).
        if self.elapsed_s == 0:
            return math.inf if self.output_tokens else math.nan
        return self.output_tokens / self.elapsed_s
