"""Prompt templating helpers."""
from __future__ import annotations
from pathlib import Path

from claude_summarizer.common.errors import InputReadError

SYSTEM_PROMPT = (
    "You are a text summarization assistant.\n"
    "Generate a concise summary of the given input text while preserving the key "
    "information and main points.\n"
    "Provide the summary in three bullet points, totalling 100 words or less."
)

def load_template(path: str = "configs/system_prompt.txt") -> str:
    """
    Load a system prompt file.

    Args:
        path: Path to template.
    """
    try:
        return Path(path).read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"Error reading system prompt file: {e}") from e

def build_messages(user_text: str) -> list[dict[str, str]]:
    """
    Wrap the text to summarize as the single user message.

    Args:
        user_text: Input string.

    Returns:
        Messages list for the Messages API.
    """
    return [{"role": "user", "content": user_text}]
