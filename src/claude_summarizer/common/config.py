"""Configuration resolution: credential, YAML defaults, CLI flags and input text."""
from __future__ import annotations
import argparse
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from pydantic import ValidationError

from claude_summarizer.common.errors import (
    ConfigError,
    ConflictingInputError,
    InputReadError,
    MissingCredentialError,
    MissingInputError,
)
from claude_summarizer.common.schema import FileConfig
from claude_summarizer.common.templates import SYSTEM_PROMPT, load_template

LOGGER = logging.getLogger("claude_summarizer.config")

API_KEY_ENV = "ANTHROPIC_API_KEY"


@dataclass(frozen=True)
class SummarizerConfig:
    """Resolved options for one run."""
    model: str
    max_tokens: int
    input_text: str = field(repr=False)
    api_key: str = field(repr=False)
    system_prompt: str = field(default=SYSTEM_PROMPT, repr=False)


def load_cfg(path: str) -> FileConfig:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Error reading config file: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

    try:
        return FileConfig.model_validate(raw or {})
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e


def read_api_key(environ: Mapping[str, str]) -> str:
    api_key = environ.get(API_KEY_ENV, "")
    if not api_key.strip():
        raise MissingCredentialError(f"{API_KEY_ENV} environment variable is not set")
    return api_key


def resolve_input(input_file: str | None, input_text: str | None) -> str:
    """
    Resolve the text to summarize.

    Exactly one of ``input_file`` and ``input_text`` must be non-empty.

    Args:
        input_file: Path to a UTF-8 text file.
        input_text: Literal text.
    """
    if input_file and input_text:
        raise ConflictingInputError("Only one of input-file or input-text may be provided")
    if input_file:
        try:
            return Path(input_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(f"Error reading input file: {e}") from e
    if input_text:
        return input_text
    raise MissingInputError("Either input-file or input-text must be provided")


def build_config(args: argparse.Namespace, environ: Mapping[str, str]) -> SummarizerConfig:
    """
    Build the run configuration from parsed flags and the environment.

    The credential is checked before anything is read from disk. Flag values
    override YAML values, which override built-in defaults.
    """
    api_key = read_api_key(environ)

    file_cfg = load_cfg(args.cfg) if args.cfg else FileConfig()
    model = args.model if args.model is not None else file_cfg.model
    max_tokens = args.max_tokens if args.max_tokens is not None else file_cfg.max_tokens

    input_text = resolve_input(args.input_file, args.input_text)

    prompt_file = args.system_prompt_file or file_cfg.system_prompt_file
    system_prompt = load_template(prompt_file) if prompt_file else SYSTEM_PROMPT

    config = SummarizerConfig(
        model=model,
        max_tokens=max_tokens,
        input_text=input_text,
        api_key=api_key,
        system_prompt=system_prompt,
    )
    LOGGER.debug("Resolved %r", config)
    return config
