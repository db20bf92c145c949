"""Configuration loading for the ``retrieval`` command line tool.

A configuration file is a JSON or YAML mapping (selected by suffix)::

    words: [apple, apply, ape, ample]
    word_files: [dictionary.txt]
    with_counter: true
    log_level: INFO

Relative ``word_files`` entries resolve against the configuration file's
directory.  Every key is optional; unknown keys are rejected so typos do not
silently fall back to defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Tuple

import yaml

from .api import construct
from .trie import Trie

__all__ = [
    "ConfigError",
    "LOG_LEVELS",
    "RetrievalConfig",
    "build_trie",
    "load_config",
    "load_words",
]

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_YAML_SUFFIXES = {".yaml", ".yml"}


class ConfigError(ValueError):
    """Raised when a configuration file or word list cannot be used."""


@dataclass(frozen=True)
class RetrievalConfig:
    """Resolved settings for building a trie from the command line."""

    words: Tuple[str, ...] = ()
    word_files: Tuple[Path, ...] = ()
    with_counter: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}; received {self.log_level!r}"
            )

    @classmethod
    def from_mapping(
        cls, payload: Mapping[str, Any], *, base_dir: Optional[Path] = None
    ) -> "RetrievalConfig":
        unknown = sorted(set(payload) - {"words", "word_files", "with_counter", "log_level"})
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        words = _string_list(payload.get("words", []), "words")
        files = [Path(entry) for entry in _string_list(payload.get("word_files", []), "word_files")]
        if base_dir is not None:
            files = [path if path.is_absolute() else base_dir / path for path in files]

        with_counter = payload.get("with_counter", False)
        if not isinstance(with_counter, bool):
            raise ConfigError("with_counter must be a boolean")
        log_level = payload.get("log_level", "WARNING")
        if not isinstance(log_level, str):
            raise ConfigError("log_level must be a string")

        return cls(
            words=tuple(words),
            word_files=tuple(files),
            with_counter=with_counter,
            log_level=log_level.upper(),
        )

    def merge(
        self,
        *,
        words: Iterable[str] = (),
        word_files: Iterable[Path] = (),
        with_counter: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> "RetrievalConfig":
        """Overlay command-line values; sequences are appended, flags override."""

        return replace(
            self,
            words=self.words + tuple(words),
            word_files=self.word_files + tuple(word_files),
            with_counter=self.with_counter if with_counter is None else with_counter,
            log_level=self.log_level if log_level is None else log_level,
        )


def _string_list(value: object, label: str) -> List[str]:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise ConfigError(f"{label} must be a list of strings")
    items = list(value)
    for item in items:
        if not isinstance(item, str):
            raise ConfigError(f"{label} must be a list of strings")
    return items


def load_config(path: Path) -> RetrievalConfig:
    """Load a :class:`RetrievalConfig` from a JSON or YAML file."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration {path}: {exc}") from exc

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to parse configuration {path}: {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Configuration {path} must contain a mapping")

    config = RetrievalConfig.from_mapping(payload, base_dir=path.parent)
    logger.debug("Loaded configuration from %s: %s", path, config)
    return config


def load_words(path: Path) -> List[str]:
    """Read one word per line from *path*, skipping blank lines."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            words = [line.strip() for line in handle]
    except OSError as exc:
        raise ConfigError(f"Unable to read word list {path}: {exc}") from exc
    return [word for word in words if word]


def build_trie(config: RetrievalConfig) -> Trie:
    """Build the trie described by *config*."""

    words = list(config.words)
    for path in config.word_files:
        loaded = load_words(path)
        logger.info("Loaded %s words from %s", f"{len(loaded):,}", path)
        words.extend(loaded)
    return construct(words, with_counter=config.with_counter)
