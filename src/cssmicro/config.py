"""Centralized configuration for the cssmicro parsers.

This module exposes :func:`get_settings` returning the tunables used by the
numeric rules. Values can be customized via environment variables or by
pointing ``CSSMICRO_CONFIG_FILE`` to a TOML/YAML document with a ``[parser]``
section.
"""
from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .utils.logging import log_event

__all__ = ["DEFAULT_MAX_INTEGER_LITERAL_LENGTH", "ParserSettings", "get_settings", "reset_settings"]

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_INTEGER_LITERAL_LENGTH = 256

_CONFIG_CACHE: Optional["ParserSettings"] = None
_CONFIG_SOURCE: Optional[Path] = None


@dataclass(frozen=True)
class ParserSettings:
    """Resolved tunables for the micro-parsers."""

    max_integer_literal_length: int = DEFAULT_MAX_INTEGER_LITERAL_LENGTH

    def as_dict(self) -> Dict[str, Any]:
        """Expose the settings as plain values (useful for logging)."""

        return {"max_integer_literal_length": self.max_integer_literal_length}


def _load_config_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file '{path}' does not exist")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        with path.open("rb") as handle:
            return tomllib.load(handle)
    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
            return loaded or {}
    raise ValueError(f"Unsupported config file format: '{suffix}'")


def _coalesce_mapping(source: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(source, Mapping):
        return {}
    return source


def _positive_int(value: Any, *, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Setting '{name}' must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Setting '{name}' must be an integer, got {value!r}") from exc
    if number < 1:
        raise ValueError(f"Setting '{name}' must be at least 1, got {number}")
    return number


def _build_settings(config_file: Optional[Path]) -> ParserSettings:
    config_data: Mapping[str, Any] = {}
    if config_file is not None:
        config_data = _load_config_file(config_file.expanduser().resolve())

    parser_section = _coalesce_mapping(config_data.get("parser"))

    raw_length = os.environ.get("CSSMICRO_MAX_INTEGER_LITERAL_LENGTH") or parser_section.get(
        "max_integer_literal_length"
    )
    max_length = (
        DEFAULT_MAX_INTEGER_LITERAL_LENGTH
        if raw_length is None
        else _positive_int(raw_length, name="max_integer_literal_length")
    )

    settings = ParserSettings(max_integer_literal_length=max_length)
    log_event(
        LOGGER,
        "config.loaded",
        level=logging.DEBUG,
        source=str(config_file) if config_file is not None else None,
        **settings.as_dict(),
    )
    return settings


def get_settings(*, refresh: bool = False, config_file: str | Path | None = None) -> ParserSettings:
    """Return the cached :class:`ParserSettings` configuration.

    Parameters
    ----------
    refresh:
        When ``True`` the cached configuration is discarded and recomputed.
    config_file:
        Optional explicit path to the configuration document. When provided the
        returned instance is not cached globally, allowing callers (e.g. tests)
        to override settings temporarily.
    """

    global _CONFIG_CACHE, _CONFIG_SOURCE

    if config_file is not None:
        return _build_settings(Path(config_file))

    env_path = os.getenv("CSSMICRO_CONFIG_FILE")
    source_path = Path(env_path).expanduser() if env_path else None

    if refresh or _CONFIG_CACHE is None or _CONFIG_SOURCE != source_path:
        _CONFIG_CACHE = _build_settings(source_path)
        _CONFIG_SOURCE = source_path

    return _CONFIG_CACHE


def reset_settings() -> None:
    """Clear the cached configuration (mainly useful for tests)."""

    global _CONFIG_CACHE, _CONFIG_SOURCE
    _CONFIG_CACHE = None
    _CONFIG_SOURCE = None
