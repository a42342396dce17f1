"""TOML configuration loader.

Layers, later wins: ``config/default.toml``, ``config/development.toml``
(merged section by section), then environment variables.
"""

import logging
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from code_quality.domain.ports.config import (
    AnalysisConfig,
    AppConfig,
    LLMConfig,
    OllamaConfig,
    PersistenceConfig,
    SecurityConfig,
    ServerConfig,
)

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"
LAYER_FILES = ("default.toml", "development.toml")

SECTION_MODELS: dict[str, type[BaseModel]] = {
    "server": ServerConfig,
    "llm": LLMConfig,
    "ollama": OllamaConfig,
    "analysis": AnalysisConfig,
    "persistence": PersistenceConfig,
    "security": SecurityConfig,
}


def _as_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _as_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",")]


# env var -> (section, key, converter)
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "OLLAMA_HOST": ("ollama", "host", str.strip),
    "QUALITY_AI_ENABLED": ("llm", "enabled", _as_bool),
    "QUALITY_AI_MODEL": ("llm", "model", str.strip),
    "QUALITY_CACHE_DIR": ("persistence", "cache_dir", str.strip),
    "PORT": ("server", "port", int),
    "LOG_LEVEL": ("logging", "level", str.upper),
    "LOG_FILE": ("logging", "file", str.strip),
    "CORS_ORIGINS": ("security", "cors_origins", _as_list),
    "RATE_LIMIT_PER_MINUTE": ("security", "rate_limit_requests_per_minute", int),
}


def _read_layer(path: Path) -> dict:
    with path.open("rb") as f:
        return tomllib.load(f)


def _merge(base: dict, layer: dict) -> dict:
    """Table values merge key by key; anything else replaces."""
    merged = dict(base)
    for section, values in layer.items():
        current = merged.get(section)
        if isinstance(current, dict) and isinstance(values, dict):
            merged[section] = {**current, **values}
        else:
            merged[section] = values
    return merged


def _apply_env_overrides(config: dict) -> dict:
    """Write set environment variables into their config sections."""
    for name, (section, key, convert) in ENV_OVERRIDES.items():
        raw = os.getenv(name)
        if not raw:
            continue
        try:
            value = convert(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a valid value", name, raw)
            continue
        config.setdefault(section, {})[key] = value
    return config


def load_config(config_dir: Path | None = None) -> AppConfig:
    """Build AppConfig from the TOML layers in config_dir plus the environment."""
    directory = config_dir or CONFIG_DIR
    raw: dict = {}
    for filename in LAYER_FILES:
        path = directory / filename
        if path.exists():
            raw = _merge(raw, _read_layer(path))
    raw = _apply_env_overrides(raw)

    sections = {name: model(**(raw.get(name) or {})) for name, model in SECTION_MODELS.items()}
    log_section = raw.get("logging") or {}
    return AppConfig(
        **sections,
        log_level=log_section.get("level", "INFO"),
        log_file=(log_section.get("file") or "").strip(),
        log_rotation_max_mb=int(log_section.get("log_rotation_max_mb", 5)),
        log_rotation_backups=int(log_section.get("log_rotation_backups", 3)),
    )
