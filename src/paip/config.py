"""Configuration utilities for paip."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Type

import typer
from dotenv import load_dotenv

# Load secrets from home directory first, then fall back to local lookups.
load_dotenv(Path.home() / ".env", override=False)
load_dotenv(override=False)

CONFIG_VERSION = 1
APP_NAME = "paip"
API_KEY_ENV = "PAIP_GEMINI_API_KEY"
CONFIG_PATH_ENV = "PAIP_CONFIG"
METRICS_BACKENDS = {"logging", "prometheus"}


class ConfigError(ValueError):
    """Raised when configuration values are invalid or missing."""


class UnknownPromptError(ConfigError):
    """Raised when a named prompt template is not present in the configuration."""


def _field(
    table: Mapping[str, Any],
    name: str,
    types: Tuple[Type, ...],
    *,
    section: Optional[str] = None,
    required: bool = False,
) -> Any:
    label = f"{section}.{name}" if section else name
    value = table.get(name)
    if value is None:
        if required:
            raise ConfigError(f"'{label}' is required but was not provided")
        return None
    # TOML booleans are ints to isinstance(); never accept them as numbers.
    if isinstance(value, bool) and bool not in types:
        raise ConfigError(f"'{label}' has invalid type bool")
    if not isinstance(value, types):
        raise ConfigError(f"'{label}' has invalid type {type(value).__name__}")
    return value


@dataclass(frozen=True)
class GeminiConfig:
    """Provider sub-block for Google Gemini."""

    key: str
    model: str
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    max_output_tokens: Optional[int] = None
    thinking_budget: Optional[int] = None
    thinking_level: Optional[str] = None

    @classmethod
    def from_table(cls, table: Mapping[str, Any], env: Mapping[str, str]) -> "GeminiConfig":
        section = "gemini"
        key = _field(table, "key", (str,), section=section) or ""
        env_key = env.get(API_KEY_ENV)
        if env_key is not None and env_key.strip():
            key = env_key.strip()

        temperature = _field(table, "temperature", (int, float), section=section)
        top_p = _field(table, "top_p", (int, float), section=section)
        return cls(
            key=key,
            model=_field(table, "model", (str,), section=section, required=True),
            temperature=float(temperature) if temperature is not None else None,
            top_p=float(top_p) if top_p is not None else None,
            top_k=_field(table, "top_k", (int,), section=section),
            max_output_tokens=_field(table, "max_output_tokens", (int,), section=section),
            thinking_budget=_field(table, "thinking_budget", (int,), section=section),
            thinking_level=_field(table, "thinking_level", (str,), section=section),
        )


@dataclass(frozen=True)
class MetricsConfig:
    """Where request metrics go."""

    backend: str = "logging"
    textfile: Optional[Path] = None

    @classmethod
    def from_table(cls, table: Mapping[str, Any]) -> "MetricsConfig":
        backend = (_field(table, "backend", (str,), section="metrics") or "logging").strip().lower()
        if backend not in METRICS_BACKENDS:
            raise ConfigError("metrics.backend must be 'logging' or 'prometheus'")
        textfile = _field(table, "textfile", (str,), section="metrics")
        return cls(
            backend=backend,
            textfile=Path(textfile).expanduser() if textfile else None,
        )


@dataclass(frozen=True)
class Config:
    """Parsed and version-checked paip configuration.

    ``timeout`` is in seconds.
    """

    version: int
    provider: str
    timeout: float
    gemini: Optional[GeminiConfig] = None
    prompt: Dict[str, str] = field(default_factory=dict)
    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], env: Optional[Mapping[str, str]] = None) -> "Config":
        """Build configuration from an already parsed TOML document."""
        env = os.environ if env is None else env

        version = _field(data, "version", (int,), required=True)
        ensure_version(version)

        provider = _field(data, "provider", (str,), required=True)
        timeout = _field(data, "timeout", (int, float), required=True)
        if timeout <= 0:
            raise ConfigError("'timeout' must be > 0 (seconds)")

        gemini_table = _field(data, "gemini", (dict,))
        prompts = _field(data, "prompt", (dict,)) or {}
        for name, template in prompts.items():
            if not isinstance(template, str):
                raise ConfigError(f"'prompt.{name}' must be a string")

        return cls(
            version=version,
            provider=provider,
            timeout=float(timeout),
            gemini=GeminiConfig.from_table(gemini_table, env) if gemini_table is not None else None,
            prompt=dict(prompts),
            metrics=MetricsConfig.from_table(_field(data, "metrics", (dict,)) or {}),
            log_level=(_field(data, "log_level", (str,)) or "WARNING").upper(),
        )

    @classmethod
    def load(cls, path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> "Config":
        """Read, parse and validate the configuration file."""
        path = path or default_path()
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(
                f"Failed to read configuration file at {path}. Run with --init-config to create a default."
            ) from exc
        try:
            data = tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Failed to parse configuration file at {path}: {exc}") from exc
        try:
            return cls.from_mapping(data, env)
        except ConfigError as exc:
            raise ConfigError(f"Invalid configuration file at {path}: {exc}") from exc

    def get_prompt(self, name: str) -> str:
        try:
            return self.prompt[name]
        except KeyError:
            available = ", ".join(sorted(self.prompt)) or "none"
            raise UnknownPromptError(
                f"Prompt '{name}' not found in configuration (available: {available})"
            ) from None


def ensure_version(version: int) -> None:
    if version != CONFIG_VERSION:
        raise ConfigError(
            f"Configuration file version mismatch. Expected major version {CONFIG_VERSION}, "
            f"found {version}. Please update your config file or run with --init-config "
            "to generate a new one."
        )


def default_path(env: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if env is None else env
    override = env.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path(typer.get_app_dir(APP_NAME)) / "config.toml"


def default_config_text() -> str:
    return resources.files("paip").joinpath("default_config.toml").read_text(encoding="utf-8")


def init_default(path: Optional[Path] = None) -> bool:
    """Write the default configuration unless a file already exists there.

    Returns ``True`` when a new file was written.
    """
    path = path or default_path()
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(default_config_text(), encoding="utf-8")
    return True
