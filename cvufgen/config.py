"""Configuration loading for cvufgen (.cvufgen.yml plus environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

CONFIG_FILENAME = ".cvufgen.yml"
SUPPORTED_PROVIDERS = ("anthropic", "openai")


class ConfigError(RuntimeError):
    """Raised when the configuration cannot be read or is invalid."""


@dataclass
class LLMConfig:
    """Generative provider settings."""

    provider: str = "anthropic"
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = 16000
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    request_timeout: float = 120.0
    max_attempts: int = 3


@dataclass
class NotificationConfig:
    """Outbound collaborator endpoints; anything unset becomes a no-op."""

    chat_webhook_url: Optional[str] = None
    sheet_webhook_url: Optional[str] = None
    email_api_key: Optional[str] = None
    email_from: Optional[str] = None
    timeout: float = 10.0


@dataclass
class ValidationConfig:
    """Post-generation document checks."""

    strict_document: bool = False


@dataclass
class ServiceConfig:
    """Represents the settings defined in .cvufgen.yml and the environment."""

    llm: LLMConfig = field(default_factory=LLMConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    source: Optional[Path] = None


def load_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> ServiceConfig:
    """Load configuration from disk, then apply environment overrides.

    ``path`` may be a file or a directory holding ``.cvufgen.yml``. When it is
    omitted, ``CVUFGEN_CONFIG`` is consulted before the working directory. A
    missing file yields the defaults.
    """
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(path, env)

    config = ServiceConfig()
    if config_file is not None and config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{config_file.name} must contain a mapping at the root")
        config = _from_mapping(data)
        config.source = config_file

    _apply_environment(config, env)
    if config.llm.provider not in SUPPORTED_PROVIDERS:
        raise ConfigError(
            f"Unsupported LLM provider '{config.llm.provider}'. "
            f"Expected one of: {', '.join(SUPPORTED_PROVIDERS)}"
        )
    return config


def _resolve_config_path(path: Path | None, env: Mapping[str, str]) -> Optional[Path]:
    if path is None:
        env_path = env.get("CVUFGEN_CONFIG")
        path = Path(env_path) if env_path else Path.cwd()
    path = Path(path).expanduser()
    if path.is_dir():
        return (path / CONFIG_FILENAME).resolve()
    return path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _from_mapping(data: Dict[str, Any]) -> ServiceConfig:
    config = ServiceConfig()

    llm_data = _as_dict(data.get("llm"))
    llm = config.llm
    llm.provider = (_as_str(llm_data.get("provider")) or llm.provider).lower()
    llm.model = _as_str(llm_data.get("model"))
    llm.temperature = _as_float(llm_data.get("temperature"))
    llm.max_tokens = _as_int(llm_data.get("max_tokens")) or llm.max_tokens
    llm.base_url = _as_str(llm_data.get("base_url"))
    llm.api_key = _as_str(llm_data.get("api_key"))
    llm.request_timeout = _as_float(llm_data.get("request_timeout")) or llm.request_timeout
    llm.max_attempts = _as_int(llm_data.get("max_attempts")) or llm.max_attempts

    notify_data = _as_dict(data.get("notifications"))
    notifications = config.notifications
    notifications.chat_webhook_url = _as_str(notify_data.get("chat_webhook_url"))
    notifications.sheet_webhook_url = _as_str(notify_data.get("sheet_webhook_url"))
    notifications.email_api_key = _as_str(notify_data.get("email_api_key"))
    notifications.email_from = _as_str(notify_data.get("email_from"))
    notifications.timeout = _as_float(notify_data.get("timeout")) or notifications.timeout

    validation_data = _as_dict(data.get("validation"))
    strict = _as_bool(validation_data.get("strict_document"))
    config.validation.strict_document = bool(strict)
    return config


def _apply_environment(config: ServiceConfig, env: Mapping[str, str]) -> None:
    llm = config.llm
    llm.provider = (_first_env_value(env, "CVUFGEN_LLM_PROVIDER") or llm.provider).lower()
    llm.model = _first_env_value(env, "CVUFGEN_LLM_MODEL") or llm.model
    llm.base_url = _first_env_value(env, "CVUFGEN_LLM_BASE_URL") or llm.base_url
    provider_key = "OPENAI_API_KEY" if llm.provider == "openai" else "ANTHROPIC_API_KEY"
    llm.api_key = _first_env_value(env, "CVUFGEN_LLM_API_KEY", provider_key) or llm.api_key

    notifications = config.notifications
    notifications.chat_webhook_url = (
        _first_env_value(env, "SLACK_WEBHOOK_URL") or notifications.chat_webhook_url
    )
    notifications.sheet_webhook_url = (
        _first_env_value(env, "GOOGLE_SHEET_WEBHOOK") or notifications.sheet_webhook_url
    )
    notifications.email_api_key = (
        _first_env_value(env, "CVUFGEN_EMAIL_API_KEY", "SENDGRID_API_KEY")
        or notifications.email_api_key
    )
    notifications.email_from = _first_env_value(env, "CVUFGEN_EMAIL_FROM") or notifications.email_from


def _first_env_value(env: Mapping[str, str], *keys: str) -> Optional[str]:
    for key in keys:
        value = env.get(key)
        if value and value.strip():
            return value.strip()
    return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    return str(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "LLMConfig",
    "NotificationConfig",
    "SUPPORTED_PROVIDERS",
    "ServiceConfig",
    "ValidationConfig",
    "load_config",
]
