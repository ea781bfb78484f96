from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path
from typing import Final, TypeAlias

from nihongo_translate.languages import DEFAULT_SOURCE_LANG, DEFAULT_TARGET_LANG
from nihongo_translate.models import RateLimit, RequestTimeout, RetryPolicy
from nihongo_translate.providers.mymemory import MYMEMORY_BASE_URL

CONFIG_DIR_NAME: Final[str] = "nihongo_translate"
CONFIG_FILE_NAME: Final[str] = "config.json"
STATE_FILE_NAME: Final[str] = "storage.json"
API_URL_ENV: Final[str] = "NIHONGO_TRANSLATE_API_URL"
RESET_ENV: Final[str] = "NIHONGO_TRANSLATE_RESET"

JsonValue: TypeAlias = (
    str | int | float | bool | None | list["JsonValue"] | dict[str, "JsonValue"]
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LanguageConfig:
    source: str
    target: str


@dataclass(frozen=True, slots=True)
class ApiConfig:
    base_url: str
    timeout_seconds: float
    max_retries: int
    retry_delay_seconds: float


@dataclass(frozen=True, slots=True)
class RateLimitConfig:
    max_requests: int
    window_ms: int


@dataclass(frozen=True, slots=True)
class AppConfig:
    languages: LanguageConfig
    api: ApiConfig
    rate_limit: RateLimitConfig


def config_dir() -> Path:
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return base / CONFIG_DIR_NAME


def config_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


def state_path() -> Path:
    return config_dir() / STATE_FILE_NAME


def load_config() -> AppConfig:
    if os.environ.get(RESET_ENV, "").strip() == "1":
        return _apply_env_overrides(default_config())
    path = config_path()
    if not path.exists():
        return _apply_env_overrides(default_config())
    try:
        raw_data = path.read_text(encoding="utf-8")
        payload: JsonValue = json.loads(raw_data)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return _apply_env_overrides(default_config())
    return _apply_env_overrides(_parse_config(payload))


def default_config() -> AppConfig:
    return AppConfig(
        languages=LanguageConfig(
            source=DEFAULT_SOURCE_LANG,
            target=DEFAULT_TARGET_LANG,
        ),
        api=ApiConfig(
            base_url=MYMEMORY_BASE_URL,
            timeout_seconds=RequestTimeout.SECONDS.value,
            max_retries=RetryPolicy.MAX_RETRIES.value,
            retry_delay_seconds=RetryPolicy.RETRY_DELAY_SECONDS.value,
        ),
        rate_limit=RateLimitConfig(
            max_requests=RateLimit.MAX_REQUESTS.value,
            window_ms=RateLimit.WINDOW_MS.value,
        ),
    )


def _parse_config(payload: JsonValue) -> AppConfig:
    defaults = default_config()
    payload_dict = _get_dict(payload)
    if payload_dict is None:
        return defaults
    language_data = _get_dict(payload_dict.get("languages")) or {}
    api_data = _get_dict(payload_dict.get("api")) or {}
    limit_data = _get_dict(payload_dict.get("rate_limit")) or {}

    languages = LanguageConfig(
        source=_get_str(language_data.get("source"), defaults.languages.source),
        target=_get_str(language_data.get("target"), defaults.languages.target),
    )
    api = ApiConfig(
        base_url=_get_str(api_data.get("base_url"), defaults.api.base_url),
        timeout_seconds=_get_float(
            api_data.get("timeout_seconds"), defaults.api.timeout_seconds
        ),
        max_retries=_get_int(api_data.get("max_retries"), defaults.api.max_retries),
        retry_delay_seconds=_get_float(
            api_data.get("retry_delay_seconds"), defaults.api.retry_delay_seconds
        ),
    )
    rate_limit = RateLimitConfig(
        max_requests=_get_int(
            limit_data.get("max_requests"), defaults.rate_limit.max_requests, 1
        ),
        window_ms=_get_int(
            limit_data.get("window_ms"), defaults.rate_limit.window_ms, 1
        ),
    )
    return AppConfig(languages=languages, api=api, rate_limit=rate_limit)


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    base_url = os.environ.get(API_URL_ENV, "").strip()
    if not base_url:
        return config
    api = ApiConfig(
        base_url=base_url,
        timeout_seconds=config.api.timeout_seconds,
        max_retries=config.api.max_retries,
        retry_delay_seconds=config.api.retry_delay_seconds,
    )
    return AppConfig(languages=config.languages, api=api, rate_limit=config.rate_limit)


def _get_dict(value: JsonValue | None) -> dict[str, JsonValue] | None:
    if isinstance(value, dict):
        return value
    return None


def _get_str(value: JsonValue | None, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    return default


def _get_int(value: JsonValue | None, default: int, minimum: int = 0) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= minimum:
        return value
    return default


def _get_float(value: JsonValue | None, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return float(value)
    return default
