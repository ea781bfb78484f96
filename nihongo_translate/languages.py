from __future__ import annotations

from dataclasses import dataclass
from typing import Final

DEFAULT_SOURCE_LANG: Final[str] = "ja"
DEFAULT_TARGET_LANG: Final[str] = "en"
FALLBACK_SPEECH_LOCALE: Final[str] = "en-US"


@dataclass(frozen=True, slots=True)
class Language:
    code: str
    name: str
    speech_locale: str


SUPPORTED_LANGUAGES: Final[tuple[Language, ...]] = (
    Language("ja", "Japanese", "ja-JP"),
    Language("en", "English", "en-US"),
    Language("es", "Spanish", "es-ES"),
    Language("de", "German", "de-DE"),
    Language("it", "Italian", "it-IT"),
    Language("pt", "Portuguese", "pt-PT"),
    Language("ru", "Russian", "ru-RU"),
    Language("zh", "Chinese", "zh-CN"),
    Language("ko", "Korean", "ko-KR"),
    Language("hi", "Hindi", "hi-IN"),
    Language("th", "Thai", "th-TH"),
    Language("vi", "Vietnamese", "vi-VN"),
    Language("nl", "Dutch", "nl-NL"),
    Language("sv", "Swedish", "sv-SE"),
)

_BY_CODE: Final[dict[str, Language]] = {
    language.code: language for language in SUPPORTED_LANGUAGES
}


def is_supported(code: object) -> bool:
    return isinstance(code, str) and code in _BY_CODE


def get_language(code: str) -> Language | None:
    return _BY_CODE.get(code)


def speech_locale(code: str) -> str:
    language = _BY_CODE.get(code)
    if language is None:
        return FALLBACK_SPEECH_LOCALE
    return language.speech_locale


def target_languages(exclude_source: str | None = None) -> list[Language]:
    """Languages offered as targets, optionally without the current source."""
    return [
        language for language in SUPPORTED_LANGUAGES if language.code != exclude_source
    ]


def swap(source_lang: str, target_lang: str) -> tuple[str, str]:
    return target_lang, source_lang
