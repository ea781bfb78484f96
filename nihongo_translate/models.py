from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class TextLimit(Enum):
    MAX_CHARS = 5000


class RateLimit(Enum):
    MAX_REQUESTS = 10
    WINDOW_MS = 60_000


class RetryPolicy(Enum):
    MAX_RETRIES = 3
    RETRY_DELAY_SECONDS = 1.0


class RequestTimeout(Enum):
    SECONDS = 10.0


class ErrorKind(Enum):
    INVALID_INPUT = "invalid_input"
    RATE_LIMITED = "rate_limited"
    UNSUPPORTED_LANGUAGE = "unsupported_language"
    NETWORK_FAILURE = "network_failure"
    PROTOCOL_FAILURE = "protocol_failure"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class TranslationRequest:
    text: str
    source_lang: str
    target_lang: str


@dataclass(frozen=True, slots=True)
class TranslationSuccess:
    translation: str


@dataclass(frozen=True, slots=True)
class TranslationFailure:
    kind: ErrorKind
    message: str
    reset_time_ms: int | None = None


TranslationResult: TypeAlias = TranslationSuccess | TranslationFailure


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Result of sanitizing raw input.

    An invalid outcome always carries an error and an empty sanitized text.
    """

    is_valid: bool
    sanitized_text: str
    error: str | None = None

    @classmethod
    def valid(cls, sanitized_text: str) -> ValidationOutcome:
        return cls(is_valid=True, sanitized_text=sanitized_text)

    @classmethod
    def invalid(cls, error: str) -> ValidationOutcome:
        return cls(is_valid=False, sanitized_text="", error=error)


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    allowed: bool
    reset_time_ms: int | None = None
