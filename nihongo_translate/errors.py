from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import aiohttp

from nihongo_translate.models import ErrorKind, TranslationFailure


class TranslatorError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class FetchError(TranslatorError):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class HttpStatusError(FetchError):
    status: int = 0


@dataclass(frozen=True, slots=True)
class ProtocolError(TranslatorError):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class StorageError(TranslatorError):
    message: str

    def __str__(self) -> str:
        return self.message


class SafeMessage(Enum):
    NETWORK = (
        "Unable to connect to translation service. "
        "Please check your internet connection."
    )
    RATE_LIMIT = "Too many requests. Please wait a moment before trying again."
    VALIDATION = "Please check your input and try again."
    GENERAL = "An unexpected error occurred. Please try again."


_SAFE_MESSAGES: dict[ErrorKind, SafeMessage] = {
    ErrorKind.NETWORK_FAILURE: SafeMessage.NETWORK,
    ErrorKind.RATE_LIMITED: SafeMessage.RATE_LIMIT,
    ErrorKind.INVALID_INPUT: SafeMessage.VALIDATION,
    ErrorKind.UNSUPPORTED_LANGUAGE: SafeMessage.VALIDATION,
    ErrorKind.PROTOCOL_FAILURE: SafeMessage.GENERAL,
    ErrorKind.UNKNOWN: SafeMessage.GENERAL,
}


def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, (FetchError, TimeoutError, aiohttp.ClientError)):
        return ErrorKind.NETWORK_FAILURE
    if isinstance(exc, ProtocolError):
        return ErrorKind.PROTOCOL_FAILURE
    return ErrorKind.UNKNOWN


def safe_message(kind: ErrorKind) -> str:
    return _SAFE_MESSAGES[kind].value


def failure_from_exception(exc: BaseException) -> TranslationFailure:
    kind = classify_error(exc)
    return TranslationFailure(kind=kind, message=safe_message(kind))
