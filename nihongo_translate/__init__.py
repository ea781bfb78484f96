from __future__ import annotations

from nihongo_translate.engine import Translator, translate, translate_async
from nihongo_translate.models import (
    ErrorKind,
    TranslationFailure,
    TranslationResult,
    TranslationSuccess,
)

__all__ = [
    "translate",
    "translate_async",
    "Translator",
    "TranslationResult",
    "TranslationSuccess",
    "TranslationFailure",
    "ErrorKind",
]
