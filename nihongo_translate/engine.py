from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging

import aiohttp

from nihongo_translate.config import AppConfig, load_config
from nihongo_translate.errors import failure_from_exception
from nihongo_translate.http import AsyncFetcher, build_request_executor
from nihongo_translate.languages import (
    DEFAULT_SOURCE_LANG,
    DEFAULT_TARGET_LANG,
    is_supported,
)
from nihongo_translate.models import (
    ErrorKind,
    TranslationFailure,
    TranslationRequest,
    TranslationResult,
    TranslationSuccess,
)
from nihongo_translate.providers.mymemory import (
    MYMEMORY_BASE_URL,
    build_mymemory_url,
    parse_mymemory_response,
)
from nihongo_translate.rate_limit import RateLimiter, wait_seconds
from nihongo_translate.storage import MemoryStorage
from nihongo_translate.text import validate_and_sanitize

DEFAULT_STORAGE = MemoryStorage()

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Translator:
    """Runs one request through rate limit, validation, language and API checks.

    Every outcome, including unexpected exceptions, comes back as a
    ``TranslationResult``; only caller cancellation escapes.
    """

    fetcher: AsyncFetcher
    rate_limiter: RateLimiter
    base_url: str = MYMEMORY_BASE_URL

    async def translate(
        self, text: str, source_lang: str, target_lang: str
    ) -> TranslationResult:
        try:
            return await self._translate(
                TranslationRequest(
                    text=text, source_lang=source_lang, target_lang=target_lang
                )
            )
        except Exception as exc:
            logger.exception("Translation error")
            return failure_from_exception(exc)

    async def _translate(self, request: TranslationRequest) -> TranslationResult:
        decision = self.rate_limiter.check_and_record()
        if not decision.allowed:
            seconds = wait_seconds(decision.reset_time_ms, self.rate_limiter.clock())
            return TranslationFailure(
                kind=ErrorKind.RATE_LIMITED,
                message=(
                    f"Rate limit exceeded. Please wait {seconds} seconds "
                    "before trying again."
                ),
                reset_time_ms=decision.reset_time_ms,
            )

        validation = validate_and_sanitize(request.text)
        if not validation.is_valid:
            return TranslationFailure(
                kind=ErrorKind.INVALID_INPUT,
                message=validation.error or "Invalid input",
            )

        if not is_supported(request.target_lang):
            return TranslationFailure(
                kind=ErrorKind.UNSUPPORTED_LANGUAGE,
                message="Unsupported target language",
            )
        if not is_supported(request.source_lang):
            return TranslationFailure(
                kind=ErrorKind.UNSUPPORTED_LANGUAGE,
                message="Unsupported source language",
            )

        url = build_mymemory_url(
            self.base_url,
            validation.sanitized_text,
            request.source_lang,
            request.target_lang,
        )
        payload = await self.fetcher(url)
        return TranslationSuccess(translation=parse_mymemory_response(payload))


def translate(
    text: str,
    source_lang: str = DEFAULT_SOURCE_LANG,
    target_lang: str = DEFAULT_TARGET_LANG,
) -> TranslationResult:
    return asyncio.run(translate_async(text, source_lang, target_lang))


async def translate_async(
    text: str,
    source_lang: str = DEFAULT_SOURCE_LANG,
    target_lang: str = DEFAULT_TARGET_LANG,
    *,
    fetcher: AsyncFetcher | None = None,
    rate_limiter: RateLimiter | None = None,
    config: AppConfig | None = None,
) -> TranslationResult:
    app_config = config or load_config()
    limiter = rate_limiter or RateLimiter(
        storage=DEFAULT_STORAGE,
        max_requests=app_config.rate_limit.max_requests,
        window_ms=app_config.rate_limit.window_ms,
    )
    if fetcher is not None:
        translator = Translator(
            fetcher=fetcher, rate_limiter=limiter, base_url=app_config.api.base_url
        )
        return await translator.translate(text, source_lang, target_lang)
    async with aiohttp.ClientSession() as session:
        executor = build_request_executor(
            session,
            timeout=app_config.api.timeout_seconds,
            max_retries=app_config.api.max_retries,
            retry_delay=app_config.api.retry_delay_seconds,
        )
        translator = Translator(
            fetcher=executor, rate_limiter=limiter, base_url=app_config.api.base_url
        )
        return await translator.translate(text, source_lang, target_lang)
