from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Awaitable, Callable

import aiohttp

from nihongo_translate.errors import FetchError, HttpStatusError
from nihongo_translate.models import RequestTimeout, RetryPolicy

DEFAULT_TIMEOUT_SECONDS = RequestTimeout.SECONDS.value
DEFAULT_HEADERS: Mapping[str, str] = {"Content-Type": "application/json"}

AsyncFetcher = Callable[[str], Awaitable[str]]
Sleep = Callable[[float], Awaitable[None]]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RequestOptions:
    headers: Mapping[str, str] | None = None

    def merged_headers(self) -> dict[str, str]:
        merged = dict(DEFAULT_HEADERS)
        if self.headers:
            merged.update(self.headers)
        return merged


Attempt = Callable[[str, RequestOptions], Awaitable[str]]


async def fetch_text_async(
    url: str,
    session: aiohttp.ClientSession,
    options: RequestOptions | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """Run a single GET and return the body; the timeout aborts the request."""
    effective = options or RequestOptions()
    timeout_config = aiohttp.ClientTimeout(total=timeout)
    try:
        async with session.get(
            url,
            headers=effective.merged_headers(),
            timeout=timeout_config,
        ) as response:
            if not 200 <= response.status < 300:
                raise HttpStatusError(
                    f"HTTP {response.status}: {response.reason}", response.status
                )
            return await response.text(errors="replace")
    except FetchError:
        raise
    except Exception as exc:
        logger.debug("Fetch failed for %s: %s", url, exc)
        raise FetchError(f"Failed to fetch {url}") from exc


@dataclass(slots=True)
class RequestExecutor:
    attempt: Attempt
    max_retries: int = RetryPolicy.MAX_RETRIES.value
    retry_delay: float = RetryPolicy.RETRY_DELAY_SECONDS.value
    sleep: Sleep = asyncio.sleep

    async def execute(self, url: str, options: RequestOptions | None = None) -> str:
        effective = options or RequestOptions()
        attempt_index = 0
        while True:
            try:
                return await self.attempt(url, effective)
            except Exception as exc:
                if attempt_index >= self.max_retries:
                    logger.warning(
                        "Giving up on %s after %d attempts: %s",
                        url,
                        attempt_index + 1,
                        exc,
                    )
                    raise
                delay = self.retry_delay * 2**attempt_index
                logger.debug(
                    "Attempt %d for %s failed (%s), retrying in %.1fs",
                    attempt_index + 1,
                    url,
                    exc,
                    delay,
                )
            await self.sleep(delay)
            attempt_index += 1

    async def __call__(self, url: str) -> str:
        return await self.execute(url)


def build_request_executor(
    session: aiohttp.ClientSession,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    max_retries: int = RetryPolicy.MAX_RETRIES.value,
    retry_delay: float = RetryPolicy.RETRY_DELAY_SECONDS.value,
) -> RequestExecutor:
    async def attempt(url: str, options: RequestOptions) -> str:
        return await fetch_text_async(url, session, options, timeout)

    return RequestExecutor(
        attempt=attempt, max_retries=max_retries, retry_delay=retry_delay
    )
