from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import math
import time
from typing import Callable

from nihongo_translate.models import RateLimit, RateLimitDecision
from nihongo_translate.storage import KeyValueStorage

STORAGE_KEY = "translation_requests"
DEFAULT_WAIT_SECONDS = 60

Clock = Callable[[], int]

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(slots=True)
class RateLimiter:
    """Sliding-window limiter over timestamps kept in a key-value store.

    Fails open: when the stored window cannot be read or written, the request
    is admitted and nothing is recorded. Check-and-record is not atomic, so
    concurrent callers sharing a store may exceed the limit by one.
    """

    storage: KeyValueStorage
    max_requests: int = RateLimit.MAX_REQUESTS.value
    window_ms: int = RateLimit.WINDOW_MS.value
    clock: Clock = now_ms
    key: str = STORAGE_KEY

    def check_and_record(self) -> RateLimitDecision:
        now = self.clock()
        try:
            recent = [
                timestamp
                for timestamp in self._load()
                if now - timestamp < self.window_ms
            ]
            if len(recent) >= self.max_requests:
                return RateLimitDecision(
                    allowed=False,
                    reset_time_ms=min(recent, default=now) + self.window_ms,
                )
            recent.append(now)
            self.storage.set(self.key, json.dumps(recent))
        except Exception as exc:
            logger.error("Rate limit check failed, admitting request: %s", exc)
        return RateLimitDecision(allowed=True)

    def _load(self) -> list[int]:
        stored = self.storage.get(self.key)
        if not stored:
            return []
        payload = json.loads(stored)
        if not isinstance(payload, list):
            raise ValueError("Stored request window is not a list")
        return [
            int(item)
            for item in payload
            if isinstance(item, (int, float)) and not isinstance(item, bool)
        ]


def wait_seconds(reset_time_ms: int | None, now: int) -> int:
    if reset_time_ms is None:
        return DEFAULT_WAIT_SECONDS
    return max(1, math.ceil((reset_time_ms - now) / 1000))
