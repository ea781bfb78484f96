from __future__ import annotations

from nihongo_translate.providers.mymemory import (
    MYMEMORY_BASE_URL,
    build_mymemory_url,
    parse_mymemory_response,
)

__all__ = [
    "MYMEMORY_BASE_URL",
    "build_mymemory_url",
    "parse_mymemory_response",
]
