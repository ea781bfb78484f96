from __future__ import annotations

import json
from typing import TypeAlias
from urllib.parse import quote

from nihongo_translate.errors import ProtocolError

MYMEMORY_BASE_URL = "https://api.mymemory.translated.net"
SUCCESS_STATUS = 200

JsonValue: TypeAlias = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)


def build_mymemory_url(
    base_url: str, text: str, source_lang: str, target_lang: str
) -> str:
    encoded = quote(text, safe="!*'()")
    params = f"q={encoded}&langpair={source_lang}|{target_lang}"
    return f"{base_url.rstrip('/')}/get?{params}"


def parse_mymemory_response(payload: str) -> str:
    try:
        raw_payload: JsonValue = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ProtocolError("Translation service returned invalid JSON") from exc
    raw_data = _as_dict(raw_payload)
    if raw_data is None:
        raise ProtocolError("Translation service returned invalid response")
    if _get_status(raw_data.get("responseStatus")) != SUCCESS_STATUS:
        raise ProtocolError("Translation service returned invalid response")
    response_data = _as_dict(raw_data.get("responseData"))
    translated = response_data.get("translatedText") if response_data else None
    if not isinstance(translated, str) or not translated:
        raise ProtocolError("Translation service returned invalid response")
    return translated


def _get_status(value: JsonValue) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def _as_dict(value: JsonValue) -> dict[str, JsonValue] | None:
    if isinstance(value, dict):
        return value
    return None
