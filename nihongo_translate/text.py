from __future__ import annotations

import re

from nihongo_translate.models import TextLimit, ValidationOutcome

INVALID_INPUT_ERROR = "Invalid input provided"

# Line-oriented like the browser regexes: `.` does not cross newlines, so a
# script block split over several lines only loses its tags.
_SCRIPT_BLOCK = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE)
_MARKUP_TAG = re.compile(r"<[^>]*>")
_JAVASCRIPT_URI = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE | re.ASCII)


def validate_and_sanitize(text: object) -> ValidationOutcome:
    if not isinstance(text, str) or not text:
        return ValidationOutcome.invalid(INVALID_INPUT_ERROR)
    max_chars = TextLimit.MAX_CHARS.value
    if len(text) > max_chars:
        return ValidationOutcome.invalid(
            f"Text length exceeds maximum of {max_chars} characters"
        )
    return ValidationOutcome.valid(sanitize(text))


def sanitize(value: str) -> str:
    stripped = _SCRIPT_BLOCK.sub("", value)
    stripped = _MARKUP_TAG.sub("", stripped)
    stripped = _JAVASCRIPT_URI.sub("", stripped)
    stripped = _EVENT_HANDLER.sub("", stripped)
    return stripped.strip()
