from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ClipboardWriter(Protocol):
    def write_text(self, text: str) -> bool: ...


def copy_text(writer: ClipboardWriter, text: str) -> bool:
    if not text:
        return False
    try:
        return writer.write_text(text)
    except Exception as exc:
        logger.warning("Copy failed: %s", exc)
        return False
