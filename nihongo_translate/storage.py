from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Protocol

from nihongo_translate.errors import StorageError


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


def _default_items() -> dict[str, str]:
    return {}


@dataclass(slots=True)
class MemoryStorage:
    _items: dict[str, str] = field(default_factory=_default_items)

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value


@dataclass(slots=True)
class JsonFileStorage:
    """String values kept in a single JSON object file.

    The whole file is rewritten on every ``set``; there is no locking, so two
    processes sharing one path can lose each other's writes.
    """

    path: Path

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        if value is None or isinstance(value, str):
            return value
        raise StorageError(f"Stored value for {key!r} is not a string")

    def set(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(items, ensure_ascii=True, indent=2), encoding="utf-8"
            )
        except OSError as exc:
            raise StorageError(f"Failed to write {self.path}") from exc

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to read {self.path}") from exc
        if not isinstance(payload, dict):
            raise StorageError(f"Unexpected storage layout in {self.path}")
        return payload
