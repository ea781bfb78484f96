from __future__ import annotations

from pathlib import Path

import pytest

from nihongo_translate.errors import StorageError
from nihongo_translate.storage import JsonFileStorage, MemoryStorage


def test_memory_storage_round_trip() -> None:
    storage = MemoryStorage()

    assert storage.get("key") is None
    storage.set("key", "value")
    assert storage.get("key") == "value"


def test_file_storage_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "storage.json"

    JsonFileStorage(path).set("translation_requests", "[1, 2]")
    JsonFileStorage(path).set("other", "x")

    reopened = JsonFileStorage(path)
    assert reopened.get("translation_requests") == "[1, 2]"
    assert reopened.get("other") == "x"
    assert reopened.get("missing") is None


def test_file_storage_missing_file(tmp_path: Path) -> None:
    assert JsonFileStorage(tmp_path / "absent.json").get("key") is None


@pytest.mark.parametrize("content", ["{broken", "[1, 2]"])
def test_file_storage_corrupt_file_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "storage.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(path).get("key")


def test_file_storage_non_string_value_raises(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text('{"key": [1]}', encoding="utf-8")

    with pytest.raises(StorageError):
        JsonFileStorage(path).get("key")
