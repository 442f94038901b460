# tests/test_storage.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasktrack.storage import FileBlobStore


def test_file_store_write_read_and_overwrite(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "tasks.json"
    store = FileBlobStore(path)
    assert not store.exists()

    store.write_text("[1]")
    assert store.exists()
    assert store.read_text() == "[1]"

    store.write_text("[]")
    assert path.read_text(encoding="utf-8") == "[]"
    assert not path.with_name("tasks.json.tmp").exists()


def test_file_store_keeps_unicode(tmp_path: Path) -> None:
    store = FileBlobStore(tmp_path / "tasks.json")
    store.write_text('[{"title": "Купить чай ✅"}]')
    assert "Купить чай ✅" in store.read_text()
    assert str(store) == str(tmp_path / "tasks.json")


def test_file_store_failed_write_leaves_previous_contents(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = FileBlobStore(path, encoding="ascii")
    store.write_text("[]")

    with pytest.raises(UnicodeEncodeError):
        store.write_text('[{"title": "café"}]')
    assert path.read_text(encoding="ascii") == "[]"
    assert not path.with_name("tasks.json.tmp").exists()
