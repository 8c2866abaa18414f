"""Tests for the filesystem blob store."""

from pathlib import Path

import pytest

from manuscript.infrastructure.storage import LocalBlobStore
from manuscript.modules.common.exceptions import BlobStorageError


def test_save_and_read(tmp_path: Path):
    store = LocalBlobStore(tmp_path)

    size = store.save("notes", "a.txt", b"hello")

    assert size == 5
    assert store.read("notes", "a.txt") == b"hello"
    assert store.exists("notes", "a.txt")
    assert (tmp_path / "notes" / "a.txt").is_file()


def test_delete(tmp_path: Path):
    store = LocalBlobStore(tmp_path)
    store.save("notes", "a.txt", b"hello")

    assert store.delete("notes", "a.txt") is True
    assert store.delete("notes", "a.txt") is False
    assert not store.exists("notes", "a.txt")


def test_read_missing(tmp_path: Path):
    with pytest.raises(BlobStorageError):
        LocalBlobStore(tmp_path).read("notes", "missing.txt")


@pytest.mark.parametrize(
    "category, filename",
    [("notes", "../escape.txt"), ("..", "a.txt"), ("notes", ""), ("a/b", "c.txt"), ("notes", "a\\b.txt")],
)
def test_rejects_unsafe_keys(tmp_path: Path, category: str, filename: str):
    with pytest.raises(BlobStorageError):
        LocalBlobStore(tmp_path).save(category, filename, b"x")
