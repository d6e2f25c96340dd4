"""Tests for the content-addressed raw store."""

from __future__ import annotations

from pathlib import Path

import pytest

from picvoter.services.raw_store import AdmitResult, RawStore


@pytest.fixture
def store(tmp_path: Path) -> RawStore:
    return RawStore(tmp_path / "raws")


def test_admit_writes_canonical_path(store: RawStore) -> None:
    assert store.admit(b"bytes", "12345", "png") is AdmitResult.INSERTED
    path = store.raw_path("12345", "png")
    assert path.name == "12345.png"
    assert path.read_bytes() == b"bytes"


def test_admit_is_idempotent(store: RawStore) -> None:
    store.admit(b"bytes", "12345", "png")
    for _ in range(3):
        assert store.admit(b"bytes", "12345", "png") is AdmitResult.DUPLICATE
    assert [p.name for p in store.root.iterdir()] == ["12345.png"]


def test_duplicate_leaves_existing_bytes_untouched(store: RawStore) -> None:
    store.admit(b"original", "777", "jpg")
    store.admit(b"other", "777", "jpg")
    assert store.raw_path("777", "jpg").read_bytes() == b"original"


def test_same_hash_other_extension_is_duplicate(store: RawStore) -> None:
    store.admit(b"bytes", "42", "jpg")
    assert store.admit(b"bytes", "42", "jpeg") is AdmitResult.DUPLICATE
    assert store.find("42") == store.raw_path("42", "jpg")
    assert not store.raw_path("42", "jpeg").exists()


def test_find_missing_hash(store: RawStore) -> None:
    store.root.mkdir(parents=True)
    assert store.find("404") is None


def test_evict_removes_file(store: RawStore) -> None:
    store.admit(b"bytes", "9", "gif")
    store.evict("9", "gif")
    assert store.find("9") is None
    # Evicting twice is harmless.
    store.evict("9", "gif")


def test_write_failure_leaves_no_partial_file(store: RawStore, mocker) -> None:
    mocker.patch("picvoter.services.raw_store.os.replace", side_effect=OSError("disk full"))
    with pytest.raises(OSError):
        store.admit(b"bytes", "5", "png")
    assert list(store.root.iterdir()) == []
