"""Local storage backend: directory setup, atomic writes, listing, path safety."""
import io
import os

import pytest

from galeria.core.config import Settings
from galeria.core.errors import DirectoryReadFailure, InvalidFilename, UploadTooLarge
from galeria.services.storage import get_storage
from galeria.services.storage.base import StorageBackend
from galeria.services.storage.local import LocalStorage, TEMP_SUFFIX


@pytest.fixture
def backend(tmp_path) -> LocalStorage:
    storage = LocalStorage(tmp_path / "images")
    storage.ensure_directory()
    return storage


def test_get_storage_returns_local_rooted_at_settings(tmp_path):
    settings = Settings(_env_file=None, storage_dir=tmp_path / "store")
    backend = get_storage(settings)
    assert isinstance(backend, StorageBackend)
    assert isinstance(backend, LocalStorage)
    assert backend.root == (tmp_path / "store").resolve()
    assert backend.root.is_absolute()


def test_settings_resolve_relative_storage_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = Settings(_env_file=None)
    assert settings.storage_dir == (tmp_path / "images").resolve()


def test_ensure_directory_creates_and_is_idempotent(tmp_path):
    storage = LocalStorage(tmp_path / "a" / "b")
    storage.ensure_directory()
    assert storage.root.is_dir()
    (storage.root / "keep.png").write_bytes(b"x")
    storage.ensure_directory()
    assert (storage.root / "keep.png").read_bytes() == b"x"


def test_ensure_directory_fails_when_path_is_a_file(tmp_path):
    target = tmp_path / "images"
    target.write_text("not a dir")
    with pytest.raises(OSError):
        LocalStorage(target).ensure_directory()


def test_write_file_persists_bytes(backend):
    path = backend.write_file("a.png", io.BytesIO(b"png-bytes"))
    assert path == backend.root / "a.png"
    assert path.read_bytes() == b"png-bytes"


def test_write_file_overwrites_existing(backend):
    backend.write_file("Logo.png", io.BytesIO(b"first"))
    backend.write_file("Logo.png", io.BytesIO(b"second"))
    assert (backend.root / "Logo.png").read_bytes() == b"second"
    assert backend.list_directory() == ["Logo.png"]


def test_write_file_too_large_leaves_nothing(backend):
    with pytest.raises(UploadTooLarge):
        backend.write_file("big.png", io.BytesIO(b"x" * 11), max_bytes=10)
    assert backend.list_directory() == []


def test_write_file_at_limit_is_accepted(backend):
    backend.write_file("ok.png", io.BytesIO(b"x" * 10), max_bytes=10)
    assert backend.exists("ok.png")


def test_write_file_failure_removes_temp_file(backend):
    class Broken(io.BytesIO):
        def read(self, *args):
            raise OSError("disk went away")

    with pytest.raises(OSError, match="disk went away"):
        backend.write_file("a.png", Broken())
    assert not any(name.endswith(TEMP_SUFFIX) for name in os.listdir(backend.root))
    assert not backend.exists("a.png")


def test_list_directory_returns_entries(backend):
    for name in ("a.png", "b.txt", "c.pdf"):
        (backend.root / name).write_bytes(b"")
    assert sorted(backend.list_directory()) == ["a.png", "b.txt", "c.pdf"]


def test_list_directory_read_failure(tmp_path):
    storage = LocalStorage(tmp_path / "missing")
    with pytest.raises(DirectoryReadFailure):
        storage.list_directory()


def test_exists(backend):
    (backend.root / "there.jpg").write_bytes(b"")
    (backend.root / "subdir").mkdir()
    assert backend.exists("there.jpg")
    assert not backend.exists("absent.jpg")
    assert not backend.exists("subdir")
    assert not backend.exists("../there.jpg")


@pytest.mark.parametrize("name", ["", ".", "..", "../x.png", "a/b.png", "a\\b.png", "x\x00.png"])
def test_path_for_rejects_non_plain_names(backend, name):
    with pytest.raises(InvalidFilename):
        backend.path_for(name)


def test_path_for_joins_root(backend):
    assert backend.path_for("Invoice_2024.pdf") == backend.root / "Invoice_2024.pdf"
