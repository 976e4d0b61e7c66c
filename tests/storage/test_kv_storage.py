import pytest

from physiotrack.storage.connection import StorageConfig, open_storage
from physiotrack.storage.kv import FileStorage, InMemoryStorage


def test_file_storage_round_trip_and_missing_key(tmp_path):
    storage = FileStorage(tmp_path / "data")

    assert storage.get_item("physiotrack_db") is None

    storage.set_item("physiotrack_db", '{"a": 1}')
    assert storage.get_item("physiotrack_db") == '{"a": 1}'
    assert (tmp_path / "data" / "physiotrack_db.json").exists()


def test_file_storage_overwrite_leaves_no_temp_files(tmp_path):
    storage = FileStorage(tmp_path)
    storage.set_item("k", "one")
    storage.set_item("k", "two")

    assert storage.get_item("k") == "two"
    assert [p.name for p in tmp_path.iterdir()] == ["k.json"]


def test_file_storage_remove_is_idempotent(tmp_path):
    storage = FileStorage(tmp_path)
    storage.set_item("k", "v")

    storage.remove_item("k")
    storage.remove_item("k")

    assert storage.get_item("k") is None


def test_file_storage_rejects_path_like_keys(tmp_path):
    with pytest.raises(ValueError):
        FileStorage(tmp_path).set_item("../escape", "x")


def test_open_storage_selects_backend(tmp_path):
    assert isinstance(open_storage(StorageConfig(backend="memory")), InMemoryStorage)
    assert isinstance(open_storage(StorageConfig(backend="file", directory=str(tmp_path))), FileStorage)

    with pytest.raises(ValueError):
        open_storage(StorageConfig(backend="redis"))
