import mongomock
import mongomock.gridfs
import pytest
from pymongo.errors import AutoReconnect

from eventgo.core.exceptions import NotFoundError, StorageError
from eventgo.services import storage_service
from eventgo.services.storage_service import GridFSStorage

mongomock.gridfs.enable_gridfs_integration()


@pytest.fixture()
def gridfs_storage():
    return GridFSStorage(db=mongomock.MongoClient().eventgo_storage)


def test_upload_open_and_owner(gridfs_storage):
    path = gridfs_storage.upload("media", "events/a.png", b"png-bytes", "image/png", owner_id="u1")
    assert path == "events/a.png"

    assert gridfs_storage.exists("media", "events/a.png")
    assert gridfs_storage.open("media", "events/a.png") == (b"png-bytes", "image/png")
    assert gridfs_storage.owner_of("media", "events/a.png") == "u1"


def test_upload_refuses_to_overwrite(gridfs_storage):
    gridfs_storage.upload("media", "a.png", b"first", "image/png", owner_id="u1")
    with pytest.raises(StorageError):
        gridfs_storage.upload("media", "a.png", b"second", "image/png", owner_id="u2")
    assert gridfs_storage.open("media", "a.png")[0] == b"first"


def test_missing_objects(gridfs_storage):
    assert not gridfs_storage.exists("media", "nope.png")
    with pytest.raises(NotFoundError):
        gridfs_storage.open("media", "nope.png")
    with pytest.raises(NotFoundError):
        gridfs_storage.owner_of("media", "nope.png")


def test_buckets_are_separate(gridfs_storage):
    gridfs_storage.upload("avatars", "u1/me.jpg", b"jpg", "image/jpeg", owner_id="u1")
    assert gridfs_storage.exists("avatars", "u1/me.jpg")
    assert not gridfs_storage.exists("media", "u1/me.jpg")

    with pytest.raises(NotFoundError):
        gridfs_storage.upload("secrets", "x.png", b"x", "image/png", owner_id="u1")


def test_remove_counts_and_skips_missing(gridfs_storage):
    gridfs_storage.upload("media", "a.png", b"a", "image/png", owner_id="u1")
    gridfs_storage.upload("media", "b.png", b"b", "image/png", owner_id="u1")

    assert gridfs_storage.remove("media", ["a.png", "ghost.png"]) == 1
    assert not gridfs_storage.exists("media", "a.png")
    assert gridfs_storage.exists("media", "b.png")
    assert gridfs_storage.remove("media", []) == 0


def test_driver_errors_become_storage_errors(monkeypatch):
    class Unreachable:
        def find(self, *args, **kwargs):
            raise AutoReconnect("connection reset")

    monkeypatch.setattr(storage_service, "get_gridfs_bucket", lambda name, db=None: Unreachable())
    storage = GridFSStorage()
    with pytest.raises(StorageError):
        storage.remove("avatars", ["u1/me.jpg"])
    with pytest.raises(StorageError):
        storage.exists("media", "a.png")
