"""Tests for blob storage backends."""

import pytest

from fileshare.core.config import Settings
from fileshare.core.exceptions import StorageError
from fileshare.services.storage import (
    LocalBlobStorage,
    S3BlobStorage,
    build_blob_storage,
    make_blob_name,
)


def test_blob_name_is_sanitized():
    name = make_blob_name("../../etc/passwd")

    assert "/" not in name
    assert name.endswith("etc_passwd")


def test_blob_name_fallback_for_empty_name():
    assert make_blob_name("..").endswith("-file")


def test_local_put_get_delete(tmp_path):
    storage = LocalBlobStorage(tmp_path / "uploads")

    location = storage.put(b"payload", "a.txt")
    assert storage.get(location) == b"payload"

    storage.delete(location)
    assert not (storage.root / location).exists()


def test_local_same_name_twice_gets_distinct_locations(tmp_path):
    storage = LocalBlobStorage(tmp_path)

    first = storage.put(b"1", "a.txt")
    second = storage.put(b"2", "a.txt")

    assert first != second
    assert storage.get(first) == b"1"
    assert storage.get(second) == b"2"


def test_local_get_missing(tmp_path):
    storage = LocalBlobStorage(tmp_path)

    with pytest.raises(StorageError):
        storage.get("nope")


def test_local_delete_missing(tmp_path):
    storage = LocalBlobStorage(tmp_path)

    with pytest.raises(StorageError):
        storage.delete("nope")


def test_local_rejects_locations_outside_root(tmp_path):
    (tmp_path / "outside.txt").write_bytes(b"x")
    storage = LocalBlobStorage(tmp_path / "uploads")

    with pytest.raises(StorageError):
        storage.get("../outside.txt")
    with pytest.raises(StorageError):
        storage.delete("../outside.txt")
    assert (tmp_path / "outside.txt").exists()


def test_s3_put_get_delete(mock_s3):
    storage = S3BlobStorage(mock_s3, "fileshare")

    key = storage.put(b"payload", "a.txt", "text/plain")
    assert storage.get(key) == b"payload"
    assert mock_s3.head_object(Bucket="fileshare", Key=key)["ContentType"] == "text/plain"

    storage.delete(key)
    listing = mock_s3.list_objects_v2(Bucket="fileshare")
    assert listing.get("KeyCount", 0) == 0


def test_s3_get_missing(mock_s3):
    storage = S3BlobStorage(mock_s3, "fileshare")

    with pytest.raises(StorageError):
        storage.get("nope")


def test_s3_put_to_missing_bucket(mock_s3):
    storage = S3BlobStorage(mock_s3, "no-such-bucket")

    with pytest.raises(StorageError):
        storage.put(b"x", "a.txt")


def test_build_local_backend(settings):
    storage = build_blob_storage(settings)

    assert isinstance(storage, LocalBlobStorage)


def test_build_s3_backend(mock_s3):
    settings = Settings(
        _env_file=None,
        jwt_secret="x",
        storage_backend="s3",
        aws_region="us-east-1",
        aws_s3_bucket_name="fileshare",
    )

    storage = build_blob_storage(settings)

    assert isinstance(storage, S3BlobStorage)
    assert storage.bucket == "fileshare"


def test_build_s3_backend_requires_bucket():
    settings = Settings(_env_file=None, jwt_secret="x", storage_backend="s3")

    with pytest.raises(ValueError):
        build_blob_storage(settings)
