"""Blob storage backends.

A backend only moves bytes. It knows nothing about owners or access codes;
the registry decides who may touch which location.
"""

import logging
import secrets
import time
from pathlib import Path
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from werkzeug.utils import secure_filename

from fileshare.core.config import Settings
from fileshare.core.exceptions import StorageError

logger = logging.getLogger(__name__)


def make_blob_name(suggested_name: str) -> str:
    """``<epoch-ms>-<random>-<sanitized name>``; never contains a path separator."""
    safe = secure_filename(suggested_name) or "file"
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}-{safe}"


class BlobStorage(Protocol):
    def put(self, content: bytes, suggested_name: str, content_type: str | None = None) -> str: ...

    def get(self, location: str) -> bytes: ...

    def delete(self, location: str) -> None: ...


class LocalBlobStorage:
    """Stores blobs as files under a single root directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, location: str) -> Path:
        path = (self.root / location).resolve()
        if not path.is_relative_to(self.root):
            raise StorageError("resolve", location)
        return path

    def put(self, content: bytes, suggested_name: str, content_type: str | None = None) -> str:
        location = make_blob_name(suggested_name)
        try:
            with open(self.root / location, "xb") as fh:
                fh.write(content)
        except OSError as e:
            logger.exception("Failed to write blob: %s", location)
            raise StorageError("put", location) from e
        return location

    def get(self, location: str) -> bytes:
        path = self._path(location)
        try:
            return path.read_bytes()
        except OSError as e:
            logger.exception("Failed to read blob: %s", location)
            raise StorageError("get", location) from e

    def delete(self, location: str) -> None:
        path = self._path(location)
        try:
            path.unlink()
        except OSError as e:
            raise StorageError("delete", location) from e


class S3BlobStorage:
    """Stores blobs as objects in one S3 bucket."""

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    def put(self, content: bytes, suggested_name: str, content_type: str | None = None) -> str:
        key = make_blob_name(suggested_name)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("Failed to upload blob to S3: %s", key)
            raise StorageError("put", key) from e
        return key

    def get(self, location: str) -> bytes:
        try:
            obj = self.client.get_object(Bucket=self.bucket, Key=location)
            return obj["Body"].read()
        except (BotoCoreError, ClientError) as e:
            logger.exception("Failed to fetch blob from S3: %s", location)
            raise StorageError("get", location) from e

    def delete(self, location: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=location)
        except (BotoCoreError, ClientError) as e:
            raise StorageError("delete", location) from e


def build_blob_storage(settings: Settings) -> BlobStorage:
    if settings.storage_backend == "s3":
        if not settings.aws_s3_bucket_name:
            raise ValueError("AWS_S3_BUCKET_NAME is required for the s3 storage backend")
        s3 = boto3.client(
            "s3",
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region,
        )
        return S3BlobStorage(s3, settings.aws_s3_bucket_name)
    return LocalBlobStorage(settings.storage_dir)
