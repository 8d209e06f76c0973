"""Shared fixtures for fileshare tests."""

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from fileshare.core.config import Settings
from fileshare.core.security import TokenIssuer
from fileshare.main import create_app
from fileshare.models.database import init_db, make_engine, make_session_factory
from fileshare.services.credentials import CredentialStore
from fileshare.services.registry import FileRegistry
from fileshare.services.storage import LocalBlobStorage

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"
FAST_HASH = "pbkdf2:sha256:1000"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway sqlite file and upload dir."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_SECRET,
        password_hash_method=FAST_HASH,
        storage_backend="local",
        storage_dir=str(tmp_path / "uploads"),
    )


@pytest.fixture
def engine(settings):
    engine = make_engine(settings.database_url)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(settings):
    return LocalBlobStorage(settings.storage_dir)


@pytest.fixture
def credentials(db):
    return CredentialStore(db, hash_method=FAST_HASH)


@pytest.fixture
def registry(db, storage):
    return FileRegistry(db, storage)


@pytest.fixture
def issuer():
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def user_id(credentials):
    return credentials.register("alice", "p@ss1")


@pytest.fixture
def other_user_id(credentials):
    return credentials.register("bob", "hunter2")


@pytest.fixture
def client(settings):
    """TestClient with lifespan started (engine, storage)."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def mock_s3():
    """Mock S3 with a fileshare bucket.

    Yields:
        boto3 S3 client.
    """
    with mock_aws():
        s3 = boto3.client("s3", region_name="us-east-1")
        s3.create_bucket(Bucket="fileshare")
        yield s3
