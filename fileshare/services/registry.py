# fileshare/services/registry.py
import hmac
import logging

from sqlalchemy.orm import Session

from fileshare.core.exceptions import (
    InvalidCode,
    NotFound,
    StorageError,
    StorageReadFailure,
    StorageWriteFailure,
)
from fileshare.models.database import MAX_ID
from fileshare.models.file import StoredFile
from fileshare.services.access_codes import generate_access_code
from fileshare.services.storage import BlobStorage

logger = logging.getLogger(__name__)


class FileRegistry:
    """File metadata plus the ownership and access-code rules around it.

    Owner-scoped operations filter on ``owner_id`` inside the query, so a
    file that belongs to someone else looks exactly like a missing one.
    """

    def __init__(self, db: Session, storage: BlobStorage):
        self.db = db
        self.storage = storage

    def create(self, owner_id: int, display_name: str, storage_location: str, size: int = 0) -> StoredFile:
        meta = StoredFile(
            owner_id=owner_id,
            original_name=display_name,
            stored_name=storage_location,
            size=size,
            code=generate_access_code(),
        )
        self.db.add(meta)
        self.db.commit()
        self.db.refresh(meta)
        return meta

    def upload(
        self,
        owner_id: int,
        display_name: str,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFile:
        try:
            location = self.storage.put(content, display_name, content_type)
        except StorageError as e:
            raise StorageWriteFailure() from e

        try:
            meta = self.create(owner_id, display_name, location, size=len(content))
        except Exception:
            self.db.rollback()
            self._discard_blob(location)
            raise

        logger.info("Stored file id=%s for user id=%s", meta.id, owner_id)
        return meta

    def list_for_owner(self, owner_id: int) -> list[StoredFile]:
        return (
            self.db.query(StoredFile)
            .filter(StoredFile.owner_id == owner_id)
            .order_by(StoredFile.uploaded_at.desc())
            .all()
        )

    def delete(self, owner_id: int, file_id: int) -> None:
        file = self._find(file_id, StoredFile.owner_id == owner_id)
        if not file:
            raise NotFound()

        # metadata is the source of truth; a leftover blob is only logged
        self._discard_blob(file.stored_name)

        self.db.delete(file)
        self.db.commit()
        logger.info("Deleted file id=%s for user id=%s", file_id, owner_id)

    def get_by_id_for_download(self, file_id: int, code: str) -> StoredFile:
        file = self._find(file_id)
        # unknown id and wrong code are indistinguishable to the caller
        if not file or not hmac.compare_digest(file.code.encode(), str(code).encode()):
            logger.warning("Download rejected for file id=%s", file_id)
            raise InvalidCode()
        return file

    def open_for_download(self, file_id: int, code: str) -> tuple[StoredFile, bytes]:
        file = self.get_by_id_for_download(file_id, code)
        try:
            content = self.storage.get(file.stored_name)
        except StorageError as e:
            raise StorageReadFailure() from e
        return file, content

    def _find(self, file_id: int, *criteria) -> StoredFile | None:
        # ids no row can have are a plain miss, not a driver overflow
        if not -MAX_ID - 1 <= file_id <= MAX_ID:
            return None
        return self.db.query(StoredFile).filter(StoredFile.id == file_id, *criteria).first()

    def _discard_blob(self, location: str) -> None:
        try:
            self.storage.delete(location)
        except StorageError:
            logger.exception("Failed to delete blob, leaving orphan: %s", location)
