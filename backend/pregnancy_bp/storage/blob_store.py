"""
String-keyed blob storage.

The stores above this layer only need get/set/clear on opaque strings. There
are no transactional guarantees across calls: two writers to the same key
simply overwrite each other.
"""
import logging
from abc import ABC, abstractmethod

from sqlalchemy.exc import SQLAlchemyError

from pregnancy_bp import db
from pregnancy_bp.models.stored_blob import StoredBlob

logger = logging.getLogger(__name__)


class BlobStore(ABC):

    @abstractmethod
    def get(self, key: str):
        """Return the stored string, or None if nothing is stored."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def clear(self, key: str) -> None:
        ...


class MemoryBlobStore(BlobStore):
    """Dictionary-backed store (tests, scratch sessions)."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})
        self.writes = 0

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        self.writes += 1

    def clear(self, key):
        self.data.pop(key, None)
        self.writes += 1


class SqlBlobStore(BlobStore):
    """Blobs for one identity in the stored_blobs table."""

    def __init__(self, owner_id: str):
        self.owner_id = str(owner_id)

    def get(self, key):
        try:
            blob = StoredBlob.find(self.owner_id, key)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to read blob {key!r} for owner {self.owner_id}: {e}")
            return None
        return blob.value if blob else None

    def set(self, key, value):
        blob = StoredBlob.find(self.owner_id, key)
        if blob is None:
            blob = StoredBlob(owner_id=self.owner_id, key=key, value=value)
            db.session.add(blob)
        else:
            blob.value = value
        self._commit()

    def clear(self, key):
        StoredBlob.query.filter_by(owner_id=self.owner_id, key=key).delete()
        self._commit()

    def _commit(self):
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise
