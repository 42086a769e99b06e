"""
Ordered reading collection persisted as a single blob.
"""
import json
import logging

from pregnancy_bp.models.reading import Reading

logger = logging.getLogger(__name__)

READINGS_KEY = 'bloodPressureReadings'


class ReadingStore:
    """
    Newest-first list of readings.

    The whole collection is written back to the blob store after every
    mutation; there is no batching. A missing or unreadable blob loads as an
    empty collection.
    """

    def __init__(self, blob_store, key: str = READINGS_KEY):
        self.blob_store = blob_store
        self.key = key
        self._readings = []
        self._loaded = False

    def load(self):
        raw = self.blob_store.get(self.key)
        self._readings = self._decode(raw) if raw else []
        self._loaded = True
        return self.all()

    def all(self):
        self._ensure_loaded()
        return list(self._readings)

    def append(self, reading: Reading) -> Reading:
        """Insert at the front (newest first) and persist."""
        self._ensure_loaded()
        self._readings.insert(0, reading)
        self._persist()
        return reading

    def remove(self, reading_id) -> bool:
        """Delete the reading with this id. Unknown ids are a no-op (no write)."""
        self._ensure_loaded()
        for index, reading in enumerate(self._readings):
            if reading.id == reading_id:
                del self._readings[index]
                self._persist()
                return True
        return False

    def clear(self):
        self._readings = []
        self._loaded = True
        self.blob_store.clear(self.key)

    def __len__(self):
        self._ensure_loaded()
        return len(self._readings)

    def _ensure_loaded(self):
        if not self._loaded:
            self.load()

    def _persist(self):
        payload = json.dumps([r.to_dict() for r in self._readings])
        self.blob_store.set(self.key, payload)

    def _decode(self, raw):
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError(f'expected a list, got {type(items).__name__}')
            return [Reading.from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding unreadable {self.key!r} blob, starting empty: {e}")
            return []
