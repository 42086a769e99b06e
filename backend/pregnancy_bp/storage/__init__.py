from .blob_store import BlobStore, MemoryBlobStore, SqlBlobStore
from .reading_store import ReadingStore, READINGS_KEY
from .profile_store import ProfileStore, PROFILE_KEY
