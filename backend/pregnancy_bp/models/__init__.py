from .reading import Reading, POSITIONS, SYMPTOMS
from .profile import UserProfile, REMINDER_CHOICES
from .stored_blob import StoredBlob
