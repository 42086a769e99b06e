from .logging_config import log_event
from .auth import generate_session_token, token_required
from .validators import validate_profile, validate_reading
