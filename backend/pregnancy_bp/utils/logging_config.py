"""
Structured event logging.

Operational events (reading recorded, profile saved, export generated) are
emitted as JSON through structlog. Events carry identifiers and counts only,
never reading values or profile text.
"""
import os
import logging
import structlog
from flask import g, has_request_context


def setup_logging(app):
    """Configure structlog JSON output and the optional event log file."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = logging.DEBUG if app.debug else logging.INFO
    events_logger = logging.getLogger('events')
    events_logger.setLevel(level)

    log_file = os.getenv('LOG_FILE')
    if log_file and not app.testing:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter('%(message)s'))
        events_logger.addHandler(file_handler)

    app.config['EVENT_LOGGER'] = structlog.get_logger('events')


def get_event_logger():
    """Get the event logger instance."""
    from flask import current_app
    return current_app.config.get('EVENT_LOGGER', structlog.get_logger('events'))


def log_event(action: str, resource_type: str, resource_id: str = None,
              details: dict = None, user_id: str = None):
    """
    Emit one structured event.

    Args:
        action: What happened (CREATE, DELETE, CLEAR, EXPORT, ...)
        resource_type: reading, profile, export
        resource_id: ID of the specific resource (optional)
        details: Extra non-PHI context such as counts (optional)
        user_id: Identity subject (defaults to g.user_id)
    """
    logger = get_event_logger()

    if user_id is None:
        user_id = getattr(g, 'user_id', 'anonymous') if has_request_context() else 'system'

    logger.info(
        "tracker_event",
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        user_id=user_id,
        details=details or {},
    )
