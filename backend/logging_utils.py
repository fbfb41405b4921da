import logging
import os


LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging() -> None:
    """Configure logging consistently for Lambda and the local dev server."""
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    root = logging.getLogger()

    level = logging.getLevelName(log_level)
    root.setLevel(level if isinstance(level, int) else logging.INFO)

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
