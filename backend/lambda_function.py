import logging

from avatar_settings import load_avatar_settings
from handlers import create_avatar_handler, create_health_handler
from logging_utils import configure_logging
from router import LambdaRouter


############################################
# In AWS Lambda the root logger may already have a handler at WARNING level
# (so logging.basicConfig will NO-OP). configure_logging adjusts the root
# logger level and adds a handler if none exists.
############################################


configure_logging()
logger = logging.getLogger(__name__)

settings = load_avatar_settings()

# =====================
# Request handlers
# =====================

handle_avatar = create_avatar_handler(logger=logger, settings=settings)
handle_health = create_health_handler(logger=logger)

router = LambdaRouter()
HANDLERS = {
    "avatar": handle_avatar,
    "health": handle_health,
}


def lambda_handler(event, context):
    """Main Lambda entry point."""
    try:
        return router.handle(event, HANDLERS)
    finally:
        logger.debug("Lambda handler completed")
