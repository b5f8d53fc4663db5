import os
import sys

from loguru import logger

logger.remove()
logger.add(sys.stderr, level=os.getenv("HERMES_EMAIL_LOG_LEVEL", "INFO"))

__all__ = ["logger"]
