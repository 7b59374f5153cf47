import logging
import os
from logging.handlers import RotatingFileHandler

from app.platform.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

log_dir = os.path.abspath(settings.LOG_DIR)
os.makedirs(log_dir, exist_ok=True)
log_file_path = os.path.join(log_dir, "waitlist.log")


def get_logger(name: str):
    """
    Logger writing to the console and to logs/waitlist.log (rotated at 10 MB).

    Backup runs and admin actions are logged here, so the file doubles as the
    backup audit log.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = logging.DEBUG if settings.DEBUG and settings.ENVIRONMENT == "local" else logging.INFO
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    handlers = [
        RotatingFileHandler(log_file_path, maxBytes=10_000_000, backupCount=5),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    # basicConfig in app.main also attaches a root handler
    logger.propagate = False
    return logger
