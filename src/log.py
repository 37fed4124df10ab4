import logging
import os
from logging.handlers import TimedRotatingFileHandler

import seqlog

from core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging_to_console(level=None, logger: logging.Logger | None = None):
    level = level or settings.LOG_LEVEL
    target = logger or logging.getLogger()
    target.setLevel(level)

    # avoid stacking console handlers when called twice
    for handler in target.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ):
            return handler

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    target.addHandler(handler)
    return handler


def setup_logging_to_file(
    app: str, level=logging.INFO, logger: logging.Logger | None = None
):
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    target = logger or logging.getLogger()

    handler = TimedRotatingFileHandler(
        os.path.join(settings.LOG_DIR, f"{app}.log"),
        when="midnight",
        backupCount=14,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    target.addHandler(handler)

    error_handler = TimedRotatingFileHandler(
        os.path.join(settings.LOG_DIR, f"{app}.error.log"),
        when="midnight",
        backupCount=30,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    target.addHandler(error_handler)
    return handler


def setup_logging_to_seq(level=logging.INFO):
    if not settings.SEQ_SERVER_URL:
        return None

    seqlog.set_global_log_properties(
        application=settings.PROJECT_NAME, environment=settings.ENVIRONMENT_NAME
    )
    return seqlog.log_to_seq(
        server_url=settings.SEQ_SERVER_URL,
        api_key=settings.SEQ_SERVER_API_KEY,
        level=level,
        batch_size=10,
        auto_flush_timeout=10,
        override_root_logger=False,
    )
