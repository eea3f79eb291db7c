# -*- coding: utf-8 -*-
import logging
import os
import uuid
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False
_event_loggers = {}


def _configure():
    global _configured
    if _configured:
        return
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    _configured = True


def getLogger(name):
    _configure()
    return logging.getLogger(name)


def log_dir():
    return os.environ.get("LOG_DIR", "logs")


def log_event(message, file_name):
    """Append an event line to ``file_name`` inside the log directory.

    Lines look like ``20261019\\t14:03:11\\t<uuid>\\t<message>``.
    """
    logger = _event_loggers.get(file_name)
    if logger is None:
        directory = log_dir()
        os.makedirs(directory, exist_ok=True)
        handler = logging.FileHandler(os.path.join(directory, file_name))
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger = logging.getLogger(f"events.{file_name}")
        logger.setLevel(logging.INFO)
        logger.propagate = False
        logger.addHandler(handler)
        _event_loggers[file_name] = logger

    date_time = datetime.now().strftime("%Y%m%d\t%H:%M:%S")
    logger.info(f"{date_time}\t{uuid.uuid4()}\t{message}")
