"""
Helpers used across RemindBridge: settings and log locations, configuration defaults, logging setup and JSON encoding.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from decouple import config

DATA_LOCATION: Path = Path.home() / "Library" / "Application Support" / "RemindBridge"  #: Location where application data
# is stored.
LOG_LOCATION: Path = Path.home() / "Library" / "Logs" / "RemindBridge"  #: Default location for log files.

#: Default logging level, one of ``debug``, ``info``, ``warning`` or ``critical``.
LOG_LEVEL: str = config('REMINDBRIDGE_LOG_LEVEL', default='info')
#: Store backend used by the CLI, either ``eventkit`` or ``memory``.
STORE: str = config('REMINDBRIDGE_STORE', default='eventkit')
#: Number of worker threads used for saves and deletions.
WORKERS: int = config('REMINDBRIDGE_WORKERS', default=4, cast=int)
#: Title of the default list created by the in-memory store.
DEFAULT_LIST_TITLE: str = config('REMINDBRIDGE_DEFAULT_LIST', default='Reminders')

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'critical': logging.CRITICAL
}


def settings_folder() -> Path:
    """
    Get the location of the Application Data folder for RemindBridge

    :return: path to the Application Data folder.
    """
    folder = DATA_LOCATION
    folder.mkdir(parents=True, exist_ok=True)
    return folder


def get_uuid() -> str:
    """
    Generates a UUID.

    :return: a UUID.
    """
    return str(uuid.uuid4()).upper()


def is_int(value: Any) -> bool:
    """
    Checks whether a decoded JSON value is an integer. JSON booleans decode to :py:class:`bool`, which is a subclass of
    :py:class:`int` in Python, so they are excluded.

    :param value: the value to check.
    :return: True if the value is an integer.
    """
    return isinstance(value, int) and not isinstance(value, bool)


def to_json(obj: Any, what: str) -> tuple[bool, str]:
    """
    Encode an object as JSON text.

    :param obj: the object to encode.
    :param what: a description of the object, used in the error message.

    :returns:

        -success (:py:class:`bool`) - true if the object is successfully encoded.

        -data (:py:class:`str`) - error message on failure, or the JSON text.

    """
    try:
        return True, json.dumps(obj, allow_nan=False)
    except (TypeError, ValueError) as e:
        error = 'Unable to encode {0}: {1}'.format(what, e)
        logging.warning(error)
        return False, error


def setup_logging(log_level: str = LOG_LEVEL, log_dir: Path | None = None, log_file: bool = True,
                  log_stream=None) -> logging.Logger:
    """
    Sets up the logging system.

    :param log_level: the logging level which can be ``debug``, ``info``, ``warning`` or ``critical``.
    :param log_dir: the folder for log files. Defaults to ``~/Library/Logs/RemindBridge``.
    :param log_file: if True, logs are written to a timestamped file in ``log_dir``.
    :param log_stream: the stream logs are printed to. Defaults to standard error.

    :return: the root logger.
    """
    logging.basicConfig(
        level=LOG_LEVELS[log_level],
        format='%(asctime)s %(levelname)s: %(message)s',
        stream=log_stream if log_stream is not None else sys.stderr
    )
    logger = logging.getLogger()
    logger.setLevel(LOG_LEVELS[log_level])
    if log_file:
        log_folder = Path(log_dir) if log_dir is not None else LOG_LOCATION
        log_folder.mkdir(parents=True, exist_ok=True)
        file_name = datetime.now().strftime("RemindBridge_%Y%m%d-%H%M%S") + '.log'
        handler = logging.FileHandler(log_folder / file_name)
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s'))
        logger.addHandler(handler)
    return logger


class FunctionHandler(logging.Handler):
    """
    Sends formatted log records to a function.
    """

    def __init__(self, func: Callable):
        logging.Handler.__init__(self)
        self.func = func

    def emit(self, record):
        msg = self.format(record)
        self.func(msg)
