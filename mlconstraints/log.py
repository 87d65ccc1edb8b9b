from logging import FileHandler, Formatter, Handler, NullHandler, StreamHandler, WARNING, getLogger
from pathlib import Path
from typing import Optional, Union

LOGGER_LEVEL = WARNING
LOG_FORMAT = "[%(levelname)s] %(message)s"

logger = getLogger("mlconstraints")
logger.addHandler(NullHandler())


def configure(level: Union[int, str] = LOGGER_LEVEL, log_file: Optional[Path] = None) -> Handler:
    """
    Attach a handler to the package logger. Records go to `log_file` when it
    is given and to stderr otherwise.
    """
    handler = StreamHandler() if log_file is None else FileHandler(log_file, delay=True, mode="w")
    handler.setFormatter(Formatter(fmt=LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return handler
