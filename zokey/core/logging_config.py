"""Process-wide logging setup: one stdout handler on the root logger."""

import logging
import sys

# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "httpx", "httpcore", "openai", "pymongo", "motor")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"


def setup_logging(log_level: str = "INFO", debug: bool = False) -> None:
    """
    Configure the root logger for the API process.

    Args:
        log_level: Level name for zokey loggers; unknown names mean INFO
        debug: Include line numbers in every record
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(DEBUG_LOG_FORMAT if debug else LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("zokey").setLevel(level)

    logging.getLogger(__name__).info(f"Logging configured at {logging.getLevelName(level)}")
